# errors.py
"""
Error taxonomy for the sandbox core.

All of these are raised synchronously to the caller (never from inside a
running animation). A search that simply fails to reach the end cell is NOT
an error: it finishes normally with path_found=False.
"""


class SandboxError(Exception):
    """Base class for every error raised by the sandbox core."""


class InvalidConfiguration(SandboxError, ValueError):
    """Start/end missing, bad grid dimensions, out-of-bounds cell, bad speed."""


class AlreadyRunning(SandboxError, RuntimeError):
    """A run is already active (overlapping start, or grid edit mid-run)."""


class InvalidSelection(SandboxError, KeyError):
    """Unknown algorithm name."""

    def __str__(self) -> str:
        # KeyError would repr() the message; keep it readable
        return str(self.args[0]) if self.args else ""
