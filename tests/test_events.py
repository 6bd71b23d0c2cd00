# tests/test_events.py
import asyncio

from events import EventBus, MazeGenerated, NodeStateChanged, RunCancelled
from grid import NodeKind


def test_typed_subscribers_only_see_their_event_type():
    bus = EventBus()
    changes, mazes = [], []
    bus.subscribe(NodeStateChanged, changes.append)
    bus.subscribe(MazeGenerated, mazes.append)

    bus.emit(NodeStateChanged((0, 1), NodeKind.WALL))
    bus.emit(MazeGenerated(3, 3))

    assert changes == [NodeStateChanged((0, 1), NodeKind.WALL)]
    assert mazes == [MazeGenerated(3, 3)]


def test_subscribe_all_sees_everything_in_order():
    bus = EventBus()
    seen = []
    bus.subscribe_all(seen.append)

    bus.emit(NodeStateChanged((0, 0), NodeKind.START))
    bus.emit(RunCancelled("bfs", 4))

    assert [type(e) for e in seen] == [NodeStateChanged, RunCancelled]


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(NodeStateChanged, seen.append)
    unsubscribe_all = bus.subscribe_all(seen.append)

    unsubscribe()
    unsubscribe_all()
    unsubscribe()  # second call is harmless
    bus.emit(NodeStateChanged((1, 1), NodeKind.VISITED))

    assert seen == []


def test_raising_listener_is_isolated_from_the_others():
    bus = EventBus(log_errors=False)
    seen = []

    def boom(event):
        raise RuntimeError("bad listener")

    bus.subscribe(NodeStateChanged, boom)
    bus.subscribe(NodeStateChanged, seen.append)

    bus.emit(NodeStateChanged((2, 2), NodeKind.PATH))
    bus.emit(NodeStateChanged((2, 3), NodeKind.PATH))

    assert len(seen) == 2
    assert bus.failures == 2


def test_failures_are_printed_when_logging(capsys):
    bus = EventBus()
    bus.subscribe_all(lambda e: 1 / 0)
    bus.emit(MazeGenerated(0, 0))

    out = capsys.readouterr().out
    assert "[EVENT]" in out
    assert "MazeGenerated" in out


def test_emit_inside_a_running_loop_is_delivered_after_the_emitter_yields():
    async def scenario():
        bus = EventBus(log_errors=False)
        seen = []
        bus.subscribe(NodeStateChanged, seen.append)
        bus.subscribe(NodeStateChanged, lambda e: 1 / 0)
        bus.subscribe_all(lambda e: seen.append("all"))

        bus.emit(NodeStateChanged((0, 0), NodeKind.VISITED))
        before = list(seen)
        await asyncio.sleep(0)
        return bus, before, seen

    bus, before, seen = asyncio.run(scenario())

    assert before == []
    assert seen == [NodeStateChanged((0, 0), NodeKind.VISITED), "all"]
    assert bus.failures == 1
