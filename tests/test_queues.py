# tests/test_queues.py

from __future__ import annotations

import threading

from tickloop.core.models import Event, EventResult
from tickloop.core.queues import CompletedQueue, PendingQueue
from tickloop.core.registry import HandlerRegistry


def test_pending_queue_is_fifo_and_never_blocks() -> None:
    q = PendingQueue()
    assert q.dequeue() is None
    assert not q

    events = [Event(key=f"k{i}", payload=str(i)) for i in range(3)]
    for e in events:
        q.enqueue(e)

    assert len(q) == 3
    assert [q.dequeue() for _ in range(4)] == [*events, None]


def test_completed_queue_survives_concurrent_appends_and_drain() -> None:
    q = CompletedQueue()
    writers, per_writer = 8, 250
    drained: list[EventResult] = []
    start = threading.Barrier(writers + 1)

    def writer(n: int) -> None:
        start.wait()
        for i in range(per_writer):
            q.enqueue(EventResult(key=f"w{n}", result=str(i)))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(writers)]
    for t in threads:
        t.start()

    start.wait()
    while any(t.is_alive() for t in threads) or q:
        item = q.dequeue()
        if item is not None:
            drained.append(item)

    for t in threads:
        t.join()

    assert len(drained) == writers * per_writer
    assert q.dequeue() is None
    # each writer's own results keep their order
    for n in range(writers):
        mine = [int(r.result) for r in drained if r.key == f"w{n}"]
        assert mine == list(range(per_writer))


def test_registry_lookup_and_overwrite() -> None:
    reg = HandlerRegistry()
    assert reg.lookup("k") is None
    assert "k" not in reg

    def first(p: str) -> str:
        return "first"

    def second(p: str) -> str:
        return "second"

    reg.register("k", first)
    reg.register("k", second)

    assert reg.lookup("k") is second
    assert "k" in reg
    assert len(reg) == 1
    assert reg.keys() == ["k"]
