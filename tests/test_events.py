import asyncio

from flapline.core.events import Event, EventBus, EventType, impulse_event, start_event


def test_emit_reaches_subscribers_of_that_type():
    bus = EventBus()
    impulses, starts = [], []
    bus.subscribe(EventType.IMPULSE, impulses.append)
    bus.subscribe(EventType.START, starts.append)

    bus.emit(impulse_event(source="test"))

    assert len(impulses) == 1
    assert impulses[0].source == "test"
    assert starts == []


def test_unsubscribe():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(EventType.IMPULSE, seen.append)
    unsubscribe()
    bus.emit(impulse_event())
    assert seen == []


def test_handler_errors_are_contained():
    bus = EventBus()
    seen = []

    def broken(event: Event) -> None:
        raise RuntimeError("boom")

    bus.subscribe(EventType.START, broken)
    bus.subscribe(EventType.START, seen.append)
    bus.emit(start_event())
    assert len(seen) == 1


def test_history_is_bounded_and_filterable():
    bus = EventBus(history_limit=5)
    for _ in range(8):
        bus.emit(impulse_event())
    bus.emit(start_event())

    history = bus.get_history(limit=10)
    assert len(history) == 5
    assert history[-1].type == EventType.START
    assert len(bus.get_history(EventType.IMPULSE)) == 4
    assert len(bus.get_history(limit=2)) == 2


def test_sync_emit_skips_async_handlers():
    bus = EventBus()
    called = []

    async def handler(event: Event) -> None:
        called.append(event)

    bus.subscribe(EventType.RUN_OVER, handler)
    bus.emit(Event(EventType.RUN_OVER))
    assert called == []


def test_queued_events_wait_for_processing():
    bus = EventBus()
    called = []

    async def async_handler(event: Event) -> None:
        called.append(("async", event.source))

    bus.subscribe(EventType.IMPULSE, async_handler)
    bus.subscribe(EventType.IMPULSE, lambda e: called.append(("sync", e.source)))

    async def scenario() -> None:
        bus.queue_event(impulse_event(source="keyboard"))
        bus.queue_event(impulse_event(source="mouse"))
        assert called == []
        await bus.process_queue()
        assert bus.queue.empty()

    asyncio.run(scenario())
    assert called.count(("sync", "keyboard")) == 1
    assert called.count(("async", "mouse")) == 1
    assert len(called) == 4
    assert [e.source for e in bus.get_history()] == ["keyboard", "mouse"]
