"""
Event bus system for FLAPLINE.

Provides pub/sub messaging between the input sources, the run session and
presentation with async support.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable
from enum import Enum, auto
import asyncio
import inspect
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    IMPULSE = auto()   # Flap
    START = auto()     # Start / restart a run

    # Run events
    RUN_STARTED = auto()
    SCORE_CHANGED = auto()
    RUN_OVER = auto()
    HIGH_SCORE = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)


# Type aliases for handlers
SyncHandler = Callable[[Event], None]
AsyncHandler = Callable[[Event], Awaitable[None]]
Handler = SyncHandler | AsyncHandler


class EventBus:
    """
    Central event bus for component communication.

    Supports both synchronous and asynchronous handlers. Events are either
    emitted immediately or queued and dispatched once per frame.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._queue: asyncio.Queue[Event] | None = None
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    @property
    def queue(self) -> asyncio.Queue[Event]:
        # Created lazily so the bus can be built outside a running loop
        if self._queue is None:
            self._queue = asyncio.Queue()
        return self._queue

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function (sync or async)

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """
        Emit an event immediately (synchronous handlers only).

        Async handlers only run for queued events.
        """
        self._add_to_history(event)
        self._dispatch_sync(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for later processing."""
        self.queue.put_nowait(event)

    async def process_queue(self) -> None:
        """Process all queued events."""
        while not self.queue.empty():
            event = await self.queue.get()
            self._add_to_history(event)
            await self._dispatch_async(event)
            self.queue.task_done()

    def _handlers_for(self, event: Event) -> list[Handler]:
        return list(self._handlers.get(event.type, []))

    def _dispatch_sync(self, event: Event) -> None:
        """Dispatch event to synchronous handlers only."""
        for handler in self._handlers_for(event):
            if inspect.iscoroutinefunction(handler):
                continue  # Skip async handlers
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler: {e}")

    async def _dispatch_async(self, event: Event) -> None:
        """Dispatch event to all handlers (sync and async)."""
        tasks = []
        for handler in self._handlers_for(event):
            if inspect.iscoroutinefunction(handler):
                tasks.append(asyncio.create_task(handler(event)))
            else:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(f"Error in sync handler: {e}")

        if tasks:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Error in async handler: {result}")

    def _add_to_history(self, event: Event) -> None:
        """Add event to history, maintaining limit."""
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]


# Convenience functions for creating common events
def impulse_event(source: str = "input") -> Event:
    """Create a flap event."""
    return Event(EventType.IMPULSE, source=source)


def start_event(source: str = "input") -> Event:
    """Create a start/restart event."""
    return Event(EventType.START, source=source)

