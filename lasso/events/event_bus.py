"""Synchronous event bus for domain event dispatch.

The EventBus provides a lightweight, synchronous pub/sub mechanism for
decoupling the capture core from wave spawning, scoring and logging.

Design goals:
- Zero overhead when no subscribers (single dict lookup)
- Synchronous for determinism inside the fixed-step tick
- Type-safe dispatch via event type
"""

from __future__ import annotations

from collections import defaultdict
from typing import TypeVar
from collections.abc import Callable

T = TypeVar("T")


class EventBus:
    """Synchronous event bus for domain events.

    Events are dispatched immediately to all registered handlers.
    With no subscribers, emit() is essentially a no-op (dict lookup only).

    Example:
        bus = EventBus()
        bus.subscribe(WaveRequestedEvent, handle_wave)
        bus.emit(WaveRequestedEvent(reason="terminal_fusion", frame=100))
    """

    def __init__(self) -> None:
        """Initialize an empty event bus."""
        self._handlers: dict[type, list[Callable]] = defaultdict(list)

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers.

        Handlers are called synchronously in registration order.

        Args:
            event: The domain event to dispatch
        """
        handlers = self._handlers.get(type(event))
        if handlers:
            for handler in list(handlers):
                handler(event)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for a specific event type.

        Args:
            event_type: The event class to subscribe to
            handler: Callable that receives the event instance
        """
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> bool:
        """Remove a handler for a specific event type.

        Returns:
            True if handler was found and removed, False otherwise
        """
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def clear_subscribers(self) -> None:
        """Remove all registered handlers."""
        self._handlers.clear()
