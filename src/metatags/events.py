"""Event bus used to broadcast tag and UI state changes.

Components publish small dataclass events and subscribers react without
holding references to each other.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar
from weakref import WeakMethod, ref

if TYPE_CHECKING:  # pragma: no cover - imports for type checking only
    from typing import DefaultDict

    from .core.colors import Color

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Event")

Handler = Callable[[E], None]


@dataclass(slots=True)
class Event:
    """Base class for all events.

    Example::

        @dataclass(slots=True)
        class TagRemoved(Event):
            name: str
            start: int
    """


# =============================================================================
# Tag events
# =============================================================================


@dataclass(slots=True)
class TagAdded(Event):
    """Emitted after a tag was inserted at the cursor or around a selection.

    Attributes:
        name: Tag name.
        is_self_closing: ``True`` when ``<name/>`` was inserted.
    """

    name: str
    is_self_closing: bool


@dataclass(slots=True)
class TagRemoved(Event):
    """Emitted after the first occurrence of a tag was unwrapped or deleted."""

    name: str
    start: int
    end: int


@dataclass(slots=True)
class TagVisibilityChanged(Event):
    name: str
    start: int
    end: int
    hidden: bool


@dataclass(slots=True)
class TagHighlightChanged(Event):
    name: str
    start: int
    end: int
    color: "Color | None"


# =============================================================================
# UI events
# =============================================================================


@dataclass(slots=True)
class StatusMessage(Event):
    """Request to show a message in the status area."""

    message: str


@dataclass(slots=True)
class ColorToggled(Event):
    """Emitted when a colour checkbox changes state."""

    index: int
    color: "Color"
    checked: bool


@dataclass(slots=True)
class DocumentAutosaved(Event):
    """Emitted after the autosave controller handed content to its save action."""

    length: int


class EventBus(Generic[E]):
    """A typed publish-subscribe event bus.

    Bound-method handlers are held weakly so that subscribers do not outlive
    their owners; plain functions and lambdas are held strongly.

    Thread Safety:
        Not thread-safe. Publish and subscribe from the UI thread only.
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: DefaultDict[type[Event], list[_HandlerRef]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Handler[E]) -> None:
        """Register ``handler`` for events of exactly ``event_type``.

        Subscribing the same handler twice results in two invocations.
        """
        self._handlers[event_type].append(_HandlerRef.create(handler))
        logger.debug(
            "Subscribed handler %s to event type %s",
            _handler_name(handler),
            event_type.__name__,
        )

    def unsubscribe(self, event_type: type[E], handler: Handler[E]) -> None:
        """Remove the first registration of ``handler``; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type)
        if handlers is None:
            return
        for i, handler_ref in enumerate(handlers):
            if handler_ref.matches(handler):
                handlers.pop(i)
                logger.debug(
                    "Unsubscribed handler %s from event type %s",
                    _handler_name(handler),
                    event_type.__name__,
                )
                return

    def publish(self, event: E) -> None:
        """Invoke handlers synchronously in registration order.

        A handler that raises is logged and the remaining handlers still run.
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type)
        if handlers is None:
            logger.debug("No handlers for event type %s", event_type.__name__)
            return

        logger.debug("Publishing %s to %d handler(s)", event_type.__name__, len(handlers))

        dead_indices: list[int] = []
        for i, handler_ref in enumerate(handlers):
            handler = handler_ref.resolve()
            if handler is None:
                dead_indices.append(i)
                continue
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %s raised exception for event %s",
                    _handler_name(handler),
                    event_type.__name__,
                )

        for i in reversed(dead_indices):
            handlers.pop(i)

    def clear(self) -> None:
        self._handlers.clear()
        logger.debug("Cleared all event handlers")

    def handler_count(self, event_type: type[E] | None = None) -> int:
        if event_type is not None:
            return len(self._handlers.get(event_type, []))
        return sum(len(handlers) for handlers in self._handlers.values())


class _HandlerRef:
    """Weak reference for bound methods, strong reference otherwise."""

    __slots__ = ("_ref", "_is_weak")

    def __init__(self, handler_ref: WeakMethod | ref | Handler, is_weak: bool) -> None:
        self._ref = handler_ref
        self._is_weak = is_weak

    @classmethod
    def create(cls, handler: Handler) -> _HandlerRef:
        if hasattr(handler, "__self__") and hasattr(handler, "__func__"):
            try:
                return cls(WeakMethod(handler), is_weak=True)
            except TypeError:
                # Some callables can't be weakly referenced
                pass
        return cls(handler, is_weak=False)

    def resolve(self) -> Any:
        if not self._is_weak:
            return self._ref
        return self._ref()  # type: ignore[operator]

    def matches(self, handler: Handler) -> bool:
        resolved = self.resolve()
        if resolved is None:
            return False
        return resolved == handler


def _handler_name(handler: Handler) -> str:
    if hasattr(handler, "__self__") and hasattr(handler, "__func__"):
        return f"{type(handler.__self__).__name__}.{handler.__func__.__name__}"
    if hasattr(handler, "__name__"):
        return handler.__name__
    return repr(handler)


__all__ = [
    "ColorToggled",
    "DocumentAutosaved",
    "Event",
    "EventBus",
    "Handler",
    "StatusMessage",
    "TagAdded",
    "TagHighlightChanged",
    "TagRemoved",
    "TagVisibilityChanged",
]
