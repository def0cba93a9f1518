"""Event bus for decoupled communication between the project layer and its host.

The project layer publishes what happened (a tree opened, a document saved,
the open-project signal flipped) and host components such as menus, status
bars, or persistence hooks subscribe without the core knowing about them.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar
from weakref import WeakMethod

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Event")

Handler = Callable[[E], None]


@dataclass(slots=True)
class Event:
    """Base class for all events published on the :class:`EventBus`."""

    pass


# =============================================================================
# Project Tree Events
# =============================================================================


@dataclass(slots=True)
class ProjectOpened(Event):
    """Emitted when a window's project tree is attached or replaced.

    Attributes:
        root: Canonical root of the new tree.
        replaced: Root of the tree it replaced, if any.
    """

    root: str
    replaced: str | None = None


@dataclass(slots=True)
class ProjectClosed(Event):
    """Emitted when a window's project tree is detached."""

    root: str


@dataclass(slots=True)
class ProjectRefreshed(Event):
    """Emitted after a tree re-listed its directory.

    Attributes:
        root: Canonical root of the refreshed tree.
        entry_count: Number of top-level entries after the refresh.
    """

    root: str
    entry_count: int


@dataclass(slots=True)
class SensitivityChanged(Event):
    """Emitted when a derived availability signal flips.

    Attributes:
        name: The signal name, e.g. ``"open_project"``.
        active: The new value.
    """

    name: str
    active: bool


# =============================================================================
# Document Events
# =============================================================================


@dataclass(slots=True)
class DocumentOpened(Event):
    """Emitted when a file is opened or an already-open tab is focused.

    Attributes:
        path: Canonical path of the file.
        reused: True when an existing document was focused instead of a new
            one being created.
    """

    path: str
    reused: bool = False


@dataclass(slots=True)
class DocumentSaved(Event):
    """Emitted when a document's content is committed to disk.

    Attributes:
        path: Canonical path the document was written to.
        previous_path: The document's path before a save-as, if it changed.
    """

    path: str
    previous_path: str | None = None


class EventBus(Generic[E]):
    """A typed publish-subscribe event bus.

    Handlers registered as bound methods are held weakly and dropped once
    their owner is collected; plain functions and lambdas are held strongly.

    Thread Safety:
        Not thread-safe. Publish and subscribe from the UI thread only.
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: defaultdict[type[Event], list[_HandlerRef]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Handler[E]) -> None:
        """Register ``handler`` for events of exactly ``event_type``."""
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
                return

    def publish(self, event: E) -> None:
        """Invoke every handler for ``event`` in registration order.

        A handler that raises is logged and the remaining handlers still run.
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type)
        if not handlers:
            logger.debug("No handlers for event type %s", event_type.__name__)
            return

        logger.debug("Publishing %s to %d handler(s)", event_type.__name__, len(handlers))

        dead_refs: list[_HandlerRef] = []
        for handler_ref in list(handlers):
            handler = handler_ref.resolve()
            if handler is None:
                dead_refs.append(handler_ref)
                continue
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %s raised exception for event %s",
                    _handler_name(handler),
                    event_type.__name__,
                )

        for handler_ref in dead_refs:
            handlers.remove(handler_ref)

    def clear(self) -> None:
        self._handlers.clear()

    def handler_count(self, event_type: type[E] | None = None) -> int:
        if event_type is not None:
            return len(self._handlers.get(event_type, []))
        return sum(len(handlers) for handlers in self._handlers.values())


class _HandlerRef:
    """Weak reference for bound methods, strong reference for everything else."""

    __slots__ = ("_ref", "_is_weak")

    def __init__(self, handler_ref: WeakMethod | Handler, is_weak: bool) -> None:
        self._ref = handler_ref
        self._is_weak = is_weak

    @classmethod
    def create(cls, handler: Handler) -> _HandlerRef:
        if hasattr(handler, "__self__") and hasattr(handler, "__func__"):
            try:
                return cls(WeakMethod(handler), is_weak=True)
            except TypeError:
                pass
        return cls(handler, is_weak=False)

    def resolve(self) -> Handler | None:
        if not self._is_weak:
            return self._ref  # type: ignore[return-value]
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
    "Event",
    "EventBus",
    "Handler",
    "ProjectOpened",
    "ProjectClosed",
    "ProjectRefreshed",
    "SensitivityChanged",
    "DocumentOpened",
    "DocumentSaved",
]
