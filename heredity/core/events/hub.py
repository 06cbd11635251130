"""
EventHub - per-object publish/subscribe registry and dispatcher.

Responsibilities:
- Register/unregister named handlers on any object (classes included)
- Dispatch events synchronously, in registration order
- Stop a dispatch pass when a handler returns ``False``

Registrations are keyed by the owner's guid, never stored on the owner,
so they do not show up in ``vars()`` and are not copied by ``extend``.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from heredity.core.events.base import Event, HandlerFunc
from heredity.core.exceptions import EventTypeError, HandlerError

if TYPE_CHECKING:
    from heredity.core.identity import IdentityProvider
    from heredity.core.tracing import TraceController

logger = logging.getLogger(__name__)

OwnerT = TypeVar("OwnerT")


def _describe(obj: Any) -> str:
    if isinstance(obj, type):
        return obj.__name__
    return f"<{type(obj).__name__}>"


def _handler_name(handler: Callable[..., Any]) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class _OnceHandler:
    """Wrapper that unregisters itself before delegating to ``handler``."""

    def __init__(self, hub: EventHub, owner: Any, event_type: str, handler: HandlerFunc):
        self.hub = hub
        self.owner = owner
        self.event_type = event_type
        self.handler = handler
        self.__qualname__ = f"once({_handler_name(handler)})"

    def __call__(self, event: Event, *args: Any, **kwargs: Any) -> Any:
        self.hub.off(self.owner, self.event_type, self)
        return self.handler(event, *args, **kwargs)

    def matches(self, handler: HandlerFunc) -> bool:
        return self is handler or self.handler == handler


class EventHub:
    """
    Synchronous event dispatcher keyed by object identity.

    Features:
    - Any object can own handlers, including classes
    - Registering a handler twice makes it run twice
    - Dispatch iterates a snapshot taken when the pass starts
    - Handler exceptions propagate to the caller of ``trigger``

    Usage:
        hub = EventHub(IdentityProvider())
        hub.on(button, "click", handle_click)
        hub.trigger(button, "click", x, y)
    """

    def __init__(self, identity: IdentityProvider, tracer: TraceController | None = None):
        """
        Initialize EventHub.

        Args:
            identity: Provider used to key registrations by owner
            tracer: Optional trace controller for execution markers
        """
        self._identity = identity
        self._tracer = tracer
        self._registrations: dict[int, dict[str, list[HandlerFunc]]] = {}
        identity.add_release_listener(self._release)

    def on(self, owner: OwnerT, event_type: str, handler: HandlerFunc) -> OwnerT:
        """
        Append ``handler`` to the sequence for ``event_type`` on ``owner``.

        Args:
            owner: Object the handler listens on
            event_type: Event type name
            handler: Callable invoked as ``handler(event, *args, **kwargs)``

        Returns:
            ``owner``, for chaining

        Raises:
            EventTypeError: If ``event_type`` is not a non-empty string
            HandlerError: If ``handler`` is not callable
        """
        self._check_type(event_type)
        if not callable(handler):
            raise HandlerError(f"Handler for '{event_type}' must be callable, got {handler!r}")

        guid = self._identity.identity(owner)
        self._registrations.setdefault(guid, {}).setdefault(event_type, []).append(handler)

        logger.debug(
            f"Registered handler {_handler_name(handler)} for '{event_type}' on {_describe(owner)}"
        )
        self._track("hub.registered", owner, event_type, handler=_handler_name(handler))
        return owner

    def once(self, owner: OwnerT, event_type: str, handler: HandlerFunc) -> OwnerT:
        """Register ``handler`` for the next dispatch of ``event_type`` only."""
        if not callable(handler):
            raise HandlerError(f"Handler for '{event_type}' must be callable, got {handler!r}")
        return self.on(owner, event_type, _OnceHandler(self, owner, event_type, handler))

    def off(
        self, owner: OwnerT, event_type: str, handler: HandlerFunc | None = None
    ) -> OwnerT:
        """
        Remove handlers for ``event_type`` on ``owner``.

        With ``handler``, every occurrence of it is removed (a ``once``
        registration of it included). Without, the whole sequence is
        dropped. Unknown owners, types and handlers are ignored.

        A dispatch pass already running keeps its own snapshot, so removal
        only affects later passes.

        Returns:
            ``owner``, for chaining
        """
        if not self._identity.has_identity(owner):
            return owner

        guid = self._identity.identity(owner)
        by_type = self._registrations.get(guid)
        if not by_type or event_type not in by_type:
            return owner

        if handler is None:
            removed = len(by_type.pop(event_type))
        else:
            current = by_type[event_type]
            kept = [h for h in current if not self._matches(h, handler)]
            removed = len(current) - len(kept)
            if kept:
                by_type[event_type] = kept
            else:
                del by_type[event_type]

        if not by_type:
            del self._registrations[guid]

        if removed:
            logger.debug(f"Removed {removed} handler(s) for '{event_type}' on {_describe(owner)}")
            self._track("hub.removed", owner, event_type, count=removed)
        return owner

    def trigger(self, owner: Any, event_type: str, *args: Any, **kwargs: Any) -> bool:
        """
        Dispatch ``event_type`` on ``owner``.

        Each handler is called as ``handler(event, *args, **kwargs)`` in
        registration order. Handlers registered or removed while the pass
        runs do not change which handlers this pass calls.

        Args:
            owner: Object the event is triggered on (becomes ``event.source``)
            event_type: Event type name
            *args: Extra positional arguments for handlers
            **kwargs: Extra keyword arguments for handlers

        Returns:
            False if a handler returned exactly ``False``, True otherwise

        Raises:
            Exception: Whatever a handler raises, unchanged
        """
        self._check_type(event_type)
        event = Event(type=event_type, source=owner)
        snapshot = list(self._sequence(owner, event_type))

        if not snapshot:
            logger.debug(f"No handlers registered for '{event_type}' on {_describe(owner)}")
            return True

        self._track("hub.dispatch.started", owner, event_type, handler_count=len(snapshot))

        for position, handler in enumerate(snapshot):
            if handler(event, *args, **kwargs) is False:
                logger.debug(
                    f"Dispatch of '{event_type}' on {_describe(owner)} stopped by "
                    f"{_handler_name(handler)} ({position + 1}/{len(snapshot)})"
                )
                self._track(
                    "hub.dispatch.stopped",
                    owner,
                    event_type,
                    handler=_handler_name(handler),
                    position=position,
                )
                return False

        self._track("hub.dispatch.completed", owner, event_type, handler_count=len(snapshot))
        return True

    def handlers(self, owner: Any, event_type: str) -> list[HandlerFunc]:
        """Copy of the handler sequence for ``event_type`` on ``owner``."""
        return list(self._sequence(owner, event_type))

    def has_handlers(self, owner: Any, event_type: str | None = None) -> bool:
        if not self._identity.has_identity(owner):
            return False
        by_type = self._registrations.get(self._identity.identity(owner), {})
        if event_type is None:
            return bool(by_type)
        return bool(by_type.get(event_type))

    def handler_count(self, owner: Any, event_type: str) -> int:
        return len(self._sequence(owner, event_type))

    def get_stats(self) -> dict[str, Any]:
        """Get hub statistics for monitoring."""
        return {
            "total_owners": len(self._registrations),
            "total_event_types": sum(len(by_type) for by_type in self._registrations.values()),
            "total_handlers": sum(
                len(handlers)
                for by_type in self._registrations.values()
                for handlers in by_type.values()
            ),
        }

    def _sequence(self, owner: Any, event_type: str) -> list[HandlerFunc]:
        if not self._identity.has_identity(owner):
            return []
        by_type = self._registrations.get(self._identity.identity(owner), {})
        return by_type.get(event_type, [])

    def _release(self, guid: int) -> None:
        if self._registrations.pop(guid, None) is not None:
            logger.debug(f"Dropped registrations of collected owner {guid}")

    @staticmethod
    def _matches(registered: HandlerFunc, handler: HandlerFunc) -> bool:
        if isinstance(registered, _OnceHandler):
            return registered.matches(handler)
        return registered == handler

    @staticmethod
    def _check_type(event_type: Any) -> None:
        if not isinstance(event_type, str) or not event_type:
            raise EventTypeError(f"Event type must be a non-empty string, got {event_type!r}")

    def _track(self, stage: str, owner: Any, event_type: str, **extra: Any) -> None:
        if self._tracer is None:
            return
        self._tracer.mark(stage, owner=_describe(owner), event_type=event_type, **extra)


__all__ = [
    "EventHub",
]
