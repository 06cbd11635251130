"""
Runtime - one set of registries shared by the hub and the composers.

A Runtime owns an IdentityProvider, an EventHub, an AncestryRegistry and
a TraceController, all built empty from one HeredityConfig. Module-level
functions fall back to a lazily created default runtime; tests swap it
with ``set_runtime`` to start from clean registries.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from heredity.core.ancestry import AncestryRegistry
from heredity.core.config import HeredityConfig, configure_logging
from heredity.core.events import EventHub, HandlerFunc
from heredity.core.identity import IdentityProvider
from heredity.core.tracing import TraceController

logger = logging.getLogger(__name__)

T = TypeVar("T")
ClassT = TypeVar("ClassT", bound=type)


class Runtime:
    """
    Registry bundle.

    Usage:
        >>> rt = Runtime(HeredityConfig(duplicate_mixins="ignore"))
        >>> rt.inherit(Employee, Person)
        >>> rt.mixin(view, Scrollable)
        >>> rt.is_a(view, Scrollable)
        True
    """

    def __init__(self, config: HeredityConfig | None = None):
        self.config = config or HeredityConfig()
        configure_logging(self.config)
        self.identity = IdentityProvider(start=self.config.guid_start)
        self.tracer = TraceController.from_config(self.config.trace)
        self.hub = EventHub(self.identity, tracer=self.tracer)
        self.ancestry = AncestryRegistry(
            self.identity, duplicate_mixins=self.config.duplicate_mixins
        )

    def guid(self, obj: Any) -> int:
        return self.identity.identity(obj)

    def on(self, owner: T, event_type: str, handler: HandlerFunc) -> T:
        return self.hub.on(owner, event_type, handler)

    def once(self, owner: T, event_type: str, handler: HandlerFunc) -> T:
        return self.hub.once(owner, event_type, handler)

    def off(self, owner: T, event_type: str, handler: HandlerFunc | None = None) -> T:
        return self.hub.off(owner, event_type, handler)

    def trigger(self, owner: Any, event_type: str, *args: Any, **kwargs: Any) -> bool:
        return self.hub.trigger(owner, event_type, *args, **kwargs)

    def inherit(self, child: ClassT, parent: type) -> ClassT:
        from heredity.composition.inheritance import inherit

        return inherit(child, parent, runtime=self)

    def mixin(self, instance: T, mixin_cls: type, *args: Any, **kwargs: Any) -> T:
        from heredity.composition.mixins import mixin

        return mixin(instance, mixin_cls, *args, runtime=self, **kwargs)

    def is_a(self, instance: Any, cls: type) -> bool:
        from heredity.composition.capability import is_a

        return is_a(instance, cls, runtime=self)

    def __repr__(self) -> str:
        return f"Runtime(identity={self.identity!r}, ancestry={self.ancestry!r})"


_default_runtime: Runtime | None = None


def get_runtime() -> Runtime:
    """
    Get the default Runtime.

    Creates it on first call. Can be overridden for testing via set_runtime().
    """
    global _default_runtime
    if _default_runtime is None:
        _default_runtime = Runtime()
        logger.debug("Created default runtime")
    return _default_runtime


def set_runtime(runtime: Runtime | None) -> Runtime | None:
    """
    Replace the default Runtime and return the previous one.

    Passing None makes the next get_runtime() call build a fresh one.
    """
    global _default_runtime
    previous = _default_runtime
    _default_runtime = runtime
    return previous


def resolve_runtime(runtime: Runtime | None) -> Runtime:
    return runtime if runtime is not None else get_runtime()


def guid(obj: Any, *, runtime: Runtime | None = None) -> int:
    """Process-unique id of ``obj``, allocated on first request."""
    return resolve_runtime(runtime).guid(obj)


def on(owner: T, event_type: str, handler: HandlerFunc, *, runtime: Runtime | None = None) -> T:
    return resolve_runtime(runtime).on(owner, event_type, handler)


def once(owner: T, event_type: str, handler: HandlerFunc, *, runtime: Runtime | None = None) -> T:
    return resolve_runtime(runtime).once(owner, event_type, handler)


def off(
    owner: T,
    event_type: str,
    handler: HandlerFunc | None = None,
    *,
    runtime: Runtime | None = None,
) -> T:
    return resolve_runtime(runtime).off(owner, event_type, handler)


def trigger(
    owner: Any, event_type: str, *args: Any, runtime: Runtime | None = None, **kwargs: Any
) -> bool:
    return resolve_runtime(runtime).trigger(owner, event_type, *args, **kwargs)


__all__ = [
    "Runtime",
    "get_runtime",
    "guid",
    "off",
    "on",
    "once",
    "resolve_runtime",
    "set_runtime",
    "trigger",
]
