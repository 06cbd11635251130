"""Core module for heredity - identity, events, ancestry and the runtime that bundles them."""

from heredity.core.ancestry import AncestryRegistry
from heredity.core.config import (
    DuplicateMixinPolicy,
    HeredityConfig,
    TraceConfig,
    configure_logging,
)
from heredity.core.events import Event, EventHub
from heredity.core.exceptions import (
    ConfigurationError,
    DuplicateMixinError,
    EventTypeError,
    HandlerError,
    HeredityError,
    InheritanceCycleError,
    InheritanceError,
    MisuseError,
    NotAConstructorError,
    NotAMixinError,
)
from heredity.core.extend import extend
from heredity.core.identity import IdentityProvider
from heredity.core.runtime import Runtime, get_runtime, guid, off, on, once, set_runtime, trigger
from heredity.core.tracing import TraceContext, TraceController, TraceMarker

__all__ = [
    "AncestryRegistry",
    "ConfigurationError",
    "DuplicateMixinError",
    "DuplicateMixinPolicy",
    "Event",
    "EventHub",
    "EventTypeError",
    "HandlerError",
    "HeredityConfig",
    "HeredityError",
    "IdentityProvider",
    "InheritanceCycleError",
    "InheritanceError",
    "MisuseError",
    "NotAConstructorError",
    "NotAMixinError",
    "Runtime",
    "TraceConfig",
    "TraceContext",
    "TraceController",
    "TraceMarker",
    "configure_logging",
    "extend",
    "get_runtime",
    "guid",
    "off",
    "on",
    "once",
    "set_runtime",
    "trigger",
]
