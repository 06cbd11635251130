"""
heredity - classical inheritance, per-object events and mixins for Python objects.

Main Features:
- Lazily assigned, process-unique guids for any object
- Per-object publish/subscribe with ordered, short-circuiting dispatch
- ``inherit`` rewires a class onto a parent and announces it on the parent
- ``mixin`` flattens a mixin class onto one instance without changing its class
- ``is_a`` answers native-ancestry-or-mixin capability checks

Quick Start:
    >>> from heredity import Base
    >>> class Person(Base):
    ...     pass
    >>> class Employee(Base):
    ...     pass
    >>> _ = Person.on("inherited", lambda event, child: print(child.__name__))
    >>> _ = Employee.inherit(Person)
    Employee
    >>> Employee.is_subclass_of(Person)
    True

Architecture:
    Base → Runtime → (IdentityProvider, EventHub, AncestryRegistry) ← composers
"""

__version__ = "0.1.0"

from heredity.base import Base
from heredity.composition import inherit, is_a, mixin
from heredity.core import (
    AncestryRegistry,
    ConfigurationError,
    DuplicateMixinError,
    DuplicateMixinPolicy,
    Event,
    EventHub,
    EventTypeError,
    HandlerError,
    HeredityConfig,
    HeredityError,
    IdentityProvider,
    InheritanceCycleError,
    InheritanceError,
    MisuseError,
    NotAConstructorError,
    NotAMixinError,
    Runtime,
    extend,
    get_runtime,
    guid,
    off,
    on,
    once,
    set_runtime,
    trigger,
)

__all__ = [
    "AncestryRegistry",
    "Base",
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
    "__version__",
    "extend",
    "get_runtime",
    "guid",
    "inherit",
    "is_a",
    "mixin",
    "off",
    "on",
    "once",
    "set_runtime",
    "trigger",
]
