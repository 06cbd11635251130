"""
Base - wrapper type carrying inheritance, events and mixins as methods.

Subclassing ``Base`` gives a class the whole surface without touching
built-in types:

    >>> class Person(Base):
    ...     pass
    >>> class Employee(Base):
    ...     pass
    >>> _ = Person.on("inherited", lambda event, child: print(child.__name__))
    >>> _ = Employee.inherit(Person)
    Employee

Native subclassing announces itself too: ``class Manager(Employee)``
records Employee as Manager's superclass and dispatches ``inherited`` on
Employee while the class statement runs.

``on``, ``once``, ``off`` and ``trigger`` work on the class and on
instances; the owner is whatever they were accessed through.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar
import types

from heredity.composition.capability import is_a
from heredity.composition.inheritance import announce_subclass, inherit
from heredity.composition.mixins import mixin
from heredity.core.events import HandlerFunc
from heredity.core.runtime import Runtime, resolve_runtime


def runtime_for(target: Any) -> Runtime:
    """Runtime pinned on the class of ``target`` (or on ``target`` itself), else the default."""
    cls = target if isinstance(target, type) else type(target)
    return resolve_runtime(getattr(cls, "__heredity_runtime__", None))


class hybridmethod:
    """Method bound to the instance on instance access and to the class on class access."""

    def __init__(self, func: Callable[..., Any]):
        self.func = func
        self.__doc__ = func.__doc__
        self.__name__ = func.__name__

    def __get__(self, instance: Any, owner: type) -> types.MethodType:
        return types.MethodType(self.func, owner if instance is None else instance)


class classattribute:
    """Read-only value computed from the class, on class and instance access alike."""

    def __init__(self, func: Callable[[type], Any]):
        self.func = func
        self.__doc__ = func.__doc__

    def __get__(self, instance: Any, owner: type) -> Any:
        return self.func(owner)


class Base:
    """Root wrapper type for classes that take part in heredity's registries."""

    __heredity_runtime__: ClassVar[Runtime | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        parent = next(base for base in cls.__bases__ if issubclass(base, Base))
        announce_subclass(cls, parent, runtime=runtime_for(cls))

    @hybridmethod
    def on(self, event_type: str, handler: HandlerFunc):
        """Register ``handler`` for ``event_type`` on this class or instance."""
        return runtime_for(self).on(self, event_type, handler)

    @hybridmethod
    def once(self, event_type: str, handler: HandlerFunc):
        """
        Register ``handler`` for the next ``event_type`` dispatch only.

        Args:
            event_type: Event type name
            handler: Callable invoked as ``handler(event, *args, **kwargs)``

        Returns:
            The class or instance this was called on
        """
        return runtime_for(self).once(self, event_type, handler)

    @hybridmethod
    def off(self, event_type: str, handler: HandlerFunc | None = None):
        """
        Remove ``handler`` (or every handler) for ``event_type``.

        Args:
            event_type: Event type name
            handler: Handler to remove; all handlers for the type if omitted

        Returns:
            The class or instance this was called on
        """
        return runtime_for(self).off(self, event_type, handler)

    @hybridmethod
    def trigger(self, event_type: str, *args: Any, **kwargs: Any) -> bool:
        """
        Dispatch ``event_type`` with this class or instance as the source.

        Returns:
            False if a handler returned ``False``, True otherwise
        """
        return runtime_for(self).trigger(self, event_type, *args, **kwargs)

    @property
    def guid(self) -> int:
        """Guid of this instance."""
        return runtime_for(self).guid(self)

    @classmethod
    def class_guid(cls) -> int:
        """
        Guid of the class itself.

        Returns:
            The class's guid, distinct from the guid of any instance
        """
        return runtime_for(cls).guid(cls)

    @classmethod
    def inherit(cls, parent: type) -> type:
        """Rewire this class onto ``parent`` (see ``heredity.inherit``)."""
        return inherit(cls, parent, runtime=runtime_for(cls))

    @classattribute
    def superclass(cls) -> type | None:
        """Recorded direct superclass, ``object`` if none was recorded."""
        return runtime_for(cls).ancestry.superclass(cls)

    @classattribute
    def ancestors(cls) -> list[type]:
        """Recorded superclass chain, nearest first, ending at ``object``."""
        return runtime_for(cls).ancestry.ancestors(cls)

    @classmethod
    def is_subclass_of(cls, other: type) -> bool:
        """True iff ``other`` is in this class's recorded ancestors."""
        return runtime_for(cls).ancestry.is_subclass_of(cls, other)

    @classmethod
    def is_superclass_of(cls, other: type) -> bool:
        """True iff this class is in the recorded ancestors of ``other``."""
        return runtime_for(cls).ancestry.is_superclass_of(cls, other)

    @classmethod
    def direct_subclasses(cls) -> list[type]:
        """Live classes whose recorded superclass is this class, in recording order."""
        return runtime_for(cls).ancestry.subclasses(cls)

    def mixin(self, mixin_cls: type, *args: Any, **kwargs: Any):
        """Apply ``mixin_cls`` to this instance (see ``heredity.mixin``)."""
        return mixin(self, mixin_cls, *args, runtime=runtime_for(self), **kwargs)

    @property
    def mixins(self) -> list[type]:
        """Mixins applied to this instance, in application order."""
        return runtime_for(self).ancestry.mixins(self)

    def mixes_in(self, mixin_cls: type) -> bool:
        """
        Whether ``mixin_cls`` was applied to this instance.

        Args:
            mixin_cls: Mixin class to look for

        Returns:
            True if the mixin record holds ``mixin_cls``
        """
        return runtime_for(self).ancestry.mixes_in(self, mixin_cls)

    def is_a(self, cls: type) -> bool:
        """
        Capability check covering native subclassing and applied mixins.

        Args:
            cls: Class or mixin to test against

        Returns:
            True if this instance is a ``cls`` or has ``cls`` mixed in
        """
        return is_a(self, cls, runtime=runtime_for(self))
