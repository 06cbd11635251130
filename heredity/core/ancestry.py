"""
Ancestry Registry - superclass links per class, mixin records per instance.

Both tables are keyed by guid. Superclass links hold the parent weakly;
a link whose parent has been collected reads as unrecorded. Mixin
records are append-only and answer membership queries without looking
at the instance's MRO.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
import weakref

from heredity.core.config import DuplicateMixinPolicy
from heredity.core.exceptions import (
    DuplicateMixinError,
    InheritanceCycleError,
    NotAConstructorError,
)

if TYPE_CHECKING:
    from heredity.core.identity import IdentityProvider

logger = logging.getLogger(__name__)

ROOT: type = object


def require_class(value: Any, role: str) -> type:
    """Return ``value`` if it is a class, raise NotAConstructorError otherwise."""
    if not isinstance(value, type):
        raise NotAConstructorError(
            f"{role} must be a class, got {type(value).__name__}: {value!r}", value=value
        )
    return value


class AncestryRegistry:
    """
    Tracks the recorded superclass chain of classes and the mixins applied
    to instances.

    Example:
        >>> registry = AncestryRegistry(IdentityProvider())
        >>> registry.record_superclass(Employee, Person)
        >>> registry.ancestors(Employee)
        [<class 'Person'>, <class 'object'>]
    """

    def __init__(
        self,
        identity: IdentityProvider,
        duplicate_mixins: DuplicateMixinPolicy = DuplicateMixinPolicy.APPEND,
    ):
        self._identity = identity
        self.duplicate_mixins = DuplicateMixinPolicy(duplicate_mixins)
        self._superclass: dict[int, weakref.ref] = {}
        self._subclasses: dict[int, list[weakref.ref]] = {}
        self._mixins: dict[int, list[type]] = {}
        identity.add_release_listener(self._release)

    def record_superclass(self, child: type, parent: type) -> None:
        """
        Link ``child`` to ``parent``, replacing any earlier link.

        Raises:
            NotAConstructorError: If either argument is not a class
            InheritanceCycleError: If the link would make ``child`` its own ancestor
        """
        require_class(child, "child")
        require_class(parent, "parent")
        if child is parent or child in self.ancestors(parent):
            raise InheritanceCycleError(
                f"{child.__name__} cannot inherit from {parent.__name__}: "
                f"{child.__name__} would become its own ancestor",
                child=child,
                parent=parent,
            )

        child_guid = self._identity.identity(child)
        previous = self._superclass.get(child_guid)
        if previous is not None:
            old_parent = previous()
            if old_parent is not None:
                self._forget_subclass(old_parent, child)

        self._superclass[child_guid] = weakref.ref(parent)
        self._subclasses.setdefault(self._identity.identity(parent), []).append(
            weakref.ref(child)
        )
        logger.debug(f"Recorded superclass {parent.__name__} for {child.__name__}")

    def superclass(self, cls: type) -> type | None:
        """Recorded parent of ``cls``; the root type if none; None for the root itself."""
        require_class(cls, "cls")
        if cls is ROOT:
            return None
        if self._identity.has_identity(cls):
            link = self._superclass.get(self._identity.identity(cls))
            parent = link() if link is not None else None
            if parent is not None:
                return parent
        return ROOT

    def ancestors(self, cls: type) -> list[type]:
        """Superclass chain of ``cls``, nearest first, ending at the root type."""
        chain: list[type] = []
        current = self.superclass(cls)
        while current is not None:
            chain.append(current)
            current = self.superclass(current)
        return chain

    def is_superclass_of(self, a: type, b: type) -> bool:
        """True iff ``a`` is a strict ancestor of ``b``."""
        return a in self.ancestors(b)

    def is_subclass_of(self, a: type, b: type) -> bool:
        """True iff ``b`` is a strict ancestor of ``a``."""
        return b in self.ancestors(a)

    def subclasses(self, cls: type) -> list[type]:
        """Classes whose recorded superclass is ``cls``, in recording order."""
        require_class(cls, "cls")
        if not self._identity.has_identity(cls):
            return []
        refs = self._subclasses.get(self._identity.identity(cls), [])
        return [child for child in (ref() for ref in refs) if child is not None]

    def record_mixin(self, instance: Any, mixin: type) -> bool:
        """
        Append ``mixin`` to the record for ``instance``.

        Returns:
            True if the record changed, False if the ``ignore`` policy skipped it

        Raises:
            DuplicateMixinError: Under the ``error`` policy, when already applied
        """
        record = self._mixins.setdefault(self._identity.identity(instance), [])
        if mixin in record:
            if self.duplicate_mixins is DuplicateMixinPolicy.IGNORE:
                logger.debug(f"Mixin {mixin.__name__} already recorded, ignoring")
                return False
            if self.duplicate_mixins is DuplicateMixinPolicy.ERROR:
                raise DuplicateMixinError(
                    f"Mixin {mixin.__name__} already applied to {type(instance).__name__} instance"
                )
        record.append(mixin)
        return True

    def mixins(self, instance: Any) -> list[type]:
        """Mixins applied to ``instance`` in application order."""
        if not self._identity.has_identity(instance):
            return []
        return list(self._mixins.get(self._identity.identity(instance), []))

    def mixes_in(self, instance: Any, mixin: type) -> bool:
        if not self._identity.has_identity(instance):
            return False
        return mixin in self._mixins.get(self._identity.identity(instance), [])

    def _release(self, guid: int) -> None:
        self._superclass.pop(guid, None)
        self._subclasses.pop(guid, None)
        self._mixins.pop(guid, None)

    def _forget_subclass(self, parent: type, child: type) -> None:
        key = self._identity.identity(parent)
        refs = self._subclasses.get(key)
        if not refs:
            return
        kept = [ref for ref in refs if ref() is not None and ref() is not child]
        if kept:
            self._subclasses[key] = kept
        else:
            del self._subclasses[key]

    def __repr__(self) -> str:
        return (
            f"AncestryRegistry(links={len(self._superclass)}, "
            f"instances_with_mixins={len(self._mixins)})"
        )
