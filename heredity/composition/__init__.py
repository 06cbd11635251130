"""Composition - inheritance, mixins and the capability query built on the core registries."""

from heredity.composition.capability import is_a
from heredity.composition.inheritance import announce_subclass, inherit
from heredity.composition.mixins import mixin, prototype_members

__all__ = [
    "announce_subclass",
    "inherit",
    "is_a",
    "mixin",
    "prototype_members",
]
