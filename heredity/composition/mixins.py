"""
Mixin Composer - flatten a mixin class onto one instance.

The mixin's members are copied into the instance's ``__dict__`` (methods
bound to the instance), its initializer runs against the instance, and
the application is recorded in the Ancestry Registry. The instance's
class is left alone: ``isinstance(obj, Mixin)`` stays False, ``is_a``
and ``mixes_in`` report True.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from heredity.core.ancestry import ROOT
from heredity.core.config import DuplicateMixinPolicy
from heredity.core.exceptions import DuplicateMixinError, NotAMixinError
from heredity.core.extend import extend
from heredity.core.runtime import Runtime, resolve_runtime

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _is_data_descriptor(value: Any) -> bool:
    kind = type(value)
    return hasattr(kind, "__set__") or hasattr(kind, "__delete__")


def prototype_members(mixin_cls: type, instance: Any) -> dict[str, Any]:
    """
    Members ``mixin_cls`` contributes to ``instance``.

    Walks the mixin's MRO, nearest class winning, skipping dunder names
    and classes the instance already inherits natively. Methods,
    classmethods and staticmethods come back bound the way attribute
    lookup on an instance would bind them. Data descriptors are skipped.
    """
    members: dict[str, Any] = {}
    inherited = set(type(instance).__mro__)
    for klass in reversed(mixin_cls.__mro__):
        if klass is ROOT or klass in inherited:
            continue
        for name, value in vars(klass).items():
            if _is_dunder(name):
                continue
            if _is_data_descriptor(value):
                logger.warning(
                    f"Skipping {mixin_cls.__name__}.{name}: "
                    f"{type(value).__name__} cannot be copied onto an instance"
                )
                members.pop(name, None)
                continue
            if isinstance(value, (classmethod, staticmethod)):
                value = value.__get__(instance, mixin_cls)
            elif hasattr(type(value), "__get__"):
                value = value.__get__(instance, type(instance))
            members[name] = value
    return members


def mixin(
    instance: T,
    mixin_cls: type,
    *args: Any,
    runtime: Runtime | None = None,
    **kwargs: Any,
) -> T:
    """
    Apply ``mixin_cls`` to ``instance``.

    The mixin's ``__init__`` runs with ``self`` set to ``instance``, which
    is not an instance of the mixin, so it must not call zero-argument
    ``super()``.

    Args:
        instance: Object receiving the members
        mixin_cls: Mixin class
        *args: Forwarded to the mixin's ``__init__``
        runtime: Registries to use (default runtime if omitted)
        **kwargs: Forwarded to the mixin's ``__init__``

    Returns:
        ``instance``

    Raises:
        NotAMixinError: If ``mixin_cls`` is not a class, ``instance`` is a
            class, or ``instance`` has no ``__dict__``
        DuplicateMixinError: Re-application under the ``error`` policy
    """
    rt = resolve_runtime(runtime)

    if not isinstance(mixin_cls, type):
        raise NotAMixinError(
            f"Mixin must be a class, got {type(mixin_cls).__name__}: {mixin_cls!r}"
        )
    if isinstance(instance, type):
        raise NotAMixinError(
            f"Mixins apply to instances, got class {instance.__name__}; use inherit() for classes"
        )
    try:
        namespace = vars(instance)
    except TypeError:
        raise NotAMixinError(
            f"{type(instance).__name__} instance has no __dict__ to receive {mixin_cls.__name__}"
        ) from None

    if rt.ancestry.mixes_in(instance, mixin_cls):
        policy = rt.ancestry.duplicate_mixins
        if policy is DuplicateMixinPolicy.IGNORE:
            logger.debug(f"{mixin_cls.__name__} already applied, skipping")
            return instance
        if policy is DuplicateMixinPolicy.ERROR:
            raise DuplicateMixinError(
                f"Mixin {mixin_cls.__name__} already applied to "
                f"{type(instance).__name__} instance"
            )

    members = prototype_members(mixin_cls, instance)
    extend(namespace, members)

    initializer = mixin_cls.__init__
    if initializer is not ROOT.__init__:
        initializer(instance, *args, **kwargs)
    elif args or kwargs:
        raise NotAMixinError(f"{mixin_cls.__name__} takes no initializer arguments")

    rt.ancestry.record_mixin(instance, mixin_cls)

    logger.info(f"Applied mixin {mixin_cls.__name__} to {type(instance).__name__} instance")
    rt.tracer.mark(
        "mixin.applied",
        mixin=mixin_cls.__name__,
        receiver=type(instance).__name__,
        members=sorted(members),
    )
    return instance
