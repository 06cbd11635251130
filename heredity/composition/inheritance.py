"""
Inheritance Composer - rewire a class onto a parent and announce it.

``inherit(child, parent)`` makes instances of ``child`` natively pass
``isinstance`` checks for ``parent``, records the link in the Ancestry
Registry and dispatches the ``inherited`` event on ``parent`` with
``child`` as the extra argument. The steps are not transactional: if a
handler raises, the rewiring and the recorded link stay in place.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from heredity.core.ancestry import require_class
from heredity.core.exceptions import InheritanceCycleError, InheritanceError
from heredity.core.runtime import Runtime, resolve_runtime

logger = logging.getLogger(__name__)

ClassT = TypeVar("ClassT", bound=type)


def inherit(child: ClassT, parent: type, *, runtime: Runtime | None = None) -> ClassT:
    """
    Make ``child`` a subclass of ``parent``.

    Args:
        child: Class to rewire
        parent: New direct superclass
        runtime: Registries to use (default runtime if omitted)

    Returns:
        ``child``

    Raises:
        NotAConstructorError: If either argument is not a class
        InheritanceCycleError: If ``child`` would become its own ancestor
        InheritanceError: If Python refuses the new base (incompatible layouts)
        Exception: Whatever an ``inherited`` handler raises
    """
    rt = resolve_runtime(runtime)
    require_class(child, "child")
    require_class(parent, "parent")

    if (
        child is parent
        or issubclass(parent, child)
        or child in rt.ancestry.ancestors(parent)
    ):
        raise InheritanceCycleError(
            f"{child.__name__} cannot inherit from {parent.__name__}: "
            f"{child.__name__} would become its own ancestor",
            child=child,
            parent=parent,
        )

    if parent not in child.__bases__:
        try:
            child.__bases__ = (parent,)
        except TypeError as e:
            raise InheritanceError(
                f"Cannot rebase {child.__name__} onto {parent.__name__}: {e}"
            ) from e

    return announce_subclass(child, parent, runtime=rt)


def announce_subclass(child: ClassT, parent: type, *, runtime: Runtime | None = None) -> ClassT:
    """
    Record ``parent`` as the superclass of ``child`` and dispatch the
    ``inherited`` event on ``parent``.

    Used directly for classes that already subclass ``parent`` natively.
    """
    rt = resolve_runtime(runtime)
    rt.ancestry.record_superclass(child, parent)
    logger.info(f"{child.__name__} inherits from {parent.__name__}")
    rt.tracer.mark("inherit.linked", child=child.__name__, parent=parent.__name__)

    rt.trigger(parent, rt.config.inherited_event, child)

    rt.tracer.mark("inherit.completed", child=child.__name__, parent=parent.__name__)
    return child
