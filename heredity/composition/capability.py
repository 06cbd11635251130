"""Capability Query - native ancestry or applied mixin."""

from __future__ import annotations

from typing import Any

from heredity.core.ancestry import require_class
from heredity.core.runtime import Runtime, resolve_runtime


def is_a(instance: Any, cls: type, *, runtime: Runtime | None = None) -> bool:
    """
    True if ``instance`` was built by ``cls`` (or a subclass of it), or
    if ``cls`` was applied to it as a mixin.

    Raises:
        NotAConstructorError: If ``cls`` is not a class
    """
    require_class(cls, "cls")
    if isinstance(instance, cls):
        return True
    return resolve_runtime(runtime).ancestry.mixes_in(instance, cls)
