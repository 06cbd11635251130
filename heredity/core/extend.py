"""Copy Extender - shallow copy of own entries onto a target."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, TypeVar

T = TypeVar("T")


def own_entries(source: Any) -> Mapping[str, Any]:
    """Own entries of ``source``: the mapping itself, or its ``__dict__``."""
    if isinstance(source, Mapping):
        return source
    try:
        return vars(source)
    except TypeError:
        raise TypeError(
            f"Cannot copy entries from {type(source).__name__}: not a mapping and has no __dict__"
        ) from None


def extend(target: T, *sources: Any) -> T:
    """
    Copy every own entry of each source onto ``target`` and return it.

    Later sources win on key conflicts. Mapping targets receive item
    assignment; any other target receives attribute assignment.

    Example:
        >>> extend({"a": 1}, {"b": 2}, {"a": 3})
        {'a': 3, 'b': 2}
    """
    for source in sources:
        entries = dict(own_entries(source))
        if isinstance(target, MutableMapping):
            target.update(entries)
        else:
            for key, value in entries.items():
                setattr(target, key, value)
    return target
