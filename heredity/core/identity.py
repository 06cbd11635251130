"""
Identity Provider - lazily assigned, process-unique object ids.

A guid is handed out the first time an object is asked for one and is
never reused, even after the object is garbage collected. Nothing is
written onto the object itself: the table lives in the provider, keyed
by ``id(obj)``.

Objects that support weak references are tracked weakly and their entry
is dropped when they die. Objects that do not (dicts, ints, slotted
instances) are pinned for the provider's lifetime, otherwise CPython
could hand their ``id()`` to a new object while the old guid is still
in the table.
"""

from __future__ import annotations

from collections.abc import Callable
import itertools
import logging
from typing import Any
import weakref

logger = logging.getLogger(__name__)


class IdentityProvider:
    """
    Issues strictly increasing integer guids.

    Example:
        >>> ids = IdentityProvider()
        >>> a, b = object(), object()
        >>> ids.identity(a) == ids.identity(a)
        True
        >>> ids.identity(a) != ids.identity(b)
        True
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._guids: dict[int, int] = {}
        self._refs: dict[int, weakref.ref] = {}
        self._pinned: dict[int, Any] = {}
        self._release_listeners: list[Callable[[int], None]] = []
        self._issued = 0

    def identity(self, obj: Any) -> int:
        """Return the guid for ``obj``, allocating it on first request."""
        key = id(obj)
        existing = self._guids.get(key)
        if existing is not None:
            return existing

        value = next(self._counter)
        self._guids[key] = value
        self._issued += 1

        try:
            self._refs[key] = weakref.ref(obj, self._make_reaper(key, value))
        except TypeError:
            self._pinned[key] = obj

        logger.debug(f"Issued guid {value} to {type(obj).__name__} at {key:#x}")
        return value

    def has_identity(self, obj: Any) -> bool:
        """Whether a guid has already been issued to ``obj``."""
        return id(obj) in self._guids

    def add_release_listener(self, listener: Callable[[int], None]) -> None:
        """
        Call ``listener(guid)`` when an object holding ``guid`` is collected.

        Tables keyed by guid use this to drop entries nobody can reach again.
        Pinned objects are never released.
        """
        self._release_listeners.append(listener)

    @property
    def issued(self) -> int:
        return self._issued

    def __len__(self) -> int:
        return len(self._guids)

    def _make_reaper(self, key: int, value: int):
        guids = self._guids
        refs = self._refs
        listeners = self._release_listeners

        def reap(_ref: weakref.ref) -> None:
            if guids.get(key) == value:
                del guids[key]
                refs.pop(key, None)
            for listener in list(listeners):
                listener(value)

        return reap

    def __repr__(self) -> str:
        return f"IdentityProvider(issued={self._issued}, live={len(self._guids)})"
