"""
Trace Controller - execution markers for the hub and the composers.

Markers make it possible to check, in tests, which steps an operation took
without hooking into the objects involved:

    >>> with TraceContext() as tc:
    ...     Employee.inherit(Person)
    ...     assert tc.has_marker("inherit.completed")

When disabled (the default) every call is a no-op returning None.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from heredity.core.config import TraceConfig

logger = logging.getLogger(__name__)


class TraceMarker:
    """
    Single trace marker.

    Attributes:
        name: Marker name (e.g., "hub.dispatch.started")
        timestamp: When the marker was recorded
        data: Additional data attached to the marker
    """

    def __init__(self, name: str, data: dict[str, Any] | None = None):
        self.name = name
        self.timestamp = datetime.now(UTC)
        self.data = data or {}

    def __repr__(self) -> str:
        return (
            f"TraceMarker(name={self.name!r}, "
            f"timestamp={self.timestamp.isoformat()}, "
            f"data={self.data})"
        )


class TraceController:
    """
    Collects trace markers.

    One controller belongs to each Runtime, so tests that build a fresh
    runtime also get a fresh, empty trace.
    """

    def __init__(self, enabled: bool = False, max_events: int = 10000):
        self.enabled = enabled
        self.max_events = max_events
        self._markers: list[TraceMarker] = []
        self._markers_by_name: dict[str, list[TraceMarker]] = defaultdict(list)

    @classmethod
    def from_config(cls, config: TraceConfig) -> TraceController:
        return cls(enabled=config.enabled, max_events=config.max_events)

    def enable(self) -> None:
        self.enabled = True
        logger.debug("TraceController: ENABLED")

    def disable(self) -> None:
        self.enabled = False
        logger.debug("TraceController: DISABLED")

    def mark(self, name: str, **data: Any) -> TraceMarker | None:
        """
        Record a marker.

        Args:
            name: Marker name
            **data: Additional data to attach

        Returns:
            TraceMarker if enabled, None otherwise
        """
        if not self.enabled:
            return None

        marker = TraceMarker(name=name, data=data)
        self._markers.append(marker)
        self._markers_by_name[name].append(marker)

        if self.max_events and len(self._markers) > self.max_events:
            dropped = self._markers.pop(0)
            self._markers_by_name[dropped.name].remove(dropped)
            if not self._markers_by_name[dropped.name]:
                del self._markers_by_name[dropped.name]

        logger.debug(f"TRACE[{name}] {data if data else ''}")

        return marker

    def has_marker(self, name: str) -> bool:
        return name in self._markers_by_name

    def get_markers(self, pattern: str | None = None) -> list[TraceMarker]:
        """
        Get all markers, optionally filtered by pattern.

        Args:
            pattern: Optional pattern ("hub.*" matches "hub.registered", "hub.removed")

        Returns:
            List of matching markers, oldest first
        """
        if pattern is None:
            return self._markers.copy()

        if "*" in pattern:
            prefix = pattern.replace("*", "")
            return [marker for marker in self._markers if marker.name.startswith(prefix)]
        return self._markers_by_name.get(pattern, []).copy()

    def get_marker(self, name: str, index: int = 0) -> TraceMarker | None:
        markers = self._markers_by_name.get(name, [])
        if index < len(markers):
            return markers[index]
        return None

    def count_markers(self, pattern: str | None = None) -> int:
        return len(self.get_markers(pattern))

    def clear(self) -> None:
        self._markers.clear()
        self._markers_by_name.clear()

    def get_report(self) -> dict[str, Any]:
        """Statistics about collected markers."""
        return {
            "enabled": self.enabled,
            "total_markers": len(self._markers),
            "unique_names": len(self._markers_by_name),
            "marker_counts": {
                name: len(markers) for name, markers in self._markers_by_name.items()
            },
        }

    def __repr__(self) -> str:
        return f"TraceController(enabled={self.enabled}, markers={len(self._markers)})"


class TraceContext:
    """
    Context manager for marker collection in tests.

    Usage:
        >>> with TraceContext() as tc:
        ...     obj.mixin(Scrollable)
        ...     assert tc.has_marker("mixin.applied")
    """

    def __init__(self, controller: TraceController | None = None, enabled: bool = True):
        if controller is None:
            from heredity.core.runtime import get_runtime

            controller = get_runtime().tracer
        self.enabled = enabled
        self.tc = controller
        self._old_enabled = self.tc.enabled

    def __enter__(self) -> TraceController:
        self.tc.enabled = self.enabled
        self.tc.clear()
        return self.tc

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.tc.enabled = self._old_enabled
        return False
