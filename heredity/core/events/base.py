"""
Base Event - the value handed to every handler on dispatch.

Design Principles:
- Events are immutable (frozen dataclass)
- One event is built per dispatch and not retained by the hub
- Handlers are plain synchronous callables
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

HandlerFunc = Callable[..., Any]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, kw_only=True)
class Event:
    """
    A single dispatch of a named event.

    Attributes:
        type: Event type the handlers were registered under
        source: The object the event was triggered on
        time: When the dispatch started
        event_id: Unique identifier for this dispatch
    """

    type: str
    source: Any
    time: datetime = field(default_factory=_utcnow)
    event_id: UUID = field(default_factory=uuid4)


__all__ = [
    "Event",
    "HandlerFunc",
]
