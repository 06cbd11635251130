"""
Event System - per-object publish/subscribe for heredity.

Core Components:
- Event: Immutable record of one dispatch
- EventHub: Registration table and synchronous dispatcher

Quick Start:
    from heredity.core.events import EventHub
    from heredity.core.identity import IdentityProvider

    hub = EventHub(IdentityProvider())

    def on_save(event, record):
        print(f"{event.source} saved {record}")

    hub.on(store, "saved", on_save)
    hub.trigger(store, "saved", record)
"""

from .base import Event, HandlerFunc
from .hub import EventHub

__all__ = [
    "Event",
    "EventHub",
    "HandlerFunc",
]
