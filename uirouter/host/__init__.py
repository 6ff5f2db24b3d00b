"""Host-side collaborators: protocols, an asyncio scheduler and in-memory fakes."""

from uirouter.host.base import EventCallback, Host, Renderer, Scheduler, Stats, TickSource
from uirouter.host.inmemory import InMemoryHost, InMemoryStats
from uirouter.host.loop import LoopScheduler

__all__ = [
    "EventCallback",
    "Host",
    "InMemoryHost",
    "InMemoryStats",
    "LoopScheduler",
    "Renderer",
    "Scheduler",
    "Stats",
    "TickSource",
]
