"""Scheduler backed by an asyncio event loop."""

import asyncio
from collections.abc import Callable
from typing import Any


class LoopScheduler:
    """Zero-delay scheduler on an asyncio event loop.

    Callbacks run on the loop's next iteration, which is the safe point for
    draining deferred events. ``call_soon_threadsafe`` is used so fast-context
    producers running on another thread (signal handlers, I/O callbacks) can
    hand work over safely.

    Args:
        loop: The loop to schedule on. Defaults to the running loop, resolved
            on first use.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_soon(self, callback: Callable[[], Any]) -> None:
        self.loop.call_soon_threadsafe(callback)
