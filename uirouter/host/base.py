"""Protocols for the collaborators the router talks to.

The router owns none of these. The host delivers events and reports its
runtime state, the tick source says whether rendering-relevant state changed,
the renderer redraws, the stats sink counts, and the scheduler runs a
callback at the host's next safe point.
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol

EventCallback = Callable[..., bool]


class Host(Protocol):
    """The editor the router attaches to."""

    def list_uis(self) -> list[Mapping[str, Any]]:
        """Return the attached UIs, each with ``ext_<capability>`` flags."""
        ...

    def attach(self, namespace: str, options: dict[str, bool], callback: EventCallback) -> None:
        """Start delivering the events selected by ``options`` to ``callback``.

        The callback is invoked as ``callback(event, *args)`` with the
        event's own arguments, and returns True to claim the event.
        """
        ...

    def detach(self, namespace: str) -> None:
        """Stop delivering events to the callback attached under ``namespace``."""
        ...

    def input(self, keys: str) -> None:
        """Feed ``keys`` to the host as if typed by the user."""
        ...

    def in_fast_event(self) -> bool:
        """True while running in a context where host state must not be mutated."""
        ...

    def is_exiting(self) -> bool:
        """True once the host has started shutting down."""
        ...

    def is_blocking(self) -> bool:
        """True while the host is blocked waiting on user input."""
        ...

    def textlock(self) -> int:
        """Non-zero while buffer text and windows must not be changed."""
        ...

    def on_swap_exists(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` when the host hits a swap-file conflict.

        Installing a new callback replaces the previous one.
        """
        ...


class Renderer(Protocol):
    """Downstream renderer."""

    def update(self) -> None:
        """Redraw. Must be idempotent and safe when nothing changed."""
        ...

    def echo_pending(self) -> None:
        """Write out any pending echo output immediately."""
        ...


class TickSource(Protocol):
    """Owner of the monotonically non-decreasing state version."""

    def tick(self) -> int: ...


class Stats(Protocol):
    """Fire-and-forget counters."""

    def track(self, name: str) -> None: ...


class Scheduler(Protocol):
    """Runs callbacks at the host's next safe point."""

    def call_soon(self, callback: Callable[[], Any]) -> None: ...
