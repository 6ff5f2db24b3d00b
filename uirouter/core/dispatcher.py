"""Dispatch cycle for uirouter.

The Dispatcher drains the EventQueue, invokes each call's handler under a
reentrancy guard, and decides per event whether the renderer must refresh:

- the tick is read before and after the handler
- tick advanced: refresh once, unless the refresh is suppressed
- tick unchanged: no refresh, ``<group>.skipped`` is tracked instead

Comparing ticks keeps a burst of events from costing one redraw each when
only some of them change rendered state.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field

from uirouter.core.event import QueuedCall, UIEvent
from uirouter.core.logging import configure_router_logger
from uirouter.core.queue import EventQueue
from uirouter.host.base import Host, Renderer, Stats, TickSource

# Nested process_one() calls beyond this are treated as a feedback loop
MAX_DEPTH = 50

RULER_EVENT = "msg_ruler"
SEARCH_COUNT_KIND = "search_count"

HANDLER_ERROR_MESSAGE = "An error happened while handling a ui event"


class FatalLoopDetected(Exception):
    """Raised when dispatch re-enters itself more than MAX_DEPTH times.

    Attributes:
        depth: The depth reached when the loop was detected.
    """

    def __init__(self, depth: int, max_depth: int = MAX_DEPTH):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(f"Event loop detected (depth {depth} > {max_depth}). Shutting down...")


@dataclass
class DispatcherState:
    """Mutable dispatch state shared by the router and its dispatcher.

    Attributes:
        depth: Number of process_one() calls currently on the stack.
        processing: True while a drain is running.
        halted: Set once a loop was detected; nothing is dispatched after that.
    """

    depth: int = 0
    processing: bool = False
    halted: bool = False


@dataclass
class RouterStats:
    """Counters kept while routing."""

    events_ingested: int = 0
    events_dropped: int = 0
    events_processed: int = 0
    refreshes: int = 0
    refreshes_suppressed: int = 0
    refresh_errors: int = 0
    skipped: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    handler_errors: dict[str, int] = field(default_factory=lambda: defaultdict(int))


def should_refresh(event: UIEvent, blocking: bool, textlock: int = 0) -> bool:
    """Decide whether a state-changing event warrants a refresh.

    Never while the host holds a text lock. While the host is blocked on
    input, always. Otherwise everything but ruler updates and search counts,
    which the renderer picks up on its own schedule.
    """
    if textlock:
        return False
    if blocking:
        # even ruler and search-count updates redraw during a blocking wait
        return True
    return event.name != RULER_EVENT and event.kind != SEARCH_COUNT_KIND


class Dispatcher:
    """Drains an EventQueue into handlers."""

    def __init__(
        self,
        queue: EventQueue,
        ticks: TickSource,
        renderer: Renderer,
        host: Host,
        stats: Stats | None = None,
        state: DispatcherState | None = None,
        max_depth: int = MAX_DEPTH,
        on_fatal: Callable[[FatalLoopDetected], None] | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.queue = queue
        self.ticks = ticks
        self.renderer = renderer
        self.host = host
        self.stats = stats
        self.state = state or DispatcherState()
        self.max_depth = max_depth
        self.on_fatal = on_fatal
        self._log = log or configure_router_logger()
        self._stats = RouterStats()

    def get_stats(self) -> RouterStats:
        """Return a copy of current statistics.

        Returns a snapshot that is safe to inspect without affecting internal state.
        """
        return RouterStats(
            events_ingested=self._stats.events_ingested,
            events_dropped=self._stats.events_dropped,
            events_processed=self._stats.events_processed,
            refreshes=self._stats.refreshes,
            refreshes_suppressed=self._stats.refreshes_suppressed,
            refresh_errors=self._stats.refresh_errors,
            skipped=defaultdict(int, self._stats.skipped),
            handler_errors=defaultdict(int, self._stats.handler_errors),
        )

    def record_ingested(self) -> None:
        self._stats.events_ingested += 1

    def record_dropped(self) -> None:
        self._stats.events_dropped += 1

    def drain(self) -> None:
        """Process queued calls, oldest first, until the queue is empty.

        Calls queued while draining are picked up by the same loop. The
        processing flag is restored to its previous value on exit, so a
        nested drain leaves an outer one marked as running.
        """
        previous = self.state.processing
        self.state.processing = True
        try:
            while not self.state.halted:
                call = self.queue.pop()
                if call is None:
                    break
                self.process_one(call)
        finally:
            self.state.processing = previous

    def process_one(self, call: QueuedCall) -> None:
        """Run one call under the depth guard and apply the refresh decision.

        Raises:
            FatalLoopDetected: If this call nests deeper than ``max_depth``.
        """
        state = self.state
        state.depth += 1
        try:
            if state.depth > self.max_depth:
                self._fail(FatalLoopDetected(state.depth, self.max_depth))

            before = self.ticks.tick()
            self._safe_handle(call)
            after = self.ticks.tick()
            self._stats.events_processed += 1

            event = call.event
            if after > before:
                if should_refresh(event, self.host.is_blocking(), self.host.textlock()):
                    self.refresh()
                else:
                    self._stats.refreshes_suppressed += 1
            else:
                self._stats.skipped[event.group] += 1
                if self.stats is not None:
                    self.stats.track(f"{event.group}.skipped")
        finally:
            state.depth -= 1

    def refresh(self) -> None:
        """Call the renderer, logging instead of raising on failure."""
        try:
            self.renderer.update()
            self._stats.refreshes += 1
        except FatalLoopDetected:
            raise
        except Exception as e:
            self._stats.refresh_errors += 1
            self._log.error(
                f"Renderer update failed: {e}",
                extra={"error": str(e)},
                exc_info=True,
            )

    def _safe_handle(self, call: QueuedCall) -> None:
        event = call.event
        try:
            call.invoke()
        except FatalLoopDetected:
            raise
        except Exception as e:
            self._stats.handler_errors[event.group] += 1
            self._log.error(
                HANDLER_ERROR_MESSAGE,
                extra={
                    "event": event.name,
                    "group": event.group,
                    "kind": event.kind,
                    "handler": getattr(call.handler, "__qualname__", repr(call.handler)),
                    "error": str(e),
                },
                exc_info=True,
            )

    def _fail(self, error: FatalLoopDetected) -> None:
        if not self.state.halted:
            self.state.halted = True
            self.queue.clear()
            self._log.critical(
                "Event loop detected. Shutting down...",
                extra={"depth": error.depth, "max_depth": error.max_depth},
            )
            if self.on_fatal is not None:
                self.on_fatal(error)
        raise error
