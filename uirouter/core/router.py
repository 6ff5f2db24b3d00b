"""Router: the ingestion gateway and lifecycle controller.

The Router is the only object the host talks to. ``enable()`` builds the
handler registry and attaches ``on_event`` to the host; every host event then
flows through ``ingest()``:

- exiting host or halted router: ignored
- ``msg_show``/``return_prompt``: acknowledged with ``<cr>``, never queued
- no handler resolves: dropped, the host keeps its default handling
- fast context: deferred, flushed at the scheduler's next safe point
- safe context: queued and drained now, unless a drain is already running
"""

from collections.abc import Callable
from typing import Any

from uirouter.core.config import RouterConfig
from uirouter.core.dispatcher import Dispatcher, DispatcherState, FatalLoopDetected, RouterStats
from uirouter.core.event import RETURN_PROMPT_EVENT, RETURN_PROMPT_KIND, QueuedCall
from uirouter.core.logging import get_router_logger
from uirouter.core.queue import EventQueue
from uirouter.core.registry import (
    HandlerLoader,
    HandlerRegistry,
    build_registry,
    externalized_capabilities,
    load_handler,
)
from uirouter.host.base import Host, Renderer, Scheduler, Stats, TickSource

RETURN_PROMPT_KEYS = "<cr>"


class Router:
    """Routes host UI events to widget handlers."""

    def __init__(
        self,
        config: RouterConfig,
        host: Host,
        renderer: Renderer,
        ticks: TickSource,
        scheduler: Scheduler,
        stats: Stats | None = None,
        loader: HandlerLoader = load_handler,
        on_fatal: Callable[[FatalLoopDetected], None] | None = None,
    ) -> None:
        self.config = config
        self.host = host
        self.renderer = renderer
        self.scheduler = scheduler
        self.loader = loader
        self.on_fatal = on_fatal
        self._log = get_router_logger(config.namespace, debug=config.debug)
        self._attached = False
        self._registry = HandlerRegistry(debug=config.debug, log=self._log)
        self.state = DispatcherState()
        self.queue = EventQueue()
        self.dispatcher = Dispatcher(
            queue=self.queue,
            ticks=ticks,
            renderer=renderer,
            host=host,
            stats=stats,
            state=self.state,
            on_fatal=self._shutdown,
            log=self._log,
        )

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    def get_stats(self) -> RouterStats:
        return self.dispatcher.get_stats()

    # -- ingestion -----------------------------------------------------------

    def on_event(self, event: str, *args: Any) -> bool:
        """Callback registered with the host."""
        return self.ingest(event, *args, fast=self.host.in_fast_event())

    def ingest(self, event: str, *args: Any, fast: bool = False) -> bool:
        """Accept one host event.

        Args:
            event: Raw event name, e.g. ``msg_show``.
            *args: Remaining callback arguments, replayed to the handler as
                given. The first one is the event's kind for ``msg_show``;
                it is compared but never validated.
            fast: True when called from a context where host state must not
                be mutated; the call is then deferred to the next safe point.

        Returns:
            True if the router claims the event, False to leave it to the host.

        Raises:
            FatalLoopDetected: If draining re-enters dispatch too deeply.
        """
        if self.state.halted or self.host.is_exiting():
            return False

        kind = args[0] if args else ""
        if event == RETURN_PROMPT_EVENT and kind == RETURN_PROMPT_KIND:
            self.host.input(RETURN_PROMPT_KEYS)
            return True

        if self.config.debug:
            self._log.debug(
                f"Received {event}",
                extra={"event": event, "kind": kind, "payload": list(args[1:])},
            )

        handler = self._registry.resolve(event, kind, *args[1:])
        if handler is None:
            self.dispatcher.record_dropped()
            return False

        call = QueuedCall.capture(handler, event, *args)
        self.dispatcher.record_ingested()

        if fast:
            if self.queue.put_deferred(call):
                self.scheduler.call_soon(self.flush)
        else:
            # deferred calls arrived first, so they go first
            self.queue.handoff()
            self.queue.put(call)
            if not self.state.processing:
                self.dispatcher.drain()

        return True

    def flush(self) -> None:
        """Drain deferred and pending calls. Scheduled after fast-context ingests.

        Unlike a synchronous ingest this drains even when a drain is already
        running further up the stack; the depth guard bounds that re-entry.
        """
        if self.state.halted:
            return
        self.queue.handoff()
        self.dispatcher.drain()

    # -- lifecycle -----------------------------------------------------------

    def enable(self) -> bool:
        """Build the registry and attach to the host.

        Returns:
            True if attached, False if nothing was enabled or the router is halted.

        Raises:
            ConfigurationError: If an enabled handler cannot be loaded.
        """
        if self.state.halted:
            self._log.error("Router halted after an event loop, not enabling")
            return False

        self.disable()
        externalized = externalized_capabilities(self.host.list_uis())
        delivery, registry = build_registry(
            self.config, externalized, loader=self.loader, log=self._log
        )
        self._registry = registry

        if not delivery:
            if self.config.debug:
                self._log.warning("No extensions enabled")
            return False

        for group, handler in registry.enabled().items():
            setup = getattr(handler, "setup", None)
            if callable(setup):
                if self.config.debug:
                    self._log.debug(f"Setting up {group} handler", extra={"group": group})
                setup()

        self.host.attach(self.config.namespace, delivery, self.on_event)
        self._attached = True
        self.host.on_swap_exists(self.dispatcher.refresh)
        if self.config.debug:
            self._log.debug(
                f"Attached to host as {self.config.namespace}",
                extra={"options": sorted(delivery)},
            )
        return True

    def disable(self) -> None:
        """Detach from the host. Safe to call when already detached."""
        if self._attached:
            self._attached = False
            self.host.detach(self.config.namespace)
        self._registry = HandlerRegistry(debug=self.config.debug, log=self._log)

    def redirect(self) -> None:
        """Detach, flush pending echo output, and re-enable at the next safe point."""
        self.disable()
        try:
            self.renderer.echo_pending()
        except Exception as e:
            self._log.error(f"Failed to flush pending output: {e}", extra={"error": str(e)})
        self.scheduler.call_soon(self.enable)

    def _shutdown(self, error: FatalLoopDetected) -> None:
        self.disable()
        if self.on_fatal is not None:
            self.on_fatal(error)
