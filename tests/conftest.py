"""Pytest configuration, Hypothesis profiles and router test doubles."""

import logging
from dataclasses import dataclass, field
from typing import Any

import pytest
from hypothesis import settings

from uirouter.core.config import RouterConfig
from uirouter.core.handler import WidgetHandler
from uirouter.core.logging import ROUTER_LOGGER_NAME
from uirouter.core.router import Router
from uirouter.host.inmemory import InMemoryHost, InMemoryStats

# Register Hypothesis profiles
settings.register_profile("ci", max_examples=100)
settings.register_profile("dev", max_examples=20)

# Load dev profile by default, CI can override via --hypothesis-profile=ci
settings.load_profile("dev")


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio as the async backend for pytest-asyncio."""
    return "asyncio"


class Ticks:
    """Tick source whose value the handlers bump."""

    def __init__(self) -> None:
        self.value = 0

    def tick(self) -> int:
        return self.value

    def bump(self) -> None:
        self.value += 1


class RecordingRenderer:
    """Renderer that counts calls and can be told to fail."""

    def __init__(self) -> None:
        self.updates = 0
        self.echoes = 0
        self.fail = False

    def update(self) -> None:
        self.updates += 1
        if self.fail:
            raise RuntimeError("render failed")

    def echo_pending(self) -> None:
        self.echoes += 1


class ManualScheduler:
    """Scheduler that holds callbacks until run_pending() is called."""

    def __init__(self) -> None:
        self.callbacks: list[Any] = []

    def call_soon(self, callback) -> None:
        self.callbacks.append(callback)

    def run_pending(self) -> None:
        callbacks, self.callbacks = self.callbacks, []
        for callback in callbacks:
            callback()


class RecordingHandler(WidgetHandler):
    """Handler that records every call and bumps the tick when it changes state."""

    def __init__(self, ticks: Ticks | None = None, changes_state: bool = True, name: str | None = None):
        super().__init__(name=name)
        self.ticks = ticks
        self.changes_state = changes_state
        self.calls: list[tuple[str, Any, tuple[Any, ...]]] = []
        self.setup_calls = 0
        self.side_effect = None

    def setup(self) -> None:
        self.setup_calls += 1

    def _record(self, event: str, kind: Any, *payload: Any) -> None:
        self.calls.append((event, kind, payload))
        if self.ticks is not None and self.changes_state:
            self.ticks.bump()
        if self.side_effect is not None:
            self.side_effect(event, kind, *payload)


class MessageHandler(RecordingHandler):
    group = "msg"
    handles = ["show", "clear", "ruler", "showmode"]

    def on_show(self, event, kind, *payload):
        self._record(event, kind, *payload)

    on_clear = on_show
    on_ruler = on_show
    on_showmode = on_show


class CmdlineHandler(RecordingHandler):
    group = "cmdline"
    handles = ["show", "hide", "pos"]

    def on_show(self, event, kind, *payload):
        self._record(event, kind, *payload)

    on_hide = on_show
    on_pos = on_show


class PopupmenuHandler(RecordingHandler):
    group = "popupmenu"
    handles = ["show", "select", "hide"]

    def on_show(self, event, kind, *payload):
        self._record(event, kind, *payload)

    on_select = on_show
    on_hide = on_show


@dataclass
class Harness:
    """A router wired to in-memory collaborators."""

    router: Router
    host: InMemoryHost
    renderer: RecordingRenderer
    ticks: Ticks
    scheduler: ManualScheduler
    stats: InMemoryStats
    handlers: dict[str, RecordingHandler] = field(default_factory=dict)
    fatal: list[Exception] = field(default_factory=list)


def make_harness(
    debug: bool = False,
    uis: list[dict[str, Any]] | None = None,
    enabled: tuple[str, ...] = ("messages", "cmdline", "popupmenu"),
    enable: bool = True,
) -> Harness:
    ticks = Ticks()
    handlers: dict[str, RecordingHandler] = {
        "handlers.msg": MessageHandler(ticks),
        "handlers.cmdline": CmdlineHandler(ticks),
        "handlers.popupmenu": PopupmenuHandler(ticks),
    }
    config = RouterConfig(
        debug=debug,
        messages={"enabled": "messages" in enabled, "handler": "handlers.msg"},
        cmdline={"enabled": "cmdline" in enabled, "handler": "handlers.cmdline"},
        popupmenu={"enabled": "popupmenu" in enabled, "handler": "handlers.popupmenu"},
    )
    host = InMemoryHost(uis=uis if uis is not None else [{"rgb": True}])
    renderer = RecordingRenderer()
    scheduler = ManualScheduler()
    stats = InMemoryStats()
    harness = Harness(
        router=None,  # type: ignore[arg-type]
        host=host,
        renderer=renderer,
        ticks=ticks,
        scheduler=scheduler,
        stats=stats,
        handlers={path.split(".")[1]: handler for path, handler in handlers.items()},
    )
    harness.router = Router(
        config,
        host,
        renderer,
        ticks,
        scheduler,
        stats=stats,
        loader=handlers.__getitem__,
        on_fatal=harness.fatal.append,
    )
    if enable:
        harness.router.enable()
    return harness


@pytest.fixture
def router_factory():
    """Factory for fresh harnesses; safe to call inside Hypothesis examples."""
    return make_harness


@pytest.fixture
def harness() -> Harness:
    return make_harness()


class LogCapture(logging.Handler):
    """Custom handler to capture log records for testing."""

    def __init__(self):
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def messages(self, level: int | None = None) -> list[str]:
        return [r.getMessage() for r in self.records if level is None or r.levelno == level]

    def clear(self) -> None:
        self.records.clear()


@pytest.fixture
def log_capture():
    """Capture records from the router logger (it does not propagate)."""
    logger = logging.getLogger(ROUTER_LOGGER_NAME)
    handler = LogCapture()
    handler.setLevel(logging.DEBUG)

    original_handlers = logger.handlers.copy()
    original_level = logger.level

    logger.addHandler(handler)

    yield handler

    logger.removeHandler(handler)
    logger.handlers = original_handlers
    logger.level = original_level
