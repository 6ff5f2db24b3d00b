"""Core components for the uirouter event router.

Types:
    UIEvent: Immutable host event with its group, type, kind and payload.
    QueuedCall: A captured call waiting for dispatch.
    WidgetHandler: Base class for per-widget handlers.
    HandlerRegistry: Group to handler mapping and event resolution.
    EventQueue: FIFO with a lock-protected deferred side.
    Dispatcher: Drains the queue under a reentrancy guard.
    Router: Ingestion gateway and lifecycle controller.
    RouterConfig: Pydantic configuration model.

Errors:
    ConfigurationError: Raised when an enabled handler cannot be loaded.
    FatalLoopDetected: Raised when dispatch nests deeper than MAX_DEPTH.

Constants:
    MAX_DEPTH: Reentrancy ceiling (50).
    DISABLED: Registry marker for intentionally turned-off groups.
"""

from uirouter.core.config import RouterConfig, WidgetConfig
from uirouter.core.dispatcher import (
    MAX_DEPTH,
    Dispatcher,
    DispatcherState,
    FatalLoopDetected,
    RouterStats,
    should_refresh,
)
from uirouter.core.event import QueuedCall, UIEvent, parse_event
from uirouter.core.handler import WidgetHandler
from uirouter.core.queue import EventQueue
from uirouter.core.registry import (
    CAPABILITIES,
    DISABLED,
    ConfigurationError,
    HandlerRegistry,
    build_registry,
    externalized_capabilities,
    load_handler,
)
from uirouter.core.router import Router

__all__ = [
    "CAPABILITIES",
    "DISABLED",
    "MAX_DEPTH",
    "ConfigurationError",
    "Dispatcher",
    "DispatcherState",
    "EventQueue",
    "FatalLoopDetected",
    "HandlerRegistry",
    "QueuedCall",
    "Router",
    "RouterConfig",
    "RouterStats",
    "UIEvent",
    "WidgetConfig",
    "WidgetHandler",
    "build_registry",
    "externalized_capabilities",
    "load_handler",
    "parse_event",
    "should_refresh",
]
