"""uirouter - In-process router for editor UI events."""

from uirouter.core import (
    DISABLED,
    MAX_DEPTH,
    ConfigurationError,
    Dispatcher,
    DispatcherState,
    EventQueue,
    FatalLoopDetected,
    HandlerRegistry,
    QueuedCall,
    Router,
    RouterConfig,
    RouterStats,
    UIEvent,
    WidgetConfig,
    WidgetHandler,
)
from uirouter.host import InMemoryHost, InMemoryStats, LoopScheduler

__version__ = "0.1.0"

__all__ = [
    # Core
    "Router",
    "RouterConfig",
    "WidgetConfig",
    "WidgetHandler",
    "UIEvent",
    "QueuedCall",
    "HandlerRegistry",
    "EventQueue",
    "Dispatcher",
    "DispatcherState",
    "RouterStats",
    "DISABLED",
    "MAX_DEPTH",
    # Errors
    "ConfigurationError",
    "FatalLoopDetected",
    # Host
    "InMemoryHost",
    "InMemoryStats",
    "LoopScheduler",
    # Meta
    "__version__",
]
