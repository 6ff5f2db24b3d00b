"""Handler registry for uirouter.

The registry maps widget groups (``msg``, ``cmdline``, ``popupmenu``) to the
handler objects that render them, and resolves raw event names such as
``msg_show`` to a bound ``on_show`` method.

A group is in one of three states:
- absent: unknown group, resolution misses are reported (debug only)
- DISABLED: intentionally turned off, resolution misses are silent
- enabled: mapped to a handler object

The registry is rebuilt wholesale by ``build_registry``; it is never patched
in place.
"""

import importlib
import logging
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any

from uirouter.core.config import RouterConfig
from uirouter.core.event import parse_event
from uirouter.core.logging import ROUTER_LOGGER_NAME

# Capability name (as the host and config know it) -> widget group
CAPABILITIES: dict[str, str] = {
    "messages": "msg",
    "cmdline": "cmdline",
    "popupmenu": "popupmenu",
}

HandlerLoader = Callable[[str], Any]


class ConfigurationError(Exception):
    """Raised when a handler for an enabled capability cannot be loaded.

    Attributes:
        capability: The capability whose handler failed to load.
    """

    def __init__(self, message: str, capability: str | None = None):
        self.capability = capability
        super().__init__(message)


class Disabled(Enum):
    """Marker for a group that is known but intentionally turned off."""

    DISABLED = "disabled"


DISABLED = Disabled.DISABLED


def load_handler(path: str) -> Any:
    """Import a handler from ``package.module:attr`` or ``package.module``.

    Classes are instantiated with no arguments; modules and instances are
    used as they are.

    Raises:
        ConfigurationError: If the module or attribute cannot be found.
    """
    module_name, _, attr = path.partition(":")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Failed to import handler module {module_name!r}: {e}") from e

    if attr:
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ConfigurationError(
                f"Handler module {module_name!r} has no attribute {attr!r}"
            ) from e

    if isinstance(target, type):
        target = target()
    return target


def externalized_capabilities(uis: Iterable[Mapping[str, Any]]) -> set[str]:
    """Return the capabilities already externalized by any attached UI."""
    return {
        capability
        for ui in uis
        for capability in CAPABILITIES
        if ui.get(f"ext_{capability}")
    }


def _validate_handler(group: str, handler: Any) -> None:
    declared_group = getattr(handler, "group", None)
    if declared_group is not None and declared_group != group:
        raise TypeError(
            f"{_handler_name(handler)} declares group {declared_group!r} "
            f"but is registered for {group!r}"
        )

    handles = getattr(handler, "handles", [])
    if not isinstance(handles, list):
        raise TypeError(
            f"{_handler_name(handler)}.handles must be a list[str], "
            f"got {type(handles).__name__}"
        )
    for event_type in handles:
        if not isinstance(event_type, str):
            raise TypeError(
                f"{_handler_name(handler)}.handles must contain only strings, "
                f"found {type(event_type).__name__}: {event_type!r}"
            )
        if not callable(getattr(handler, f"on_{event_type}", None)):
            raise TypeError(
                f"{_handler_name(handler)} declares {event_type!r} "
                f"but has no callable on_{event_type}"
            )


def _handler_name(handler: Any) -> str:
    return getattr(handler, "name", None) or getattr(handler, "__name__", type(handler).__name__)


class HandlerRegistry:
    """Mapping from widget group to handler entry, plus event resolution."""

    def __init__(
        self,
        entries: Mapping[str, Any] | None = None,
        debug: bool = False,
        log: logging.Logger | None = None,
    ) -> None:
        self._entries: dict[str, Any] = dict(entries or {})
        self.debug = debug
        self._log = log or logging.getLogger(ROUTER_LOGGER_NAME)
        self._reported: set[str] = set()

    def __contains__(self, group: object) -> bool:
        return group in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, group: str) -> Any:
        """Return the entry for ``group``: a handler, DISABLED, or None if unknown."""
        return self._entries.get(group)

    def is_disabled(self, group: str) -> bool:
        return self._entries.get(group) is DISABLED

    def enabled(self) -> dict[str, Any]:
        """Return the enabled handlers keyed by group."""
        return {group: entry for group, entry in self._entries.items() if entry is not DISABLED}

    def resolve(self, event: str, kind: Any = "", *payload: Any) -> Callable[..., Any] | None:
        """Resolve a raw event name to the bound ``on_<type>`` handler method.

        Returns None for disabled groups (silently), unknown groups and
        handlers lacking the method (reported once per message in debug mode).
        """
        parsed = parse_event(event)
        if parsed is None:
            self._error_once(f"No ui router for {event!r}", event=event, kind=kind)
            return None
        group, event_type = parsed

        entry = self._entries.get(group)
        if entry is DISABLED:
            return None

        if entry is None:
            self._error_once(f"No ui router for {group}", event=event, group=group, kind=kind)
            return None

        on = f"on_{event_type}"
        method = getattr(entry, on, None)
        if not callable(method):
            self._error_once(
                f"No ui router for **{event}** events",
                event=event,
                group=group,
                kind=kind,
                on=on,
                payload=list(payload),
            )
            return None
        return method

    def _error_once(self, message: str, **extra: Any) -> None:
        if not self.debug or message in self._reported:
            return
        self._reported.add(message)
        self._log.error(message, extra=extra)


def build_registry(
    config: RouterConfig,
    externalized: Iterable[str] = (),
    loader: HandlerLoader = load_handler,
    log: logging.Logger | None = None,
) -> tuple[dict[str, bool], HandlerRegistry]:
    """Build the delivery options and a fresh registry.

    A capability is delivered (``ext_<capability>: True``) only when it is
    enabled in ``config`` and the host does not already externalize it.

    Args:
        config: Router configuration.
        externalized: Capabilities the host already externalizes.
        loader: Resolves a handler import path to a handler object.
        log: Logger for diagnostics. Defaults to the router logger.

    Returns:
        The delivery options for the host's attach call and the registry.

    Raises:
        ConfigurationError: If an enabled handler has no path or fails to load.
        TypeError: If a handler does not implement what it declares.
    """
    log = log or logging.getLogger(ROUTER_LOGGER_NAME)
    externalized = set(externalized)
    delivery: dict[str, bool] = {}
    entries: dict[str, Any] = {}

    for capability, group in CAPABILITIES.items():
        widget = config.widget(capability)
        if widget.enabled and capability not in externalized:
            if not widget.handler:
                raise ConfigurationError(
                    f"No handler configured for enabled capability {capability!r}",
                    capability=capability,
                )
            try:
                handler = loader(widget.handler)
            except ConfigurationError as e:
                e.capability = capability
                raise
            _validate_handler(group, handler)
            delivery[f"ext_{capability}"] = True
            entries[group] = handler
        else:
            if capability in externalized and config.debug:
                log.warning(f"Disabling ext_{capability}", extra={"group": group})
            entries[group] = DISABLED

    return delivery, HandlerRegistry(entries, debug=config.debug, log=log)
