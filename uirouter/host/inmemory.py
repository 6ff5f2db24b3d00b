"""In-memory host and stats sink.

Suitable for development and testing. The host records what the router asks
of it and exposes its runtime flags as plain attributes; nothing is drawn and
nothing outlives the process.
"""

from collections import Counter
from collections.abc import Callable, Mapping
from typing import Any

from uirouter.host.base import EventCallback


class InMemoryHost:
    """Scriptable stand-in for the editor.

    Args:
        uis: Attached UIs reported by ``list_uis()``, with ``ext_*`` flags.
    """

    def __init__(self, uis: list[Mapping[str, Any]] | None = None) -> None:
        self.uis: list[Mapping[str, Any]] = list(uis or [])
        self.attachments: dict[str, tuple[dict[str, bool], EventCallback]] = {}
        self.detach_count = 0
        self.inputs: list[str] = []
        self.fast = False
        self.exiting = False
        self.blocking = False
        self.textlock_level = 0
        self.swap_exists_callback: Callable[[], None] | None = None

    def list_uis(self) -> list[Mapping[str, Any]]:
        return list(self.uis)

    def attach(self, namespace: str, options: dict[str, bool], callback: EventCallback) -> None:
        self.attachments[namespace] = (dict(options), callback)

    def detach(self, namespace: str) -> None:
        self.attachments.pop(namespace, None)
        self.detach_count += 1

    def input(self, keys: str) -> None:
        self.inputs.append(keys)

    def in_fast_event(self) -> bool:
        return self.fast

    def is_exiting(self) -> bool:
        return self.exiting

    def is_blocking(self) -> bool:
        return self.blocking

    def textlock(self) -> int:
        return self.textlock_level

    def on_swap_exists(self, callback: Callable[[], None]) -> None:
        self.swap_exists_callback = callback

    def emit(self, event: str, *args: Any) -> bool | None:
        """Deliver an event to every attached callback, as the editor would.

        Returns the last callback's result, or None when nothing is attached.
        """
        result = None
        for _, callback in list(self.attachments.values()):
            result = callback(event, *args)
        return result

    def trigger_swap_exists(self) -> None:
        if self.swap_exists_callback is not None:
            self.swap_exists_callback()


class InMemoryStats:
    """Counter-backed stats sink."""

    def __init__(self) -> None:
        self._counters: Counter[str] = Counter()

    def track(self, name: str) -> None:
        self._counters[name] += 1

    def get(self, name: str) -> int:
        return self._counters.get(name, 0)

    def snapshot(self) -> dict[str, int]:
        return dict(self._counters)

    def clear(self) -> None:
        self._counters.clear()
