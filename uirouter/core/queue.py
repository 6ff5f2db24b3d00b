"""FIFO event queue with a deferred side for fast-context producers.

Calls captured in a safe context go straight onto the pending queue. Calls
captured in a fast context (where the host forbids mutation) go onto the
deferred queue, which is handed over to the pending queue at the next safe
point. The handoff always appends deferred calls behind what is already
pending and ahead of anything ingested afterwards, so delivery order equals
arrival order.
"""

import threading
from collections import deque

from uirouter.core.event import QueuedCall


class EventQueue:
    """Ordered buffer of captured calls.

    The pending side is only touched from the dispatching context. The
    deferred side may be fed from another thread and is lock-protected.
    """

    def __init__(self) -> None:
        self._pending: deque[QueuedCall] = deque()
        self._deferred: deque[QueuedCall] = deque()
        self._lock = threading.Lock()
        self._flush_armed = False

    def put(self, call: QueuedCall) -> None:
        """Append a call captured in a safe context."""
        self._pending.append(call)

    def put_deferred(self, call: QueuedCall) -> bool:
        """Append a call captured in a fast context.

        Returns:
            True if the caller must schedule a flush, False if one is
            already pending and this call coalesces onto it.
        """
        with self._lock:
            self._deferred.append(call)
            if self._flush_armed:
                return False
            self._flush_armed = True
            return True

    def handoff(self) -> int:
        """Move every deferred call onto the pending queue, in order.

        Returns:
            The number of calls moved.
        """
        with self._lock:
            moved = len(self._deferred)
            self._pending.extend(self._deferred)
            self._deferred.clear()
            self._flush_armed = False
        return moved

    def pop(self) -> QueuedCall | None:
        """Remove and return the oldest pending call, or None if empty."""
        if not self._pending:
            return None
        return self._pending.popleft()

    def clear(self) -> None:
        """Drop every pending and deferred call."""
        with self._lock:
            self._pending.clear()
            self._deferred.clear()
            self._flush_armed = False

    @property
    def flush_armed(self) -> bool:
        return self._flush_armed

    def deferred_size(self) -> int:
        with self._lock:
            return len(self._deferred)

    def __len__(self) -> int:
        return len(self._pending)
