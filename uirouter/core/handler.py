"""WidgetHandler base class for uirouter widget handlers."""

from typing import ClassVar


class WidgetHandler:
    """Base class for per-widget event handlers.

    A handler receives events for one widget group. Each event type it
    implements is a method named ``on_<type>`` taking ``(event, kind, *payload)``,
    e.g. ``on_show`` for ``msg_show``.

    Handlers may declare the event types they implement via ``handles``; the
    registry checks at build time that every declared type has a callable
    ``on_<type>``. Undeclared types are still looked up at dispatch time.

    Note: Validation of ``handles`` happens in the registry during build,
    not in the handler itself.
    """

    group: ClassVar[str | None] = None
    handles: ClassVar[list[str]] = []

    def __init__(self, name: str | None = None) -> None:
        """Initialize the handler.

        Args:
            name: Optional name for the handler. Defaults to the class name.
        """
        self.name = name or self.__class__.__name__

    def setup(self) -> None:
        """Called once per enable(), before the router attaches to the host."""
        return None
