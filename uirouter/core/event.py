"""Event model for uirouter."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, field_validator

# "<group>_<type>", split on the first underscore
_EVENT_NAME_PATTERN = re.compile(r"^([a-z]+)_(.*)$", re.DOTALL)

RETURN_PROMPT_EVENT = "msg_show"
RETURN_PROMPT_KIND = "return_prompt"


def parse_event(name: str) -> tuple[str, str] | None:
    """Split a raw event name into ``(group, type)``.

    Returns None when the name does not start with a lower-case group
    followed by an underscore.
    """
    match = _EVENT_NAME_PATTERN.match(name)
    if match is None:
        return None
    return match.group(1), match.group(2)


class UIEvent(BaseModel):
    """Immutable record of one event delivered by the host.

    Attributes:
        name: Raw event name, e.g. ``msg_show``.
        group: Widget group derived from the name (``msg``).
        type: Remainder of the name after the first underscore (``show``).
        kind: First argument after the name, kept opaque. For ``msg_show`` it is
            the message kind (``normal``, ``search_count``...); other events
            pass whatever their first argument is, or ``""`` when there is none.
        payload: Trailing callback arguments, kept opaque.
    """

    name: str
    group: str
    type: str
    kind: Any = ""
    payload: tuple[Any, ...] = Field(default_factory=tuple)

    model_config = {
        "extra": "forbid",
        "frozen": True,
        "arbitrary_types_allowed": True,
    }

    @field_validator("group")
    @classmethod
    def validate_group(cls, v: str) -> str:
        """Ensure group is non-empty lower-case ASCII."""
        if not re.fullmatch(r"[a-z]+", v):
            raise ValueError(f"group must be lower-case alphabetic, got: {v!r}")
        return v

    @classmethod
    def parse(cls, name: str, kind: Any = "", payload: tuple[Any, ...] = ()) -> "UIEvent":
        """Build an event from the raw callback arguments."""
        parsed = parse_event(name)
        if parsed is None:
            raise ValueError(f"event name must look like '<group>_<type>', got: {name!r}")
        group, event_type = parsed
        return cls(name=name, group=group, type=event_type, kind=kind, payload=tuple(payload))


@dataclass(frozen=True, slots=True)
class QueuedCall:
    """A captured host call waiting to be replayed against its handler.

    ``args`` holds every argument that followed the event name, exactly as
    the host passed them, so the handler sees the same arity.
    """

    handler: Callable[..., Any]
    event: UIEvent
    args: tuple[Any, ...]

    @classmethod
    def capture(cls, handler: Callable[..., Any], name: str, *args: Any) -> "QueuedCall":
        kind = args[0] if args else ""
        return cls(handler=handler, event=UIEvent.parse(name, kind, args[1:]), args=args)

    def invoke(self) -> Any:
        return self.handler(self.event.name, *self.args)
