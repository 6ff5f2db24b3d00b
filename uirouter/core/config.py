"""Router configuration models."""

from pathlib import Path

from pydantic import BaseModel, Field


class WidgetConfig(BaseModel):
    """Per-capability settings.

    Attributes:
        enabled: Whether the router should take over this widget.
        handler: Import path of the handler, ``package.module:attr`` or
            ``package.module``. Required when the capability ends up enabled.
    """

    enabled: bool = True
    handler: str | None = None

    model_config = {
        "extra": "forbid",
        "frozen": True,
    }


class RouterConfig(BaseModel):
    """Configuration consumed by the router."""

    namespace: str = "uirouter"
    debug: bool = False
    messages: WidgetConfig = Field(default_factory=WidgetConfig)
    cmdline: WidgetConfig = Field(default_factory=WidgetConfig)
    popupmenu: WidgetConfig = Field(default_factory=WidgetConfig)

    model_config = {
        "extra": "forbid",
        "frozen": True,
    }

    def widget(self, capability: str) -> WidgetConfig:
        """Return the settings for ``capability`` (``messages``, ``cmdline``, ``popupmenu``)."""
        section = getattr(self, capability, None)
        if not isinstance(section, WidgetConfig):
            raise KeyError(f"Unknown capability: {capability!r}")
        return section

    @classmethod
    def from_file(cls, path: str | Path) -> "RouterConfig":
        """Load a configuration from a JSON file."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
