"""Tests for RouterConfig."""

import json

import pydantic
import pytest

from uirouter.core.config import RouterConfig, WidgetConfig


def test_defaults():
    config = RouterConfig()

    assert config.namespace == "uirouter"
    assert config.debug is False
    for capability in ("messages", "cmdline", "popupmenu"):
        assert config.widget(capability) == WidgetConfig(enabled=True, handler=None)


def test_widget_rejects_unknown_capability():
    with pytest.raises(KeyError):
        RouterConfig().widget("tabline")

    with pytest.raises(KeyError):
        RouterConfig().widget("debug")


def test_extra_fields_are_forbidden():
    with pytest.raises(pydantic.ValidationError):
        RouterConfig(notify={"enabled": True})

    with pytest.raises(pydantic.ValidationError):
        WidgetConfig(enabled=True, view="mini")


def test_config_is_frozen():
    config = RouterConfig()
    with pytest.raises((pydantic.ValidationError, AttributeError, TypeError)):
        config.debug = True


def test_from_file(tmp_path):
    path = tmp_path / "router.json"
    path.write_text(
        json.dumps(
            {
                "debug": True,
                "messages": {"handler": "myplugin.msg:MessageView"},
                "popupmenu": {"enabled": False},
            }
        ),
        encoding="utf-8",
    )

    config = RouterConfig.from_file(path)

    assert config.debug is True
    assert config.messages.handler == "myplugin.msg:MessageView"
    assert config.popupmenu.enabled is False
    assert config.cmdline.enabled is True


def test_from_file_rejects_invalid(tmp_path):
    path = tmp_path / "router.json"
    path.write_text('{"debug": "very"}', encoding="utf-8")

    with pytest.raises(pydantic.ValidationError):
        RouterConfig.from_file(path)
