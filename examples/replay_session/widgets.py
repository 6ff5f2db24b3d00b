"""Toy widget handlers that keep their state in a shared store."""

from uirouter import WidgetHandler


class Store:
    """Rendering-relevant state plus the tick that versions it."""

    def __init__(self) -> None:
        self.messages: list[str] = []
        self.cmdline = ""
        self.popup: list[str] = []
        self.selected = -1
        self._tick = 0

    def tick(self) -> int:
        return self._tick

    def changed(self) -> None:
        self._tick += 1


STORE = Store()


class MessageWidget(WidgetHandler):
    group = "msg"
    handles = ["show", "clear", "showmode"]

    def on_show(self, event, kind, content, *rest):
        text = "".join(chunk[1] for chunk in content)
        if not text:
            return
        STORE.messages.append(f"[{kind or 'msg'}] {text}")
        STORE.changed()

    def on_clear(self, event, *payload):
        if STORE.messages:
            STORE.messages.clear()
            STORE.changed()

    def on_showmode(self, event, *payload):
        # mode changes are drawn by the host
        return None


class CmdlineWidget(WidgetHandler):
    group = "cmdline"
    handles = ["show", "hide"]

    def on_show(self, event, content, pos, firstc, *rest):
        line = firstc + "".join(chunk[1] for chunk in content)
        if line != STORE.cmdline:
            STORE.cmdline = line
            STORE.changed()

    def on_hide(self, event, *payload):
        if STORE.cmdline:
            STORE.cmdline = ""
            STORE.changed()


class PopupmenuWidget(WidgetHandler):
    group = "popupmenu"
    handles = ["show", "select", "hide"]

    def on_show(self, event, items, selected, *rest):
        STORE.popup = [item[0] for item in items]
        STORE.selected = selected
        STORE.changed()

    def on_select(self, event, selected, *rest):
        if selected != STORE.selected:
            STORE.selected = selected
            STORE.changed()

    def on_hide(self, event, *payload):
        STORE.popup = []
        STORE.selected = -1
        STORE.changed()
