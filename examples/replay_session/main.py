#!/usr/bin/env python3
"""
Replay Session - uirouter demo application

Replays a recorded stream of editor UI events through a Router attached to
an in-memory host, then prints what was rendered and the routing stats.

Run modes:
  python main.py                          # Built-in sample session
  python main.py --file session.json      # Replay a recorded session
  python main.py --fast                   # Deliver every event from a fast context
  python main.py --debug                  # Structured debug logging
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from widgets import STORE

from uirouter import InMemoryHost, InMemoryStats, LoopScheduler, Router, RouterConfig


class PrintingRenderer:
    """Prints the store every time the router asks for a refresh."""

    def __init__(self) -> None:
        self.frames = 0

    def update(self) -> None:
        self.frames += 1
        popup = ""
        if STORE.popup:
            items = [f"*{item}*" if i == STORE.selected else item for i, item in enumerate(STORE.popup)]
            popup = f" | pum: {' '.join(items)}"
        last = STORE.messages[-1] if STORE.messages else ""
        print(f"frame {self.frames:>3}: cmd={STORE.cmdline!r} msg={last!r}{popup}")

    def echo_pending(self) -> None:
        pass


def sample_session() -> list[list]:
    """A short ':e' completion followed by a write."""
    return [
        ["cmdline_show", [[{}, "e"]], 1, ":", "", 0, 1],
        ["cmdline_show", [[{}, "e "]], 2, ":", "", 0, 1],
        ["popupmenu_show", [["main.py", "", "", ""], ["widgets.py", "", "", ""]], -1, 0, 2, -1],
        ["popupmenu_select", 0],
        ["popupmenu_select", 0],
        ["popupmenu_select", 1],
        ["popupmenu_hide"],
        ["cmdline_hide", 1, False],
        ["msg_show", "normal", [[0, '"widgets.py" 74L, 2210B']], False],
        ["msg_ruler", [[0, "12,1  Top"]]],
        ["msg_show", "return_prompt", [], False],
        ["msg_showmode", []],
        ["msg_show", "echo", [[0, ""]], False],
        ["grid_line", 1, 0, 0, [], False],
        ["msg_clear"],
    ]


def load_session(filepath: str) -> list[list]:
    """Load events from a JSON list of [event, *args] entries."""
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {filepath}")
    with open(path) as f:
        data = json.load(f)
    events = data if isinstance(data, list) else data.get("events", [])
    for i, entry in enumerate(events):
        if not isinstance(entry, list) or not entry or not isinstance(entry[0], str):
            raise ValueError(f"Entry {i} must be [event, *args], got {entry!r}")
    return events


async def replay(events: list[list], fast: bool = False, debug: bool = False) -> InMemoryStats:
    config = RouterConfig(
        namespace="replay",
        debug=debug,
        messages={"handler": "widgets:MessageWidget"},
        cmdline={"handler": "widgets:CmdlineWidget"},
        popupmenu={"handler": "widgets:PopupmenuWidget"},
    )
    host = InMemoryHost(uis=[{"rgb": True}])
    stats = InMemoryStats()
    router = Router(config, host, PrintingRenderer(), STORE, LoopScheduler(), stats=stats)

    if not router.enable():
        print("Nothing to route", file=sys.stderr)
        return stats

    host.fast = fast
    claimed = 0
    for entry in events:
        event, *args = entry
        if host.emit(event, *args):
            claimed += 1
        await asyncio.sleep(0)

    router.disable()

    print(f"\nclaimed {claimed}/{len(events)} events, host inputs: {host.inputs}")
    stats_view = router.get_stats()
    print(
        f"processed={stats_view.events_processed} refreshes={stats_view.refreshes} "
        f"suppressed={stats_view.refreshes_suppressed} dropped={stats_view.events_dropped}"
    )
    for name, count in sorted(stats.snapshot().items()):
        print(f"  {name}: {count}")
    return stats


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay editor UI events through uirouter")
    parser.add_argument("--file", help="JSON session to replay")
    parser.add_argument("--fast", action="store_true", help="Deliver events from a fast context")
    parser.add_argument("--debug", action="store_true", help="Enable router diagnostics")
    args = parser.parse_args()

    events = load_session(args.file) if args.file else sample_session()
    asyncio.run(replay(events, fast=args.fast, debug=args.debug))


if __name__ == "__main__":
    main()
