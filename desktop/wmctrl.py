#!/usr/bin/env python3
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import List, Protocol

from utils.runner import CommandNotFound, run_cmd

logger = logging.getLogger(__name__)

_DESKTOP_RE = re.compile(r"^(\d+)\s+([*-])\s+(.*)$")
_WORKAREA_RE = re.compile(r"WA:\s+(?:N/A|\S+\s+\S+)\s*(.*)$")


@dataclass(frozen=True)
class Window:
    id: str
    desktop: int
    host: str
    title: str


@dataclass(frozen=True)
class Desktop:
    id: int
    current: bool
    name: str

    def label(self) -> str:
        return f"{self.id} {self.name}".rstrip()


class WindowManager(Protocol):
    def list_windows(self) -> List[Window]: ...
    def list_desktops(self) -> List[Desktop]: ...
    def activate(self, target: str, by_id: bool = True) -> int: ...
    def relocate(self, target: str, by_id: bool = True) -> int: ...
    def close(self, target: str, by_id: bool = True) -> int: ...
    def switch_desktop(self, desktop_id: int) -> int: ...


def parse_windows(out: str) -> List[Window]:
    """Parse ``wmctrl -l`` output.

    Format: ``0x01200007  0 hostname title...``; desktop is -1 for sticky
    windows and the title may be missing.
    """
    items: List[Window] = []
    for ln in out.splitlines():
        parts = ln.split(None, 3)
        if len(parts) < 3:
            continue
        wid, desk, host = parts[0], parts[1], parts[2]
        title = parts[3] if len(parts) > 3 else ""
        try:
            desk_i = int(desk)
        except ValueError:
            continue
        items.append(Window(id=wid, desktop=desk_i, host=host, title=title))
    return items


def parse_desktops(out: str) -> List[Desktop]:
    """Parse ``wmctrl -d`` output.

    Format: ``0  * DG: 1920x1080  VP: 0,0  WA: 0,0 1920x1080  Desktop 1``
    """
    items: List[Desktop] = []
    for ln in out.splitlines():
        m = _DESKTOP_RE.match(ln.strip())
        if not m:
            continue
        rest = m.group(3)
        wa = _WORKAREA_RE.search(rest)
        if wa:
            name = wa.group(1).strip()
        else:
            name = rest.split()[-1] if rest.split() else ""
        items.append(Desktop(id=int(m.group(1)), current=m.group(2) == "*", name=name))
    return items


class WmctrlWindowManager:
    """WindowManager backed by the ``wmctrl`` command (X11/EWMH)."""

    def __init__(self, program: str = "wmctrl") -> None:
        self.program = program

    def _run(self, args: List[str], mode: str) -> dict:
        res = run_cmd([self.program, *args], mode=mode)
        if res["rc"] == 127:
            raise CommandNotFound(self.program, res["stderr"])
        return res

    def list_windows(self) -> List[Window]:
        res = self._run(["-l"], "read")
        if res["rc"] != 0:
            logger.warning("%s -l failed (rc=%s): %s", self.program, res["rc"], res["stderr"].strip())
            # wmctrl only sees X11/XWayland windows
            if os.environ.get("WAYLAND_DISPLAY"):
                logger.info("Wayland session detected; native Wayland windows are not listed")
            return []
        return parse_windows(res["stdout"])

    def list_desktops(self) -> List[Desktop]:
        res = self._run(["-d"], "read")
        if res["rc"] != 0:
            logger.warning("%s -d failed (rc=%s): %s", self.program, res["rc"], res["stderr"].strip())
            return []
        return parse_desktops(res["stdout"])

    def _act(self, flag: str, target: str, by_id: bool) -> int:
        args = ["-i", flag, target] if by_id else [flag, target]
        rc = self._run(args, "write")["rc"]
        if rc != 0:
            logger.warning("%s %s %r returned %s", self.program, flag, target, rc)
        return rc

    def activate(self, target: str, by_id: bool = True) -> int:
        return self._act("-a", target, by_id)

    def relocate(self, target: str, by_id: bool = True) -> int:
        """Move the window to the current desktop, raise and focus it."""
        return self._act("-R", target, by_id)

    def close(self, target: str, by_id: bool = True) -> int:
        return self._act("-c", target, by_id)

    def switch_desktop(self, desktop_id: int) -> int:
        rc = self._run(["-s", str(desktop_id)], "write")["rc"]
        if rc != 0:
            logger.warning("%s -s %s returned %s", self.program, desktop_id, rc)
        return rc
