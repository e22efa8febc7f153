#!/usr/bin/env python3
"""Window and desktop switching through the popup menu."""
from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional

from desktop.menu import Menu
from desktop.wmctrl import Window, WindowManager

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_PROMPT = "window:"
DEFAULT_DESKTOP_PROMPT = "desktop:"

_LEADING_INT = re.compile(r"^\s*(\d+)")


def _title_map(windows: List[Window]) -> Dict[str, str]:
    # First window wins when titles repeat
    mapping: Dict[str, str] = {}
    for w in windows:
        if not w.title.strip():
            continue
        mapping.setdefault(w.title, w.id)
    return mapping


def _pick_window(wm: WindowManager, menu: Menu, prompt: str, apply: Callable[[str, bool], int]) -> Optional[str]:
    mapping = _title_map(wm.list_windows())
    selection = menu.select(list(mapping.keys()), prompt)
    if not selection:
        return None
    wid = mapping.get(selection)
    if wid is not None:
        apply(wid, True)
    else:
        # Typed text that matches no listed title; let wmctrl match by title
        apply(selection, False)
    return selection


def go_to_window(wm: WindowManager, menu: Menu, prompt: str = DEFAULT_WINDOW_PROMPT) -> Optional[str]:
    """Switch to the desktop of the chosen window, raise and focus it.

    Windows are offered by title in ``wmctrl -l`` order. Repeated titles
    appear once and resolve to the first such window, so a selection always
    names exactly one window id.
    The same applies to ``fetch_window`` and ``kill_window``.
    """
    return _pick_window(wm, menu, prompt, wm.activate)


def fetch_window(wm: WindowManager, menu: Menu, prompt: str = DEFAULT_WINDOW_PROMPT) -> Optional[str]:
    """Bring the chosen window to the current desktop."""
    return _pick_window(wm, menu, prompt, wm.relocate)


def kill_window(wm: WindowManager, menu: Menu, prompt: str = DEFAULT_WINDOW_PROMPT) -> Optional[str]:
    """Gracefully close the chosen window."""
    return _pick_window(wm, menu, prompt, wm.close)


def go_to_desktop(wm: WindowManager, menu: Menu, prompt: str = DEFAULT_DESKTOP_PROMPT) -> Optional[str]:
    labels = [d.label() for d in wm.list_desktops()]
    selection = menu.select(labels, prompt)
    if not selection:
        return None
    m = _LEADING_INT.match(selection)
    if not m:
        logger.info("ignoring desktop selection without an id: %r", selection)
        return None
    wm.switch_desktop(int(m.group(1)))
    return selection
