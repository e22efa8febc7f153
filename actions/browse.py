#!/usr/bin/env python3
from __future__ import annotations

import sys
from typing import Callable, List, Optional, TextIO

from desktop.menu import Menu
from desktop.opener import open_target

DEFAULT_PROMPT = "open:"


def read_lines(source: Optional[str] = None, stdin: Optional[TextIO] = None) -> List[str]:
    """Lines of ``source`` (a file path) or stdin when source is None or '-'.

    Line endings and empty lines are dropped; nothing else is trimmed.
    """
    if source and source != "-":
        with open(source, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
    else:
        text = (stdin or sys.stdin).read()
    return [ln for ln in text.splitlines() if ln]


def browse(
    menu: Menu,
    source: Optional[str] = None,
    *,
    prompt: str = DEFAULT_PROMPT,
    open_fn: Callable[[str], object] = open_target,
    stdin: Optional[TextIO] = None,
) -> Optional[str]:
    """Pick a line and hand it, unmodified, to the opener."""
    selection = menu.select(read_lines(source, stdin), prompt)
    if not selection:
        return None
    open_fn(selection)
    return selection
