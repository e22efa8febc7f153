#!/usr/bin/env python3
from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence

from config import MenuConfig
from utils.runner import CommandNotFound, run_cmd

logger = logging.getLogger(__name__)


class Menu(Protocol):
    def select(self, items: Sequence[str], prompt: str = "") -> Optional[str]:
        ...


class DmenuMenu:
    """Blocking popup selector backed by dmenu (or a dmenu-compatible tool)."""

    def __init__(self, cfg: Optional[MenuConfig] = None) -> None:
        self.cfg = cfg or MenuConfig()

    def argv(self, prompt: str = "") -> List[str]:
        c = self.cfg
        args = [c.command]
        if c.case_insensitive:
            args.append("-i")
        args += ["-l", str(c.lines)]
        if prompt:
            args += ["-p", prompt]
        args += ["-nb", c.normal_bg, "-nf", c.normal_fg, "-sb", c.selected_bg, "-sf", c.selected_fg]
        if c.font:
            args += ["-fn", c.font]
        args += list(c.extra_args)
        return args

    def select(self, items: Sequence[str], prompt: str = "") -> Optional[str]:
        """
        Show ``items`` and block until the user commits or dismisses the popup.
        Returns the chosen line without its trailing newline, or None when the
        popup was cancelled (non-zero exit) or produced nothing.
        """
        text = "\n".join(items)
        if items:
            text += "\n"
        res = run_cmd(self.argv(prompt), input=text, mode="read")
        if res["rc"] == 127:
            raise CommandNotFound(self.cfg.command, res["stderr"])
        if res["rc"] != 0:
            logger.debug("menu dismissed (rc=%s)", res["rc"])
            return None
        out = res["stdout"]
        if out.endswith("\n"):
            out = out[:-1]
        return out or None
