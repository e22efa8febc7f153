#!/usr/bin/env python3
from __future__ import annotations

import os
import shlex
import sys
from typing import List, Optional

from utils.runner import CommandNotFound, spawn_cmd


def opener_argv(target: str, opener: Optional[str] = None) -> List[str]:
    """Build the argv that hands ``target`` to the default application."""
    if opener:
        return [*shlex.split(opener), target]
    if sys.platform == "darwin":
        return ["open", target]
    if os.name == "nt":
        return ["cmd", "/c", "start", "", target]
    return ["xdg-open", target]


def open_target(target: str, opener: Optional[str] = None) -> int:
    """Spawn the opener detached; its errors print to the terminal."""
    argv = opener_argv(target, opener)
    rc = spawn_cmd(argv, quiet=False)
    if rc == 127:
        raise CommandNotFound(argv[0])
    return rc
