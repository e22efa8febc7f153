#!/usr/bin/env python3
"""
Directory navigation through the popup menu.

``pick_dir`` offers the immediate subdirectories of its roots plus a quit
marker and changes the working directory to the choice. ``walk_dirs`` keeps
picking from the current directory until the quit marker is chosen.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from desktop.menu import Menu

logger = logging.getLogger(__name__)

QUIT_MARKER = "QUIT"
DEFAULT_PROMPT = "dir:"


@dataclass(frozen=True)
class Entered:
    path: str
    exit_status: int = 0


@dataclass(frozen=True)
class Cancelled:
    exit_status: int = 0


@dataclass(frozen=True)
class QuitRequested:
    exit_status: int = 2


@dataclass(frozen=True)
class Failed:
    path: str
    error: str
    exit_status: int = 1


DirOutcome = Union[Entered, Cancelled, QuitRequested, Failed]


def list_subdirs(roots: Sequence[str], show_hidden: bool = True) -> List[str]:
    """Immediate subdirectories of every root, roots in order, names sorted.

    Symlinks are not followed. Missing or unreadable roots are skipped.
    """
    out: List[str] = []
    for root in roots:
        try:
            with os.scandir(root) as it:
                names = sorted(e.name for e in it if e.is_dir(follow_symlinks=False))
        except OSError as e:
            logger.warning("cannot list %s: %s", root, e)
            continue
        for name in names:
            if not show_hidden and name.startswith("."):
                continue
            out.append(os.path.join(root, name))
    return [p for p in out if p]


def pick_dir(
    menu: Menu,
    roots: Optional[Sequence[str]] = None,
    *,
    quit_marker: str = QUIT_MARKER,
    prompt: str = DEFAULT_PROMPT,
    show_hidden: bool = True,
) -> DirOutcome:
    candidates = list_subdirs(list(roots or ["."]), show_hidden=show_hidden)
    candidates.append(quit_marker)
    selection = menu.select(candidates, prompt)
    if selection == quit_marker:
        return QuitRequested()
    if not selection:
        return Cancelled()
    try:
        os.chdir(selection)
    except OSError as e:
        # Typed text that is not a directory, or one we may not enter
        logger.warning("cannot enter %s: %s", selection, e)
        return Failed(selection, str(e))
    logger.debug("entered %s", selection)
    return Entered(selection)


def walk_dirs(
    menu: Menu,
    roots: Optional[Sequence[str]] = None,
    *,
    quit_marker: str = QUIT_MARKER,
    prompt: str = DEFAULT_PROMPT,
    show_hidden: bool = True,
    max_steps: Optional[int] = None,
) -> str:
    """
    Pick from ``roots`` once, then from the current directory until the quit
    marker is chosen. Cancelling or a failed entry does not end the walk.
    Returns the final working directory.

    ``max_steps`` bounds the number of picks; None means unbounded.
    """
    steps = 1
    outcome = pick_dir(menu, roots, quit_marker=quit_marker, prompt=prompt, show_hidden=show_hidden)
    while not isinstance(outcome, QuitRequested):
        if max_steps is not None and steps >= max_steps:
            break
        outcome = pick_dir(menu, [os.getcwd()], quit_marker=quit_marker, prompt=prompt, show_hidden=show_hidden)
        steps += 1
    return os.getcwd()
