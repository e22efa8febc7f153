#!/usr/bin/env python3
"""
Command-line entry point for wmenu-toolkit.

Sub-commands:
- gowin                 Switch to a window picked from the menu
- fetchwin              Bring a picked window to the current desktop
- killwin               Close a picked window
- godesk                Switch to a picked desktop
- godir [-r] [PATH...]  Pick a subdirectory (repeatedly with -r); prints the
                        resulting directory, exits 2 when QUIT was picked
- browse [FILE]         Open a line picked from FILE or stdin
- shell-init            Print shell functions wrapping the above
- doctor                Report which external tools are available
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from actions import browse, fetch_window, go_to_desktop, go_to_window, kill_window, pick_dir, walk_dirs
from config import Config, get_config_manager
from desktop.menu import DmenuMenu
from desktop.opener import open_target, opener_argv
from desktop.wmctrl import WmctrlWindowManager
from utils import runner
from utils.helper import shell_init, which

logger = logging.getLogger("wmenu")

PROG = "wmenu"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="dmenu front-ends for wmctrl, cd and xdg-open")
    parser.add_argument("-c", "--config", type=Path, default=None, help="config file (JSON or YAML)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("gowin", help="switch to a window")
    sub.add_parser("fetchwin", help="bring a window to the current desktop")
    sub.add_parser("killwin", help="close a window")
    sub.add_parser("godesk", help="switch desktop")

    p = sub.add_parser("godir", help="pick a subdirectory and print it")
    p.add_argument("-r", "--recursive", action="store_true", help="keep descending until QUIT is picked")
    p.add_argument("paths", nargs="*", metavar="PATH")

    p = sub.add_parser("browse", help="open a line from FILE or stdin")
    p.add_argument("source", nargs="?", default=None, metavar="FILE")

    sub.add_parser("shell-init", help="print shell wrapper functions")
    sub.add_parser("doctor", help="check for external tools")
    return parser


def _setup_logging(cfg: Config, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, str(cfg.logging.level).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s", stream=sys.stderr)
    runner.configure_log(cfg.logging.log_file, cfg.logging.command_log)


def _godir(cfg: Config, menu: DmenuMenu, paths: List[str], recursive: bool) -> int:
    opts = dict(quit_marker=cfg.dirs.quit_marker, prompt=cfg.dirs.prompt, show_hidden=cfg.dirs.show_hidden)
    if recursive:
        final = walk_dirs(menu, paths or None, **opts)
        print(final)
        return 0
    outcome = pick_dir(menu, paths or None, **opts)
    # stdout carries only the directory; the shell wrappers cd into it
    print(os.getcwd())
    return outcome.exit_status


def _doctor(cfg: Config) -> int:
    tools = [cfg.menu.command, cfg.commands.wmctrl, opener_argv("", cfg.commands.opener or None)[0]]
    missing = 0
    print("Tools:")
    for t in tools:
        ok = which(t)
        missing += 0 if ok else 1
        print(f"    {t:12}: {'yes' if ok else 'no'}")
    if os.environ.get("WAYLAND_DISPLAY"):
        print("Note: On Wayland, wmctrl may not see native Wayland windows.")
    print(f"Config: {get_config_manager().config_file}")
    print(f"Command log: {runner.log_file() or 'disabled'}")
    return 1 if missing else 0


def run(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    cfg = get_config_manager(args.config).config
    _setup_logging(cfg, args.verbose)

    if args.command == "shell-init":
        print(shell_init(PROG), end="")
        return 0
    if args.command == "doctor":
        return _doctor(cfg)

    menu = DmenuMenu(cfg.menu)
    wm = WmctrlWindowManager(cfg.commands.wmctrl)
    try:
        if args.command == "gowin":
            go_to_window(wm, menu, cfg.windows.window_prompt)
        elif args.command == "fetchwin":
            fetch_window(wm, menu, cfg.windows.window_prompt)
        elif args.command == "killwin":
            kill_window(wm, menu, cfg.windows.window_prompt)
        elif args.command == "godesk":
            go_to_desktop(wm, menu, cfg.windows.desktop_prompt)
        elif args.command == "godir":
            return _godir(cfg, menu, args.paths, args.recursive)
        elif args.command == "browse":
            opener = cfg.commands.opener or None
            browse(menu, args.source, prompt=cfg.browse.prompt, open_fn=lambda t: open_target(t, opener))
    except runner.CommandNotFound as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 127
    except OSError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1
    return 0


def main() -> None:
    try:
        raise SystemExit(run())
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        raise SystemExit(130)


if __name__ == "__main__":
    main()
