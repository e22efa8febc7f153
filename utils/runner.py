#!/usr/bin/env python3
from __future__ import annotations

import json
import logging
import os
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = Path.home() / ".cache" / "wmenu-toolkit" / "command_log.jsonl"

MAX_CAPTURE = 8192  # chars per stream to keep in log

# Module-level log target; set from config by the CLI
_log_file: Path | None = DEFAULT_LOG_FILE


class CommandNotFound(RuntimeError):
    """A required external program is not installed or not on PATH."""

    def __init__(self, program: str, detail: str = "") -> None:
        self.program = program
        msg = f"{program}: command not found"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


def configure_log(path: str | Path | None, enabled: bool = True) -> None:
    """Point the JSONL command log at ``path``; ``enabled=False`` turns it off."""
    global _log_file
    if not enabled or not path:
        _log_file = None
        return
    _log_file = Path(os.path.expanduser(str(path)))


def log_file() -> Path | None:
    return _log_file


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _truncate(s: str | bytes | None, limit: int = MAX_CAPTURE) -> str:
    if s is None:
        return ""
    if isinstance(s, bytes):
        s = s.decode("utf-8", errors="replace")
    s = str(s)
    if len(s) <= limit:
        return s
    return s[:limit] + f"\n… [truncated {len(s) - limit} chars]"


def _write_log(entry: dict[str, Any]) -> None:
    if _log_file is None:
        return
    try:
        _log_file.parent.mkdir(parents=True, exist_ok=True)
        with _log_file.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")
    except OSError as e:
        # Best-effort logging; never raise
        logger.debug("command log write failed: %s", e)


def run_cmd(
    cmd: Sequence[str],
    *,
    input: str | None = None,
    mode: str = "read",  # "read" for queries, "write" for actions; logged only
) -> dict[str, Any]:
    """
    Execute a command, optionally feeding ``input`` on stdin, capture
    stdout/stderr, log JSONL, and return a result dict:
    { 'rc': int, 'stdout': str, 'stderr': str, 'cmd': [...], 'cwd': str }

    A missing executable yields rc 127.
    """
    argv = list(cmd)
    logger.debug("run: %s", argv)

    try:
        p = subprocess.Popen(
            argv,
            stdin=subprocess.PIPE if input is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
        out, err = p.communicate(input=input)
        rc = p.returncode
    except FileNotFoundError as e:
        out, err, rc = "", str(e), 127
    except OSError as e:
        out, err, rc = "", str(e), 1

    entry = {
        "ts": _now_iso(),
        "cmd": argv,
        "cwd": os.getcwd(),
        "mode": mode,
        "rc": rc,
        "stdout": _truncate(out),
        "stderr": _truncate(err),
    }
    _write_log(entry)

    return {"rc": rc, "stdout": out or "", "stderr": err or "", "cmd": argv, "cwd": os.getcwd()}


def spawn_cmd(cmd: Sequence[str], *, quiet: bool = True) -> int:
    """Spawn a detached process (no capture); still logs the intent.

    With ``quiet=False`` the child's stderr stays on the terminal.
    """
    argv = list(cmd)
    rc = 0
    try:
        subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL if quiet else None,
            start_new_session=True,
        )
    except FileNotFoundError:
        rc = 127
    except OSError:
        rc = 1
    entry = {
        "ts": _now_iso(),
        "cmd": argv,
        "cwd": os.getcwd(),
        "mode": "spawn",
        "rc": rc,
    }
    _write_log(entry)
    return rc
