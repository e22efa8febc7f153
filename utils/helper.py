"""``which`` for tool lookups and ``shell_init``, which writes the bash/zsh wrapper functions."""
from __future__ import annotations
import shlex
from typing import List

# ---------------- Basic helpers ----------------
def which(cmd: str) -> bool:
    from shutil import which as _w
    return _w(cmd) is not None

# ---------------- Shell wrapper writer ----------------
PASSTHROUGH = ("gowin", "fetchwin", "killwin", "godesk", "browse")

def shell_init(prog: str = "wmenu") -> str:
    """
    Shell functions for bash/zsh. The window commands and browse just call
    the CLI; godir/godirr need a wrapper because a child process cannot change
    the calling shell's directory, so they cd into the path the CLI prints.
    """
    exe = shlex.quote(prog)
    lines: List[str] = [f"# eval \"$({exe} shell-init)\""]
    for name in PASSTHROUGH:
        lines.append(f'{name}() {{ {exe} {name} "$@"; }}')
    lines.append(f"""godir() {{
    local _d _rc
    _d="$({exe} godir "$@")"
    _rc=$?
    [ -n "$_d" ] && cd "$_d"
    return $_rc
}}""")
    lines.append(f"""godirr() {{
    local _d _rc
    _d="$({exe} godir -r "$@")"
    _rc=$?
    [ -n "$_d" ] && cd "$_d"
    return $_rc
}}""")
    return "\n".join(lines) + "\n"
