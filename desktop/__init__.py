"""
Adapters for the external desktop programs: the dmenu popup, wmctrl, and the
platform opener. Each adapter shells out through ``utils.runner`` so every
invocation lands in the command log.
"""
from desktop.menu import DmenuMenu, Menu
from desktop.opener import open_target, opener_argv
from desktop.wmctrl import Desktop, Window, WindowManager, WmctrlWindowManager

__all__ = [
    "Desktop",
    "DmenuMenu",
    "Menu",
    "Window",
    "WindowManager",
    "WmctrlWindowManager",
    "open_target",
    "opener_argv",
]
