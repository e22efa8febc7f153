"""Menu-driven commands: window switching, directory picking, line browsing."""
from actions.browse import browse, read_lines
from actions.dirs import Cancelled, DirOutcome, Entered, Failed, QuitRequested, list_subdirs, pick_dir, walk_dirs
from actions.windows import fetch_window, go_to_desktop, go_to_window, kill_window

__all__ = [
    "Cancelled",
    "DirOutcome",
    "Entered",
    "Failed",
    "QuitRequested",
    "browse",
    "fetch_window",
    "go_to_desktop",
    "go_to_window",
    "kill_window",
    "list_subdirs",
    "pick_dir",
    "read_lines",
    "walk_dirs",
]
