"""Subprocess runner (``runner``) and shell helpers (``helper``)."""
