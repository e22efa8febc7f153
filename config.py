#!/usr/bin/env python3
"""
Configuration management for wmenu-toolkit.

The config file is JSON by default; a path ending in ``.yaml``/``.yml`` is
read with PyYAML. User values are deep-merged over ``DEFAULT_CONFIG``.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV = "WMENU_CONFIG"

DEFAULT_CONFIG = {
    "menu": {
        "command": "dmenu",
        "lines": 20,
        "case_insensitive": True,
        "font": "",
        "normal_bg": "#222222",
        "normal_fg": "#bbbbbb",
        "selected_bg": "#005577",
        "selected_fg": "#eeeeee",
        "extra_args": [],
    },
    "commands": {
        "wmctrl": "wmctrl",
        "opener": "",
    },
    "dirs": {
        "quit_marker": "QUIT",
        "prompt": "dir:",
        "show_hidden": True,
    },
    "windows": {
        "window_prompt": "window:",
        "desktop_prompt": "desktop:",
    },
    "browse": {
        "prompt": "open:",
    },
    "logging": {
        "command_log": True,
        "log_file": "~/.cache/wmenu-toolkit/command_log.jsonl",
        "level": "WARNING",
    },
}


@dataclass
class MenuConfig:
    command: str = "dmenu"
    lines: int = 20
    case_insensitive: bool = True
    font: str = ""
    normal_bg: str = "#222222"
    normal_fg: str = "#bbbbbb"
    selected_bg: str = "#005577"
    selected_fg: str = "#eeeeee"
    extra_args: List[str] = field(default_factory=list)


@dataclass
class CommandsConfig:
    wmctrl: str = "wmctrl"
    opener: str = ""


@dataclass
class DirsConfig:
    quit_marker: str = "QUIT"
    prompt: str = "dir:"
    show_hidden: bool = True


@dataclass
class WindowsConfig:
    window_prompt: str = "window:"
    desktop_prompt: str = "desktop:"


@dataclass
class BrowseConfig:
    prompt: str = "open:"


@dataclass
class LoggingConfig:
    command_log: bool = True
    log_file: str = "~/.cache/wmenu-toolkit/command_log.jsonl"
    level: str = "WARNING"


@dataclass
class Config:
    menu: MenuConfig
    commands: CommandsConfig
    dirs: DirsConfig
    windows: WindowsConfig
    browse: BrowseConfig
    logging: LoggingConfig

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Config:
        return cls(
            menu=MenuConfig(**data.get("menu", {})),
            commands=CommandsConfig(**data.get("commands", {})),
            dirs=DirsConfig(**data.get("dirs", {})),
            windows=WindowsConfig(**data.get("windows", {})),
            browse=BrowseConfig(**data.get("browse", {})),
            logging=LoggingConfig(**data.get("logging", {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "menu": asdict(self.menu),
            "commands": asdict(self.commands),
            "dirs": asdict(self.dirs),
            "windows": asdict(self.windows),
            "browse": asdict(self.browse),
            "logging": asdict(self.logging),
        }


def default_config_file() -> Path:
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(os.path.expanduser(env))
    return Path.home() / ".config" / "wmenu-toolkit" / "config.json"


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in (".yaml", ".yml")


class ConfigManager:
    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = Path(config_file) if config_file else default_config_file()
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def _read_file(self) -> Dict[str, Any]:
        text = self.config_file.read_text(encoding="utf-8")
        if _is_yaml(self.config_file):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError("top-level value must be a mapping")
        return data

    def _load_config(self) -> Config:
        if self.config_file.exists():
            try:
                merged = self._deep_merge(DEFAULT_CONFIG, self._read_file())
                return Config.from_dict(merged)
            except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
                logger.warning("Failed to load config %s: %s", self.config_file, e)
        return Config.from_dict(DEFAULT_CONFIG)

    def save_config(self) -> None:
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w", encoding="utf-8") as f:
                if _is_yaml(self.config_file):
                    yaml.safe_dump(self.config.to_dict(), f, sort_keys=False)
                else:
                    json.dump(self.config.to_dict(), f, indent=2)
            try:
                os.chmod(self.config_file, 0o600)
            except OSError:
                pass
        except OSError as e:
            logger.error("Error saving config %s: %s", self.config_file, e)

    def update_config(self, updates: Dict[str, Any]) -> None:
        current = self.config.to_dict()
        merged = self._deep_merge(current, updates)
        self._config = Config.from_dict(merged)
        self.save_config()

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()
        for key, value in update.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


# Global singleton
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[Path] = None) -> ConfigManager:
    global _config_manager
    if _config_manager is None or (
        config_file is not None and Path(config_file) != _config_manager.config_file
    ):
        _config_manager = ConfigManager(config_file)
    return _config_manager
