"""
Configuration for jsonskel.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/jsonskel/config.toml) if exists
3. Environment variables (JSONSKEL_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib  # stdlib in 3.11+
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger(__name__)


@dataclass
class OutputConfig:
    """Skeleton rendering settings."""
    indent: str = "\t"
    external_placeholder: str = "{} // External type"
    recursion_placeholder: str = "{} // Recursive type"
    max_depth: int = 64  # nesting level at which recursion stops


@dataclass
class ParserConfig:
    """Declaration parsing settings."""
    marker: str = "JsonCreator"  # selects the canonical constructor


@dataclass
class CatalogConfig:
    """Project catalog scanning settings."""
    extensions: list[str] = field(default_factory=lambda: [".java"])
    skip_patterns: list[str] = field(default_factory=lambda: [
        ".git", ".svn", ".hg", ".idea", ".gradle",
        "build", "target", "out", "bin", "node_modules",
    ])


@dataclass
class ClipboardConfig:
    """Clipboard delivery settings."""
    command: str | None = None  # None = auto-detect


@dataclass
class Config:
    """Root config with all settings."""
    output: OutputConfig = field(default_factory=OutputConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    clipboard: ClipboardConfig = field(default_factory=ClipboardConfig)


def parse_indent(value: str | int) -> str:
    """
    Interpret an indent setting.

    "tab" or "\\t" -> a tab, an integer (or digit string) -> that many spaces,
    anything else is used literally. Other value types raise ValueError.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(f"indent must be a string or an integer, got {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"indent must not be negative, got {value}")
        return " " * value
    if value.lower() in ("tab", "\\t", "\t"):
        return "\t"
    if value.isdigit():
        return " " * int(value)
    return value


def parse_max_depth(value: str | int) -> int:
    """Interpret a max_depth setting; anything below 1 raises ValueError."""
    if isinstance(value, bool):
        raise ValueError(f"max_depth must be an integer, got {value!r}")
    depth = int(value)
    if depth < 1:
        raise ValueError(f"max_depth must be >= 1, got {depth}")
    return depth


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "jsonskel" / "config.toml"
    return Path.home() / ".config" / "jsonskel" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            log.warning("Ignoring config file %s: %s", path, e)
            config = Config()

    # env var overrides
    config = _apply_env(config)

    return config


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "output" in data:
        o = data["output"]
        if "indent" in o:
            config.output.indent = parse_indent(o["indent"])
        if "external_placeholder" in o:
            config.output.external_placeholder = str(o["external_placeholder"])
        if "recursion_placeholder" in o:
            config.output.recursion_placeholder = str(o["recursion_placeholder"])
        if "max_depth" in o:
            config.output.max_depth = parse_max_depth(o["max_depth"])

    if "parser" in data:
        p = data["parser"]
        if "marker" in p:
            config.parser.marker = str(p["marker"])

    if "catalog" in data:
        c = data["catalog"]
        if "extensions" in c:
            config.catalog.extensions = [str(e) for e in c["extensions"]]
        if "skip_patterns" in c:
            config.catalog.skip_patterns = [str(s) for s in c["skip_patterns"]]

    if "clipboard" in data:
        cb = data["clipboard"]
        if "command" in cb:
            config.clipboard.command = str(cb["command"]) or None

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, Callable[[str], object]]] = {
        "JSONSKEL_INDENT": ("output", "indent", parse_indent),
        "JSONSKEL_EXTERNAL_PLACEHOLDER": ("output", "external_placeholder", str),
        "JSONSKEL_RECURSION_PLACEHOLDER": ("output", "recursion_placeholder", str),
        "JSONSKEL_MAX_DEPTH": ("output", "max_depth", parse_max_depth),
        "JSONSKEL_MARKER": ("parser", "marker", str),
        "JSONSKEL_CLIPBOARD_COMMAND": ("clipboard", "command", str),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError, AttributeError):
                setattr(getattr(config, section), attr, conv(val))

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded config so the next get_config() reloads it."""
    global _config
    _config = None
