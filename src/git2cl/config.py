"""Persisted defaults for the ChangeLog generator.

Stored in ~/.config/git2cl/config.toml
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

# tomli-w for writing (tomllib is read-only)
import tomli_w

# tomllib is stdlib in 3.11+, use tomli as fallback for 3.10
try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found,no-redef]

from git2cl.output import write_atomic

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "git2cl"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"

CONFIG_KEYS = ("since", "copyright_who", "output")


@dataclass
class Config:
    """Default values for the command-line options."""

    since: str | None = None
    copyright_who: str | None = None
    output: str | None = None

    # File path for this config (not persisted)
    _path: Path = field(default=DEFAULT_CONFIG_PATH, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization.

        Unset values are left out since TOML has no null.
        """
        return {key: getattr(self, key) for key in CONFIG_KEYS if getattr(self, key)}

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> Config:
        """Create config from dictionary."""
        return cls(
            since=data.get("since"),
            copyright_who=data.get("copyright_who"),
            output=data.get("output"),
            _path=path or DEFAULT_CONFIG_PATH,
        )

    def merged(self, **overrides: str | None) -> Config:
        """Return a copy where every non-empty override replaces the stored value."""
        values = {key: getattr(self, key) for key in CONFIG_KEYS}
        for key, value in overrides.items():
            if key in values and value:
                values[key] = value
        return Config(**values, _path=self._path)

    def save(self) -> Path:
        """Write the set values to the config file atomically.

        Raises:
            OutputWriteError: If the file cannot be written.
        """
        return write_atomic(self._path, tomli_w.dumps(self.to_dict()))


def _string_values(data: dict[str, Any], source: Path) -> dict[str, str]:
    """Keep the known keys whose values are strings, warning about the rest."""
    values = {}
    for key, value in data.items():
        if key not in CONFIG_KEYS:
            logger.warning(f"Ignoring unknown key {key!r} in {source}")
        elif not isinstance(value, str):
            logger.warning(f"Ignoring {key!r} in {source}: expected a string")
        else:
            values[key] = value
    return values


def load_config(path: Path | None = None) -> Config:
    """Load option defaults from a TOML file.

    A missing file gives an empty Config; an unreadable or invalid one is
    reported as a warning and also gives an empty Config.

    Args:
        path: Optional custom config path. Defaults to ~/.config/git2cl/config.toml
    """
    config_path = path or DEFAULT_CONFIG_PATH

    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Config(_path=config_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not load config from {config_path}: {e}")
        return Config(_path=config_path)

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        logger.warning(f"Could not load config from {config_path}: {e}")
        return Config(_path=config_path)

    return Config.from_dict(_string_values(data, config_path), path=config_path)


def save_config(config: Config, path: Path | None = None) -> Path:
    """Persist ``config``, optionally to a different file than it came from.

    Returns:
        The path written.
    """
    if path:
        config = replace(config, _path=path)
    return config.save()
