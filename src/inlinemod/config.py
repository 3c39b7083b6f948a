"""
TOML-based config file loading for inlinemod.

Searches for `.inlinemod.toml`, `inlinemod.toml`, or `pyproject.toml [tool.inlinemod]`
walking up from a start directory. Values that are set override the built-in
defaults of `InlinerBuilder`; values that are not set leave them alone.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class InlineConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    so callers can tell "not configured" from "explicitly set to the default".
    """

    root: bool | None = None
    extension: str | None = None
    index_filename: str | None = None
    encoding: str | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".inlinemod.toml", "inlinemod.toml", "pyproject.toml"]

_FIELD_TYPES: dict[str, type] = {
    "root": bool,
    "extension": str,
    "index_filename": str,
    "encoding": str,
}

logger = logging.getLogger(__name__)


def find_config_file(start_dir: Path) -> Path | None:
    """
    Return the nearest config file at or above `start_dir`, or `None`.

    Within one directory `.inlinemod.toml` beats `inlinemod.toml`, which beats
    a `pyproject.toml` that has a `[tool.inlinemod]` table.
    """
    start = start_dir.resolve()
    for directory in [start, *start.parents]:
        found = next(
            (
                directory / name
                for name in _CONFIG_FILENAMES
                if _is_config_candidate(directory / name)
            ),
            None,
        )
        if found is not None:
            return found
    return None


def _is_config_candidate(path: Path) -> bool:
    if not path.is_file():
        return False
    if path.name != "pyproject.toml":
        return True
    try:
        return "inlinemod" in tomllib.loads(path.read_text()).get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> InlineConfig:
    """
    Load an `InlineConfig` from a TOML file, either standalone or the
    `[tool.inlinemod]` table of a `pyproject.toml`. Kebab-case keys such as
    `index-filename` are accepted. A malformed file yields an empty config and
    a warning. Unknown keys and values of the wrong type are warned about and
    skipped.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring malformed config file %s: %s", config_path, e)
        return InlineConfig()

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("inlinemod", {})

    return _parse_config_data(data, config_path)


def _parse_config_data(data: dict[str, Any], source: Path | None = None) -> InlineConfig:
    """Map top-level TOML keys onto `InlineConfig` fields."""
    where = source or "config"
    values: dict[str, Any] = {}
    for key, value in data.items():
        name = key.replace("-", "_")
        expected = _FIELD_TYPES.get(name)
        if expected is None:
            logger.warning("Unrecognized config key %r in %s", key, where)
        elif not isinstance(value, expected):
            logger.warning(
                "Ignoring config key %r in %s: expected %s, got %r",
                key,
                where,
                expected.__name__,
                value,
            )
        else:
            values[name] = value
    return InlineConfig(**values)
