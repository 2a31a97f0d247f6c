#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Settings file loading.

Settings may be kept in JSON, TOML or YAML files. A TOML or YAML file may
hold the settings at the root or under an ``html2anf`` table.
"""

import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict

import yaml

from html2anf.exceptions import ConfigFileError

SECTION_NAME = "html2anf"


def _load_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _load_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _load_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


_LOADERS: Dict[str, Callable[[Path], Any]] = {
    ".toml": _load_toml,
    ".json": _load_json,
    ".yaml": _load_yaml,
    ".yml": _load_yaml,
}


def load_settings_file(path: Path | str) -> Dict[str, Any]:
    """Load a settings mapping from a JSON, TOML or YAML file.

    Parameters
    ----------
    path : Path or str
        Path to the settings file

    Returns
    -------
    dict
        Raw settings values, suitable for ``Settings.from_mapping``

    Raises
    ------
    ConfigFileError
        If the file is missing, has an unsupported extension, cannot be
        parsed, or does not contain a mapping

    Examples
    --------
    >>> values = load_settings_file("html2anf.toml")
    >>> values.get("layout_columns")
    7

    """
    path = Path(path)

    if not path.is_file():
        raise ConfigFileError(f"Settings file does not exist: {path}", file_path=str(path))

    loader = _LOADERS.get(path.suffix.lower())
    if loader is None:
        raise ConfigFileError(
            f"Unsupported settings file format: {path.suffix}. Use .json, .toml, or .yaml", file_path=str(path)
        )

    try:
        data = loader(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        # tomllib.TOMLDecodeError and json.JSONDecodeError are ValueErrors
        raise ConfigFileError(f"Error reading settings file {path}: {e}", file_path=str(path), original_error=e) from e

    if isinstance(data, dict) and isinstance(data.get(SECTION_NAME), dict):
        data = data[SECTION_NAME]

    if not isinstance(data, dict):
        raise ConfigFileError(
            f"Settings file must contain a mapping, got {type(data).__name__}", file_path=str(path)
        )

    return data


def parse_setting_overrides(pairs: list[str]) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` strings from the command line.

    Raises
    ------
    ConfigFileError
        If an item has no ``=``

    """
    overrides: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigFileError(f"Invalid setting override '{pair}', expected KEY=VALUE")
        overrides[key.strip()] = value.strip()
    return overrides


__all__ = ["load_settings_file", "parse_setting_overrides"]
