#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/stores.py
"""Storage and localization collaborators.

Settings and themes are kept as opaque records in a key-value store owned
by the host application. This module defines the protocol the library
expects, an in-memory implementation, and a theme index built on top of it.
"""

from __future__ import annotations

import gettext
import json
import logging
import re
from typing import Any, Mapping, Protocol, runtime_checkable

from html2anf.constants import (
    MAX_THEME_NAME_LENGTH,
    SETTINGS_OPTION_NAME,
    THEME_ACTIVE_KEY,
    THEME_INDEX_KEY,
    THEME_KEY_PREFIX,
    THEME_NAME_FIELD,
    THEME_SETTING_KEYS,
)
from html2anf.exceptions import SettingsError, ThemeError
from html2anf.settings import Settings

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Persistent key-value storage for settings and theme records."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> bool: ...

    def delete(self, key: str) -> bool: ...


@runtime_checkable
class Localizer(Protocol):
    """String lookup used for human-readable labels."""

    def gettext(self, message: str) -> str: ...


def default_localizer() -> Localizer:
    """Return an identity localizer."""
    return gettext.NullTranslations()


class InMemoryStore:
    """Dict-backed :class:`KeyValueStore`."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> bool:
        self._data[key] = value
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


class ThemeStore:
    """Named themes kept in a key-value store.

    Each theme is a mapping of formatting settings stored under its own key.
    An index record lists the installed theme names and a separate record
    names the active theme. Activating a theme also copies its formatting
    values into the settings record.

    Parameters
    ----------
    store : KeyValueStore
        Underlying storage
    option_name : str
        Key of the settings record that activation writes to

    """

    def __init__(self, store: KeyValueStore, option_name: str = SETTINGS_OPTION_NAME) -> None:
        self.store = store
        self.option_name = option_name

    @staticmethod
    def theme_key(name: str) -> str:
        """Return the storage key for a theme name.

        Names that differ only in case or punctuation share a key; see
        :meth:`save_theme`.
        """
        slug = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")
        return f"{THEME_KEY_PREFIX}{slug}"

    def list_themes(self) -> list[str]:
        index = self.store.get(THEME_INDEX_KEY, [])
        return list(index) if isinstance(index, list) else []

    def _key_holders(self, name: str, index: list[str]) -> list[str]:
        key = self.theme_key(name)
        return [other for other in index if other != name and self.theme_key(other) == key]

    def get_theme(self, name: str) -> dict[str, Any]:
        """Return a theme's settings.

        Raises
        ------
        ThemeError
            If the theme is not installed

        """
        if name not in self.list_themes():
            raise ThemeError(f"Theme '{name}' does not exist", theme_name=name)
        return dict(self.store.get(self.theme_key(name), {}))

    def save_theme(self, name: str, values: Mapping[str, Any]) -> None:
        """Create or overwrite a theme.

        The theme record is written before the index. If the index cannot be
        written the theme record is removed again.

        Raises
        ------
        ThemeError
            If the name is invalid, its storage key already belongs to another
            theme, or either write fails

        """
        name = name.strip()
        if not name:
            raise ThemeError("Theme name must not be empty")
        if len(name) > MAX_THEME_NAME_LENGTH:
            raise ThemeError(f"Theme names must be {MAX_THEME_NAME_LENGTH} characters or less", theme_name=name)

        index = self.list_themes()
        holders = self._key_holders(name, index)
        if holders:
            raise ThemeError(f"Theme name '{name}' is too similar to existing theme '{holders[0]}'", theme_name=name)

        key = self.theme_key(name)
        if not self.store.set(key, dict(values)):
            raise ThemeError(f"There was an error saving the theme {name}", theme_name=name)

        if name not in index:
            index.append(name)
            if not self.store.set(THEME_INDEX_KEY, index):
                self.store.delete(key)
                raise ThemeError(f"There was an error saving the theme index for {name}", theme_name=name)

        logger.info(f"Saved theme '{name}'")

    def create_from_settings(self, name: str, settings: Settings) -> None:
        """Save the formatting values of ``settings`` as a new theme."""
        self.save_theme(name, {key: settings.get(key) for key in THEME_SETTING_KEYS})

    def import_theme(self, data: Any) -> str:
        """Validate and save a theme from exported data.

        ``data`` must carry ``theme_name`` and a value for every formatting
        setting, and nothing else. Values are validated as settings before the
        theme is saved.

        Parameters
        ----------
        data : Mapping
            Decoded theme file, as produced by :meth:`export_theme`

        Returns
        -------
        str
            Name of the imported theme

        Raises
        ------
        ThemeError
            If the data is invalid or the theme cannot be saved

        """
        if not isinstance(data, Mapping):
            raise ThemeError("The theme file must contain a mapping")

        values = dict(data)
        name = values.pop(THEME_NAME_FIELD, None)
        if not isinstance(name, str) or not name.strip():
            raise ThemeError("The theme file did not include a name")

        for key in THEME_SETTING_KEYS:
            if values.get(key) is None:
                raise ThemeError(f"The theme was missing the required setting {key}", theme_name=name)

        unknown = sorted(set(values) - set(THEME_SETTING_KEYS))
        if unknown:
            raise ThemeError(f"The theme file contained invalid options: {', '.join(unknown)}", theme_name=name)

        try:
            settings = Settings.from_mapping(values)
        except SettingsError as e:
            raise ThemeError(f"The theme file has an invalid value: {e}", theme_name=name, original_error=e) from e

        self.create_from_settings(name, settings)
        return name.strip()

    def export_theme(self, name: str, indent: int | None = 2) -> str:
        """Return a theme as JSON, with its name under ``theme_name``.

        Raises
        ------
        ThemeError
            If the theme is not installed or has no values

        """
        theme = self.get_theme(name)
        if not theme:
            raise ThemeError(f"The theme {name} could not be found", theme_name=name)
        theme[THEME_NAME_FIELD] = name
        return json.dumps(theme, indent=indent, ensure_ascii=False)

    def delete_theme(self, name: str) -> None:
        """Remove a theme; the active theme cannot be deleted."""
        index = self.list_themes()
        if name not in index:
            raise ThemeError(f"Theme '{name}' does not exist", theme_name=name)
        if self.get_active() == name:
            raise ThemeError(f"Theme '{name}' is active and cannot be deleted", theme_name=name)

        holders = self._key_holders(name, index)
        index.remove(name)
        self.store.set(THEME_INDEX_KEY, index)
        if holders:
            logger.warning(f"Theme '{name}' shares its record with '{holders[0]}'; keeping the record")
        else:
            self.store.delete(self.theme_key(name))
        logger.info(f"Deleted theme '{name}'")

    def set_active(self, name: str) -> None:
        """Make a theme active and copy its formatting values into the settings record.

        Raises
        ------
        ThemeError
            If the theme is not installed or has no values, or the settings
            record cannot be written

        """
        theme = self.get_theme(name)
        if not theme:
            raise ThemeError(f"There was an error loading settings for the theme {name}", theme_name=name)

        record = self.store.get(self.option_name) or {}
        if not isinstance(record, Mapping):
            raise ThemeError(f"Settings record '{self.option_name}' is not a mapping", theme_name=name)
        record = dict(record)
        record.update({key: theme[key] for key in THEME_SETTING_KEYS if key in theme})
        if not self.store.set(self.option_name, record):
            raise ThemeError(f"There was an error saving settings for the theme {name}", theme_name=name)

        self.store.set(THEME_ACTIVE_KEY, name)
        logger.info(f"Switched to theme '{name}'")

    def get_active(self) -> str | None:
        active = self.store.get(THEME_ACTIVE_KEY)
        return active if active in self.list_themes() else None


__all__ = ["KeyValueStore", "Localizer", "InMemoryStore", "ThemeStore", "default_localizer"]
