#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/settings.py
"""Typed settings consumed by components during a build.

Every key a component may read is a field of :class:`Settings`, so missing
or malformed configuration is rejected when the settings object is created
rather than in the middle of a conversion.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from html2anf.constants import (
    DEFAULT_BODY_ORIENTATION,
    DEFAULT_CAPTION_COLOR,
    DEFAULT_CAPTION_FONT,
    DEFAULT_CAPTION_LINE_HEIGHT,
    DEFAULT_CAPTION_SIZE,
    DEFAULT_CAPTION_TRACKING,
    DEFAULT_FULL_BLEED_IMAGES,
    DEFAULT_LAYOUT_COLUMNS,
    DEFAULT_USE_REMOTE_IMAGES,
    MIN_LAYOUT_COLUMNS,
    SETTINGS_OPTION_NAME,
    THEME_SETTING_KEYS,
)
from html2anf.exceptions import SettingsError, UnknownSettingError

if TYPE_CHECKING:
    from html2anf.stores import KeyValueStore, ThemeStore

logger = logging.getLogger(__name__)

_INT_FIELDS = ("layout_columns", "caption_size", "caption_tracking", "caption_line_height")
_NON_NEGATIVE_FIELDS = ("caption_size", "caption_line_height")
_BODY_ORIENTATIONS = ("left", "right", "center")


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class Settings(CloneFrozenMixin):
    """Configuration values read by components.

    Parameters
    ----------
    layout_columns : int, default 7
        Number of columns in the article layout; must be at least 4
    full_bleed_images : str, default "no"
        "yes" to let non-anchored images ignore the document margin
    use_remote_images : str, default "no"
        "yes" to reference images by URL instead of bundling them
    caption_font : str
        Caption font name
    caption_size : int
        Caption font size in points
    caption_tracking : int
        Caption tracking in percent; emitted as a fraction
    caption_line_height : int
        Caption line height in points
    caption_color : str
        Caption text color
    body_orientation : str, default "left"
        Body column orientation: "left", "right" or "center"

    """

    layout_columns: int = field(
        default=DEFAULT_LAYOUT_COLUMNS,
        metadata={"help": "Number of layout columns (at least 4)", "type": int},
    )
    full_bleed_images: str = field(
        default=DEFAULT_FULL_BLEED_IMAGES,
        metadata={"help": "Use full bleed images for non-anchored images ('yes'/'no')"},
    )
    use_remote_images: str = field(
        default=DEFAULT_USE_REMOTE_IMAGES,
        metadata={"help": "Reference remote image URLs instead of bundling ('yes'/'no')"},
    )
    caption_font: str = field(default=DEFAULT_CAPTION_FONT, metadata={"help": "Caption font name"})
    caption_size: int = field(default=DEFAULT_CAPTION_SIZE, metadata={"help": "Caption font size", "type": int})
    caption_tracking: int = field(
        default=DEFAULT_CAPTION_TRACKING,
        metadata={"help": "Caption tracking in percent", "type": int},
    )
    caption_line_height: int = field(
        default=DEFAULT_CAPTION_LINE_HEIGHT,
        metadata={"help": "Caption line height", "type": int},
    )
    caption_color: str = field(default=DEFAULT_CAPTION_COLOR, metadata={"help": "Caption text color"})
    body_orientation: str = field(
        default=DEFAULT_BODY_ORIENTATION,
        metadata={"help": "Body orientation ('left', 'right' or 'center')"},
    )

    def __post_init__(self) -> None:
        """Validate field types and ranges.

        Raises
        ------
        SettingsError
            If any field value is invalid

        """
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise SettingsError(
                    f"{name} must be an integer, got {value!r}", parameter_name=name, parameter_value=value
                )
        for name in _NON_NEGATIVE_FIELDS:
            if getattr(self, name) < 0:
                raise SettingsError(f"{name} must not be negative", parameter_name=name, parameter_value=getattr(self, name))

        if self.layout_columns < MIN_LAYOUT_COLUMNS:
            raise SettingsError(
                f"layout_columns must be at least {MIN_LAYOUT_COLUMNS}, got {self.layout_columns}",
                parameter_name="layout_columns",
                parameter_value=self.layout_columns,
            )
        if self.body_orientation not in _BODY_ORIENTATIONS:
            raise SettingsError(
                f"body_orientation must be one of {', '.join(_BODY_ORIENTATIONS)}, got {self.body_orientation!r}",
                parameter_name="body_orientation",
                parameter_value=self.body_orientation,
            )

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        """Return every settings key, in declaration order."""
        return tuple(f.name for f in fields(cls))

    def get(self, key: str) -> Any:
        """Return the value of a setting.

        Raises
        ------
        UnknownSettingError
            If ``key`` is not a settings field

        """
        if key not in self.keys():
            raise UnknownSettingError(key)
        return getattr(self, key)

    def is_enabled(self, key: str) -> bool:
        """Return True when a yes/no setting is ``"yes"``."""
        return self.get(key) == "yes"

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, key) for key in self.keys()}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], strict: bool = True) -> Settings:
        """Create settings from a plain mapping, such as a stored record.

        Integer fields given as numeric strings are converted. Values that are
        None or empty strings fall back to the default.

        Parameters
        ----------
        mapping : Mapping[str, Any]
            Raw settings values
        strict : bool, default True
            If True, unknown keys raise UnknownSettingError; otherwise they are
            dropped with a warning

        """
        known = cls.keys()
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            if key not in known:
                if strict:
                    raise UnknownSettingError(key)
                logger.warning(f"Ignoring unknown setting '{key}'")
                continue
            if value is None or value == "":
                continue
            kwargs[key] = _coerce(key, value)
        return cls(**kwargs)


def _coerce(key: str, value: Any) -> Any:
    if key in _INT_FIELDS and isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise SettingsError(
                f"{key} must be an integer, got {value!r}", parameter_name=key, parameter_value=value, original_error=e
            ) from e
    if key not in _INT_FIELDS and isinstance(value, bool):
        # yes/no toggles stored as booleans
        return "yes" if value else "no"
    return value


def load_settings(
    store: KeyValueStore,
    themes: ThemeStore | None = None,
    option_name: str = SETTINGS_OPTION_NAME,
) -> Settings:
    """Load settings from a key-value store, merged with defaults.

    The record stored under ``option_name`` is a mapping of settings keys.
    Empty values fall back to the defaults and unknown keys are dropped. When
    ``themes`` has an active theme, its formatting values take precedence over
    the stored record.

    Parameters
    ----------
    store : KeyValueStore
        Store holding the settings record
    themes : ThemeStore, optional
        Theme store whose active theme overrides formatting keys
    option_name : str
        Key of the settings record

    Returns
    -------
    Settings
        Validated settings

    """
    record = store.get(option_name) or {}
    if not isinstance(record, Mapping):
        raise SettingsError(f"Settings record '{option_name}' is not a mapping", parameter_name=option_name)

    merged: dict[str, Any] = dict(record)
    if themes is not None:
        active = themes.get_active()
        if active is not None:
            theme = themes.get_theme(active)
            for key in THEME_SETTING_KEYS:
                if theme.get(key) not in (None, ""):
                    merged[key] = theme[key]
            logger.debug(f"Applied theme '{active}' to settings")

    return Settings.from_mapping(merged, strict=False)


__all__ = ["CloneFrozenMixin", "Settings", "load_settings"]
