#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for html2anf.

Constants are organized by category:
1. Type Definitions
2. Settings Defaults
3. Spec and Layout Names
4. Network and Environment
5. CLI Exit Codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

YesNo = Literal["yes", "no"]
BodyOrientation = Literal["left", "right", "center"]
TextAlignment = Literal["left", "center", "right"]
ErrorPolicy = Literal["raise", "skip"]

# =============================================================================
# Settings Defaults
# =============================================================================

DEFAULT_LAYOUT_COLUMNS = 7
MIN_LAYOUT_COLUMNS = 4

DEFAULT_CAPTION_FONT = "AvenirNext-Italic"
DEFAULT_CAPTION_SIZE = 16
DEFAULT_CAPTION_TRACKING = 0
DEFAULT_CAPTION_LINE_HEIGHT = 24
DEFAULT_CAPTION_COLOR = "#4f4f4f"

DEFAULT_BODY_ORIENTATION: BodyOrientation = "left"
DEFAULT_FULL_BLEED_IMAGES = "no"
DEFAULT_USE_REMOTE_IMAGES = "no"

# Keys an active theme may override
THEME_SETTING_KEYS = (
    "layout_columns",
    "caption_font",
    "caption_size",
    "caption_tracking",
    "caption_line_height",
    "caption_color",
    "body_orientation",
    "full_bleed_images",
)

# Storage keys used by the settings and theme stores
SETTINGS_OPTION_NAME = "html2anf_settings"
THEME_INDEX_KEY = "html2anf_installed_themes"
THEME_ACTIVE_KEY = "html2anf_active_theme"
THEME_KEY_PREFIX = "html2anf_theme_"
MAX_THEME_NAME_LENGTH = 45
THEME_NAME_FIELD = "theme_name"

# =============================================================================
# Spec and Layout Names
# =============================================================================

SPEC_JSON_WITHOUT_CAPTION = "json-without-caption"
SPEC_JSON_WITH_CAPTION = "json-with-caption"
SPEC_ANCHORED_IMAGE = "anchored-image"
SPEC_NON_ANCHORED_IMAGE = "non-anchored-image"
SPEC_NON_ANCHORED_FULL_BLEED_IMAGE = "non-anchored-full-bleed-image"

LAYOUT_FULL_WIDTH_IMAGE = "full-width-image"
LAYOUT_ANCHORED_IMAGE = "anchored-image"

BUNDLE_SCHEME = "bundle://"

FILTER_BUILD_IMAGE_SRC = "build_image_src"

# =============================================================================
# Network and Environment
# =============================================================================

DEFAULT_USER_AGENT = "html2anf-probe/1.0"
DEFAULT_PROBE_TIMEOUT = 10.0
ENV_DISABLE_NETWORK = "HTML2ANF_DISABLE_NETWORK"
ENV_USER_AGENT = "HTML2ANF_USER_AGENT"

# =============================================================================
# CLI Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3
EXIT_BUILD_ERROR = 4
