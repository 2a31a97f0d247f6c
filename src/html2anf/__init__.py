#  Copyright (c) 2025 Tom Villani, Ph.D.
"""html2anf - build structured article JSON from HTML post content.

Markup nodes are matched to components (image, ...) which fill template
specs with values taken from the markup and from settings. Layouts the
fragments reference are registered once per document and referenced by name.

Examples
--------
    >>> from html2anf import convert_html, Settings
    >>> result = convert_html('<p><img src="https://example.com/a.jpg" class="alignleft"></p>')
    >>> result.layouts
    {'anchored-image': {'margin': {'bottom': 25, 'top': 25}}}

"""

from html2anf.api import ConversionResult, build_component, convert_html
from html2anf.components import AnchorPosition, Component, Image
from html2anf.context import ConversionContext
from html2anf.exceptions import (
    BuildError,
    ExtractionError,
    Html2AnfError,
    SettingsError,
    UnknownPlaceholderError,
    UnknownSettingError,
    UnknownSpecError,
)
from html2anf.hooks import FilterManager
from html2anf.layouts import LayoutRegistration, LayoutRegistry
from html2anf.matcher import NodeMatcher
from html2anf.settings import Settings, load_settings
from html2anf.stores import InMemoryStore, ThemeStore
from html2anf.templates import Literal, Placeholder, SpecRegistry, TemplateSpec, substitute

__version__ = "0.1.0"

__all__ = [
    "AnchorPosition",
    "BuildError",
    "Component",
    "ConversionContext",
    "ConversionResult",
    "ExtractionError",
    "FilterManager",
    "Html2AnfError",
    "Image",
    "InMemoryStore",
    "LayoutRegistration",
    "LayoutRegistry",
    "Literal",
    "NodeMatcher",
    "Placeholder",
    "Settings",
    "SettingsError",
    "SpecRegistry",
    "TemplateSpec",
    "ThemeStore",
    "UnknownPlaceholderError",
    "UnknownSettingError",
    "UnknownSpecError",
    "build_component",
    "convert_html",
    "load_settings",
    "substitute",
]
