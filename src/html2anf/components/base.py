#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/components/base.py
"""Base class for article components.

A component recognizes one class of markup nodes and turns a node into a
single JSON fragment. Subclasses register their template specs once per
conversion context, then each :meth:`Component.build` call:

1. inspects the node markup and collects placeholder values,
2. prepares any layouts the fragment references,
3. substitutes the values into the selected spec.

Layouts and bundled resources collected during a build are committed to
the context only after the fragment substituted cleanly, so a failed build
leaves every registry untouched.
"""

from __future__ import annotations

import html
import logging
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar
from urllib.parse import unquote, urlparse

from html2anf.constants import BUNDLE_SCHEME
from html2anf.layouts import LayoutRegistration
from html2anf.templates import PlaceholderMap, SpecRegistry, substitute

if TYPE_CHECKING:
    from bs4 import Tag

    from html2anf.context import ConversionContext
    from html2anf.stores import Localizer

logger = logging.getLogger(__name__)

_SRC_PATTERN = re.compile(r'src="([^"]*?)"', re.IGNORECASE)


class AnchorPosition(str, Enum):
    """Horizontal position of a component relative to the body text."""

    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    AUTO = "auto"


def get_filename(url: str) -> str:
    """Return the last path segment of a URL, without query string or fragment."""
    path = urlparse(url).path
    return unquote(path.rstrip("/").rsplit("/", 1)[-1])


def find_source(node_text: str) -> str | None:
    """Return the first ``src`` attribute value in a markup string, with entities decoded."""
    match = _SRC_PATTERN.search(node_text)
    return html.unescape(match.group(1)) if match else None


class Component(ABC):
    """Abstract base class for components.

    Parameters
    ----------
    context : ConversionContext
        The conversion session the component builds into

    Attributes
    ----------
    name : str
        Component type name; namespaces the component's specs
    anchor_position : AnchorPosition
        Anchor position determined during the last build
    spec_name : str or None
        Spec selected by the last build
    values : PlaceholderMap
        Placeholder values collected by the last build
    json : Any
        The fragment produced by the last build

    """

    name: ClassVar[str] = "component"

    def __init__(self, context: ConversionContext) -> None:
        self.context = context
        self.anchor_position = AnchorPosition.NONE
        self.spec_name: str | None = None
        self.values: PlaceholderMap = {}
        self.json: Any = None
        self._pending_layouts: list[LayoutRegistration] = []
        self._pending_bundles: dict[str, str] = {}

    @classmethod
    def node_matches(cls, node: Tag, context: ConversionContext) -> bool:
        """Return True if this component type claims ``node``."""
        return False

    @classmethod
    def register_specs(cls, specs: SpecRegistry, localizer: Localizer) -> None:
        """Register the component's template specs."""

    @classmethod
    def remote_file_exists(cls, node: Tag, context: ConversionContext) -> bool:
        """Probe the resource referenced by the node's (or its first descendant's) ``src``."""
        source = node.get("src") if node.name == "img" else None
        if not source:
            img = node.find("img", src=True)
            source = img.get("src") if img is not None else None
        if not source or not isinstance(source, str):
            return False
        return context.probe(source)

    def get_setting(self, key: str) -> Any:
        return self.context.settings.get(key)

    def build(self, node: Tag | str) -> Any:
        """Build the JSON fragment for a node.

        Parameters
        ----------
        node : Tag or str
            Parsed node or its markup

        Returns
        -------
        Any
            Fully substituted fragment

        Raises
        ------
        BuildError
            If the fragment cannot be produced

        """
        self.anchor_position = AnchorPosition.NONE
        self.spec_name = None
        self.values = {}
        self.json = None
        self._pending_layouts = []
        self._pending_bundles = {}

        self._build(node if isinstance(node, str) else str(node))
        return self.json

    @abstractmethod
    def _build(self, text: str) -> None:
        """Collect values from ``text`` and call :meth:`register_json`."""
        raise NotImplementedError

    def register_layout(self, name: str, spec_name: str, values: PlaceholderMap | None = None) -> str:
        """Prepare a layout resolved from one of this component's specs.

        The layout is stored when :meth:`register_json` succeeds.

        Returns
        -------
        str
            The layout name, for use as a placeholder value

        """
        registration = self.context.layouts.prepare(name, spec_name, values, component=self.name)
        self._pending_layouts.append(registration)
        return name

    def register_json(self, spec_name: str, values: PlaceholderMap) -> Any:
        """Substitute ``values`` into a spec, then commit pending layouts and bundles."""
        spec = self.context.specs.get(spec_name, self.name)
        fragment = substitute(spec.template, values, spec_name=spec.name)

        for registration in self._pending_layouts:
            self.context.layouts.commit(registration)
        for filename, url in self._pending_bundles.items():
            self.context.bundle_source(filename, url)
        self._pending_layouts = []
        self._pending_bundles = {}

        self.spec_name = spec_name
        self.values = values
        self.json = fragment
        logger.debug(f"Built {self.name} fragment from spec '{spec_name}'")
        return fragment

    def maybe_bundle_source(self, url: str, filename: str | None = None) -> str:
        """Return the URL to reference the resource by.

        Remote references are used as-is when ``use_remote_images`` is
        enabled. Otherwise the resource is queued for the bundle map, committed
        together with the fragment, and referenced through the bundle scheme.
        """
        if self.context.settings.is_enabled("use_remote_images"):
            return url

        filename = filename or get_filename(url)
        self._pending_bundles[filename] = url
        return f"{BUNDLE_SCHEME}{filename}"


__all__ = ["AnchorPosition", "Component", "find_source", "get_filename"]
