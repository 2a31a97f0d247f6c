#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/context.py
"""Per-document conversion context.

All mutable state of a conversion (spec and layout registries, bundled
resources) lives on a :class:`ConversionContext`. Create one context per
document; contexts must not be shared between concurrent conversions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from html2anf.hooks import FilterManager
from html2anf.layouts import LayoutRegistry
from html2anf.matcher import MatcherEntry, NodeMatcher
from html2anf.network import ResourceProbe, remote_file_exists
from html2anf.settings import Settings
from html2anf.stores import Localizer, default_localizer
from html2anf.templates import SpecRegistry

logger = logging.getLogger(__name__)


@dataclass
class ConversionContext:
    """State shared by every component build of one document.

    Parameters
    ----------
    settings : Settings
        Validated settings
    specs : SpecRegistry
        Template specs of every component type in ``matcher``
    layouts : LayoutRegistry
        Layouts registered during this conversion
    matcher : NodeMatcher
        Node to component dispatch table
    filters : FilterManager
        Value filters applied during builds
    probe : ResourceProbe
        Resource existence check used by node predicates
    localizer : Localizer
        Label lookup
    bundles : dict[str, str]
        Bundled resources, filename to source URL

    """

    settings: Settings
    specs: SpecRegistry
    layouts: LayoutRegistry
    matcher: NodeMatcher
    filters: FilterManager
    probe: ResourceProbe
    localizer: Localizer
    bundles: dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        *,
        matchers: Iterable[MatcherEntry] | None = None,
        filters: FilterManager | None = None,
        probe: ResourceProbe | None = None,
        localizer: Localizer | None = None,
    ) -> ConversionContext:
        """Create a context with fresh registries.

        Every component type in the dispatch table registers its specs once.
        """
        localizer = localizer or default_localizer()
        matcher = NodeMatcher(matchers)
        specs = SpecRegistry()
        for component in matcher.component_types:
            component.register_specs(specs, localizer)
        logger.debug(f"Registered {len(specs)} specs for {len(matcher.component_types)} component types")

        return cls(
            settings=settings or Settings(),
            specs=specs,
            layouts=LayoutRegistry(specs),
            matcher=matcher,
            filters=filters or FilterManager(),
            probe=probe or remote_file_exists,
            localizer=localizer,
        )

    def bundle_source(self, filename: str, url: str) -> None:
        """Record a resource to ship with the article; the first URL for a filename wins."""
        existing = self.bundles.setdefault(filename, url)
        if existing != url:
            logger.warning(f"Bundle filename '{filename}' already used for {existing}; ignoring {url}")


__all__ = ["ConversionContext"]
