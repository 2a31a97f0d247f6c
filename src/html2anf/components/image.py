#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/components/image.py
"""Image component.

Claims ``<img>`` and ``<figure>`` nodes whose source exists. An image with a
``<figcaption>`` is emitted as a container grouping a photo and a caption;
an image without one is emitted as a bare photo. Images aligned left or
right share the ``anchored-image`` layout, all others the
``full-width-image`` layout.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from html2anf.components.base import AnchorPosition, Component, find_source, get_filename
from html2anf.constants import (
    FILTER_BUILD_IMAGE_SRC,
    LAYOUT_ANCHORED_IMAGE,
    LAYOUT_FULL_WIDTH_IMAGE,
    SPEC_ANCHORED_IMAGE,
    SPEC_JSON_WITH_CAPTION,
    SPEC_JSON_WITHOUT_CAPTION,
    SPEC_NON_ANCHORED_FULL_BLEED_IMAGE,
    SPEC_NON_ANCHORED_IMAGE,
    TextAlignment,
)
from html2anf.exceptions import ExtractionError
from html2anf.templates import Placeholder, PlaceholderMap, SpecRegistry

if TYPE_CHECKING:
    from bs4 import Tag

    from html2anf.context import ConversionContext
    from html2anf.stores import Localizer

logger = logging.getLogger(__name__)

_ALIGN_LEFT_CLASS = re.compile(r'class="[^"]*alignleft[^"]*"', re.IGNORECASE)
_ALIGN_RIGHT_CLASS = re.compile(r'class="[^"]*alignright[^"]*"', re.IGNORECASE)
_CAPTION = re.compile(r"<figcaption.*?>(.*?)</figcaption>", re.IGNORECASE | re.DOTALL)

_LAYOUT_MARGIN = {"bottom": 25, "top": 25}


class Image(Component):
    """A photo, optionally grouped with its caption."""

    name = "image"

    @classmethod
    def node_matches(cls, node: Tag, context: ConversionContext) -> bool:
        return node.name in ("img", "figure") and cls.remote_file_exists(node, context)

    @classmethod
    def register_specs(cls, specs: SpecRegistry, localizer: Localizer) -> None:
        _ = localizer.gettext

        specs.register(
            cls.name,
            SPEC_JSON_WITHOUT_CAPTION,
            _("JSON without caption"),
            {
                "role": "photo",
                "URL": Placeholder("url"),
                "layout": Placeholder("layout"),
            },
        )

        specs.register(
            cls.name,
            SPEC_JSON_WITH_CAPTION,
            _("JSON with caption"),
            {
                "role": "container",
                "components": [
                    {
                        "role": "photo",
                        "URL": Placeholder("url"),
                        "layout": Placeholder("layout"),
                        "caption": Placeholder("caption"),
                    },
                    {
                        "role": "caption",
                        "text": Placeholder("caption"),
                        "textStyle": {
                            "textAlignment": Placeholder("text_alignment"),
                            "fontName": Placeholder("caption_font"),
                            "fontSize": Placeholder("caption_size"),
                            "tracking": Placeholder("caption_tracking"),
                            "lineHeight": Placeholder("caption_line_height"),
                            "textColor": Placeholder("caption_color"),
                        },
                        "layout": {
                            "margin": {"top": 20},
                            "ignoreDocumentMargin": Placeholder("full_bleed_images"),
                        },
                    },
                ],
                "layout": {
                    "ignoreDocumentMargin": Placeholder("full_bleed_images"),
                },
            },
        )

        specs.register(
            cls.name,
            SPEC_ANCHORED_IMAGE,
            _("Anchored Layout"),
            {"margin": dict(_LAYOUT_MARGIN)},
        )

        specs.register(
            cls.name,
            SPEC_NON_ANCHORED_IMAGE,
            _("Non Anchored Layout"),
            {
                "margin": dict(_LAYOUT_MARGIN),
                "columnSpan": Placeholder("layout_columns_minus_4"),
                "columnStart": 2,
            },
        )

        specs.register(
            cls.name,
            SPEC_NON_ANCHORED_FULL_BLEED_IMAGE,
            _("Non Anchored with Full Bleed Images Layout"),
            {
                "margin": dict(_LAYOUT_MARGIN),
                "ignoreDocumentMargin": True,
            },
        )

    def _build(self, text: str) -> None:
        source = find_source(text)
        if source is None:
            raise ExtractionError(self.name, "src attribute", text)

        url = self.context.filters.apply_filters(FILTER_BUILD_IMAGE_SRC, source.strip(), text)
        filename = get_filename(url)

        values: PlaceholderMap = {"url": self.maybe_bundle_source(url, filename)}

        self.anchor_position = self._find_anchor_position(text)

        caption_match = _CAPTION.search(text)
        if caption_match:
            values = self._group_component(caption_match.group(1).strip(), values)
            spec_name = SPEC_JSON_WITH_CAPTION
        else:
            spec_name = SPEC_JSON_WITHOUT_CAPTION

        # Grouped captions rule out component-level layouts, so the layout
        # travels as a placeholder value.
        if self.anchor_position is AnchorPosition.NONE:
            values = self._register_non_anchor_layout(values)
        else:
            values = self._register_anchor_layout(values)

        self.register_json(spec_name, values)

    @staticmethod
    def _find_anchor_position(text: str) -> AnchorPosition:
        lowered = text.lower()
        if 'align="left"' in lowered or _ALIGN_LEFT_CLASS.search(text):
            return AnchorPosition.LEFT
        if 'align="right"' in lowered or _ALIGN_RIGHT_CLASS.search(text):
            return AnchorPosition.RIGHT
        return AnchorPosition.NONE

    def _register_anchor_layout(self, values: PlaceholderMap) -> PlaceholderMap:
        values["layout"] = self.register_layout(LAYOUT_ANCHORED_IMAGE, SPEC_ANCHORED_IMAGE)
        return values

    def _register_non_anchor_layout(self, values: PlaceholderMap) -> PlaceholderMap:
        layout_values: PlaceholderMap = {}

        if self.context.settings.is_enabled("full_bleed_images"):
            spec_name = SPEC_NON_ANCHORED_FULL_BLEED_IMAGE
        else:
            layout_values["layout_columns_minus_4"] = self.get_setting("layout_columns") - 4
            spec_name = SPEC_NON_ANCHORED_IMAGE

        values["layout"] = self.register_layout(LAYOUT_FULL_WIDTH_IMAGE, spec_name, layout_values)
        return values

    def find_caption_alignment(self) -> TextAlignment:
        """Return the caption text alignment for the current anchor position."""
        if self.anchor_position is AnchorPosition.NONE:
            return "center"
        if self.anchor_position is AnchorPosition.LEFT:
            return "left"
        if self.anchor_position is AnchorPosition.AUTO and self.get_setting("body_orientation") == "left":
            return "right"
        return "left"

    def _group_component(self, caption: str, values: PlaceholderMap) -> PlaceholderMap:
        """Add the caption and its styling to the values of a container fragment."""
        grouped: dict[str, Any] = {
            **values,
            "caption": caption,
            "text_alignment": self.find_caption_alignment(),
            "caption_font": self.get_setting("caption_font"),
            "caption_size": int(self.get_setting("caption_size")),
            "caption_tracking": int(self.get_setting("caption_tracking")) / 100,
            "caption_line_height": int(self.get_setting("caption_line_height")),
            "caption_color": self.get_setting("caption_color"),
            "full_bleed_images": self.context.settings.is_enabled("full_bleed_images"),
        }
        return grouped


__all__ = ["Image"]
