#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/api.py
"""Public conversion functions.

:func:`build_component` turns one parsed node into a fragment.
:func:`convert_html` walks a whole HTML fragment, such as a post body, and
collects the fragments, the layouts they reference and the resources to
bundle. Placing the fragments into a complete article is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator

from bs4 import BeautifulSoup, Tag

from html2anf.constants import ErrorPolicy
from html2anf.context import ConversionContext
from html2anf.exceptions import BuildError, ValidationError
from html2anf.logging_utils import collect_warnings
from html2anf.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Fragments produced from one HTML document.

    Parameters
    ----------
    components : list
        Component fragments in document order
    layouts : dict
        Resolved layouts keyed by the names the fragments reference
    bundles : dict
        Resources to ship with the article, filename to source URL
    skipped : int
        Number of nodes dropped because their build failed
    warnings : list of str
        Warning messages logged while converting

    """

    components: list[Any] = field(default_factory=list)
    layouts: dict[str, Any] = field(default_factory=dict)
    bundles: dict[str, str] = field(default_factory=dict)
    skipped: int = 0
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "components": self.components,
            "componentLayouts": self.layouts,
            "bundles": self.bundles,
        }


def build_component(node: Tag, context: ConversionContext) -> Any | None:
    """Build the fragment for a node, or return None if no component claims it.

    Raises
    ------
    BuildError
        If the matched component cannot build the node

    """
    component_type = context.matcher.match(node, context)
    if component_type is None:
        return None
    return component_type(context).build(node)


def _iter_candidates(root: Tag, context: ConversionContext) -> Iterator[tuple[Tag, type]]:
    for child in root.children:
        if not isinstance(child, Tag):
            continue
        component_type = context.matcher.match(child, context)
        if component_type is not None:
            yield child, component_type
        else:
            yield from _iter_candidates(child, context)


def convert_html(
    html: str,
    settings: Settings | None = None,
    *,
    context: ConversionContext | None = None,
    errors: ErrorPolicy = "raise",
) -> ConversionResult:
    """Convert an HTML fragment into component fragments.

    Elements are visited in document order. An element claimed by a
    component is built as a whole; an unclaimed element is searched for
    claimable descendants.

    Parameters
    ----------
    html : str
        HTML markup, e.g. a post body
    settings : Settings, optional
        Settings for a new context; ignored when ``context`` is given
    context : ConversionContext, optional
        Context to build into; a fresh one is created by default
    errors : {"raise", "skip"}, default "raise"
        Whether a failing node aborts the conversion or is logged and skipped

    Returns
    -------
    ConversionResult
        Fragments, layouts and bundles, plus any warnings logged on the way

    Raises
    ------
    BuildError
        If a node fails to build and ``errors`` is "raise"

    """
    if errors not in ("raise", "skip"):
        raise ValidationError(f"errors must be 'raise' or 'skip', got {errors!r}", "errors", errors)

    if context is None:
        context = ConversionContext.create(settings)

    soup = BeautifulSoup(html, "html.parser")
    root = soup.body or soup

    result = ConversionResult()
    with collect_warnings() as collected:
        for node, component_type in _iter_candidates(root, context):
            try:
                result.components.append(component_type(context).build(node))
            except BuildError as e:
                if errors == "raise":
                    raise
                result.skipped += 1
                logger.warning(f"Skipping <{node.name}> node: {e}")

    result.warnings = collected.messages
    result.layouts = context.layouts.as_dict()
    result.bundles = dict(context.bundles)
    logger.info(f"Converted {len(result.components)} components ({result.skipped} skipped)")
    return result


__all__ = ["ConversionResult", "build_component", "convert_html"]
