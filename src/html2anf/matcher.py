#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/matcher.py
"""First-match-wins dispatch of markup nodes to component types.

The dispatch table is a flat, ordered list of ``(predicate, component)``
pairs. Reordering the list changes priority; no inheritance is involved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable

from html2anf.components import Component, Image

if TYPE_CHECKING:
    from bs4 import Tag

    from html2anf.context import ConversionContext

logger = logging.getLogger(__name__)

NodePredicate = Callable[["Tag", "ConversionContext"], bool]
MatcherEntry = tuple[NodePredicate, type[Component]]


def default_matchers() -> list[MatcherEntry]:
    """Return the built-in dispatch table, highest priority first."""
    return [
        (Image.node_matches, Image),
    ]


class NodeMatcher:
    """Select the component type that claims a node.

    Parameters
    ----------
    entries : iterable of (predicate, component type), optional
        Dispatch table in priority order; defaults to :func:`default_matchers`

    """

    def __init__(self, entries: Iterable[MatcherEntry] | None = None) -> None:
        self.entries: list[MatcherEntry] = list(entries) if entries is not None else default_matchers()

    @property
    def component_types(self) -> list[type[Component]]:
        """Distinct component types in table order."""
        seen: list[type[Component]] = []
        for _predicate, component in self.entries:
            if component not in seen:
                seen.append(component)
        return seen

    def match(self, node: Tag, context: ConversionContext) -> type[Component] | None:
        """Return the first component type whose predicate accepts ``node``."""
        for predicate, component in self.entries:
            if predicate(node, context):
                logger.debug(f"<{node.name}> matched component '{component.name}'")
                return component
        return None


__all__ = ["MatcherEntry", "NodeMatcher", "NodePredicate", "default_matchers"]
