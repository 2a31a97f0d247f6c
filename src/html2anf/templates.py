#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/templates.py
"""Template specs and placeholder substitution.

A template is a JSON-shaped tree of dicts, lists and scalars. Slots to be
filled at build time are marked with :class:`Placeholder` nodes rather than
sentinel strings, so an ordinary string such as ``"#url#"`` is always treated
as literal text. :class:`Literal` wraps a value that must be emitted verbatim
without being walked.

Examples
--------
    >>> template = {"role": "photo", "URL": Placeholder("url")}
    >>> substitute(template, {"url": "bundle://a.jpg"})
    {'role': 'photo', 'URL': 'bundle://a.jpg'}

"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from html2anf.exceptions import SpecRegistrationError, UnknownPlaceholderError, UnknownSpecError

logger = logging.getLogger(__name__)

PlaceholderMap = dict[str, Any]


@dataclass(frozen=True)
class Placeholder:
    """A named slot in a template tree."""

    name: str

    def __str__(self) -> str:
        return f"#{self.name}#"


@dataclass(frozen=True)
class Literal:
    """A value emitted unchanged by :func:`substitute`, even if it contains placeholders."""

    value: Any


@dataclass(frozen=True)
class TemplateSpec:
    """A named, reusable template registered by a component type.

    Parameters
    ----------
    name : str
        Spec name, unique within its component
    label : str
        Human-readable (localized) label
    template : Any
        JSON-shaped template tree
    component : str
        Name of the owning component type

    """

    name: str
    label: str
    template: Any
    component: str = ""

    @property
    def placeholders(self) -> set[str]:
        """Names of every placeholder referenced by the template."""
        return find_placeholders(self.template)


def _walk_placeholders(template: Any) -> Iterator[str]:
    if isinstance(template, Placeholder):
        yield template.name
    elif isinstance(template, Mapping):
        for value in template.values():
            yield from _walk_placeholders(value)
    elif isinstance(template, (list, tuple)):
        for item in template:
            yield from _walk_placeholders(item)


def find_placeholders(template: Any) -> set[str]:
    """Return the set of placeholder names in a template tree."""
    return set(_walk_placeholders(template))


def substitute(template: Any, values: Mapping[str, Any], spec_name: str | None = None) -> Any:
    """Replace every placeholder in a template tree with its mapped value.

    Mapping keys pass through unchanged and mapping values recurse. Sequence
    elements recurse. A :class:`Placeholder` is replaced by its mapped value,
    which may itself be a nested structure; that value is inserted as-is and
    not walked again. A :class:`Literal` is emitted as a deep copy so the
    result never shares structure with the template. Every other scalar is
    copied unchanged.

    Parameters
    ----------
    template : Any
        Template tree to fill
    values : Mapping[str, Any]
        Placeholder name to substitution value
    spec_name : str, optional
        Spec name used in error messages

    Returns
    -------
    Any
        A new tree containing no placeholders

    Raises
    ------
    UnknownPlaceholderError
        If a placeholder has no entry in ``values``

    """
    if isinstance(template, Placeholder):
        if template.name not in values:
            raise UnknownPlaceholderError(template.name, spec_name)
        return values[template.name]
    if isinstance(template, Literal):
        return copy.deepcopy(template.value)
    if isinstance(template, Mapping):
        return {key: substitute(value, values, spec_name) for key, value in template.items()}
    if isinstance(template, (list, tuple)):
        return [substitute(item, values, spec_name) for item in template]
    return template


@dataclass
class SpecRegistry:
    """Store of template specs, namespaced per component type.

    Specs are registered once when a conversion context is created and are
    not modified afterwards. Registering the same name twice for a component
    is accepted only when the template is identical.
    """

    _specs: dict[str, dict[str, TemplateSpec]] = field(default_factory=dict)

    def register(self, component: str, name: str, label: str, template: Any) -> TemplateSpec:
        """Register a spec for a component.

        Raises
        ------
        SpecRegistrationError
            If ``name`` is already registered for ``component`` with a different template

        """
        scope = self._specs.setdefault(component, {})
        existing = scope.get(name)
        if existing is not None:
            if existing.template != template:
                raise SpecRegistrationError(f"Spec '{name}' already registered for '{component}' with another template")
            return existing

        spec = TemplateSpec(name=name, label=label, template=template, component=component)
        scope[name] = spec
        logger.debug(f"Registered spec {component}/{name}")
        return spec

    def get(self, name: str, component: str | None = None) -> TemplateSpec:
        """Look up a spec by name.

        When ``component`` is omitted, components are searched in
        registration order and the first spec with that name is returned.

        Raises
        ------
        UnknownSpecError
            If no matching spec is registered

        """
        if component is not None:
            spec = self._specs.get(component, {}).get(name)
            if spec is None:
                raise UnknownSpecError(name, component)
            return spec

        for scope in self._specs.values():
            if name in scope:
                return scope[name]
        raise UnknownSpecError(name)

    def has_spec(self, name: str, component: str | None = None) -> bool:
        if component is not None:
            return name in self._specs.get(component, {})
        return any(name in scope for scope in self._specs.values())

    def list_specs(self, component: str | None = None) -> list[TemplateSpec]:
        """Return registered specs, optionally limited to one component."""
        if component is not None:
            return list(self._specs.get(component, {}).values())
        return [spec for scope in self._specs.values() for spec in scope.values()]

    def __len__(self) -> int:
        return sum(len(scope) for scope in self._specs.values())


__all__ = [
    "Placeholder",
    "Literal",
    "PlaceholderMap",
    "TemplateSpec",
    "SpecRegistry",
    "find_placeholders",
    "substitute",
]
