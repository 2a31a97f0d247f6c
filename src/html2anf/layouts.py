#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/layouts.py
"""Layout registry for one document conversion.

Components do not embed layouts in their fragments. They register a named
layout, resolved from one of their template specs, and reference it by name
through the ``layout`` placeholder. Identical layouts shared by many
components are therefore stored once.

The first registration of a name wins. Later registrations under the same
name are no-ops, which keeps the output independent of build order. A later
registration whose resolved layout differs from the stored one is logged as
a warning.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from html2anf.templates import PlaceholderMap, SpecRegistry, substitute

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutRegistration:
    """A resolved, not yet committed, layout.

    Parameters
    ----------
    name : str
        Name the layout is referenced by
    source_spec_name : str
        Spec the layout was resolved from
    override_values : PlaceholderMap
        Values substituted into the source spec
    layout : Any
        The resolved layout object

    """

    name: str
    source_spec_name: str
    override_values: PlaceholderMap
    layout: Any


@dataclass
class LayoutRegistry:
    """Name to resolved layout mapping, owned by a single conversion context.

    Parameters
    ----------
    specs : SpecRegistry
        Registry the source specs are looked up in

    Notes
    -----
    Not safe for sharing between concurrent conversions. Create one registry
    per document through :class:`~html2anf.context.ConversionContext`.

    """

    specs: SpecRegistry
    _registrations: dict[str, LayoutRegistration] = field(default_factory=dict)

    def prepare(
        self,
        name: str,
        source_spec_name: str,
        overrides: Mapping[str, Any] | None = None,
        component: str | None = None,
    ) -> LayoutRegistration:
        """Resolve a layout without storing it.

        Raises
        ------
        UnknownSpecError
            If ``source_spec_name`` is not registered
        UnknownPlaceholderError
            If the source spec needs a value missing from ``overrides``

        """
        values = dict(overrides or {})
        spec = self.specs.get(source_spec_name, component)
        layout = substitute(spec.template, values, spec_name=spec.name)
        return LayoutRegistration(name=name, source_spec_name=source_spec_name, override_values=values, layout=layout)

    def commit(self, registration: LayoutRegistration) -> str:
        """Store a prepared layout unless its name is already taken."""
        existing = self._registrations.get(registration.name)
        if existing is None:
            self._registrations[registration.name] = registration
            logger.debug(f"Registered layout '{registration.name}' from spec '{registration.source_spec_name}'")
        elif existing.layout != registration.layout:
            logger.warning(
                f"Layout '{registration.name}' already registered from spec '{existing.source_spec_name}'; "
                f"ignoring divergent registration from spec '{registration.source_spec_name}'"
            )
        return registration.name

    def register(
        self,
        name: str,
        source_spec_name: str,
        overrides: Mapping[str, Any] | None = None,
        component: str | None = None,
    ) -> str:
        """Resolve and store a layout, returning its name.

        Parameters
        ----------
        name : str
            Layout name
        source_spec_name : str
            Spec to resolve the layout from
        overrides : Mapping[str, Any], optional
            Placeholder values for the source spec
        component : str, optional
            Component namespace of the source spec

        Returns
        -------
        str
            ``name``, so it can be used as a placeholder value immediately

        """
        return self.commit(self.prepare(name, source_spec_name, overrides, component))

    def get(self, name: str) -> Any:
        """Return a copy of the resolved layout stored under ``name``.

        Raises
        ------
        KeyError
            If no layout with that name is registered

        """
        return copy.deepcopy(self._registrations[name].layout)

    def get_registration(self, name: str) -> LayoutRegistration:
        return self._registrations[name]

    def as_dict(self) -> dict[str, Any]:
        """Return all layouts keyed by name, in registration order."""
        return {name: copy.deepcopy(reg.layout) for name, reg in self._registrations.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)


__all__ = ["LayoutRegistration", "LayoutRegistry"]
