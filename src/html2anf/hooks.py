#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/hooks.py
"""Named value filters applied during component builds.

Components expose extension points by passing a value through a named
filter chain, e.g. the image source URL through ``"build_image_src"``.
Each filter receives the current value plus any extra arguments and returns
the new value.

Examples
--------
    >>> filters = FilterManager()
    >>> filters.register_filter("build_image_src", lambda url, text: url.replace("http:", "https:"))
    >>> filters.apply_filters("build_image_src", "http://x/a.jpg", "<img>")
    'https://x/a.jpg'

"""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

FilterCallable = Callable[..., Any]


class FilterManager:
    """Registry and executor for named filter chains.

    Parameters
    ----------
    strict : bool, default = False
        If True, filter exceptions are re-raised. If False, the exception is
        logged and the value from before the failing filter is kept.

    Thread Safety
    -------------
    FilterManager instances are not thread-safe. Each conversion context
    owns its own instance by default.

    """

    def __init__(self, strict: bool = False) -> None:
        self._filters: dict[str, list[tuple[int, FilterCallable]]] = {}
        self.strict = strict

    def register_filter(self, name: str, fn: FilterCallable, priority: int = 100) -> None:
        """Register a filter; lower priority runs first, ties run in registration order."""
        self._filters.setdefault(name, []).append((priority, fn))
        logger.debug(f"Registered filter for '{name}' with priority {priority}")

    def unregister_filter(self, name: str, fn: FilterCallable) -> bool:
        """Remove a filter, returning True if it was registered."""
        if name not in self._filters:
            return False

        initial_len = len(self._filters[name])
        self._filters[name] = [(p, f) for p, f in self._filters[name] if f != fn]
        return len(self._filters[name]) < initial_len

    def has_filters(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """Run ``value`` through every filter registered under ``name``.

        Parameters
        ----------
        name : str
            Filter chain name
        value : Any
            Initial value
        *args : Any
            Extra context passed to every filter

        Returns
        -------
        Any
            The filtered value

        """
        if name not in self._filters:
            return value

        result = value
        # sorted() is stable, so equal priorities keep registration order
        for _priority, fn in sorted(self._filters[name], key=lambda item: item[0]):
            try:
                result = fn(result, *args)
            except Exception as e:
                if self.strict:
                    raise
                logger.error(f"Filter {getattr(fn, '__name__', fn)!r} for '{name}' failed: {e}", exc_info=True)
        return result

    def clear(self, name: str | None = None) -> None:
        if name is None:
            self._filters.clear()
        else:
            self._filters.pop(name, None)


__all__ = ["FilterManager", "FilterCallable"]
