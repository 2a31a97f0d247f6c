#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the filter system."""

import pytest

from html2anf.hooks import FilterManager


@pytest.fixture
def manager():
    """Create a fresh filter manager for each test."""
    return FilterManager()


@pytest.mark.unit
class TestFilterManager:
    """Tests for FilterManager."""

    def test_no_filters_returns_value(self, manager):
        assert manager.apply_filters("build_image_src", "a.jpg") == "a.jpg"
        assert not manager.has_filters("build_image_src")

    def test_filters_receive_extra_args(self, manager):
        manager.register_filter("src", lambda value, text: f"{value}|{text}")

        assert manager.apply_filters("src", "a", "b") == "a|b"

    def test_priority_order(self, manager):
        manager.register_filter("chain", lambda v: v + "1", priority=200)
        manager.register_filter("chain", lambda v: v + "2", priority=50)
        manager.register_filter("chain", lambda v: v + "3", priority=50)

        assert manager.apply_filters("chain", "") == "231"

    def test_unregister(self, manager):
        def upper(value):
            return value.upper()

        manager.register_filter("chain", upper)

        assert manager.unregister_filter("chain", upper)
        assert not manager.unregister_filter("chain", upper)
        assert not manager.unregister_filter("other", upper)
        assert manager.apply_filters("chain", "a") == "a"

    def test_failing_filter_is_skipped(self, manager, caplog):
        def boom(value):
            raise RuntimeError("boom")

        manager.register_filter("chain", lambda v: v + "1", priority=1)
        manager.register_filter("chain", boom, priority=2)
        manager.register_filter("chain", lambda v: v + "3", priority=3)

        assert manager.apply_filters("chain", "") == "13"
        assert "boom" in caplog.text

    def test_strict_mode_raises(self):
        manager = FilterManager(strict=True)

        def boom(value):
            raise RuntimeError("boom")

        manager.register_filter("chain", boom)

        with pytest.raises(RuntimeError, match="boom"):
            manager.apply_filters("chain", "")

    def test_clear(self, manager):
        manager.register_filter("a", str)
        manager.register_filter("b", str)

        manager.clear("a")
        assert not manager.has_filters("a")
        assert manager.has_filters("b")

        manager.clear()
        assert not manager.has_filters("b")
