#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the component base class and its helpers."""

import pytest

from html2anf.components.base import Component, find_source, get_filename
from html2anf.exceptions import UnknownPlaceholderError, UnknownSpecError
from html2anf.templates import Placeholder


class Badge(Component):
    """Test component whose fragment needs a value it never provides."""

    name = "badge"

    @classmethod
    def register_specs(cls, specs, localizer):
        specs.register(cls.name, "badge-layout", "Badge Layout", {"margin": {"top": 1}})
        specs.register(cls.name, "json", "JSON", {"role": "badge", "URL": Placeholder("url"), "text": Placeholder("text")})

    def _build(self, text):
        values = {"url": self.maybe_bundle_source("https://example.com/badge.png")}
        self.register_layout("badge-layout", "badge-layout")
        self.register_json("json", values)


class Broken(Component):
    name = "broken"

    def _build(self, text):
        self.register_layout("x", "never-registered")


@pytest.fixture
def badge_context(make_context):
    return make_context(matchers=[(Badge.node_matches, Badge), (Broken.node_matches, Broken)])


@pytest.mark.unit
class TestHelpers:
    """Tests for module-level helpers."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://example.com/wp-content/photo.jpg", "photo.jpg"),
            ("https://example.com/photo.jpg?w=300&h=200", "photo.jpg"),
            ("https://example.com/photo%20one.jpg#frag", "photo one.jpg"),
            ("photo.jpg", "photo.jpg"),
        ],
    )
    def test_get_filename(self, url, expected):
        assert get_filename(url) == expected

    def test_find_source(self):
        assert find_source('<figure><img SRC="a.jpg"><img src="b.jpg"></figure>') == "a.jpg"
        assert find_source('<img src="">') == ""
        assert find_source("<img>") is None

    def test_find_source_decodes_entities(self):
        assert find_source('<img src="https://example.com/a.jpg?w=1&amp;h=2">') == "https://example.com/a.jpg?w=1&h=2"


@pytest.mark.unit
class TestComponent:
    """Tests for Component build bookkeeping."""

    def test_default_node_matches_is_false(self, context, parse_node):
        assert not Badge.node_matches(parse_node("<div></div>"), context)

    def test_failed_substitution_leaves_context_untouched(self, badge_context):
        with pytest.raises(UnknownPlaceholderError) as exc_info:
            Badge(badge_context).build("<span></span>")

        assert exc_info.value.placeholder == "text"
        assert len(badge_context.layouts) == 0
        assert badge_context.bundles == {}

    def test_unknown_layout_spec(self, badge_context):
        with pytest.raises(UnknownSpecError) as exc_info:
            Broken(badge_context).build("<span></span>")

        assert exc_info.value.component == "broken"
        assert len(badge_context.layouts) == 0

    def test_get_setting(self, context):
        assert Badge(context).get_setting("layout_columns") == 7
