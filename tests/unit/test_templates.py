#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for template specs and placeholder substitution."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from html2anf.exceptions import SpecRegistrationError, UnknownPlaceholderError, UnknownSpecError
from html2anf.templates import Literal, Placeholder, SpecRegistry, TemplateSpec, find_placeholders, substitute

PLACEHOLDER_NAMES = ["url", "layout", "caption", "size", "color"]

scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.text(max_size=10),
    st.sampled_from(["#url#", "#layout#"]),
)
templates = st.recursive(
    st.one_of(scalars, st.sampled_from(PLACEHOLDER_NAMES).map(Placeholder)),
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(st.text(max_size=6), children, max_size=4),
    ),
    max_leaves=20,
)
substitution_values = st.one_of(
    scalars,
    st.lists(st.integers(), max_size=3),
    st.dictionaries(st.text(max_size=3), st.integers(), max_size=3),
)


def _contains_placeholder(tree) -> bool:
    if isinstance(tree, Placeholder):
        return True
    if isinstance(tree, dict):
        return any(_contains_placeholder(v) for v in tree.values())
    if isinstance(tree, list):
        return any(_contains_placeholder(v) for v in tree)
    return False


@pytest.mark.unit
class TestSubstitute:
    """Tests for substitute()."""

    def test_replaces_nested_placeholders(self):
        template = {
            "role": "container",
            "components": [{"role": "photo", "URL": Placeholder("url")}],
            "layout": {"ignoreDocumentMargin": Placeholder("full_bleed")},
        }

        result = substitute(template, {"url": "bundle://a.jpg", "full_bleed": True})

        assert result == {
            "role": "container",
            "components": [{"role": "photo", "URL": "bundle://a.jpg"}],
            "layout": {"ignoreDocumentMargin": True},
        }

    def test_value_may_be_a_structure(self):
        template = {"layout": Placeholder("layout")}
        layout = {"margin": {"top": 25}, "columnSpan": Placeholder("not-walked")}

        result = substitute(template, {"layout": layout})

        # Substituted values are inserted as-is, not substituted again
        assert result["layout"] is layout

    def test_numeric_and_boolean_values(self):
        template = {"columnSpan": Placeholder("span"), "flag": Placeholder("flag")}

        assert substitute(template, {"span": 6, "flag": False}) == {"columnSpan": 6, "flag": False}

    def test_sentinel_strings_are_literal_text(self):
        template = {"text": "#caption#", "title": "before #caption# after"}

        assert substitute(template, {}) == template

    def test_literal_is_emitted_verbatim(self):
        template = {"raw": Literal({"x": Placeholder("url")})}

        result = substitute(template, {})

        assert result == {"raw": {"x": Placeholder("url")}}

    def test_literal_result_does_not_alias_template(self):
        template = {"raw": Literal({"margin": {"top": 25}})}

        result = substitute(template, {})
        result["raw"]["margin"]["top"] = 0

        assert template["raw"].value == {"margin": {"top": 25}}

    def test_tuples_become_lists(self):
        assert substitute((1, Placeholder("a")), {"a": 2}) == [1, 2]

    def test_does_not_mutate_template(self):
        template = {"a": [Placeholder("url")]}

        substitute(template, {"url": "x"})

        assert template == {"a": [Placeholder("url")]}

    def test_missing_placeholder_raises(self):
        template = {"URL": Placeholder("url"), "layout": Placeholder("layout")}

        with pytest.raises(UnknownPlaceholderError) as exc_info:
            substitute(template, {"url": "x"}, spec_name="json-without-caption")

        assert exc_info.value.placeholder == "layout"
        assert exc_info.value.spec_name == "json-without-caption"
        assert "#layout#" in str(exc_info.value)

    def test_none_is_a_valid_value(self):
        assert substitute({"a": Placeholder("a")}, {"a": None}) == {"a": None}

    @given(template=templates, data=st.data())
    def test_complete_map_leaves_no_placeholders(self, template, data):
        names = find_placeholders(template)
        values = {name: data.draw(substitution_values) for name in names}

        result = substitute(template, values)

        assert not _contains_placeholder(result)

    @given(template=templates, data=st.data())
    def test_incomplete_map_raises(self, template, data):
        names = sorted(find_placeholders(template))
        if not names:
            return
        missing = data.draw(st.sampled_from(names))
        values = {name: 1 for name in names if name != missing}

        with pytest.raises(UnknownPlaceholderError):
            substitute(template, values)


@pytest.mark.unit
class TestFindPlaceholders:
    """Tests for placeholder discovery."""

    def test_collects_names(self):
        template = {"a": [Placeholder("url"), {"b": Placeholder("layout")}], "c": "#caption#"}

        assert find_placeholders(template) == {"url", "layout"}

    def test_spec_placeholders_property(self):
        spec = TemplateSpec(name="s", label="S", template={"URL": Placeholder("url")})

        assert spec.placeholders == {"url"}


@pytest.mark.unit
class TestSpecRegistry:
    """Tests for SpecRegistry."""

    def test_register_and_get(self):
        registry = SpecRegistry()

        spec = registry.register("image", "anchored-image", "Anchored Layout", {"margin": {"top": 25}})

        assert registry.get("anchored-image", "image") is spec
        assert spec.component == "image"
        assert spec.label == "Anchored Layout"
        assert len(registry) == 1

    def test_get_without_component_searches_in_registration_order(self):
        registry = SpecRegistry()
        first = registry.register("image", "shared", "First", {"a": 1})
        registry.register("gallery", "shared", "Second", {"a": 2})

        assert registry.get("shared") is first

    def test_identical_reregistration_is_accepted(self):
        registry = SpecRegistry()
        first = registry.register("image", "s", "S", {"a": Placeholder("x")})

        again = registry.register("image", "s", "S", {"a": Placeholder("x")})

        assert again is first
        assert len(registry) == 1

    def test_conflicting_reregistration_raises(self):
        registry = SpecRegistry()
        registry.register("image", "s", "S", {"a": 1})

        with pytest.raises(SpecRegistrationError):
            registry.register("image", "s", "S", {"a": 2})

    def test_unknown_spec(self):
        registry = SpecRegistry()
        registry.register("image", "s", "S", {})

        with pytest.raises(UnknownSpecError) as exc_info:
            registry.get("s", "gallery")
        assert exc_info.value.component == "gallery"

        with pytest.raises(UnknownSpecError):
            registry.get("missing")

    def test_has_spec_and_list(self):
        registry = SpecRegistry()
        registry.register("image", "a", "A", {})
        registry.register("gallery", "b", "B", {})

        assert registry.has_spec("a")
        assert registry.has_spec("b", "gallery")
        assert not registry.has_spec("b", "image")
        assert [spec.name for spec in registry.list_specs()] == ["a", "b"]
        assert [spec.name for spec in registry.list_specs("gallery")] == ["b"]
