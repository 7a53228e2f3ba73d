"""Tests for item schemas and the parameter registry."""

from __future__ import annotations

import pytest

from contenttree import DEFAULT_REGISTRY, ItemKind, ItemSchema, ParameterRegistry, ParameterSpec, UnknownParameterError
from contenttree.parameters import closest_match, edit_distance

pytestmark = pytest.mark.unit


def test_every_item_kind_has_a_schema() -> None:
    """The default registry covers each kind exactly once."""

    kinds = {schema.kind for schema in DEFAULT_REGISTRY.list()}
    assert kinds == set(ItemKind)


def test_only_visualizations_inherit_defaults() -> None:
    """Collection/page layers only apply to visualizations."""

    inheriting = [schema.kind for schema in DEFAULT_REGISTRY.list() if schema.inherits_defaults]
    assert inheriting == [ItemKind.visualization]


def test_registry_rejects_duplicate_kinds_and_names() -> None:
    """Schemas must be unique per kind and declare each name once."""

    schema = ItemSchema(kind=ItemKind.text, parameters=(ParameterSpec("content"),))
    with pytest.raises(ValueError, match="Duplicate"):
        ParameterRegistry([schema, schema])
    with pytest.raises(ValueError, match="twice"):
        ParameterRegistry([ItemSchema(kind=ItemKind.text, parameters=(ParameterSpec("a"), ParameterSpec("a")))])
    with pytest.raises(ValueError, match="undeclared"):
        ParameterRegistry([ItemSchema(kind=ItemKind.text, parameters=(), required=("content",))])


def test_registry_get_returns_none_for_unknown_kind() -> None:
    """Lookups by an unknown kind string do not raise."""

    assert DEFAULT_REGISTRY.get("sparkline") is None
    with pytest.raises(KeyError):
        DEFAULT_REGISTRY.schema("sparkline")


def test_check_names_suggests_closest_parameter() -> None:
    """A misspelled name is rejected with the nearest recognized name."""

    with pytest.raises(UnknownParameterError) as excinfo:
        DEFAULT_REGISTRY.check_names(ItemKind.visualization, ["type", "colour"])

    error = excinfo.value
    assert error.parameter == "colour"
    assert error.suggestion == "color"
    assert error.kind == "visualization"
    assert "Did you mean 'color'?" in str(error)
    assert error.to_dict()["context"]["suggestion"] == "color"


def test_check_layer_names_accepts_any_kind_parameter() -> None:
    """Default layers may carry names of any kind, but not unknown ones."""

    DEFAULT_REGISTRY.check_layer_names(["type", "callout_type", "bins"], scope="page defaults")
    with pytest.raises(UnknownParameterError) as excinfo:
        DEFAULT_REGISTRY.check_layer_names(["wieght_var"], scope="page defaults")
    assert excinfo.value.suggestion == "weight_var"
    assert excinfo.value.kind == "page defaults"


def test_edit_distance_is_case_insensitive() -> None:
    """Distances ignore case and count single edits."""

    assert edit_distance("Color", "color") == 0
    assert edit_distance("colour", "color") == 1
    assert edit_distance("", "abc") == 3


def test_closest_match_prefers_first_option_on_ties() -> None:
    """Ties resolve to the earlier option; empty options yield None."""

    assert closest_match("bat", ["bar", "hat"]) == "bar"
    assert closest_match("x", []) is None


def test_schema_defaults_cover_every_parameter() -> None:
    """Defaults include unset parameters as None."""

    defaults = DEFAULT_REGISTRY.schema(ItemKind.visualization).defaults()
    assert defaults["backend"] == "highcharter"
    assert defaults["text_position"] == "above"
    assert defaults["color"] is None
