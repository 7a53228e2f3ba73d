"""Tests for fluent content collections."""

from __future__ import annotations

import logging

import pytest

from contenttree import InvalidItemError, InvalidPathError, ItemKind, UnknownParameterError
from dashboards import ContentCollection, combine_collections, create_collection

pytestmark = pytest.mark.unit


def test_add_returns_a_new_collection() -> None:
    """Collections are persistent values."""

    empty = create_collection()
    one = empty.add_viz("bar", tabgroup="a")
    two = one.add_text("hello")

    assert len(empty) == 0
    assert len(one) == 1
    assert [item.kind for item in two] == [ItemKind.visualization, ItemKind.text]


def test_collection_defaults_are_captured_at_add_time() -> None:
    """Items keep the defaults in effect when they were added."""

    collection = create_collection(type="bar", color="blue").add_viz(x_var="age")
    later = collection.with_defaults(color="red").add_viz(x_var="income")

    first, second = later.resolved_items()
    assert first.params["color"] == "blue"
    assert second.params["color"] == "red"
    assert first.params["type"] == "bar"


def test_unknown_names_fail_fast() -> None:
    """Misspelled names in defaults or items raise with a suggestion."""

    with pytest.raises(UnknownParameterError) as excinfo:
        create_collection().add_viz("bar", colour="blue")
    assert excinfo.value.suggestion == "color"

    with pytest.raises(UnknownParameterError):
        create_collection(colour="blue")


def test_add_text_joins_lines() -> None:
    """Multiple lines become one markdown block."""

    (item,) = create_collection().add_text("# Title", "", "Body").items
    assert item.local_params["content"] == "# Title\n\nBody"


def test_non_visualizations_do_not_capture_defaults() -> None:
    """Only inheriting kinds store the collection layer."""

    collection = create_collection(type="bar").add_callout("Careful", callout_type="warning")
    assert dict(collection.items[0].inherited_params) == {}


def test_value_box_row_and_pagination() -> None:
    """Rows hold validated boxes; page breaks sit at the root."""

    collection = (
        create_collection()
        .add_value_box_row({"title": "Users", "value": 10}, {"title": "Sessions", "value": 42})
        .add_pagination("Details")
    )
    row, marker = collection.items

    assert len(row.local_params["boxes"]) == 2
    assert marker.kind is ItemKind.page_break
    assert marker.local_params["separator_text"] == "Details"


def test_combine_concatenates_and_right_wins() -> None:
    """Items concatenate; defaults and labels merge with right precedence."""

    left = create_collection(color="blue", bins=10, labels={"a": "A", "b": "B"}).add_viz("bar", tabgroup="a")
    right = create_collection(color="red", labels={"b": "Bee"}).add_viz("pie", tabgroup="b")

    combined = left.combine(right)

    assert [item.local_params["type"] for item in combined] == ["bar", "pie"]
    assert combined.defaults.defined() == {"color": "red", "bins": 10}
    assert dict(combined.labels) == {"a": "A", "b": "Bee"}
    assert combined.resolved_items()[0].params["color"] == "blue"
    assert len(left) == 1


def test_combine_collections_folds_left() -> None:
    """No collections yields an empty one."""

    parts = [create_collection().add_viz("bar", title=str(i)) for i in range(3)]

    assert [item.local_params["title"] for item in combine_collections(*parts)] == ["0", "1", "2"]
    assert combine_collections().is_empty


def test_build_produces_a_labeled_frozen_tree() -> None:
    """Build resolves, validates, groups and relabels."""

    tree = (
        create_collection(type="bar")
        .add_viz(tabgroup="demo/age", title="Age")
        .add_viz(tabgroup="demo", tabset_label="Male", title="Happy")
        .with_labels(demo="Demographics")
        .build(page_layer={"color_palette": "viridis"})
    )

    assert tree.is_frozen
    assert tree.find(("demo",)).display_label == "Demographics"
    age = tree.find(("demo", "age")).items()[0]
    assert age.params["color_palette"] == "viridis"
    assert tree.find(("demo", "Male")).synthetic is True


def test_build_raises_on_invalid_items(caplog) -> None:
    """Validation errors stop the build; warnings are logged."""

    with pytest.raises(InvalidItemError) as excinfo:
        create_collection().add_viz(title="No type").build()
    assert excinfo.value.errors == ("Item[0:visualization].type is required.",)

    with caplog.at_level(logging.WARNING, logger="dashboards.collection"):
        create_collection().add_viz("bar", icon="chart").build()
    assert any("collection:name" in record.getMessage() for record in caplog.records)


def test_validate_reports_without_raising() -> None:
    """Validation returns a result instead of raising."""

    result = create_collection().add_viz(title="No type").validate(page_layer={"type": "pie"})
    assert result.is_valid is True


def test_strict_paths_reject_separator_only_groups() -> None:
    """Strict collections refuse tabgroups that resolve to the root."""

    with pytest.raises(InvalidPathError):
        ContentCollection(strict_paths=True).add_viz("bar", tabgroup=" / ")
    assert ContentCollection(strict_paths=False).add_viz("bar", tabgroup=" / ").items[0].group_path == ()


def test_summary_outlines_groups() -> None:
    """The summary lists groups and leaves."""

    summary = create_collection().add_viz("bar", tabgroup="a", title="Chart").summary()

    assert "a" in summary
    assert "[bar] Chart" in summary
