"""Tests for dashboard pages."""

from __future__ import annotations

import pytest

from contenttree import IncompatibleMergeError, UnknownParameterError
from dashboards import Page, create_collection

pytestmark = pytest.mark.unit


def test_page_validates_metadata() -> None:
    """Names are required and navbar placement is left or right."""

    with pytest.raises(ValueError):
        Page(name="  ")
    with pytest.raises(ValueError, match="navbar_align"):
        Page(name="Home", navbar_align="center")  # type: ignore[arg-type]
    with pytest.raises(UnknownParameterError):
        Page(name="Home", defaults={"colour": "red"})


def test_page_metadata() -> None:
    """Metadata mirrors the page fields."""

    metadata = Page(name="About", icon="ph:info", navbar_align="right", data="survey.csv").metadata

    assert metadata.name == "About"
    assert metadata.navbar_align == "right"
    assert metadata.has_data is True
    assert metadata.is_landing_page is False


def test_page_defaults_sit_between_collection_and_item() -> None:
    """Page defaults override collection defaults; items override both."""

    collection = (
        create_collection(type="bar", color="blue", bins=30)
        .add_viz(tabgroup="a", title="inherits")
        .add_viz(tabgroup="a", title="own", bins=5)
    )
    tree = Page(name="Home", defaults={"bins": 20}).add_content(collection).build()

    inherits, own = tree.find(("a",)).items()
    assert inherits.params["bins"] == 20
    assert inherits.params["color"] == "blue"
    assert own.params["bins"] == 5


def test_page_data_is_the_fallback_dataset() -> None:
    """Page data applies unless a collection or item names its own."""

    own = create_collection(type="bar").add_viz(data="other.csv")
    inherited = create_collection(type="bar").add_viz()
    tree = Page(name="Home", data="survey.csv").add_content(own, inherited).build()

    assert [item.params["data"] for item in tree.leaves()] == ["other.csv", "survey.csv"]


def test_direct_items_and_collections_keep_call_order() -> None:
    """Direct additions and attached collections interleave in call order."""

    page = (
        Page(name="Home", defaults={"type": "pie"})
        .add_text("Welcome")
        .add_content(create_collection().add_viz(tabgroup="charts", title="one"))
        .add_viz(tabgroup="charts", title="two")
    )
    tree = page.build()

    assert [type(child).__name__ for child in tree.root.children] == ["Item", "Group"]
    assert [item.get("title") for item in tree.find(("charts",)).items()] == ["one", "two"]
    assert all(item.params["type"] == "pie" for item in tree.find(("charts",)).items())


def test_page_labels_win_over_collection_labels() -> None:
    """Labels merge across collections, then page labels apply last."""

    first = create_collection(type="bar").add_viz(tabgroup="a").with_labels(a="From first")
    second = create_collection(type="bar").add_viz(tabgroup="b").with_labels(a="From second", b="Bee")

    tree = Page(name="Home").add_content(first, second).with_labels(b="Page Bee").build()

    assert tree.find(("a",)).display_label == "From second"
    assert tree.find(("b",)).display_label == "Page Bee"


def test_page_build_surfaces_merge_conflicts() -> None:
    """Collections disagreeing on a group's kind cannot share a page."""

    paths = create_collection(type="bar").add_viz(tabgroup="a/b")
    tabsets = create_collection(type="bar").add_viz(tabgroup="a", tabset_label="b")

    with pytest.raises(IncompatibleMergeError):
        Page(name="Home").add_content(paths, tabsets).build()


def test_empty_page_builds_an_empty_frozen_tree() -> None:
    """Pages without content still build."""

    tree = Page(name="Empty").build()
    assert tree.is_empty
    assert tree.is_frozen


def test_page_validate_prefixes_messages() -> None:
    """Page validation reports which attached collection failed."""

    result = Page(name="Home").add_content(create_collection().add_viz()).validate()

    assert result.is_valid is False
    assert result.errors[0].startswith("Page[Home].content[0] Item[0:visualization].type")
