"""Tests for splitting trees into page sections."""

from __future__ import annotations

import pytest

from contenttree import ItemKind, build_tree, make_item, split_sections
from contenttree.pagination import page_break_count

pytestmark = pytest.mark.unit


def test_split_sections_at_page_breaks(viz, text) -> None:
    """Each break closes the section before it."""

    marker = make_item(ItemKind.page_break, separator_text="Part 2")
    tree = build_tree([text("intro"), viz("a"), marker, viz("b")])

    first, second = split_sections(tree)

    assert len(first.children) == 2
    assert first.page_break is marker
    assert first.separator_text == "Part 2"
    assert second.page_break is None
    assert second.separator_text is None


def test_empty_sections_are_dropped(viz, page_break) -> None:
    """Leading or consecutive breaks do not produce empty sections."""

    tree = build_tree([page_break, viz("a"), page_break, page_break, viz("b"), page_break])

    sections = split_sections(tree)

    assert [[child.name for child in section.children] for section in sections] == [["a"], ["b"]]
    assert page_break_count(tree) == 4


def test_tree_without_breaks_is_one_section(viz) -> None:
    """No breaks yields a single section; an empty tree yields none."""

    assert len(split_sections(build_tree([viz("a"), viz("b")]))) == 1
    assert split_sections(build_tree([])) == ()
