"""Tests for building content trees from ordered items."""

from __future__ import annotations

import pytest

from contenttree import (
    DuplicateGroupError,
    Group,
    IncompatibleMergeError,
    Item,
    Tree,
    TreeBuilder,
    TreeFrozenError,
    build_tree,
    insert,
)

pytestmark = pytest.mark.unit


def _outline(tree: Tree) -> list[tuple[str, tuple[str, ...], str | None]]:
    outline = []
    for event in tree.walk():
        detail = event.label if event.item is None else event.item.get("title")
        outline.append((event.kind, event.path, detail))
    return outline


def test_items_keep_insertion_order_within_a_group(viz) -> None:
    """Leaves in one group appear exactly in add order."""

    tree = build_tree([viz("a", title="first"), viz("a", title="second"), viz("a", title="third")])
    group = tree.find(("a",))

    assert [item.get("title") for item in group.items()] == ["first", "second", "third"]


def test_nested_paths_reuse_existing_groups(viz) -> None:
    """`a` then `a/b` yields one `a` holding a leaf then a `b` group."""

    tree = build_tree([viz("a", title="top"), viz("a/b", title="nested")])

    assert _outline(tree) == [
        ("enter", ("a",), "a"),
        ("item", ("a",), "top"),
        ("enter", ("a", "b"), "b"),
        ("item", ("a", "b"), "nested"),
        ("exit", ("a", "b"), "b"),
        ("exit", ("a",), "a"),
    ]
    assert tree.find(("a",)).is_tabset_parent is True
    assert tree.find(("a", "b")).is_tabset_parent is False


def test_groups_appear_in_first_seen_order(viz, text) -> None:
    """Later items for an earlier group append to it without reordering groups."""

    tree = build_tree([viz("x", title="1"), text("intro"), viz("y", title="2"), viz("x", title="3")])

    assert [type(child).__name__ for child in tree.root.children] == ["Group", "Item", "Group"]
    assert [item.get("title") for item in tree.find(("x",)).items()] == ["1", "3"]


def test_tabset_labels_create_sibling_subgroups(viz) -> None:
    """Same path, different labels: one synthetic sub-group per label."""

    tree = build_tree(
        [
            viz("happiness", tabset_label="Male", title="m1"),
            viz("happiness", tabset_label="Female", title="f1"),
            viz("happiness", tabset_label="Male", title="m2"),
        ]
    )
    happiness = tree.find(("happiness",))

    assert [group.name for group in happiness.groups()] == ["Male", "Female"]
    assert all(group.synthetic for group in happiness.groups())
    assert [item.get("title") for item in happiness.child_group("Male").items()] == ["m1", "m2"]


def test_tabset_label_clashing_with_path_group_raises(viz) -> None:
    """A synthetic group cannot share a name with a path group."""

    builder = TreeBuilder().insert(viz("a", tabset_label="b"))
    with pytest.raises(IncompatibleMergeError) as excinfo:
        builder.insert(viz("a/b"))
    assert excinfo.value.parent_path == ("a",)


def test_page_breaks_attach_to_root(viz, page_break) -> None:
    """Page breaks sit between root children in add order."""

    tree = build_tree([viz("a"), page_break, viz("b")])

    kinds = [child.name if isinstance(child, Group) else str(child.kind) for child in tree.root.children]
    assert kinds == ["a", "page_break", "b"]


def test_root_items_without_paths(text) -> None:
    """Empty paths attach to the root."""

    tree = build_tree([text("one"), text("two")])
    assert [item.get("content") for item in tree.root.items()] == ["one", "two"]


def test_frozen_tree_rejects_mutation(viz) -> None:
    """Inserting into, appending to or relabeling a frozen tree raises."""

    tree = build_tree([viz("a")])
    assert tree.is_frozen

    with pytest.raises(TreeFrozenError):
        insert(tree, viz("b"))
    with pytest.raises(TreeFrozenError):
        tree.find(("a",)).append(viz())
    with pytest.raises(TreeFrozenError):
        tree.find(("a",)).relabel("A")


def test_builder_freezes_on_build(viz) -> None:
    """The builder hands out a frozen tree and stops accepting items."""

    builder = TreeBuilder().extend([viz("a"), viz("b")])
    tree = builder.build()

    assert tree.is_frozen
    assert len(tree.leaves()) == 2
    with pytest.raises(TreeFrozenError):
        builder.insert(viz("c"))


def test_copy_returns_an_independent_building_tree(viz) -> None:
    """Copies can be extended without touching the frozen original."""

    original = build_tree([viz("a", title="one")])
    clone = original.copy()
    clone.insert(viz("a", title="two"))

    assert clone.is_frozen is False
    assert len(original.leaves()) == 1
    assert len(clone.leaves()) == 2


def test_find_and_iter_groups(viz) -> None:
    """Groups are reachable by path and listed depth-first."""

    tree = build_tree([viz("a/b"), viz("c")])

    assert tree.find(()) is tree.root
    assert tree.find(("missing",)) is None
    assert [path for path, _ in tree.iter_groups()] == [("a",), ("a", "b"), ("c",)]


def test_empty_tree() -> None:
    """A fresh tree has no children and no events."""

    tree = Tree()
    assert tree.is_empty
    assert list(tree.walk()) == []
    assert isinstance(tree.root, Group)
    assert not isinstance(tree.root, Item)


def test_groups_reject_duplicate_sibling_names() -> None:
    """Appending a second group with an existing sibling's name raises."""

    parent = Group("parent")
    parent.append(Group("demo"))

    with pytest.raises(DuplicateGroupError) as excinfo:
        parent.append(Group("demo", synthetic=True))
    assert excinfo.value.name == "demo"
    assert [group.name for group in parent.groups()] == ["demo"]
