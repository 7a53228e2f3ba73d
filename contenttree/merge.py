"""Merge independently built content trees.

Merging is a union by group name: a group in the right-hand tree folds into a
same-named sibling of the left-hand tree (recursively), otherwise it is
appended. Leaves never merge; they are appended after existing children. The
result is always a freshly built, frozen tree and the inputs stay untouched.
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import IncompatibleMergeError
from .tree import Group, Tree


def merge(tree_a: Tree, tree_b: Tree) -> Tree:
    """Return the frozen union of two trees, `tree_a` first.

    Args:
        tree_a: Left-hand tree; its children keep their positions.
        tree_b: Right-hand tree; its children are merged or appended in order.

    Returns:
        A new frozen tree.

    Raises:
        IncompatibleMergeError: When a path group and a tabset-label group
            share a name under the same parent.
    """

    result = tree_a.copy()
    _merge_into(result.root, tree_b.root, ())
    return result.freeze()


def merge_all(*trees: Tree) -> Tree:
    """Left fold of `merge` starting from the empty tree."""

    result = Tree().freeze()
    for tree in trees:
        result = merge(result, tree)
    return result


def _merge_into(target: Group, source: Group, path: Sequence[str]) -> None:
    for child in source.children:
        if not isinstance(child, Group):
            target.append(child)
            continue

        existing = target.child_group(child.name)
        if existing is None:
            target.append(child.copy())
            continue
        if existing.synthetic != child.synthetic:
            raise IncompatibleMergeError(name=child.name, parent_path=path)
        # First custom label wins.
        if not existing.has_custom_label and child.has_custom_label:
            existing.relabel(child.display_label)
        _merge_into(existing, child, (*path, child.name))
