"""Display-label overrides for tree groups."""

from __future__ import annotations

from collections.abc import Mapping

from .tree import Tree


def merge_labels(*label_maps: Mapping[str, str] | None) -> dict[str, str]:
    """Right-biased merge of label maps; later maps win per group name."""

    merged: dict[str, str] = {}
    for labels in label_maps:
        if labels:
            merged.update(labels)
    return merged


def apply_labels(tree: Tree, labels: Mapping[str, str]) -> Tree:
    """Return a copy of `tree` with group display labels overridden.

    Every group whose name is a key of `labels` is relabeled, at any depth.
    Same-named groups under different parents therefore all change together.
    The tree shape is untouched and the result keeps the input's state
    (a frozen input yields a frozen copy).

    Args:
        tree: Tree to relabel; not modified.
        labels: Group name (path segment or tabset-label value) to display label.

    Returns:
        The relabeled tree.
    """

    result = tree.copy()
    if labels:
        for _, group in result.iter_groups():
            label = labels.get(group.name)
            if label is not None:
                group.relabel(str(label))
    return result.freeze() if tree.is_frozen else result
