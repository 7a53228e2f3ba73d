"""Content trees: ordered groups of items built from a flat add sequence.

A tree is created empty, mutated in place by `insert` in call order, and then
frozen. Frozen trees reject structural mutation; operations that need a
different shape (merging, relabeling) produce a fresh tree instead.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Literal

from .errors import DuplicateGroupError, IncompatibleMergeError, TreeFrozenError
from .items import Item

EventKind = Literal["enter", "item", "exit"]


class Group:
    """A named tab/folder level holding ordered groups and items.

    Sibling group names are unique. `synthetic` marks groups keyed by a
    visualization's tabset label rather than by a path segment.
    """

    __slots__ = ("name", "synthetic", "_display_label", "_children", "_frozen")

    def __init__(self, name: str, *, display_label: str | None = None, synthetic: bool = False) -> None:
        self.name = name
        self.synthetic = synthetic
        self._display_label = display_label if display_label is not None else name
        self._children: list[Group | Item] = []
        self._frozen = False

    @property
    def display_label(self) -> str:
        return self._display_label

    @property
    def children(self) -> tuple[Group | Item, ...]:
        return tuple(self._children)

    @property
    def is_tabset_parent(self) -> bool:
        """True when the group holds at least one child group."""

        return any(isinstance(child, Group) for child in self._children)

    @property
    def has_custom_label(self) -> bool:
        return self._display_label != self.name

    def groups(self) -> tuple[Group, ...]:
        return tuple(child for child in self._children if isinstance(child, Group))

    def items(self) -> tuple[Item, ...]:
        return tuple(child for child in self._children if isinstance(child, Item))

    def child_group(self, name: str) -> Group | None:
        """Return the direct child group with `name`, or None."""

        for child in self._children:
            if isinstance(child, Group) and child.name == name:
                return child
        return None

    def copy(self) -> Group:
        """Return an unfrozen deep copy; items are immutable and shared."""

        clone = Group(self.name, display_label=self._display_label, synthetic=self.synthetic)
        clone._children = [child.copy() if isinstance(child, Group) else child for child in self._children]
        return clone

    def append(self, child: Group | Item) -> None:
        """Append a child as the last sibling.

        Raises:
            TreeFrozenError: When the group belongs to a frozen tree.
            DuplicateGroupError: When `child` is a group named like an existing sibling group.
        """

        if self._frozen:
            raise TreeFrozenError("append to a group")
        if isinstance(child, Group) and self.child_group(child.name) is not None:
            raise DuplicateGroupError(name=child.name)
        self._children.append(child)

    def relabel(self, label: str) -> None:
        """Replace the display label of an unfrozen group."""

        if self._frozen:
            raise TreeFrozenError("relabel a group")
        self._display_label = label

    def _freeze(self) -> None:
        self._frozen = True
        for child in self._children:
            if isinstance(child, Group):
                child._freeze()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return (
            self.name == other.name
            and self.synthetic == other.synthetic
            and self._display_label == other._display_label
            and self._children == other._children
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Group(name={self.name!r}, label={self._display_label!r}, children={len(self._children)})"


@dataclass(frozen=True, slots=True)
class TreeEvent:
    """One step of a depth-first traversal.

    Args:
        kind: ``"enter"``/``"exit"`` around a group, ``"item"`` for a leaf.
        path: Group names from root to the group entered/exited, or to the
            group holding the item.
        label: Group display label for enter/exit events, else None.
        item: The leaf for item events, else None.
        synthetic: Whether the entered/exited group is a tabset-label group.
    """

    kind: EventKind
    path: tuple[str, ...]
    label: str | None = None
    item: Item | None = None
    synthetic: bool = False

    @property
    def depth(self) -> int:
        return len(self.path)


class Tree:
    """A rooted content tree (Building until frozen)."""

    __slots__ = ("_root", "_frozen")

    def __init__(self, root: Group | None = None) -> None:
        self._root = root if root is not None else Group("")
        self._frozen = False

    @property
    def root(self) -> Group:
        return self._root

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def is_empty(self) -> bool:
        return not self._root.children

    def freeze(self) -> Tree:
        """Mark the tree read-only and return it."""

        self._frozen = True
        self._root._freeze()
        return self

    def copy(self) -> Tree:
        """Return an unfrozen deep copy of the tree."""

        return Tree(self._root.copy())

    def insert(self, item: Item) -> Tree:
        """Insert an item along its group path and return the tree.

        Missing groups along the path are created with their name as display
        label. Tabset-labelled visualizations go one level deeper, into a
        synthetic group keyed by the label. Page breaks always attach to root.

        Raises:
            TreeFrozenError: When the tree is frozen.
            IncompatibleMergeError: When a path group and a tabset-label group
                would share a name under the same parent.
        """

        if self._frozen:
            raise TreeFrozenError("insert an item")

        if item.is_page_break:
            self._root.append(item)
            return self

        node = self._root
        parent_path: list[str] = []
        for segment in item.group_path:
            node = _locate(node, segment, synthetic=False, parent_path=parent_path)
            parent_path.append(segment)
        if item.tabset_label is not None:
            node = _locate(node, item.tabset_label, synthetic=True, parent_path=parent_path)
        node.append(item)
        return self

    def walk(self) -> Iterator[TreeEvent]:
        """Yield enter/item/exit events depth-first in child order."""

        yield from _walk(self._root, ())

    def leaves(self) -> tuple[Item, ...]:
        """Return every item in traversal order."""

        return tuple(event.item for event in self.walk() if event.item is not None)

    def find(self, path: Sequence[str]) -> Group | None:
        """Return the group at `path`, or None; the empty path is the root."""

        node = self._root
        for segment in path:
            found = node.child_group(segment)
            if found is None:
                return None
            node = found
        return node

    def iter_groups(self) -> Iterator[tuple[tuple[str, ...], Group]]:
        """Yield ``(path, group)`` for every named group, depth-first."""

        stack: list[tuple[tuple[str, ...], Group]] = [((), self._root)]
        while stack:
            path, group = stack.pop()
            if path:
                yield path, group
            for child in reversed(group.groups()):
                stack.append(((*path, child.name), child))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        return self._root == other._root

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "building"
        return f"Tree({state}, leaves={len(self.leaves())})"


def insert(tree: Tree, item: Item) -> Tree:
    """Insert an item into a tree; see `Tree.insert`."""

    return tree.insert(item)


def build_tree(items: Iterable[Item], *, freeze: bool = True) -> Tree:
    """Fold an ordered item sequence into a new tree.

    Args:
        items: Items in add order.
        freeze: Whether to freeze the result.

    Returns:
        The built tree.
    """

    tree = Tree()
    for item in items:
        tree.insert(item)
    return tree.freeze() if freeze else tree


class TreeBuilder:
    """Incremental builder producing a frozen tree on `build()`."""

    def __init__(self, tree: Tree | None = None) -> None:
        self._tree = tree if tree is not None else Tree()

    @property
    def tree(self) -> Tree:
        return self._tree

    def insert(self, item: Item) -> TreeBuilder:
        self._tree.insert(item)
        return self

    def extend(self, items: Iterable[Item]) -> TreeBuilder:
        for item in items:
            self._tree.insert(item)
        return self

    def build(self) -> Tree:
        """Freeze and return the tree; later inserts raise TreeFrozenError."""

        return self._tree.freeze()


def _locate(node: Group, name: str, *, synthetic: bool, parent_path: Sequence[str]) -> Group:
    """Return the child group `name` of `node`, creating it when missing."""

    existing = node.child_group(name)
    if existing is not None:
        if existing.synthetic != synthetic:
            raise IncompatibleMergeError(name=name, parent_path=parent_path)
        return existing
    created = Group(name, synthetic=synthetic)
    node.append(created)
    return created


def _walk(group: Group, path: tuple[str, ...]) -> Iterator[TreeEvent]:
    for child in group.children:
        if isinstance(child, Group):
            child_path = (*path, child.name)
            yield TreeEvent(kind="enter", path=child_path, label=child.display_label, synthetic=child.synthetic)
            yield from _walk(child, child_path)
            yield TreeEvent(kind="exit", path=child_path, label=child.display_label, synthetic=child.synthetic)
        else:
            yield TreeEvent(kind="item", path=path, item=child)
