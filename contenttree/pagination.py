"""Split a tree's root children into page sections at page-break leaves."""

from __future__ import annotations

from dataclasses import dataclass

from .items import Item
from .tree import Group, Tree


@dataclass(frozen=True, slots=True)
class Section:
    """One rendered page of a paginated tree.

    Args:
        children: Root-level groups and items before the break.
        page_break: The closing page-break item, or None for the last section.
    """

    children: tuple[Group | Item, ...]
    page_break: Item | None = None

    @property
    def separator_text(self) -> str | None:
        if self.page_break is None:
            return None
        return self.page_break.get("separator_text")


def split_sections(tree: Tree) -> tuple[Section, ...]:
    """Split root children at page breaks; empty sections are dropped."""

    sections: list[Section] = []
    current: list[Group | Item] = []
    for child in tree.root.children:
        if isinstance(child, Item) and child.is_page_break:
            if current:
                sections.append(Section(children=tuple(current), page_break=child))
                current = []
            continue
        current.append(child)
    if current:
        sections.append(Section(children=tuple(current)))
    return tuple(sections)


def page_break_count(tree: Tree) -> int:
    return sum(1 for child in tree.root.children if isinstance(child, Item) and child.is_page_break)
