"""Plain-text outlines of content trees."""

from __future__ import annotations

from contenttree import Group, Item, ItemKind, Tree

_BRANCH = "├── "
_LAST = "└── "
_PIPE = "│   "
_BLANK = "    "

_PRIMARY_PARAM: dict[ItemKind, str] = {
    ItemKind.text: "content",
    ItemKind.callout: "content",
    ItemKind.image: "src",
    ItemKind.accordion: "title",
    ItemKind.card: "text",
    ItemKind.metric: "title",
    ItemKind.value_box: "title",
    ItemKind.badge: "text",
    ItemKind.quote: "quote",
    ItemKind.code: "filename",
    ItemKind.iframe: "src",
    ItemKind.video: "src",
    ItemKind.table: "caption",
}


def format_tree(tree: Tree, *, title: str | None = None, width: int = 40) -> str:
    """Render a tree as an indented box-drawing outline.

    Groups show their display label (and name when relabeled); leaves show
    their kind and a short description.

    Args:
        tree: Tree to render.
        title: Optional heading line.
        width: Maximum length of leaf descriptions.

    Returns:
        Multi-line string without a trailing newline.
    """

    leaves = tree.leaves()
    heading = title or "Content tree"
    lines = [f"{heading} ({len(leaves)} item{'s' if len(leaves) != 1 else ''})"]
    if tree.is_empty:
        lines.append(f"{_LAST}(empty)")
        return "\n".join(lines)
    _format_children(tree.root, prefix="", lines=lines, width=width)
    return "\n".join(lines)


def describe_item(item: Item, *, width: int = 40) -> str:
    """Return a one-line description of a leaf."""

    if item.kind == ItemKind.page_break:
        separator = item.get("separator_text")
        return f"--- page break{f': {separator}' if separator else ''} ---"

    if item.kind == ItemKind.visualization:
        chart = item.get("type", "?")
        label = item.get("title") or item.get("title_tabset") or item.get("response_var") or ""
        text = f"[{chart}] {_truncate(str(label), width)}".rstrip()
        if item.get("filter") is not None:
            text += " (filtered)"
        return text

    if item.kind == ItemKind.value_box_row:
        boxes = item.get("boxes") or ()
        return f"[value_box_row] {len(boxes)} box{'es' if len(boxes) != 1 else ''}"

    param = _PRIMARY_PARAM.get(item.kind)
    detail = item.get(param) if param else None
    if detail is None:
        return f"[{item.kind}]"
    first_line = str(detail).splitlines()[0] if str(detail) else ""
    return f"[{item.kind}] {_truncate(first_line, width)}".rstrip()


def _format_children(group: Group, *, prefix: str, lines: list[str], width: int) -> None:
    children = group.children
    for index, child in enumerate(children):
        last = index == len(children) - 1
        connector = _LAST if last else _BRANCH
        if isinstance(child, Group):
            label = child.display_label
            if child.has_custom_label:
                label = f"{label} [{child.name}]"
            marker = " (tabset)" if child.synthetic else ""
            lines.append(f"{prefix}{connector}{label}{marker}")
            _format_children(child, prefix=prefix + (_BLANK if last else _PIPE), lines=lines, width=width)
        else:
            lines.append(f"{prefix}{connector}{describe_item(child, width=width)}")


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: max(width - 3, 0)] + "..."
