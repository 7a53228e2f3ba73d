"""Snapshot encoding/decoding helpers for content trees.

Payloads are plain dictionaries. Mappings encode as dicts and sequences as
lists; on decode every list becomes a tuple, so list-valued parameters come
back as tuples. Other parameter values, such as the `data` dataset reference,
pass through unchanged, so a payload is JSON-serializable only when those
values are.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final, cast

from contenttree import Group, Item, ItemKind, Tree

SNAPSHOT_VERSION: Final[int] = 1


def encode_tree(tree: Tree) -> dict[str, Any]:
    """Encode a tree into a plain dictionary.

    Args:
        tree: Tree to encode.

    Returns:
        Dict payload with a version tag, the frozen flag and the root children.
    """

    return {
        "version": SNAPSHOT_VERSION,
        "frozen": tree.is_frozen,
        "children": [_encode_child(child) for child in tree.root.children],
    }


def decode_tree(payload: Mapping[str, Any]) -> Tree:
    """Decode a tree from a payload produced by `encode_tree`.

    Args:
        payload: Stored payload dictionary.

    Returns:
        Tree in the stored state (frozen unless stored as building).

    Raises:
        ValueError: When the version is unsupported or a node is malformed.
    """

    version = payload.get("version")
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"Unsupported content tree snapshot version: {version!r}.")

    root = Group("")
    for raw in _parse_list(payload.get("children"), where="children"):
        root.append(_decode_child(raw, ()))
    tree = Tree(root)
    if payload.get("frozen", True):
        tree.freeze()
    return tree


def encode_item(item: Item) -> dict[str, Any]:
    """Encode one item into a plain dictionary; parameter values pass through as given."""

    return {
        "kind": str(item.kind),
        "local_params": _encode_value(item.local_params),
        "group_path": list(item.group_path),
        "tabset_label": item.tabset_label,
        "inherited_params": _encode_value(item.inherited_params),
        "params": _encode_value(item.params) if item.params is not None else None,
    }


def decode_item(payload: Mapping[str, Any]) -> Item:
    """Decode one item payload.

    Raises:
        ValueError: When the kind is unknown or a field has the wrong shape.
    """

    kind_raw = payload.get("kind")
    try:
        kind = ItemKind(str(kind_raw))
    except ValueError as exc:
        raise ValueError(f"Unknown item kind in snapshot: {kind_raw!r}.") from exc

    params_raw = payload.get("params")
    return Item(
        kind=kind,
        local_params=_parse_params(payload.get("local_params"), where="local_params"),
        group_path=tuple(str(segment) for segment in _parse_list(payload.get("group_path"), where="group_path")),
        tabset_label=_parse_optional_str(payload.get("tabset_label")),
        inherited_params=_parse_params(payload.get("inherited_params"), where="inherited_params"),
        params=_parse_params(params_raw, where="params") if params_raw is not None else None,
    )


def _encode_child(child: Group | Item) -> dict[str, Any]:
    if isinstance(child, Group):
        return {
            "group": child.name,
            "label": child.display_label,
            "synthetic": child.synthetic,
            "children": [_encode_child(grandchild) for grandchild in child.children],
        }
    return {"item": encode_item(child)}


def _decode_child(raw: Any, parents: tuple[Group, ...]) -> Group | Item:
    if not isinstance(raw, Mapping):
        raise ValueError(f"Snapshot nodes must be mappings; got {type(raw).__name__}.")
    if "item" in raw:
        item = decode_item(cast(Mapping[str, Any], raw["item"]))
        _check_placement(item, parents)
        return item
    if "group" in raw:
        name = raw.get("group")
        if not isinstance(name, str) or not name:
            raise ValueError(f"Snapshot group names must be non-empty strings; got {name!r}.")
        group = Group(name, display_label=_parse_optional_str(raw.get("label")), synthetic=bool(raw.get("synthetic")))
        for grandchild in _parse_list(raw.get("children"), where=f"group {name!r} children"):
            group.append(_decode_child(grandchild, (*parents, group)))
        return group
    raise ValueError("Snapshot nodes must contain either 'group' or 'item'.")


def _encode_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _encode_value(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode_value(val) for val in value]
    return value


def _decode_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _decode_value(val) for key, val in value.items()}
    if isinstance(value, list):
        return tuple(_decode_value(val) for val in value)
    return value


def _parse_params(value: Any, *, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"Snapshot {where} must be a mapping; got {type(value).__name__}.")
    return {str(key): _decode_value(val) for key, val in value.items()}


def _parse_list(value: Any, *, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"Snapshot {where} must be a list; got {type(value).__name__}.")
    return value


def _parse_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _check_placement(item: Item, parents: tuple[Group, ...]) -> None:
    """Reject items nested somewhere other than their own group path."""

    expected = [(segment, False) for segment in item.group_path]
    if item.tabset_label is not None:
        expected.append((item.tabset_label, True))
    actual = [(group.name, group.synthetic) for group in parents]
    if actual != expected:
        where = "/".join(name for name, _ in actual) or "<root>"
        raise ValueError(
            f"Snapshot places a {item.kind} item under {where} but its group path and tabset label give "
            f"{'/'.join(name for name, _ in expected) or '<root>'}."
        )
