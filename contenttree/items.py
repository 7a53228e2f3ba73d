"""Content items: the leaves of a content tree."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from .errors import InvalidItemError, InvalidPathError
from .parameters import DEFAULT_REGISTRY, ItemKind, ParameterRegistry
from .paths import SEPARATOR, PathInput, parse_path


@dataclass(frozen=True, slots=True)
class Item:
    """A single content unit placed in a content tree.

    Args:
        kind: Content kind; decides which parameters are recognized.
        local_params: Explicit overrides supplied when the item was created.
        group_path: Tab-group segments from root to the item's group; empty for root.
        tabset_label: Visualization-only secondary grouping key. Items sharing a
            path but differing in label land in sibling sub-groups.
        inherited_params: Collection default layer captured when the item was added.
        params: Effective parameters once resolved, otherwise None.
    """

    kind: ItemKind
    local_params: Mapping[str, Any] = field(default_factory=dict)
    group_path: tuple[str, ...] = ()
    tabset_label: str | None = None
    inherited_params: Mapping[str, Any] = field(default_factory=dict)
    params: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        kind = ItemKind(self.kind)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "local_params", MappingProxyType(dict(self.local_params)))
        object.__setattr__(self, "inherited_params", MappingProxyType(dict(self.inherited_params)))
        if self.params is not None:
            object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

        path = tuple(self.group_path)
        for segment in path:
            if not isinstance(segment, str) or not segment or segment != segment.strip() or SEPARATOR in segment:
                raise InvalidPathError(
                    f"Item group_path segments must be non-empty trimmed names; got {segment!r}.",
                    path=list(path),
                )
        object.__setattr__(self, "group_path", path)

        if kind == ItemKind.page_break and path:
            raise InvalidItemError("Page breaks attach to the root and cannot carry a group path.", kind=kind)
        if self.tabset_label is not None:
            if kind != ItemKind.visualization:
                raise InvalidItemError(
                    f"tabset_label is only supported for visualizations, not {kind}.",
                    kind=kind,
                )
            label = str(self.tabset_label).strip()
            if not label:
                raise InvalidItemError("tabset_label must be a non-empty string.", kind=kind)
            object.__setattr__(self, "tabset_label", label)

    @property
    def is_page_break(self) -> bool:
        return self.kind == ItemKind.page_break

    @property
    def is_resolved(self) -> bool:
        return self.params is not None

    def get(self, name: str, default: Any = None) -> Any:
        """Return a parameter value, preferring effective parameters when resolved."""

        source = self.params if self.params is not None else self.local_params
        value = source.get(name)
        return default if value is None else value

    def with_params(self, params: Mapping[str, Any]) -> Item:
        """Return a copy stamped with effective parameters."""

        return replace(self, params=params)


def make_item(
    kind: ItemKind | str,
    *,
    tabgroup: PathInput = None,
    tabset_label: str | None = None,
    inherited: Mapping[str, Any] | None = None,
    registry: ParameterRegistry = DEFAULT_REGISTRY,
    strict_paths: bool = False,
    **params: Any,
) -> Item:
    """Construct an item, rejecting parameters its kind does not recognize.

    Args:
        kind: Item kind.
        tabgroup: Grouping path in any form accepted by `parse_path`.
        tabset_label: Optional visualization sub-group label.
        inherited: Collection default layer in effect when the item is added.
        registry: Schema registry used for name checks.
        strict_paths: Forwarded to `parse_path`.
        **params: Local parameter overrides.

    Returns:
        A new, unresolved Item.

    Raises:
        UnknownParameterError: When a parameter name is not recognized for the kind.
        InvalidPathError: When the grouping path cannot be parsed.
        InvalidItemError: When placement rules are violated.
    """

    item_kind = ItemKind(kind)
    registry.check_names(item_kind, params.keys())
    if item_kind == ItemKind.value_box_row:
        params["boxes"] = _normalize_boxes(params.get("boxes") or (), registry=registry)
    return Item(
        kind=item_kind,
        local_params=params,
        group_path=parse_path(tabgroup, strict=strict_paths),
        tabset_label=tabset_label,
        inherited_params=inherited or {},
    )


def _normalize_boxes(
    boxes: Sequence[Mapping[str, Any]],
    *,
    registry: ParameterRegistry,
) -> tuple[Mapping[str, Any], ...]:
    """Validate value boxes of a row and fill each with its schema defaults."""

    schema = registry.schema(ItemKind.value_box)
    normalized: list[Mapping[str, Any]] = []
    for box in boxes:
        if not isinstance(box, Mapping):
            raise InvalidItemError(
                f"Value box rows hold mappings of value_box parameters; got {type(box).__name__}.",
                kind=ItemKind.value_box_row,
            )
        registry.check_names(ItemKind.value_box, box.keys())
        filled = schema.defaults()
        filled.update({key: value for key, value in box.items() if value is not None})
        normalized.append(MappingProxyType(filled))
    return tuple(normalized)
