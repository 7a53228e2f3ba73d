"""Layered default-parameter resolution.

Parameters are resolved through a chain of layers, outermost first:

    schema defaults -> base (dashboard/settings) -> collection -> page -> item

The innermost layer that supplies a concrete value wins. A layer that maps a
name to ``None`` is treated exactly as if it did not define the name, so it
never shadows an outer layer's real value.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .items import Item
from .parameters import DEFAULT_REGISTRY, ParameterRegistry


@dataclass(frozen=True, slots=True)
class ParameterLayer:
    """One scope's named default values.

    Args:
        scope: Human-readable scope name (``"collection"``, ``"page"``, ...).
        values: Parameter name to value; ``None`` values mean "not set".
    """

    scope: str
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def defined(self) -> dict[str, Any]:
        """Return only the names this layer sets to a concrete value."""

        return _defined(self.values)

    def overlay(self, other: ParameterLayer | Mapping[str, Any] | None) -> ParameterLayer:
        """Return a layer where `other`'s concrete values replace this layer's."""

        merged = dict(self.values)
        merged.update(_defined(_layer_values(other)))
        return ParameterLayer(scope=self.scope, values=merged)


def merge_layers(*layers: ParameterLayer | Mapping[str, Any] | None) -> dict[str, Any]:
    """Right-biased merge of layers, skipping unset (None) values.

    Args:
        *layers: Layers ordered outermost first; ``None`` entries are ignored.

    Returns:
        A plain dict holding, per name, the value from the innermost layer that set it.
    """

    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(_defined(_layer_values(layer)))
    return merged


def resolve(
    collection_layer: ParameterLayer | Mapping[str, Any] | None,
    page_layer: ParameterLayer | Mapping[str, Any] | None,
    item: Item,
    *,
    registry: ParameterRegistry = DEFAULT_REGISTRY,
    base_layer: ParameterLayer | Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Resolve the effective parameters of one item.

    Outer layers only apply to kinds whose schema inherits defaults, and only
    for names the kind recognizes; other names in outer layers target other
    kinds and are skipped.

    Args:
        collection_layer: Collection defaults.
        page_layer: Page defaults.
        item: Item whose local overrides form the innermost layer.
        registry: Schema registry for the item kind.
        base_layer: Optional layer below the collection (dashboard/settings).

    Returns:
        Mapping with exactly one value for every parameter the kind recognizes.

    Raises:
        UnknownParameterError: When the item's local overrides name an
            unrecognized parameter.
    """

    schema = registry.schema(item.kind)
    registry.check_names(item.kind, item.local_params.keys())

    effective = schema.defaults()
    if schema.inherits_defaults:
        outer = merge_layers(base_layer, collection_layer, page_layer)
        effective.update({name: value for name, value in outer.items() if name in effective})
    effective.update(_defined(item.local_params))
    return effective


def resolve_item(
    item: Item,
    *,
    page_layer: ParameterLayer | Mapping[str, Any] | None = None,
    base_layer: ParameterLayer | Mapping[str, Any] | None = None,
    registry: ParameterRegistry = DEFAULT_REGISTRY,
) -> Item:
    """Stamp an item with its effective parameters.

    The collection layer is the one captured on the item when it was added.
    """

    params = resolve(
        item.inherited_params,
        page_layer,
        item,
        registry=registry,
        base_layer=base_layer,
    )
    return item.with_params(params)


def resolve_items(
    items: Iterable[Item],
    *,
    page_layer: ParameterLayer | Mapping[str, Any] | None = None,
    base_layer: ParameterLayer | Mapping[str, Any] | None = None,
    registry: ParameterRegistry = DEFAULT_REGISTRY,
) -> tuple[Item, ...]:
    """Resolve a sequence of items, preserving order."""

    return tuple(
        resolve_item(item, page_layer=page_layer, base_layer=base_layer, registry=registry) for item in items
    )


def _layer_values(layer: ParameterLayer | Mapping[str, Any] | None) -> Mapping[str, Any]:
    if layer is None:
        return {}
    if isinstance(layer, ParameterLayer):
        return layer.values
    return layer


def _defined(values: Mapping[str, Any]) -> dict[str, Any]:
    return {name: value for name, value in values.items() if value is not None}
