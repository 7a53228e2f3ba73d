"""Validation of items against their effective parameters.

Name checks happen at item construction; this module checks values once the
default layers are applied, so a required parameter may come from any layer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from numbers import Real
from typing import Any

from .defaults import resolve
from .items import Item
from .parameters import DEFAULT_REGISTRY, ItemKind, ItemSchema, ParameterRegistry, closest_match


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating one or more items."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_item(
    item: Item,
    *,
    registry: ParameterRegistry = DEFAULT_REGISTRY,
    index: int | None = None,
) -> ValidationResult:
    """Validate a single item's effective parameters.

    Unresolved items are checked against their schema defaults plus the
    collection layer captured on the item.

    Args:
        item: Item to validate.
        registry: Schema registry for the item kind.
        index: Optional position used to prefix messages.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []

    schema = registry.schema(item.kind)
    params = item.params if item.params is not None else resolve(item.inherited_params, None, item, registry=registry)
    where = f"Item[{index}:{item.kind}]" if index is not None else f"Item[{item.kind}]"

    _check_required(schema, params, where=where, errors=errors)
    _check_choices(schema, params, where=where, errors=errors)

    if item.kind == ItemKind.visualization:
        height = params.get("height")
        if height is not None and (isinstance(height, bool) or not isinstance(height, Real) or height <= 0):
            errors.append(f"{where}.height must be a positive number; got {height!r}.")
        data_filter = params.get("filter")
        if data_filter is not None and not isinstance(data_filter, str):
            errors.append(f"{where}.filter must be a predicate string; got {type(data_filter).__name__}.")
        if params.get("stacked_type") is not None and params.get("type") not in ("stackedbar", "stackedbars"):
            warnings.append(f"{where}.stacked_type is ignored for type={params.get('type')!r}.")

    icon = params.get("icon") if "icon" in schema.names else None
    if isinstance(icon, str) and icon and ":" not in icon:
        warnings.append(f"{where}.icon {icon!r} should use the 'collection:name' format (e.g. 'ph:chart-bar').")

    if item.kind == ItemKind.value_box_row:
        boxes = params.get("boxes") or ()
        if not boxes:
            errors.append(f"{where}.boxes must contain at least one value box.")
        box_schema = registry.schema(ItemKind.value_box)
        for box_index, box in enumerate(boxes):
            _check_required(box_schema, box, where=f"{where}.boxes[{box_index}]", errors=errors)

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def validate_items(
    items: Iterable[Item],
    *,
    registry: ParameterRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    """Validate items in order and aggregate the messages."""

    errors: list[str] = []
    warnings: list[str] = []
    for index, item in enumerate(items):
        result = validate_item(item, registry=registry, index=index)
        errors.extend(result.errors)
        warnings.extend(result.warnings)
    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def _check_required(schema: ItemSchema, params: Mapping[str, Any], *, where: str, errors: list[str]) -> None:
    for name in schema.required:
        value = params.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(f"{where}.{name} is required.")


def _check_choices(schema: ItemSchema, params: Mapping[str, Any], *, where: str, errors: list[str]) -> None:
    for spec in schema.parameters:
        value = params.get(spec.name)
        if value is None or spec.choices is None or (isinstance(value, str) and value in spec.choices):
            continue
        message = f"{where}.{spec.name} is not a supported value: {value!r}."
        suggestion = closest_match(str(value), sorted(spec.choices))
        if suggestion is not None:
            message += f" Did you mean {suggestion!r}?"
        errors.append(message)
