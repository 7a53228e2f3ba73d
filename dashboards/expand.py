"""Expand one multi-valued visualization call into several visualizations."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final

from contenttree import InvalidItemError, ItemKind
from contenttree.paths import PathInput

EXPANDABLE_PARAMS: Final[tuple[str, ...]] = (
    "response_var",
    "x_var",
    "y_var",
    "stack_var",
    "questions",
    "group_var",
    "title",
)


@dataclass(frozen=True, slots=True)
class Expansion:
    """Parameters and placement of one expanded visualization."""

    params: dict[str, Any]
    tabgroup: PathInput = None


def expand_vizzes(
    params: Mapping[str, Any],
    *,
    tabgroup: PathInput = None,
    tabgroups: Sequence[PathInput] | None = None,
    tabgroup_template: str | None = None,
    title_template: str | None = None,
) -> tuple[Expansion, ...]:
    """Split list-valued expandable parameters into one parameter set each.

    A parameter in `EXPANDABLE_PARAMS` given as a list or tuple of two or more
    values drives the expansion; every other parameter is shared by all
    expansions. Templates are `str.format` strings that may reference ``{i}``
    (1-based position) and any parameter of the current expansion.

    Args:
        params: Visualization parameters, some of them list-valued.
        tabgroup: Grouping path shared by all expansions.
        tabgroups: One grouping path per expansion.
        tabgroup_template: Template rendered into each expansion's grouping path.
        title_template: Template rendered into each expansion's title.

    Returns:
        Expansions in order.

    Raises:
        InvalidItemError: When nothing expands, lengths differ, more than one
            placement option is given, or a template cannot be rendered.
    """

    vector_params = [
        name for name in EXPANDABLE_PARAMS if _is_vector(params.get(name)) and len(params[name]) > 1
    ]
    if not vector_params:
        raise InvalidItemError(
            "No expandable parameter holds more than one value; use add_viz() for a single visualization. "
            f"Expandable parameters: {', '.join(EXPANDABLE_PARAMS)}.",
            kind=ItemKind.visualization,
        )

    count = len(params[vector_params[0]])
    mismatched = [name for name in vector_params if len(params[name]) != count]
    if mismatched:
        found = ", ".join(f"{name}={len(params[name])}" for name in vector_params)
        raise InvalidItemError(
            f"All expandable parameters must have the same length. Found: {found}.",
            kind=ItemKind.visualization,
        )

    placements = [option for option in (tabgroup, tabgroups, tabgroup_template) if option is not None]
    if len(placements) > 1:
        raise InvalidItemError(
            "Pass only one of tabgroup, tabgroups or tabgroup_template.",
            kind=ItemKind.visualization,
        )
    if tabgroups is not None and len(tabgroups) != count:
        raise InvalidItemError(
            f"tabgroups has {len(tabgroups)} entries but the expansion produces {count} visualizations.",
            kind=ItemKind.visualization,
        )

    expansions: list[Expansion] = []
    for index in range(count):
        current = {
            name: (value[index] if name in vector_params else value) for name, value in params.items()
        }
        placement: PathInput = tabgroup
        if tabgroup_template is not None:
            placement = _render(tabgroup_template, index, current)
        elif tabgroups is not None:
            placement = tabgroups[index]
        if title_template is not None:
            current["title"] = _render(title_template, index, current)
        expansions.append(Expansion(params=current, tabgroup=placement))
    return tuple(expansions)


def _is_vector(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _render(template: str, index: int, params: Mapping[str, Any]) -> str:
    try:
        return template.format_map({**params, "i": index + 1})
    except (AttributeError, KeyError, IndexError, TypeError, ValueError) as exc:
        raise InvalidItemError(
            f"Template {template!r} could not be rendered: {exc}.",
            kind=ItemKind.visualization,
        ) from exc
