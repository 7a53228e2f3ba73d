"""Closed parameter schemas per item kind.

Each item kind declares the exact set of parameters it recognizes, with their
system-wide defaults and, where the value set is closed, the allowed choices.
Unknown names are rejected when an item is constructed, with an edit-distance
suggestion, instead of being silently dropped.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Final

from .errors import UnknownParameterError


class ItemKind(StrEnum):
    """Content kinds a collection can hold.

    Values are stable identifiers shared by schemas, snapshots and renderers.
    """

    visualization = "visualization"
    text = "text"
    callout = "callout"
    image = "image"
    accordion = "accordion"
    card = "card"
    divider = "divider"
    page_break = "page_break"
    value_box_row = "value_box_row"
    value_box = "value_box"
    metric = "metric"
    badge = "badge"
    quote = "quote"
    code = "code"
    spacer = "spacer"
    html = "html"
    iframe = "iframe"
    video = "video"
    table = "table"


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """Describe one recognized parameter.

    Args:
        name: Parameter name as written by authors.
        default: System-wide default used when no layer sets the parameter.
        choices: Allowed values when the value set is closed.
        description: Optional help text.
    """

    name: str
    default: Any = None
    choices: frozenset[str] | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class ItemSchema:
    """Recognized parameters for one item kind.

    Args:
        kind: Item kind the schema applies to.
        parameters: Recognized parameters in declaration order.
        required: Parameter names that must resolve to a concrete value.
        inherits_defaults: Whether collection/page default layers apply to the kind.
    """

    kind: ItemKind
    parameters: tuple[ParameterSpec, ...]
    required: tuple[str, ...] = ()
    inherits_defaults: bool = False

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.parameters)

    def get(self, name: str) -> ParameterSpec | None:
        """Return the spec for a parameter name, or None when unrecognized."""

        for spec in self.parameters:
            if spec.name == name:
                return spec
        return None

    def defaults(self) -> dict[str, Any]:
        """Return the system-wide default for every recognized parameter."""

        return {spec.name: spec.default for spec in self.parameters}


class ParameterRegistry:
    """Lookup and name checks for item schemas."""

    def __init__(self, schemas: Iterable[ItemSchema]) -> None:
        """Initialize a registry from a collection of schemas."""

        self._schemas: dict[ItemKind, ItemSchema] = {}
        for schema in schemas:
            if schema.kind in self._schemas:
                raise ValueError(f"Duplicate ItemSchema kind: {schema.kind!r}")
            seen: set[str] = set()
            for spec in schema.parameters:
                if spec.name in seen:
                    raise ValueError(f"ItemSchema[{schema.kind}] declares {spec.name!r} twice.")
                seen.add(spec.name)
            missing = set(schema.required) - seen
            if missing:
                raise ValueError(f"ItemSchema[{schema.kind}] requires undeclared parameters: {sorted(missing)}.")
            self._schemas[schema.kind] = schema

    def get(self, kind: ItemKind | str) -> ItemSchema | None:
        """Return the schema for a kind, or None when missing."""

        try:
            return self._schemas.get(ItemKind(kind))
        except ValueError:
            return None

    def schema(self, kind: ItemKind | str) -> ItemSchema:
        """Return the schema for a kind.

        Raises:
            KeyError: When no schema is registered for the kind.
        """

        schema = self.get(kind)
        if schema is None:
            raise KeyError(f"No ItemSchema registered for kind {kind!r}.")
        return schema

    def list(self) -> tuple[ItemSchema, ...]:
        """Return all schemas in registration order."""

        return tuple(self._schemas.values())

    def all_names(self) -> tuple[str, ...]:
        """Return every parameter name recognized by any kind, first-seen order."""

        names: dict[str, None] = {}
        for schema in self._schemas.values():
            for name in schema.names:
                names.setdefault(name, None)
        return tuple(names)

    def check_names(self, kind: ItemKind | str, names: Iterable[str]) -> None:
        """Reject parameter names the kind does not recognize.

        Raises:
            UnknownParameterError: On the first unrecognized name.
        """

        schema = self.schema(kind)
        recognized = schema.names
        for name in names:
            if name not in recognized:
                raise UnknownParameterError(
                    parameter=name,
                    kind=str(schema.kind),
                    suggestion=closest_match(name, recognized),
                    available=recognized,
                )

    def check_layer_names(self, names: Iterable[str], *, scope: str) -> None:
        """Reject default-layer names that no item kind recognizes.

        Args:
            names: Names defined by a collection/page/dashboard default layer.
            scope: Layer scope used in the error message (e.g. ``"page defaults"``).
        """

        recognized = self.all_names()
        for name in names:
            if name not in recognized:
                raise UnknownParameterError(
                    parameter=name,
                    kind=scope,
                    suggestion=closest_match(name, recognized),
                    available=recognized,
                )


def edit_distance(a: str, b: str) -> int:
    """Return the case-insensitive Levenshtein distance between two names."""

    a = a.casefold()
    b = b.casefold()
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def closest_match(name: str, options: Sequence[str]) -> str | None:
    """Return the option nearest to `name` by edit distance (first wins ties)."""

    best: str | None = None
    best_distance = 0
    for option in options:
        distance = edit_distance(name, option)
        if best is None or distance < best_distance:
            best = option
            best_distance = distance
    return best


def _p(name: str, default: Any = None, *, choices: Iterable[str] | None = None, description: str | None = None) -> ParameterSpec:
    return ParameterSpec(
        name=name,
        default=default,
        choices=frozenset(choices) if choices is not None else None,
        description=description,
    )


VISUALIZATION_TYPES: Final[tuple[str, ...]] = (
    "bar",
    "histogram",
    "stackedbar",
    "stackedbars",
    "timeline",
    "heatmap",
    "scatter",
    "boxplot",
    "density",
    "pie",
    "treemap",
    "map",
    "funnel",
    "gauge",
    "lollipop",
    "dumbbell",
    "sankey",
    "waffle",
)

CALLOUT_TYPES: Final[tuple[str, ...]] = ("note", "tip", "warning", "caution", "important")

_VISUALIZATION = ItemSchema(
    kind=ItemKind.visualization,
    parameters=(
        _p("type", choices=VISUALIZATION_TYPES, description="Chart type rendered for the leaf."),
        _p("title"),
        _p("title_tabset", description="Short tab label; falls back to title."),
        _p("text", description="Markdown shown next to the chart."),
        _p("text_position", "above", choices=("above", "below")),
        _p("icon"),
        _p("height"),
        _p("data", description="Dataset reference handed to the data collaborator."),
        _p("filter", description="Row predicate applied to the dataset before rendering."),
        _p("weight_var"),
        _p("drop_na_vars", False),
        _p("x_var"),
        _p("y_var"),
        _p("group_var"),
        _p("stack_var"),
        _p("response_var"),
        _p("time_var"),
        _p("questions"),
        _p("value_var"),
        _p("color_var"),
        _p("size_var"),
        _p("region_var"),
        _p("tooltip_vars"),
        _p("x_label"),
        _p("y_label"),
        _p("color"),
        _p("color_palette"),
        _p("bins"),
        _p("stacked_type", choices=("counts", "percent")),
        _p("horizontal", False),
        _p("chart_type"),
        _p("legend_position"),
        _p("backend", "highcharter", description="Rendering backend used for the leaf."),
        _p("theme"),
    ),
    required=("type",),
    inherits_defaults=True,
)

DEFAULT_SCHEMAS: Final[tuple[ItemSchema, ...]] = (
    _VISUALIZATION,
    ItemSchema(kind=ItemKind.text, parameters=(_p("content"),), required=("content",)),
    ItemSchema(
        kind=ItemKind.callout,
        parameters=(
            _p("content"),
            _p("callout_type", "note", choices=CALLOUT_TYPES),
            _p("title"),
            _p("icon"),
            _p("collapse", False),
        ),
        required=("content",),
    ),
    ItemSchema(
        kind=ItemKind.image,
        parameters=(
            _p("src"),
            _p("alt", ""),
            _p("caption"),
            _p("width"),
            _p("height"),
            _p("align", "center", choices=("left", "center", "right")),
            _p("link"),
            _p("css_class"),
        ),
        required=("src",),
    ),
    ItemSchema(
        kind=ItemKind.accordion,
        parameters=(_p("title"), _p("text"), _p("open", False)),
        required=("title", "text"),
    ),
    ItemSchema(kind=ItemKind.card, parameters=(_p("text"), _p("title"), _p("footer")), required=("text",)),
    ItemSchema(
        kind=ItemKind.divider,
        parameters=(_p("style", "default", choices=("default", "thick", "dashed", "dotted")),),
    ),
    ItemSchema(kind=ItemKind.page_break, parameters=(_p("separator_text"),)),
    ItemSchema(kind=ItemKind.value_box_row, parameters=(_p("boxes", ()),), required=("boxes",)),
    ItemSchema(
        kind=ItemKind.value_box,
        parameters=(
            _p("title"),
            _p("value"),
            _p("logo_url"),
            _p("logo_text"),
            _p("bg_color", "#2c3e50"),
            _p("description"),
            _p("description_title", "About this source"),
        ),
        required=("title", "value"),
    ),
    ItemSchema(
        kind=ItemKind.metric,
        parameters=(_p("value"), _p("title"), _p("icon"), _p("color"), _p("subtitle")),
        required=("value", "title"),
    ),
    ItemSchema(
        kind=ItemKind.badge,
        parameters=(
            _p("text"),
            _p("color", "primary", choices=("success", "warning", "danger", "info", "primary", "secondary")),
        ),
        required=("text",),
    ),
    ItemSchema(
        kind=ItemKind.quote,
        parameters=(_p("quote"), _p("attribution"), _p("cite")),
        required=("quote",),
    ),
    ItemSchema(
        kind=ItemKind.code,
        parameters=(_p("code"), _p("language", "python"), _p("caption"), _p("filename")),
        required=("code",),
    ),
    ItemSchema(kind=ItemKind.spacer, parameters=(_p("height", "2rem"),)),
    ItemSchema(kind=ItemKind.html, parameters=(_p("html"),), required=("html",)),
    ItemSchema(
        kind=ItemKind.iframe,
        parameters=(_p("src"), _p("height", "500px"), _p("width", "100%")),
        required=("src",),
    ),
    ItemSchema(
        kind=ItemKind.video,
        parameters=(_p("src"), _p("caption"), _p("width"), _p("height")),
        required=("src",),
    ),
    ItemSchema(
        kind=ItemKind.table,
        parameters=(
            _p("table"),
            _p("caption"),
            _p("engine", "table", choices=("table", "gt", "reactable", "datatable")),
            _p("options"),
        ),
        required=("table",),
    ),
)

DEFAULT_REGISTRY: Final[ParameterRegistry] = ParameterRegistry(DEFAULT_SCHEMAS)
