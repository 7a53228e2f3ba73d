"""Fluent content collections.

A `ContentCollection` is an immutable value: every ``add_*`` call returns a new
collection and leaves the original untouched, so partially built collections
can be shared and extended independently. `build()` resolves defaults,
validates, and folds the items into a frozen tree.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Self

from contenttree import (
    DEFAULT_REGISTRY,
    InvalidItemError,
    Item,
    ItemKind,
    ParameterLayer,
    ParameterRegistry,
    Tree,
    ValidationResult,
    apply_labels,
    build_tree,
    make_item,
    merge_labels,
    resolve_items,
    validate_items,
)
from contenttree.paths import PathInput

from .expand import expand_vizzes
from .settings import SETTINGS
from .summary import format_tree

logger = logging.getLogger(__name__)

LayerInput = ParameterLayer | Mapping[str, Any] | None


class AuthoringMixin:
    """Shared ``add_*`` vocabulary for collections and pages.

    Subclasses implement `add_item`, which returns a new instance holding one
    more item.
    """

    __slots__ = ()

    def add_item(
        self,
        kind: ItemKind | str,
        *,
        tabgroup: PathInput = None,
        tabset_label: str | None = None,
        **params: Any,
    ) -> Self:
        raise NotImplementedError

    def add_viz(
        self,
        type: str | None = None,
        *,
        tabgroup: PathInput = None,
        tabset_label: str | None = None,
        **params: Any,
    ) -> Self:
        """Add one visualization.

        Args:
            type: Chart type; may also come from collection or page defaults.
            tabgroup: Grouping path (``"a/b"``, a segment sequence, or a level mapping).
            tabset_label: Optional sub-group label within the tab group.
            **params: Visualization parameters overriding inherited defaults.

        Returns:
            A new instance with the visualization appended.
        """

        if type is not None:
            params["type"] = type
        return self.add_item(ItemKind.visualization, tabgroup=tabgroup, tabset_label=tabset_label, **params)

    def add_vizzes(
        self,
        *,
        tabgroup: PathInput = None,
        tabgroups: Sequence[PathInput] | None = None,
        tabgroup_template: str | None = None,
        title_template: str | None = None,
        tabset_label: str | None = None,
        **params: Any,
    ) -> Self:
        """Add one visualization per value of the list-valued expandable parameters.

        See `dashboards.expand.expand_vizzes` for the expansion rules.
        """

        result = self
        for expansion in expand_vizzes(
            params,
            tabgroup=tabgroup,
            tabgroups=tabgroups,
            tabgroup_template=tabgroup_template,
            title_template=title_template,
        ):
            result = result.add_viz(tabgroup=expansion.tabgroup, tabset_label=tabset_label, **expansion.params)
        return result

    def add_text(self, *lines: str, tabgroup: PathInput = None) -> Self:
        """Add markdown text; multiple lines are joined with newlines."""

        return self.add_item(ItemKind.text, tabgroup=tabgroup, content="\n".join(lines))

    def add_callout(self, content: str, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.callout, tabgroup=tabgroup, content=content, **params)

    def add_image(self, src: str, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.image, tabgroup=tabgroup, src=src, **params)

    def add_accordion(self, title: str, text: str, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.accordion, tabgroup=tabgroup, title=title, text=text, **params)

    def add_card(self, text: str, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.card, tabgroup=tabgroup, text=text, **params)

    def add_divider(self, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.divider, tabgroup=tabgroup, **params)

    def add_code(self, code: str, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.code, tabgroup=tabgroup, code=code, **params)

    def add_spacer(self, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.spacer, tabgroup=tabgroup, **params)

    def add_html(self, html: str, *, tabgroup: PathInput = None) -> Self:
        return self.add_item(ItemKind.html, tabgroup=tabgroup, html=html)

    def add_quote(self, quote: str, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.quote, tabgroup=tabgroup, quote=quote, **params)

    def add_badge(self, text: str, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.badge, tabgroup=tabgroup, text=text, **params)

    def add_metric(self, value: Any, title: str, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.metric, tabgroup=tabgroup, value=value, title=title, **params)

    def add_value_box(self, title: str, value: Any, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.value_box, tabgroup=tabgroup, title=title, value=value, **params)

    def add_value_box_row(self, *boxes: Mapping[str, Any], tabgroup: PathInput = None) -> Self:
        """Add a row of value boxes rendered side by side.

        Each box is a mapping of ``value_box`` parameters (``title``, ``value``, ...).
        """

        return self.add_item(ItemKind.value_box_row, tabgroup=tabgroup, boxes=boxes)

    def add_iframe(self, src: str, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.iframe, tabgroup=tabgroup, src=src, **params)

    def add_video(self, src: str, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.video, tabgroup=tabgroup, src=src, **params)

    def add_table(self, table: Any, *, tabgroup: PathInput = None, **params: Any) -> Self:
        return self.add_item(ItemKind.table, tabgroup=tabgroup, table=table, **params)

    def add_pagination(self, separator_text: str | None = None) -> Self:
        """Add a page break; content after it renders on the next section."""

        return self.add_item(ItemKind.page_break, separator_text=separator_text)


@dataclass(frozen=True, slots=True)
class ContentCollection(AuthoringMixin):
    """An ordered, immutable sequence of content items.

    Args:
        items: Items in add order.
        defaults: Collection default layer, captured onto each item when added.
        labels: Group name to display label overrides.
        registry: Schema registry used for name checks and resolution.
        strict_paths: Reject grouping paths that reduce to no segments.
    """

    items: tuple[Item, ...] = ()
    defaults: LayerInput = None
    labels: Mapping[str, str] = field(default_factory=dict)
    registry: ParameterRegistry = DEFAULT_REGISTRY
    strict_paths: bool = SETTINGS.strict_paths

    def __post_init__(self) -> None:
        layer = _as_layer(self.defaults, scope="collection")
        self.registry.check_layer_names(layer.defined().keys(), scope="collection defaults")
        object.__setattr__(self, "defaults", layer)
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))

    @classmethod
    def create(
        cls,
        *,
        labels: Mapping[str, str] | None = None,
        registry: ParameterRegistry = DEFAULT_REGISTRY,
        strict_paths: bool | None = None,
        **defaults: Any,
    ) -> ContentCollection:
        """Create an empty collection whose keyword arguments form its default layer."""

        return cls(
            defaults=defaults,
            labels=labels or {},
            registry=registry,
            strict_paths=SETTINGS.strict_paths if strict_paths is None else strict_paths,
        )

    def add_item(
        self,
        kind: ItemKind | str,
        *,
        tabgroup: PathInput = None,
        tabset_label: str | None = None,
        **params: Any,
    ) -> ContentCollection:
        """Return a new collection with one more item appended.

        Raises:
            UnknownParameterError: When a parameter is not recognized for the kind.
            InvalidPathError: When the grouping path cannot be parsed.
            InvalidItemError: When placement rules are violated.
        """

        item_kind = ItemKind(kind)
        schema = self.registry.schema(item_kind)
        item = make_item(
            item_kind,
            tabgroup=tabgroup,
            tabset_label=tabset_label,
            inherited=self.defaults.defined() if schema.inherits_defaults else None,
            registry=self.registry,
            strict_paths=self.strict_paths,
            **params,
        )
        return replace(self, items=(*self.items, item))

    def with_defaults(self, **defaults: Any) -> ContentCollection:
        """Return a collection whose later additions inherit the updated defaults."""

        return replace(self, defaults=self.defaults.overlay(defaults))

    def with_labels(self, labels: Mapping[str, str] | None = None, **more: str) -> ContentCollection:
        """Return a collection with additional group label overrides (new ones win)."""

        return replace(self, labels=merge_labels(self.labels, labels, more))

    def combine(self, other: ContentCollection) -> ContentCollection:
        """Concatenate two collections.

        Items keep their captured defaults. The combined default layer and
        label map are copies with `other` winning per key.
        """

        return replace(
            self,
            items=(*self.items, *other.items),
            defaults=self.defaults.overlay(other.defaults),
            labels=merge_labels(self.labels, other.labels),
        )

    def resolved_items(
        self,
        *,
        page_layer: LayerInput = None,
        base_layer: LayerInput = None,
    ) -> tuple[Item, ...]:
        """Return the items stamped with their effective parameters."""

        return resolve_items(self.items, page_layer=page_layer, base_layer=base_layer, registry=self.registry)

    def validate(
        self,
        *,
        page_layer: LayerInput = None,
        base_layer: LayerInput = None,
    ) -> ValidationResult:
        """Validate every item against its effective parameters."""

        resolved = self.resolved_items(page_layer=page_layer, base_layer=base_layer)
        return validate_items(resolved, registry=self.registry)

    def build(
        self,
        *,
        page_layer: LayerInput = None,
        base_layer: LayerInput = None,
        relabel: bool = True,
    ) -> Tree:
        """Resolve, validate and fold the items into a frozen tree.

        Args:
            page_layer: Page default layer, inner to the collection's.
            base_layer: Dashboard/settings layer, outer to the collection's.
            relabel: Apply the collection's label overrides to the result.

        Returns:
            Frozen tree.

        Raises:
            InvalidItemError: When any item fails validation.
        """

        resolved = self.resolved_items(page_layer=page_layer, base_layer=base_layer)
        result = validate_items(resolved, registry=self.registry)
        for warning in result.warnings:
            logger.warning(warning)
        if not result.is_valid:
            raise InvalidItemError(
                f"Collection has {len(result.errors)} invalid item(s): {result.errors[0]}",
                kind="collection",
                errors=result.errors,
            )

        tree = build_tree(resolved)
        logger.debug("Built collection tree with %d item(s)", len(resolved))
        if relabel and self.labels:
            tree = apply_labels(tree, self.labels)
        return tree

    def summary(self) -> str:
        """Return a text outline of the collection's grouping."""

        return format_tree(apply_labels(build_tree(self.items), self.labels))

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)


def create_collection(**kwargs: Any) -> ContentCollection:
    """Create an empty collection; see `ContentCollection.create`."""

    return ContentCollection.create(**kwargs)


def combine_collections(*collections: ContentCollection) -> ContentCollection:
    """Left fold of `ContentCollection.combine`; no arguments yields an empty collection."""

    if not collections:
        return ContentCollection()
    result = collections[0]
    for collection in collections[1:]:
        result = result.combine(collection)
    return result


def _as_layer(value: LayerInput, *, scope: str) -> ParameterLayer:
    if isinstance(value, ParameterLayer):
        return value
    return ParameterLayer(scope=scope, values=value or {})
