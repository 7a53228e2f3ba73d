"""Dashboard pages: metadata plus content collections merged into one tree."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Literal

from contenttree import (
    DEFAULT_REGISTRY,
    ItemKind,
    ParameterLayer,
    ParameterRegistry,
    Tree,
    ValidationResult,
    apply_labels,
    merge_all,
    merge_labels,
    merge_layers,
)
from contenttree.paths import PathInput

from .collection import AuthoringMixin, ContentCollection, LayerInput
from .settings import SETTINGS

logger = logging.getLogger(__name__)

NavbarAlign = Literal["left", "right"]


@dataclass(frozen=True, slots=True)
class PageMetadata:
    """Page facts handed to the site generator alongside the tree."""

    name: str
    icon: str | None = None
    navbar_align: NavbarAlign = "left"
    is_landing_page: bool = False
    has_data: bool = False


@dataclass(frozen=True, slots=True)
class Page(AuthoringMixin):
    """One dashboard page.

    Content arrives either through the ``add_*`` methods or as whole
    collections via `add_content`; both keep their call order.

    Args:
        name: Page name; unique within a dashboard.
        data: Dataset reference used by visualizations that set none.
        icon: Optional navbar icon (``collection:name``).
        navbar_align: Navbar side the page link sits on.
        is_landing_page: Whether the page is the dashboard's landing page.
        defaults: Page default layer; inner to collection defaults.
        labels: Group label overrides; win over collection labels.
        content: Attached collections in order.
    """

    name: str
    data: Any = None
    icon: str | None = None
    navbar_align: NavbarAlign = "left"
    is_landing_page: bool = False
    defaults: LayerInput = None
    labels: Mapping[str, str] = field(default_factory=dict)
    content: tuple[ContentCollection, ...] = ()
    registry: ParameterRegistry = DEFAULT_REGISTRY
    strict_paths: bool = SETTINGS.strict_paths

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Page.name must be a non-empty string.")
        if self.navbar_align not in ("left", "right"):
            raise ValueError(f"Page[{self.name}].navbar_align must be 'left' or 'right'; got {self.navbar_align!r}.")
        layer = self.defaults if isinstance(self.defaults, ParameterLayer) else ParameterLayer("page", self.defaults or {})
        self.registry.check_layer_names(layer.defined().keys(), scope="page defaults")
        object.__setattr__(self, "defaults", layer)
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))
        object.__setattr__(self, "content", tuple(self.content))

    @property
    def metadata(self) -> PageMetadata:
        return PageMetadata(
            name=self.name,
            icon=self.icon,
            navbar_align=self.navbar_align,
            is_landing_page=self.is_landing_page,
            has_data=self.data is not None,
        )

    def add_item(
        self,
        kind: ItemKind | str,
        *,
        tabgroup: PathInput = None,
        tabset_label: str | None = None,
        **params: Any,
    ) -> Page:
        """Return a page with one directly added item appended to its content."""

        direct = ContentCollection(registry=self.registry, strict_paths=self.strict_paths).add_item(
            kind,
            tabgroup=tabgroup,
            tabset_label=tabset_label,
            **params,
        )
        return replace(self, content=(*self.content, direct))

    def add_content(self, *collections: ContentCollection) -> Page:
        """Return a page with collections attached after the existing content."""

        return replace(self, content=(*self.content, *collections))

    def with_labels(self, labels: Mapping[str, str] | None = None, **more: str) -> Page:
        return replace(self, labels=merge_labels(self.labels, labels, more))

    def with_defaults(self, **defaults: Any) -> Page:
        return replace(self, defaults=self.defaults.overlay(defaults))

    def _base_layer(self, base_layer: LayerInput) -> ParameterLayer:
        # Page data sits just outside collection defaults so collections and items can override it.
        return ParameterLayer("base", merge_layers(base_layer, {"data": self.data}))

    def validate(self, *, base_layer: LayerInput = None) -> ValidationResult:
        """Validate every attached collection against this page's layers."""

        errors: list[str] = []
        warnings: list[str] = []
        base = self._base_layer(base_layer)
        for index, collection in enumerate(self.content):
            result = collection.validate(page_layer=self.defaults, base_layer=base)
            errors.extend(f"Page[{self.name}].content[{index}] {message}" for message in result.errors)
            warnings.extend(f"Page[{self.name}].content[{index}] {message}" for message in result.warnings)
        return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))

    def build(self, *, base_layer: LayerInput = None) -> Tree:
        """Merge all content into one frozen tree with page labels applied last.

        Raises:
            InvalidItemError: When any item fails validation.
            IncompatibleMergeError: When collections disagree on a group's kind.
        """

        base = self._base_layer(base_layer)
        trees = [
            collection.build(page_layer=self.defaults, base_layer=base, relabel=False) for collection in self.content
        ]
        tree = merge_all(*trees)
        labels = merge_labels(*(collection.labels for collection in self.content), self.labels)
        if labels:
            tree = apply_labels(tree, labels)
        logger.debug("Built page %r from %d collection(s)", self.name, len(self.content))
        return tree
