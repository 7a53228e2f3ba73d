"""Dashboards: ordered pages built into trees for the site generator."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from contenttree import DEFAULT_REGISTRY, ParameterLayer, ParameterRegistry, Tree, ValidationResult, merge_layers

from .collection import LayerInput
from .page import Page, PageMetadata
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuiltPage:
    """A page ready for rendering: metadata plus its frozen tree."""

    metadata: PageMetadata
    tree: Tree


@dataclass(frozen=True, slots=True)
class Dashboard:
    """A titled set of pages sharing a base default layer.

    Args:
        title: Dashboard title.
        defaults: Dashboard-wide visualization defaults, outermost author layer.
        pages: Pages in navbar order.
        settings: Settings contributing the backend/theme defaults.
    """

    title: str
    defaults: LayerInput = None
    pages: tuple[Page, ...] = ()
    settings: Settings = field(default_factory=load_settings)
    registry: ParameterRegistry = DEFAULT_REGISTRY

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError("Dashboard.title must be a non-empty string.")
        layer = (
            self.defaults
            if isinstance(self.defaults, ParameterLayer)
            else ParameterLayer("dashboard", self.defaults or {})
        )
        self.registry.check_layer_names(layer.defined().keys(), scope="dashboard defaults")
        object.__setattr__(self, "defaults", layer)
        object.__setattr__(self, "pages", tuple(self.pages))

    def add_page(self, page: Page) -> Dashboard:
        """Return a dashboard with `page` appended.

        Raises:
            ValueError: When the name is taken or a second landing page is added.
        """

        if any(existing.name == page.name for existing in self.pages):
            raise ValueError(f"Dashboard[{self.title}] already has a page named {page.name!r}.")
        if page.is_landing_page:
            landing = self.landing_page
            if landing is not None and landing.is_landing_page:
                raise ValueError(
                    f"Dashboard[{self.title}] already has landing page {landing.name!r}; "
                    f"cannot also mark {page.name!r}."
                )
        return replace(self, pages=(*self.pages, page))

    def add_pages(self, *pages: Page) -> Dashboard:
        result = self
        for page in pages:
            result = result.add_page(page)
        return result

    def with_defaults(self, **defaults: Any) -> Dashboard:
        return replace(self, defaults=self.defaults.overlay(defaults))

    @property
    def landing_page(self) -> Page | None:
        """Return the page marked as landing page, else the first page."""

        for page in self.pages:
            if page.is_landing_page:
                return page
        return self.pages[0] if self.pages else None

    def page(self, name: str) -> Page:
        """Return the page named `name`.

        Raises:
            KeyError: When no page has that name.
        """

        for page in self.pages:
            if page.name == name:
                return page
        raise KeyError(f"Dashboard[{self.title}] has no page named {name!r}.")

    def base_layer(self) -> ParameterLayer:
        """Settings defaults overlaid with the dashboard defaults."""

        return ParameterLayer("dashboard", merge_layers(self.settings.base_defaults(), self.defaults))

    def validate(self) -> ValidationResult:
        errors: list[str] = []
        warnings: list[str] = []
        base = self.base_layer()
        for page in self.pages:
            result = page.validate(base_layer=base)
            errors.extend(result.errors)
            warnings.extend(result.warnings)
        return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))

    def build(self) -> tuple[BuiltPage, ...]:
        """Build every page in order.

        Raises:
            InvalidItemError: When any item fails validation.
            IncompatibleMergeError: When a page's collections disagree on a group's kind.
        """

        base = self.base_layer()
        built = tuple(BuiltPage(metadata=page.metadata, tree=page.build(base_layer=base)) for page in self.pages)
        logger.debug("Built dashboard %r with %d page(s)", self.title, len(built))
        return built
