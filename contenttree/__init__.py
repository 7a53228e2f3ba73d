"""Pure content-tree package.

This package turns flat, ordered "add" calls into nested tab-group trees,
resolves layered default parameters, and merges trees built independently.
It must not perform I/O, read the environment, or log.
"""

from .defaults import ParameterLayer, merge_layers, resolve, resolve_item, resolve_items
from .errors import (
    ContentTreeError,
    DuplicateGroupError,
    IncompatibleMergeError,
    InvalidItemError,
    InvalidPathError,
    TreeFrozenError,
    UnknownParameterError,
)
from .items import Item, make_item
from .labels import apply_labels, merge_labels
from .merge import merge, merge_all
from .pagination import Section, split_sections
from .parameters import DEFAULT_REGISTRY, ItemKind, ItemSchema, ParameterRegistry, ParameterSpec
from .paths import format_path, parse_path
from .tree import Group, Tree, TreeBuilder, TreeEvent, build_tree, insert
from .validator import ValidationResult, validate_item, validate_items

__all__ = [
    "DEFAULT_REGISTRY",
    "ContentTreeError",
    "DuplicateGroupError",
    "Group",
    "IncompatibleMergeError",
    "InvalidItemError",
    "InvalidPathError",
    "Item",
    "ItemKind",
    "ItemSchema",
    "ParameterLayer",
    "ParameterRegistry",
    "ParameterSpec",
    "Section",
    "Tree",
    "TreeBuilder",
    "TreeEvent",
    "TreeFrozenError",
    "UnknownParameterError",
    "ValidationResult",
    "apply_labels",
    "build_tree",
    "format_path",
    "insert",
    "make_item",
    "merge",
    "merge_all",
    "merge_labels",
    "merge_layers",
    "parse_path",
    "resolve",
    "resolve_item",
    "resolve_items",
    "split_sections",
    "validate_item",
    "validate_items",
]
