"""Dashboard authoring layer built on the pure `contenttree` package.

Collections, pages and dashboards are immutable values with fluent ``add_*``
methods. Settings, logging configuration, tree summaries and snapshot codecs
live here because they touch the environment or presentation.
"""

from .collection import ContentCollection, combine_collections, create_collection
from .dashboard import BuiltPage, Dashboard
from .expand import EXPANDABLE_PARAMS, expand_vizzes
from .logs import configure_logging
from .page import Page, PageMetadata
from .settings import SETTINGS, Settings, load_settings
from .snapshot_codec import decode_tree, encode_tree
from .summary import format_tree

__all__ = [
    "EXPANDABLE_PARAMS",
    "SETTINGS",
    "BuiltPage",
    "ContentCollection",
    "Dashboard",
    "Page",
    "PageMetadata",
    "Settings",
    "combine_collections",
    "configure_logging",
    "create_collection",
    "decode_tree",
    "encode_tree",
    "expand_vizzes",
    "format_tree",
    "load_settings",
]
