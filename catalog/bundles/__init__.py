"""
Bundle resolution.

Flattens a workspace, filters it with a bundle definition's predicate and
orders the result deterministically.
"""

from catalog.bundles.flatten import CorpusItem, flatten_workspace
from catalog.bundles.filters import filter_items, matches_filters
from catalog.bundles.ordering import order_items, sort_key
from catalog.bundles.resolver import BundleResolver, ResolvedBundle
from catalog.bundles.loader import BundleLoader, BundleSource

__all__ = [
    "CorpusItem",
    "flatten_workspace",
    "filter_items",
    "matches_filters",
    "order_items",
    "sort_key",
    "BundleResolver",
    "ResolvedBundle",
    "BundleLoader",
    "BundleSource",
]
