"""
Bundle filter engine.

An item is selected when it matches every filter field that is present
(levels by membership, the rest by equality) and its kind is one of the
definition's includeKinds. Absent filter fields match everything.
"""

from typing import Iterable, List, Sequence

from catalog.bundles.flatten import CorpusItem
from catalog.validation.schemas import BundleFilters


def matches_filters(item: CorpusItem, filters: BundleFilters) -> bool:
    """Whether `item` satisfies every active field of `filters`."""
    if filters.scenario is not None and item.scenario != filters.scenario:
        return False
    if filters.levels and item.level not in filters.levels:
        return False
    if filters.register_ is not None and item.register != filters.register_:
        return False
    if filters.primaryStructure is not None and item.primary_structure != filters.primaryStructure:
        return False
    return True


def filter_items(
    items: Iterable[CorpusItem],
    filters: BundleFilters,
    include_kinds: Sequence[str],
) -> List[CorpusItem]:
    """Select the maximal subset of `items` matching filters and kinds.

    Args:
        items: Flattened corpus items.
        filters: Filter predicate of a bundle definition.
        include_kinds: Item kinds to keep.

    Returns:
        Matching items in input order.
    """
    kinds = set(include_kinds)
    return [item for item in items if item.kind in kinds and matches_filters(item, filters)]
