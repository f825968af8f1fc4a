"""
Bundle orderer.

Sorts a filtered item set by the declared ordering keys, applied in order
as one composite key:

- level: CEFR rank (A1 < A2 < B1 < B2 < C1 < C2), not lexicographic
- kind: fixed rank pack (context) < drill < exam
- title, scenario, primaryStructure: case-sensitive code-point order

Missing values sort before present ones. The item uid is always appended
as the last key, so the result never depends on input order.
"""

from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple

from catalog.bundles.flatten import CorpusItem
from catalog.validation.schemas.common import CEFR_LEVELS, ITEM_KINDS, ORDERING_KEYS


LEVEL_RANK = {level: rank for rank, level in enumerate(CEFR_LEVELS)}
KIND_RANK = {kind: rank for rank, kind in enumerate(ITEM_KINDS)}


def _rank(table: Dict[str, int], value: Any) -> int:
    return table.get(value, -1) if isinstance(value, str) else -1


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


COMPARATORS: Dict[str, Callable[[CorpusItem], Any]] = {
    "level": lambda item: _rank(LEVEL_RANK, item.level),
    "kind": lambda item: _rank(KIND_RANK, item.kind),
    "title": lambda item: _text(item.title),
    "scenario": lambda item: _text(item.scenario),
    "primaryStructure": lambda item: _text(item.primary_structure),
}


def sort_key(item: CorpusItem, keys: Sequence[str]) -> Tuple:
    """Composite sort key: declared keys, then the item uid."""
    return tuple(COMPARATORS[key](item) for key in keys) + (item.uid,)


def order_items(items: Iterable[CorpusItem], keys: Sequence[str]) -> List[CorpusItem]:
    """Return `items` in the total order defined by `keys`.

    Raises:
        ValueError: If a key has no comparator.
    """
    unknown = [key for key in keys if key not in COMPARATORS]
    if unknown:
        raise ValueError(
            f"Unknown ordering key(s): {', '.join(unknown)}. "
            f"Valid keys: {', '.join(ORDERING_KEYS)}"
        )
    return sorted(items, key=lambda item: sort_key(item, keys))
