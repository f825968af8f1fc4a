"""
Property-based tests for bundle ordering and filtering.

*For any* set of corpus items, ordering keys and filters, the resolved
order depends only on the set of items, never on the order they arrive in.
"""

from hypothesis import given, settings, strategies as st

from catalog.bundles.filters import filter_items
from catalog.bundles.flatten import CorpusItem
from catalog.bundles.ordering import order_items
from catalog.validation.schemas import (
    CEFR_LEVELS,
    ITEM_KINDS,
    ORDERING_KEYS,
    BundleFilters,
)


short_text = st.text(alphabet="abcAB", min_size=1, max_size=3)


@st.composite
def corpus_items(draw):
    """Items with unique (kind, id), as produced by flattening."""
    keys = draw(st.lists(
        st.tuples(st.sampled_from(ITEM_KINDS), st.text(alphabet="xyz0123", min_size=1, max_size=4)),
        unique=True,
        max_size=12,
    ))
    items = []
    for kind, item_id in keys:
        items.append(CorpusItem(
            kind=kind,
            id=item_id,
            title=draw(short_text),
            level=draw(st.one_of(st.none(), st.sampled_from(CEFR_LEVELS))),
            duration_mins=draw(st.integers(min_value=0, max_value=60)),
            url=f"/v1/packs/{item_id}.json",
            workspace="de",
            section="context",
            scenario=draw(st.one_of(st.none(), short_text)),
            primary_structure=draw(st.one_of(st.none(), short_text)),
        ))
    return items


ordering_keys = st.lists(st.sampled_from(ORDERING_KEYS), min_size=1, max_size=5)


@settings(max_examples=200)
@given(items=corpus_items(), keys=ordering_keys, data=st.data())
def test_order_independent_of_input_order(items, keys, data):
    """
    *For any* items and keys, every permutation of the input yields the same order.
    """
    shuffled = data.draw(st.permutations(items))
    assert order_items(items, keys) == order_items(shuffled, keys)


@given(items=corpus_items(), keys=ordering_keys)
def test_order_is_idempotent(items, keys):
    once = order_items(items, keys)
    assert order_items(once, keys) == once


@given(items=corpus_items(), keys=ordering_keys)
def test_order_is_a_permutation(items, keys):
    ordered = order_items(items, keys)
    assert sorted(i.uid for i in ordered) == sorted(i.uid for i in items)


@given(
    items=corpus_items(),
    levels=st.lists(st.sampled_from(CEFR_LEVELS), unique=True, max_size=3),
    kinds=st.lists(st.sampled_from(ITEM_KINDS), unique=True, min_size=1),
)
def test_filter_selects_exactly_the_matching_items(items, levels, kinds):
    """
    *For any* filters, the selection holds every matching item and nothing else.
    """
    filters = BundleFilters(levels=levels)
    selected = filter_items(items, filters, kinds)
    expected = [
        i for i in items
        if i.kind in kinds and (not levels or i.level in levels)
    ]
    assert selected == expected
