"""
Pydantic schemas for content documents.

One model per document kind; packs are a closed set of variants keyed by
their `type` tag (see PACK_VARIANTS).
"""

from catalog.validation.schemas.common import (
    CEFR_LEVELS,
    ITEM_KINDS,
    ORDERING_KEYS,
    PACK_TYPES,
    REGISTERS,
    SECTION_KINDS,
)
from catalog.validation.schemas.catalog_v1 import CatalogDocument, SectionEntry
from catalog.validation.schemas.index_v1 import IndexPage, PackRefEntry
from catalog.validation.schemas.pack_v1 import (
    PACK_VARIANTS,
    ContextItem,
    ContextPack,
    DrillItem,
    ExamItem,
    ExamPack,
    MechanicsPack,
    PackBase,
)
from catalog.validation.schemas.bundle_v1 import (
    BundleDefinition,
    BundleFilters,
    BundleOrdering,
)

__all__ = [
    "CEFR_LEVELS",
    "ITEM_KINDS",
    "ORDERING_KEYS",
    "PACK_TYPES",
    "REGISTERS",
    "SECTION_KINDS",
    "CatalogDocument",
    "SectionEntry",
    "IndexPage",
    "PackRefEntry",
    "PACK_VARIANTS",
    "PackBase",
    "ContextPack",
    "ExamPack",
    "MechanicsPack",
    "ContextItem",
    "ExamItem",
    "DrillItem",
    "BundleDefinition",
    "BundleFilters",
    "BundleOrdering",
]
