"""
Shared enumerations for content document schemas.
"""

from typing import Literal

from pydantic import ConfigDict


CEFR_LEVELS = ("A1", "A2", "B1", "B2", "C1", "C2")
SECTION_KINDS = ("context", "exams", "mechanics")
PACK_TYPES = ("context", "exam", "mechanics")
REGISTERS = ("formal", "neutral", "informal", "casual")

# Kinds of flattened corpus items, in their fixed ordering rank
ITEM_KINDS = ("pack", "drill", "exam")
ORDERING_KEYS = ("level", "kind", "title", "scenario", "primaryStructure")

# PackRef/Pack `type` -> corpus item kind
TYPE_TO_KIND = {
    "context": "pack",
    "mechanics": "drill",
    "exam": "exam",
}

CefrLevel = Literal["A1", "A2", "B1", "B2", "C1", "C2"]
SectionKind = Literal["context", "exams", "mechanics"]
PackType = Literal["context", "exam", "mechanics"]
Register = Literal["formal", "neutral", "informal", "casual"]
ItemKind = Literal["pack", "drill", "exam"]
OrderingKey = Literal["level", "kind", "title", "scenario", "primaryStructure"]

# Documents are JSON: no str->int coercion, bool is not an int.
# Unknown keys are allowed so optional i18n and taxonomy fields pass through.
DOCUMENT_CONFIG = ConfigDict(strict=True, extra="allow")
