"""
Bundle definition schema.

A bundle names a filtered, deterministically ordered export of one
workspace's items. `ordering.stable` must be present and true.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from catalog.validation.schemas.common import (
    CefrLevel,
    ItemKind,
    OrderingKey,
    Register,
)


BUNDLE_ID_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
MAX_DESCRIPTION_LENGTH = 500


class BundleFilters(BaseModel):
    """Filter predicate; an absent field matches everything."""
    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    scenario: Optional[str] = None
    levels: Optional[List[CefrLevel]] = None
    register_: Optional[Register] = Field(None, alias="register")
    primaryStructure: Optional[str] = None


class BundleOrdering(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    by: List[OrderingKey] = Field(..., min_length=1)
    stable: Literal[True] = Field(..., description="Must be asserted true")


class BundleDefinition(BaseModel):
    """A curriculum bundle definition (schema version 1)."""
    model_config = ConfigDict(strict=True, extra="allow", frozen=True)

    version: Literal[1]
    id: str = Field(..., pattern=BUNDLE_ID_PATTERN)
    workspace: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = Field(..., max_length=MAX_DESCRIPTION_LENGTH)
    filters: BundleFilters
    includeKinds: List[ItemKind] = Field(..., min_length=1)
    ordering: BundleOrdering
