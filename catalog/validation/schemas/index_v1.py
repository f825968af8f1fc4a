"""
Index page schema (`{section}/index.json`, `{section}/pages/{n}.json`).
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog.validation.schemas.common import (
    DOCUMENT_CONFIG,
    CefrLevel,
    PackType,
    Register,
)


class PackRefEntry(BaseModel):
    """Lightweight projection of a Pack as listed on an index page.

    Localized `*_i18n` variants are extra fields checked by the i18n
    validator.
    """
    model_config = DOCUMENT_CONFIG

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    type: PackType
    level: CefrLevel
    durationMins: int = Field(..., ge=0)
    packUrl: str = Field(..., min_length=1)
    scenario: Optional[str] = None
    register_: Optional[Register] = Field(None, alias="register")
    primaryStructure: Optional[str] = None


class IndexPage(BaseModel):
    """One page of a paginated section index."""
    model_config = DOCUMENT_CONFIG

    page: int = Field(..., ge=1)
    pageSize: int = Field(..., gt=0)
    items: List[PackRefEntry]
    nextPage: Optional[str] = Field(..., description="Path of the next page, null on the last page")
    total: Optional[int] = Field(None, ge=0, description="Item count across all pages")
