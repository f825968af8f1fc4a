"""
Catalog document schema (`workspaces/{ws}/catalog.json`).
"""

from typing import List

from pydantic import BaseModel, Field

from catalog.validation.schemas.common import DOCUMENT_CONFIG, SectionKind


class SectionEntry(BaseModel):
    """A section of a workspace and the pointer to its first index page."""
    model_config = DOCUMENT_CONFIG

    id: str = Field(..., min_length=1, description="Section id, also its directory name")
    kind: SectionKind = Field(..., description="Section kind")
    title: str = Field(..., min_length=1)
    itemsUrl: str = Field(..., min_length=1, description="Absolute path of page 1 of the index")


class CatalogDocument(BaseModel):
    """Top-level catalog of a workspace."""
    model_config = DOCUMENT_CONFIG

    workspace: str = Field(..., min_length=1, description="Workspace id, unique across the corpus")
    language: str = Field(..., min_length=1, description="Display language name")
    sections: List[SectionEntry]
