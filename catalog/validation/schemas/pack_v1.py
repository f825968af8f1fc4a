"""
Pack document schemas.

A pack's item shape depends on its `type`; each type has its own model
and PACK_VARIANTS maps the tag to it.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from catalog.validation.schemas.common import (
    DOCUMENT_CONFIG,
    CefrLevel,
    PackType,
    Register,
)


class ContextItem(BaseModel):
    """Narrative sentence with translation and audio."""
    model_config = DOCUMENT_CONFIG

    id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    translation: str
    audioUrl: str


class ExamItem(BaseModel):
    """Exam question."""
    model_config = DOCUMENT_CONFIG

    id: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)
    answerType: str = Field(..., min_length=1)
    options: List[str]
    correctAnswer: Union[str, int, List[str]]


class DrillItem(BaseModel):
    """Grammar drill with a structured prompt."""
    model_config = DOCUMENT_CONFIG

    id: str = Field(..., min_length=1)
    prompt: Dict[str, Any]


class PackBase(BaseModel):
    """Fields shared by every pack type."""
    model_config = DOCUMENT_CONFIG

    id: str = Field(..., min_length=1)
    type: PackType
    title: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1)
    level: CefrLevel
    durationMins: int = Field(..., ge=0)
    tags: List[str]
    items: List[Any]
    scenario: Optional[str] = None
    register_: Optional[Register] = Field(None, alias="register")
    primaryStructure: Optional[str] = None


class ContextPack(PackBase):
    items: List[ContextItem]


class ExamPack(PackBase):
    items: List[ExamItem]


class MechanicsPack(PackBase):
    items: List[DrillItem]


PACK_VARIANTS = {
    "context": ContextPack,
    "exam": ExamPack,
    "mechanics": MechanicsPack,
}
