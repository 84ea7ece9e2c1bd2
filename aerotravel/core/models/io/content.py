"""
SEO content spinner I/O models.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..domain.enums import ContentSource


class SpinRequest(BaseModel):
    """Schema for requesting SEO content."""

    topic: str = Field(min_length=1, description="Destination or subject of the article")
    keywords: List[str] = Field(default_factory=list)
    locale: Literal["id", "en"] = "id"
    tone: str = "friendly"
    target_word_count: int = Field(default=600, ge=100, le=3000)
    base_content: Optional[str] = Field(default=None, description="Existing text to rewrite")


class SpunContent(BaseModel):
    """Generated article ready for publishing."""

    title: str
    slug: str
    meta_description: str = Field(max_length=160)
    content: str
    keywords: List[str] = Field(default_factory=list)
    source: ContentSource = ContentSource.ai
