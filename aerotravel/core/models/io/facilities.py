"""
Facility I/O models.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..domain.enums import FacilityCategory, FacilitySource, FacilityStatus


class FacilityRead(BaseModel):
    """A master facility entry."""

    code: str
    name: str
    category: FacilityCategory
    description: str = ""
    icon: str = ""


class FacilityMergeRequest(BaseModel):
    """Schema for merging a package template with its inclusions and exclusions."""

    package_type: Optional[str] = Field(default=None, description="Template name; unknown or missing uses default")
    default_template: Optional[List[str]] = Field(
        default=None, description="Explicit template codes, overriding package_type"
    )
    inclusions: List[str] = Field(default_factory=list)
    exclusions: List[str] = Field(default_factory=list)
    quantities: Optional[Dict[str, int]] = None


class MergedFacility(BaseModel):
    """A facility after merging, with its inclusion status and origin."""

    code: str
    name: str
    category: FacilityCategory
    description: str = ""
    icon: str = ""
    status: FacilityStatus
    source: FacilitySource
    quantity: int = 0
