"""
Facility Endpoints.

Master facility catalogue, per-package-type templates and the merge of a
template with a package's inclusions and exclusions.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter

from aerotravel.core.models.domain.enums import FacilityCategory
from aerotravel.core.models.io.facilities import FacilityMergeRequest, FacilityRead, MergedFacility
from aerotravel.guide.facilities import (
    MASTER_FACILITIES,
    get_default_template,
    get_facilities_by_category,
    merge_facilities,
)

router = APIRouter()


def _read(item) -> FacilityRead:
    return FacilityRead(
        code=item.code,
        name=item.name,
        category=item.category,
        description=item.description,
        icon=item.icon,
    )


@router.get("", response_model=List[FacilityRead], summary="List Master Facilities")
async def list_facilities(category: Optional[FacilityCategory] = None) -> List[FacilityRead]:
    items = get_facilities_by_category(category) if category else list(MASTER_FACILITIES.values())
    return [_read(item) for item in items]


@router.get(
    "/templates/{package_type}",
    response_model=List[FacilityRead],
    summary="Get Facility Template",
    description="Facilities of a package type's default template. Unknown types get the default template.",
)
async def get_template(package_type: str) -> List[FacilityRead]:
    return [_read(MASTER_FACILITIES[code]) for code in get_default_template(package_type)]


@router.post(
    "/merge",
    response_model=List[MergedFacility],
    summary="Merge Facilities",
    description="Apply a package's inclusions and exclusions to its default template.",
)
async def merge(payload: FacilityMergeRequest) -> List[MergedFacility]:
    template = payload.default_template
    if template is None:
        template = get_default_template(payload.package_type)
    return merge_facilities(template, payload.inclusions, payload.exclusions, payload.quantities)
