"""
Vendor Endpoints.

Vendor details are editable by any operator; the locked default price can
only be changed through ``PATCH /vendors/{id}/price`` by the price-lock role.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, status

from aerotravel.core.models.domain.enums import VendorType
from aerotravel.core.models.io.vendors import (
    VendorCreate,
    VendorDetail,
    VendorPriceHistoryRead,
    VendorPriceUpdate,
    VendorRead,
    VendorUpdate,
)
from aerotravel.inventory.vendors import VendorService
from aerotravel.server.services.deps import EventBusDep, SessionDep, UserIdDep, UserRoleDep

router = APIRouter()


@router.get("", response_model=List[VendorRead], summary="List Vendors")
async def list_vendors(
    session: SessionDep,
    branch_id: Optional[str] = None,
    vendor_type: Optional[VendorType] = None,
    search: Optional[str] = None,
    include_inactive: bool = False,
) -> List[VendorRead]:
    """
    List vendors that have not been deleted, ordered by name.

    - **search**: case-insensitive match on the vendor name.
    - **include_inactive**: also list vendors marked inactive.
    """
    vendors = await VendorService(session).list_vendors(
        branch_id=branch_id,
        vendor_type=vendor_type.value if vendor_type else None,
        search=search,
        include_inactive=include_inactive,
    )
    return [VendorRead.model_validate(vendor) for vendor in vendors]


@router.post(
    "",
    response_model=VendorRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Vendor",
    responses={422: {"description": "Missing name or non-positive price"}},
)
async def create_vendor(payload: VendorCreate, session: SessionDep) -> VendorRead:
    fields = payload.model_dump(exclude={"branch_id", "name", "default_price"})
    vendor = await VendorService(session).create_vendor(
        payload.branch_id, payload.name, payload.default_price, **fields
    )
    return VendorRead.model_validate(vendor)


@router.get(
    "/{vendor_id}",
    response_model=VendorDetail,
    summary="Get Vendor",
    description="Vendor details with its price history, newest first.",
    responses={404: {"description": "Vendor not found"}},
)
async def get_vendor(vendor_id: str, session: SessionDep) -> VendorDetail:
    vendor, history = await VendorService(session).get_vendor(vendor_id)
    detail = VendorDetail.model_validate(vendor)
    detail.price_history = [VendorPriceHistoryRead.model_validate(row) for row in history]
    return detail


@router.patch(
    "/{vendor_id}",
    response_model=VendorRead,
    summary="Update Vendor",
    description="Edit vendor details. The price cannot be changed here.",
    responses={404: {"description": "Vendor not found"}},
)
async def update_vendor(vendor_id: str, payload: VendorUpdate, session: SessionDep) -> VendorRead:
    vendor = await VendorService(session).update_vendor(vendor_id, payload.model_dump(exclude_unset=True))
    return VendorRead.model_validate(vendor)


@router.patch(
    "/{vendor_id}/price",
    response_model=VendorRead,
    summary="Update Vendor Price",
    description="Change a locked vendor price. Requires the X-User-Role header to carry the price-lock role.",
    responses={
        403: {"description": "Caller role may not change prices"},
        404: {"description": "Vendor not found"},
        422: {"description": "Non-positive price or missing reason"},
    },
)
async def update_vendor_price(
    vendor_id: str,
    payload: VendorPriceUpdate,
    session: SessionDep,
    bus: EventBusDep,
    role: UserRoleDep,
    caller_id: UserIdDep,
) -> VendorRead:
    vendor = await VendorService(session, event_bus=bus).update_price(
        vendor_id,
        payload.new_price,
        payload.reason,
        changed_by=payload.changed_by or caller_id,
        actor_role=role,
    )
    return VendorRead.model_validate(vendor)


@router.delete(
    "/{vendor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Vendor",
    description="Soft-delete a vendor; it disappears from listings but keeps its history.",
    responses={404: {"description": "Vendor not found"}},
)
async def delete_vendor(vendor_id: str, session: SessionDep) -> None:
    await VendorService(session).delete_vendor(vendor_id)
