"""
Inventory Endpoints.

Stock items per branch, purchases, trip usage with anomaly detection and
stock opname adjustments.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, status

from aerotravel.core.models.io.inventory import (
    AdjustmentResult,
    InventoryItemCreate,
    InventoryItemRead,
    StockAdjustment,
    StockPurchase,
    StockTransactionRead,
    TripUsage,
    UsageResult,
)
from aerotravel.inventory.stock import StockService
from aerotravel.server.services.deps import EventBusDep, SessionDep, UserIdDep

router = APIRouter()


@router.get(
    "",
    response_model=List[InventoryItemRead],
    summary="List Inventory",
    description="List a branch's stock items ordered by name.",
)
async def list_items(branch_id: str, session: SessionDep) -> List[InventoryItemRead]:
    items = await StockService(session).get_items(branch_id)
    return [InventoryItemRead.model_validate(item) for item in items]


@router.get(
    "/low-stock",
    response_model=List[InventoryItemRead],
    summary="List Low Stock Items",
    description="List a branch's items whose stock is at or below the minimum.",
)
async def list_low_stock(branch_id: str, session: SessionDep) -> List[InventoryItemRead]:
    items = await StockService(session).get_low_stock_items(branch_id)
    return [InventoryItemRead.model_validate(item) for item in items]


@router.post(
    "",
    response_model=InventoryItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Inventory Item",
)
async def create_item(payload: InventoryItemCreate, session: SessionDep) -> InventoryItemRead:
    item = await StockService(session).create_item(**payload.model_dump())
    return InventoryItemRead.model_validate(item)


@router.post(
    "/{item_id}/purchases",
    response_model=StockTransactionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Stock",
    description="Receive purchased stock; the item's unit cost becomes the weighted average.",
    responses={404: {"description": "Item not found"}},
)
async def add_stock(
    item_id: str, payload: StockPurchase, session: SessionDep, caller_id: UserIdDep
) -> StockTransactionRead:
    transaction = await StockService(session).add_stock(
        item_id,
        payload.quantity,
        payload.unit_cost,
        notes=payload.notes,
        created_by=payload.created_by or caller_id,
    )
    return StockTransactionRead.model_validate(transaction)


@router.post(
    "/{item_id}/usage",
    response_model=UsageResult,
    status_code=status.HTTP_201_CREATED,
    summary="Record Trip Usage",
    description="Deduct stock used by a trip and flag usage deviating from the expected quantity.",
    responses={404: {"description": "Item not found"}, 409: {"description": "Insufficient stock"}},
)
async def record_usage(
    item_id: str, payload: TripUsage, session: SessionDep, bus: EventBusDep, caller_id: UserIdDep
) -> UsageResult:
    return await StockService(session, event_bus=bus).record_trip_usage(
        item_id,
        payload.trip_id,
        payload.actual_quantity,
        payload.expected_quantity,
        notes=payload.notes,
        created_by=payload.created_by or caller_id,
    )


@router.post(
    "/{item_id}/adjustments",
    response_model=AdjustmentResult,
    status_code=status.HTTP_201_CREATED,
    summary="Stock Opname",
    description="Set the stock to the physically counted amount and record the variance.",
    responses={404: {"description": "Item not found"}},
)
async def adjust_stock(
    item_id: str, payload: StockAdjustment, session: SessionDep, caller_id: UserIdDep
) -> AdjustmentResult:
    return await StockService(session).adjust_stock(
        item_id, payload.actual_stock, payload.reason, created_by=payload.created_by or caller_id
    )


@router.get(
    "/{item_id}/transactions",
    response_model=List[StockTransactionRead],
    summary="Transaction History",
    responses={404: {"description": "Item not found"}},
)
async def transaction_history(
    item_id: str, session: SessionDep, limit: int = Query(default=50, ge=1, le=500)
) -> List[StockTransactionRead]:
    rows = await StockService(session).get_transaction_history(item_id, limit=limit)
    return [StockTransactionRead.model_validate(row) for row in rows]
