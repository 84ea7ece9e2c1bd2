"""
Stock tracking and stock opname.

Each operation is a single-row read-modify-write on the item followed by a
ledger row, committed together. There is no optimistic locking: two
concurrent updates to the same item resolve as last writer wins.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from aerotravel.core.database.base import utc_now
from aerotravel.core.database.entities.inventory import InventoryItem, InventoryTransaction
from aerotravel.core.database.repositories.inventory import (
    InventoryItemRepository,
    InventoryTransactionRepository,
    TripExpenseRepository,
)
from aerotravel.core.errors import InsufficientStockError, InvalidOperationError, NotFoundError
from aerotravel.core.logging_config import get_logger
from aerotravel.core.models.domain.enums import EventType, TransactionType
from aerotravel.core.models.io.inventory import (
    AdjustmentResult,
    StockTransactionRead,
    UsageResult,
)
from aerotravel.events.bus import EventBus
from aerotravel.server.core.config import settings

logger = get_logger(__name__)


def weighted_average_cost(stock_before: float, old_cost: float, quantity: float, unit_cost: float) -> float:
    """Average unit cost after receiving ``quantity`` units at ``unit_cost``.

    Falls back to the purchase cost when the resulting stock is not positive.
    """
    stock_after = stock_before + quantity
    if stock_after <= 0:
        return unit_cost
    return (stock_before * old_cost + quantity * unit_cost) / stock_after


def usage_variance_percent(actual: float, expected: float) -> float:
    """Percentage by which actual usage deviates from expected; 0 when nothing was expected."""
    if expected <= 0:
        return 0.0
    return (actual - expected) / expected * 100


def _format_quantity(value: float) -> str:
    return f"{value:+g}"


class StockService:
    """Stock operations for one database session.

    Args:
        session: Database session
        event_bus: Bus used for anomaly and low-stock events; ``None`` disables them
        anomaly_threshold_percent: Usage variance above which usage is flagged
    """

    def __init__(
        self,
        session: AsyncSession,
        event_bus: Optional[EventBus] = None,
        anomaly_threshold_percent: Optional[float] = None,
    ) -> None:
        self.items = InventoryItemRepository(session)
        self.transactions = InventoryTransactionRepository(session)
        self.expenses = TripExpenseRepository(session)
        self.event_bus = event_bus
        self.anomaly_threshold_percent = (
            settings.inventory_anomaly_threshold_percent
            if anomaly_threshold_percent is None
            else anomaly_threshold_percent
        )

    async def _get_item(self, item_id: str) -> InventoryItem:
        item = await self.items.get_by_id(item_id)
        if item is None:
            raise NotFoundError("Inventory item", item_id)
        return item

    async def create_item(
        self,
        branch_id: str,
        name: str,
        unit: str,
        sku: Optional[str] = None,
        current_stock: float = 0,
        min_stock: float = 0,
        unit_cost: float = 0,
    ) -> InventoryItem:
        if not name or not name.strip():
            raise InvalidOperationError("Item name is required")
        item = InventoryItem(
            branch_id=branch_id,
            name=name.strip(),
            unit=unit,
            sku=sku,
            current_stock=current_stock,
            min_stock=min_stock,
            unit_cost=unit_cost,
        )
        item = await self.items.create(item)
        logger.info(f"Created inventory item {item.id} ({item.name}) for branch {branch_id}")
        return item

    async def get_items(self, branch_id: str) -> List[InventoryItem]:
        return await self.items.list_for_branch(branch_id)

    async def get_low_stock_items(self, branch_id: str) -> List[InventoryItem]:
        return await self.items.list_low_stock(branch_id)

    async def add_stock(
        self,
        item_id: str,
        quantity: float,
        unit_cost: float,
        notes: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> InventoryTransaction:
        """Receive purchased stock and re-average the unit cost.

        Raises:
            NotFoundError: If the item does not exist
            InvalidOperationError: If the quantity is not positive
        """
        if quantity <= 0:
            raise InvalidOperationError("Purchase quantity must be positive")
        item = await self._get_item(item_id)

        stock_before = item.current_stock
        stock_after = stock_before + quantity
        item.unit_cost = weighted_average_cost(stock_before, item.unit_cost, quantity, unit_cost)
        item.current_stock = stock_after
        item.updated_at = utc_now()

        transaction = await self.transactions.create(
            InventoryTransaction(
                inventory_id=item.id,
                transaction_type=TransactionType.purchase.value,
                quantity=quantity,
                stock_before=stock_before,
                stock_after=stock_after,
                notes=notes,
                created_by=created_by,
            )
        )
        logger.info(f"Added {quantity} {item.unit} to {item.name}: {stock_before} -> {stock_after}")
        return transaction

    async def record_trip_usage(
        self,
        item_id: str,
        trip_id: str,
        actual_quantity: float,
        expected_quantity: float,
        notes: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> UsageResult:
        """Deduct stock consumed by a trip and check it against the expected amount.

        Usage deviating from the expected quantity by more than the anomaly
        threshold flags every expense row of the trip and emits
        ``inventory.anomaly_detected``. Ending at or below the minimum stock
        emits ``inventory.low_stock``.

        Raises:
            NotFoundError: If the item does not exist
            InsufficientStockError: If ``actual_quantity`` exceeds the stock on hand
        """
        item = await self._get_item(item_id)

        stock_before = item.current_stock
        if actual_quantity > stock_before:
            raise InsufficientStockError(item_id, actual_quantity, stock_before)
        stock_after = stock_before - actual_quantity

        variance_percent = usage_variance_percent(actual_quantity, expected_quantity)
        is_anomaly = abs(variance_percent) > self.anomaly_threshold_percent
        if is_anomaly:
            notes = f"ANOMALY: Variance {variance_percent:.1f}%. {notes or ''}".strip()
            await self.expenses.flag_anomaly(trip_id)

        item.current_stock = stock_after
        item.updated_at = utc_now()
        transaction = await self.transactions.create(
            InventoryTransaction(
                inventory_id=item.id,
                transaction_type=TransactionType.usage.value,
                quantity=-actual_quantity,
                stock_before=stock_before,
                stock_after=stock_after,
                trip_id=trip_id,
                notes=notes,
                created_by=created_by,
            )
        )

        if is_anomaly:
            logger.warning(
                f"Usage anomaly on trip {trip_id} for {item.name}: variance {variance_percent:.1f}%",
                extra={"item_id": item.id, "trip_id": trip_id},
            )
            await self._emit(
                EventType.inventory_anomaly_detected,
                {
                    "inventory_id": item.id,
                    "item_name": item.name,
                    "branch_id": item.branch_id,
                    "trip_id": trip_id,
                    "actual_quantity": actual_quantity,
                    "expected_quantity": expected_quantity,
                    "variance_percent": round(variance_percent, 1),
                },
                created_by,
            )
        if item.is_low_stock:
            await self._emit_low_stock(item, created_by)

        message = (
            f"Pemakaian tercatat. Anomaly: selisih {variance_percent:.1f}%"
            if is_anomaly
            else "Pemakaian berhasil dicatat."
        )
        return UsageResult(
            transaction=StockTransactionRead.model_validate(transaction),
            variance_percent=variance_percent,
            is_anomaly=is_anomaly,
            is_low_stock=item.is_low_stock,
            message=message,
        )

    async def adjust_stock(
        self,
        item_id: str,
        actual_stock: float,
        reason: str,
        created_by: Optional[str] = None,
    ) -> AdjustmentResult:
        """Stock opname: set the stock to the physically counted amount.

        Raises:
            NotFoundError: If the item does not exist
            InvalidOperationError: If the counted stock is negative
        """
        if actual_stock < 0:
            raise InvalidOperationError("Counted stock cannot be negative")
        item = await self._get_item(item_id)

        stock_before = item.current_stock
        variance = actual_stock - stock_before
        item.current_stock = actual_stock
        item.updated_at = utc_now()

        transaction = await self.transactions.create(
            InventoryTransaction(
                inventory_id=item.id,
                transaction_type=TransactionType.adjustment.value,
                quantity=variance,
                stock_before=stock_before,
                stock_after=actual_stock,
                notes=f"Stock Opname: {reason}",
                created_by=created_by,
            )
        )
        logger.info(f"Stock opname for {item.name}: {stock_before} -> {actual_stock} ({reason})")

        message = (
            "Stok sesuai, tidak ada selisih."
            if variance == 0
            else f"Stok disesuaikan. Selisih: {_format_quantity(variance)}"
        )
        return AdjustmentResult(
            transaction=StockTransactionRead.model_validate(transaction),
            variance=variance,
            message=message,
        )

    async def get_transaction_history(self, item_id: str, limit: int = 50) -> List[InventoryTransaction]:
        """Movements for an item, newest first.

        Raises:
            NotFoundError: If the item does not exist
        """
        await self._get_item(item_id)
        return await self.transactions.history(item_id, limit=limit)

    async def _emit_low_stock(self, item: InventoryItem, user_id: Optional[str]) -> None:
        await self._emit(
            EventType.inventory_low_stock,
            {
                "inventory_id": item.id,
                "item_name": item.name,
                "branch_id": item.branch_id,
                "current_stock": item.current_stock,
                "min_stock": item.min_stock,
            },
            user_id,
        )

    async def _emit(self, event_type: EventType, data: dict, user_id: Optional[str]) -> None:
        if self.event_bus is None:
            return
        await self.event_bus.emit(event_type, data, user_id=user_id)
