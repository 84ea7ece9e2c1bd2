"""
Vendor database with price lock.

Vendor details are freely editable, but ``default_price`` is locked: only the
price-lock role may change it, with a reason, and every change is written to
``vendor_price_history`` and announced as ``vendor.price_changed``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from aerotravel.core.database.base import utc_now
from aerotravel.core.database.entities.vendors import Vendor, VendorPriceHistory
from aerotravel.core.database.repositories.vendors import VendorPriceHistoryRepository, VendorRepository
from aerotravel.core.errors import InvalidOperationError, NotFoundError, PriceLockError
from aerotravel.core.logging_config import get_logger
from aerotravel.core.models.domain.enums import EventType, VendorType
from aerotravel.events.bus import EventBus
from aerotravel.server.core.constant import PRICE_LOCK_ROLE

logger = get_logger(__name__)

# Fields update_vendor may touch
EDITABLE_FIELDS = frozenset(
    {
        "name",
        "vendor_type",
        "description",
        "contact_person",
        "phone",
        "email",
        "address",
        "price_unit",
        "bank_name",
        "bank_account_number",
        "bank_account_name",
        "is_active",
    }
)

# Editable fields backed by NOT NULL columns, besides the name
NON_NULLABLE_FIELDS = frozenset({"vendor_type", "price_unit", "is_active"})


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, VendorType) else value


class VendorService:
    """Vendor operations for one database session."""

    def __init__(self, session: AsyncSession, event_bus: Optional[EventBus] = None) -> None:
        self.vendors = VendorRepository(session)
        self.price_history = VendorPriceHistoryRepository(session)
        self.event_bus = event_bus

    async def _get(self, vendor_id: str) -> Vendor:
        vendor = await self.vendors.get_active(vendor_id)
        if vendor is None:
            raise NotFoundError("Vendor", vendor_id)
        return vendor

    async def create_vendor(self, branch_id: str, name: str, default_price: float, **fields: Any) -> Vendor:
        """Create a vendor.

        Raises:
            InvalidOperationError: If the name is blank or the price is not positive
        """
        if not name or not name.strip():
            raise InvalidOperationError("Vendor name is required")
        if default_price is None or default_price <= 0:
            raise InvalidOperationError("Vendor default price must be greater than zero")

        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise InvalidOperationError(f"Unknown vendor fields: {', '.join(sorted(unknown))}")
        values ={key: _enum_value(value) for key, value in fields.items() if value is not None}

        vendor = await self.vendors.create(
            Vendor(branch_id=branch_id, name=name.strip(), default_price=default_price, **values)
        )
        logger.info(f"Created vendor {vendor.id} ({vendor.name}) for branch {branch_id}")
        return vendor

    async def list_vendors(
        self,
        branch_id: Optional[str] = None,
        vendor_type: Optional[str] = None,
        search: Optional[str] = None,
        include_inactive: bool = False,
    ) -> List[Vendor]:
        return await self.vendors.search(
            branch_id=branch_id,
            vendor_type=_enum_value(vendor_type),
            search=search,
            include_inactive=include_inactive,
        )

    async def get_vendor(self, vendor_id: str) -> Tuple[Vendor, List[VendorPriceHistory]]:
        """A vendor with its price history, newest first.

        Raises:
            NotFoundError: If the vendor does not exist or was deleted
        """
        vendor = await self._get(vendor_id)
        history = await self.price_history.for_vendor(vendor.id)
        return vendor, history

    async def update_vendor(self, vendor_id: str, fields: Dict[str, Any]) -> Vendor:
        """Edit vendor details.

        Raises:
            NotFoundError: If the vendor does not exist or was deleted
            InvalidOperationError: If ``fields`` touches the price or an unknown field
                or clears a required field
        """
        if "default_price" in fields:
            raise InvalidOperationError("Vendor price can only be changed through a price update")
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise InvalidOperationError(f"Unknown vendor fields: {', '.join(sorted(unknown))}")
        if "name" in fields and not (fields["name"] or "").strip():
            raise InvalidOperationError("Vendor name is required")
        cleared = sorted(key for key in NON_NULLABLE_FIELDS if key in fields and fields[key] is None)
        if cleared:
            raise InvalidOperationError(f"Vendor fields cannot be null: {', '.join(cleared)}")

        vendor = await self._get(vendor_id)
        for key, value in fields.items():
            setattr(vendor, key, _enum_value(value))
        vendor.updated_at = utc_now()
        return await self.vendors.update(vendor)

    async def update_price(
        self,
        vendor_id: str,
        new_price: float,
        reason: str,
        changed_by: Optional[str],
        actor_role: Optional[str],
    ) -> Vendor:
        """Change a locked vendor price.

        Raises:
            PriceLockError: If ``actor_role`` is not the price-lock role
            InvalidOperationError: If the price is not positive or the reason is blank
            NotFoundError: If the vendor does not exist or was deleted
        """
        if actor_role != PRICE_LOCK_ROLE:
            logger.warning(f"Rejected price change on vendor {vendor_id} by role {actor_role!r}")
            raise PriceLockError(vendor_id, actor_role)
        if new_price is None or new_price <= 0:
            raise InvalidOperationError("Vendor price must be greater than zero")
        if not reason or not reason.strip():
            raise InvalidOperationError("A reason is required to change a vendor price")

        vendor = await self._get(vendor_id)
        old_price = vendor.default_price
        vendor.default_price = new_price
        vendor.updated_at = utc_now()

        # History row and price change share one commit
        await self.price_history.create(
            VendorPriceHistory(
                vendor_id=vendor.id,
                old_price=old_price,
                new_price=new_price,
                reason=reason.strip(),
                changed_by=changed_by,
            )
        )
        logger.info(f"Vendor {vendor.id} price changed {old_price} -> {new_price} by {changed_by}")

        if self.event_bus is not None:
            await self.event_bus.emit(
                EventType.vendor_price_changed,
                {
                    "vendor_id": vendor.id,
                    "vendor_name": vendor.name,
                    "branch_id": vendor.branch_id,
                    "old_price": old_price,
                    "new_price": new_price,
                    "reason": reason.strip(),
                    "changed_by": changed_by,
                },
                user_id=changed_by,
            )
        return vendor

    async def delete_vendor(self, vendor_id: str) -> Vendor:
        """Soft-delete a vendor.

        Raises:
            NotFoundError: If the vendor does not exist or was already deleted
        """
        vendor = await self._get(vendor_id)
        vendor.deleted_at = utc_now()
        vendor.is_active = False
        vendor.updated_at = vendor.deleted_at
        vendor = await self.vendors.update(vendor)
        logger.info(f"Soft-deleted vendor {vendor.id}")
        return vendor
