"""
Vendor repositories: vendors and their price history.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.vendors import Vendor, VendorPriceHistory
from .base import SQLModelRepository


class VendorRepository(SQLModelRepository[Vendor]):
    """Repository for vendor data access operations."""

    order_by = "name"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Vendor)

    async def get_active(self, vendor_id: str) -> Optional[Vendor]:
        """Get a vendor unless it has been soft-deleted."""
        vendor = await self.get_by_id(vendor_id)
        if vendor is None or vendor.deleted_at is not None:
            return None
        return vendor

    async def search(
        self,
        branch_id: Optional[str] = None,
        vendor_type: Optional[str] = None,
        search: Optional[str] = None,
        include_inactive: bool = False,
    ) -> List[Vendor]:
        """List vendors that are not soft-deleted, ordered by name.

        Args:
            branch_id: Restrict to one branch
            vendor_type: Restrict to one vendor type
            search: Case-insensitive substring of the vendor name
            include_inactive: Include vendors with ``is_active`` False
        """
        stmt = select(Vendor).where(Vendor.deleted_at.is_(None))
        if branch_id:
            stmt = stmt.where(Vendor.branch_id == branch_id)
        if vendor_type:
            stmt = stmt.where(Vendor.vendor_type == vendor_type)
        if search:
            stmt = stmt.where(func.lower(Vendor.name).contains(search.strip().lower(), autoescape=True))
        if not include_inactive:
            stmt = stmt.where(Vendor.is_active == True)  # noqa: E712
        stmt = stmt.order_by(Vendor.name.asc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class VendorPriceHistoryRepository(SQLModelRepository[VendorPriceHistory]):
    """Repository for vendor price changes."""

    order_by = "changed_at"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, VendorPriceHistory)

    async def for_vendor(self, vendor_id: str, limit: Optional[int] = None) -> List[VendorPriceHistory]:
        """Price changes for one vendor, newest first."""
        return await self.list(limit=limit, filters={"vendor_id": vendor_id})
