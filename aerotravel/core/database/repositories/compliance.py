"""
Compliance repositories: business licenses and alerts.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.compliance import BusinessLicense, ComplianceAlert
from .base import SQLModelRepository


class BusinessLicenseRepository(SQLModelRepository[BusinessLicense]):
    """Repository for business license data access operations."""

    order_by = "expiry_date"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, BusinessLicense)

    async def list_expiring_candidates(self) -> List[BusinessLicense]:
        """Licenses with an expiry date that are not suspended, soonest first."""
        stmt = (
            select(BusinessLicense)
            .where(BusinessLicense.expiry_date.is_not(None))
            .where(BusinessLicense.status != "suspended")
            .order_by(BusinessLicense.expiry_date.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class ComplianceAlertRepository(SQLModelRepository[ComplianceAlert]):
    """Repository for compliance alert data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ComplianceAlert)

    async def find_unresolved(self, license_id: str, alert_type: str) -> Optional[ComplianceAlert]:
        """The unresolved alert of a given type for a license, if any."""
        stmt = (
            select(ComplianceAlert)
            .where(ComplianceAlert.license_id == license_id)
            .where(ComplianceAlert.alert_type == alert_type)
            .where(ComplianceAlert.is_resolved == False)  # noqa: E712
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_unresolved(self, limit: int = 50) -> List[ComplianceAlert]:
        return await self.list(limit=limit, filters={"is_resolved": False})

    async def count_unread(self) -> int:
        stmt = (
            select(func.count())
            .select_from(ComplianceAlert)
            .where(ComplianceAlert.is_read == False)  # noqa: E712
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
