"""
Business license expiry alerts.

Alerts escalate as a license approaches expiry (30, 15, 7 and 1 day out, then
expired). Each bracket is raised once per license through its reminder flag,
and an alert type is never duplicated while an unresolved alert of the same
type exists for the license.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from aerotravel.core.database.base import utc_now
from aerotravel.core.database.entities.compliance import BusinessLicense, ComplianceAlert
from aerotravel.core.database.repositories.compliance import (
    BusinessLicenseRepository,
    ComplianceAlertRepository,
)
from aerotravel.core.errors import NotFoundError
from aerotravel.core.logging_config import get_logger
from aerotravel.core.models.domain.enums import AlertSeverity, AlertType, LicenseStatus

logger = get_logger(__name__)


def days_until_expiry(expiry_date: date, today: date) -> int:
    return (expiry_date - today).days


def alert_type_for_days(days: int) -> AlertType:
    if days <= 0:
        return AlertType.expired
    if days <= 1:
        return AlertType.expiry_1d
    if days <= 7:
        return AlertType.expiry_7d
    if days <= 15:
        return AlertType.expiry_15d
    return AlertType.expiry_30d


def severity_for_days(days: int) -> AlertSeverity:
    if days <= 7:
        return AlertSeverity.critical
    if days <= 15:
        return AlertSeverity.warning
    return AlertSeverity.info


def expiry_message(license_name: str, license_number: str, days: int, expiry_date: date) -> str:
    label = f"Izin {license_name} ({license_number})"
    when = expiry_date.isoformat()
    if days <= 0:
        return f"{label} telah EXPIRED pada {when}. Segera lakukan perpanjangan!"
    if days == 1:
        return f"KRITIS: {label} akan expired BESOK ({when})! Operasional terancam ilegal."
    if days <= 7:
        return f"URGENT: {label} akan expired dalam {days} hari ({when})!"
    if days <= 15:
        return f"{label} akan expired dalam {days} hari ({when}). Segera ajukan perpanjangan."
    return f"{label} akan expired dalam {days} hari ({when}). Siapkan dokumen perpanjangan."


def reminder_flag_due(license: BusinessLicense, days: int) -> Optional[str]:
    """Name of the reminder flag to raise for ``days``, or None when that bracket was already sent."""
    if days <= 1:
        return None if license.reminder_1d_sent else "reminder_1d_sent"
    if days <= 7:
        return None if license.reminder_7d_sent else "reminder_7d_sent"
    if days <= 15:
        return None if license.reminder_15d_sent else "reminder_15d_sent"
    if days <= 30:
        return None if license.reminder_30d_sent else "reminder_30d_sent"
    return None


class ComplianceAlertService:
    """License and alert operations for one database session."""

    def __init__(self, session: AsyncSession) -> None:
        self.licenses = BusinessLicenseRepository(session)
        self.alerts = ComplianceAlertRepository(session)

    async def create_license(
        self,
        license_type: str,
        license_name: str,
        license_number: str,
        expiry_date: Optional[date] = None,
        status: LicenseStatus | str = LicenseStatus.active,
    ) -> BusinessLicense:
        license = await self.licenses.create(
            BusinessLicense(
                license_type=license_type,
                license_name=license_name,
                license_number=license_number,
                expiry_date=expiry_date,
                status=LicenseStatus(status).value,
            )
        )
        logger.info(f"Registered license {license.id} ({license.license_name})")
        return license

    async def list_licenses(self) -> List[BusinessLicense]:
        return await self.licenses.list()

    async def create_expiry_alert(self, license: BusinessLicense, today: date) -> Optional[ComplianceAlert]:
        """Raise the alert matching the license's distance to expiry.

        Returns:
            The new alert, or None when an unresolved alert of the same type exists
        """
        days = days_until_expiry(license.expiry_date, today)
        alert_type = alert_type_for_days(days)

        existing = await self.alerts.find_unresolved(license.id, alert_type.value)
        if existing is not None:
            logger.info(f"Alert {alert_type.value} already open for license {license.id}")
            return None

        alert = await self.alerts.create(
            ComplianceAlert(
                license_id=license.id,
                alert_type=alert_type.value,
                severity=severity_for_days(days).value,
                message=expiry_message(license.license_name, license.license_number, days, license.expiry_date),
            )
        )
        logger.info(f"Alert {alert.id} created for license {license.id}: {alert_type.value} ({alert.severity})")
        return alert

    async def generate_compliance_alerts(self, today: Optional[date] = None) -> List[ComplianceAlert]:
        """Walk non-suspended licenses with an expiry date and raise due alerts.

        The reminder flag for a bracket is set only after its alert was created.
        A license already past expiry whose 1-day reminder was sent still gets
        an ``expired`` alert while its status is not ``expired``.
        """
        today = today or utc_now().date()
        created: List[ComplianceAlert] = []

        for license in await self.licenses.list_expiring_candidates():
            days = days_until_expiry(license.expiry_date, today)
            flag = reminder_flag_due(license, days)
            overdue = days < 0 and license.status != LicenseStatus.expired.value
            if flag is None and not overdue:
                continue

            alert = await self.create_expiry_alert(license, today)
            if alert is None:
                continue
            created.append(alert)
            if flag is not None:
                setattr(license, flag, True)
                license.updated_at = utc_now()
                await self.licenses.update(license)

        logger.info(f"Compliance alerts generated: {len(created)}")
        return created

    async def get_unread_count(self) -> int:
        return await self.alerts.count_unread()

    async def get_unresolved_alerts(self, limit: int = 10) -> List[ComplianceAlert]:
        return await self.alerts.list_unresolved(limit=limit)

    async def _get_alert(self, alert_id: str) -> ComplianceAlert:
        alert = await self.alerts.get_by_id(alert_id)
        if alert is None:
            raise NotFoundError("Compliance alert", alert_id)
        return alert

    async def mark_alert_read(self, alert_id: str, user_id: Optional[str] = None) -> ComplianceAlert:
        alert = await self._get_alert(alert_id)
        alert.is_read = True
        alert.read_by = user_id
        alert.read_at = utc_now()
        return await self.alerts.update(alert)

    async def resolve_alert(
        self,
        alert_id: str,
        user_id: Optional[str] = None,
        resolution_notes: Optional[str] = None,
    ) -> ComplianceAlert:
        """Resolve an alert. Resolving also marks it read."""
        alert = await self._get_alert(alert_id)
        now = utc_now()
        alert.is_resolved = True
        alert.resolved_by = user_id
        alert.resolved_at = now
        alert.resolution_notes = resolution_notes
        if not alert.is_read:
            alert.is_read = True
            alert.read_by = user_id
            alert.read_at = now
        return await self.alerts.update(alert)
