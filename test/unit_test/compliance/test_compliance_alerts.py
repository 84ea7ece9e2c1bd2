"""Unit tests for business license expiry alerts."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from aerotravel.compliance.alerts import (
    ComplianceAlertService,
    alert_type_for_days,
    expiry_message,
    severity_for_days,
)
from aerotravel.core.errors import NotFoundError
from aerotravel.core.models.domain.enums import AlertSeverity, AlertType

TODAY = date(2026, 6, 1)


class TestBrackets:
    @pytest.mark.parametrize(
        "days,alert_type,severity",
        [
            (30, AlertType.expiry_30d, AlertSeverity.info),
            (16, AlertType.expiry_30d, AlertSeverity.info),
            (15, AlertType.expiry_15d, AlertSeverity.warning),
            (8, AlertType.expiry_15d, AlertSeverity.warning),
            (7, AlertType.expiry_7d, AlertSeverity.critical),
            (2, AlertType.expiry_7d, AlertSeverity.critical),
            (1, AlertType.expiry_1d, AlertSeverity.critical),
            (0, AlertType.expired, AlertSeverity.critical),
            (-4, AlertType.expired, AlertSeverity.critical),
        ],
    )
    def test_bracket(self, days, alert_type, severity):
        assert alert_type_for_days(days) == alert_type
        assert severity_for_days(days) == severity

    def test_messages(self):
        expiry = date(2026, 6, 2)

        assert expiry_message("NIB", "123", 1, expiry) == (
            "KRITIS: Izin NIB (123) akan expired BESOK (2026-06-02)! Operasional terancam ilegal."
        )
        assert expiry_message("NIB", "123", 0, expiry) == (
            "Izin NIB (123) telah EXPIRED pada 2026-06-02. Segera lakukan perpanjangan!"
        )
        assert expiry_message("NIB", "123", 5, expiry).startswith("URGENT: Izin NIB (123) akan expired dalam 5 hari")
        assert expiry_message("NIB", "123", 20, expiry).endswith("Siapkan dokumen perpanjangan.")


@pytest.fixture
def service(session) -> ComplianceAlertService:
    return ComplianceAlertService(session)


async def _license(service, days, status="active", name="NIB"):
    return await service.create_license(
        license_type="nib",
        license_name=name,
        license_number=f"{name}-001",
        expiry_date=TODAY + timedelta(days=days) if days is not None else None,
        status=status,
    )


class TestGenerateAlerts:
    async def test_alert_per_bracket(self, service):
        await _license(service, 20, name="NIB")
        await _license(service, 10, name="TDUP")
        await _license(service, 5, name="SKPD")
        await _license(service, 1, name="ASITA")

        alerts = await service.generate_compliance_alerts(TODAY)

        assert sorted((a.alert_type, a.severity) for a in alerts) == [
            ("expiry_15d", "warning"),
            ("expiry_1d", "critical"),
            ("expiry_30d", "info"),
            ("expiry_7d", "critical"),
        ]

    async def test_flags_prevent_repeat(self, service):
        license = await _license(service, 20)

        first = await service.generate_compliance_alerts(TODAY)
        second = await service.generate_compliance_alerts(TODAY)

        assert len(first) == 1
        assert second == []
        assert license.reminder_30d_sent is True
        assert license.reminder_15d_sent is False

    async def test_escalation_to_next_bracket(self, service):
        license = await _license(service, 20)
        await service.generate_compliance_alerts(TODAY)

        later = await service.generate_compliance_alerts(TODAY + timedelta(days=14))

        assert [a.alert_type for a in later] == ["expiry_7d"]
        assert license.reminder_7d_sent is True
        assert license.reminder_15d_sent is False

    @pytest.mark.parametrize("days,status", [(45, "active"), (None, "active"), (3, "suspended")])
    async def test_not_due(self, service, days, status):
        await _license(service, days, status=status)

        assert await service.generate_compliance_alerts(TODAY) == []

    async def test_expired_license(self, service):
        license = await _license(service, -3)

        alerts = await service.generate_compliance_alerts(TODAY)

        assert [a.alert_type for a in alerts] == ["expired"]
        assert "telah EXPIRED" in alerts[0].message
        assert license.reminder_1d_sent is True

    async def test_overdue_alert_not_duplicated_while_unresolved(self, service):
        await _license(service, -3)
        await service.generate_compliance_alerts(TODAY)

        again = await service.generate_compliance_alerts(TODAY + timedelta(days=1))

        assert again == []

    async def test_overdue_alert_raised_again_after_resolve(self, service):
        await _license(service, -3)
        first, = await service.generate_compliance_alerts(TODAY)
        await service.resolve_alert(first.id, "owner-1", "Sedang diurus")

        again = await service.generate_compliance_alerts(TODAY + timedelta(days=1))

        assert [a.alert_type for a in again] == ["expired"]

    async def test_license_marked_expired_stops_alerts(self, service):
        license = await _license(service, -3, status="expired")
        license.reminder_1d_sent = True
        await service.licenses.update(license)

        assert await service.generate_compliance_alerts(TODAY) == []

    async def test_create_expiry_alert_dedupes(self, service):
        license = await _license(service, 5)

        first = await service.create_expiry_alert(license, TODAY)
        second = await service.create_expiry_alert(license, TODAY)

        assert first is not None
        assert second is None


class TestAlertLifecycle:
    async def test_unread_count_and_mark_read(self, service):
        await _license(service, 5, name="A")
        await _license(service, 10, name="B")
        alerts = await service.generate_compliance_alerts(TODAY)
        assert await service.get_unread_count() == 2

        read = await service.mark_alert_read(alerts[0].id, "staff-1")

        assert read.is_read is True
        assert read.read_by == "staff-1"
        assert read.read_at is not None
        assert await service.get_unread_count() == 1

    async def test_resolve_marks_read(self, service):
        await _license(service, 5)
        alert, = await service.generate_compliance_alerts(TODAY)

        resolved = await service.resolve_alert(alert.id, "owner-1", "Sudah diperpanjang")

        assert resolved.is_resolved is True
        assert resolved.resolved_by == "owner-1"
        assert resolved.resolution_notes == "Sudah diperpanjang"
        assert resolved.is_read is True
        assert resolved.read_by == "owner-1"
        assert await service.get_unresolved_alerts() == []
        assert await service.get_unread_count() == 0

    async def test_resolve_keeps_earlier_reader(self, service):
        await _license(service, 5)
        alert, = await service.generate_compliance_alerts(TODAY)
        await service.mark_alert_read(alert.id, "staff-1")

        resolved = await service.resolve_alert(alert.id, "owner-1")

        assert resolved.read_by == "staff-1"

    async def test_unresolved_limit(self, service):
        for index in range(3):
            await _license(service, 5, name=f"L{index}")
        await service.generate_compliance_alerts(TODAY)

        assert len(await service.get_unresolved_alerts(limit=2)) == 2

    async def test_unknown_alert(self, service):
        with pytest.raises(NotFoundError):
            await service.mark_alert_read("missing")
        with pytest.raises(NotFoundError):
            await service.resolve_alert("missing")
