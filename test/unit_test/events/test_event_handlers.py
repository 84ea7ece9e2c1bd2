"""Unit tests for the default event handlers."""

from __future__ import annotations

from typing import Any, Dict, List
from unittest.mock import AsyncMock, patch

import pytest

from aerotravel.core.models.domain.enums import EventType
from aerotravel.events.bus import EventBus
from aerotravel.events.handlers import (
    _NOTIFICATION_RULES,
    _field,
    booking_status_message,
    initialize_event_handlers,
)
from aerotravel.notifications.service import NotificationDispatcher, NotificationService


class RecordingNotifier:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    async def create_event_notifications(self, event_type, data, title, message):
        self.calls.append({"event_type": event_type, "data": data, "title": title, "message": message})
        return []


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def bus(notifier) -> EventBus:
    bus = EventBus()
    initialize_event_handlers(bus, notifier)
    return bus


class TestFieldLookup:
    def test_snake_case_key(self):
        assert _field({"booking_code": "BK-1"}, "booking_code") == "BK-1"

    def test_camel_case_key(self):
        assert _field({"bookingCode": "BK-2"}, "booking_code") == "BK-2"

    def test_missing_or_empty_is_na(self):
        assert _field({}, "trip_code") == "N/A"
        assert _field({"trip_code": ""}, "trip_code") == "N/A"


class TestBookingStatusMessage:
    @pytest.mark.parametrize(
        "status,expected",
        [
            ("paid", "Pembayaran diterima"),
            ("confirmed", "Booking dikonfirmasi"),
            ("cancelled", "Booking dibatalkan"),
            ("completed", "Trip selesai"),
            ("on_hold", "Status booking berubah menjadi on_hold"),
            (None, "Status booking berubah menjadi N/A"),
            ("", "Status booking berubah menjadi N/A"),
        ],
    )
    def test_messages(self, status, expected):
        assert booking_status_message(status) == expected


class TestRegistration:
    def test_every_rule_subscribed(self, bus):
        for event_type in _NOTIFICATION_RULES:
            assert bus.handler_count(event_type) == 1
        assert bus.handler_count(EventType.package_availability_changed) == 1

    def test_custom_has_no_default_handler(self, bus):
        assert bus.handler_count(EventType.custom) == 0


class TestNotificationHandlers:
    async def test_booking_created(self, bus, notifier):
        await bus.emit(EventType.booking_created, {"booking_code": "BK-100", "customer_id": "c-1"})

        assert len(notifier.calls) == 1
        call = notifier.calls[0]
        assert call["event_type"] == "booking.created"
        assert call["title"] == "Booking Baru"
        assert call["message"] == "Booking baru telah dibuat: BK-100"
        assert call["data"]["customer_id"] == "c-1"

    async def test_booking_status_changed_uses_status_message(self, bus, notifier):
        await bus.emit(EventType.booking_status_changed, {"newStatus": "paid"})

        assert notifier.calls[0]["message"] == "Pembayaran diterima"

    async def test_booking_status_changed_without_status(self, bus, notifier):
        await bus.emit(EventType.booking_status_changed, {"booking_code": "BK-1"})

        assert notifier.calls[0]["message"] == "Status booking berubah menjadi N/A"

    async def test_guide_contract_events_notify_as_custom(self, bus, notifier):
        await bus.emit(EventType.guide_contract_signed, {"contract_number": "CT-7"})

        call = notifier.calls[0]
        assert call["event_type"] == "custom"
        assert call["message"] == "Kontrak CT-7 telah ditandatangani oleh guide"

    async def test_guide_assignment_confirmed_notifies_as_trip_assigned(self, bus, notifier):
        await bus.emit(EventType.guide_assignment_confirmed, {"guide_name": "Budi", "trip_code": "TR-1"})

        call = notifier.calls[0]
        assert call["event_type"] == "trip.assigned"
        assert call["message"] == "Guide Budi telah mengkonfirmasi assignment untuk trip TR-1"

    async def test_missing_fields_render_na(self, bus, notifier):
        await bus.emit(EventType.trip_assigned, {})

        assert notifier.calls[0]["message"] == "Anda telah ditugaskan untuk trip N/A"

    async def test_vendor_price_changed(self, bus, notifier):
        await bus.emit(
            EventType.vendor_price_changed,
            {"vendor_name": "Kapal Bahari", "old_price": 1000, "new_price": 1200, "reason": "BBM naik"},
        )

        call = notifier.calls[0]
        assert call["title"] == "Harga Vendor Berubah"
        assert call["message"] == "Harga Kapal Bahari berubah dari 1000 menjadi 1200: BBM naik"

    async def test_package_availability_changed_creates_nothing(self, bus, notifier):
        await bus.emit(EventType.package_availability_changed, {"package_id": "pkg-1"})

        assert notifier.calls == []

    async def test_notifier_failure_is_logged_not_raised(self):
        notifier = AsyncMock()
        notifier.create_event_notifications.side_effect = RuntimeError("db unavailable")
        bus = EventBus()
        initialize_event_handlers(bus, notifier)

        with patch("aerotravel.events.handlers.logger") as mock_logger:
            await bus.emit(EventType.payment_received, {"booking_code": "BK-5"})

        mock_logger.error.assert_called_once()
        assert "db unavailable" in mock_logger.error.call_args[0][0]


class TestWithDispatcher:
    async def test_event_creates_notification_rows(self, session_factory, session):
        bus = EventBus(session_factory)
        initialize_event_handlers(bus, NotificationDispatcher(session_factory))

        await bus.emit(EventType.payment_received, {"booking_code": "BK-8", "customer_id": "cust-8"})

        rows = await NotificationService(session).list_for_user("cust-8")
        assert len(rows) == 1
        assert rows[0].title == "Pembayaran Diterima"
        assert rows[0].message == "Pembayaran untuk booking BK-8 telah diterima"

    async def test_event_without_recipient_goes_to_admin_channel(self, session_factory, session):
        bus = EventBus(session_factory)
        initialize_event_handlers(bus, NotificationDispatcher(session_factory))

        await bus.emit(EventType.inventory_low_stock, {"item_name": "Solar", "current_stock": 5, "min_stock": 10})

        rows = await NotificationService(session).list_admin_channel()
        assert len(rows) == 1
        assert rows[0].user_id is None
        assert rows[0].message == "Stok Solar tersisa 5 (minimum 10)"
