"""
Default event handlers.

Each handler turns an event into notifications. Failures are logged and
never reach the bus caller.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol

from aerotravel.core.logging_config import get_logger
from aerotravel.core.models.domain.enums import EventType

from .bus import AppEvent, EventBus

logger = get_logger(__name__)

BOOKING_STATUS_MESSAGES = {
    "paid": "Pembayaran diterima",
    "confirmed": "Booking dikonfirmasi",
    "cancelled": "Booking dibatalkan",
    "completed": "Trip selesai",
}


class EventNotifier(Protocol):
    async def create_event_notifications(
        self, event_type: str, data: Dict[str, Any], title: str, message: str
    ) -> List[Any]: ...


def _field(data: Dict[str, Any], key: str) -> str:
    """Value of ``key`` in event data, accepting the camelCase spelling too, or ``N/A``."""
    head, *rest = key.split("_")
    camel = head + "".join(part.title() for part in rest)
    value = data.get(key, data.get(camel))
    return "N/A" if value is None or value == "" else str(value)


def booking_status_message(status: Optional[str]) -> str:
    return BOOKING_STATUS_MESSAGES.get(status or "", f"Status booking berubah menjadi {status or 'N/A'}")


# Each entry: event type -> (notification type, title, message builder)
_NOTIFICATION_RULES: Dict[EventType, tuple] = {
    EventType.booking_created: (
        EventType.booking_created,
        "Booking Baru",
        lambda d: f"Booking baru telah dibuat: {_field(d, 'booking_code')}",
    ),
    EventType.booking_status_changed: (
        EventType.booking_status_changed,
        "Status Booking Berubah",
        lambda d: booking_status_message(_field(d, "new_status")),
    ),
    EventType.booking_cancelled: (
        EventType.booking_cancelled,
        "Booking Dibatalkan",
        lambda d: f"Booking {_field(d, 'booking_code')} telah dibatalkan",
    ),
    EventType.booking_confirmed: (
        EventType.booking_confirmed,
        "Booking Dikonfirmasi",
        lambda d: f"Booking {_field(d, 'booking_code')} telah dikonfirmasi",
    ),
    EventType.payment_received: (
        EventType.payment_received,
        "Pembayaran Diterima",
        lambda d: f"Pembayaran untuk booking {_field(d, 'booking_code')} telah diterima",
    ),
    EventType.payment_failed: (
        EventType.payment_failed,
        "Pembayaran Gagal",
        lambda d: f"Pembayaran untuk booking {_field(d, 'booking_code')} gagal",
    ),
    EventType.trip_assigned: (
        EventType.trip_assigned,
        "Trip Assignment",
        lambda d: f"Anda telah ditugaskan untuk trip {_field(d, 'trip_code')}",
    ),
    EventType.trip_status_changed: (
        EventType.trip_status_changed,
        "Status Trip Berubah",
        lambda d: f"Status trip {_field(d, 'trip_code')} telah berubah",
    ),
    EventType.wallet_balance_changed: (
        EventType.wallet_balance_changed,
        "Saldo Wallet Berubah",
        lambda d: "Saldo wallet Anda telah berubah",
    ),
    EventType.guide_contract_signed: (
        EventType.custom,
        "Kontrak Ditandatangani",
        lambda d: f"Kontrak {_field(d, 'contract_number')} telah ditandatangani oleh guide",
    ),
    EventType.guide_contract_active: (
        EventType.custom,
        "Kontrak Aktif",
        lambda d: f"Kontrak {_field(d, 'contract_number')} telah aktif dan berlaku",
    ),
    EventType.guide_certification_expired: (
        EventType.custom,
        "Sertifikasi Expired",
        lambda d: f"Sertifikasi {_field(d, 'certification_type')} telah expired. Harap perbarui segera.",
    ),
    EventType.guide_assignment_confirmed: (
        EventType.trip_assigned,
        "Assignment Dikonfirmasi",
        lambda d: (
            f"Guide {_field(d, 'guide_name')} telah mengkonfirmasi assignment "
            f"untuk trip {_field(d, 'trip_code')}"
        ),
    ),
    EventType.inventory_anomaly_detected: (
        EventType.inventory_anomaly_detected,
        "Anomali Pemakaian Stok",
        lambda d: (
            f"Pemakaian {_field(d, 'item_name')} pada trip {_field(d, 'trip_id')} "
            f"menyimpang {_field(d, 'variance_percent')}% dari perkiraan"
        ),
    ),
    EventType.inventory_low_stock: (
        EventType.inventory_low_stock,
        "Stok Menipis",
        lambda d: (
            f"Stok {_field(d, 'item_name')} tersisa {_field(d, 'current_stock')} "
            f"(minimum {_field(d, 'min_stock')})"
        ),
    ),
    EventType.vendor_price_changed: (
        EventType.vendor_price_changed,
        "Harga Vendor Berubah",
        lambda d: (
            f"Harga {_field(d, 'vendor_name')} berubah dari {_field(d, 'old_price')} "
            f"menjadi {_field(d, 'new_price')}: {_field(d, 'reason')}"
        ),
    ),
}


def make_notification_handler(
    notifier: EventNotifier,
    notification_type: EventType,
    title: str,
    build_message: Callable[[Dict[str, Any]], str],
) -> Callable[[AppEvent], Awaitable[None]]:
    """Build a handler that creates notifications for an event."""

    async def handler(event: AppEvent) -> None:
        try:
            await notifier.create_event_notifications(
                notification_type.value, event.data, title, build_message(event.data)
            )
        except Exception as e:
            logger.error(f"Failed to handle {event.type}: {e}", exc_info=True, extra={"event_id": event.id})

    handler.__name__ = f"notify_{notification_type.value.replace('.', '_')}"
    return handler


async def handle_package_availability_changed(event: AppEvent) -> None:
    logger.debug(f"Package availability changed: {event.data.get('package_id', 'N/A')}")


def initialize_event_handlers(bus: EventBus, notifications: EventNotifier) -> None:
    """Subscribe the default handlers. Call once at startup."""
    for event_type, (notification_type, title, build_message) in _NOTIFICATION_RULES.items():
        bus.subscribe(event_type, make_notification_handler(notifications, notification_type, title, build_message))

    bus.subscribe(EventType.package_availability_changed, handle_package_availability_changed)
    logger.info("Default event handlers initialized")
