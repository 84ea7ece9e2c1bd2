"""Domain enums shared by entities, services and I/O schemas."""

from __future__ import annotations

from enum import Enum


class EventType(str, Enum):
    """
    Types of events published on the in-process event bus.

    Every emission is also written to the ``app_events`` audit table.
    """

    booking_created = "booking.created"
    booking_status_changed = "booking.status_changed"
    booking_cancelled = "booking.cancelled"
    booking_confirmed = "booking.confirmed"
    payment_received = "payment.received"
    payment_failed = "payment.failed"
    trip_assigned = "trip.assigned"
    trip_status_changed = "trip.status_changed"
    package_availability_changed = "package.availability_changed"
    wallet_balance_changed = "wallet.balance_changed"
    guide_contract_signed = "guide.contract_signed"
    guide_contract_active = "guide.contract_active"
    guide_certification_expired = "guide.certification_expired"
    guide_assignment_confirmed = "guide.assignment_confirmed"
    inventory_anomaly_detected = "inventory.anomaly_detected"
    inventory_low_stock = "inventory.low_stock"
    vendor_price_changed = "vendor.price_changed"
    custom = "custom"


class TransactionType(str, Enum):
    """Kinds of inventory stock movements."""

    purchase = "purchase"
    usage = "usage"
    adjustment = "adjustment"
    transfer = "transfer"


class VendorType(str, Enum):
    boat_rental = "boat_rental"
    catering = "catering"
    transport = "transport"
    accommodation = "accommodation"
    ticket = "ticket"
    equipment = "equipment"
    other = "other"


class FacilityCategory(str, Enum):
    transport = "transport"
    consumption = "consumption"
    equipment = "equipment"
    accommodation = "accommodation"
    guide = "guide"
    insurance = "insurance"
    ticket = "ticket"
    activity = "activity"
    documentation = "documentation"
    other = "other"


class FacilityStatus(str, Enum):
    included = "included"
    excluded = "excluded"


class FacilitySource(str, Enum):
    """Where a merged facility came from: the package-type template or a package override."""

    default = "default"
    override = "override"


class AlertType(str, Enum):
    expiry_30d = "expiry_30d"
    expiry_15d = "expiry_15d"
    expiry_7d = "expiry_7d"
    expiry_1d = "expiry_1d"
    expired = "expired"
    renewal_reminder = "renewal_reminder"
    status_change = "status_change"


class AlertSeverity(str, Enum):
    info = "info"
    warning = "warning"
    critical = "critical"


class LicenseStatus(str, Enum):
    active = "active"
    pending_renewal = "pending_renewal"
    expired = "expired"
    suspended = "suspended"


class RewardSourceType(str, Enum):
    challenge = "challenge"
    badge = "badge"
    performance = "performance"
    level_up = "level_up"
    milestone = "milestone"
    special = "special"
    manual = "manual"
    adjustment = "adjustment"


class RewardTransactionType(str, Enum):
    earn = "earn"
    redeem = "redeem"
    expire = "expire"
    adjustment = "adjustment"
    refund = "refund"


class ContentSource(str, Enum):
    """Whether spun content came from the LLM or the static fallback template."""

    ai = "ai"
    fallback = "fallback"
