"""Domain-level types."""

from .enums import (
    AlertSeverity,
    AlertType,
    ContentSource,
    EventType,
    FacilityCategory,
    FacilitySource,
    FacilityStatus,
    LicenseStatus,
    RewardSourceType,
    RewardTransactionType,
    TransactionType,
    VendorType,
)

__all__ = [
    "AlertSeverity",
    "AlertType",
    "ContentSource",
    "EventType",
    "FacilityCategory",
    "FacilitySource",
    "FacilityStatus",
    "LicenseStatus",
    "RewardSourceType",
    "RewardTransactionType",
    "TransactionType",
    "VendorType",
]
