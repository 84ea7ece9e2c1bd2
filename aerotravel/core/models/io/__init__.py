"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- events: Event emission and audit log models
- notifications: Notification models
- inventory: Stock item, movement and operation result models
- vendors: Vendor and price history models
- facilities: Facility and merge models
- content: SEO content spinner models
- compliance: License and alert models
- rewards: Reward point models
"""

from .compliance import (
    AlertGenerateRequest,
    AlertGenerateResult,
    AlertRead,
    AlertResolve,
    LicenseCreate,
    LicenseRead,
    UnreadCount,
)
from .content import SpinRequest, SpunContent
from .events import EventEmit, EventRead
from .facilities import FacilityMergeRequest, FacilityRead, MergedFacility
from .inventory import (
    AdjustmentResult,
    InventoryItemCreate,
    InventoryItemRead,
    StockAdjustment,
    StockPurchase,
    StockTransactionRead,
    TripUsage,
    UsageResult,
)
from .notifications import NotificationRead
from .rewards import (
    ExpiringPoints,
    ExpiringPointsRead,
    PointsAward,
    PointsRedeem,
    RewardBalanceRead,
    RewardTransactionRead,
)
from .vendors import (
    VendorCreate,
    VendorDetail,
    VendorPriceHistoryRead,
    VendorPriceUpdate,
    VendorRead,
    VendorUpdate,
)

__all__ = [
    "AdjustmentResult",
    "AlertGenerateRequest",
    "AlertGenerateResult",
    "AlertRead",
    "AlertResolve",
    "EventEmit",
    "EventRead",
    "ExpiringPoints",
    "ExpiringPointsRead",
    "FacilityMergeRequest",
    "FacilityRead",
    "InventoryItemCreate",
    "InventoryItemRead",
    "LicenseCreate",
    "LicenseRead",
    "MergedFacility",
    "NotificationRead",
    "PointsAward",
    "PointsRedeem",
    "RewardBalanceRead",
    "RewardTransactionRead",
    "SpinRequest",
    "SpunContent",
    "StockAdjustment",
    "StockPurchase",
    "StockTransactionRead",
    "TripUsage",
    "UsageResult",
    "VendorCreate",
    "VendorDetail",
    "VendorPriceHistoryRead",
    "VendorPriceUpdate",
    "VendorRead",
    "VendorUpdate",
]
