"""Error types for the AeroTravel backend.

Services raise these exceptions; the server's exception handlers translate
them into HTTP responses. Each error carries the status code it maps to.
"""

from __future__ import annotations

from typing import Any


class AeroTravelError(Exception):
    """Base error for all domain exceptions."""

    status_code: int = 400


class NotFoundError(AeroTravelError):
    """Raised when a referenced row does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: Any) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found")


class InvalidOperationError(AeroTravelError):
    """Raised when input is well-formed but violates a business rule."""

    status_code = 422


class InsufficientStockError(AeroTravelError):
    """Raised when trip usage exceeds the stock on hand."""

    status_code = 409

    def __init__(self, item_id: str, requested: float, available: float) -> None:
        self.item_id = item_id
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient stock for item '{item_id}': requested {requested}, available {available}")


class InsufficientPointsError(AeroTravelError):
    """Raised when a redemption exceeds a guide's point balance."""

    status_code = 409

    def __init__(self, guide_id: str, requested: int, balance: int) -> None:
        self.guide_id = guide_id
        self.requested = requested
        self.balance = balance
        super().__init__(f"Guide '{guide_id}' has {balance} points, cannot redeem {requested}")


class PriceLockError(AeroTravelError):
    """Raised when a role other than the price-lock role tries to change a vendor price."""

    status_code = 403

    def __init__(self, vendor_id: str, role: str | None) -> None:
        self.vendor_id = vendor_id
        self.role = role
        super().__init__(f"Vendor '{vendor_id}' price is locked; role '{role or 'anonymous'}' cannot change it")
