"""Inventory stock tracking and the vendor database."""

from .stock import StockService, usage_variance_percent, weighted_average_cost
from .vendors import VendorService

__all__ = ["StockService", "VendorService", "usage_variance_percent", "weighted_average_cost"]
