"""Business license compliance alerts."""

from .alerts import ComplianceAlertService

__all__ = ["ComplianceAlertService"]
