"""
Compliance Endpoints.

Business licenses and the expiry alerts generated for them.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from aerotravel.compliance.alerts import ComplianceAlertService
from aerotravel.core.models.io.compliance import (
    AlertGenerateRequest,
    AlertGenerateResult,
    AlertRead,
    AlertResolve,
    LicenseCreate,
    LicenseRead,
    UnreadCount,
)
from aerotravel.server.services.deps import SessionDep, UserIdDep

router = APIRouter()


@router.post(
    "/licenses",
    response_model=LicenseRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register License",
)
async def create_license(payload: LicenseCreate, session: SessionDep) -> LicenseRead:
    license = await ComplianceAlertService(session).create_license(**payload.model_dump())
    return LicenseRead.model_validate(license)


@router.get("/licenses", response_model=List[LicenseRead], summary="List Licenses")
async def list_licenses(session: SessionDep) -> List[LicenseRead]:
    return [LicenseRead.model_validate(row) for row in await ComplianceAlertService(session).list_licenses()]


@router.post(
    "/alerts/generate",
    response_model=AlertGenerateResult,
    summary="Generate Alerts",
    description="Check every license against its expiry date and raise the alerts that are due.",
)
async def generate_alerts(session: SessionDep, payload: Optional[AlertGenerateRequest] = None) -> AlertGenerateResult:
    today = payload.today if payload else None
    alerts = await ComplianceAlertService(session).generate_compliance_alerts(today)
    return AlertGenerateResult(
        alerts_created=len(alerts),
        alerts=[AlertRead.model_validate(alert) for alert in alerts],
    )


@router.get(
    "/alerts",
    response_model=List[AlertRead],
    summary="List Unresolved Alerts",
    description="Unresolved alerts, newest first.",
)
async def list_alerts(session: SessionDep, limit: int = Query(default=10, ge=1, le=200)) -> List[AlertRead]:
    alerts = await ComplianceAlertService(session).get_unresolved_alerts(limit=limit)
    return [AlertRead.model_validate(alert) for alert in alerts]


@router.get("/alerts/unread-count", response_model=UnreadCount, summary="Count Unread Alerts")
async def unread_count(session: SessionDep) -> UnreadCount:
    return UnreadCount(count=await ComplianceAlertService(session).get_unread_count())


@router.post(
    "/alerts/{alert_id}/read",
    response_model=AlertRead,
    summary="Mark Alert Read",
    responses={404: {"description": "Alert not found"}},
)
async def mark_alert_read(alert_id: str, session: SessionDep, caller_id: UserIdDep) -> AlertRead:
    alert = await ComplianceAlertService(session).mark_alert_read(alert_id, caller_id)
    return AlertRead.model_validate(alert)


@router.post(
    "/alerts/{alert_id}/resolve",
    response_model=AlertRead,
    summary="Resolve Alert",
    responses={404: {"description": "Alert not found"}},
)
async def resolve_alert(
    alert_id: str, session: SessionDep, caller_id: UserIdDep, payload: Optional[AlertResolve] = None
) -> AlertRead:
    payload = payload or AlertResolve()
    alert = await ComplianceAlertService(session).resolve_alert(
        alert_id, payload.resolved_by or caller_id, payload.resolution_notes
    )
    return AlertRead.model_validate(alert)
