"""
API Dependencies.

Annotated dependency aliases shared by the v1 routers.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from aerotravel.content.spinner import ContentSpinner
from aerotravel.core.database import get_session
from aerotravel.events.bus import EventBus
from aerotravel.server.core.constant import USER_ID_HEADER, USER_ROLE_HEADER
from aerotravel.server.services.content import get_content_spinner
from aerotravel.server.services.events import get_event_bus


async def get_user_role(
    x_user_role: Annotated[Optional[str], Header(alias=USER_ROLE_HEADER)] = None,
) -> Optional[str]:
    """Role of the caller, as forwarded by the gateway in ``X-User-Role``."""
    return x_user_role


async def get_user_id(
    x_user_id: Annotated[Optional[str], Header(alias=USER_ID_HEADER)] = None,
) -> Optional[str]:
    """Id of the caller, as forwarded by the gateway in ``X-User-Id``."""
    return x_user_id


SessionDep = Annotated[AsyncSession, Depends(get_session)]
EventBusDep = Annotated[EventBus, Depends(get_event_bus)]
ContentSpinnerDep = Annotated[ContentSpinner, Depends(get_content_spinner)]
UserRoleDep = Annotated[Optional[str], Depends(get_user_role)]
UserIdDep = Annotated[Optional[str], Depends(get_user_id)]
