"""
Domain Exception Handler.

Translates :class:`AeroTravelError` subclasses raised by services into JSON
responses carrying the status code each error declares.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from aerotravel.core.errors import AeroTravelError
from aerotravel.core.logging_config import get_logger

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: AeroTravelError) -> JSONResponse:
    logger.info(
        f"{type(exc).__name__} in {request.method} {request.url.path}: {exc}",
        extra={"status_code": exc.status_code, "error_type": type(exc).__name__},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )
