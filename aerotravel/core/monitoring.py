"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for tracing of the
backend's operations:
- API endpoint tracing and request metrics
- LLM calls made by the content spinner
- Database operation monitoring
- Domain events emitted on the event bus

Every helper degrades to a debug log line when Logfire is disabled or not
installed, so callers never need to guard them.
"""

import logging
import os
from typing import Any, Optional

from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Logfire configuration from environment
LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "aerotravel-api")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.0.0")

# Feature flags
LOGFIRE_TRACE_PYDANTIC_AI = os.getenv("LOGFIRE_TRACE_PYDANTIC_AI", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")


def initialize_logfire(app: FastAPI | None = None) -> bool:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    Args:
        app: FastAPI application instance for endpoint instrumentation (optional).

    Returns:
        True when Logfire was configured, False when it stays disabled.
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not LOGFIRE_TOKEN:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set. Monitoring will not work.")
        return False

    try:
        import logfire

        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )

        instrumentations = {
            "Pydantic AI": (LOGFIRE_TRACE_PYDANTIC_AI, lambda: logfire.instrument_pydantic_ai()),
            "SQLAlchemy": (LOGFIRE_TRACE_SQLALCHEMY, lambda: logfire.instrument_sqlalchemy()),
            "HTTPX": (LOGFIRE_TRACE_HTTPX, lambda: logfire.instrument_httpx()),
        }
        if app is not None:
            instrumentations["FastAPI"] = (LOGFIRE_TRACE_FASTAPI, lambda: logfire.instrument_fastapi(app=app))

        for name, (enabled, instrument) in instrumentations.items():
            if not enabled:
                continue
            try:
                instrument()
                logger.info(f"Logfire: {name} instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument {name}: {e}")

        logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")
        return True

    except ImportError:
        logger.warning("Logfire is enabled but 'logfire' package is not installed.")
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
    return False


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Could not log API request to Logfire: {method} {path}")


def log_llm_call(model: str, success: bool, duration_ms: float, tokens_used: Optional[int] = None) -> None:
    """
    Log an LLM model call made by the content spinner.

    Args:
        model: The model identifier
        success: Whether the call returned usable output
        duration_ms: Latency of the call
        tokens_used: Total tokens used in the call, when reported
    """
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        logfire.info(
            "LLM call completed",
            model=model,
            success=success,
            duration_ms=duration_ms,
            tokens_used=tokens_used,
        )
    except Exception:
        logger.debug(f"Could not log LLM call to Logfire: model={model}")


def log_domain_event(event_type: str, event_id: str, handler_count: int) -> None:
    """Log an event-bus emission."""
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        logfire.info("Domain event emitted", event_type=event_type, event_id=event_id, handler_count=handler_count)
    except Exception:
        logger.debug(f"Could not log domain event to Logfire: {event_type}")


def log_error(error_type: str, error_message: str, context: Optional[dict[str, Any]] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not LOGFIRE_ENABLED:
        return
    try:
        import logfire

        logfire.error(f"{error_type}: {error_message}", **(context or {}))
    except Exception:
        logger.debug(f"Could not log error to Logfire: {error_type}")
