"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the centralized database layer using SQLModel.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import ConfigDict
from sqlmodel import SQLModel


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def new_id() -> str:
    """Generate a primary key for a new row."""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form every table stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def dumps_payload(payload: Dict[str, Any] | None) -> str:
    """Serialize a JSON payload column, tolerating non-JSON values such as datetimes."""
    return json.dumps(payload or {}, default=str)


def loads_payload(raw: str | None) -> Dict[str, Any]:
    """Deserialize a JSON payload column, returning an empty dict for bad data."""
    try:
        value = json.loads(raw) if raw else {}
    except (json.JSONDecodeError, TypeError):
        return {}
    return value if isinstance(value, dict) else {}
