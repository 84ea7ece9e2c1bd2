"""Unit tests for engine and session factory helpers."""

import pytest
from sqlalchemy import inspect

from aerotravel.core.database.utils import create_all, create_engine, create_sessionmaker


@pytest.mark.parametrize(
    "url,drivername",
    [
        ("postgres://u:p@db:5432/app", "postgresql+asyncpg"),
        ("postgresql://u:p@db:5432/app", "postgresql+asyncpg"),
        ("postgresql+psycopg://u:p@db:5432/app", "postgresql+asyncpg"),
        ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite"),
    ],
)
async def test_create_engine_normalizes_url(url, drivername):
    engine = create_engine(url)

    assert engine.url.drivername == drivername
    await engine.dispose()


def test_sessionmaker_keeps_objects_loaded_after_commit():
    factory = create_sessionmaker(create_engine("sqlite+aiosqlite:///:memory:"))

    assert factory.kw["expire_on_commit"] is False


async def test_create_all_creates_every_table(test_engine):
    await create_all(test_engine)

    async with test_engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

    assert {
        "app_events",
        "notifications",
        "inventory",
        "inventory_transactions",
        "trip_expenses",
        "vendors",
        "vendor_price_history",
        "business_licenses",
        "compliance_alerts",
        "guide_reward_points",
        "guide_reward_transactions",
    } <= set(tables)
