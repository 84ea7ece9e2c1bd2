"""Initial schema for AeroTravel

Revision ID: 20260101_000000
Revises: None
Create Date: 2026-01-01 00:00:00.000000

This is the initial migration that creates all tables for the AeroTravel
backend. This includes:
- Event bus audit log and notifications
- Inventory items, stock movements and trip expenses
- Vendors and the locked-price history
- Business licenses and compliance alerts
- Guide reward point balances and ledger

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260101_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    # Create app_events table
    op.create_table(
        "app_events",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=True),
        sa.Column("payload", sa.Text(), nullable=False, server_default="{}"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_app_events_type", "type"),
        sa.Index("ix_app_events_user_id", "user_id"),
        sa.Index("ix_app_events_created_at", "created_at"),
    )

    # Create notifications table
    op.create_table(
        "notifications",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=True),
        sa.Column("event_type", sa.String(64), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("payload", sa.Text(), nullable=False, server_default="{}"),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("read_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_notifications_user_id", "user_id"),
        sa.Index("ix_notifications_is_read", "is_read"),
        sa.Index("ix_notifications_created_at", "created_at"),
    )

    # Create inventory table
    op.create_table(
        "inventory",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("branch_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("sku", sa.String(64), nullable=True),
        sa.Column("unit", sa.String(32), nullable=False),
        sa.Column("current_stock", sa.Float(), nullable=False, server_default="0"),
        sa.Column("min_stock", sa.Float(), nullable=False, server_default="0"),
        sa.Column("unit_cost", sa.Float(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_inventory_branch_id", "branch_id"),
    )

    # Create inventory_transactions table
    op.create_table(
        "inventory_transactions",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("inventory_id", sa.String(64), nullable=False),
        sa.Column("transaction_type", sa.String(16), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("stock_before", sa.Float(), nullable=False),
        sa.Column("stock_after", sa.Float(), nullable=False),
        sa.Column("trip_id", sa.String(64), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["inventory_id"], ["inventory.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_inventory_transactions_inventory_id", "inventory_id"),
        sa.Index("ix_inventory_transactions_trip_id", "trip_id"),
        sa.Index("ix_inventory_transactions_created_at", "created_at"),
    )

    # Create trip_expenses table
    op.create_table(
        "trip_expenses",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("trip_id", sa.String(64), nullable=False),
        sa.Column("vendor_id", sa.String(64), nullable=True),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("is_anomaly", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_trip_expenses_trip_id", "trip_id"),
    )

    # Create vendors table
    op.create_table(
        "vendors",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("branch_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("vendor_type", sa.String(32), nullable=False, server_default="other"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("contact_person", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("default_price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("price_unit", sa.String(32), nullable=False, server_default="per trip"),
        sa.Column("bank_name", sa.String(128), nullable=True),
        sa.Column("bank_account_number", sa.String(64), nullable=True),
        sa.Column("bank_account_name", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_vendors_branch_id", "branch_id"),
        sa.Index("ix_vendors_vendor_type", "vendor_type"),
    )

    # Create vendor_price_history table
    op.create_table(
        "vendor_price_history",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("vendor_id", sa.String(64), nullable=False),
        sa.Column("old_price", sa.Float(), nullable=False),
        sa.Column("new_price", sa.Float(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("changed_by", sa.String(64), nullable=True),
        sa.Column("changed_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["vendor_id"], ["vendors.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_vendor_price_history_vendor_id", "vendor_id"),
        sa.Index("ix_vendor_price_history_changed_at", "changed_at"),
    )

    # Create business_licenses table
    op.create_table(
        "business_licenses",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("license_type", sa.String(64), nullable=False),
        sa.Column("license_name", sa.String(255), nullable=False),
        sa.Column("license_number", sa.String(128), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="active"),
        sa.Column("reminder_30d_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reminder_15d_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reminder_7d_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reminder_1d_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_business_licenses_expiry_date", "expiry_date"),
    )

    # Create compliance_alerts table
    op.create_table(
        "compliance_alerts",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("license_id", sa.String(64), nullable=False),
        sa.Column("alert_type", sa.String(32), nullable=False),
        sa.Column("severity", sa.String(16), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("read_by", sa.String(64), nullable=True),
        sa.Column("read_at", sa.DateTime(), nullable=True),
        sa.Column("is_resolved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("resolved_by", sa.String(64), nullable=True),
        sa.Column("resolved_at", sa.DateTime(), nullable=True),
        sa.Column("resolution_notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["license_id"], ["business_licenses.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_compliance_alerts_license_id", "license_id"),
        sa.Index("ix_compliance_alerts_is_read", "is_read"),
        sa.Index("ix_compliance_alerts_is_resolved", "is_resolved"),
        sa.Index("ix_compliance_alerts_created_at", "created_at"),
    )

    # Create guide_reward_points table
    op.create_table(
        "guide_reward_points",
        sa.Column("guide_id", sa.String(64), nullable=False),
        sa.Column("balance", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("lifetime_earned", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("lifetime_redeemed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("expired_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("guide_id"),
    )

    # Create guide_reward_transactions table
    op.create_table(
        "guide_reward_transactions",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("guide_id", sa.String(64), nullable=False),
        sa.Column("transaction_type", sa.String(16), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("source_type", sa.String(32), nullable=True),
        sa.Column("source_id", sa.String(64), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("payload", sa.Text(), nullable=False, server_default="{}"),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_guide_reward_transactions_guide_id", "guide_id"),
        sa.Index("ix_guide_reward_transactions_expires_at", "expires_at"),
        sa.Index("ix_guide_reward_transactions_created_at", "created_at"),
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("guide_reward_transactions")
    op.drop_table("guide_reward_points")
    op.drop_table("compliance_alerts")
    op.drop_table("business_licenses")
    op.drop_table("vendor_price_history")
    op.drop_table("vendors")
    op.drop_table("trip_expenses")
    op.drop_table("inventory_transactions")
    op.drop_table("inventory")
    op.drop_table("notifications")
    op.drop_table("app_events")
