"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-16 00:00:00.000000

Creates roles, staffs, customers and identities.
Seeds the staff/admin roles and a bootstrap admin account.
"""

import uuid
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Deterministic UUIDs derived from names so the seed is idempotent
_NS = uuid.NAMESPACE_DNS

SEED_ROLES = [
    {"id": str(uuid.uuid5(_NS, "role:staff")), "description": "staff"},
    {"id": str(uuid.uuid5(_NS, "role:admin")), "description": "admin"},
]

# Pre-computed bcrypt hash (password: admin123); rotate after first login
SEED_ADMIN = {
    "id": str(uuid.uuid5(_NS, "staff:admin")),
    "username": "admin",
    "hashed_password": "$2b$12$xLbWBxKgZ9Qp5PWE95MtWeruOHmuw1jE4r5YxRhT8v4im6E1RHbJ2",
    "name": "System Administrator",
    "role_id": SEED_ROLES[1]["id"],
    "status": "active",
}


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create all tables and seed roles plus the bootstrap admin."""

    # -- roles --
    roles = op.create_table(
        "roles",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("description", sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("description", name="uq_roles_description"),
    )

    # -- staffs --
    staffs = op.create_table(
        "staffs",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column(
            "role_id",
            sa.UUID(as_uuid=False),
            sa.ForeignKey("roles.id"),
            nullable=False,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("password_updated_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_staffs_username", "staffs", ["username"], unique=True)
    op.create_index("idx_staff_status", "staffs", ["status"])

    # -- customers --
    op.create_table(
        "customers",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("date_of_birth", sa.Date, nullable=False),
        sa.Column("phone_number", sa.String(20), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("verify_code", sa.String(36), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("password_updated_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_customers_email"),
    )
    op.create_index("ix_customers_username", "customers", ["username"], unique=True)
    op.create_index("idx_customer_status", "customers", ["status"])

    # -- identities --
    op.create_table(
        "identities",
        sa.Column("id", sa.UUID(as_uuid=False), nullable=False),
        sa.Column(
            "customer_id",
            sa.UUID(as_uuid=False),
            sa.ForeignKey("customers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("identity_number", sa.String(12), nullable=False),
        sa.Column("registration_date", sa.Date, nullable=False),
        sa.Column("front_image", sa.LargeBinary, nullable=False),
        sa.Column("back_image", sa.LargeBinary, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("customer_id", name="uq_identities_customer_id"),
    )

    op.bulk_insert(roles, SEED_ROLES)
    op.bulk_insert(staffs, [SEED_ADMIN])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table("identities")
    op.drop_table("customers")
    op.drop_table("staffs")
    op.drop_table("roles")
