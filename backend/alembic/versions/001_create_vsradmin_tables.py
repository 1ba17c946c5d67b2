"""Create VSRAdmin tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  restaurants, restaurant_instructions, customer_info and admin_users.
How:   Mirrors vsradmin/models/admin.py. Restaurant DIDs are assigned by the
       admin console, so restaurants.did is a plain integer key (no sequence).

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "restaurants",
        sa.Column("did", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("contact_person", sa.String(200), nullable=True),
        sa.Column("email", sa.String(254), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("website", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "logo_key",
            sa.String(255),
            nullable=True,
            comment="Storage key of the logo, e.g. 42.jpg",
        ),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("did"),
    )
    # Search filters on name and the listing is ordered by it
    op.create_index("idx_restaurants_name", "restaurants", ["name"])

    op.create_table(
        "restaurant_instructions",
        sa.Column("instruction_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("instruction", sa.Text(), nullable=False),
        sa.Column("created_by", sa.String(150), nullable=True),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["customer_id"], ["restaurants.did"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("instruction_id"),
    )
    op.create_index(
        "idx_instructions_customer",
        "restaurant_instructions",
        ["customer_id", "instruction_id"],
    )

    op.create_table(
        "customer_info",
        sa.Column("customer_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("contact_name", sa.String(200), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("email", sa.String(254), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["customer_id"], ["restaurants.did"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("customer_id"),
    )

    op.create_table(
        "admin_users",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(150), nullable=False),
        sa.Column("full_name", sa.String(200), nullable=True),
        sa.Column(
            "password_hash",
            sa.String(255),
            nullable=False,
            comment="pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("username"),
    )


def downgrade() -> None:
    op.drop_table("admin_users")
    op.drop_table("customer_info")
    op.drop_index("idx_instructions_customer", table_name="restaurant_instructions")
    op.drop_table("restaurant_instructions")
    op.drop_index("idx_restaurants_name", table_name="restaurants")
    op.drop_table("restaurants")
