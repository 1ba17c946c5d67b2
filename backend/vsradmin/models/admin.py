"""
VSRAdmin Backend - ORM Models
==============================

What:  Tables backing the SQL collaborator services.
Who:   Used by the SQL adapters in `vsradmin.services` and by Alembic.

Tables:
    restaurants              one row per restaurant, keyed by DID
    restaurant_instructions  free-text instructions, N per restaurant
    customer_info            supplementary profile, 1 per restaurant
    admin_users              operators allowed to log in

Instructions and customer info reference restaurants by DID (foreign key),
they are never embedded in the restaurant row.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TIMESTAMP

from vsradmin.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Restaurant(Base):
    """
    A restaurant (master customer) record.

    DID is supplied by the console and never changes once the row exists;
    updates through create_company keep the DID and replace the other columns.
    """

    __tablename__ = "restaurants"

    did: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_person: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Storage key of the logo ("42.jpg"); NULL when no logo was uploaded
    logo_key: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Search filters on name; listing orders by name
    __table_args__ = (Index("idx_restaurants_name", "name"),)

    def __repr__(self) -> str:
        return f"<Restaurant(did={self.did}, name='{self.name}')>"


class RestaurantInstruction(Base):
    __tablename__ = "restaurant_instructions"

    instruction_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("restaurants.did", ondelete="CASCADE"),
        nullable=False,
    )
    instruction: Mapped[str] = mapped_column(Text, nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(150), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_instructions_customer", "customer_id", "instruction_id"),
    )


class CustomerInfoRecord(Base):
    __tablename__ = "customer_info"

    customer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("restaurants.did", ondelete="CASCADE"),
        primary_key=True,
        autoincrement=False,
    )
    contact_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )


class AdminUser(Base):
    """
    An operator of the admin console.

    password_hash format: pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>
    (see `vsradmin.services.passwords`).
    """

    __tablename__ = "admin_users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
