"""
Declarative base and the two key styles used by the CRM tables.

Catalog rows (providers, offers) are keyed by a readable slug such as
'edison-top50'; ledger rows get a surrogate integer id.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class TimestampMixin:
    """created_at set by the database, updated_at on every UPDATE."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True,
    )


class SlugModel(Base, TimestampMixin):
    """Catalog table keyed by a lowercase slug chosen by back-office."""

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(100),
        primary_key=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )


class LedgerModel(Base, TimestampMixin):
    """Append-mostly table keyed by an auto-incrementing id."""

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
