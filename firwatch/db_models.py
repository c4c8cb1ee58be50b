"""SQLAlchemy ORM models for FIR Watch."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from firwatch.db import Base


class StoredValue(Base):
    """Named JSON document shared by every viewer (schedule, reference latitude)."""

    __tablename__ = "stored_values"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
