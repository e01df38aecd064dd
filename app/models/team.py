"""Team model: a box (vehicle) with its assigned technicians."""

from __future__ import annotations

from sqlalchemy import String, Boolean, JSON, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, UUIDMixin


class Team(Base, UUIDMixin):
    __tablename__ = "teams"

    name: Mapped[str] = mapped_column(String(200))
    technician_ids: Mapped[list] = mapped_column(JSON, default=list)
    box_number: Mapped[str] = mapped_column(String(50))  # e.g. "CAIXA-01"
    notes: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
