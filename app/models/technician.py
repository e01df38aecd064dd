"""Technician model: field worker grouped into teams."""

from __future__ import annotations

from sqlalchemy import String, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, UUIDMixin


class Technician(Base, UUIDMixin):
    __tablename__ = "technicians"

    name: Mapped[str] = mapped_column(String(200))
    # city and neighborhood *names*, not ids
    cities: Mapped[list] = mapped_column(JSON, default=list)
    neighborhoods: Mapped[list] = mapped_column(JSON, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
