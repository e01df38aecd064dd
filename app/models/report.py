from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, UUIDMixin


class Report(Base, UUIDMixin):
    __tablename__ = "reports"

    name: Mapped[str] = mapped_column(String(255))
    date: Mapped[str] = mapped_column(String(10))  # YYYY-MM-DD
    shift: Mapped[str] = mapped_column(String(10))  # Manhã | Tarde
    content: Mapped[str] = mapped_column(Text)
