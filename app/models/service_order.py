"""Service order (OS) model: a single field visit."""

from __future__ import annotations

from sqlalchemy import String, Boolean, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, UUIDMixin


class ServiceOrder(Base, UUIDMixin):
    __tablename__ = "service_orders"

    code: Mapped[str] = mapped_column(String(50), unique=True)
    type: Mapped[str] = mapped_column(String(100))  # ATIVAÇÃO | LOSS | UPGRADE | ...
    status: Mapped[str] = mapped_column(String(20), default="Pendente")
    team_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("teams.id"), nullable=True, default=None)
    technician_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("technicians.id"), nullable=True, default=None
    )
    alert: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    scheduled_date: Mapped[str | None] = mapped_column(String(10), nullable=True, default=None)  # YYYY-MM-DD
    scheduled_time: Mapped[str | None] = mapped_column(String(5), nullable=True, default=None)  # HH:MM
    customer_name: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)
    customer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True, default=None)
    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    city_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("cities.id"), nullable=True, default=None)
    neighborhood_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("neighborhoods.id"), nullable=True, default=None
    )
    reminder_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    created_via_calendar: Mapped[bool] = mapped_column(Boolean, default=False)
