"""Reference data: cities, neighborhoods and service types."""

from __future__ import annotations

from sqlalchemy import String, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, UUIDMixin


class City(Base, UUIDMixin):
    __tablename__ = "cities"

    name: Mapped[str] = mapped_column(String(200), unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class Neighborhood(Base, UUIDMixin):
    __tablename__ = "neighborhoods"

    name: Mapped[str] = mapped_column(String(200))
    city_id: Mapped[str] = mapped_column(String(36), ForeignKey("cities.id"))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class ServiceType(Base, UUIDMixin):
    __tablename__ = "service_types"

    name: Mapped[str] = mapped_column(String(100), unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
