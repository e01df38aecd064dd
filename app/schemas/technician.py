from __future__ import annotations
from datetime import datetime
from app.schemas.base import CamelModel, NonBlank


class TechnicianCreate(CamelModel):
    name: NonBlank
    cities: list[str] = []
    neighborhoods: list[str] = []


class TechnicianUpdate(CamelModel):
    name: NonBlank | None = None
    cities: list[str] | None = None
    neighborhoods: list[str] | None = None
    is_active: bool | None = None


class TechnicianRead(CamelModel):
    id: str
    name: str
    cities: list[str]
    neighborhoods: list[str]
    is_active: bool
    created_at: datetime | None = None
