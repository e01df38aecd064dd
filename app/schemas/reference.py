from __future__ import annotations
from datetime import datetime
from app.schemas.base import CamelModel, NonBlank


class CityCreate(CamelModel):
    name: NonBlank


class CityUpdate(CamelModel):
    name: NonBlank | None = None
    is_active: bool | None = None


class CityRead(CamelModel):
    id: str
    name: str
    is_active: bool
    created_at: datetime | None = None


class NeighborhoodCreate(CamelModel):
    name: NonBlank
    city_id: NonBlank


class NeighborhoodUpdate(CamelModel):
    name: NonBlank | None = None
    city_id: NonBlank | None = None
    is_active: bool | None = None


class NeighborhoodRead(CamelModel):
    id: str
    name: str
    city_id: str
    is_active: bool
    created_at: datetime | None = None


class NeighborhoodImport(CamelModel):
    city_id: str
    names: str  # comma-separated


class NeighborhoodImportResult(CamelModel):
    created: list[NeighborhoodRead]
    skipped: list[str]


class ServiceTypeCreate(CamelModel):
    name: NonBlank


class ServiceTypeUpdate(CamelModel):
    name: NonBlank | None = None
    is_active: bool | None = None


class ServiceTypeRead(CamelModel):
    id: str
    name: str
    is_active: bool
    created_at: datetime | None = None
