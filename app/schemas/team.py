from __future__ import annotations
from datetime import datetime
from app.schemas.base import CamelModel, NonBlank


class TeamCreate(CamelModel):
    name: NonBlank
    technician_ids: list[str]
    box_number: NonBlank
    notes: str | None = None


class TeamUpdate(CamelModel):
    name: NonBlank | None = None
    technician_ids: list[str] | None = None
    box_number: NonBlank | None = None
    notes: str | None = None
    is_active: bool | None = None


class TeamRead(CamelModel):
    id: str
    name: str
    technician_ids: list[str]
    box_number: str
    notes: str | None = None
    is_active: bool
    created_at: datetime | None = None


class TechnicianSubstitution(CamelModel):
    team_id: str
    old_technician_id: str
    new_technician_id: str


class TeamSummary(CamelModel):
    team_id: str
    name: str
    box_number: str
    is_active: bool
    total: int
    counts: dict[str, int]
    all_completed: bool
