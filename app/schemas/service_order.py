from __future__ import annotations
from datetime import datetime
from typing import Literal
from pydantic import Field
from app.schemas.base import CamelModel, NonBlank

ServiceOrderStatus = Literal["Pendente", "Concluído", "Reagendado", "Adesivado", "Cancelado"]

_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
_TIME_PATTERN = r"^\d{2}:\d{2}$"


class ServiceOrderCreate(CamelModel):
    code: NonBlank
    type: NonBlank
    status: ServiceOrderStatus = "Pendente"
    team_id: str | None = None
    technician_id: str | None = None
    alert: str | None = None
    scheduled_date: str | None = Field(default=None, pattern=_DATE_PATTERN)
    scheduled_time: str | None = Field(default=None, pattern=_TIME_PATTERN)
    customer_name: str | None = None
    customer_phone: str | None = None
    address: str | None = None
    description: str | None = None
    city_id: str | None = None
    neighborhood_id: str | None = None
    reminder_enabled: bool = True
    created_via_calendar: bool = False


class ServiceOrderUpdate(CamelModel):
    code: NonBlank | None = None
    type: NonBlank | None = None
    status: ServiceOrderStatus | None = None
    team_id: str | None = None
    technician_id: str | None = None
    alert: str | None = None
    scheduled_date: str | None = Field(default=None, pattern=_DATE_PATTERN)
    scheduled_time: str | None = Field(default=None, pattern=_TIME_PATTERN)
    customer_name: str | None = None
    customer_phone: str | None = None
    address: str | None = None
    description: str | None = None
    city_id: str | None = None
    neighborhood_id: str | None = None
    reminder_enabled: bool | None = None
    created_via_calendar: bool | None = None


class ServiceOrderRead(CamelModel):
    id: str
    code: str
    type: str
    status: str
    team_id: str | None = None
    technician_id: str | None = None
    alert: str | None = None
    scheduled_date: str | None = None
    scheduled_time: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    address: str | None = None
    description: str | None = None
    city_id: str | None = None
    neighborhood_id: str | None = None
    reminder_enabled: bool
    created_via_calendar: bool
    created_at: datetime | None = None


class ReallocationRequest(CamelModel):
    service_order_ids: list[str]
    new_team_id: str = Field(min_length=1)
    clear_technician: bool = True


class AlertDismissal(CamelModel):
    reason: str
