from __future__ import annotations
from datetime import datetime
from typing import Literal
from pydantic import Field
from app.schemas.base import CamelModel, NonBlank
from app.schemas.service_order import ServiceOrderRead

Shift = Literal["Manhã", "Tarde"]


class ReportCreate(CamelModel):
    name: NonBlank
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    shift: Shift
    content: str


class ReportRead(CamelModel):
    id: str
    name: str
    date: str
    shift: str
    content: str
    created_at: datetime | None = None


class ReportHistory(CamelModel):
    past: list[ReportRead]
    upcoming: list[ReportRead]


class NewReportOrder(CamelModel):
    """A service order row typed in while building a report."""
    code: str = ""
    type: str = ""
    team_id: str = ""
    alert: str = ""


class BoxAssignment(CamelModel):
    """Per-report override of a team's box label and technicians."""
    team_id: str
    box_number: str | None = None
    technician_ids: list[str] | None = None


class ReportGenerateRequest(CamelModel):
    name: NonBlank
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    shift: Shift
    new_service_orders: list[NewReportOrder] = []
    assignments: list[BoxAssignment] = []
    save: bool = False


class ReportGenerateResponse(CamelModel):
    name: str
    date: str
    shift: str
    content: str
    created_orders: list[ServiceOrderRead]
    skipped_orders: list[str]
    report: ReportRead | None = None
