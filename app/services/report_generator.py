"""Generate the plain-text shift report using Jinja2."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date as date_cls
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.db import crud
from app.models import Report, ServiceOrder, Team
from app.schemas.report import BoxAssignment, ReportGenerateRequest
from app.services.assignment import check_box_assignments

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


@dataclass
class GeneratedReport:
    name: str
    date: str
    shift: str
    content: str
    created_orders: list[ServiceOrder] = field(default_factory=list)
    skipped_orders: list[str] = field(default_factory=list)
    report: Report | None = None


def format_report_date(iso_date: str) -> str:
    """'2025-09-05' -> '05/09/2025'."""
    return date_cls.fromisoformat(iso_date).strftime("%d/%m/%Y")


def build_team_blocks(
    teams: list[Team],
    orders: list[ServiceOrder],
    on_date: str,
    assignments: list[BoxAssignment] | None = None,
    technician_names: dict[str, str] | None = None,
) -> list[dict]:
    """One block per team with orders on the given day, in team order."""
    overrides = {a.team_id: a for a in assignments or []}
    technician_names = technician_names or {}

    blocks = []
    for team in teams:
        team_orders = [o for o in orders if o.team_id == team.id and o.scheduled_date == on_date]
        if not team_orders:
            continue
        override = overrides.get(team.id)
        technicians = []
        if override and override.technician_ids:
            technicians = [technician_names.get(t, t) for t in override.technician_ids]
        blocks.append({
            "name": team.name,
            "box_number": (override.box_number if override and override.box_number else team.box_number),
            "technicians": technicians,
            "orders": [{"code": o.code, "type": o.type} for o in team_orders],
        })
    return blocks


def render_report_content(iso_date: str, shift: str, blocks: list[dict], separator_width: int = 57) -> str:
    template = _env.get_template("report.txt.j2")
    return template.render(
        date=format_report_date(iso_date),
        shift=shift.upper(),
        separator="-" * separator_width,
        blocks=blocks,
    )


async def generate_report(db: AsyncSession, req: ReportGenerateRequest, settings: Settings) -> GeneratedReport:
    """Create the typed-in orders, then assemble (and optionally save) the report text."""
    technicians = await crud.list_technicians(db, active_only=False)
    technician_names = {t.id: t.name for t in technicians}
    team_names = {t.id: t.name for t in await crud.list_teams(db)}

    # validated up front so a conflict never leaves half-created orders behind
    check_box_assignments(req.assignments, team_names, technician_names)

    result = GeneratedReport(name=req.name, date=req.date, shift=req.shift, content="")
    for row in req.new_service_orders:
        if not (row.code and row.type and row.team_id):
            if row.code:
                logger.info("Skipping incomplete report order %s", row.code)
                result.skipped_orders.append(row.code)
            continue
        if await crud.get_service_order_by_code(db, row.code):
            logger.warning("Service order %s already exists, not recreating it for the report", row.code)
            result.skipped_orders.append(row.code)
            continue
        try:
            order = await crud.create_service_order(
                db,
                code=row.code,
                type=row.type,
                team_id=row.team_id,
                alert=row.alert or None,
                scheduled_date=req.date,
                status="Pendente",
            )
        except IntegrityError:
            await db.rollback()
            logger.warning("Could not create service order %s while generating report", row.code)
            result.skipped_orders.append(row.code)
            for created in result.created_orders:
                await db.refresh(created)
            continue
        result.created_orders.append(order)

    teams = await crud.list_teams(db)
    orders = await crud.list_service_orders(db, scheduled_date=req.date)
    blocks = build_team_blocks(teams, orders, req.date, req.assignments, technician_names)
    result.content = render_report_content(
        req.date, req.shift, blocks, separator_width=settings.report.separator_width,
    )

    if req.save:
        result.report = await crud.create_report(
            db, name=req.name, date=req.date, shift=req.shift, content=result.content,
        )
        logger.info("Saved report %s (%s %s)", result.report.id, req.date, req.shift)

    return result
