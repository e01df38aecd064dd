"""Team management API: CRUD, technician substitution and per-day summaries."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.db import crud
from app.dependencies import get_db, get_settings_dep
from app.schemas import TeamCreate, TeamRead, TeamSummary, TeamUpdate, TechnicianSubstitution
from app.services.agenda import team_summaries
from app.services.assignment import AssignmentError, check_team_members, substitute_technician

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/teams", tags=["teams"])


async def _technician_names(db: AsyncSession) -> dict[str, str]:
    return {t.id: t.name for t in await crud.list_technicians(db, active_only=False)}


@router.get("", response_model=list[TeamRead])
async def list_teams(db: AsyncSession = Depends(get_db)):
    return await crud.list_teams(db)


@router.get("/summary", response_model=list[TeamSummary])
async def summarize_teams(
    date: str | None = Query(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    db: AsyncSession = Depends(get_db),
):
    """Status counts per team, optionally for a single scheduled date."""
    teams = await crud.list_teams(db)
    orders = await crud.list_service_orders(db, scheduled_date=date)
    return team_summaries(teams, orders)


@router.post("/substitute", response_model=TeamRead)
async def substitute(body: TechnicianSubstitution, db: AsyncSession = Depends(get_db)):
    team = await crud.get_team(db, body.team_id)
    if not team:
        raise HTTPException(404, "Team not found")
    if not await crud.get_technician(db, body.new_technician_id):
        raise HTTPException(404, "Technician not found")

    teams = await crud.list_teams(db)
    try:
        members = substitute_technician(
            team, body.old_technician_id, body.new_technician_id, teams,
            names=await _technician_names(db),
        )
    except AssignmentError as e:
        raise HTTPException(400, str(e))

    team = await crud.update_team(db, team, technician_ids=members)
    logger.info(
        "Team %s: replaced technician %s with %s",
        team.id, body.old_technician_id, body.new_technician_id,
    )
    return team


@router.post("", response_model=TeamRead, status_code=201)
async def create_team(
    body: TeamCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    teams = await crud.list_teams(db)
    try:
        check_team_members(
            body.technician_ids, teams, settings.teams.max_technicians,
            names=await _technician_names(db),
        )
    except AssignmentError as e:
        raise HTTPException(400, str(e))

    team = await crud.create_team(
        db, name=body.name, technician_ids=body.technician_ids,
        box_number=body.box_number, notes=body.notes,
    )
    logger.info("Created team %s (%s)", team.id, team.name)
    return team


@router.get("/{team_id}", response_model=TeamRead)
async def get_team(team_id: str, db: AsyncSession = Depends(get_db)):
    team = await crud.get_team(db, team_id)
    if not team:
        raise HTTPException(404, "Team not found")
    return team


@router.put("/{team_id}", response_model=TeamRead)
async def update_team(
    team_id: str,
    body: TeamUpdate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    team = await crud.get_team(db, team_id)
    if not team:
        raise HTTPException(404, "Team not found")

    updates = body.model_dump(exclude_unset=True)
    # notes is the only nullable column
    updates = {k: v for k, v in updates.items() if v is not None or k == "notes"}

    members = updates.get("technician_ids", team.technician_ids or [])
    active = updates.get("is_active", team.is_active)
    if "technician_ids" in updates or (active and not team.is_active):
        others = await crud.list_teams(db) if active else []
        try:
            check_team_members(
                members, others, settings.teams.max_technicians,
                names=await _technician_names(db), exclude_team_id=team.id,
            )
        except AssignmentError as e:
            raise HTTPException(400, str(e))

    return await crud.update_team(db, team, **updates)


@router.delete("/{team_id}", status_code=204)
async def delete_team(team_id: str, db: AsyncSession = Depends(get_db)):
    team = await crud.get_team(db, team_id)
    if not team:
        raise HTTPException(404, "Team not found")
    await crud.update_team(db, team, is_active=False)
    logger.info("Deactivated team %s", team_id)
    return Response(status_code=204)
