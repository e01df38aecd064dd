"""Technician management API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.dependencies import get_db
from app.schemas import TechnicianCreate, TechnicianRead, TechnicianUpdate
from app.services.assignment import available_technicians

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/technicians", tags=["technicians"])


@router.get("", response_model=list[TechnicianRead])
async def list_technicians(db: AsyncSession = Depends(get_db)):
    return await crud.list_technicians(db, active_only=True)


@router.get("/available", response_model=list[TechnicianRead])
async def list_available_technicians(db: AsyncSession = Depends(get_db)):
    """Active technicians not assigned to any active team."""
    techs = await crud.list_technicians(db, active_only=True)
    teams = await crud.list_teams(db, active_only=True)
    return available_technicians(techs, teams)


@router.post("", response_model=TechnicianRead, status_code=201)
async def create_technician(body: TechnicianCreate, db: AsyncSession = Depends(get_db)):
    tech = await crud.create_technician(
        db, name=body.name, cities=body.cities, neighborhoods=body.neighborhoods,
    )
    logger.info("Created technician %s (%s)", tech.id, tech.name)
    return tech


@router.get("/{tech_id}", response_model=TechnicianRead)
async def get_technician(tech_id: str, db: AsyncSession = Depends(get_db)):
    tech = await crud.get_technician(db, tech_id)
    if not tech:
        raise HTTPException(404, "Technician not found")
    return tech


@router.put("/{tech_id}", response_model=TechnicianRead)
async def update_technician(tech_id: str, body: TechnicianUpdate, db: AsyncSession = Depends(get_db)):
    tech = await crud.get_technician(db, tech_id)
    if not tech:
        raise HTTPException(404, "Technician not found")

    updates = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    return await crud.update_technician(db, tech, **updates)


@router.delete("/{tech_id}", status_code=204)
async def delete_technician(tech_id: str, db: AsyncSession = Depends(get_db)):
    tech = await crud.get_technician(db, tech_id)
    if not tech:
        raise HTTPException(404, "Technician not found")
    await crud.update_technician(db, tech, is_active=False)
    logger.info("Deactivated technician %s", tech_id)
    return Response(status_code=204)
