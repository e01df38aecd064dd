"""Neighborhood API, including comma-separated bulk import per city."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.dependencies import get_db
from app.schemas import (
    NeighborhoodCreate, NeighborhoodImport, NeighborhoodImportResult,
    NeighborhoodRead, NeighborhoodUpdate,
)
from app.services.agenda import parse_name_list, partition_new_names

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/neighborhoods", tags=["neighborhoods"])


@router.get("", response_model=list[NeighborhoodRead])
async def list_neighborhoods(db: AsyncSession = Depends(get_db)):
    return await crud.list_neighborhoods(db)


@router.get("/city/{city_id}", response_model=list[NeighborhoodRead])
async def list_by_city(city_id: str, db: AsyncSession = Depends(get_db)):
    return await crud.list_neighborhoods(db, city_id=city_id)


@router.post("/import", response_model=NeighborhoodImportResult, status_code=201)
async def import_neighborhoods(body: NeighborhoodImport, db: AsyncSession = Depends(get_db)):
    if not await crud.get_city(db, body.city_id):
        raise HTTPException(404, "City not found")

    names = parse_name_list(body.names)
    existing = [nb.name for nb in await crud.list_neighborhoods(db, city_id=body.city_id)]
    new, skipped = partition_new_names(names, existing)
    if not new:
        raise HTTPException(400, "No new neighborhood names to import")

    created = await crud.create_neighborhoods(db, new, body.city_id)
    logger.info("Imported %d neighborhoods into city %s (%d skipped)", len(created), body.city_id, len(skipped))
    return {"created": created, "skipped": skipped}


@router.post("", response_model=NeighborhoodRead, status_code=201)
async def create_neighborhood(body: NeighborhoodCreate, db: AsyncSession = Depends(get_db)):
    if not await crud.get_city(db, body.city_id):
        raise HTTPException(400, "Invalid neighborhood data")
    return await crud.create_neighborhood(db, body.name, body.city_id)


@router.get("/{neighborhood_id}", response_model=NeighborhoodRead)
async def get_neighborhood(neighborhood_id: str, db: AsyncSession = Depends(get_db)):
    nb = await crud.get_neighborhood(db, neighborhood_id)
    if not nb:
        raise HTTPException(404, "Neighborhood not found")
    return nb


@router.put("/{neighborhood_id}", response_model=NeighborhoodRead)
async def update_neighborhood(
    neighborhood_id: str, body: NeighborhoodUpdate, db: AsyncSession = Depends(get_db),
):
    nb = await crud.get_neighborhood(db, neighborhood_id)
    if not nb:
        raise HTTPException(404, "Neighborhood not found")
    updates = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    if "city_id" in updates and not await crud.get_city(db, updates["city_id"]):
        raise HTTPException(400, "Invalid neighborhood data")
    return await crud.update_neighborhood(db, nb, **updates)


@router.delete("/{neighborhood_id}", status_code=204)
async def delete_neighborhood(neighborhood_id: str, db: AsyncSession = Depends(get_db)):
    nb = await crud.get_neighborhood(db, neighborhood_id)
    if not nb:
        raise HTTPException(404, "Neighborhood not found")
    await crud.update_neighborhood(db, nb, is_active=False)
    logger.info("Deactivated neighborhood %s", neighborhood_id)
    return Response(status_code=204)
