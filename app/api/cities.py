from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.dependencies import get_db
from app.schemas import CityCreate, CityRead, CityUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cities", tags=["cities"])


@router.get("", response_model=list[CityRead])
async def list_cities(db: AsyncSession = Depends(get_db)):
    return await crud.list_cities(db)


@router.post("", response_model=CityRead, status_code=201)
async def create_city(body: CityCreate, db: AsyncSession = Depends(get_db)):
    try:
        city = await crud.create_city(db, body.name)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(400, "Invalid city data")
    logger.info("Created city %s", city.name)
    return city


@router.get("/{city_id}", response_model=CityRead)
async def get_city(city_id: str, db: AsyncSession = Depends(get_db)):
    city = await crud.get_city(db, city_id)
    if not city:
        raise HTTPException(404, "City not found")
    return city


@router.put("/{city_id}", response_model=CityRead)
async def update_city(city_id: str, body: CityUpdate, db: AsyncSession = Depends(get_db)):
    city = await crud.get_city(db, city_id)
    if not city:
        raise HTTPException(404, "City not found")
    updates = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    try:
        return await crud.update_city(db, city, **updates)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(400, "Invalid city data")


@router.delete("/{city_id}", status_code=204)
async def delete_city(city_id: str, db: AsyncSession = Depends(get_db)):
    city = await crud.get_city(db, city_id)
    if not city:
        raise HTTPException(404, "City not found")
    await crud.update_city(db, city, is_active=False)
    logger.info("Deactivated city %s", city_id)
    return Response(status_code=204)
