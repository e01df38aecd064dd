from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.dependencies import get_db
from app.schemas import ServiceTypeCreate, ServiceTypeRead, ServiceTypeUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/service-types", tags=["service-types"])


@router.get("", response_model=list[ServiceTypeRead])
async def list_service_types(db: AsyncSession = Depends(get_db)):
    return await crud.list_service_types(db)


@router.post("", response_model=ServiceTypeRead, status_code=201)
async def create_service_type(body: ServiceTypeCreate, db: AsyncSession = Depends(get_db)):
    try:
        st = await crud.create_service_type(db, body.name)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(400, "Invalid service type data")
    logger.info("Created service type %s", st.name)
    return st


@router.get("/{service_type_id}", response_model=ServiceTypeRead)
async def get_service_type(service_type_id: str, db: AsyncSession = Depends(get_db)):
    st = await crud.get_service_type(db, service_type_id)
    if not st:
        raise HTTPException(404, "Service type not found")
    return st


@router.put("/{service_type_id}", response_model=ServiceTypeRead)
async def update_service_type(
    service_type_id: str, body: ServiceTypeUpdate, db: AsyncSession = Depends(get_db),
):
    st = await crud.get_service_type(db, service_type_id)
    if not st:
        raise HTTPException(404, "Service type not found")
    updates = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    try:
        return await crud.update_service_type(db, st, **updates)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(400, "Invalid service type data")


@router.delete("/{service_type_id}", status_code=204)
async def delete_service_type(service_type_id: str, db: AsyncSession = Depends(get_db)):
    st = await crud.get_service_type(db, service_type_id)
    if not st:
        raise HTTPException(404, "Service type not found")
    await crud.update_service_type(db, st, is_active=False)
    logger.info("Deactivated service type %s", service_type_id)
    return Response(status_code=204)
