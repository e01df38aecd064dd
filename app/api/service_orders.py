"""Service order (OS) API: CRUD, lookups, reallocation and agenda views."""

from __future__ import annotations

import logging
from datetime import date as date_cls

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.db import crud
from app.dependencies import get_db, get_settings_dep
from app.schemas import (
    AlertDismissal, ReallocationRequest, ServiceOrderCreate, ServiceOrderRead,
    ServiceOrderStatus, ServiceOrderUpdate, Shift,
)
from app.services import agenda

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/service-orders", tags=["service-orders"])

_DATE = r"^\d{4}-\d{2}-\d{2}$"

# columns an update may clear with an explicit null
_NULLABLE = {
    "team_id", "technician_id", "alert", "scheduled_date", "scheduled_time",
    "customer_name", "customer_phone", "address", "description",
    "city_id", "neighborhood_id",
}


@router.get("", response_model=list[ServiceOrderRead])
async def list_service_orders(
    date: str | None = Query(default=None, pattern=_DATE),
    shift: Shift | None = None,
    status: ServiceOrderStatus | None = None,
    team_id: str | None = Query(default=None, alias="teamId"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    orders = await crud.list_service_orders(db, team_id=team_id, scheduled_date=date, status=status)
    if shift:
        orders = [o for o in orders if agenda.in_shift(o, shift, settings.report.morning_end)]
    return orders


@router.get("/search/{code}", response_model=ServiceOrderRead)
async def search_by_code(code: str, db: AsyncSession = Depends(get_db)):
    order = await crud.get_service_order_by_code(db, code)
    if not order:
        raise HTTPException(404, "Service order not found")
    return order


@router.get("/team/{team_id}", response_model=list[ServiceOrderRead])
async def list_by_team(team_id: str, db: AsyncSession = Depends(get_db)):
    return await crud.list_service_orders(db, team_id=team_id)


@router.get("/alerts", response_model=list[ServiceOrderRead])
async def list_alerts(
    date: str | None = Query(default=None, pattern=_DATE),
    db: AsyncSession = Depends(get_db),
):
    orders = await crud.list_service_orders(db, scheduled_date=date, status="Pendente")
    return agenda.alert_orders(orders, on_date=date)


@router.get("/reminders", response_model=list[ServiceOrderRead])
async def list_reminders(
    today: date_cls | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Tomorrow's calendar-created visits that should trigger a reminder."""
    orders = await crud.list_service_orders(db, status="Pendente")
    return agenda.reminder_orders(orders, today or date_cls.today())


@router.get("/suggest", response_model=list[ServiceOrderRead])
async def suggest(q: str = "", db: AsyncSession = Depends(get_db)):
    if len(q.strip()) < 2:
        return []
    return agenda.suggest_by_code(await crud.list_service_orders(db), q)


@router.get("/calendar", response_model=dict[str, list[ServiceOrderRead]])
async def calendar(
    month: str = Query(pattern=r"^\d{4}-\d{2}$"),
    db: AsyncSession = Depends(get_db),
):
    try:
        start, end = agenda.month_bounds(month)
    except ValueError:
        raise HTTPException(400, "Invalid month")
    return agenda.group_by_day(await crud.list_service_orders_between(db, start, end))


@router.post("/reallocate", response_model=list[ServiceOrderRead])
async def reallocate(body: ReallocationRequest, db: AsyncSession = Depends(get_db)):
    """Move a batch of orders to another team."""
    if not await crud.get_team(db, body.new_team_id):
        raise HTTPException(400, "Target team not found")

    updated = []
    for order_id in body.service_order_ids:
        order = await crud.get_service_order(db, order_id)
        if not order:
            logger.warning("Reallocation skipped unknown service order %s", order_id)
            continue
        changes = {"team_id": body.new_team_id}
        if body.clear_technician:
            changes["technician_id"] = None
        updated.append(await crud.update_service_order(db, order, **changes))

    logger.info("Reallocated %d service orders to team %s", len(updated), body.new_team_id)
    return updated


@router.post("", response_model=ServiceOrderRead, status_code=201)
async def create_service_order(body: ServiceOrderCreate, db: AsyncSession = Depends(get_db)):
    fields = body.model_dump(exclude={"code", "type"})
    try:
        order = await crud.create_service_order(db, code=body.code, type=body.type, **fields)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(400, "Invalid service order data")
    logger.info("Created service order %s (%s)", order.code, order.id)
    return order


@router.post("/{order_id}/dismiss-alert", response_model=ServiceOrderRead)
async def dismiss_alert(order_id: str, body: AlertDismissal, db: AsyncSession = Depends(get_db)):
    reason = body.reason.strip()
    if not reason:
        raise HTTPException(400, "A reason is required to dismiss an alert")
    order = await crud.get_service_order(db, order_id)
    if not order:
        raise HTTPException(404, "Service order not found")
    return await crud.update_service_order(
        db, order, alert="", description=f"Alerta excluído: {reason}",
    )


@router.get("/{order_id}", response_model=ServiceOrderRead)
async def get_service_order(order_id: str, db: AsyncSession = Depends(get_db)):
    order = await crud.get_service_order(db, order_id)
    if not order:
        raise HTTPException(404, "Service order not found")
    return order


@router.put("/{order_id}", response_model=ServiceOrderRead)
@router.patch("/{order_id}", response_model=ServiceOrderRead)
async def update_service_order(order_id: str, body: ServiceOrderUpdate, db: AsyncSession = Depends(get_db)):
    order = await crud.get_service_order(db, order_id)
    if not order:
        raise HTTPException(404, "Service order not found")

    updates = {
        k: v for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k in _NULLABLE
    }
    try:
        return await crud.update_service_order(db, order, **updates)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(400, "Invalid service order data")


@router.delete("/{order_id}", status_code=204)
async def delete_service_order(order_id: str, db: AsyncSession = Depends(get_db)):
    order = await crud.get_service_order(db, order_id)
    if not order:
        raise HTTPException(404, "Service order not found")
    await crud.delete_service_order(db, order)
    logger.info("Deleted service order %s", order_id)
    return Response(status_code=204)
