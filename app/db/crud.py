"""CRUD operations for the dashboard models."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import (
    Technician, Team, ServiceOrder, Report,
    City, Neighborhood, ServiceType,
)


async def _apply_updates(db: AsyncSession, obj, **kwargs):
    for k, v in kwargs.items():
        setattr(obj, k, v)
    await db.commit()
    await db.refresh(obj)
    return obj


# ── Technician ────────────────────────────────────────────

async def create_technician(
    db: AsyncSession, name: str,
    cities: list[str] | None = None, neighborhoods: list[str] | None = None,
) -> Technician:
    tech = Technician(name=name, cities=cities or [], neighborhoods=neighborhoods or [])
    db.add(tech)
    await db.commit()
    await db.refresh(tech)
    return tech


async def get_technician(db: AsyncSession, tech_id: str) -> Technician | None:
    return await db.get(Technician, tech_id)


async def list_technicians(db: AsyncSession, active_only: bool = True) -> list[Technician]:
    stmt = select(Technician).order_by(Technician.created_at)
    if active_only:
        stmt = stmt.where(Technician.is_active == True)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_technician(db: AsyncSession, tech: Technician, **kwargs) -> Technician:
    return await _apply_updates(db, tech, **kwargs)


# ── Team ──────────────────────────────────────────────────

async def create_team(
    db: AsyncSession, name: str, technician_ids: list[str], box_number: str,
    notes: str | None = None,
) -> Team:
    team = Team(name=name, technician_ids=list(technician_ids), box_number=box_number, notes=notes)
    db.add(team)
    await db.commit()
    await db.refresh(team)
    return team


async def get_team(db: AsyncSession, team_id: str) -> Team | None:
    return await db.get(Team, team_id)


async def list_teams(db: AsyncSession, active_only: bool = False) -> list[Team]:
    stmt = select(Team).order_by(Team.created_at)
    if active_only:
        stmt = stmt.where(Team.is_active == True)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_team(db: AsyncSession, team: Team, **kwargs) -> Team:
    if "technician_ids" in kwargs:
        # JSON columns only detect reassignment, never in-place mutation
        kwargs["technician_ids"] = list(kwargs["technician_ids"])
    return await _apply_updates(db, team, **kwargs)


# ── ServiceOrder ──────────────────────────────────────────

async def create_service_order(db: AsyncSession, code: str, type: str, **fields) -> ServiceOrder:
    order = ServiceOrder(code=code, type=type, **fields)
    db.add(order)
    await db.commit()
    await db.refresh(order)
    return order


async def get_service_order(db: AsyncSession, order_id: str) -> ServiceOrder | None:
    return await db.get(ServiceOrder, order_id)


async def get_service_order_by_code(db: AsyncSession, code: str) -> ServiceOrder | None:
    result = await db.execute(select(ServiceOrder).where(ServiceOrder.code == code))
    return result.scalars().first()


async def list_service_orders(
    db: AsyncSession,
    team_id: str | None = None,
    scheduled_date: str | None = None,
    status: str | None = None,
) -> list[ServiceOrder]:
    stmt = select(ServiceOrder).order_by(ServiceOrder.created_at)
    if team_id is not None:
        stmt = stmt.where(ServiceOrder.team_id == team_id)
    if scheduled_date is not None:
        stmt = stmt.where(ServiceOrder.scheduled_date == scheduled_date)
    if status is not None:
        stmt = stmt.where(ServiceOrder.status == status)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_service_orders_between(db: AsyncSession, start: str, end: str) -> list[ServiceOrder]:
    """Orders scheduled within [start, end] (ISO date strings compare lexically)."""
    result = await db.execute(
        select(ServiceOrder)
        .where(ServiceOrder.scheduled_date >= start, ServiceOrder.scheduled_date <= end)
        .order_by(ServiceOrder.scheduled_date, ServiceOrder.scheduled_time)
    )
    return list(result.scalars().all())


async def update_service_order(db: AsyncSession, order: ServiceOrder, **kwargs) -> ServiceOrder:
    return await _apply_updates(db, order, **kwargs)


async def delete_service_order(db: AsyncSession, order: ServiceOrder) -> None:
    await db.delete(order)
    await db.commit()


# ── Report ────────────────────────────────────────────────

async def create_report(db: AsyncSession, name: str, date: str, shift: str, content: str) -> Report:
    report = Report(name=name, date=date, shift=shift, content=content)
    db.add(report)
    await db.commit()
    await db.refresh(report)
    return report


async def get_report(db: AsyncSession, report_id: str) -> Report | None:
    return await db.get(Report, report_id)


async def list_reports(db: AsyncSession) -> list[Report]:
    result = await db.execute(select(Report).order_by(Report.created_at.desc()))
    return list(result.scalars().all())


async def delete_report(db: AsyncSession, report: Report) -> None:
    await db.delete(report)
    await db.commit()


# ── City ──────────────────────────────────────────────────

async def create_city(db: AsyncSession, name: str) -> City:
    city = City(name=name)
    db.add(city)
    await db.commit()
    await db.refresh(city)
    return city


async def get_city(db: AsyncSession, city_id: str) -> City | None:
    return await db.get(City, city_id)


async def list_cities(db: AsyncSession, active_only: bool = True) -> list[City]:
    stmt = select(City).order_by(City.name)
    if active_only:
        stmt = stmt.where(City.is_active == True)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_city(db: AsyncSession, city: City, **kwargs) -> City:
    return await _apply_updates(db, city, **kwargs)


# ── Neighborhood ──────────────────────────────────────────

async def create_neighborhood(db: AsyncSession, name: str, city_id: str) -> Neighborhood:
    nb = Neighborhood(name=name, city_id=city_id)
    db.add(nb)
    await db.commit()
    await db.refresh(nb)
    return nb


async def create_neighborhoods(db: AsyncSession, names: list[str], city_id: str) -> list[Neighborhood]:
    """Insert several neighborhoods for one city in a single commit."""
    rows = [Neighborhood(name=name, city_id=city_id) for name in names]
    db.add_all(rows)
    await db.commit()
    for nb in rows:
        await db.refresh(nb)
    return rows


async def get_neighborhood(db: AsyncSession, neighborhood_id: str) -> Neighborhood | None:
    return await db.get(Neighborhood, neighborhood_id)


async def list_neighborhoods(
    db: AsyncSession, city_id: str | None = None, active_only: bool = True,
) -> list[Neighborhood]:
    stmt = select(Neighborhood).order_by(Neighborhood.name)
    if city_id is not None:
        stmt = stmt.where(Neighborhood.city_id == city_id)
    if active_only:
        stmt = stmt.where(Neighborhood.is_active == True)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_neighborhood(db: AsyncSession, nb: Neighborhood, **kwargs) -> Neighborhood:
    return await _apply_updates(db, nb, **kwargs)


# ── ServiceType ───────────────────────────────────────────

async def create_service_type(db: AsyncSession, name: str) -> ServiceType:
    st = ServiceType(name=name)
    db.add(st)
    await db.commit()
    await db.refresh(st)
    return st


async def get_service_type(db: AsyncSession, service_type_id: str) -> ServiceType | None:
    return await db.get(ServiceType, service_type_id)


async def list_service_types(db: AsyncSession, active_only: bool = True) -> list[ServiceType]:
    stmt = select(ServiceType).order_by(ServiceType.created_at)
    if active_only:
        stmt = stmt.where(ServiceType.is_active == True)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_service_type(db: AsyncSession, st: ServiceType, **kwargs) -> ServiceType:
    return await _apply_updates(db, st, **kwargs)
