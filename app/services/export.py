"""Data export: teams, service orders and reports as one JSON document."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.schemas import ReportRead, ServiceOrderRead, TeamRead

EXPORT_FILENAME = "dashboard-export.json"


async def export_data(db: AsyncSession) -> dict:
    """Collect the exportable data in the same camelCase shape the API serves."""
    teams = await crud.list_teams(db)
    orders = await crud.list_service_orders(db)
    reports = await crud.list_reports(db)
    return {
        "teams": [TeamRead.model_validate(t).model_dump(mode="json", by_alias=True) for t in teams],
        "serviceOrders": [
            ServiceOrderRead.model_validate(o).model_dump(mode="json", by_alias=True) for o in orders
        ],
        "reports": [ReportRead.model_validate(r).model_dump(mode="json", by_alias=True) for r in reports],
    }
