from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db
from app.services.export import EXPORT_FILENAME, export_data

router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("")
async def export(db: AsyncSession = Depends(get_db)):
    """Download teams, service orders and reports as a JSON attachment."""
    data = await export_data(db)
    return JSONResponse(
        content=data,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
