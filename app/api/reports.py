"""Shift report API: stored reports, history and text generation."""

from __future__ import annotations

import logging
from datetime import date as date_cls

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.db import crud
from app.dependencies import get_db, get_settings_dep
from app.schemas import (
    ReportCreate, ReportGenerateRequest, ReportGenerateResponse, ReportHistory, ReportRead,
)
from app.services.agenda import split_report_history
from app.services.assignment import AssignmentError
from app.services.report_generator import generate_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("", response_model=list[ReportRead])
async def list_reports(db: AsyncSession = Depends(get_db)):
    return await crud.list_reports(db)


@router.get("/history", response_model=ReportHistory)
async def report_history(today: date_cls | None = None, db: AsyncSession = Depends(get_db)):
    past, upcoming = split_report_history(await crud.list_reports(db), today or date_cls.today())
    return {"past": past, "upcoming": upcoming}


@router.post("/generate", response_model=ReportGenerateResponse)
async def generate(
    body: ReportGenerateRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    try:
        result = await generate_report(db, body, settings)
    except AssignmentError as e:
        raise HTTPException(400, str(e))
    return ReportGenerateResponse.model_validate(result)


@router.post("", response_model=ReportRead, status_code=201)
async def create_report(body: ReportCreate, db: AsyncSession = Depends(get_db)):
    report = await crud.create_report(
        db, name=body.name, date=body.date, shift=body.shift, content=body.content,
    )
    logger.info("Saved report %s (%s %s)", report.id, report.date, report.shift)
    return report


@router.get("/{report_id}", response_model=ReportRead)
async def get_report(report_id: str, db: AsyncSession = Depends(get_db)):
    report = await crud.get_report(db, report_id)
    if not report:
        raise HTTPException(404, "Report not found")
    return report


@router.delete("/{report_id}", status_code=204)
async def delete_report(report_id: str, db: AsyncSession = Depends(get_db)):
    report = await crud.get_report(db, report_id)
    if not report:
        raise HTTPException(404, "Report not found")
    await crud.delete_report(db, report)
    logger.info("Deleted report %s", report_id)
    return Response(status_code=204)
