"""Pydantic request/response schemas."""

from app.schemas.technician import TechnicianCreate, TechnicianRead, TechnicianUpdate
from app.schemas.team import TeamCreate, TeamRead, TeamUpdate, TechnicianSubstitution, TeamSummary
from app.schemas.service_order import (
    ServiceOrderCreate, ServiceOrderRead, ServiceOrderUpdate, ServiceOrderStatus,
    ReallocationRequest, AlertDismissal,
)
from app.schemas.report import (
    ReportCreate, ReportRead, ReportHistory, Shift,
    NewReportOrder, BoxAssignment, ReportGenerateRequest, ReportGenerateResponse,
)
from app.schemas.reference import (
    CityCreate, CityRead, CityUpdate,
    NeighborhoodCreate, NeighborhoodRead, NeighborhoodUpdate,
    NeighborhoodImport, NeighborhoodImportResult,
    ServiceTypeCreate, ServiceTypeRead, ServiceTypeUpdate,
)

__all__ = [
    "TechnicianCreate", "TechnicianRead", "TechnicianUpdate",
    "TeamCreate", "TeamRead", "TeamUpdate", "TechnicianSubstitution", "TeamSummary",
    "ServiceOrderCreate", "ServiceOrderRead", "ServiceOrderUpdate", "ServiceOrderStatus",
    "ReallocationRequest", "AlertDismissal",
    "ReportCreate", "ReportRead", "ReportHistory", "Shift",
    "NewReportOrder", "BoxAssignment", "ReportGenerateRequest", "ReportGenerateResponse",
    "CityCreate", "CityRead", "CityUpdate",
    "NeighborhoodCreate", "NeighborhoodRead", "NeighborhoodUpdate",
    "NeighborhoodImport", "NeighborhoodImportResult",
    "ServiceTypeCreate", "ServiceTypeRead", "ServiceTypeUpdate",
]
