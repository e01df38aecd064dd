"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.technician import Technician
from app.models.team import Team
from app.models.reference import City, Neighborhood, ServiceType
from app.models.service_order import ServiceOrder
from app.models.report import Report

__all__ = [
    "Base", "Technician", "Team",
    "City", "Neighborhood", "ServiceType",
    "ServiceOrder", "Report",
]
