"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from app.api.technicians import router as technicians_router
from app.api.teams import router as teams_router
from app.api.service_orders import router as service_orders_router
from app.api.reports import router as reports_router
from app.api.cities import router as cities_router
from app.api.neighborhoods import router as neighborhoods_router
from app.api.service_types import router as service_types_router
from app.api.export import router as export_router

api_router = APIRouter()
api_router.include_router(technicians_router)
api_router.include_router(teams_router)
api_router.include_router(service_orders_router)
api_router.include_router(reports_router)
api_router.include_router(cities_router)
api_router.include_router(neighborhoods_router)
api_router.include_router(service_types_router)
api_router.include_router(export_router)
