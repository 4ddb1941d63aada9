from fastapi import APIRouter

from ems.api.v1.endpoints import auth, departments, employees, health, reports, system_setup

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(system_setup.router)
api_router.include_router(employees.router)
api_router.include_router(departments.router)
api_router.include_router(reports.router)
