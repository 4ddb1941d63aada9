from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ems.api.v1.router import api_router
from ems.core.config import settings
from ems.core.database import database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        database.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize Database, continuing without DB")
    if not settings.JWT_SECRET:
        logger.warning("JWT_SECRET is not set, logins will fail until it is configured")
    yield
    database.close()


app = FastAPI(
    title="Employee Management API",
    description="Employees, departments, org chart and role-based access",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Employee Management API"}
