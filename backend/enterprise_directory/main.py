from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from enterprise_directory.api.v1.router import api_router
from enterprise_directory.core.config import settings
from enterprise_directory.core.database import database
from enterprise_directory.services.employee_service import employee_service
from enterprise_directory.services.identity_store import identity_store
from enterprise_directory.services.user_service import user_service

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def _shutdown() -> None:
    await user_service.close()
    await employee_service.close()
    await identity_store.close()
    await database.close()


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    # Seeding must finish before requests are served; any failure aborts startup.
    try:
        await database.initialize(settings)
        await identity_store.initialize(database)
        await employee_service.initialize(database)
        await user_service.initialize(identity_store, settings.DEFAULT_USERS)

        await user_service.ensure_roles()
        await user_service.create_example_users()
        await employee_service.seed_example_employees()
    except Exception:
        logger.exception("Startup seeding failed; aborting")
        await _shutdown()
        raise
    logger.info("Enterprise Directory started (version=%s)", settings.APP_VERSION)

    yield

    await _shutdown()


app = FastAPI(
    title="Enterprise Directory API",
    description="Employee directory administration with role-gated changes",
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
    return {"message": "Enterprise Directory API"}
