"""Coupler API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CouplerError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Exactly one store backs every service: PostgreSQL or in-memory, per STORAGE_BACKEND

Design Decisions:
    - create_app() factory so tests build isolated apps over their own store
    - Lifespan over @app.on_event: logging setup on startup, engine disposal on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coupler.api.error_handlers import register_error_handlers
from coupler.api.routes import (
    auth, companies, health, projects, representatives, signup, students,
)
from coupler.config import Settings, get_settings
from coupler.infrastructure.database import init_db
from coupler.infrastructure.memory_store import MemoryStore, memory_unit_of_work_factory
from coupler.infrastructure.observability import RequestLoggingMiddleware, setup_logging
from coupler.infrastructure.sql_store import sql_unit_of_work_factory
from coupler.services.container import build_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Coupler API started ({settings.storage_backend} storage)")
    yield
    logger.info("Coupler API shutting down")
    if app.state.db_manager is not None:
        await app.state.db_manager.dispose()


def _wire_storage(app: FastAPI, settings: Settings) -> None:
    match settings.storage_backend:
        case "memory":
            app.state.db_manager = None
            uow_factory = memory_unit_of_work_factory(MemoryStore())
        case "postgres":
            manager = init_db(
                settings.database_url,
                pool_size=settings.database_pool_size,
                max_overflow=settings.database_max_overflow,
            )
            app.state.db_manager = manager
            uow_factory = sql_unit_of_work_factory(manager)
    app.state.services = build_services(uow_factory, settings)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Coupler API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    _wire_storage(app, settings)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(signup.router)
    app.include_router(students.router)
    app.include_router(companies.router)
    app.include_router(representatives.router)
    app.include_router(projects.router)

    register_error_handlers(app)
    return app


app = create_app()
