"""TodoList API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TodoListError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module's imports small
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todolist.infrastructure.database import init_db
from todolist.infrastructure.observability import setup_logging
from todolist.config import get_settings
from todolist.api.error_handlers import register_error_handlers
from todolist.api.routes import (
    access, comments, health, tags, task_lists, tasks, users,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("TodoList API started")
    yield
    logger.info("TodoList API shutting down")


app = FastAPI(
    title="TodoList API", version="1.0.0", lifespan=lifespan,
)

# CORS from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes, registered explicitly
app.include_router(health.router)
app.include_router(users.router)
app.include_router(task_lists.router)
app.include_router(tasks.router)
app.include_router(tags.router)
app.include_router(comments.router)
app.include_router(access.router)

register_error_handlers(app)
