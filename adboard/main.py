"""
Application entry point.

The lifespan makes sure the schema exists before the first request is
served; if the database is unreachable or rejects the DDL the error
propagates and the server does not start.  Run with::

    python -m adboard
    uvicorn adboard.main:app
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from adboard import database
from adboard.config import settings
from adboard.errors import install_exception_handlers
from adboard.logging_config import setup_logging
from adboard.middleware import TimingMiddleware
from adboard.routers import advertisements
from adboard.schema import ensure_schema

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await ensure_schema(database.engine)
    yield
    # Shutdown
    await database.engine.dispose()


app = FastAPI(
    title="Advertisement Board API",
    description="Create classified advertisements and browse them by page",
    version="1.0.0",
    lifespan=lifespan,
    # Only the three POST endpoints are served; every other path is a 404.
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# Middleware
app.add_middleware(TimingMiddleware)

# Error envelopes
install_exception_handlers(app)

# Routers
app.include_router(advertisements.router)
