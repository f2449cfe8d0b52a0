"""DHI Workshop API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map WorkshopError → {error, message, code}
    - Static files mounted after the API routes so /api/* takes precedence
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - Startup log reports the ICU/CLDR data source and runtime versions, the
      facts the workshop compares between standard and hardened images
"""

import logging
import os
import platform
from contextlib import asynccontextmanager

import babel
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from dhi_workshop import __version__
from dhi_workshop.api.error_handlers import register_error_handlers
from dhi_workshop.api.routes import health, time_format
from dhi_workshop.config import get_settings
from dhi_workshop.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Server running on port {settings.port}")
    logger.info(f"ICU data path: {settings.icu_data_path or 'built-in'}")
    logger.info(
        f"Python version: {platform.python_version()} "
        f"(Babel {babel.__version__})",
    )
    yield
    logger.info("DHI Workshop API shutting down")


app = FastAPI(
    title="DHI Workshop API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(time_format.router)

register_error_handlers(app)

# html=True serves index.html for the demo page at /
if os.path.isdir(settings.static_dir):
    app.mount(
        "/", StaticFiles(directory=settings.static_dir, html=True),
        name="static",
    )


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "dhi_workshop.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
