"""
Tolerance Calculator - service entry point.

General tolerance and ISO fit lookups over HTTP.
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from prometheus_client import make_asgi_app

from tolcalc import __version__
from tolcalc.api import api_router
from tolcalc.core.config import get_settings
from tolcalc.core.knowledge.tolerance import (
    FIT_RANGES,
    GENERAL_TOLERANCE_TABLE,
    HOLE_FIT_DATA,
    SHAFT_FIT_DATA,
)
from tolcalc.utils.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle."""
    logger.info(
        "Starting Tolerance Calculator (general brackets=%d, fit brackets=%d, hole classes=%d, shaft classes=%d)",
        len(GENERAL_TOLERANCE_TABLE),
        len(FIT_RANGES),
        len(HOLE_FIT_DATA),
        len(SHAFT_FIT_DATA),
    )
    yield
    logger.info("Shutting down Tolerance Calculator...")


app = FastAPI(
    title="Tolerance Calculator",
    description="General tolerance (JIS B 0405 / ISO 2768-1) and ISO 286 fit lookup service",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

app.include_router(api_router, prefix="/api")

app.mount("/metrics", make_asgi_app())


@app.get("/")
async def root():
    return {
        "name": "Tolerance Calculator",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
async def health_check():
    """Health check with table sizes and the effective query defaults."""
    current_settings = get_settings()
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "runtime": {
            "python_version": sys.version.split(" ")[0],
        },
        "tables": {
            "general_brackets": len(GENERAL_TOLERANCE_TABLE),
            "fit_brackets": len(FIT_RANGES),
            "hole_classes": len(HOLE_FIT_DATA),
            "shaft_classes": len(SHAFT_FIT_DATA),
        },
        "config": {
            "defaults": {
                "mode": current_settings.DEFAULT_MODE,
                "dimension": current_settings.DEFAULT_DIMENSION,
                "general_class": current_settings.DEFAULT_GENERAL_CLASS,
                "fit_category": current_settings.DEFAULT_FIT_CATEGORY,
                "fit_class": current_settings.DEFAULT_FIT_CLASS,
            },
            "debug": {
                "debug_mode": current_settings.DEBUG,
                "log_level": current_settings.LOG_LEVEL,
            },
        },
    }


def run() -> None:
    uvicorn.run(
        "tolcalc.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=settings.WORKERS,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
