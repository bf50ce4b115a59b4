# src/chat_geo/main.py
"""Main entry point for the Chat Geo application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from chat_geo.api.errors import install_exception_handlers
from chat_geo.api.v1 import include_routers
from chat_geo.core.logging import configure_logging
from chat_geo.core.settings import settings
from chat_geo.db.session import create_tables
from chat_geo.realtime.rooms import RoomRegistry

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Chat Geo API",
    description="Group chat and location sharing with live channel rooms",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

install_exception_handlers(app)

# Include API routers
include_routers(app)

# The registry exists before startup so handlers never see a missing attribute.
app.state.rooms = RoomRegistry()


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    if settings.create_tables_on_startup:
        create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    rooms: RoomRegistry = app.state.rooms
    logger.info("Shutting down with %d live room(s)", len(rooms))
    rooms.clear()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Group chat and location sharing with live channel rooms",
        "docs": "/docs",
        "websocket": "/api/v1/ws",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("chat_geo.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
