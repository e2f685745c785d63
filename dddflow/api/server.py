"""
FastAPI server for the dddflow validation engine.

Usage:
    # Run standalone
    python -m dddflow.api.server

    # Or via factory
    from dddflow.api import create_app
    app = create_app()
    uvicorn.run(app, port=5001)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from dddflow import __version__
from dddflow.model._time import utc_now_iso
from dddflow.validator.gate import ValidationStore

from .routes import validation_router

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str
    timestamp: str
    version: str


def create_app(
    store: Optional[ValidationStore] = None,
    enable_cors: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Result cache to serve from. A fresh one is created if omitted.
        enable_cors: Whether to enable CORS middleware.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("dddflow validation API starting...")
        yield
        app.state.validation_store.reset()
        logger.info("dddflow validation API stopped")

    app = FastAPI(
        title="dddflow Validation API",
        description="Flow, domain and system validation plus the implement gate",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.validation_store = store if store is not None else ValidationStore()

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/api/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", timestamp=utc_now_iso(), version=__version__)

    app.include_router(validation_router, prefix="/api")
    return app


def main() -> None:
    """Run the API server."""
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(description="dddflow Validation API Server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=5001, help="Port to bind to")
    parser.add_argument("--no-cors", action="store_true", help="Disable CORS")
    args = parser.parse_args()

    print(f"Starting dddflow validation API at http://{args.host}:{args.port}")
    uvicorn.run(create_app(enable_cors=not args.no_cors), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
