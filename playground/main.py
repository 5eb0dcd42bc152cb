"""
Server Playground

Main FastAPI application entry point.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from playground import __version__
from playground.config import Settings, settings as default_settings
from playground.logging_config import setup_logging
from playground.middleware import ErrorHandlerMiddleware
from playground.routes.upload import create_upload_router, method_not_allowed
from playground.services.dispatcher import UploadDispatcher

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application for the given settings.

    Args:
        settings: Configuration to use (default: environment-derived settings)

    Returns:
        FastAPI: Application with upload, health and static routes
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Server Playground",
        description="Experimental web server for file uploads over HTTP",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.dispatcher = UploadDispatcher(settings)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error handling middleware
    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(
        create_upload_router(settings, app.state.dispatcher), tags=["Upload"]
    )
    # No method list: every non-POST method lands here, before the static mount
    app.add_route(
        settings.UPLOAD_API_PATH, method_not_allowed, include_in_schema=False
    )

    @app.get("/health")
    async def health_check():
        """
        Detailed health check endpoint.

        Returns service health status for monitoring and deployment health checks.
        """
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
        }

    # Static files last: the mount at / matches every remaining path
    static_dir = Path(settings.STATIC_DIR)
    if settings.SERVE_STATIC and static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        logger.info(f"Serving static files from {static_dir}")
    elif settings.SERVE_STATIC:
        logger.warning(f"Static directory {static_dir} not found, not serving it")

    return app


app = create_app()


def main() -> None:
    """
    Start the FastAPI server with uvicorn.

    Only a failure to start the listener ends the process.
    """
    uvicorn.run(
        "playground.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
    )


if __name__ == "__main__":
    main()
