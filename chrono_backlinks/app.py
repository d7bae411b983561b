"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from .api.router import api_router

# Configure logging for our modules
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(name)s: %(message)s")
logging.getLogger("chrono_backlinks").setLevel(logging.DEBUG)


def create_app() -> FastAPI:
    app = FastAPI(
        title="chrono-backlinks",
        version="0.1.0",
        description="Chronological ordering for note backlinks",
    )

    app.include_router(api_router, prefix="/api")

    return app
