import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from forum_notifications.config import get_settings
from forum_notifications.infrastructure.database import engine, initialize_database
from forum_notifications.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the notification tables on startup and release the engine on shutdown."""

    logging.basicConfig(level=get_settings().log_level)
    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Forum Notifications", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
