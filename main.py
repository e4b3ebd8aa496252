import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.application.scheduler import ReminderScheduler, run_housekeeping
from app.config import get_settings
from app.infrastructure.database import engine, initialize_database
from app.interfaces.api.middleware import SessionMiddleware
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables, start the background loops and stop them on shutdown."""

    settings = get_settings()
    initialize_database()

    if not settings.notification_encryption_key:
        logger.warning("NOTIFICATION_ENCRYPTION_KEY not set - relay reminders are disabled")
    if not settings.web_push_configured:
        logger.warning("VAPID keys not configured - push reminders are disabled")

    background: list[asyncio.Task] = [
        asyncio.create_task(run_housekeeping(settings.rate_limit_cleanup_interval_seconds))
    ]
    if settings.reminder_scheduler_enabled:
        scheduler = ReminderScheduler()
        app.state.reminder_scheduler = scheduler
        background.append(asyncio.create_task(scheduler.run()))

    try:
        yield
    finally:
        # In-flight deliveries are dropped with the loop.
        for task in background:
            task.cancel()
        for task in background:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="Habit Tracker API", lifespan=lifespan)

    app.add_middleware(SessionMiddleware)
    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_routes(app)
    return app


app = create_app()
