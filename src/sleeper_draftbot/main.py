"""
Sleeper Draftbot - Main Application

FastAPI application serving the Slack bot and its scheduled tasks.
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

import uvicorn
from fastapi import FastAPI

from sleeper_draftbot import __version__
from sleeper_draftbot.api.dependencies import RuntimeManager
from sleeper_draftbot.api.routes import slack, tasks
from sleeper_draftbot.config import get_settings
from sleeper_draftbot.logging_config import configure_logging
from sleeper_draftbot.runtime import BotRuntime

logger = logging.getLogger(__name__)


async def poll_drafts(runtime: BotRuntime, interval: int) -> None:
    """Run the draft monitor every ``interval`` seconds until cancelled."""
    while True:
        try:
            await runtime.tracker.check_draft_for_updates()
        except Exception:
            logger.exception("Draft monitor sweep failed")
        await asyncio.sleep(interval)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting Sleeper Draftbot v%s", __version__)
    logger.info("Slack configured: %s", settings.slack_configured)

    runtime = await RuntimeManager.get_runtime()
    poller = None
    if settings.monitor_interval_seconds > 0:
        logger.info("Polling drafts every %ss", settings.monitor_interval_seconds)
        poller = asyncio.create_task(poll_drafts(runtime, settings.monitor_interval_seconds))

    yield

    # Shutdown
    logger.info("Shutting down Sleeper Draftbot")
    if poller is not None:
        poller.cancel()
        with suppress(asyncio.CancelledError):
            await poller
    await RuntimeManager.close_runtime()


def create_app() -> FastAPI:
    """Application factory to create the FastAPI app."""
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.api_title,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "endpoints": {
                "slack": "/slack/events",
                "draft_monitor": "/tasks/draft-monitor",
                "roster_check": "/tasks/roster-check",
            },
        }

    # Register API routes
    app.include_router(slack.router, prefix="/slack", tags=["Slack"])
    app.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])

    return app


# Create the application instance
app = create_app()


def run():
    """Run the application (used by the CLI entry point)."""
    settings = get_settings()
    uvicorn.run(
        "sleeper_draftbot.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    run()
