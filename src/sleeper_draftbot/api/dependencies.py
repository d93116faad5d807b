"""
API Dependencies

Shared dependencies for FastAPI route handlers: the process-wide bot
runtime and the Slack request handler built on top of it.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException
from slack_bolt.adapter.fastapi.async_handler import AsyncSlackRequestHandler

from sleeper_draftbot.bot import create_slack_app
from sleeper_draftbot.runtime import BotRuntime

logger = logging.getLogger(__name__)


class RuntimeManager:
    """
    Manages the BotRuntime lifecycle for the application.

    Creates a single runtime (and Slack handler) reused across requests.
    """

    _runtime: BotRuntime | None = None
    _slack_handler: AsyncSlackRequestHandler | None = None

    @classmethod
    async def get_runtime(cls) -> BotRuntime:
        """Get or create the BotRuntime instance."""
        if cls._runtime is None:
            cls._runtime = BotRuntime()
            await cls._runtime.__aenter__()
        return cls._runtime

    @classmethod
    async def get_slack_handler(cls) -> AsyncSlackRequestHandler | None:
        """Slack request handler, or None when Slack credentials are missing."""
        runtime = await cls.get_runtime()
        if not runtime.settings.slack_configured:
            return None
        if cls._slack_handler is None:
            cls._slack_handler = AsyncSlackRequestHandler(create_slack_app(runtime))
        return cls._slack_handler

    @classmethod
    async def close_runtime(cls) -> None:
        """Close the BotRuntime instance."""
        if cls._runtime is not None:
            await cls._runtime.__aexit__(None, None, None)
            cls._runtime = None
            cls._slack_handler = None


async def get_runtime() -> BotRuntime:
    """Dependency to get the BotRuntime."""
    return await RuntimeManager.get_runtime()


async def get_slack_handler() -> AsyncSlackRequestHandler:
    """Dependency to get the Slack handler; 503 when Slack isn't configured."""
    handler = await RuntimeManager.get_slack_handler()
    if handler is None:
        raise HTTPException(status_code=503, detail="Slack credentials are not configured")
    return handler


# Type aliases for cleaner route signatures
RuntimeDep = Annotated[BotRuntime, Depends(get_runtime)]
SlackHandlerDep = Annotated[AsyncSlackRequestHandler, Depends(get_slack_handler)]
