"""
Slack Bolt application.
"""

import logging

from slack_bolt.async_app import AsyncApp

from sleeper_draftbot.bot.commands import THREADED_COMMANDS, dispatch, parse_command
from sleeper_draftbot.models import SlackMessage
from sleeper_draftbot.runtime import BotRuntime

logger = logging.getLogger(__name__)


def create_slack_app(runtime: BotRuntime) -> AsyncApp:
    """Build the Bolt app with the bot's event and command listeners."""
    settings = runtime.settings
    app = AsyncApp(
        client=runtime.slack,
        signing_secret=settings.slack_signing_secret,
    )

    @app.event("app_mention")
    async def on_mention(event, say):
        text = event.get("text", "")
        channel_id = event["channel"]
        command, _ = parse_command(text)
        thread_ts = event.get("ts") if command in THREADED_COMMANDS else None

        async def emit(message: SlackMessage) -> None:
            await say(**message.to_slack(), thread_ts=thread_ts)

        await dispatch(runtime, text, channel_id, emit)

    @app.command("/lastpick")
    async def on_lastpick(ack, command, say):
        await ack()

        async def emit(message: SlackMessage) -> None:
            await say(**message.to_slack())

        await runtime.tracker.handle_last_pick_command(command["channel_id"], emit)

    @app.event("message")
    async def on_message(event, say):
        # Mentions arrive as app_mention; only direct messages are commands here
        if event.get("channel_type") != "im" or event.get("subtype") or event.get("bot_id"):
            logger.debug("Ignoring message event in %s", event.get("channel"))
            return

        async def emit(message: SlackMessage) -> None:
            await say(**message.to_slack())

        await dispatch(runtime, event.get("text", ""), event["channel"], emit)

    @app.error
    async def on_error(error):
        logger.error("Slack app error: %s", error)

    return app
