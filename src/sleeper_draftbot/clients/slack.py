"""
Slack messaging channel.

Thin wrapper over slack_sdk's AsyncWebClient that posts payload models
and resolves member display names.
"""

import logging

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from sleeper_draftbot.models import SlackMessage

logger = logging.getLogger(__name__)


class SlackMessenger:
    """Posts messages to Slack channels."""

    def __init__(self, client: AsyncWebClient):
        self.client = client

    async def post(
        self, channel_id: str, message: SlackMessage, thread_ts: str | None = None
    ) -> None:
        """Post a payload to a channel, optionally inside a thread."""
        kwargs = message.to_slack()
        if thread_ts:
            kwargs["thread_ts"] = thread_ts
        await self.client.chat_postMessage(channel=channel_id, **kwargs)

    async def get_display_name(self, member_id: str) -> str | None:
        """Look up a member's display name, or None if Slack can't say."""
        try:
            response = await self.client.users_info(user=member_id)
        except SlackApiError as e:
            logger.warning("Could not resolve Slack user %s: %s", member_id, e.response["error"])
            return None

        user = response.get("user") or {}
        profile = user.get("profile") or {}
        return profile.get("display_name") or profile.get("real_name") or user.get("name")
