"""
Bot runtime: wires clients, store and services together for one process.
"""

import logging

from slack_sdk.web.async_client import AsyncWebClient

from sleeper_draftbot.clients.slack import SlackMessenger
from sleeper_draftbot.clients.sleeper import SleeperClient
from sleeper_draftbot.config import Settings, get_settings
from sleeper_draftbot.services.identity import (
    IdentityResolver,
    LegacyMapStrategy,
    StoredPlayerStrategy,
)
from sleeper_draftbot.services.roster_audit import RosterAuditService
from sleeper_draftbot.services.tracker import DraftTracker
from sleeper_draftbot.storage import DraftStore

logger = logging.getLogger(__name__)


class BotRuntime:
    """
    Owns the long-lived collaborators.

    Usage:
        async with BotRuntime() as runtime:
            await runtime.tracker.check_draft_for_updates()
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.sleeper = SleeperClient(self.settings)
        self.store = DraftStore(self.settings)
        self.slack = AsyncWebClient(token=self.settings.slack_bot_token or None)
        self.messenger = SlackMessenger(self.slack)
        self.identities = IdentityResolver(
            [
                StoredPlayerStrategy(self.store),
                LegacyMapStrategy(self.settings.legacy_player_map),
            ]
        )
        self.tracker = DraftTracker(
            client=self.sleeper,
            store=self.store,
            identities=self.identities,
            config=self.settings.multi_pick_config(),
            messenger=self.messenger,
        )
        self.roster_audit = RosterAuditService(self.sleeper)

    async def __aenter__(self) -> "BotRuntime":
        await self.sleeper.__aenter__()
        logger.info("Runtime started (table=%s)", self.settings.dynamodb_table_name)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.sleeper.__aexit__(exc_type, exc_val, exc_tb)
