"""
Identity Resolution

Maps Sleeper user IDs to the names (and Slack mentions) shown in messages.
Lookups run through an ordered list of strategies; the first one that
knows the user wins.
"""

import asyncio
import logging
import re
from collections.abc import Iterable, Mapping
from typing import Protocol

from sleeper_draftbot.models import Identity
from sleeper_draftbot.storage import DraftStore

logger = logging.getLogger(__name__)

SLACK_MEMBER_ID = re.compile(r"^[UW][A-Z0-9]{6,}$")


class IdentityStrategy(Protocol):
    async def lookup(self, user_id: str) -> Identity | None: ...


class StoredPlayerStrategy:
    """Player mappings registered through the bot."""

    def __init__(self, store: DraftStore):
        self.store = store

    async def lookup(self, user_id: str) -> Identity | None:
        mapping = await self.store.get_player_mapping(user_id)
        if mapping is None:
            return None
        name = mapping.slack_name or mapping.slack_member_id
        if not name:
            return None
        return Identity(display_name=name, mention_id=mapping.slack_member_id)


class LegacyMapStrategy:
    """Static user ID -> Slack name/member ID map from configuration."""

    def __init__(self, player_map: Mapping[str, str]):
        self.player_map = dict(player_map)

    async def lookup(self, user_id: str) -> Identity | None:
        value = self.player_map.get(user_id)
        if not value:
            return None
        if SLACK_MEMBER_ID.match(value):
            # Slack renders the mention as the member's current name
            return Identity(display_name=f"<@{value}>", mention_id=value)
        return Identity(display_name=value)


class IdentityDirectory:
    """Resolved identities, queried synchronously by the formatters."""

    def __init__(self, identities: Mapping[str, Identity] | None = None):
        self._identities = dict(identities or {})

    def get(self, user_id: str | None) -> Identity | None:
        if user_id is None:
            return None
        return self._identities.get(user_id)

    def display_name(self, user_id: str | None) -> str:
        identity = self.get(user_id)
        if identity:
            return identity.display_name
        return f"User ID {user_id}"

    def mention(self, user_id: str | None) -> str:
        """Slack mention when a member ID is known, else the display name."""
        identity = self.get(user_id)
        if identity and identity.mention_id:
            return f"<@{identity.mention_id}>"
        return self.display_name(user_id)


class IdentityResolver:
    """Chain of identity strategies."""

    def __init__(self, strategies: list[IdentityStrategy]):
        self.strategies = strategies

    async def resolve(self, user_id: str) -> Identity | None:
        for strategy in self.strategies:
            try:
                identity = await strategy.lookup(user_id)
            except Exception:
                logger.warning(
                    "%s failed for user %s", type(strategy).__name__, user_id, exc_info=True
                )
                continue
            if identity is not None:
                return identity
        return None

    async def resolve_many(self, user_ids: Iterable[str | None]) -> IdentityDirectory:
        unique_ids = sorted({uid for uid in user_ids if uid})
        results = await asyncio.gather(*(self.resolve(uid) for uid in unique_ids))
        return IdentityDirectory(
            {uid: identity for uid, identity in zip(unique_ids, results) if identity is not None}
        )
