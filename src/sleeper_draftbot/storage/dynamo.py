"""
DynamoDB store for bot registrations.

Single-table layout keyed by PK/SK:
    DRAFT  / DRAFT#{draft_id}     draft registered to a channel + pick baseline
    PLAYER / SLEEPER#{sleeper_id} Sleeper user -> Slack member mapping
    LEAGUE / LEAGUE#{league_id}   league registered to a channel

boto3 is synchronous, so every call runs in a worker thread.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Any, Callable, TypeVar

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from sleeper_draftbot.config import Settings, get_settings
from sleeper_draftbot.models import DraftRegistration, LeagueRegistration, PlayerMapping

logger = logging.getLogger(__name__)

T = TypeVar("T")

DRAFT_PK = "DRAFT"
PLAYER_PK = "PLAYER"
LEAGUE_PK = "LEAGUE"


class DataStoreError(Exception):
    """Raised when the store can't be read or written."""


class StaleRegistrationError(DataStoreError):
    """The pick baseline changed since it was read."""


def _plain(value: Any) -> Any:
    """DynamoDB hands numbers back as Decimal."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def _registration_from_item(item: dict[str, Any]) -> DraftRegistration:
    return DraftRegistration(
        draft_id=item.get("draftId") or item["SK"].removeprefix("DRAFT#"),
        channel_id=item.get("slackChannelId", ""),
        last_known_pick_count=_plain(item.get("lastKnownPickCount", 0)),
    )


def _player_from_item(item: dict[str, Any]) -> PlayerMapping:
    return PlayerMapping(
        sleeper_id=item.get("sleeperId") or item["SK"].removeprefix("SLEEPER#"),
        slack_member_id=item.get("slackMemberId"),
        slack_name=item.get("slackName"),
    )


def _league_from_item(item: dict[str, Any]) -> LeagueRegistration:
    return LeagueRegistration(
        league_id=item.get("leagueId") or item["SK"].removeprefix("LEAGUE#"),
        channel_id=item.get("slackChannelId", ""),
        league_name=item.get("leagueName", ""),
        season=str(_plain(item.get("season", ""))),
    )


class DraftStore:
    """Async facade over the bot's DynamoDB table."""

    def __init__(self, settings: Settings | None = None, table: Any = None):
        self.settings = settings or get_settings()
        if table is None:
            dynamodb = boto3.resource("dynamodb", region_name=self.settings.aws_region)
            table = dynamodb.Table(self.settings.dynamodb_table_name)
        self.table = table

    async def _call(self, fn: Callable[..., T], **kwargs: Any) -> T:
        try:
            return await asyncio.to_thread(fn, **kwargs)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code == "ConditionalCheckFailedException":
                raise StaleRegistrationError(str(e)) from e
            logger.error("DynamoDB %s failed: %s", getattr(fn, "__name__", fn), e)
            raise DataStoreError(str(e)) from e
        except BotoCoreError as e:
            logger.error("DynamoDB %s failed: %s", getattr(fn, "__name__", fn), e)
            raise DataStoreError(str(e)) from e

    async def _query_partition(self, pk: str, filter_expression: Any = None) -> list[dict]:
        items: list[dict] = []
        kwargs: dict[str, Any] = {"KeyConditionExpression": Key("PK").eq(pk)}
        if filter_expression is not None:
            kwargs["FilterExpression"] = filter_expression

        while True:
            response = await self._call(self.table.query, **kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    # ==================== Draft Registrations ====================

    async def get_registration(self, draft_id: str) -> DraftRegistration | None:
        response = await self._call(
            self.table.get_item, Key={"PK": DRAFT_PK, "SK": f"DRAFT#{draft_id}"}
        )
        item = response.get("Item")
        return _registration_from_item(item) if item else None

    async def get_registration_by_channel(self, channel_id: str) -> DraftRegistration | None:
        items = await self._query_partition(
            DRAFT_PK, Attr("slackChannelId").eq(channel_id)
        )
        if not items:
            return None
        if len(items) > 1:
            logger.warning(
                "Channel %s has %d drafts registered, using the first", channel_id, len(items)
            )
        return _registration_from_item(items[0])

    async def list_registrations(self) -> list[DraftRegistration]:
        return [_registration_from_item(item) for item in await self._query_partition(DRAFT_PK)]

    async def save_registration(
        self,
        draft_id: str,
        channel_id: str,
        last_known_pick_count: int = 0,
        expected_count: int | None = None,
    ) -> None:
        """
        Write a draft registration.

        When ``expected_count`` is given the write only succeeds if the stored
        baseline still equals it, otherwise StaleRegistrationError is raised.
        """
        kwargs: dict[str, Any] = {
            "Item": {
                "PK": DRAFT_PK,
                "SK": f"DRAFT#{draft_id}",
                "draftId": draft_id,
                "slackChannelId": channel_id,
                "lastKnownPickCount": last_known_pick_count,
            }
        }
        if expected_count is not None:
            kwargs["ConditionExpression"] = Attr("lastKnownPickCount").not_exists() | Attr(
                "lastKnownPickCount"
            ).eq(expected_count)

        await self._call(self.table.put_item, **kwargs)
        logger.info(
            "Saved draft %s for channel %s at pick count %s",
            draft_id,
            channel_id,
            last_known_pick_count,
        )

    async def register_draft(self, draft_id: str, channel_id: str) -> None:
        """Register a draft to a channel, replacing any other draft there."""
        for registration in await self.list_registrations():
            if registration.channel_id == channel_id and registration.draft_id != draft_id:
                await self.delete_registration(registration.draft_id)
        await self.save_registration(draft_id, channel_id, 0)

    async def delete_registration(self, draft_id: str) -> None:
        await self._call(
            self.table.delete_item, Key={"PK": DRAFT_PK, "SK": f"DRAFT#{draft_id}"}
        )
        logger.info("Deleted draft registration %s", draft_id)

    # ==================== Player Mappings ====================

    async def get_player_mapping(self, sleeper_id: str) -> PlayerMapping | None:
        response = await self._call(
            self.table.get_item, Key={"PK": PLAYER_PK, "SK": f"SLEEPER#{sleeper_id}"}
        )
        item = response.get("Item")
        return _player_from_item(item) if item else None

    async def save_player_mapping(
        self, sleeper_id: str, slack_member_id: str, slack_name: str | None = None
    ) -> None:
        await self._call(
            self.table.put_item,
            Item={
                "PK": PLAYER_PK,
                "SK": f"SLEEPER#{sleeper_id}",
                "sleeperId": sleeper_id,
                "slackMemberId": slack_member_id,
                "slackName": slack_name or slack_member_id,
            },
        )

    async def list_player_mappings(self) -> list[PlayerMapping]:
        return [_player_from_item(item) for item in await self._query_partition(PLAYER_PK)]

    # ==================== League Registrations ====================

    async def save_league(
        self, league_id: str, channel_id: str, league_name: str, season: str
    ) -> None:
        await self._call(
            self.table.put_item,
            Item={
                "PK": LEAGUE_PK,
                "SK": f"LEAGUE#{league_id}",
                "leagueId": league_id,
                "slackChannelId": channel_id,
                "leagueName": league_name,
                "season": season,
            },
        )

    async def get_leagues_by_channel(self, channel_id: str) -> list[LeagueRegistration]:
        items = await self._query_partition(LEAGUE_PK, Attr("slackChannelId").eq(channel_id))
        return [_league_from_item(item) for item in items]

    async def list_channels_with_leagues(self) -> dict[str, list[LeagueRegistration]]:
        """Group every registered league by its channel."""
        channels: dict[str, list[LeagueRegistration]] = {}
        for item in await self._query_partition(LEAGUE_PK):
            league = _league_from_item(item)
            channels.setdefault(league.channel_id, []).append(league)
        return channels
