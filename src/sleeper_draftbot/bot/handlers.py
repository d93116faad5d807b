"""
Command handlers.

Each handler answers through ``emit`` and reports store failures as a
configuration error instead of raising.
"""

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from typing import Any

from sleeper_draftbot import messages
from sleeper_draftbot.models import SlackMessage, TextMessage
from sleeper_draftbot.runtime import BotRuntime
from sleeper_draftbot.storage import DataStoreError

logger = logging.getLogger(__name__)

Emit = Callable[[SlackMessage], Awaitable[Any]]

SLACK_MENTION = re.compile(r"^<@([UW][A-Z0-9]+)(?:\|([^>]+))?>$")
SLACK_MEMBER_ID = re.compile(r"^[UW][A-Z0-9]{6,}$")


def parse_slack_user(value: str) -> tuple[str, str | None]:
    """
    Split ``<@U123|name>``, ``<@U123>``, ``U123`` or a bare name.

    Returns (member_id_or_name, label) where label is the name embedded
    in a mention, if any.
    """
    match = SLACK_MENTION.match(value)
    if match:
        return match.group(1), match.group(2)
    return value.lstrip("@"), None


def is_direct_message(channel_id: str) -> bool:
    """Slack DM channel IDs start with ``D``."""
    return channel_id.startswith("D")


async def _say(emit: Emit, text: str) -> None:
    await emit(TextMessage(text=text))


async def handle_last_pick(runtime: BotRuntime, channel_id: str, args: str, emit: Emit) -> None:
    await runtime.tracker.handle_last_pick_command(channel_id, emit)


async def handle_register_draft(
    runtime: BotRuntime, channel_id: str, args: str, emit: Emit
) -> None:
    draft_id = args.strip()
    if not draft_id:
        await _say(emit, messages.usage_hint("`@YourBotName register draft [draft_id]`"))
        return

    try:
        await runtime.store.register_draft(draft_id, channel_id)
    except DataStoreError:
        logger.exception("Error in register draft command")
        await _say(emit, messages.CONFIGURATION_ERROR)
        return
    await _say(emit, messages.draft_registered(draft_id))


async def handle_unregister_draft(
    runtime: BotRuntime, channel_id: str, args: str, emit: Emit
) -> None:
    try:
        registration = await runtime.store.get_registration_by_channel(channel_id)
        if registration is None:
            await _say(emit, messages.NO_DRAFT_REGISTERED_SIMPLE)
            return
        await runtime.store.delete_registration(registration.draft_id)
    except DataStoreError:
        logger.exception("Error in unregister draft command")
        await _say(emit, messages.CONFIGURATION_ERROR)
        return
    await _say(emit, messages.draft_unregistered(registration.draft_id))


async def handle_list_drafts(runtime: BotRuntime, channel_id: str, args: str, emit: Emit) -> None:
    if not is_direct_message(channel_id):
        await _say(emit, messages.LIST_DRAFTS_DM_ONLY)
        return

    try:
        registrations = await runtime.store.list_registrations()
    except DataStoreError:
        logger.exception("Error in list drafts command")
        await _say(emit, messages.CONFIGURATION_READ_ERROR)
        return

    if not registrations:
        await _say(emit, messages.NO_DRAFTS)
        return

    lines = ["*Here are all the currently registered drafts:*"]
    lines.extend(
        f"• Draft `{r.draft_id}` is registered to <#{r.channel_id}>" for r in registrations
    )
    await _say(emit, "\n".join(lines))


async def handle_register_player(
    runtime: BotRuntime, channel_id: str, args: str, emit: Emit
) -> None:
    parts = args.split()
    if len(parts) != 2:
        await _say(
            emit,
            messages.usage_hint(
                "`@YourBotName register player [sleeper_username] [@slack_user]`"
            ),
        )
        return

    sleeper_username, slack_user = parts
    sleeper_user = await runtime.sleeper.get_user(sleeper_username)
    if sleeper_user is None:
        await _say(emit, messages.sleeper_user_not_found(sleeper_username))
        return

    member_id, label = parse_slack_user(slack_user)
    slack_name = label or member_id
    if SLACK_MEMBER_ID.match(member_id):
        slack_name = await runtime.messenger.get_display_name(member_id) or slack_name

    try:
        await runtime.store.save_player_mapping(sleeper_user.user_id, member_id, slack_name)
    except DataStoreError:
        logger.exception("Error in register player command")
        await _say(emit, messages.CONFIGURATION_ERROR)
        return
    await _say(
        emit,
        messages.player_registered(sleeper_username, sleeper_user.user_id, slack_name, member_id),
    )


async def handle_update_players(
    runtime: BotRuntime, channel_id: str, args: str, emit: Emit
) -> None:
    """Refresh the stored Slack name of every mapped player."""
    if not is_direct_message(channel_id):
        await _say(emit, messages.UPDATE_PLAYERS_DM_ONLY)
        return

    try:
        mappings = await runtime.store.list_player_mappings()
    except DataStoreError:
        logger.exception("Error in update players command")
        await _say(emit, messages.CONFIGURATION_READ_ERROR)
        return

    await _say(emit, messages.UPDATING_PLAYERS)

    mappable = [
        m for m in mappings if m.slack_member_id and SLACK_MEMBER_ID.match(m.slack_member_id)
    ]
    names = await asyncio.gather(
        *(runtime.messenger.get_display_name(m.slack_member_id) for m in mappable)
    )

    updated = 0
    try:
        for mapping, name in zip(mappable, names):
            if name and name != mapping.slack_name:
                await runtime.store.save_player_mapping(
                    mapping.sleeper_id, mapping.slack_member_id, name
                )
                logger.info(
                    "Updated player %s: %s -> %s", mapping.sleeper_id, mapping.slack_name, name
                )
                updated += 1
    except DataStoreError:
        logger.exception("Error in update players command")
        await _say(emit, messages.CONFIGURATION_ERROR)
        return

    if updated:
        await _say(emit, messages.players_updated(updated))
    else:
        await _say(emit, messages.PLAYERS_UP_TO_DATE)


async def handle_register_league(
    runtime: BotRuntime, channel_id: str, args: str, emit: Emit
) -> None:
    league_id = args.strip()
    if not league_id:
        await _say(emit, messages.usage_hint("`@YourBotName register league [league_id]`"))
        return

    league = await runtime.sleeper.get_league(league_id)
    if league is None:
        await _say(emit, messages.league_not_found(league_id))
        return

    try:
        await runtime.store.save_league(league_id, channel_id, league.name, league.season)
    except DataStoreError:
        logger.exception("Error in register league command")
        await _say(emit, messages.CONFIGURATION_ERROR)
        return
    await _say(emit, messages.league_registered(league.name, league_id))


async def handle_list_leagues(runtime: BotRuntime, channel_id: str, args: str, emit: Emit) -> None:
    try:
        leagues = await runtime.store.get_leagues_by_channel(channel_id)
    except DataStoreError:
        logger.exception("Error in list leagues command")
        await _say(emit, messages.CONFIGURATION_READ_ERROR)
        return

    if not leagues:
        await _say(emit, messages.NO_LEAGUES_IN_CHANNEL)
        return

    lines = ["🏈 *Leagues registered to this channel:*"]
    for number, league in enumerate(leagues, start=1):
        lines.extend(
            [
                "",
                f"*{number}. {league.league_name}*",
                f"   • *Season:* {league.season}",
                f"   • *League ID:* `{league.league_id}`",
            ]
        )
    await _say(emit, "\n".join(lines))


async def handle_check_rosters(
    runtime: BotRuntime, channel_id: str, args: str, emit: Emit
) -> None:
    try:
        leagues = await runtime.store.get_leagues_by_channel(channel_id)
    except DataStoreError:
        logger.exception("Error in check rosters command")
        await _say(emit, messages.CONFIGURATION_READ_ERROR)
        return

    if not leagues:
        await _say(emit, messages.NO_LEAGUES_REGISTERED)
        return

    await _say(emit, messages.ROSTER_CHECK_STARTED)
    await runtime.roster_audit.report_leagues(leagues, emit)


async def handle_usage(runtime: BotRuntime, channel_id: str, args: str, emit: Emit) -> None:
    await _say(emit, messages.USAGE)
