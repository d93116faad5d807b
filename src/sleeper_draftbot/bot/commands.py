"""
Routing of ``@bot <command> [args]`` mentions to handlers.
"""

import logging
import re
from collections.abc import Awaitable, Callable

from sleeper_draftbot import messages
from sleeper_draftbot.bot import handlers
from sleeper_draftbot.bot.handlers import Emit
from sleeper_draftbot.models import TextMessage
from sleeper_draftbot.runtime import BotRuntime

logger = logging.getLogger(__name__)

Handler = Callable[[BotRuntime, str, str, Emit], Awaitable[None]]

COMMANDS: dict[str, Handler] = {
    "last pick": handlers.handle_last_pick,
    "register draft": handlers.handle_register_draft,
    "unregister draft": handlers.handle_unregister_draft,
    "list drafts": handlers.handle_list_drafts,
    "register player": handlers.handle_register_player,
    "update players": handlers.handle_update_players,
    "register league": handlers.handle_register_league,
    "list leagues": handlers.handle_list_leagues,
    "check rosters": handlers.handle_check_rosters,
    "usage": handlers.handle_usage,
    "help": handlers.handle_usage,
}

# Replies to these go into a thread under the mention
THREADED_COMMANDS = {"check rosters", "list leagues"}

BOT_MENTION = re.compile(r"^\s*<@[^>]+>\s*")


def parse_command(text: str) -> tuple[str, str]:
    """Split mention text into (command, args). Command is lowercased."""
    text = BOT_MENTION.sub("", text, count=1).strip()
    words = text.split()
    for size in (2, 1):
        name = " ".join(words[:size]).lower()
        if len(words) >= size and name in COMMANDS:
            return name, " ".join(words[size:])
    return (words[0].lower() if words else ""), " ".join(words[1:])


async def dispatch(runtime: BotRuntime, text: str, channel_id: str, emit: Emit) -> None:
    """Run the handler for ``text``; unknown commands get the usage text."""
    command, args = parse_command(text)
    handler = COMMANDS.get(command)

    if handler is None:
        await emit(TextMessage(text=messages.unknown_command(command)))
        await handlers.handle_usage(runtime, channel_id, args, emit)
        return

    try:
        await handler(runtime, channel_id, args, emit)
    except Exception:
        logger.exception("Error processing command %r", command)
        await emit(TextMessage(text=messages.GENERIC_ERROR))
