"""
User-facing message text shared by the command handlers.
"""

NO_DRAFT_REGISTERED = (
    "There is no draft registered for this channel. "
    "Please use `@YourBotName register draft [draft_id]` to get started."
)
NO_DRAFT_REGISTERED_SIMPLE = "There is no draft registered for this channel."
NO_DRAFTS = "There are currently no drafts registered."
CONFIGURATION_READ_ERROR = (
    "I couldn't read my configuration. Please make sure I am set up correctly."
)
CONFIGURATION_ERROR = (
    ":x: Sorry, I couldn't complete the operation. There was an error updating my configuration."
)
GENERIC_ERROR = "An error occurred while processing your request."
NO_LEAGUES_REGISTERED = (
    "📭 No leagues are registered to this channel. "
    "Use `@YourBotName register league [league_id]` first to register a Sleeper league."
)
ROSTER_CHECK_STARTED = "🔍 Analyzing rosters for issues... This may take a moment."
AUTOMATED_ROSTER_CHECK_STARTED = "🔍 Automated Roster Check - Analyzing rosters for issues..."
AUTOMATED_ROSTER_CHECK_DONE = "✅ Automated roster analysis complete!"
LIST_DRAFTS_DM_ONLY = (
    "For security, the `list drafts` command can only be used in a direct message with me."
)
UPDATE_PLAYERS_DM_ONLY = (
    "For security, the `update players` command can only be used in a direct message with me."
)
UPDATING_PLAYERS = "🔄 Updating player slack names..."
PLAYERS_UP_TO_DATE = "✅ All player slack names are already up to date."
NO_LEAGUES_IN_CHANNEL = (
    "📭 No leagues are currently registered to this channel.\n\n"
    "Use `@YourBotName register league [league_id]` to register a Sleeper league."
)

USAGE = "\n".join(
    [
        "*Here's what I can do:*",
        "• `last pick` - show the latest pick (or every pick since the last update)",
        "• `register draft [draft_id]` - announce picks from a Sleeper draft in this channel",
        "• `unregister draft` - stop announcing picks in this channel",
        "• `list drafts` - list every registered draft (direct message only)",
        "• `register player [sleeper_username] [@slack_user]` - map a Sleeper user to Slack",
        "• `update players` - refresh the Slack names of registered players (direct message only)",
        "• `register league [league_id]` - check lineups for a Sleeper league in this channel",
        "• `list leagues` - list the leagues registered to this channel",
        "• `check rosters` - look for bye weeks, injuries and empty slots",
        "• `usage` - show this message",
    ]
)


def draft_not_found(draft_id: str) -> str:
    return f"Could not find a draft or picks for ID `{draft_id}`. Please check the ID and try again."


def draft_not_started(draft_id: str) -> str:
    return f"The draft for ID `{draft_id}` has not started yet."


def draft_fetch_failed(draft_id: str) -> str:
    return (
        "Sorry, I couldn't fetch the draft details. "
        f"The Sleeper API might be down or the Draft ID `{draft_id}` is invalid."
    )


def draft_registered(draft_id: str) -> str:
    return f":white_check_mark: Successfully registered draft `{draft_id}` to this channel."


def draft_unregistered(draft_id: str) -> str:
    return f":white_check_mark: Successfully unregistered draft `{draft_id}` from this channel."


def player_registered(sleeper_username: str, sleeper_id: str, slack_name: str, member_id: str) -> str:
    return (
        f":white_check_mark: Successfully registered player. Sleeper username `{sleeper_username}` "
        f"(ID: `{sleeper_id}`) is now mapped to `{slack_name}` ({member_id})."
    )


def sleeper_user_not_found(username: str) -> str:
    return (
        f"❌ Could not find Sleeper user with username `{username}`. "
        "Please check the username and try again."
    )


def league_registered(league_name: str, league_id: str) -> str:
    return (
        f":white_check_mark: Successfully registered league *{league_name}* "
        f"(`{league_id}`) to this channel."
    )


def league_not_found(league_id: str) -> str:
    return f"❌ Could not find a Sleeper league with ID `{league_id}`."


def league_analysis_failed(league_name: str, error: Exception) -> str:
    return f'❌ Failed to analyze league "{league_name}": {error}'


def unknown_command(command: str) -> str:
    return f"Sorry, I don't understand the command `{command}`."


def usage_hint(usage: str) -> str:
    return f"Please provide the right arguments. Usage: {usage}"


def players_updated(count: int) -> str:
    return f":white_check_mark: Successfully updated {count} player slack names."
