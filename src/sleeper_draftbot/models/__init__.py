"""Pydantic models and schemas."""

from sleeper_draftbot.models.draft import (
    DRAFT_COMPLETE,
    Draft,
    DraftSettings,
    PickDelta,
    PickValidation,
)
from sleeper_draftbot.models.league import League, NFLState, Roster, ScheduledGame, User
from sleeper_draftbot.models.messages import (
    MessagePayload,
    MultiPickMessage,
    RosterReportMessage,
    SinglePickMessage,
    SlackMessage,
    TextMessage,
)
from sleeper_draftbot.models.player import Player
from sleeper_draftbot.models.registration import (
    DraftRegistration,
    Identity,
    LeagueRegistration,
    PlayerMapping,
)
from sleeper_draftbot.models.roster_audit import (
    EmptySlot,
    FlaggedPlayer,
    LeagueRosterAnalysis,
    RosterIssues,
    RosterReport,
)

__all__ = [
    # Draft
    "DRAFT_COMPLETE",
    "Draft",
    "DraftSettings",
    "PickDelta",
    "PickValidation",
    # League
    "League",
    "NFLState",
    "Roster",
    "ScheduledGame",
    "User",
    # Messages
    "MessagePayload",
    "MultiPickMessage",
    "RosterReportMessage",
    "SinglePickMessage",
    "SlackMessage",
    "TextMessage",
    # Player
    "Player",
    # Registration
    "DraftRegistration",
    "Identity",
    "LeagueRegistration",
    "PlayerMapping",
    # Roster audit
    "EmptySlot",
    "FlaggedPlayer",
    "LeagueRosterAnalysis",
    "RosterIssues",
    "RosterReport",
]
