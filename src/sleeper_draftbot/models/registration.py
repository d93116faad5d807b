"""
Persisted registrations: draft-to-channel, player identities and leagues.
"""

from typing import Any

from pydantic import BaseModel, Field


class DraftRegistration(BaseModel):
    """A draft monitored in a Slack channel."""

    draft_id: str
    channel_id: str
    # Stored value is trusted only after validation; older rows may hold junk
    last_known_pick_count: Any = Field(default=0)

    @property
    def baseline(self) -> int | None:
        """The announced pick count, or None when the stored value is unusable."""
        value = self.last_known_pick_count
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        return value


class PlayerMapping(BaseModel):
    """Sleeper user mapped to a Slack member."""

    sleeper_id: str
    slack_member_id: str | None = None
    slack_name: str | None = None


class LeagueRegistration(BaseModel):
    """A Sleeper league whose lineups are checked in a Slack channel."""

    league_id: str
    channel_id: str
    league_name: str
    season: str


class Identity(BaseModel):
    """How a Sleeper participant is shown in Slack."""

    display_name: str
    mention_id: str | None = None
