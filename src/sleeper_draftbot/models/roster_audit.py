"""
Roster Audit Models

Starting lineup problems found for each roster in a league.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class EmptySlot(BaseModel):
    """A starting slot with no usable player."""

    slot_index: int = Field(description="1-based starting slot number")
    position: str
    issue: str | None = None


class FlaggedPlayer(BaseModel):
    """A starter on bye or carrying a serious injury designation."""

    player_id: str
    name: str
    position: str | None = None
    team: str | None = None
    slot_index: int
    injury_status: str | None = None


class RosterIssues(BaseModel):
    """Lineup problems for one roster."""

    empty_slots: list[EmptySlot] = Field(default_factory=list)
    bye_week_players: list[FlaggedPlayer] = Field(default_factory=list)
    injured_players: list[FlaggedPlayer] = Field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.empty_slots or self.bye_week_players or self.injured_players)


class RosterReport(BaseModel):
    """A roster with at least one lineup problem."""

    roster_id: int
    owner: str
    owner_id: str | None = None
    issues: RosterIssues


class LeagueRosterAnalysis(BaseModel):
    """Lineup audit for every roster in a league."""

    league_id: str
    league_name: str
    current_week: int
    current_season: str
    total_rosters: int
    active_rosters: int
    is_guillotine_league: bool = False
    roster_reports: list[RosterReport] = Field(default_factory=list)
    analyzed_at: datetime

    @property
    def rosters_with_issues(self) -> int:
        return len(self.roster_reports)
