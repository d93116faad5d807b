"""
League-related Pydantic models.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class League(BaseModel):
    """Sleeper league information."""

    model_config = ConfigDict(extra="ignore")

    league_id: str
    name: str
    status: str | None = None
    sport: str = "nfl"
    season: str
    total_rosters: int = 0
    roster_positions: list[str] = Field(default_factory=list)
    draft_id: str | None = None

    @property
    def starting_positions(self) -> list[str]:
        """Roster slots that count toward the starting lineup."""
        return [p for p in self.roster_positions if p not in ("BN", "IR", "TAXI")]


class User(BaseModel):
    """Sleeper user information."""

    model_config = ConfigDict(extra="ignore")

    user_id: str
    username: str | None = None
    display_name: str | None = None
    metadata: dict | None = None

    @property
    def name(self) -> str:
        return self.display_name or self.username or "Unknown Owner"


class Roster(BaseModel):
    """League roster information."""

    model_config = ConfigDict(extra="ignore")

    roster_id: int
    owner_id: str | None = None
    league_id: str | None = None
    players: list[str] | None = None
    starters: list[str] | None = None

    @property
    def is_empty(self) -> bool:
        return not self.players


class NFLState(BaseModel):
    """Current NFL state from Sleeper."""

    model_config = ConfigDict(extra="ignore")

    week: int
    season: str
    season_type: str | None = None
    display_week: int | None = None

    @property
    def current_week(self) -> int:
        return self.display_week or self.week


class ScheduledGame(BaseModel):
    """One game from the Sleeper season schedule."""

    model_config = ConfigDict(extra="ignore")

    week: int | None = None
    home: str | None = Field(default=None, validation_alias=AliasChoices("home", "home_team"))
    away: str | None = Field(default=None, validation_alias=AliasChoices("away", "away_team"))
    status: str | None = None

    @property
    def is_final(self) -> bool:
        return (self.status or "").lower() in ("complete", "final")

    @property
    def teams(self) -> list[str]:
        return [team for team in (self.home, self.away) if team]
