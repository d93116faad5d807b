"""
Player-related Pydantic models.
"""

from pydantic import BaseModel, ConfigDict


class Player(BaseModel):
    """NFL Player information from Sleeper."""

    model_config = ConfigDict(extra="ignore")

    player_id: str
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    position: str | None = None
    team: str | None = None
    status: str | None = None
    injury_status: str | None = None

    @property
    def display_name(self) -> str:
        """Get display name for the player."""
        if self.full_name:
            return self.full_name
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or "Unknown Player"
