"""
Draft Models

Draft metadata as returned by Sleeper, plus the results of the pick
delta calculator and pick list validation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DRAFT_COMPLETE = "complete"


class DraftSettings(BaseModel):
    """Subset of Sleeper draft settings used to resolve the pick order."""

    model_config = ConfigDict(extra="ignore")

    rounds: int = 0
    teams: int | None = None
    reversal_round: int = 0

    @field_validator("rounds", "reversal_round", mode="before")
    @classmethod
    def _none_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class Draft(BaseModel):
    """Sleeper draft information."""

    model_config = ConfigDict(extra="ignore")

    draft_id: str | None = None
    type: str = "snake"
    status: str = "pre_draft"
    season: str | None = None
    league_id: str | None = None
    settings: DraftSettings = Field(default_factory=DraftSettings)
    draft_order: dict[str, int] = Field(
        default_factory=dict, description="Participant user ID -> draft slot"
    )

    @field_validator("draft_order", mode="before")
    @classmethod
    def _null_order(cls, value: Any) -> Any:
        # Sleeper returns null until the order is set
        return value or {}

    @field_validator("settings", mode="before")
    @classmethod
    def _null_settings(cls, value: Any) -> Any:
        return value or {}

    @property
    def team_count(self) -> int:
        return len(self.draft_order)

    @property
    def total_picks(self) -> int:
        return self.settings.rounds * self.team_count

    @property
    def is_pre_draft(self) -> bool:
        return self.status == "pre_draft"


class PickDelta(BaseModel):
    """Picks made since the last announced baseline."""

    new_picks: list[dict[str, Any]] = Field(default_factory=list)
    start_index: int
    end_index: int
    count: int
    has_new_picks: bool


class PickValidation(BaseModel):
    """Outcome of validating a pick list against a baseline."""

    is_valid: bool
    error: str | None = None
