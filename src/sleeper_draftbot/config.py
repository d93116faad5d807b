"""
Configuration module using pydantic-settings.

Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MultiPickConfig(BaseModel):
    """Immutable snapshot of the multi-pick display options."""

    model_config = ConfigDict(frozen=True)

    max_picks_to_show: int = Field(default=10, ge=1)
    multi_pick_enabled: bool = True
    max_message_blocks: int = Field(default=45, ge=1)
    estimated_blocks_per_pick: int = Field(default=2, ge=1)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DRAFTBOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Configuration
    api_title: str = "Sleeper Draftbot"
    api_version: str = "0.1.0"
    api_description: str = "Slack draft announcements and lineup checks for Sleeper leagues"
    debug: bool = False
    log_level: str = "INFO"

    # Sleeper API
    sleeper_base_url: str = "https://api.sleeper.app/v1"
    sleeper_timeout: float = 30.0
    # Season schedule lives on a separate, undocumented Sleeper host
    sleeper_schedule_url: str = "https://api.sleeper.com/schedule/nfl"

    # Cache Settings
    players_cache_ttl: int = 3600  # 1 hour in seconds

    # Slack
    slack_bot_token: str = ""
    slack_signing_secret: str = ""

    # DynamoDB
    dynamodb_table_name: str = "SleeperDraftbot"
    aws_region: str = "us-east-1"

    # Multi-pick announcements
    max_picks_to_show: int = Field(default=10, ge=1)
    multi_pick_enabled: bool = True
    max_message_blocks: int = Field(default=45, ge=1)
    estimated_blocks_per_pick: int = Field(default=2, ge=1)

    # Sleeper user id -> Slack member id or name, kept for older installs
    legacy_player_map: dict[str, str] = Field(default_factory=dict)

    # Draft monitor poll interval; 0 leaves polling to an external timer
    monitor_interval_seconds: int = Field(default=0, ge=0)

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    @property
    def slack_configured(self) -> bool:
        return bool(self.slack_bot_token and self.slack_signing_secret)

    def multi_pick_config(self) -> MultiPickConfig:
        """Snapshot the multi-pick options for one invocation."""
        return MultiPickConfig(
            max_picks_to_show=self.max_picks_to_show,
            multi_pick_enabled=self.multi_pick_enabled,
            max_message_blocks=self.max_message_blocks,
            estimated_blocks_per_pick=self.estimated_blocks_per_pick,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
