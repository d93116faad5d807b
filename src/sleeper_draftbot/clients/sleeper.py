"""
Async Sleeper API Client

Handles all API interactions with the Sleeper Fantasy Football platform.
Uses httpx for async HTTP requests with connection pooling.

API Documentation: https://docs.sleeper.com/
"""

import logging
import time
from typing import Any

import httpx

from sleeper_draftbot.config import Settings, get_settings
from sleeper_draftbot.models import Draft, League, NFLState, Player, Roster, ScheduledGame, User

logger = logging.getLogger(__name__)


class SleeperAPIError(Exception):
    """Exception raised for Sleeper API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class SleeperClient:
    """
    Async client for the Sleeper Fantasy Football API.

    Usage:
        async with SleeperClient() as client:
            draft = await client.get_draft("1121234567890")
            picks = await client.get_draft_picks("1121234567890")
    """

    _players_cache: dict[str, Player] | None = None
    _cache_timestamp: float = 0

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "SleeperClient":
        """Create HTTP client on context entry."""
        self._client = httpx.AsyncClient(
            base_url=self.settings.sleeper_base_url,
            timeout=httpx.Timeout(self.settings.sleeper_timeout),
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close HTTP client on context exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, raising if not initialized."""
        if self._client is None:
            raise RuntimeError(
                "SleeperClient must be used as async context manager: "
                "async with SleeperClient() as client: ..."
            )
        return self._client

    async def _get(self, endpoint: str) -> Any:
        """Make a GET request to the Sleeper API."""
        response = await self.client.get(endpoint)

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            logger.error(
                "Sleeper request %s failed with status %s", endpoint, response.status_code
            )
            raise SleeperAPIError(
                f"API request failed: {endpoint}",
                status_code=response.status_code,
            )

        # Sleeper answers unknown resources with a 200 and a null body
        return response.json()

    # ==================== User Endpoints ====================

    async def get_user(self, username: str) -> User | None:
        """
        Get user information by username or user_id.

        Args:
            username: Sleeper username or user ID

        Returns:
            User object or None if not found
        """
        data = await self._get(f"/user/{username}")
        if data is None:
            return None
        return User(**data)

    # ==================== League Endpoints ====================

    async def get_league(self, league_id: str) -> League | None:
        """
        Get league information.

        Args:
            league_id: Sleeper league ID

        Returns:
            League object or None if not found
        """
        data = await self._get(f"/league/{league_id}")
        if data is None:
            return None
        return League(**data)

    async def get_league_rosters(self, league_id: str) -> list[Roster]:
        """
        Get all rosters in a league.

        Args:
            league_id: Sleeper league ID

        Returns:
            List of Roster objects
        """
        data = await self._get(f"/league/{league_id}/rosters")
        if data is None:
            return []
        return [Roster(**roster) for roster in data]

    async def get_league_users(self, league_id: str) -> list[User]:
        """
        Get all users in a league.

        Args:
            league_id: Sleeper league ID

        Returns:
            List of User objects
        """
        data = await self._get(f"/league/{league_id}/users")
        if data is None:
            return []
        return [User(**user) for user in data]

    # ==================== Draft Endpoints ====================

    async def get_draft(self, draft_id: str) -> Draft | None:
        """
        Get specific draft information.

        Args:
            draft_id: Sleeper draft ID

        Returns:
            Draft object or None if not found
        """
        data = await self._get(f"/draft/{draft_id}")
        if data is None:
            return None
        return Draft(**data)

    async def get_draft_picks(self, draft_id: str) -> list[dict] | None:
        """
        Get all picks in a draft, in the order they were made.

        Picks are returned as raw dictionaries; callers validate them
        before trusting their shape.

        Args:
            draft_id: Sleeper draft ID

        Returns:
            List of draft pick dictionaries or None if not found
        """
        return await self._get(f"/draft/{draft_id}/picks")

    # ==================== Player Endpoints ====================

    async def get_all_players(self, force_refresh: bool = False) -> dict[str, Player]:
        """
        Get all NFL players with caching.

        This endpoint returns a large payload (~15MB) so we cache it.

        Args:
            force_refresh: Force refresh of cache

        Returns:
            Dict mapping player_id to Player object
        """
        current_time = time.time()
        cache_valid = (
            SleeperClient._players_cache is not None
            and (current_time - SleeperClient._cache_timestamp)
            < self.settings.players_cache_ttl
        )

        if not force_refresh and cache_valid:
            return SleeperClient._players_cache  # type: ignore

        data = await self._get("/players/nfl")
        if data is None:
            return {}

        players: dict[str, Player] = {}
        skipped = 0
        for player_id, player_data in data.items():
            try:
                player_data_copy = {**player_data}
                player_data_copy.pop("player_id", None)
                players[player_id] = Player(player_id=player_id, **player_data_copy)
            except (TypeError, ValueError):
                skipped += 1
                continue

        if skipped:
            logger.warning("Skipped %d malformed player records", skipped)
        logger.info("Cached %d NFL players", len(players))

        SleeperClient._players_cache = players
        SleeperClient._cache_timestamp = current_time
        return players

    # ==================== Schedule Endpoint ====================

    async def get_week_schedule(self, season: str, week: int) -> list[ScheduledGame]:
        """
        Get the regular-season games of one NFL week.

        Args:
            season: NFL season year
            week: Week number

        Returns:
            List of ScheduledGame objects (empty if the season isn't published)
        """
        data = await self._get(f"{self.settings.sleeper_schedule_url}/regular/{season}")
        if not data:
            return []
        games = [ScheduledGame.model_validate(game) for game in data]
        return [game for game in games if game.week == week]

    # ==================== NFL State Endpoint ====================

    async def get_nfl_state(self) -> NFLState | None:
        """
        Get current NFL state (week, season, etc.).

        Returns:
            NFLState object or None
        """
        data = await self._get("/state/nfl")
        if data is None:
            return None
        return NFLState(**data)
