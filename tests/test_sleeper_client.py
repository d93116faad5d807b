"""
Tests for the Sleeper API client using httpx.MockTransport.
"""

import httpx
import pytest

from sleeper_draftbot.clients.sleeper import SleeperAPIError, SleeperClient

ROUTES = {
    "/v1/draft/d1": {
        "draft_id": "d1",
        "type": "snake",
        "status": "drafting",
        "settings": {"rounds": 15, "teams": 2, "reversal_round": None},
        "draft_order": {"u1": 1, "u2": 2},
    },
    "/v1/draft/d1/picks": [{"pick_no": 1, "round": 1, "picked_by": "u1", "metadata": {}}],
    "/v1/draft/pre": {"draft_id": "pre", "status": "pre_draft", "draft_order": None},
    "/v1/user/alice": {"user_id": "100", "username": "alice", "display_name": "Alice"},
    "/v1/league/L1": {"league_id": "L1", "name": "Main", "season": "2025"},
    "/v1/state/nfl": {"week": 3, "season": "2025", "display_week": 4},
    "/v1/players/nfl": {
        "p1": {"player_id": "p1", "first_name": "Josh", "last_name": "Allen", "position": "QB"},
        "p2": {"first_name": ["bad"]},
    },
    "/schedule/nfl/regular/2025": [
        {"week": 3, "home": "DET", "away": "GB", "status": "complete"},
        {"week": 3, "home": "KC", "away": "BUF", "status": "pre_game"},
        {"week": 4, "home_team": "PHI", "away_team": "DAL", "status": "pre_game"},
    ],
}


def handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/v1/draft/broken":
        return httpx.Response(500)
    if request.url.path not in ROUTES:
        return httpx.Response(404)
    return httpx.Response(200, json=ROUTES[request.url.path])


@pytest.fixture
async def client(settings):
    async with SleeperClient(settings, transport=httpx.MockTransport(handler)) as client:
        yield client


class TestSleeperClient:
    async def test_get_draft(self, client):
        draft = await client.get_draft("d1")

        assert draft.team_count == 2
        assert draft.total_picks == 30
        assert draft.settings.reversal_round == 0

    async def test_null_draft_order(self, client):
        draft = await client.get_draft("pre")
        assert draft.draft_order == {}
        assert draft.is_pre_draft

    async def test_picks_are_raw(self, client):
        picks = await client.get_draft_picks("d1")
        assert picks[0]["picked_by"] == "u1"

    async def test_not_found_is_none(self, client):
        assert await client.get_draft("missing") is None
        assert await client.get_draft_picks("missing") is None
        assert await client.get_user("nobody") is None

    async def test_server_error_raises(self, client):
        with pytest.raises(SleeperAPIError) as exc_info:
            await client.get_draft("broken")
        assert exc_info.value.status_code == 500

    async def test_nfl_state_prefers_display_week(self, client):
        state = await client.get_nfl_state()
        assert state.current_week == 4

    async def test_players_skip_malformed_records(self, client):
        players = await client.get_all_players(force_refresh=True)
        assert list(players) == ["p1"]
        assert players["p1"].display_name == "Josh Allen"

    async def test_requires_context_manager(self, settings):
        with pytest.raises(RuntimeError):
            await SleeperClient(settings).get_draft("d1")

    async def test_week_schedule_filters_by_week(self, client):
        games = await client.get_week_schedule("2025", 3)

        assert [(g.home, g.away) for g in games] == [("DET", "GB"), ("KC", "BUF")]
        assert [g.is_final for g in games] == [True, False]

    async def test_unpublished_schedule_is_empty(self, client):
        assert await client.get_week_schedule("2031", 1) == []
