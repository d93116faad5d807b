"""
In-memory fakes for the Sleeper client, the DynamoDB store and the
Slack messenger, plus raw Sleeper payload factories.
"""

from sleeper_draftbot.models import (
    Draft,
    DraftRegistration,
    LeagueRegistration,
    PlayerMapping,
)
from sleeper_draftbot.storage import StaleRegistrationError


def make_pick(pick_no, round_num=None, picked_by=None, first="Player", last=None, position="RB"):
    """A raw Sleeper pick dict."""
    return {
        "pick_no": pick_no,
        "round": round_num if round_num is not None else 1,
        "picked_by": picked_by or f"user{pick_no}",
        "metadata": {
            "first_name": first,
            "last_name": last or str(pick_no),
            "position": position,
        },
    }


def make_picks(count, teams=4):
    return [make_pick(n, round_num=(n - 1) // teams + 1) for n in range(1, count + 1)]


def make_draft(teams=4, rounds=3, draft_type="snake", status="drafting", reversal_round=0):
    return Draft(
        draft_id="d1",
        type=draft_type,
        status=status,
        settings={"rounds": rounds, "teams": teams, "reversal_round": reversal_round},
        draft_order={f"u{slot}": slot for slot in range(1, teams + 1)},
    )


class FakeSleeper:
    """Stands in for SleeperClient; every getter reads a dict."""

    def __init__(self):
        self.drafts = {}
        self.picks = {}
        self.users = {}
        self.leagues = {}
        self.rosters = {}
        self.league_users = {}
        self.players = {}
        self.nfl_state = None
        self.schedule = []
        self.errors = {}

    def _maybe_raise(self, name):
        if name in self.errors:
            raise self.errors[name]

    async def get_draft(self, draft_id):
        self._maybe_raise("get_draft")
        return self.drafts.get(draft_id)

    async def get_draft_picks(self, draft_id):
        self._maybe_raise("get_draft_picks")
        return self.picks.get(draft_id)

    async def get_user(self, username):
        return self.users.get(username)

    async def get_league(self, league_id):
        self._maybe_raise("get_league")
        return self.leagues.get(league_id)

    async def get_league_rosters(self, league_id):
        return self.rosters.get(league_id, [])

    async def get_league_users(self, league_id):
        return self.league_users.get(league_id, [])

    async def get_all_players(self, force_refresh=False):
        return self.players

    async def get_nfl_state(self):
        return self.nfl_state

    async def get_week_schedule(self, season, week):
        self._maybe_raise("get_week_schedule")
        return [game for game in self.schedule if game.week == week]


class FakeStore:
    """In-memory DraftStore with the same conditional-write behavior."""

    def __init__(self):
        self.registrations: dict[str, DraftRegistration] = {}
        self.players: dict[str, PlayerMapping] = {}
        self.leagues: dict[str, LeagueRegistration] = {}
        self.saves = []
        self.fail_reads = None

    async def get_registration(self, draft_id):
        return self.registrations.get(draft_id)

    async def get_registration_by_channel(self, channel_id):
        if self.fail_reads:
            raise self.fail_reads
        for registration in self.registrations.values():
            if registration.channel_id == channel_id:
                return registration
        return None

    async def list_registrations(self):
        if self.fail_reads:
            raise self.fail_reads
        return list(self.registrations.values())

    async def save_registration(
        self, draft_id, channel_id, last_known_pick_count=0, expected_count=None
    ):
        current = self.registrations.get(draft_id)
        if (
            expected_count is not None
            and current is not None
            and current.last_known_pick_count != expected_count
        ):
            raise StaleRegistrationError(draft_id)
        self.saves.append((draft_id, channel_id, last_known_pick_count))
        self.registrations[draft_id] = DraftRegistration(
            draft_id=draft_id, channel_id=channel_id, last_known_pick_count=last_known_pick_count
        )

    async def register_draft(self, draft_id, channel_id):
        for registration in list(self.registrations.values()):
            if registration.channel_id == channel_id and registration.draft_id != draft_id:
                await self.delete_registration(registration.draft_id)
        await self.save_registration(draft_id, channel_id, 0)

    async def delete_registration(self, draft_id):
        self.registrations.pop(draft_id, None)

    async def get_player_mapping(self, sleeper_id):
        return self.players.get(sleeper_id)

    async def save_player_mapping(self, sleeper_id, slack_member_id, slack_name=None):
        self.players[sleeper_id] = PlayerMapping(
            sleeper_id=sleeper_id,
            slack_member_id=slack_member_id,
            slack_name=slack_name or slack_member_id,
        )

    async def list_player_mappings(self):
        return list(self.players.values())

    async def save_league(self, league_id, channel_id, league_name, season):
        self.leagues[league_id] = LeagueRegistration(
            league_id=league_id, channel_id=channel_id, league_name=league_name, season=season
        )

    async def get_leagues_by_channel(self, channel_id):
        return [lg for lg in self.leagues.values() if lg.channel_id == channel_id]

    async def list_channels_with_leagues(self):
        channels = {}
        for league in self.leagues.values():
            channels.setdefault(league.channel_id, []).append(league)
        return channels


class FakeMessenger:
    """Records posted payloads instead of calling Slack."""

    def __init__(self, fail_channels=()):
        self.posts = []
        self.fail_channels = set(fail_channels)
        self.names = {}

    async def post(self, channel_id, message, thread_ts=None):
        if channel_id in self.fail_channels:
            raise RuntimeError(f"cannot post to {channel_id}")
        self.posts.append((channel_id, message))

    async def get_display_name(self, member_id):
        return self.names.get(member_id)


class Recorder:
    """An ``emit`` callback that keeps what it was given."""

    def __init__(self):
        self.messages = []

    async def __call__(self, message):
        self.messages.append(message)

    @property
    def texts(self):
        return [m.text for m in self.messages]


