"""
Tests for the draft state tracker: the interactive "last pick" command and
the scheduled draft monitor.
"""

import httpx
import pytest

from sleeper_draftbot import messages
from sleeper_draftbot.config import MultiPickConfig
from sleeper_draftbot.models import DraftRegistration
from sleeper_draftbot.services import tracker as tracker_module
from sleeper_draftbot.services.tracker import DraftTracker
from sleeper_draftbot.storage import DataStoreError
from tests.fakes import FakeMessenger, make_draft, make_pick, make_picks

CHANNEL = "C123"


def register(store, draft_id="d1", channel_id=CHANNEL, baseline=0):
    store.registrations[draft_id] = DraftRegistration(
        draft_id=draft_id, channel_id=channel_id, last_known_pick_count=baseline
    )


@pytest.fixture
def live_draft(sleeper):
    sleeper.drafts["d1"] = make_draft(teams=4, rounds=3)
    sleeper.picks["d1"] = make_picks(5)
    return sleeper


class TestLastPickCommand:
    async def test_multiple_new_picks(self, tracker, store, live_draft, emit):
        register(store, baseline=2)

        await tracker.handle_last_pick_command(CHANNEL, emit)

        assert len(emit.messages) == 1
        message = emit.messages[0]
        assert message.kind == "multi_pick"
        assert "3 new picks since last update" in message.text
        for name in ("Player 3", "Player 4", "Player 5"):
            assert name in message.text

    async def test_one_new_pick_uses_single_layout(self, tracker, store, sleeper, emit):
        register(store, baseline=1)
        sleeper.drafts["d1"] = make_draft(teams=4)
        sleeper.picks["d1"] = make_picks(2)

        await tracker.handle_last_pick_command(CHANNEL, emit)

        message = emit.messages[0]
        assert message.kind == "single_pick"
        assert "new picks since last update" not in message.text

    async def test_invalid_picks_fall_back_without_delta(
        self, tracker, store, sleeper, emit, monkeypatch
    ):
        register(store, baseline=1)
        sleeper.drafts["d1"] = make_draft(teams=4)
        sleeper.picks["d1"] = [make_pick(1), make_pick(3), make_pick(2, last="Latest")]

        def fail(*args, **kwargs):
            raise AssertionError("delta calculator should not run")

        monkeypatch.setattr(tracker_module, "compute_new_picks", fail)

        await tracker.handle_last_pick_command(CHANNEL, emit)

        message = emit.messages[0]
        assert message.kind == "single_pick"
        assert "Player Latest" in message.text

    async def test_pre_draft(self, tracker, store, sleeper, emit, monkeypatch):
        register(store)
        sleeper.drafts["d1"] = make_draft(status="pre_draft")
        sleeper.picks["d1"] = []

        async def no_lookup(user_ids):
            raise AssertionError("identities should not be resolved")

        monkeypatch.setattr(tracker.identities, "resolve_many", no_lookup)

        await tracker.handle_last_pick_command(CHANNEL, emit)

        assert emit.texts == ["The draft for ID `d1` has not started yet."]

    async def test_store_failure(self, tracker, store, sleeper, emit):
        store.fail_reads = DataStoreError("unreachable")
        sleeper.errors["get_draft"] = AssertionError("draft API should not be called")
        sleeper.errors["get_draft_picks"] = AssertionError("draft API should not be called")

        await tracker.handle_last_pick_command(CHANNEL, emit)

        assert emit.texts == [messages.CONFIGURATION_READ_ERROR]

    async def test_no_registration(self, tracker, emit):
        await tracker.handle_last_pick_command(CHANNEL, emit)
        assert emit.texts == [messages.NO_DRAFT_REGISTERED]

    async def test_draft_not_found(self, tracker, store, emit):
        register(store)
        await tracker.handle_last_pick_command(CHANNEL, emit)
        assert emit.texts == [messages.draft_not_found("d1")]

    async def test_no_picks_started(self, tracker, store, sleeper, emit):
        register(store)
        sleeper.drafts["d1"] = make_draft()
        sleeper.picks["d1"] = []

        await tracker.handle_last_pick_command(CHANNEL, emit)

        assert emit.texts == [messages.draft_not_started("d1")]

    async def test_transport_failure(self, tracker, store, live_draft, emit):
        register(store, baseline=2)
        live_draft.errors["get_draft_picks"] = httpx.ConnectError("boom")

        await tracker.handle_last_pick_command(CHANNEL, emit)

        assert emit.texts == [messages.draft_fetch_failed("d1")]
        assert store.saves == []

    async def test_invalid_baseline_shows_latest_pick(self, tracker, store, live_draft, emit):
        register(store, baseline="junk")

        await tracker.handle_last_pick_command(CHANNEL, emit)

        message = emit.messages[0]
        assert message.kind == "single_pick"
        assert message.pick_no == 5

    async def test_unchanged_draft_shows_latest_pick(self, tracker, store, live_draft, emit):
        register(store, baseline=5)

        await tracker.handle_last_pick_command(CHANNEL, emit)

        assert emit.messages[0].kind == "single_pick"
        assert emit.messages[0].pick_no == 5

    async def test_delta_failure_falls_back(self, tracker, store, live_draft, emit, monkeypatch):
        register(store, baseline=2)

        def explode(*args, **kwargs):
            raise RuntimeError("bad delta")

        monkeypatch.setattr(tracker_module, "compute_new_picks", explode)

        await tracker.handle_last_pick_command(CHANNEL, emit)

        assert emit.messages[0].kind == "single_pick"

    async def test_disabled_multi_pick(self, sleeper, store, identities, live_draft, emit):
        register(store, baseline=2)
        tracker = DraftTracker(
            client=sleeper,
            store=store,
            identities=identities,
            config=MultiPickConfig(multi_pick_enabled=False),
        )

        await tracker.handle_last_pick_command(CHANNEL, emit)

        assert emit.messages[0].kind == "single_pick"

    async def test_never_persists(self, tracker, store, live_draft, emit):
        register(store, baseline=2)

        await tracker.handle_last_pick_command(CHANNEL, emit)

        assert store.saves == []
        assert store.registrations["d1"].last_known_pick_count == 2


class TestDraftMonitor:
    async def test_posts_and_advances_baseline(self, tracker, store, live_draft, messenger):
        register(store, baseline=2)

        await tracker.check_draft_for_updates()

        assert len(messenger.posts) == 1
        channel_id, message = messenger.posts[0]
        assert channel_id == CHANNEL
        assert message.kind == "multi_pick"
        assert store.registrations["d1"].last_known_pick_count == 5

    async def test_mentions_next_picker(self, tracker, store, live_draft, messenger):
        register(store, baseline=4)
        await store.save_player_mapping("u3", "U0000003", "carol")

        await tracker.check_draft_for_updates()

        _, message = messenger.posts[0]
        assert message.text.endswith("Next up: <@U0000003>")

    async def test_no_new_picks_is_quiet(self, tracker, store, live_draft, messenger):
        register(store, baseline=5)

        await tracker.check_draft_for_updates()

        assert messenger.posts == []
        assert store.saves == []

    async def test_pre_draft_is_quiet(self, tracker, store, sleeper, messenger):
        register(store)
        sleeper.drafts["d1"] = make_draft(status="pre_draft")
        sleeper.picks["d1"] = []

        await tracker.check_draft_for_updates()

        assert messenger.posts == []

    async def test_one_failing_draft_does_not_block_others(
        self, sleeper, store, identities, config
    ):
        messenger = FakeMessenger(fail_channels={"C-broken"})
        tracker = DraftTracker(sleeper, store, identities, config, messenger)
        for draft_id, channel_id in (("d1", "C-broken"), ("d2", "C-ok")):
            register(store, draft_id=draft_id, channel_id=channel_id, baseline=0)
            sleeper.drafts[draft_id] = make_draft()
            sleeper.picks[draft_id] = make_picks(3)

        await tracker.check_draft_for_updates()

        assert [channel for channel, _ in messenger.posts] == ["C-ok"]
        assert store.registrations["d2"].last_known_pick_count == 3
        # Not persisted without a successful post
        assert store.registrations["d1"].last_known_pick_count == 0

    async def test_stale_baseline_is_not_overwritten(self, tracker, store, live_draft, messenger):
        register(store, baseline=2)
        registration = store.registrations["d1"]
        # Another sweep moved the baseline after this one read it
        register(store, baseline=4)

        posted = await tracker.check_draft(registration)

        assert posted is True
        assert store.registrations["d1"].last_known_pick_count == 4

    async def test_requires_messenger(self, sleeper, store, identities, config):
        tracker = DraftTracker(sleeper, store, identities, config)
        with pytest.raises(RuntimeError):
            await tracker.check_draft(DraftRegistration(draft_id="d1", channel_id=CHANNEL))
