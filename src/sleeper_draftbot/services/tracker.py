"""
Draft State Tracker

Announces draft picks in Slack. Two entry points share the same flow
(load registration, fetch draft and picks, pick a layout, emit):

- ``handle_last_pick_command`` answers a user in a channel and never
  changes stored state.
- ``check_draft_for_updates`` sweeps every registered draft, posts new
  picks and moves each draft's pick baseline forward after posting.

Problems with the pick data itself never reach users; they only
downgrade a batched alert to a single-pick alert.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from sleeper_draftbot import messages
from sleeper_draftbot.clients.slack import SlackMessenger
from sleeper_draftbot.clients.sleeper import SleeperClient
from sleeper_draftbot.config import MultiPickConfig
from sleeper_draftbot.models import (
    DRAFT_COMPLETE,
    Draft,
    DraftRegistration,
    SlackMessage,
    TextMessage,
)
from sleeper_draftbot.services.draft_order import next_picker
from sleeper_draftbot.services.formatter import format_multi_pick, format_single_pick
from sleeper_draftbot.services.identity import IdentityResolver
from sleeper_draftbot.services.picks import compute_new_picks, validate_picks
from sleeper_draftbot.storage import DataStoreError, DraftStore, StaleRegistrationError

logger = logging.getLogger(__name__)

Emit = Callable[[SlackMessage], Awaitable[Any]]


class DraftTracker:
    """
    Service for announcing draft picks.

    Holds its collaborators and an immutable multi-pick config snapshot.
    """

    def __init__(
        self,
        client: SleeperClient,
        store: DraftStore,
        identities: IdentityResolver,
        config: MultiPickConfig,
        messenger: SlackMessenger | None = None,
    ):
        self.client = client
        self.store = store
        self.identities = identities
        self.config = config
        self.messenger = messenger

    async def _fetch(self, draft_id: str) -> tuple[Draft | None, list[dict] | None]:
        """Fetch the draft and its picks concurrently."""
        draft, picks = await asyncio.gather(
            self.client.get_draft(draft_id),
            self.client.get_draft_picks(draft_id),
            return_exceptions=True,
        )
        for result in (draft, picks):
            if isinstance(result, BaseException):
                raise result
        return draft, picks

    def _multi_pick_start(self, picks: Sequence[dict], baseline: int | None) -> int | None:
        """
        Index of the first unannounced pick when a batched alert applies.

        Returns None for a single-pick alert: the feature is off, the
        baseline or pick list can't be trusted, or fewer than two picks
        are new.
        """
        if not self.config.multi_pick_enabled or baseline is None:
            return None

        validation = validate_picks(picks, baseline)
        if not validation.is_valid:
            logger.warning("Pick data failed validation: %s", validation.error)
            return None

        try:
            delta = compute_new_picks(picks, baseline)
        except Exception:
            logger.warning("Could not compute new picks, showing latest pick", exc_info=True)
            return None

        if delta.count > 1:
            return delta.start_index
        return None

    async def build_pick_message(
        self,
        draft: Draft,
        picks: Sequence[dict],
        baseline: int | None,
        notify: bool = False,
    ) -> SlackMessage:
        """Choose single or batched layout and render it."""
        start_index = self._multi_pick_start(picks, baseline)
        shown = picks[start_index:] if start_index is not None else picks[-1:]

        user_ids = [pick.get("picked_by") for pick in shown if isinstance(pick, dict)]
        on_clock = next_picker(len(picks), draft)
        if on_clock != DRAFT_COMPLETE:
            user_ids.append(on_clock)
        directory = await self.identities.resolve_many(user_ids)

        if start_index is None:
            return format_single_pick(draft, picks, directory, notify)
        return format_multi_pick(draft, picks, start_index, directory, self.config, notify)

    # ==================== Interactive ====================

    async def handle_last_pick_command(self, channel_id: str, emit: Emit) -> None:
        """Reply in ``channel_id`` with the latest pick(s). Emits exactly once."""
        try:
            registration = await self.store.get_registration_by_channel(channel_id)
        except DataStoreError:
            logger.exception("Could not read registrations for channel %s", channel_id)
            await emit(TextMessage(text=messages.CONFIGURATION_READ_ERROR))
            return

        if registration is None:
            await emit(TextMessage(text=messages.NO_DRAFT_REGISTERED))
            return

        draft_id = registration.draft_id
        try:
            draft, picks = await self._fetch(draft_id)

            if draft is None or picks is None:
                await emit(TextMessage(text=messages.draft_not_found(draft_id)))
                return

            if draft.is_pre_draft or len(picks) == 0:
                await emit(TextMessage(text=messages.draft_not_started(draft_id)))
                return

            message = await self.build_pick_message(draft, picks, registration.baseline)
            await emit(message)
        except Exception:
            logger.exception("Error in last pick command for draft %s", draft_id)
            await emit(TextMessage(text=messages.draft_fetch_failed(draft_id)))

    # ==================== Scheduled ====================

    async def check_draft(self, registration: DraftRegistration) -> bool:
        """
        Post any new picks for one draft and advance its baseline.

        Returns True when an announcement was posted.
        """
        if self.messenger is None:
            raise RuntimeError("DraftTracker needs a SlackMessenger to post updates")

        draft_id = registration.draft_id
        draft, picks = await self._fetch(draft_id)

        if draft is None or picks is None:
            logger.warning("Draft monitor: draft %s or its picks not found", draft_id)
            return False

        if draft.is_pre_draft or len(picks) == 0:
            return False

        baseline = registration.baseline
        if len(picks) <= (baseline or 0):
            return False

        logger.info(
            "Draft monitor: new picks in draft %s, pick count %s -> %s",
            draft_id,
            baseline,
            len(picks),
        )
        message = await self.build_pick_message(draft, picks, baseline, notify=True)
        await self.messenger.post(registration.channel_id, message)

        try:
            await self.store.save_registration(
                draft_id, registration.channel_id, len(picks), expected_count=baseline
            )
        except StaleRegistrationError:
            # Another sweep already moved the baseline; leave its value alone
            logger.warning("Draft monitor: baseline for draft %s changed mid-check", draft_id)
        return True

    async def check_draft_for_updates(self) -> None:
        """Check every registered draft concurrently; failures are only logged."""
        registrations = await self.store.list_registrations()
        if not registrations:
            logger.debug("Draft monitor: no drafts registered")
            return

        results = await asyncio.gather(
            *(self.check_draft(registration) for registration in registrations),
            return_exceptions=True,
        )
        for registration, result in zip(registrations, results):
            if isinstance(result, BaseException):
                logger.error(
                    "Draft monitor: error checking draft %s",
                    registration.draft_id,
                    exc_info=result,
                )
