"""
Pick Message Formatter

Builds Slack payloads for draft picks: a single-pick alert for the latest
pick, or a batched alert when several picks landed since the last update.
Batched alerts are capped so the block count stays under Slack's limit.
"""

from collections.abc import Sequence
from typing import Any

from sleeper_draftbot.config import MultiPickConfig
from sleeper_draftbot.models import DRAFT_COMPLETE, Draft, MultiPickMessage, SinglePickMessage
from sleeper_draftbot.models.messages import divider, fields, section
from sleeper_draftbot.services.draft_order import next_picker, pick_label
from sleeper_draftbot.services.identity import IdentityDirectory

DRAFT_COMPLETE_TEXT = "The draft is complete!"

# Header, count, divider, closing divider, on-the-clock
SCAFFOLD_BLOCKS = 5
TRUNCATION_BLOCKS = 2


def _player_name(pick: dict[str, Any]) -> str:
    metadata = pick.get("metadata") or {}
    name = f"{metadata.get('first_name') or ''} {metadata.get('last_name') or ''}".strip()
    return name or "Unknown Player"


def _position(pick: dict[str, Any]) -> str:
    metadata = pick.get("metadata") or {}
    return metadata.get("position") or "N/A"


def _label(pick: dict[str, Any], team_count: int) -> str:
    pick_no = pick.get("pick_no")
    round_num = pick.get("round")
    if not isinstance(pick_no, int) or not isinstance(round_num, int):
        return f"{pick_no if pick_no is not None else '?'}"
    return pick_label(round_num, pick_no, team_count)


def _on_the_clock(
    draft: Draft, picks_made: int, identities: IdentityDirectory, notify: bool
) -> str | None:
    """Who picks next, or None once the draft is over."""
    user_id = next_picker(picks_made, draft)
    if user_id == DRAFT_COMPLETE:
        return None
    return identities.mention(user_id) if notify else identities.display_name(user_id)


def _next_up_text(on_clock: str | None) -> str:
    return f"Next up: {on_clock}" if on_clock else DRAFT_COMPLETE_TEXT


def _on_the_clock_block(on_clock: str | None) -> dict[str, Any]:
    return section(f"*On The Clock:* {on_clock or DRAFT_COMPLETE_TEXT}")


def pick_summary(pick: dict[str, Any], draft: Draft, identities: IdentityDirectory) -> str:
    """One-line summary used in batched fallback text."""
    return (
        f"{_label(pick, draft.team_count)}: {_player_name(pick)} ({_position(pick)}) "
        f"by {identities.display_name(pick.get('picked_by'))}"
    )


def format_single_pick(
    draft: Draft,
    picks: Sequence[dict[str, Any]],
    identities: IdentityDirectory,
    notify: bool = False,
) -> SinglePickMessage:
    """Alert for the most recent pick in ``picks``."""
    last_pick = picks[-1]
    label = _label(last_pick, draft.team_count)
    player = _player_name(last_pick)
    position = _position(last_pick)
    picked_by = identities.display_name(last_pick.get("picked_by"))
    on_clock = _on_the_clock(draft, len(picks), identities, notify)

    blocks = [
        section("*PICK ALERT!* :mega:"),
        fields(
            f"*Pick:* `{label}`",
            f"*Player:* `{player} - {position}`",
            f"*Picked By:* {picked_by}",
        ),
        divider(),
        _on_the_clock_block(on_clock),
    ]
    text = (
        f"Pick {label}: {player} ({position}) was selected by {picked_by}. "
        f"{_next_up_text(on_clock)}"
    )
    pick_no = last_pick.get("pick_no")
    return SinglePickMessage(
        text=text, blocks=blocks, pick_no=pick_no if isinstance(pick_no, int) else None
    )


def estimate_block_count(picks_shown: int, config: MultiPickConfig) -> int:
    """Blocks a batched alert needs for ``picks_shown`` picks."""
    pick_blocks = max(0, config.estimated_blocks_per_pick * picks_shown - 1)
    return SCAFFOLD_BLOCKS + pick_blocks + TRUNCATION_BLOCKS


def calculate_safe_pick_limit(total_new: int, config: MultiPickConfig) -> int:
    """How many picks fit in one batched alert, never fewer than one."""
    if total_new <= 0:
        return 0

    limit = min(config.max_picks_to_show, total_new)
    while limit > 1 and estimate_block_count(limit, config) > config.max_message_blocks:
        limit -= 1
    return max(limit, 1)


def format_multi_pick(
    draft: Draft,
    picks: Sequence[dict[str, Any]],
    start_index: int,
    identities: IdentityDirectory,
    config: MultiPickConfig,
    notify: bool = False,
) -> SinglePickMessage | MultiPickMessage:
    """Batched alert for ``picks[start_index:]``."""
    new_picks = list(picks[start_index:])
    if not config.multi_pick_enabled or not new_picks:
        return format_single_pick(draft, picks, identities, notify)

    total_new = len(new_picks)
    shown = calculate_safe_pick_limit(total_new, config)
    displayed = new_picks[:shown]
    hidden = total_new - shown
    on_clock = _on_the_clock(draft, len(picks), identities, notify)

    blocks = [
        section("*MULTIPLE PICKS ALERT!* :rotating_light:"),
        section(f"*{total_new} new picks since last update*"),
        divider(),
    ]
    for index, pick in enumerate(displayed):
        if index:
            blocks.append(divider())
        blocks.append(
            fields(
                f"*Pick:* `{_label(pick, draft.team_count)}`",
                f"*Player:* `{_player_name(pick)} - {_position(pick)}`",
                f"*Picked By:* {identities.display_name(pick.get('picked_by'))}",
            )
        )
    if hidden > 0:
        blocks.append(section(f"_...and {hidden} more picks_"))
    blocks.extend([divider(), _on_the_clock_block(on_clock)])

    summaries = "; ".join(pick_summary(pick, draft, identities) for pick in displayed)
    more = f" (and {hidden} more)" if hidden > 0 else ""
    text = (
        f"{total_new} new picks since last update: {summaries}{more}. "
        f"{_next_up_text(on_clock)}"
    )
    return MultiPickMessage(text=text, blocks=blocks, total_new=total_new, shown=shown)
