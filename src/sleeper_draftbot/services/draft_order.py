"""
Draft Order Resolver

Works out who is on the clock for linear, snake and reversal-round drafts.
"""

from sleeper_draftbot.models import DRAFT_COMPLETE, Draft


def user_for_slot(slot: int, draft_order: dict[str, int]) -> str | None:
    """Reverse lookup of a draft slot to the participant holding it."""
    for user_id, user_slot in draft_order.items():
        if user_slot == slot:
            return user_id
    return None


def slot_for_pick(picks_made: int, draft: Draft) -> int | None:
    """
    Draft slot that makes the pick after ``picks_made`` picks.

    Returns None once every pick in the draft has been made.
    """
    team_count = draft.team_count
    if team_count == 0 or picks_made >= draft.total_picks:
        return None

    round_num = picks_made // team_count + 1
    slot_in_round = picks_made % team_count + 1

    if draft.type != "snake":
        return slot_in_round

    reversed_round = round_num % 2 == 0
    # 3RR-style drafts flip the snake from the reversal round onward
    reversal_round = draft.settings.reversal_round
    if reversal_round > 0 and round_num >= reversal_round:
        reversed_round = not reversed_round

    if reversed_round:
        return team_count - slot_in_round + 1
    return slot_in_round


def next_picker(picks_made: int, draft: Draft) -> str:
    """User ID on the clock after ``picks_made`` picks, or DRAFT_COMPLETE."""
    slot = slot_for_pick(picks_made, draft)
    if slot is None:
        return DRAFT_COMPLETE
    # A slot nobody holds means the order is broken; treat as finished
    return user_for_slot(slot, draft.draft_order) or DRAFT_COMPLETE


def pick_in_round(pick_no: int, team_count: int) -> int:
    if team_count <= 0:
        return pick_no
    return (pick_no - 1) % team_count + 1


def pick_label(round_num: int, pick_no: int, team_count: int) -> str:
    """Render a pick as ``round.NN``, e.g. ``2.07``."""
    return f"{round_num}.{pick_in_round(pick_no, team_count):02d}"
