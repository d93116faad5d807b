"""
Pick Delta Calculator

Works out which picks are new since the last announced pick count, and
checks that a pick list from Sleeper is well formed before it is trusted.
"""

import math
from collections.abc import Sequence
from typing import Any

from sleeper_draftbot.models import PickDelta, PickValidation

REQUIRED_PICK_FIELDS = ("round", "picked_by", "metadata")


class PickDataError(Exception):
    """Base class for rejected delta calculator inputs."""


class TypeMismatchError(PickDataError, TypeError):
    """The pick list is not an ordered sequence."""


class InvalidArgumentError(PickDataError, ValueError):
    """The baseline pick count is not a non-negative integer."""


def _is_pick_sequence(picks: Any) -> bool:
    return isinstance(picks, Sequence) and not isinstance(picks, (str, bytes, bytearray))


def _as_count(value: Any) -> int | None:
    """Return ``value`` as a non-negative int, or None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and value >= 0:
        return int(value)
    return None


def _missing(pick: dict, field: str) -> bool:
    return pick.get(field) in (None, "")


def compute_new_picks(picks: Sequence[dict], last_known_count: int) -> PickDelta:
    """
    Slice off the picks made since ``last_known_count``.

    A baseline larger than the pick list is allowed and yields no new
    picks; Sleeper can briefly report fewer picks than were announced.

    Raises:
        TypeMismatchError: picks is not a list-like sequence
        InvalidArgumentError: last_known_count is not a non-negative integer
    """
    if not _is_pick_sequence(picks):
        raise TypeMismatchError(f"Picks must be a sequence, got {type(picks).__name__}")

    count = _as_count(last_known_count)
    if count is None:
        raise InvalidArgumentError(
            f"Last known pick count must be a non-negative integer, got {last_known_count!r}"
        )

    start_index = min(count, len(picks))
    new_picks = list(picks[start_index:])
    has_new_picks = len(new_picks) > 0

    return PickDelta(
        new_picks=new_picks,
        start_index=start_index,
        end_index=len(picks) - 1 if has_new_picks else start_index,
        count=len(new_picks),
        has_new_picks=has_new_picks,
    )


def validate_picks(picks: Any, last_known_count: Any) -> PickValidation:
    """
    Check a pick list and baseline before computing a delta. Never raises.

    Picks must hold ``pick_no == index + 1`` throughout; anything else
    (gaps, duplicates, reordering) counts as out of chronological order.
    """
    if not _is_pick_sequence(picks):
        return PickValidation(is_valid=False, error="Picks data must be a list")

    count = _as_count(last_known_count)
    if count is None:
        return PickValidation(
            is_valid=False, error="Last known pick count must be a non-negative integer"
        )

    if count > len(picks):
        return PickValidation(
            is_valid=False, error="Last known pick count is greater than current pick count"
        )

    for index, pick in enumerate(picks):
        if not isinstance(pick, dict) or _missing(pick, "pick_no"):
            return PickValidation(
                is_valid=False, error=f"Pick at index {index} is missing the pick_no field"
            )

    for index, pick in enumerate(picks):
        if pick["pick_no"] != index + 1:
            return PickValidation(is_valid=False, error="Picks are not in chronological order")

    for index, pick in enumerate(picks):
        if any(_missing(pick, field) for field in REQUIRED_PICK_FIELDS):
            return PickValidation(
                is_valid=False,
                error=(
                    f"Pick at index {index} is missing required fields "
                    "(metadata, picked_by, or round)"
                ),
            )

    return PickValidation(is_valid=True)
