"""Business logic services."""

from sleeper_draftbot.services.draft_order import next_picker, pick_label
from sleeper_draftbot.services.formatter import (
    calculate_safe_pick_limit,
    estimate_block_count,
    format_multi_pick,
    format_single_pick,
)
from sleeper_draftbot.services.identity import IdentityDirectory, IdentityResolver
from sleeper_draftbot.services.picks import (
    InvalidArgumentError,
    PickDataError,
    TypeMismatchError,
    compute_new_picks,
    validate_picks,
)
from sleeper_draftbot.services.roster_audit import RosterAuditService, format_analysis_message
from sleeper_draftbot.services.tracker import DraftTracker

__all__ = [
    # Picks
    "compute_new_picks",
    "validate_picks",
    "PickDataError",
    "TypeMismatchError",
    "InvalidArgumentError",
    # Draft order
    "next_picker",
    "pick_label",
    # Formatting
    "format_single_pick",
    "format_multi_pick",
    "calculate_safe_pick_limit",
    "estimate_block_count",
    # Identity
    "IdentityResolver",
    "IdentityDirectory",
    # Tracker
    "DraftTracker",
    # Roster audit
    "RosterAuditService",
    "format_analysis_message",
]
