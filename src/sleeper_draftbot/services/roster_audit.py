"""
Roster Lineup Audit Service

Flags starting lineup problems for every roster in a league: empty slots,
starters on bye, and starters with a serious injury designation.
Bench players are never inspected, nor are starters whose game this
week is already final.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Collection, Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

import httpx

from sleeper_draftbot import messages
from sleeper_draftbot.clients.slack import SlackMessenger
from sleeper_draftbot.clients.sleeper import SleeperAPIError, SleeperClient
from sleeper_draftbot.models import (
    EmptySlot,
    FlaggedPlayer,
    League,
    LeagueRegistration,
    LeagueRosterAnalysis,
    Player,
    Roster,
    RosterIssues,
    RosterReport,
    RosterReportMessage,
    ScheduledGame,
    SlackMessage,
    TextMessage,
)
from sleeper_draftbot.models.messages import context, divider, fields, section
from sleeper_draftbot.services.bye_weeks import get_bye_weeks
from sleeper_draftbot.storage import DraftStore

logger = logging.getLogger(__name__)

Emit = Callable[[SlackMessage], Awaitable[Any]]

# Questionable is left out on purpose: those players usually suit up
SERIOUS_INJURY_STATUSES = {
    "Out": "OUT",
    "Doubtful": "DOUBTFUL",
    "IR": "IR",
    "PUP": "PUP",
    "Sus": "SUSPENDED",
    "Suspended": "SUSPENDED",
}

DEFAULT_STARTING_POSITIONS = ["QB", "RB", "RB", "WR", "WR", "TE", "FLEX", "K", "DEF"]

GUILLOTINE_KEYWORDS = ("guillotine", "chopping", "elimination", "survival", "last man", "survivor")

EMPTY_PLAYER_IDS = (None, "", "0")

# Slack rejects messages with more than 50 blocks
MAX_REPORT_BLOCKS = 50
# League header, divider, alert, summary, divider, closing divider, timestamp
REPORT_SCAFFOLD_BLOCKS = 7
# Owner section and issue fields, plus the divider before the next roster
BLOCKS_PER_REPORT = 3


def slot_position(index: int, positions: list[str] | None = None) -> str:
    """Label for the starting slot at 0-based ``index``."""
    lineup = positions or DEFAULT_STARTING_POSITIONS
    if index < len(lineup):
        return lineup[index]
    return f"Slot {index + 1}"


def injury_designation(player: Player) -> str | None:
    """Display label for a serious injury, None for healthy or questionable."""
    if not player.injury_status:
        return None
    return SERIOUS_INJURY_STATUSES.get(player.injury_status)


def analyze_roster(
    roster: Roster,
    players: Mapping[str, Player],
    current_week: int,
    bye_weeks: Mapping[str, int],
    positions: list[str] | None = None,
    played_teams: Collection[str] = (),
) -> RosterIssues:
    """
    Inspect one roster's starters.

    Starters whose team is in ``played_teams`` are skipped; their game is
    over and the lineup can no longer change.
    """
    issues = RosterIssues()

    for index, player_id in enumerate(roster.starters or []):
        slot = index + 1
        position = slot_position(index, positions)

        if player_id in EMPTY_PLAYER_IDS:
            issues.empty_slots.append(EmptySlot(slot_index=slot, position=position))
            continue

        player = players.get(player_id)
        if player is None:
            issues.empty_slots.append(
                EmptySlot(slot_index=slot, position=position, issue="Player not found")
            )
            continue

        if player.team and player.team in played_teams:
            continue

        flagged = FlaggedPlayer(
            player_id=player_id,
            name=player.display_name,
            position=player.position,
            team=player.team,
            slot_index=slot,
        )

        if player.team and bye_weeks.get(player.team) == current_week:
            issues.bye_week_players.append(flagged)

        designation = injury_designation(player)
        if designation:
            issues.injured_players.append(
                flagged.model_copy(update={"injury_status": designation})
            )

    return issues


def teams_that_played(games: Iterable[ScheduledGame]) -> set[str]:
    """Teams whose game this week is final."""
    return {team for game in games if game.is_final for team in game.teams}


def detect_guillotine_league(league: League, rosters: list[Roster]) -> bool:
    """Guillotine leagues leave eliminated teams with empty rosters."""
    if any(roster.is_empty for roster in rosters):
        return True
    name = league.name.lower()
    return any(keyword in name for keyword in GUILLOTINE_KEYWORDS)


def _issue_fields(issues: RosterIssues) -> list[str]:
    lines = []
    if issues.empty_slots:
        slots = ", ".join(f"{s.position} ({s.issue or 'Empty'})" for s in issues.empty_slots)
        lines.append(f"❌ *Empty Slots:* {slots}")
    if issues.bye_week_players:
        byes = ", ".join(f"{p.name} ({p.position}, {p.team})" for p in issues.bye_week_players)
        lines.append(f"🏖️ *On Bye:* {byes}")
    if issues.injured_players:
        injured = ", ".join(
            f"{p.name} ({p.position}, {p.injury_status})" for p in issues.injured_players
        )
        lines.append(f"🚑 *Injured:* {injured}")
    return lines


def report_block_count(reports_shown: int, truncated: bool) -> int:
    """Blocks an alert needs for ``reports_shown`` rosters."""
    roster_blocks = max(0, BLOCKS_PER_REPORT * reports_shown - 1)
    return REPORT_SCAFFOLD_BLOCKS + roster_blocks + (1 if truncated else 0)


def calculate_safe_report_limit(total: int, max_blocks: int = MAX_REPORT_BLOCKS) -> int:
    """How many flagged rosters fit in one alert, never fewer than one."""
    if total <= 0:
        return 0

    limit = total
    while limit > 1 and report_block_count(limit, limit < total) > max_blocks:
        limit -= 1
    return limit


def format_analysis_message(analysis: LeagueRosterAnalysis) -> RosterReportMessage:
    """Render a league audit as a Slack payload."""
    roster_count = analysis.active_rosters
    league_type = " (Guillotine League)" if analysis.is_guillotine_league else ""
    week = analysis.current_week
    league_header = f"*{analysis.league_name}* ({analysis.current_season})"

    if analysis.rosters_with_issues == 0:
        summary = f"All {roster_count} active starting lineups look good! No issues found."
        return RosterReportMessage(
            league_id=analysis.league_id,
            text=f"{analysis.league_name}: ✅ {summary} (Week {week}){league_type}",
            blocks=[
                section(league_header),
                divider(),
                section(f":white_check_mark: *ROSTER CHECK - WEEK {week}*{league_type}"),
                section(f"🎯 {summary} 🏆"),
            ],
        )

    blocks = [
        section(league_header),
        divider(),
        section(f":warning: *ROSTER ALERT - WEEK {week}*{league_type} :warning:"),
        section(
            f"⚠️ Found issues with *{analysis.rosters_with_issues}* out of "
            f"*{roster_count}* active rosters:"
        ),
        divider(),
    ]
    text_lines = [
        f"{analysis.league_name} - Roster Alert - Week {week}{league_type}: Found issues with "
        f"{analysis.rosters_with_issues} out of {roster_count} active rosters:",
    ]

    shown = calculate_safe_report_limit(len(analysis.roster_reports))
    for index, report in enumerate(analysis.roster_reports):
        issue_lines = _issue_fields(report.issues)
        text_lines.append(f"{report.owner}:")
        text_lines.extend(f"  {line.replace('*', '')}" for line in issue_lines)
        if index >= shown:
            continue
        if index:
            blocks.append(divider())
        blocks.append(section(f"👤 *{report.owner}*"))
        blocks.append(fields(*issue_lines))

    hidden = len(analysis.roster_reports) - shown
    if hidden > 0:
        blocks.append(section(f"_...and {hidden} more rosters with issues_"))

    analyzed_at = analysis.analyzed_at.strftime("%Y-%m-%d %H:%M UTC")
    blocks.extend([divider(), context(f"⏰ Analysis completed at {analyzed_at}")])
    text_lines.append(f"Analysis completed at {analyzed_at}")

    return RosterReportMessage(
        league_id=analysis.league_id, text="\n".join(text_lines), blocks=blocks
    )


class RosterAuditService:
    """
    Service for auditing starting lineups.

    Looks up the current NFL week, then checks every roster in a league.
    """

    def __init__(
        self,
        client: SleeperClient,
        bye_weeks_for: Callable[[str], Mapping[str, int]] = get_bye_weeks,
    ):
        self.client = client
        self.bye_weeks_for = bye_weeks_for

    async def _played_teams(self, season: str, week: int) -> set[str]:
        """Teams already done this week; empty when the schedule is unavailable."""
        try:
            games = await self.client.get_week_schedule(season, week)
        except (SleeperAPIError, httpx.HTTPError):
            logger.warning(
                "Schedule unavailable for %s week %s, checking every starter",
                season,
                week,
                exc_info=True,
            )
            return set()
        return teams_that_played(games)

    async def analyze_league(self, league_id: str) -> LeagueRosterAnalysis:
        """
        Audit every roster in a league for the current week.

        Raises:
            SleeperAPIError: the league or NFL state can't be found
        """
        league, nfl_state = await asyncio.gather(
            self.client.get_league(league_id),
            self.client.get_nfl_state(),
        )
        if league is None:
            raise SleeperAPIError(f"League not found: {league_id}")
        if nfl_state is None:
            raise SleeperAPIError("NFL state unavailable")

        current_week = nfl_state.current_week
        # Bye weeks follow the league's season, not the NFL state's
        bye_weeks = self.bye_weeks_for(league.season)

        rosters, users, players, played_teams = await asyncio.gather(
            self.client.get_league_rosters(league_id),
            self.client.get_league_users(league_id),
            self.client.get_all_players(),
            self._played_teams(league.season, current_week),
        )
        owners = {user.user_id: user.name for user in users}

        is_guillotine = detect_guillotine_league(league, rosters)
        active_rosters = [r for r in rosters if not (is_guillotine and r.is_empty)]
        logger.info(
            "Analyzing %d rosters in league %s for week %s",
            len(active_rosters),
            league_id,
            current_week,
        )

        reports = []
        for roster in active_rosters:
            issues = analyze_roster(
                roster,
                players,
                current_week,
                bye_weeks,
                league.starting_positions,
                played_teams=played_teams,
            )
            if issues.has_issues:
                reports.append(
                    RosterReport(
                        roster_id=roster.roster_id,
                        owner=owners.get(roster.owner_id or "", "Unknown Owner"),
                        owner_id=roster.owner_id,
                        issues=issues,
                    )
                )

        return LeagueRosterAnalysis(
            league_id=league_id,
            league_name=league.name,
            current_week=current_week,
            current_season=league.season,
            total_rosters=len(rosters),
            active_rosters=len(active_rosters),
            is_guillotine_league=is_guillotine,
            roster_reports=reports,
            analyzed_at=datetime.now(timezone.utc),
        )

    async def report_leagues(self, leagues: list[LeagueRegistration], emit: Emit) -> None:
        """Emit one audit per league; a failing league gets a failure notice."""
        for league in leagues:
            try:
                analysis = await self.analyze_league(league.league_id)
            except Exception as e:
                logger.exception("Error analyzing league %s", league.league_id)
                await emit(TextMessage(text=messages.league_analysis_failed(league.league_name, e)))
                continue
            await emit(format_analysis_message(analysis))

    async def check_all_channels(self, store: DraftStore, messenger: SlackMessenger) -> None:
        """Scheduled sweep: audit the leagues of every channel concurrently."""
        channels = await store.list_channels_with_leagues()
        if not channels:
            logger.info("No channels with registered leagues found")
            return

        async def check_channel(channel_id: str, leagues: list[LeagueRegistration]) -> None:
            async def emit(message: SlackMessage) -> None:
                await messenger.post(channel_id, message)

            await emit(TextMessage(text=messages.AUTOMATED_ROSTER_CHECK_STARTED))
            await self.report_leagues(leagues, emit)
            await emit(TextMessage(text=messages.AUTOMATED_ROSTER_CHECK_DONE))

        results = await asyncio.gather(
            *(check_channel(cid, leagues) for cid, leagues in channels.items()),
            return_exceptions=True,
        )
        for channel_id, result in zip(channels, results):
            if isinstance(result, BaseException):
                logger.error("Error processing channel %s", channel_id, exc_info=result)
