"""
NFL bye weeks by season, keyed by Sleeper team abbreviation.
"""

import logging

logger = logging.getLogger(__name__)

NFL_BYE_WEEKS_2025 = {
    "DET": 5, "LAC": 5, "PHI": 5, "TEN": 5,
    "KC": 6, "LAR": 6, "MIA": 6, "MIN": 6,
    "CHI": 7, "DAL": 7,
    "CLE": 9, "GB": 9, "LV": 9, "SEA": 9,
    "ATL": 10, "DEN": 10, "IND": 10, "NE": 10,
    "BAL": 11, "HOU": 11, "WAS": 11, "NYJ": 11,
    "ARI": 12, "CAR": 12, "NYG": 12, "TB": 12,
    "BUF": 14, "CIN": 14, "JAX": 14, "NO": 14, "PIT": 14, "SF": 14,
}  # fmt: skip

NFL_BYE_WEEKS_BY_SEASON: dict[str, dict[str, int]] = {
    "2025": NFL_BYE_WEEKS_2025,
}


def get_bye_weeks(season: str | int) -> dict[str, int]:
    """Team -> bye week for a season; empty when the season isn't known."""
    bye_weeks = NFL_BYE_WEEKS_BY_SEASON.get(str(season))
    if bye_weeks is None:
        logger.warning("No bye week data for the %s season", season)
        return {}
    return bye_weeks
