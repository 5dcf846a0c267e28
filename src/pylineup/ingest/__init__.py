"""Input adapters that normalize raw player-day data."""

from pylineup.models import parse_positions

from .player_days import (
    DEFAULT_PLAYER_DAY_MAPPING,
    PlayerDayRow,
    group_by_team_day,
    load_player_day_csv,
    load_player_days,
    parse_date,
    roster_add_flags,
    rows_to_player_days,
)

__all__ = [
    "DEFAULT_PLAYER_DAY_MAPPING",
    "PlayerDayRow",
    "group_by_team_day",
    "load_player_day_csv",
    "load_player_days",
    "parse_date",
    "parse_positions",
    "roster_add_flags",
    "rows_to_player_days",
]
