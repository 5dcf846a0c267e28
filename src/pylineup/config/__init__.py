"""Configuration helpers for lineup slots and roster positions."""

from .roster import (
    BENCH,
    DAILY_SLOT_ALIASES,
    DEFAULT_RULES_KEY,
    GOALIE,
    INACTIVE_SLOTS,
    PLAYER_POSITIONS,
    SKATER_POSITIONS,
    UTIL,
    LineupRules,
    SlotSpec,
    get_rules,
    iter_rules,
    ordered_slots,
)

__all__ = [
    "BENCH",
    "DAILY_SLOT_ALIASES",
    "DEFAULT_RULES_KEY",
    "GOALIE",
    "INACTIVE_SLOTS",
    "PLAYER_POSITIONS",
    "SKATER_POSITIONS",
    "UTIL",
    "LineupRules",
    "SlotSpec",
    "get_rules",
    "iter_rules",
    "ordered_slots",
]
