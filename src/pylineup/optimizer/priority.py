"""Actual-usage priority ordering for the ``full_pos`` pass."""

from __future__ import annotations

from typing import Tuple

from pylineup.models import PlayerDay

TIER_STARTED = 5
TIER_PLAYED_ACTIVE = 4
TIER_PLAYED_BENCHED = 3
TIER_IDLE_ACTIVE = 2
TIER_IDLE_BENCHED = 1


def priority_tier(player: PlayerDay) -> int:
    if player.started:
        return TIER_STARTED
    if player.played:
        return TIER_PLAYED_ACTIVE if player.in_active_lineup else TIER_PLAYED_BENCHED
    return TIER_IDLE_ACTIVE if player.in_active_lineup else TIER_IDLE_BENCHED


def priority_key(player: PlayerDay) -> Tuple[int, float]:
    """Tier first, rating second; no rating can lift a player over a higher tier."""

    return priority_tier(player), player.effective_rating


def best_order_key(player: PlayerDay) -> Tuple[int, float]:
    """Scan order for the ``best_pos`` pass: players who played first, then by rating."""

    return (0 if player.played else 1), -player.effective_rating
