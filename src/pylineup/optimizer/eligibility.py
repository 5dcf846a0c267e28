"""Slot eligibility rules."""

from __future__ import annotations

from pylineup.config.roster import GOALIE, SKATER_POSITIONS, UTIL, SlotSpec
from pylineup.models import PlayerDay


def is_eligible(player: PlayerDay, slot: SlotSpec) -> bool:
    """Return True when ``player`` may fill ``slot``."""

    if not player.player_id or not player.positions:
        return False
    positions = set(player.positions)
    if GOALIE in slot.eligible_positions:
        return GOALIE in positions
    if slot.label == UTIL:
        return bool(positions & SKATER_POSITIONS)
    return bool(positions & slot.eligible_positions)
