"""Single-pass greedy slot filling."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

from pylineup.config.roster import SlotSpec, ordered_slots
from pylineup.models import PlayerDay

from .assignment import STATUS_HEURISTIC, Assignment, rating_total
from .eligibility import is_eligible

SortKey = Callable[[PlayerDay], Any]


def rating_key(player: PlayerDay) -> float:
    return player.effective_rating


def assign_greedy(
    players: Sequence[PlayerDay],
    slots: Sequence[SlotSpec],
    *,
    key: SortKey = rating_key,
) -> Assignment:
    """Fill slots most-constrained-first with the best unused eligible player.

    Only a strictly higher ``key`` displaces the current pick, so exact ties
    resolve to whichever player comes first in ``players``.
    """

    order = ordered_slots(slots)
    used: set[int] = set()
    picks: List[Optional[int]] = []
    for slot in order:
        best_index: Optional[int] = None
        best_key: Any = None
        for index, player in enumerate(players):
            if index in used or not is_eligible(player, slot):
                continue
            candidate = key(player)
            if best_index is None or candidate > best_key:
                best_index = index
                best_key = candidate
        if best_index is not None:
            used.add(best_index)
        picks.append(best_index)

    return Assignment(
        slots=order,
        picks=tuple(picks),
        total=rating_total(players, picks),
        status=STATUS_HEURISTIC,
    )
