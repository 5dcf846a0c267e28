"""Upper bounds used to prove a lineup optimal."""

from __future__ import annotations

import heapq
from typing import Iterable, Optional, Sequence

from pylineup.models import PlayerDay

from .assignment import Assignment

# Ratings arrive rounded to two decimals upstream.
OPTIMALITY_EPSILON = 0.01


def top_k_sum(ratings: Iterable[float], k: int) -> float:
    """Sum of the ``k`` largest ratings, with negatives counted as zero."""

    if k <= 0:
        return 0.0
    return sum(max(0.0, value) for value in heapq.nlargest(k, ratings))


def theoretical_max(players: Sequence[PlayerDay], k: int) -> float:
    """Best total any assignment of ``k`` slots could reach, eligibility ignored."""

    return top_k_sum((player.effective_rating for player in players), k)


def is_optimal(
    assignment: Assignment,
    players: Sequence[PlayerDay],
    *,
    epsilon: float = OPTIMALITY_EPSILON,
    bound: Optional[float] = None,
) -> bool:
    """True when ``assignment`` already reaches the top-K upper bound."""

    if bound is None:
        bound = theoretical_max(players, len(assignment.slots))
    return abs(assignment.total - bound) < epsilon
