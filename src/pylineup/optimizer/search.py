"""Exhaustive branch-and-bound lineup search."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Sequence

from pylineup.config.roster import SlotSpec, ordered_slots
from pylineup.models import PlayerDay

from .assignment import STATUS_EXHAUSTIVE, STATUS_TRUNCATED, Assignment, rating_total
from .eligibility import is_eligible
from .greedy import assign_greedy


logger = logging.getLogger(__name__)

DEFAULT_NODE_LIMIT = 1_000_000
_NODE_LIMIT_ENV = "PYLINEUP_NODE_LIMIT"


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def resolve_node_limit(node_limit: Optional[int] = None) -> int:
    """Explicit limit wins, then ``PYLINEUP_NODE_LIMIT``, then the default."""

    if node_limit is not None:
        return max(1, int(node_limit))
    return _env_int(_NODE_LIMIT_ENV, DEFAULT_NODE_LIMIT, min_value=1)


@dataclass
class _Frame:
    depth: int
    used: int
    score: float
    candidates: List[int]
    cursor: int = 0
    expanded: bool = False


def solve_optimal(
    players: Sequence[PlayerDay],
    slots: Sequence[SlotSpec],
    *,
    incumbent: Optional[Assignment] = None,
    node_limit: Optional[int] = None,
) -> Assignment:
    """Return the rating-maximal eligible assignment of ``players`` to ``slots``.

    Depth-first over slots in most-constrained-first order with an explicit
    frame stack. Used players live in an integer bitmask. A branch is cut when
    its running score plus the best ``R`` unused ratings (``R`` = slots left,
    eligibility ignored) cannot beat the incumbent, which starts as the greedy
    fill. A slot is left empty only when no unused eligible player remains.

    When more than ``node_limit`` frames would be visited the search stops and
    the best incumbent so far comes back with status ``truncated``.
    """

    order = ordered_slots(slots)
    limit = resolve_node_limit(node_limit)
    if incumbent is None:
        incumbent = assign_greedy(players, order)
    elif incumbent.slots != order:
        raise ValueError("incumbent was built for a different slot order")

    slot_count = len(order)
    ratings = [player.effective_rating for player in players]
    ranked = sorted(range(len(players)), key=lambda index: ratings[index], reverse=True)
    eligible = [
        [index for index, player in enumerate(players) if is_eligible(player, slot)]
        for slot in order
    ]

    def open_candidates(depth: int, used: int) -> List[int]:
        if depth >= slot_count:
            return []
        return [index for index in eligible[depth] if not (used >> index) & 1]

    def optimistic(used: int, remaining: int) -> float:
        total = 0.0
        taken = 0
        if remaining <= 0:
            return total
        for index in ranked:
            if (used >> index) & 1:
                continue
            value = ratings[index]
            if value <= 0.0:
                break
            total += value
            taken += 1
            if taken == remaining:
                break
        return total

    best_total = incumbent.total
    best_picks = incumbent.picks
    picks: List[Optional[int]] = [None] * slot_count
    stack = [_Frame(0, 0, 0.0, open_candidates(0, 0))]
    nodes = 1
    truncated = False

    while stack:
        frame = stack[-1]
        if frame.depth == slot_count:
            if frame.score > best_total:
                best_total = frame.score
                best_picks = tuple(picks)
            stack.pop()
            continue

        remaining = slot_count - frame.depth - 1
        child: Optional[_Frame] = None
        if not frame.candidates:
            if not frame.expanded:
                frame.expanded = True
                if frame.score + optimistic(frame.used, remaining) > best_total:
                    picks[frame.depth] = None
                    child = _Frame(
                        frame.depth + 1,
                        frame.used,
                        frame.score,
                        open_candidates(frame.depth + 1, frame.used),
                    )
        else:
            while frame.cursor < len(frame.candidates):
                index = frame.candidates[frame.cursor]
                frame.cursor += 1
                used = frame.used | (1 << index)
                score = frame.score + ratings[index]
                if score + optimistic(used, remaining) <= best_total:
                    continue
                picks[frame.depth] = index
                child = _Frame(frame.depth + 1, used, score, open_candidates(frame.depth + 1, used))
                break

        if child is None:
            stack.pop()
            continue
        if nodes >= limit:
            truncated = True
            break
        nodes += 1
        stack.append(child)

    result = Assignment(
        slots=order,
        picks=tuple(best_picks),
        total=rating_total(players, best_picks),
        status=STATUS_TRUNCATED if truncated else STATUS_EXHAUSTIVE,
        nodes=nodes,
    )
    if truncated:
        logger.warning(
            "Lineup search stopped at node cap %s; returning incumbent total %.2f (greedy %.2f)",
            limit,
            result.total,
            incumbent.total,
        )
    else:
        logger.debug(
            "Lineup search finished in %s nodes: total %.2f (greedy %.2f)",
            nodes,
            result.total,
            incumbent.total,
        )
    return result
