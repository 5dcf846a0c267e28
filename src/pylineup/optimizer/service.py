"""Dual-pass lineup optimization for a single team-day roster."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import List, Optional, Sequence, Tuple, Union

from pylineup.config.roster import (
    BENCH,
    DEFAULT_RULES_KEY,
    INACTIVE_SLOTS,
    LineupRules,
    SlotSpec,
    get_rules,
)
from pylineup.models import OptimizedPlayerDay, PlayerDay

from .assignment import STATUS_BOUND, Assignment
from .bounds import is_optimal, theoretical_max
from .greedy import SortKey, assign_greedy, rating_key
from .priority import best_order_key, priority_key
from .search import solve_optimal


logger = logging.getLogger(__name__)

RulesArg = Union[LineupRules, str, None]


@dataclass(frozen=True)
class LineupStats:
    full_rating: float
    best_rating: float
    improvement_points: float
    improvement_percent: float


@dataclass(frozen=True)
class LineupOutcome:
    """Annotated players plus both assignments, indexed by input position."""

    players: Tuple[OptimizedPlayerDay, ...]
    full: Assignment
    best: Assignment

    def stats(self) -> LineupStats:
        return lineup_stats(self.players)


def resolve_rules(rules: RulesArg) -> LineupRules:
    if rules is None:
        return get_rules(DEFAULT_RULES_KEY)
    if isinstance(rules, str):
        return get_rules(rules)
    return rules


def find_best_lineup(
    players: Sequence[PlayerDay],
    slots: Sequence[SlotSpec],
    *,
    validate: bool = True,
    key: SortKey = rating_key,
    node_limit: Optional[int] = None,
) -> Assignment:
    """Greedy fill, then exhaustive search only when greedy misses the upper bound.

    With ``validate=False`` the greedy result is returned as-is; the
    actual-usage pass relies on this because its tiered key already fixes the
    placement.
    """

    greedy = assign_greedy(players, slots, key=key)
    if not validate:
        return greedy

    bound = theoretical_max(players, len(greedy.slots))
    if is_optimal(greedy, players, bound=bound):
        return greedy.with_status(STATUS_BOUND)

    logger.debug(
        "Greedy total %.2f below bound %.2f for %s players; running exhaustive search",
        greedy.total,
        bound,
        len(players),
    )
    return solve_optimal(players, greedy.slots, incumbent=greedy, node_limit=node_limit)


def _best_pass(
    players: Sequence[PlayerDay],
    slots: Sequence[SlotSpec],
    node_limit: Optional[int],
) -> Assignment:
    order = sorted(range(len(players)), key=lambda index: best_order_key(players[index]))
    ordered = [players[index] for index in order]
    result = find_best_lineup(ordered, slots, node_limit=node_limit)
    picks = tuple(order[pick] if pick is not None else None for pick in result.picks)
    return replace(result, picks=picks)


def _annotate(player: PlayerDay, full_pos: str, best_pos: str) -> OptimizedPlayerDay:
    data = player.model_dump()
    data.update(
        full_pos=full_pos,
        best_pos=best_pos,
        missed_start=(not player.started and player.played and full_pos not in INACTIVE_SLOTS),
        bad_start=(player.started and best_pos == BENCH),
    )
    return OptimizedPlayerDay.model_validate(data)


def solve_lineup(
    players: Sequence[PlayerDay],
    *,
    rules: RulesArg = None,
    node_limit: Optional[int] = None,
) -> LineupOutcome:
    """Compute ``full_pos`` and ``best_pos`` for every player on the roster."""

    resolved = resolve_rules(rules)
    roster = list(players)

    full = find_best_lineup(roster, resolved.slots, validate=False, key=priority_key)
    best = _best_pass(roster, resolved.slots, node_limit)

    full_labels = full.slot_by_player()
    best_labels = best.slot_by_player()
    annotated = tuple(
        _annotate(player, full_labels.get(index, BENCH), best_labels.get(index, BENCH))
        for index, player in enumerate(roster)
    )
    return LineupOutcome(players=annotated, full=full, best=best)


def optimize_lineup(
    players: Sequence[PlayerDay],
    *,
    rules: RulesArg = None,
    node_limit: Optional[int] = None,
) -> List[OptimizedPlayerDay]:
    """Return the roster annotated with ``full_pos`` and ``best_pos``."""

    return list(solve_lineup(players, rules=rules, node_limit=node_limit).players)


def lineup_stats(players: Sequence[OptimizedPlayerDay]) -> LineupStats:
    full_rating = sum(p.effective_rating for p in players if p.full_pos != BENCH)
    best_rating = sum(p.effective_rating for p in players if p.best_pos != BENCH)
    improvement = best_rating - full_rating
    percent = (improvement / full_rating) * 100 if full_rating > 0 else 0.0
    return LineupStats(
        full_rating=full_rating,
        best_rating=best_rating,
        improvement_points=improvement,
        improvement_percent=percent,
    )
