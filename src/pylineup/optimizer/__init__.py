"""Lineup optimizer: greedy fill with a branch-and-bound fallback."""

from .assignment import Assignment
from .batch import BatchOutput, optimize_team_days
from .bounds import is_optimal, theoretical_max
from .eligibility import is_eligible
from .greedy import assign_greedy
from .priority import priority_key, priority_tier
from .search import DEFAULT_NODE_LIMIT, solve_optimal
from .service import LineupOutcome, LineupStats, find_best_lineup, lineup_stats, optimize_lineup, solve_lineup

__all__ = [
    "Assignment",
    "BatchOutput",
    "DEFAULT_NODE_LIMIT",
    "LineupOutcome",
    "LineupStats",
    "assign_greedy",
    "find_best_lineup",
    "is_eligible",
    "is_optimal",
    "lineup_stats",
    "optimize_lineup",
    "optimize_team_days",
    "priority_key",
    "priority_tier",
    "solve_lineup",
    "solve_optimal",
    "theoretical_max",
]
