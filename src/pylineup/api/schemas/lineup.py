from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from pylineup.config.roster import DEFAULT_RULES_KEY
from pylineup.models import OptimizedPlayerDay, PlayerDay
from pylineup.optimizer import Assignment, LineupStats


class SlotResponse(BaseModel):
    label: str
    eligible_positions: List[str]


class RulesResponse(BaseModel):
    league: str
    slots: List[SlotResponse]


class AssignmentSummary(BaseModel):
    status: str
    proven_optimal: bool
    total: float
    filled: int
    unfilled_slots: List[str]
    nodes: int

    @classmethod
    def from_assignment(cls, assignment: Assignment) -> "AssignmentSummary":
        return cls(
            status=assignment.status,
            proven_optimal=assignment.proven_optimal,
            total=assignment.total,
            filled=assignment.filled,
            unfilled_slots=[slot.label for slot in assignment.unfilled_slots()],
            nodes=assignment.nodes,
        )


class LineupStatsResponse(BaseModel):
    full_rating: float
    best_rating: float
    improvement_points: float
    improvement_percent: float

    @classmethod
    def from_stats(cls, stats: LineupStats) -> "LineupStatsResponse":
        return cls(
            full_rating=stats.full_rating,
            best_rating=stats.best_rating,
            improvement_points=stats.improvement_points,
            improvement_percent=stats.improvement_percent,
        )


class LineupOptimizeRequest(BaseModel):
    players: List[PlayerDay]
    rules: str = Field(default=DEFAULT_RULES_KEY)
    node_limit: Optional[int] = Field(default=None, ge=1, le=10_000_000)


class LineupOptimizeResponse(BaseModel):
    players: List[OptimizedPlayerDay]
    full: AssignmentSummary
    best: AssignmentSummary
    stats: LineupStatsResponse
