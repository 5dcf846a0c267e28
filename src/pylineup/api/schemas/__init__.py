"""Pydantic models for API I/O."""

from .lineup import (
    AssignmentSummary,
    LineupOptimizeRequest,
    LineupOptimizeResponse,
    LineupStatsResponse,
    RulesResponse,
    SlotResponse,
)
from .batch import BatchPlayerResponse, LineupBatchResponse

__all__ = [
    "AssignmentSummary",
    "BatchPlayerResponse",
    "LineupBatchResponse",
    "LineupOptimizeRequest",
    "LineupOptimizeResponse",
    "LineupStatsResponse",
    "RulesResponse",
    "SlotResponse",
]
