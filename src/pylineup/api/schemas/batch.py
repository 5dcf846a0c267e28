from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from pylineup.models import OptimizedPlayerDay


class BatchPlayerResponse(BaseModel):
    player: OptimizedPlayerDay
    roster_add: Optional[bool] = None


class LineupBatchResponse(BaseModel):
    team_days: int
    skipped_records: int
    truncated: int
    failures: List[str]
    elapsed: float
    players: List[BatchPlayerResponse]
    message: str | None = None
