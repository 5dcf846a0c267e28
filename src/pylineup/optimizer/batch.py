"""Run the lineup optimizer over many team-days, optionally across processes."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import multiprocessing as mp
import time
from typing import Iterable, List, Optional, Sequence, Tuple

from pylineup.config.roster import BENCH, LineupRules
from pylineup.ingest import group_by_team_day
from pylineup.ingest.player_days import TeamDayKey
from pylineup.models import OptimizedPlayerDay, PlayerDay

from .service import RulesArg, resolve_rules, solve_lineup


logger = logging.getLogger(__name__)

PROGRESS_EVERY = 50


class TeamDayJobResult:
    def __init__(
        self,
        key: TeamDayKey,
        indices: List[int],
        players: List[OptimizedPlayerDay],
        truncated: bool = False,
        error: str | None = None,
    ):
        self.key = key
        self.indices = indices
        self.players = players
        self.truncated = truncated
        self.error = error


@dataclass
class BatchOutput:
    players: List[OptimizedPlayerDay]
    team_days: int = 0
    skipped_records: int = 0
    truncated: int = 0
    failures: List[str] = field(default_factory=list)
    elapsed: float = 0.0


def _bench_default(player: PlayerDay) -> OptimizedPlayerDay:
    data = player.model_dump()
    data.update(full_pos=BENCH, best_pos=BENCH, missed_start=False, bad_start=False)
    return OptimizedPlayerDay.model_validate(data)


def _run_team_day(
    job: Tuple[TeamDayKey, List[int], List[PlayerDay], LineupRules, Optional[int]],
) -> TeamDayJobResult:
    key, indices, roster, rules, node_limit = job
    try:
        outcome = solve_lineup(roster, rules=rules, node_limit=node_limit)
    except Exception as exc:  # noqa: BLE001
        return TeamDayJobResult(key, indices, [], error=f"{type(exc).__name__}: {exc}")
    return TeamDayJobResult(key, indices, list(outcome.players), truncated=outcome.best.truncated)


def _iter_results(jobs: list, workers: int) -> Iterable[TeamDayJobResult]:
    if workers <= 1 or len(jobs) <= 1:
        for job in jobs:
            yield _run_team_day(job)
        return
    ctx = mp.get_context("spawn")
    with ctx.Pool(processes=min(workers, len(jobs))) as pool:
        yield from pool.imap(_run_team_day, jobs, chunksize=8)


def optimize_team_days(
    records: Sequence[PlayerDay],
    *,
    rules: RulesArg = None,
    workers: int = 1,
    node_limit: Optional[int] = None,
) -> BatchOutput:
    """Optimize every ``(team_id, date)`` roster found in ``records``.

    The returned players line up with ``records``. Records without a team or
    date, and records of a team-day whose optimization failed, keep ``BN`` in
    both slots.
    """

    resolved = resolve_rules(rules)
    groups = group_by_team_day(records)
    output = BatchOutput(players=[_bench_default(record) for record in records])
    grouped = sum(len(indices) for indices in groups.values())
    output.skipped_records = len(records) - grouped
    if output.skipped_records:
        logger.warning("Skipping %s player-days without a team or date", output.skipped_records)

    jobs = [
        (key, indices, [records[index] for index in indices], resolved, node_limit)
        for key, indices in groups.items()
    ]
    logger.info(
        "Optimizing %s team-days (%s player-days) with %s worker(s)",
        len(jobs),
        grouped,
        max(1, workers),
    )

    start = time.perf_counter()
    for result in _iter_results(jobs, max(1, workers)):
        output.team_days += 1
        if result.error is not None:
            team_id, day = result.key
            logger.warning("Team %s on %s failed: %s", team_id, day.isoformat(), result.error)
            output.failures.append(f"{team_id}|{day.isoformat()}: {result.error}")
        else:
            for index, player in zip(result.indices, result.players):
                output.players[index] = player
            if result.truncated:
                output.truncated += 1
        if output.team_days % PROGRESS_EVERY == 0:
            elapsed = time.perf_counter() - start
            logger.info(
                "Processed %s/%s team-days (%.1fs elapsed)",
                output.team_days,
                len(jobs),
                elapsed,
            )
    output.elapsed = time.perf_counter() - start

    logger.info(
        "Optimized %s team-days in %.2fs (%s truncated, %s failed)",
        output.team_days,
        output.elapsed,
        output.truncated,
        len(output.failures),
    )
    return output
