"""REST API for the pylineup optimizer."""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from fastapi import FastAPI, File, Form, HTTPException, UploadFile

from pylineup.api.schemas import (
    AssignmentSummary,
    BatchPlayerResponse,
    LineupBatchResponse,
    LineupOptimizeRequest,
    LineupOptimizeResponse,
    LineupStatsResponse,
    RulesResponse,
    SlotResponse,
)
from pylineup.config import LineupRules, get_rules, iter_rules
from pylineup.ingest import load_player_days, roster_add_flags
from pylineup.optimizer import optimize_team_days, solve_lineup


logger = logging.getLogger(__name__)


def _rules_response(rules: LineupRules) -> RulesResponse:
    return RulesResponse(
        league=rules.league,
        slots=[
            SlotResponse(label=slot.label, eligible_positions=sorted(slot.eligible_positions))
            for slot in rules.slots
        ],
    )


def _lookup_rules(key: str) -> LineupRules:
    try:
        return get_rules(key)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown lineup rules {key!r}") from exc


def _parse_mapping(mapping_str: str | None) -> dict[str, str]:
    if not mapping_str:
        return {}
    try:
        mapping = json.loads(mapping_str)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mapping JSON: {exc}") from exc
    if not isinstance(mapping, dict):
        raise HTTPException(status_code=400, detail="Mapping JSON must be an object")
    return {str(key): str(value) for key, value in mapping.items()}


async def _write_temp(upload: UploadFile | None) -> Path | None:
    if upload is None:
        return None
    contents = await upload.read()
    if not contents:
        return None
    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".csv")
    try:
        tmp.write(contents)
        tmp.flush()
    finally:
        tmp.close()
    return Path(tmp.name)


def create_app() -> FastAPI:
    app = FastAPI(title="pylineup optimizer")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/rules", response_model=list[RulesResponse])
    async def list_rules() -> list[RulesResponse]:
        return [_rules_response(rules) for rules in iter_rules()]

    @app.get("/rules/{key}", response_model=RulesResponse)
    async def rules_detail(key: str) -> RulesResponse:
        return _rules_response(_lookup_rules(key))

    @app.post("/lineups/optimize", response_model=LineupOptimizeResponse)
    async def optimize(request: LineupOptimizeRequest) -> LineupOptimizeResponse:
        rules = _lookup_rules(request.rules)
        outcome = solve_lineup(request.players, rules=rules, node_limit=request.node_limit)
        return LineupOptimizeResponse(
            players=list(outcome.players),
            full=AssignmentSummary.from_assignment(outcome.full),
            best=AssignmentSummary.from_assignment(outcome.best),
            stats=LineupStatsResponse.from_stats(outcome.stats()),
        )

    @app.post("/lineups/batch", response_model=LineupBatchResponse)
    async def batch(
        player_days: UploadFile | None = File(None),
        mapping: str | None = Form(None),
        rules_form: str = Form("GSHL", alias="rules"),
        node_limit: int | None = Form(None),
    ) -> LineupBatchResponse:
        rules = _lookup_rules(rules_form)
        parsed_mapping = _parse_mapping(mapping)
        path = await _write_temp(player_days)
        if path is None:
            raise HTTPException(status_code=400, detail="player_days CSV is required")
        try:
            records = load_player_days(path, mapping=parsed_mapping or None)
        finally:
            path.unlink(missing_ok=True)

        output = optimize_team_days(records, rules=rules, node_limit=node_limit)
        adds = roster_add_flags(records)
        message = None
        if output.truncated:
            message = f"{output.truncated} team-day(s) hit the search cap; best lineups not proven optimal"
        logger.info("Batch request optimized %s team-days", output.team_days)
        return LineupBatchResponse(
            team_days=output.team_days,
            skipped_records=output.skipped_records,
            truncated=output.truncated,
            failures=output.failures,
            elapsed=output.elapsed,
            players=[
                BatchPlayerResponse(player=player, roster_add=add)
                for player, add in zip(output.players, adds)
            ],
            message=message,
        )

    return app
