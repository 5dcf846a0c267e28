"""Helpers to load player-day CSVs and emit canonical records."""

from __future__ import annotations

import csv
import logging
from datetime import date as Date, datetime, timedelta
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from pylineup.models import PlayerDay


logger = logging.getLogger(__name__)

TeamDayKey = Tuple[str, Date]

DEFAULT_PLAYER_DAY_MAPPING = {
    "player_id": "playerId",
    "name": "playerName",
    "positions": "nhlPos",
    "pos_group": "posGroup",
    "daily_pos": "dailyPos",
    "games_played": "GP",
    "games_started": "GS",
    "ir": "IR",
    "ir_plus": "IRplus",
    "rating": "Rating",
    "team_id": "gshlTeamId",
    "season_id": "seasonId",
    "date": "date",
}

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y", "%Y/%m/%d")


class PlayerDayRow(BaseModel):
    raw_player_id: Optional[str] = None
    raw_name: Optional[str] = None
    raw_positions: Optional[str] = None
    raw_pos_group: Optional[str] = None
    raw_daily_pos: Optional[str] = None
    raw_games_played: Optional[str] = None
    raw_games_started: Optional[str] = None
    raw_ir: Optional[str] = None
    raw_ir_plus: Optional[str] = None
    raw_rating: Optional[str] = None
    raw_team_id: Optional[str] = None
    raw_season_id: Optional[str] = None
    raw_date: Optional[str] = None
    source: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "PlayerDayRow":
        def extract(spec: Optional[str | Sequence[str]]) -> Optional[str]:
            if spec is None:
                return None
            if isinstance(spec, str):
                value = row.get(spec)
                return value.strip() if value is not None else None
            parts = [row.get(col, "").strip() for col in spec if row.get(col)]
            return " ".join(parts) if parts else None

        def parse_spec(key: str) -> Optional[str | Sequence[str]]:
            spec = mapping.get(key)
            if spec is None:
                return None
            if "|" in spec:
                return tuple(part.strip() for part in spec.split("|"))
            return spec

        data = {f"raw_{key}": extract(parse_spec(key)) for key in DEFAULT_PLAYER_DAY_MAPPING}
        data["source"] = {k: "" if v is None else str(v) for k, v in row.items() if k is not None}
        return cls(**data)


def parse_date(raw: Optional[str]) -> Optional[Date]:
    """Parse ISO dates, ISO timestamps and a few US-style formats; None otherwise."""

    if not raw:
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def load_player_day_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerDayRow]:
    mapping = {**DEFAULT_PLAYER_DAY_MAPPING, **(mapping or {})}
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [PlayerDayRow.from_mapping(row, mapping) for row in reader]
    return rows


def rows_to_player_days(rows: Sequence[PlayerDayRow]) -> List[PlayerDay]:
    records: List[PlayerDay] = []
    bad_dates = 0
    for row in rows:
        parsed_date = parse_date(row.raw_date)
        if row.raw_date and parsed_date is None:
            bad_dates += 1
        records.append(
            PlayerDay(
                player_id=row.raw_player_id,
                name=row.raw_name,
                positions=row.raw_positions,
                pos_group=row.raw_pos_group,
                daily_pos=row.raw_daily_pos,
                games_played=row.raw_games_played,
                games_started=row.raw_games_started,
                ir=row.raw_ir,
                ir_plus=row.raw_ir_plus,
                rating=row.raw_rating,
                team_id=row.raw_team_id,
                season_id=row.raw_season_id,
                date=parsed_date,
            )
        )
    if bad_dates:
        logger.warning("%s player-day rows had unparseable dates", bad_dates)
    missing_ids = sum(1 for record in records if not record.player_id)
    if missing_ids:
        logger.warning("%s player-day rows have no player id and will never be placed", missing_ids)
    return records


def load_player_days(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerDay]:
    return rows_to_player_days(load_player_day_csv(path, mapping=mapping))


def group_by_team_day(records: Sequence[PlayerDay]) -> Dict[TeamDayKey, List[int]]:
    """Group record indices by ``(team_id, date)`` in first-seen order.

    Records missing a team or a date are left out.
    """

    groups: Dict[TeamDayKey, List[int]] = {}
    for index, record in enumerate(records):
        if not record.team_id or record.date is None:
            continue
        groups.setdefault((record.team_id, record.date), []).append(index)
    return groups


def roster_add_flags(records: Sequence[PlayerDay]) -> List[Optional[bool]]:
    """Flag player-days where the player joined the team since the previous day.

    ``True`` when the previous calendar day of the same season has data and
    the player was not on this team that day, ``False`` when they were, and
    ``None`` when there is no data for the previous day or the record lacks a
    player, team or date.
    """

    teams_by_day: Dict[Tuple[Optional[str], Date], Dict[str, str]] = {}
    for record in records:
        if not record.player_id or not record.team_id or record.date is None:
            continue
        teams_by_day.setdefault((record.season_id, record.date), {})[record.player_id] = record.team_id

    flags: List[Optional[bool]] = []
    for record in records:
        if not record.player_id or not record.team_id or record.date is None:
            flags.append(None)
            continue
        previous = teams_by_day.get((record.season_id, record.date - timedelta(days=1)))
        if not previous:
            flags.append(None)
            continue
        flags.append(previous.get(record.player_id) != record.team_id)
    return flags
