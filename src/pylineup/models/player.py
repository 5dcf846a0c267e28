"""Canonical player-day models shared across ingestion and optimizer layers."""

from __future__ import annotations

import json
import math
import re
from datetime import date as Date
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from pylineup.config.roster import BENCH, DAILY_SLOT_ALIASES, INACTIVE_SLOTS, PLAYER_POSITIONS

_POSITION_SPLIT = re.compile(r"[,/\s]+")


def parse_positions(value: Any) -> Tuple[str, ...]:
    """Normalize position input into a tuple of known position codes.

    Accepts a sequence of codes, a JSON array string (``'["LW", "C"]'``) or a
    comma/slash separated string (``"LW,C"``). Unknown tokens are dropped and
    duplicates collapse onto their first occurrence.
    """

    if value is None:
        return ()
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return ()
        if text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError:
                return ()
            if not isinstance(value, list):
                return ()
        else:
            value = _POSITION_SPLIT.split(text)
    tokens: list[str] = []
    for item in value:
        token = str(item).strip().upper()
        if token in PLAYER_POSITIONS and token not in tokens:
            tokens.append(token)
    return tuple(tokens)


def _flag(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            value = float(text)
        except ValueError:
            return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number):
        return 0
    return 1 if number >= 1 else 0


class PlayerDay(BaseModel):
    """One rostered player on one team for one game day."""

    player_id: Optional[str] = None
    name: Optional[str] = None
    positions: Tuple[str, ...] = ()
    pos_group: Optional[str] = None
    daily_pos: str = BENCH
    games_played: int = 0
    games_started: int = 0
    ir: int = 0
    ir_plus: int = 0
    rating: Optional[float] = None
    team_id: Optional[str] = None
    season_id: Optional[str] = None
    date: Optional[Date] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("player_id", "team_id", "season_id", "name", "pos_group", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("positions", mode="before")
    @classmethod
    def _coerce_positions(cls, value: Any) -> Tuple[str, ...]:
        return parse_positions(value)

    @field_validator("daily_pos", mode="before")
    @classmethod
    def _coerce_daily_pos(cls, value: Any) -> str:
        if value is None:
            return BENCH
        text = str(value).strip()
        if not text:
            return BENCH
        return DAILY_SLOT_ALIASES.get(text.upper(), text)

    @field_validator("games_played", "games_started", "ir", "ir_plus", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> int:
        return _flag(value)

    @field_validator("rating", mode="before")
    @classmethod
    def _coerce_rating(cls, value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if math.isnan(number) or math.isinf(number):
            return None
        return number

    @property
    def effective_rating(self) -> float:
        return self.rating if self.rating is not None else 0.0

    @property
    def played(self) -> bool:
        return self.games_played == 1

    @property
    def started(self) -> bool:
        return self.games_started == 1

    @property
    def in_active_lineup(self) -> bool:
        return self.daily_pos not in INACTIVE_SLOTS


class OptimizedPlayerDay(PlayerDay):
    """Player-day annotated with its actual-usage and best-possible slots."""

    full_pos: str = BENCH
    best_pos: str = BENCH
    missed_start: bool = False
    bad_start: bool = False
