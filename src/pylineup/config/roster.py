"""Lineup slot configuration for supported leagues."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Sequence, Tuple

LEFT_WING = "LW"
CENTER = "C"
RIGHT_WING = "RW"
DEFENSE = "D"
GOALIE = "G"
UTIL = "Util"
BENCH = "BN"
INJURED_RESERVE = "IR"
INJURED_RESERVE_PLUS = "IR+"

SKATER_POSITIONS: FrozenSet[str] = frozenset({LEFT_WING, CENTER, RIGHT_WING, DEFENSE})
PLAYER_POSITIONS: FrozenSet[str] = SKATER_POSITIONS | {GOALIE}
INACTIVE_SLOTS: FrozenSet[str] = frozenset({BENCH, INJURED_RESERVE, INJURED_RESERVE_PLUS})

# Daily slot spellings seen in roster sheets, keyed upper-case.
DAILY_SLOT_ALIASES: Dict[str, str] = {
    **{
        label.upper(): label
        for label in (*PLAYER_POSITIONS, UTIL, BENCH, INJURED_RESERVE, INJURED_RESERVE_PLUS)
    },
    "IRPLUS": INJURED_RESERVE_PLUS,
    "BENCH": BENCH,
}


@dataclass(frozen=True)
class SlotSpec:
    label: str
    eligible_positions: FrozenSet[str]


@dataclass(frozen=True)
class LineupRules:
    league: str
    slots: Tuple[SlotSpec, ...]

    @property
    def roster_order(self) -> Tuple[str, ...]:
        return tuple(slot.label for slot in self.slots)


def _slots(*spec: Tuple[str, int, Iterable[str]]) -> Tuple[SlotSpec, ...]:
    out = []
    for label, count, positions in spec:
        out.extend(SlotSpec(label, frozenset(positions)) for _ in range(count))
    return tuple(out)


_LINEUP_RULES: Dict[str, LineupRules] = {
    "GSHL": LineupRules(
        league="GSHL",
        slots=_slots(
            (LEFT_WING, 2, {LEFT_WING}),
            (CENTER, 2, {CENTER}),
            (RIGHT_WING, 2, {RIGHT_WING}),
            (DEFENSE, 3, {DEFENSE}),
            (UTIL, 1, SKATER_POSITIONS),
            (GOALIE, 1, {GOALIE}),
        ),
    ),
    "GSHL_2G": LineupRules(
        league="GSHL_2G",
        slots=_slots(
            (LEFT_WING, 2, {LEFT_WING}),
            (CENTER, 2, {CENTER}),
            (RIGHT_WING, 2, {RIGHT_WING}),
            (DEFENSE, 4, {DEFENSE}),
            (UTIL, 1, SKATER_POSITIONS),
            (GOALIE, 2, {GOALIE}),
        ),
    ),
}

DEFAULT_RULES_KEY = "GSHL"


def iter_rules() -> Iterable[LineupRules]:
    """Return an iterator of all configured rule sets."""

    return _LINEUP_RULES.values()


def get_rules(key: str = DEFAULT_RULES_KEY) -> LineupRules:
    """Fetch rules for a league key, raising KeyError if missing."""

    normalized = key.upper()
    if normalized not in _LINEUP_RULES:
        raise KeyError(f"No lineup rules configured for league={key!r}")
    return _LINEUP_RULES[normalized]


def ordered_slots(slots: Sequence[SlotSpec]) -> Tuple[SlotSpec, ...]:
    """Most-constrained slots first; ties keep configuration order."""

    return tuple(sorted(slots, key=lambda slot: len(slot.eligible_positions)))

