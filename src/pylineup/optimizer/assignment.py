"""Slot assignment results shared by the greedy and exhaustive passes."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Literal, Optional, Sequence, Tuple

from pylineup.config.roster import SlotSpec
from pylineup.models import PlayerDay

SolveStatus = Literal["heuristic", "bound", "exhaustive", "truncated"]

STATUS_HEURISTIC: SolveStatus = "heuristic"
STATUS_BOUND: SolveStatus = "bound"
STATUS_EXHAUSTIVE: SolveStatus = "exhaustive"
STATUS_TRUNCATED: SolveStatus = "truncated"


@dataclass(frozen=True)
class Assignment:
    """Partial, injective mapping of players onto slot instances.

    ``picks[i]`` is the index (into the player sequence the assignment was
    built from) of the player holding ``slots[i]``, or ``None`` when no
    eligible player was left for that slot. ``total`` is the sum of raw
    ratings of the assigned players.

    ``status`` records how much is known about the result:

    * ``heuristic``: greedy fill, not validated.
    * ``bound``: greedy fill that met the top-K upper bound, proven optimal.
    * ``exhaustive``: branch-and-bound search ran to completion.
    * ``truncated``: the search hit its node cap; best incumbent returned.
    """

    slots: Tuple[SlotSpec, ...]
    picks: Tuple[Optional[int], ...]
    total: float
    status: SolveStatus = STATUS_HEURISTIC
    nodes: int = 0

    @property
    def proven_optimal(self) -> bool:
        return self.status in (STATUS_BOUND, STATUS_EXHAUSTIVE)

    @property
    def truncated(self) -> bool:
        return self.status == STATUS_TRUNCATED

    @property
    def filled(self) -> int:
        return sum(1 for pick in self.picks if pick is not None)

    def unfilled_slots(self) -> Tuple[SlotSpec, ...]:
        return tuple(slot for slot, pick in zip(self.slots, self.picks) if pick is None)

    def slot_by_player(self) -> Dict[int, str]:
        """Map player index to the label of the slot they hold."""

        return {pick: slot.label for slot, pick in zip(self.slots, self.picks) if pick is not None}

    def with_status(self, status: SolveStatus, *, nodes: int | None = None) -> "Assignment":
        return replace(self, status=status, nodes=self.nodes if nodes is None else nodes)


def rating_total(players: Sequence[PlayerDay], picks: Sequence[Optional[int]]) -> float:
    return sum(players[pick].effective_rating for pick in picks if pick is not None)
