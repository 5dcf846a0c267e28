import random

import pytest

from pylineup.config import get_rules
from pylineup.models import PlayerDay
from pylineup.optimizer import (
    is_eligible,
    lineup_stats,
    optimize_lineup,
    priority_key,
    priority_tier,
    solve_lineup,
)


def _player(player_id, positions, rating, *, daily_pos="BN", gp=1, gs=0) -> PlayerDay:
    return PlayerDay(
        player_id=player_id,
        positions=positions,
        daily_pos=daily_pos,
        games_played=gp,
        games_started=gs,
        rating=rating,
    )


def _scenario_roster() -> list[PlayerDay]:
    return [
        _player("lw", ["LW"], 75.5, daily_pos="LW", gs=1),
        _player("c", ["C"], 82.3, daily_pos="C", gs=1),
        _player("rwc", ["RW", "C"], 95.0, daily_pos="BN"),
        _player("d", ["D"], 70.0, daily_pos="D", gs=1),
        _player("g", ["G"], 88.0, daily_pos="G", gs=1),
    ]


def test_scenario_bench_player_takes_best_slot_while_starters_keep_full_slots():
    players = optimize_lineup(_scenario_roster())
    by_id = {player.player_id: player for player in players}

    assert by_id["rwc"].best_pos in {"C", "RW"}
    assert by_id["lw"].full_pos == "LW"
    assert by_id["c"].full_pos == "C"
    assert by_id["d"].full_pos == "D"
    assert by_id["g"].full_pos == "G"
    assert by_id["rwc"].missed_start
    assert not any(player.bad_start for player in players)


def test_higher_tier_starters_outrank_better_rated_bench_player():
    roster = [
        _player("c1", ["C"], 50, daily_pos="C", gs=1),
        _player("c2", ["C"], 40, daily_pos="C", gs=1),
        _player("c3", ["C"], 95, daily_pos="BN"),
        _player("c4", ["C"], 30, daily_pos="Util", gs=1),
    ]
    outcome = solve_lineup(roster)
    by_id = {player.player_id: player for player in outcome.players}

    assert by_id["c3"].full_pos == "BN"
    assert {by_id[pid].full_pos for pid in ("c1", "c2", "c4")} == {"C", "Util"}
    assert by_id["c3"].best_pos != "BN"
    assert by_id["c4"].best_pos == "BN"
    assert by_id["c4"].bad_start
    assert not by_id["c3"].missed_start
    assert outcome.full.status == "heuristic"
    assert outcome.best.proven_optimal


def test_priority_tiers():
    assert priority_tier(_player("a", ["C"], 1, daily_pos="C", gs=1)) == 5
    assert priority_tier(_player("b", ["C"], 1, daily_pos="C")) == 4
    assert priority_tier(_player("c", ["C"], 1, daily_pos="BN")) == 3
    assert priority_tier(_player("d", ["C"], 1, daily_pos="C", gp=0)) == 2
    assert priority_tier(_player("e", ["C"], 1, daily_pos="IR+", gp=0)) == 1
    assert priority_key(_player("f", ["C"], 1e9, daily_pos="BN", gp=0)) < priority_key(
        _player("g", ["C"], 0, daily_pos="C", gp=0)
    )


def test_missing_goalie_leaves_g_empty_without_error():
    roster = [
        _player("lw", ["LW"], 30, daily_pos="LW", gs=1),
        _player("d", ["D"], 20, daily_pos="D", gs=1),
    ]
    outcome = solve_lineup(roster)
    assert "G" in [slot.label for slot in outcome.best.unfilled_slots()]
    assert "G" in [slot.label for slot in outcome.full.unfilled_slots()]
    assert all(player.best_pos != "G" for player in outcome.players)


def test_empty_roster_returns_empty_results():
    assert optimize_lineup([]) == []
    outcome = solve_lineup([])
    assert outcome.best.filled == 0
    assert outcome.stats().improvement_percent == 0.0


def test_invalid_records_stay_on_bench():
    roster = [
        PlayerDay(player_id=None, positions=["C"], rating=99, games_played=1, games_started=1),
        PlayerDay(player_id="nopos", positions=[], rating=99, games_played=1, games_started=1),
        _player("ok", ["C"], "n/a", daily_pos="C", gs=1),
    ]
    players = optimize_lineup(roster)
    assert [player.full_pos for player in players] == ["BN", "BN", "C"]
    assert [player.best_pos for player in players] == ["BN", "BN", "C"]


def test_played_players_scan_ahead_of_idle_ones_on_ties():
    rules_key = "GSHL"
    roster = [
        _player("idle", ["G"], 0, daily_pos="G", gp=0),
        _player("played", ["G"], 0, daily_pos="BN"),
    ]
    players = optimize_lineup(roster, rules=rules_key)
    by_id = {player.player_id: player for player in players}
    assert by_id["played"].best_pos == "G"
    assert by_id["idle"].best_pos == "BN"


def test_best_pass_runs_exhaustive_search_when_greedy_falls_short():
    roster = [
        _player("x", ["LW", "RW"], 100),
        _player("y", ["LW"], 90),
        _player("z", ["LW"], 80),
        _player("q", ["LW"], 75),
    ]
    outcome = solve_lineup(roster)
    assert outcome.best.status == "exhaustive"
    assert outcome.best.total == pytest.approx(345)
    assert [player.best_pos for player in outcome.players] == ["RW", "LW", "LW", "Util"]


def test_lineup_stats_reports_improvement():
    roster = [
        _player("c1", ["C"], 50, daily_pos="C", gs=1),
        _player("c2", ["C"], 40, daily_pos="C", gs=1),
        _player("c3", ["C"], 95, daily_pos="BN"),
        _player("c4", ["C"], 30, daily_pos="Util", gs=1),
    ]
    stats = lineup_stats(optimize_lineup(roster))
    assert stats.full_rating == pytest.approx(120)
    assert stats.best_rating == pytest.approx(185)
    assert stats.improvement_points == pytest.approx(65)
    assert stats.improvement_percent == pytest.approx(65 / 120 * 100)


def test_truncated_best_pass_is_reported():
    roster = [_player(f"g{i}", ["G"], 100) for i in range(12)]
    roster += [_player(f"w{i}", ["LW"], 1) for i in range(12)]
    outcome = solve_lineup(roster, node_limit=50)
    assert outcome.best.truncated
    assert sum(1 for player in outcome.players if player.best_pos != "BN") == 4


@pytest.mark.parametrize("seed", range(10))
def test_full_pass_respects_tier_dominance(seed):
    rng = random.Random(seed)
    positions = [["LW"], ["C"], ["RW"], ["D"], ["G"], ["LW", "C"], ["RW", "C"], ["D"]]
    daily = ["LW", "C", "RW", "D", "G", "Util", "BN", "BN", "IR"]
    roster = []
    for i in range(rng.randint(12, 17)):
        gp = rng.randint(0, 1)
        roster.append(
            _player(
                f"p{i}",
                rng.choice(positions),
                round(rng.uniform(0, 100), 2),
                daily_pos=rng.choice(daily),
                gp=gp,
                gs=gp and rng.randint(0, 1),
            )
        )
    outcome = solve_lineup(roster, node_limit=20_000)
    placed = {pick for pick in outcome.full.picks if pick is not None}

    full_labels = outcome.full.slot_by_player()
    for slot, pick in zip(outcome.full.slots, outcome.full.picks):
        for index, player in enumerate(roster):
            if not is_eligible(player, slot):
                continue
            if pick is None or priority_tier(player) > priority_tier(roster[pick]):
                assert index in placed
            if slot.label != "Util" and pick is not None and priority_tier(player) > priority_tier(roster[pick]):
                assert full_labels[index] != "Util"


def test_rules_key_is_resolved():
    rules = get_rules("GSHL_2G")
    roster = [_player("g1", ["G"], 60), _player("g2", ["G"], 50)]
    players = optimize_lineup(roster, rules="gshl_2g")
    assert [player.best_pos for player in players] == ["G", "G"]
    assert rules.roster_order.count("G") == 2


def test_ir_plus_sheet_slot_is_treated_as_inactive():
    assert priority_tier(_player("hurt", ["G"], 0, daily_pos="IRplus", gp=0)) == 1
    assert priority_tier(_player("hurt", ["G"], 0, daily_pos="IRplus")) == 3

    roster = [
        _player("hurt", ["G"], 0, daily_pos="IRplus", gp=0),
        _player("spare", ["G"], 50, daily_pos="BN", gp=0),
    ]
    by_id = {player.player_id: player for player in optimize_lineup(roster)}
    assert by_id["hurt"].full_pos == "BN"
    assert by_id["spare"].full_pos == "G"
    assert not by_id["hurt"].missed_start


def test_higher_tier_multi_position_player_keeps_specific_slot():
    roster = [
        _player("flex", ["LW", "C"], 10, daily_pos="LW", gs=1),
        _player("wing1", ["LW"], 90, daily_pos="BN"),
        _player("wing2", ["LW"], 80, daily_pos="BN"),
    ]
    by_id = {player.player_id: player for player in optimize_lineup(roster)}
    assert by_id["flex"].full_pos == "LW"
    assert by_id["wing1"].full_pos == "LW"
    assert by_id["wing2"].full_pos == "Util"
