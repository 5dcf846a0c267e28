from datetime import date

import pytest
from pydantic import ValidationError

from pylineup.models import PlayerDay, parse_positions


def test_player_day_is_frozen():
    record = PlayerDay(player_id="p1", positions=["LW"], rating=20.5)

    assert record.player_id == "p1"
    assert record.positions == ("LW",)

    with pytest.raises((TypeError, ValidationError)):
        record.player_id = "p2"  # type: ignore[misc]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('["LW", "C"]', ("LW", "C")),
        ("RW,C", ("RW", "C")),
        ("lw/c", ("LW", "C")),
        (["D", "D", "G"], ("D", "G")),
        ("Util,BN", ()),
        ("[not json", ()),
        ("", ()),
        (None, ()),
    ],
)
def test_parse_positions(raw, expected):
    assert parse_positions(raw) == expected


def test_rating_missing_or_garbage_reads_as_zero():
    assert PlayerDay(player_id="a", rating=None).effective_rating == 0.0
    assert PlayerDay(player_id="b", rating="").rating is None
    assert PlayerDay(player_id="c", rating="n/a").effective_rating == 0.0
    assert PlayerDay(player_id="d", rating="nan").rating is None
    assert PlayerDay(player_id="e", rating="81.25").effective_rating == pytest.approx(81.25)


def test_flags_accept_sheet_strings():
    record = PlayerDay(player_id="p", games_played="1", games_started="1.0", ir="", ir_plus=None)
    assert record.played
    assert record.started
    assert record.ir == 0
    assert record.ir_plus == 0


def test_blank_identity_fields_become_none():
    record = PlayerDay(player_id="  ", team_id="", daily_pos="", date="2024-10-15")
    assert record.player_id is None
    assert record.team_id is None
    assert record.daily_pos == "BN"
    assert record.date == date(2024, 10, 15)


@pytest.mark.parametrize("daily_pos, active", [("LW", True), ("Util", True), ("BN", False), ("IR", False), ("IR+", False)])
def test_in_active_lineup(daily_pos, active):
    assert PlayerDay(player_id="p", daily_pos=daily_pos).in_active_lineup is active


@pytest.mark.parametrize(
    "raw, expected",
    [("IRplus", "IR+"), ("irplus", "IR+"), ("IR+", "IR+"), ("ir", "IR"), ("util", "Util"), ("bn", "BN"), (" lw ", "LW")],
)
def test_daily_pos_sheet_spellings_are_normalized(raw, expected):
    record = PlayerDay(player_id="p", daily_pos=raw)
    assert record.daily_pos == expected
    assert record.in_active_lineup is (expected not in {"BN", "IR", "IR+"})
