"""Pick sizer tests."""

from __future__ import annotations

import math

import pytest

from arblab.sizing import picks


def test_american_to_win() -> None:
    assert picks.american_to_win(100, 150) == pytest.approx(150.0)
    assert picks.american_to_win(110, -110) == pytest.approx(100.0)


@pytest.mark.parametrize(
    ("stake", "odds"),
    [(100, 0), (-5, 120), (math.nan, 120), (100, math.inf)],
)
def test_american_to_win_unusable_input(stake: float, odds: float) -> None:
    assert picks.american_to_win(stake, odds) == 0.0


def test_bankroll_size_pick() -> None:
    sizing = picks.bankroll_size_pick(1000, picks.PickInput(odds_american=-110, pct_of_bankroll=2.2))
    assert sizing.amount == pytest.approx(22.0)
    assert sizing.to_win == pytest.approx(20.0)


@pytest.mark.parametrize("bankroll", [0, -100, math.nan])
def test_bankroll_size_pick_without_bankroll(bankroll: float) -> None:
    sizing = picks.bankroll_size_pick(bankroll, picks.PickInput(odds_american=150, pct_of_bankroll=5))
    assert sizing.amount == 0.0
    assert sizing.to_win == 0.0


def test_bankroll_size_picks_keeps_order() -> None:
    results = picks.bankroll_size_picks(
        500,
        [picks.PickInput(100, 1), picks.PickInput(200, 2)],
    )
    assert [r.amount for r in results] == [pytest.approx(5.0), pytest.approx(10.0)]
    assert [r.to_win for r in results] == [pytest.approx(5.0), pytest.approx(20.0)]


def test_round_to_step() -> None:
    assert picks.round_to_step(7.3, 0.5) == 7.5
    assert picks.round_to_step(7.2, 0.5) == 7.0
    assert picks.round_to_step(12.0, 5) == 10
    assert picks.round_to_step(3.14159, 0) == 3.14159
    assert picks.round_to_step(math.inf) == 0.0


def test_size_pick_rows_parses_text_and_totals() -> None:
    rows = [
        picks.PickRow(id="1", pick="BOS ML", market="ML", odds_american="-110", pct_of_bankroll="2.2"),
        picks.PickRow(id="2", pick="", market="", odds_american="", pct_of_bankroll=""),
        picks.PickRow(id="3", pick="NYK +4.5", market="SPREAD:+OVER", odds_american="+120", pct_of_bankroll="1"),
    ]
    result = picks.size_pick_rows(1000, rows)
    assert [item.amount for item in result.rows] == [22.0, 0.0, 10.0]
    assert [item.to_win for item in result.rows] == [20.0, 0.0, 12.0]
    assert result.total_amount == 32.0
    assert result.rows[0].row.pick == "BOS ML"
