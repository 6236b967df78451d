"""Draft reducer and input parsing tests."""

from __future__ import annotations

import pytest

from arblab.arbs.types import BonusBet, NoPromo, OddsBoost, ProfitBoost, PromoType
from arblab.drafts import parsing, state


def test_new_two_leg_draft_defaults() -> None:
    draft = state.new_two_leg_draft()
    assert draft.dog.side == "dog"
    assert draft.fav.side == "fav"
    for leg in draft.legs:
        assert leg.market == "ML"
        assert len(leg.slips) == 1
        slip = leg.slips[0]
        assert (slip.odds_american, slip.stake, slip.promo) == (100.0, 0.0, NoPromo())
        assert slip.payout_override is None


def test_update_leg_slip_returns_new_draft() -> None:
    draft = state.new_two_leg_draft()
    slip_id = draft.dog.slips[0].id
    updated = state.update_leg_slip(draft, "dog", slip_id, odds_american=150, stake=100)
    assert updated.dog.slips[0].odds_american == 150
    assert updated.dog.slips[0].stake == 100
    assert draft.dog.slips[0].stake == 0.0
    assert updated.fav is draft.fav


def test_removing_last_slip_leaves_fresh_default() -> None:
    draft = state.new_two_leg_draft()
    old = draft.fav.slips[0]
    draft = state.update_leg_slip(draft, "fav", old.id, stake=75)
    draft = state.remove_leg_slip(draft, "fav", old.id)
    assert len(draft.fav.slips) == 1
    assert draft.fav.slips[0].id != old.id
    assert draft.fav.slips[0].stake == 0.0


def test_add_and_remove_leg_slips() -> None:
    draft = state.add_leg_slip(state.new_two_leg_draft(), "dog")
    assert len(draft.dog.slips) == 2
    first = draft.dog.slips[0]
    draft = state.remove_leg_slip(draft, "dog", first.id)
    assert [s.id for s in draft.dog.slips] != [first.id]
    assert len(draft.dog.slips) == 1


def test_switching_promo_type_drops_other_fields() -> None:
    slip = state.new_slip(promo=ProfitBoost(boost_pct=25, note="daily boost"))
    switched = state.set_promo_type(slip, PromoType.BONUS_BET)
    assert switched.promo == BonusBet(bb_value=0.0, note="daily boost")
    back = state.set_promo_type(switched, "odds_boost")
    assert back.promo == OddsBoost(boost_pct=0.0, note="daily boost")


def test_set_promo_value_targets_active_field() -> None:
    slip = state.update_slip(state.new_slip(), promo_type=PromoType.BONUS_BET, promo_value=25)
    assert slip.promo == BonusBet(bb_value=25)
    plain = state.new_slip()
    assert state.set_promo_value(plain, 40) is plain


def test_new_parlay_draft_buckets() -> None:
    draft = state.new_parlay_draft()
    assert [g.label for g in draft.groups] == ["Team Favs", "Team Dogs", "Team Mix 1", "Team Mix 2"]
    draft = state.add_group(draft)
    assert draft.groups[-1].label == "Team Mix 3"
    assert len(draft.groups[-1].slips) == 1


def test_parlay_group_reducers() -> None:
    draft = state.new_parlay_draft()
    group = draft.groups[1]
    draft = state.update_group(draft, group.id, label="Dogs", event="CHI-LAC")
    draft = state.add_group_slip(draft, group.id)
    second = draft.groups[1].slips[1]
    draft = state.update_group_slip(draft, group.id, second.id, stake=20, promo_type=PromoType.INSURED)
    updated = draft.groups[1]
    assert (updated.label, updated.event) == ("Dogs", "CHI-LAC")
    assert updated.slips[1].stake == 20
    assert updated.slips[1].promo.type is PromoType.INSURED
    draft = state.remove_group_slip(draft, group.id, updated.slips[0].id)
    draft = state.remove_group_slip(draft, group.id, second.id)
    assert len(draft.groups[1].slips) == 1
    draft = state.remove_group(draft, group.id)
    assert group.id not in [g.id for g in draft.groups]


def test_pick_sizer_reducers() -> None:
    draft = state.new_pick_sizer_draft()
    assert len(draft.rows) == 1
    draft = state.add_pick_row(draft)
    row_id = draft.rows[0].id
    draft = state.update_pick_row(draft, row_id, pick="BOS ML", odds_american="-110")
    assert draft.rows[0].pick == "BOS ML"
    draft = state.remove_pick_row(draft, row_id)
    assert [r.id for r in draft.rows] != [row_id]
    assert len(state.reset_pick_sizer().rows) == 2


@pytest.mark.parametrize(
    ("raw", "fallback", "expected"),
    [
        ("", 0.0, 0.0),
        ("-", 5.0, 5.0),
        ("+", 5.0, 5.0),
        ("abc", 3.0, 3.0),
        (" 12.5 ", 0.0, 12.5),
        ("-110", 0.0, -110.0),
        ("1e3", 0.0, 1000.0),
        ("inf", 1.0, 1.0),
        ("nan", 1.0, 1.0),
        ("1_000", 2.0, 2.0),
    ],
)
def test_parse_num(raw: str, fallback: float, expected: float) -> None:
    assert parsing.parse_num(raw, fallback) == expected


def test_parse_field_fallbacks() -> None:
    assert parsing.parse_field("", 7.0) == 0.0
    assert parsing.parse_field(" - ", 7.0) == 0.0
    assert parsing.parse_field("7x", 7.0) == 7.0
    assert parsing.parse_field("-150", 7.0) == -150.0


def test_parse_optional() -> None:
    assert parsing.parse_optional("   ") is None
    assert parsing.parse_optional("250.5") == 250.5
    assert parsing.parse_optional("junk") == 0.0


def test_removing_every_pick_row_leaves_empty_draft() -> None:
    draft = state.new_pick_sizer_draft()
    draft = state.remove_pick_row(draft, draft.rows[0].id)
    assert draft.rows == []
