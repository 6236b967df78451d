"""Draft store persistence tests."""

from __future__ import annotations

from arblab.arbs.types import BonusBet, ProfitBoost
from arblab.bankroll import ledger
from arblab.db.database import get_session
from arblab.db.models import Draft
from arblab.drafts import state
from arblab.drafts.store import (
    BANKROLL_SIZE_KEY,
    BOOKS_KEY,
    MULTI_STAKE_ARB_KEY,
    PICK_SIZER_KEY,
    SIMPLE_ARB_KEY,
)


def test_opaque_put_get_delete(store) -> None:
    assert store.get("missing") is None
    store.put("b-key", {"a": 1})
    store.put("a-key", [1, 2, 3])
    store.put("b-key", {"a": 2})
    assert store.get("b-key") == {"a": 2}
    assert store.keys() == ["a-key", "b-key"]
    assert store.delete("a-key") is True
    assert store.delete("a-key") is False
    assert store.keys() == ["b-key"]


def test_two_leg_draft_round_trip(store) -> None:
    draft = state.new_two_leg_draft()
    draft = state.update_leg(draft, "dog", team="BOS", event="BOS-NYK")
    slip_id = draft.dog.slips[0].id
    draft = state.update_leg_slip(
        draft, "dog", slip_id, book="DK", odds_american=150, stake=25, promo=BonusBet(bb_value=25)
    )
    draft = state.update_leg_slip(draft, "fav", draft.fav.slips[0].id, payout_override=210.5)
    store.save_two_leg(draft)
    assert store.load_two_leg() == draft


def test_multi_stake_draft_uses_its_own_key(store) -> None:
    simple = state.new_two_leg_draft()
    multi = state.add_leg_slip(state.new_two_leg_draft(), "fav")
    store.save_two_leg(simple)
    store.save_two_leg(multi, key=MULTI_STAKE_ARB_KEY)
    assert store.load_two_leg() == simple
    assert store.load_two_leg(MULTI_STAKE_ARB_KEY) == multi
    assert set(store.keys()) == {SIMPLE_ARB_KEY, MULTI_STAKE_ARB_KEY}


def test_parlay_draft_round_trip(store) -> None:
    draft = state.new_parlay_draft()
    group_id = draft.groups[0].id
    draft = state.update_group(draft, group_id, header_book="FD", header_odds_american=600)
    draft = state.update_group_slip(
        draft, group_id, draft.groups[0].slips[0].id, stake=10, promo=ProfitBoost(boost_pct=30)
    )
    store.save_parlay(draft)
    assert store.load_parlay() == draft


def test_pick_sizer_round_trip(store) -> None:
    draft = state.reset_pick_sizer()
    draft = state.update_pick_row(draft, draft.rows[0].id, pick="DEN -4.5", odds_american="-110")
    store.save_pick_sizer(draft)
    assert store.load_pick_sizer() == draft


def test_missing_drafts_load_defaults(store) -> None:
    assert len(store.load_parlay().groups) == 4
    assert len(store.load_pick_sizer().rows) == 1
    assert [leg.side for leg in store.load_two_leg().legs] == ["dog", "fav"]


def test_unreadable_draft_falls_back_to_default(store) -> None:
    store.put(SIMPLE_ARB_KEY, {"dog": "nope"})
    draft = store.load_two_leg()
    assert draft.dog.side == "dog"
    assert len(draft.fav.slips) == 1


def test_bankroll_save_keeps_size_in_sync(store) -> None:
    assert store.load_bankroll_size() is None
    state_ = ledger.add_book(ledger.deposit_cash(ledger.BankrollState(), 100), "DK", 50)
    store.save_bankroll(state_)
    assert store.load_bankroll_size() == 150.0
    assert store.get(BANKROLL_SIZE_KEY)["bankroll"] == 150.0
    loaded = store.load_bankroll()
    assert loaded.cashroll == 100.0
    assert [(b.name, b.balance) for b in loaded.books] == [("DK", 50.0)]
    assert "updatedAt" in store.get(BOOKS_KEY)


def test_bankroll_size_ignores_non_positive_values(store) -> None:
    store.save_bankroll(ledger.BankrollState())
    assert store.load_bankroll_size() is None
    store.put(BANKROLL_SIZE_KEY, {"bankroll": "lots"})
    assert store.load_bankroll_size() is None


def test_empty_pick_sizer_saves_and_reloads_one_blank_row(store) -> None:
    draft = state.new_pick_sizer_draft()
    draft = state.remove_pick_row(draft, draft.rows[0].id)
    store.save_pick_sizer(draft)
    assert store.get(PICK_SIZER_KEY) == {"rows": []}
    loaded = store.load_pick_sizer()
    assert len(loaded.rows) == 1
    assert loaded.rows[0].pick == ""


def test_parlay_draft_without_buckets_round_trips(store) -> None:
    draft = state.new_parlay_draft()
    for group in draft.groups:
        draft = state.remove_group(draft, group.id)
    store.save_parlay(draft)
    assert store.load_parlay().groups == []


def test_saved_rows_record_update_time(store) -> None:
    store.put("stamped", {"a": 1})
    with get_session(store.session_factory) as session:
        assert session.get(Draft, "stamped").updated_at is not None
