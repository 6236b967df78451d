"""Streamlit interface for ArbLab."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from typing import Any

import pandas as pd
import streamlit as st

from arblab.arbs.efficiency import compute_bb_efficiency_from_arb, compute_bb_efficiency_from_parlay
from arblab.arbs.engine import compute_arb, compute_parlay_arb, compute_slip
from arblab.arbs.formatting import (
    OutcomeCard,
    fmt_money,
    fmt_x,
    max_number,
    min_number,
    parlay_outcome_cards,
    two_leg_outcome_cards,
)
from arblab.arbs.mismatch import market_or_event_mismatch
from arblab.arbs.types import PROMO_LABELS, BBEfficiencyResult, PromoType, Slip
from arblab.bankroll import ledger
from arblab.config import configure_logging
from arblab.db.database import init_db
from arblab.drafts import state as drafts
from arblab.drafts.parsing import parse_field, parse_num, parse_optional
from arblab.drafts.store import MULTI_STAKE_ARB_KEY, SIMPLE_ARB_KEY, DraftStore
from arblab.sizing.picks import MARKET_OPTIONS, size_pick_rows

configure_logging()
init_db()
store = DraftStore()

st.set_page_config(page_title="ArbLab", layout="wide", page_icon="🎯")
st.title("🎯 ArbLab")
st.caption("Arbitrage, promo and bankroll calculators. Entertainment purposes only.")

PROMO_OPTIONS = list(PromoType)
BOOST_TYPES = (PromoType.PROFIT_BOOST, PromoType.ODDS_BOOST)


def _num_text(value: float | None) -> str:
    return "" if value is None else f"{value:g}"


def _session_draft(key: str, loader: Callable[[], Any]) -> Any:
    if key not in st.session_state:
        st.session_state[key] = loader()
    return st.session_state[key]


def _commit(key: str, draft: Any, saver: Callable[[Any], None], rerun: bool = False) -> None:
    if draft == st.session_state.get(key):
        return
    st.session_state[key] = draft
    saver(draft)
    if rerun:
        st.rerun()


# ----- Shared widgets ---------------------------------------------------------


def render_slip_editor(slip: Slip) -> Slip:
    """Edit one stake line; returns the (possibly) updated slip."""

    key = slip.id
    cols = st.columns([1.2, 1.0, 1.0, 1.8])
    book = cols[0].text_input("Book", value=slip.book, key=f"{key}-book")
    odds_raw = cols[1].text_input("Odds (American)", value=_num_text(slip.odds_american), key=f"{key}-odds")
    stake_raw = cols[2].text_input("Stake", value=_num_text(slip.stake), key=f"{key}-stake")
    promo_type = cols[3].selectbox(
        "Promo",
        PROMO_OPTIONS,
        index=PROMO_OPTIONS.index(slip.promo.type),
        format_func=PROMO_LABELS.get,
        key=f"{key}-promo",
    )

    updated = drafts.update_slip(
        slip,
        book=book,
        odds_american=parse_field(odds_raw, slip.odds_american),
        stake=parse_field(stake_raw, slip.stake),
    )
    if promo_type is not slip.promo.type:
        updated = drafts.set_promo_type(updated, promo_type)
    elif promo_type in BOOST_TYPES:
        raw = st.text_input("Boost %", value=_num_text(slip.promo.boost_pct), key=f"{key}-boost")
        updated = drafts.set_promo_value(updated, parse_field(raw, slip.promo.boost_pct))
    elif promo_type is PromoType.BONUS_BET:
        raw = st.text_input(
            "Bonus Bet Value (for efficiency)",
            value=_num_text(slip.promo.bb_value),
            key=f"{key}-bb",
        )
        updated = drafts.set_promo_value(updated, parse_field(raw, slip.promo.bb_value))

    override_raw = st.text_input(
        "Payout Override (optional)",
        value=_num_text(slip.payout_override),
        placeholder="Leave blank to auto-calc",
        key=f"{key}-override",
    )
    updated = replace(updated, payout_override=parse_optional(override_raw))

    computed = compute_slip(updated)
    st.caption(
        f"Decimal {computed.decimal_odds_effective:.2f} | Payout {fmt_money(computed.payout)} | "
        f"Cash at risk {fmt_money(computed.cash_at_risk)} | Net {fmt_money(computed.net_payout)}"
    )
    return updated


def render_results(
    cards: list[OutcomeCard],
    bb: BBEfficiencyResult | None,
    note: str | None = None,
) -> None:
    st.subheader("Results")
    if note:
        st.caption(note)
    values = [card.value for card in cards]
    badge_min, badge_max = st.columns(2)
    badge_min.metric("Min", fmt_money(min_number(values)))
    badge_max.metric("Max", fmt_money(max_number(values)))

    cols = st.columns(2)
    for idx, card in enumerate(cards):
        cols[idx % 2].metric(card.label, fmt_money(card.value), help=card.title)

    if bb is None:
        return
    st.markdown(f"**Bonus Bet Summary** | Total BB Used: **{fmt_money(bb.total_bb)}**")
    bb_cols = st.columns(2)
    for idx, (card, efficiency) in enumerate(zip(cards, bb.efficiencies)):
        bb_cols[idx % 2].write(f"{card.label}: {fmt_money(card.value)} → {fmt_x(efficiency)}")
    st.markdown(f"**MIN BB EFF:** {fmt_x(bb.min_efficiency)}")


# ----- Two-leg pages ----------------------------------------------------------


def render_two_leg_page(state_key: str, multi_stake: bool) -> None:
    draft: drafts.TwoLegDraft = _session_draft(state_key, lambda: store.load_two_leg(state_key))
    save = lambda d: store.save_two_leg(d, state_key)  # noqa: E731

    title = "Multi-Stake Arb (2-leg)" if multi_stake else "Simple Arb (2-leg)"
    header, reset_col = st.columns([0.8, 0.2])
    header.header(title)
    if reset_col.button("Reset", key=f"{state_key}-reset", use_container_width=True):
        store.delete(state_key)
        st.session_state[state_key] = drafts.new_two_leg_draft()
        st.rerun()

    columns = st.columns(2, gap="large")
    for col, side, label in zip(columns, ("dog", "fav"), ("Dog (Left)", "Fav (Right)")):
        with col:
            st.subheader(label)
            leg = getattr(draft, side)
            if multi_stake:
                meta = st.columns(3)
                team = meta[0].text_input("Team", value=leg.team, key=f"{state_key}-{side}-team")
                market = meta[1].text_input("Market", value=leg.market, key=f"{state_key}-{side}-market")
                event = meta[2].text_input("Event", value=leg.event, key=f"{state_key}-{side}-event")
                draft = drafts.update_leg(draft, side, team=team, market=market, event=event)
            else:
                st.caption("One stake line on this side.")
            slips = leg.slips if multi_stake else leg.slips[:1]
            for slip in slips:
                with st.container(border=True):
                    updated = render_slip_editor(slip)
                    if updated != slip:
                        draft = drafts.update_leg_slip(draft, side, slip.id, **vars(updated))
                    if multi_stake and st.button("Remove stake line", key=f"{slip.id}-remove"):
                        _commit(state_key, drafts.remove_leg_slip(draft, side, slip.id), save, rerun=True)
            if multi_stake and st.button("+ Add stake line", key=f"{state_key}-{side}-add"):
                _commit(state_key, drafts.add_leg_slip(draft, side), save, rerun=True)

    _commit(state_key, draft, save)

    if multi_stake:
        mismatch = market_or_event_mismatch(draft.dog, draft.fav)
        if mismatch.market_mismatch:
            st.warning("Markets differ between the two sides; double-check this is a true arb.")
        if mismatch.event_mismatch:
            st.warning("Events differ between the two sides; double-check this is a true arb.")

    computed = compute_arb(draft.legs)
    render_results(
        two_leg_outcome_cards(computed, left_label="Dog", right_label="Fav"),
        compute_bb_efficiency_from_arb(draft.legs),
    )


# ----- Parlay arb -------------------------------------------------------------

PARLAY_STATE = "parlay-arb"


def render_parlay_page() -> None:
    draft: drafts.ParlayDraft = _session_draft(PARLAY_STATE, store.load_parlay)
    save = store.save_parlay

    header, add_col = st.columns([0.8, 0.2])
    header.header("Parlay Arb")
    if add_col.button("+ Add Bucket", use_container_width=True):
        _commit(PARLAY_STATE, drafts.add_group(draft), save, rerun=True)

    for group in draft.groups:
        with st.container(border=True):
            top, remove_col = st.columns([0.8, 0.2])
            label = top.text_input("Label", value=group.label, key=f"{group.id}-label")
            if remove_col.button("Remove Bucket", key=f"{group.id}-remove"):
                _commit(PARLAY_STATE, drafts.remove_group(draft, group.id), save, rerun=True)
            meta = st.columns(3)
            market = meta[0].text_input("Market", value=group.market, key=f"{group.id}-market", placeholder="Parlay / SGP / ML / etc")
            event = meta[1].text_input("Event", value=group.event, key=f"{group.id}-event", placeholder="CHI-LAC")
            desc = meta[2].text_input("Parlay", value=group.parlay_desc, key=f"{group.id}-desc")
            draft = drafts.update_group(draft, group.id, label=label, market=market, event=event, parlay_desc=desc)

            for slip in group.slips:
                updated = render_slip_editor(slip)
                if updated != slip:
                    draft = drafts.update_group_slip(draft, group.id, slip.id, **vars(updated))
                if st.button("Remove stake line", key=f"{slip.id}-remove"):
                    _commit(PARLAY_STATE, drafts.remove_group_slip(draft, group.id, slip.id), save, rerun=True)
            if st.button("+ Add stake line", key=f"{group.id}-add"):
                _commit(PARLAY_STATE, drafts.add_group_slip(draft, group.id), save, rerun=True)

    _commit(PARLAY_STATE, draft, save)

    if not draft.groups:
        st.info("Add at least two buckets to compute an arb.")
        return
    computed = compute_parlay_arb(draft.groups)
    render_results(
        parlay_outcome_cards(computed, [group.label for group in draft.groups]),
        compute_bb_efficiency_from_parlay(draft.groups),
        note="Net win per bucket = bucket Net Payout minus cash at risk on all other buckets.",
    )


# ----- Pick sizer -------------------------------------------------------------

PICKS_STATE = "pick-sizer"


def render_pick_sizer_page() -> None:
    draft: drafts.PickSizerDraft = _session_draft(PICKS_STATE, store.load_pick_sizer)
    save = store.save_pick_sizer

    st.header("Pick Sizer")
    stored_bankroll = store.load_bankroll_size() or 0.0
    bankroll_col, save_col = st.columns([0.7, 0.3])
    bankroll_raw = bankroll_col.text_input("Your bankroll", value=_num_text(stored_bankroll))
    bankroll = parse_num(bankroll_raw, stored_bankroll)
    if save_col.button("Save bankroll", use_container_width=True) and bankroll > 0:
        store.save_bankroll_size(bankroll)
        st.success(f"Bankroll saved: {fmt_money(bankroll)}")

    market_values = [value for value, _ in MARKET_OPTIONS]
    market_labels = dict(MARKET_OPTIONS)
    for row in draft.rows:
        cols = st.columns([2.4, 1.2, 0.9, 0.9, 0.5])
        pick = cols[0].text_input("Pick", value=row.pick, key=f"{row.id}-pick")
        market = cols[1].selectbox(
            "Market",
            market_values,
            index=market_values.index(row.market) if row.market in market_values else 0,
            format_func=market_labels.get,
            key=f"{row.id}-market",
        )
        odds = cols[2].text_input("Odds", value=row.odds_american, key=f"{row.id}-odds")
        pct = cols[3].text_input("% of bankroll", value=row.pct_of_bankroll, key=f"{row.id}-pct")
        draft = drafts.update_pick_row(
            draft, row.id, pick=pick, market=market, odds_american=odds, pct_of_bankroll=pct
        )
        if cols[4].button("✕", key=f"{row.id}-remove"):
            _commit(PICKS_STATE, drafts.remove_pick_row(draft, row.id), save, rerun=True)

    add_col, reset_col = st.columns(2)
    if add_col.button("+ Add Pick", use_container_width=True):
        _commit(PICKS_STATE, drafts.add_pick_row(draft), save, rerun=True)
    if reset_col.button("Reset", key="picks-reset", use_container_width=True):
        _commit(PICKS_STATE, drafts.reset_pick_sizer(), save, rerun=True)
    _commit(PICKS_STATE, draft, save)

    result = size_pick_rows(bankroll, draft.rows)
    st.write(f"Total staked (all picks): **{fmt_money(result.total_amount)}**")
    if result.rows:
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "pick": item.row.pick,
                        "market": item.row.market,
                        "odds": item.row.odds_american,
                        "% of bankroll": item.row.pct_of_bankroll,
                        "amount": item.amount,
                        "to win": item.to_win,
                    }
                    for item in result.rows
                ]
            ),
            use_container_width=True,
        )


# ----- Bankroll ---------------------------------------------------------------


def _cash_controls(key: str, on_confirm: Callable[[str, float], None]) -> None:
    amount_col, deposit_col, withdraw_col = st.columns([0.5, 0.25, 0.25])
    raw = amount_col.text_input("Amount", value="", key=f"{key}-amount", label_visibility="collapsed")
    amount = abs(parse_num(raw, 0.0))
    if deposit_col.button("Deposit", key=f"{key}-deposit") and amount > 0:
        on_confirm("deposit", amount)
    if withdraw_col.button("Withdraw", key=f"{key}-withdraw") and amount > 0:
        on_confirm("withdraw", amount)


def render_bankroll_page() -> None:
    state = store.load_bankroll()

    def persist(next_state: ledger.BankrollState) -> None:
        store.save_bankroll(next_state)
        st.rerun()

    st.header("Bankroll")
    st.metric("Total Bankroll", fmt_money(ledger.total_bankroll(state)))

    st.subheader("Cashroll")
    st.write(fmt_money(state.cashroll))
    _cash_controls(
        "cashroll",
        lambda mode, amount: persist(
            ledger.deposit_cash(state, amount) if mode == "deposit" else ledger.withdraw_cash(state, amount)
        ),
    )

    st.subheader("Sportsbooks")
    if not state.books:
        st.caption("No sportsbooks added yet.")
    for book in state.books:
        with st.container(border=True):
            name_col, remove_col = st.columns([0.8, 0.2])
            name_col.write(f"**{book.name}**: {fmt_money(book.balance)}")
            if remove_col.button("Remove", key=f"{book.id}-remove"):
                persist(ledger.remove_book(state, book.id))
            _cash_controls(
                book.id,
                lambda mode, amount, book_id=book.id: persist(
                    ledger.deposit_book(state, book_id, amount)
                    if mode == "deposit"
                    else ledger.withdraw_book(state, book_id, amount)
                ),
            )

    with st.form("add_book_form", clear_on_submit=True):
        name = st.text_input("Sportsbook name")
        balance_raw = st.text_input("Starting balance", value="0")
        submitted = st.form_submit_button("Add sportsbook")
    if submitted:
        updated = ledger.add_book(state, name, max(0.0, parse_num(balance_raw, 0.0)))
        if updated is state:
            st.warning("Enter a new, non-blank sportsbook name.")
        else:
            persist(updated)


# ----- Navigation -------------------------------------------------------------

PAGES: dict[str, Callable[[], None]] = {
    "Simple Arb": lambda: render_two_leg_page(SIMPLE_ARB_KEY, multi_stake=False),
    "Multi-Stake Arb": lambda: render_two_leg_page(MULTI_STAKE_ARB_KEY, multi_stake=True),
    "Parlay Arb": render_parlay_page,
    "Pick Sizer": render_pick_sizer_page,
    "Bankroll": render_bankroll_page,
}

with st.sidebar:
    page = st.radio("Calculator", list(PAGES))

PAGES[page]()
