"""FastAPI backend for ArbLab."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from functools import lru_cache
from typing import Annotated, Any

from fastapi import Body, Depends, FastAPI, Header, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from arblab import __version__
from arblab.api.schemas import (
    BankrollResponse,
    BookRequest,
    CashRequest,
    DraftResponse,
    Mismatch,
    ParlayRequest,
    ParlayResponse,
    PickSizeRequest,
    PickSizeResponse,
    PickSizeRow,
    SportsbookOut,
    TwoLegRequest,
    TwoLegResponse,
)
from arblab.arbs.efficiency import compute_bb_efficiency_from_arb, compute_bb_efficiency_from_parlay
from arblab.arbs.engine import compute_arb, compute_parlay_arb, sum_left
from arblab.arbs.formatting import safe_round2
from arblab.arbs.mismatch import market_or_event_mismatch
from arblab.arbs.types import BBEfficiencyResult, LegComputed
from arblab.bankroll import ledger
from arblab.config import get_api_access_key
from arblab.db.database import init_db
from arblab.drafts.store import DraftStore
from arblab.sizing.picks import PickInput, bankroll_size_picks

logger = logging.getLogger(__name__)

app = FastAPI(
    title="ArbLab API",
    version=__version__,
    description="Arbitrage payout engine, pick sizing and local draft storage.",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_store() -> DraftStore:
    init_db()
    return DraftStore()


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    expected = get_api_access_key()
    if expected is None:
        return
    if not x_api_key or x_api_key != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


StoreDep = Annotated[DraftStore, Depends(get_store)]
APIKeyDep = Annotated[None, Depends(require_api_key)]


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
def version() -> dict[str, Any]:
    return {"name": "arblab", "version": __version__}


# ----- Calculators -------------------------------------------------------------


def _outcome_values(
    legs: Iterable[LegComputed],
    net_wins: Iterable[float],
    bb: BBEfficiencyResult | None,
) -> Iterator[float]:
    for leg in legs:
        yield leg.total_payout
        yield leg.total_cash_at_risk
        yield leg.total_net_payout
        for slip in leg.slips:
            yield from vars(slip).values()
    yield from net_wins
    if bb is not None:
        yield bb.total_bb
        yield from bb.efficiencies


def ensure_finite(values: Iterable[float]) -> None:
    """JSON has no infinity; inputs that overflow are rejected like any invalid body."""

    if not all(math.isfinite(value) for value in values):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Inputs are too large: the result is not a finite number",
        )


@app.post("/arb/two-leg", response_model=TwoLegResponse)
def two_leg_arb(payload: TwoLegRequest) -> TwoLegResponse:
    legs = [leg.to_domain() for leg in payload.legs]
    computed = compute_arb(legs)
    bb = compute_bb_efficiency_from_arb(legs)
    ensure_finite(_outcome_values(computed.legs, computed.net_wins, bb))
    mismatch = market_or_event_mismatch(legs[0], legs[1])
    return TwoLegResponse.build(computed, Mismatch(**vars(mismatch)), bb)


@app.post("/arb/parlay", response_model=ParlayResponse)
def parlay_arb(payload: ParlayRequest) -> ParlayResponse:
    groups = [group.to_domain() for group in payload.groups]
    computed = compute_parlay_arb(groups)
    bb = compute_bb_efficiency_from_parlay(groups)
    ensure_finite(_outcome_values(computed.groups, computed.net_wins, bb))
    return ParlayResponse.build(computed, [group.label for group in groups], bb)


@app.post("/picks/size", response_model=PickSizeResponse)
def size_picks(payload: PickSizeRequest) -> PickSizeResponse:
    picks = [PickInput(pick.odds_american, pick.pct_of_bankroll) for pick in payload.picks]
    sized = bankroll_size_picks(payload.bankroll, picks)
    ensure_finite(value for s in sized for value in (s.amount, s.to_win))
    rows = [PickSizeRow(amount=safe_round2(s.amount), to_win=safe_round2(s.to_win)) for s in sized]
    total = sum_left(row.amount for row in rows)
    ensure_finite([total])
    return PickSizeResponse(rows=rows, total_amount=safe_round2(total))


# ----- Drafts ------------------------------------------------------------------


@app.get("/drafts", response_model=list[str])
def list_drafts(_: APIKeyDep, store: StoreDep) -> list[str]:
    return store.keys()


@app.get("/drafts/{key}", response_model=DraftResponse)
def read_draft(key: str, _: APIKeyDep, store: StoreDep) -> DraftResponse:
    payload = store.get(key)
    if payload is None:
        raise HTTPException(status_code=404, detail=f"No draft stored under {key!r}")
    return DraftResponse(key=key, payload=payload)


@app.put("/drafts/{key}", response_model=DraftResponse)
def write_draft(
    key: str,
    payload: Annotated[Any, Body()],
    _: APIKeyDep,
    store: StoreDep,
) -> DraftResponse:
    store.put(key, payload)
    return DraftResponse(key=key, payload=payload)


@app.delete("/drafts/{key}", status_code=status.HTTP_204_NO_CONTENT)
def delete_draft(key: str, _: APIKeyDep, store: StoreDep) -> None:
    if not store.delete(key):
        raise HTTPException(status_code=404, detail=f"No draft stored under {key!r}")


# ----- Bankroll ----------------------------------------------------------------


def _bankroll_response(state: ledger.BankrollState) -> BankrollResponse:
    return BankrollResponse(
        cashroll=state.cashroll,
        books=[SportsbookOut(id=b.id, name=b.name, balance=b.balance) for b in state.books],
        total_bankroll=ledger.total_bankroll(state),
    )


@app.get("/bankroll", response_model=BankrollResponse)
def read_bankroll(_: APIKeyDep, store: StoreDep) -> BankrollResponse:
    return _bankroll_response(store.load_bankroll())


@app.post("/bankroll/cash", response_model=BankrollResponse)
def cashroll_cash(payload: CashRequest, _: APIKeyDep, store: StoreDep) -> BankrollResponse:
    state = store.load_bankroll()
    if payload.mode == "deposit":
        state = ledger.deposit_cash(state, payload.amount)
    else:
        state = ledger.withdraw_cash(state, payload.amount)
    store.save_bankroll(state)
    logger.info("Cashroll %s of %.2f", payload.mode, abs(payload.amount))
    return _bankroll_response(state)


@app.post("/bankroll/books", response_model=BankrollResponse)
def create_book(payload: BookRequest, _: APIKeyDep, store: StoreDep) -> BankrollResponse:
    state = store.load_bankroll()
    updated = ledger.add_book(state, payload.name, payload.balance)
    if updated is state:
        raise HTTPException(status_code=409, detail=f"Sportsbook {payload.name.strip()!r} already exists")
    store.save_bankroll(updated)
    return _bankroll_response(updated)


@app.post("/bankroll/books/{book_id}/cash", response_model=BankrollResponse)
def book_cash(book_id: str, payload: CashRequest, _: APIKeyDep, store: StoreDep) -> BankrollResponse:
    state = store.load_bankroll()
    if ledger.find_book(state, book_id) is None:
        raise HTTPException(status_code=404, detail="Sportsbook not found")
    if payload.mode == "deposit":
        state = ledger.deposit_book(state, book_id, payload.amount)
    else:
        state = ledger.withdraw_book(state, book_id, payload.amount)
    store.save_bankroll(state)
    return _bankroll_response(state)


@app.delete("/bankroll/books/{book_id}", response_model=BankrollResponse)
def delete_book(book_id: str, _: APIKeyDep, store: StoreDep) -> BankrollResponse:
    state = store.load_bankroll()
    if ledger.find_book(state, book_id) is None:
        raise HTTPException(status_code=404, detail="Sportsbook not found")
    state = ledger.remove_book(state, book_id)
    store.save_bankroll(state)
    return _bankroll_response(state)
