"""Cashroll and per-sportsbook balances.

All operations are pure: they take a :class:`BankrollState` and return a new
one. Deposits and withdrawals use the absolute value of the amount entered and
withdrawals never take a balance below zero.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Literal

from arblab.arbs.engine import sum_left
from arblab.arbs.formatting import safe_round2

CashMode = Literal["deposit", "withdraw"]


@dataclass(frozen=True)
class Sportsbook:
    id: str
    name: str
    balance: float = 0.0


@dataclass(frozen=True)
class BankrollState:
    cashroll: float = 0.0
    books: list[Sportsbook] = field(default_factory=list)


def _finite(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def apply_cash(balance: float, mode: CashMode, amount: float) -> float:
    current = _finite(balance)
    amount_abs = abs(_finite(amount))
    if amount_abs <= 0:
        return current
    if mode == "deposit":
        return safe_round2(current + amount_abs)
    if mode == "withdraw":
        return safe_round2(max(0.0, current - amount_abs))
    raise ValueError(f"Unknown cash mode: {mode!r}")


def deposit_cash(state: BankrollState, amount: float) -> BankrollState:
    return replace(state, cashroll=apply_cash(state.cashroll, "deposit", amount))


def withdraw_cash(state: BankrollState, amount: float) -> BankrollState:
    return replace(state, cashroll=apply_cash(state.cashroll, "withdraw", amount))


def find_book(state: BankrollState, book_id: str) -> Sportsbook | None:
    return next((book for book in state.books if book.id == book_id), None)


def add_book(state: BankrollState, name: str, balance: float = 0.0) -> BankrollState:
    """Add a sportsbook; blank names and case-insensitive duplicates are ignored."""

    clean = name.strip()
    if not clean:
        return state
    if any(book.name.strip().lower() == clean.lower() for book in state.books):
        return state
    book = Sportsbook(id=str(uuid.uuid4()), name=clean, balance=max(0.0, _finite(balance)))
    return replace(state, books=[*state.books, book])


def remove_book(state: BankrollState, book_id: str) -> BankrollState:
    return replace(state, books=[book for book in state.books if book.id != book_id])


def _book_cash(state: BankrollState, book_id: str, mode: CashMode, amount: float) -> BankrollState:
    books = [
        replace(book, balance=apply_cash(book.balance, mode, amount)) if book.id == book_id else book
        for book in state.books
    ]
    return replace(state, books=books)


def deposit_book(state: BankrollState, book_id: str, amount: float) -> BankrollState:
    return _book_cash(state, book_id, "deposit", amount)


def withdraw_book(state: BankrollState, book_id: str, amount: float) -> BankrollState:
    return _book_cash(state, book_id, "withdraw", amount)


def total_bankroll(state: BankrollState) -> float:
    books_total = sum_left(_finite(book.balance) for book in state.books)
    return safe_round2(max(0.0, _finite(state.cashroll)) + max(0.0, books_total))


def normalize_bankroll(payload: Any) -> BankrollState:
    """Rebuild a ledger from a stored payload, tolerating missing or bad fields."""

    if not isinstance(payload, dict):
        return BankrollState()
    raw_books = payload.get("books")
    books = []
    for raw in raw_books if isinstance(raw_books, list) else []:
        if not isinstance(raw, dict):
            continue
        name = raw.get("name") if isinstance(raw.get("name"), str) else ""
        if not name.strip():
            continue
        book_id = raw.get("id") if isinstance(raw.get("id"), str) else str(uuid.uuid4())
        books.append(Sportsbook(id=book_id, name=name, balance=_finite(raw.get("balance"))))
    return BankrollState(cashroll=_finite(payload.get("cashroll")), books=books)


def bankroll_payload(state: BankrollState) -> dict[str, Any]:
    """Persisted form of the ledger: clamped, rounded, nameless books dropped."""

    books = [
        {"id": book.id, "name": book.name.strip(), "balance": safe_round2(max(0.0, _finite(book.balance)))}
        for book in state.books
        if book.name.strip()
    ]
    return {
        "cashroll": safe_round2(max(0.0, _finite(state.cashroll))),
        "books": books,
        "updatedAt": datetime.now(timezone.utc).isoformat(),
    }
