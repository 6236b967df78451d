"""Warn when the two sides of an arb are not on the same market or event."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class MarketEventComparable(Protocol):
    market: str | None
    event: str | None


@dataclass(frozen=True)
class MismatchResult:
    market_mismatch: bool
    event_mismatch: bool
    any_mismatch: bool


def _norm(value: str | None) -> str:
    return (value or "").strip().lower()


def _differs(a: str | None, b: str | None) -> bool:
    # blank on either side means "not entered", never a mismatch
    left, right = _norm(a), _norm(b)
    if not left or not right:
        return False
    return left != right


def market_mismatch(a: MarketEventComparable, b: MarketEventComparable) -> bool:
    return _differs(a.market, b.market)


def event_mismatch(a: MarketEventComparable, b: MarketEventComparable) -> bool:
    return _differs(a.event, b.event)


def market_or_event_mismatch(a: MarketEventComparable, b: MarketEventComparable) -> MismatchResult:
    market = market_mismatch(a, b)
    event = event_mismatch(a, b)
    return MismatchResult(market_mismatch=market, event_mismatch=event, any_mismatch=market or event)
