"""Display helpers for arb results. Non-finite numbers render as zero."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from arblab.arbs.engine import round2
from arblab.arbs.types import ArbComputed, ParlayArbComputed


@dataclass(frozen=True)
class OutcomeCard:
    label: str
    title: str
    value: float


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def fmt_money(value: float) -> str:
    return f"${_finite_or_zero(value):.2f}"


def fmt_x(value: float) -> str:
    return f"{_finite_or_zero(value):.2f}x"


def safe_round2(value: float) -> float:
    """Cents rounding for display totals; non-finite input becomes 0."""

    return round2(_finite_or_zero(value))


def min_number(values: Sequence[float]) -> float:
    return min(values) if values else 0.0


def max_number(values: Sequence[float]) -> float:
    return max(values) if values else 0.0


def two_leg_outcome_cards(
    computed: ArbComputed,
    left_label: str = "Left",
    right_label: str = "Right",
) -> list[OutcomeCard]:
    return [
        OutcomeCard(left_label, "Net win if Left wins", computed.net_win_if_leg0_wins),
        OutcomeCard(right_label, "Net win if Right wins", computed.net_win_if_leg1_wins),
    ]


def parlay_outcome_cards(
    computed: ParlayArbComputed,
    labels: Sequence[str] | None = None,
) -> list[OutcomeCard]:
    labels = labels or []
    cards = []
    for idx, value in enumerate(computed.net_wins):
        label = labels[idx] if idx < len(labels) else f"Bucket {idx + 1}"
        cards.append(OutcomeCard(label, f"Net win if Bucket {idx + 1} hits", value))
    return cards
