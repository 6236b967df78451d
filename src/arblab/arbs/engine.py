"""Arbitrage payout engine: slips -> legs/buckets -> net win per outcome."""

from __future__ import annotations

import math
import operator
import sys
from collections.abc import Iterable, Sequence
from functools import reduce

from arblab.arbs.types import (
    ArbComputed,
    BonusBet,
    Insured,
    Leg,
    LegComputed,
    OddsBoost,
    ParlayArbComputed,
    ParlayGroup,
    ParlayGroupComputed,
    ProfitBoost,
    Slip,
    SlipComputed,
)

EPSILON = sys.float_info.epsilon


def american_to_decimal(odds_american: float) -> float:
    """Convert American odds to decimal odds.

    Odds of exactly 0 are not guarded: the favourite branch divides by zero
    with IEEE semantics and the result is ``inf``.
    """

    if odds_american > 0:
        return 1 + odds_american / 100
    magnitude = abs(odds_american)
    if magnitude == 0:
        return math.inf
    return 1 + 100 / magnitude


def round2(value: float) -> float:
    """Round to cents, half up, nudged by machine epsilon. Non-finite values pass through."""

    if not math.isfinite(value):
        return value
    scaled = (value + EPSILON) * 100
    if not math.isfinite(scaled):
        # beyond cent resolution already
        return value
    return math.floor(scaled + 0.5) / 100


def sum_left(values: Iterable[float]) -> float:
    """Plain left-to-right float sum, without the compensation ``sum`` applies."""

    return reduce(operator.add, values, 0.0)


def compute_slip(slip: Slip) -> SlipComputed:
    promo = slip.promo
    dec_base = american_to_decimal(slip.odds_american)
    base_profit = slip.stake * (dec_base - 1)

    dec_effective = dec_base
    promo_profit = base_profit

    if isinstance(promo, ProfitBoost):
        promo_profit = base_profit * (1 + promo.boost_pct / 100)
    elif isinstance(promo, OddsBoost):
        boosted_profit_per_dollar = (dec_base - 1) * (1 + promo.boost_pct / 100)
        dec_effective = 1 + boosted_profit_per_dollar
        promo_profit = slip.stake * (dec_effective - 1)

    is_bonus_bet = isinstance(promo, BonusBet)
    is_insured = isinstance(promo, Insured)

    # a bonus bet returns profit only; the stake was never the bettor's cash
    payout_auto = promo_profit if is_bonus_bet else slip.stake + promo_profit
    payout = slip.payout_override if slip.payout_override is not None else payout_auto

    cash_at_risk = 0.0 if is_bonus_bet or is_insured else slip.stake
    net_payout = payout - cash_at_risk

    return SlipComputed(
        decimal_odds_effective=round2(dec_effective),
        base_profit=round2(base_profit),
        promo_profit=round2(promo_profit),
        payout=round2(payout),
        cash_at_risk=round2(cash_at_risk),
        net_payout=round2(net_payout),
    )


def compute_leg(slips: Iterable[Slip]) -> LegComputed:
    """Evaluate every slip and total payout, cash at risk and net payout."""

    computed = [compute_slip(slip) for slip in slips]
    return LegComputed(
        slips=computed,
        total_payout=round2(sum_left(c.payout for c in computed)),
        total_cash_at_risk=round2(sum_left(c.cash_at_risk for c in computed)),
        total_net_payout=round2(sum_left(c.net_payout for c in computed)),
    )


def compute_parlay_group(group: ParlayGroup) -> ParlayGroupComputed:
    return compute_leg(group.slips)


def compute_arb(legs: Sequence[Leg]) -> ArbComputed:
    """Resolve net win for each side of a two-way arb."""

    if len(legs) != 2:
        raise ValueError(f"Two-leg arb needs exactly 2 legs, got {len(legs)}")
    c0 = compute_leg(legs[0].slips)
    c1 = compute_leg(legs[1].slips)
    return ArbComputed(
        legs=(c0, c1),
        net_win_if_leg0_wins=round2(c0.total_net_payout - c1.total_cash_at_risk),
        net_win_if_leg1_wins=round2(c1.total_net_payout - c0.total_cash_at_risk),
    )


def compute_parlay_arb(groups: Sequence[ParlayGroup]) -> ParlayArbComputed:
    """Resolve net win per bucket: its net payout minus cash at risk everywhere else."""

    computed = [compute_parlay_group(group) for group in groups]
    net_wins = []
    for i, group in enumerate(computed):
        other_risk = sum_left(other.total_cash_at_risk for j, other in enumerate(computed) if j != i)
        net_wins.append(round2(group.total_net_payout - other_risk))
    return ParlayArbComputed(groups=computed, net_wins=net_wins)
