"""Bonus-bet efficiency: guaranteed net win per dollar of bonus-bet face value."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from arblab.arbs.engine import compute_arb, compute_parlay_arb, round2, sum_left
from arblab.arbs.types import BBEfficiencyResult, BonusBet, Leg, ParlayGroup, Slip


def total_bonus_bet_value(slips: Iterable[Slip]) -> float:
    return sum_left(
        slip.promo.bb_value
        for slip in slips
        if isinstance(slip.promo, BonusBet) and slip.promo.bb_value
    )


def compute_bb_efficiency(
    slips: Iterable[Slip],
    net_wins: Sequence[float],
) -> BBEfficiencyResult | None:
    """Return efficiency per outcome, or None when no bonus-bet value is in play."""

    total_bb = round2(total_bonus_bet_value(slips))
    if total_bb <= 0:
        return None
    efficiencies = [round2(net_win / total_bb) for net_win in net_wins]
    return BBEfficiencyResult(
        total_bb=total_bb,
        net_wins=list(net_wins),
        efficiencies=efficiencies,
        # no outcomes: 0 rather than +inf so the result stays JSON-safe
        min_efficiency=min(efficiencies, default=0.0),
    )


def compute_bb_efficiency_from_arb(legs: Sequence[Leg]) -> BBEfficiencyResult | None:
    arb = compute_arb(legs)
    all_slips = [slip for leg in legs for slip in leg.slips]
    return compute_bb_efficiency(all_slips, arb.net_wins)


def compute_bb_efficiency_from_parlay(groups: Sequence[ParlayGroup]) -> BBEfficiencyResult | None:
    parlay = compute_parlay_arb(groups)
    all_slips = [slip for group in groups for slip in group.slips]
    return compute_bb_efficiency(all_slips, parlay.net_wins)
