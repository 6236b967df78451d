"""Dataclasses for stake lines, promos, legs, buckets and their computed results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Literal, Union

Side = Literal["dog", "fav"]


class PromoType(str, Enum):
    NONE = "none"
    PROFIT_BOOST = "profit_boost"
    ODDS_BOOST = "odds_boost"
    BONUS_BET = "bonus_bet"
    INSURED = "insured"


PROMO_LABELS: dict[PromoType, str] = {
    PromoType.NONE: "None",
    PromoType.PROFIT_BOOST: "Profit Boost (+% profit)",
    PromoType.ODDS_BOOST: "Odds Boost (+% odds)",
    PromoType.BONUS_BET: "Bonus Bet / Free Bet (stake not returned)",
    PromoType.INSURED: "Insured / Risk-Free (treat losing stake as refunded)",
}


@dataclass(frozen=True)
class NoPromo:
    type: ClassVar[PromoType] = PromoType.NONE
    note: str = ""


@dataclass(frozen=True)
class ProfitBoost:
    type: ClassVar[PromoType] = PromoType.PROFIT_BOOST
    boost_pct: float = 0.0
    note: str = ""


@dataclass(frozen=True)
class OddsBoost:
    type: ClassVar[PromoType] = PromoType.ODDS_BOOST
    boost_pct: float = 0.0
    note: str = ""


@dataclass(frozen=True)
class BonusBet:
    """Free bet; ``bb_value`` is the face value, tracked for efficiency only."""

    type: ClassVar[PromoType] = PromoType.BONUS_BET
    bb_value: float = 0.0
    note: str = ""


@dataclass(frozen=True)
class Insured:
    type: ClassVar[PromoType] = PromoType.INSURED
    note: str = ""


Promo = Union[NoPromo, ProfitBoost, OddsBoost, BonusBet, Insured]


def make_promo(
    promo_type: PromoType | str,
    boost_pct: float = 0.0,
    bb_value: float = 0.0,
    note: str = "",
) -> Promo:
    """Build the promo variant for ``promo_type``, keeping only its own fields."""

    promo_type = PromoType(promo_type)
    if promo_type is PromoType.PROFIT_BOOST:
        return ProfitBoost(boost_pct=boost_pct, note=note)
    if promo_type is PromoType.ODDS_BOOST:
        return OddsBoost(boost_pct=boost_pct, note=note)
    if promo_type is PromoType.BONUS_BET:
        return BonusBet(bb_value=bb_value, note=note)
    if promo_type is PromoType.INSURED:
        return Insured(note=note)
    return NoPromo(note=note)


@dataclass(frozen=True)
class Slip:
    id: str
    book: str = ""
    odds_american: float = 100.0
    stake: float = 0.0
    promo: Promo = field(default_factory=NoPromo)
    payout_override: float | None = None
    note: str = ""


@dataclass(frozen=True)
class Leg:
    side: Side
    team: str = ""
    market: str = "ML"
    event: str = ""
    note: str = ""
    slips: list[Slip] = field(default_factory=list)


@dataclass(frozen=True)
class ParlayGroup:
    """One mutually exclusive outcome (bucket) of an N-way parlay arb."""

    id: str
    label: str
    parlay_desc: str = ""
    market: str = ""
    event: str = ""
    header_book: str = ""
    header_odds_american: float | None = None
    note: str = ""
    slips: list[Slip] = field(default_factory=list)


@dataclass(frozen=True)
class SlipComputed:
    decimal_odds_effective: float
    base_profit: float
    promo_profit: float
    payout: float
    cash_at_risk: float
    net_payout: float


@dataclass(frozen=True)
class LegComputed:
    slips: list[SlipComputed]
    total_payout: float
    total_cash_at_risk: float
    total_net_payout: float


ParlayGroupComputed = LegComputed


@dataclass(frozen=True)
class ArbComputed:
    legs: tuple[LegComputed, LegComputed]
    net_win_if_leg0_wins: float
    net_win_if_leg1_wins: float

    @property
    def net_wins(self) -> list[float]:
        return [self.net_win_if_leg0_wins, self.net_win_if_leg1_wins]


@dataclass(frozen=True)
class ParlayArbComputed:
    groups: list[ParlayGroupComputed]
    net_wins: list[float]


@dataclass(frozen=True)
class BBEfficiencyResult:
    total_bb: float
    net_wins: list[float]
    efficiencies: list[float]
    min_efficiency: float
