"""Pydantic schemas for the ArbLab API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from arblab.arbs.types import (
    ArbComputed,
    BBEfficiencyResult,
    LegComputed,
    ParlayArbComputed,
    SlipComputed,
)
from arblab.drafts.schemas import FiniteModel, LegSchema, ParlayGroupSchema, SlipSchema


class ComputeSlip(SlipSchema):
    @field_validator("odds_american")
    @classmethod
    def odds_not_zero(cls, value: float) -> float:
        if value == 0:
            raise ValueError("American odds cannot be 0")
        return value


class ComputeLeg(LegSchema):
    slips: list[ComputeSlip] = Field(min_length=1)


class ComputeParlayGroup(ParlayGroupSchema):
    slips: list[ComputeSlip] = Field(min_length=1)


class TwoLegRequest(BaseModel):
    legs: list[ComputeLeg] = Field(min_length=2, max_length=2)


class ParlayRequest(BaseModel):
    groups: list[ComputeParlayGroup] = Field(min_length=2)


class SlipResult(BaseModel):
    decimal_odds_effective: float
    base_profit: float
    promo_profit: float
    payout: float
    cash_at_risk: float
    net_payout: float

    @classmethod
    def from_domain(cls, slip: SlipComputed) -> SlipResult:
        return cls(**vars(slip))


class LegResult(BaseModel):
    slips: list[SlipResult]
    total_payout: float
    total_cash_at_risk: float
    total_net_payout: float

    @classmethod
    def from_domain(cls, leg: LegComputed) -> LegResult:
        return cls(
            slips=[SlipResult.from_domain(slip) for slip in leg.slips],
            total_payout=leg.total_payout,
            total_cash_at_risk=leg.total_cash_at_risk,
            total_net_payout=leg.total_net_payout,
        )


class BBEfficiency(BaseModel):
    total_bb: float
    net_wins: list[float]
    efficiencies: list[float]
    min_efficiency: float

    @classmethod
    def from_domain(cls, result: BBEfficiencyResult | None) -> BBEfficiency | None:
        if result is None:
            return None
        return cls(**vars(result))


class Mismatch(BaseModel):
    market_mismatch: bool
    event_mismatch: bool
    any_mismatch: bool


class TwoLegResponse(BaseModel):
    legs: list[LegResult]
    net_win_if_leg0_wins: float
    net_win_if_leg1_wins: float
    min_net_win: float
    max_net_win: float
    mismatch: Mismatch
    bb_efficiency: BBEfficiency | None = None

    @classmethod
    def build(
        cls,
        computed: ArbComputed,
        mismatch: Mismatch,
        bb: BBEfficiencyResult | None,
    ) -> TwoLegResponse:
        return cls(
            legs=[LegResult.from_domain(leg) for leg in computed.legs],
            net_win_if_leg0_wins=computed.net_win_if_leg0_wins,
            net_win_if_leg1_wins=computed.net_win_if_leg1_wins,
            min_net_win=min(computed.net_wins),
            max_net_win=max(computed.net_wins),
            mismatch=mismatch,
            bb_efficiency=BBEfficiency.from_domain(bb),
        )


class ParlayResponse(BaseModel):
    groups: list[LegResult]
    labels: list[str]
    net_wins: list[float]
    min_net_win: float
    max_net_win: float
    bb_efficiency: BBEfficiency | None = None

    @classmethod
    def build(
        cls,
        computed: ParlayArbComputed,
        labels: list[str],
        bb: BBEfficiencyResult | None,
    ) -> ParlayResponse:
        return cls(
            groups=[LegResult.from_domain(group) for group in computed.groups],
            labels=labels,
            net_wins=computed.net_wins,
            min_net_win=min(computed.net_wins),
            max_net_win=max(computed.net_wins),
            bb_efficiency=BBEfficiency.from_domain(bb),
        )


class PickIn(FiniteModel):
    odds_american: float
    pct_of_bankroll: float


class PickSizeRequest(FiniteModel):
    bankroll: float
    picks: list[PickIn] = Field(min_length=1)


class PickSizeRow(BaseModel):
    amount: float
    to_win: float


class PickSizeResponse(BaseModel):
    rows: list[PickSizeRow]
    total_amount: float


class DraftResponse(BaseModel):
    key: str
    payload: Any


class CashRequest(FiniteModel):
    mode: Literal["deposit", "withdraw"]
    amount: float


class BookRequest(FiniteModel):
    name: str = Field(min_length=1)
    balance: float = 0.0


class SportsbookOut(BaseModel):
    id: str
    name: str
    balance: float


class BankrollResponse(BaseModel):
    cashroll: float
    books: list[SportsbookOut]
    total_bankroll: float
