"""Pydantic schemas for drafts as persisted in the store and sent over the API."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from arblab.arbs.types import Leg, ParlayGroup, Promo, PromoType, Slip, make_promo
from arblab.drafts.state import ParlayDraft, PickSizerDraft, TwoLegDraft, make_id
from arblab.sizing.picks import PickRow


class FiniteModel(BaseModel):
    """Rejects NaN and infinity for every float field."""

    model_config = ConfigDict(allow_inf_nan=False)


class PromoSchema(FiniteModel):
    type: PromoType = PromoType.NONE
    boost_pct: float = 0.0
    bb_value: float = 0.0
    note: str = ""

    @classmethod
    def from_domain(cls, promo: Promo) -> PromoSchema:
        return cls(
            type=promo.type,
            boost_pct=getattr(promo, "boost_pct", 0.0),
            bb_value=getattr(promo, "bb_value", 0.0),
            note=promo.note,
        )

    def to_domain(self) -> Promo:
        return make_promo(self.type, boost_pct=self.boost_pct, bb_value=self.bb_value, note=self.note)


class SlipSchema(FiniteModel):
    id: str = Field(default_factory=make_id)
    book: str = ""
    odds_american: float = 100.0
    stake: float = 0.0
    promo: PromoSchema = Field(default_factory=PromoSchema)
    payout_override: float | None = None
    note: str = ""

    @classmethod
    def from_domain(cls, slip: Slip) -> SlipSchema:
        return cls(
            id=slip.id,
            book=slip.book,
            odds_american=slip.odds_american,
            stake=slip.stake,
            promo=PromoSchema.from_domain(slip.promo),
            payout_override=slip.payout_override,
            note=slip.note,
        )

    def to_domain(self) -> Slip:
        return Slip(
            id=self.id,
            book=self.book,
            odds_american=self.odds_american,
            stake=self.stake,
            promo=self.promo.to_domain(),
            payout_override=self.payout_override,
            note=self.note,
        )


class LegSchema(FiniteModel):
    side: Literal["dog", "fav"]
    team: str = ""
    market: str = "ML"
    event: str = ""
    note: str = ""
    slips: list[SlipSchema] = Field(min_length=1)

    @classmethod
    def from_domain(cls, leg: Leg) -> LegSchema:
        return cls(
            side=leg.side,
            team=leg.team,
            market=leg.market,
            event=leg.event,
            note=leg.note,
            slips=[SlipSchema.from_domain(slip) for slip in leg.slips],
        )

    def to_domain(self) -> Leg:
        return Leg(
            side=self.side,
            team=self.team,
            market=self.market,
            event=self.event,
            note=self.note,
            slips=[slip.to_domain() for slip in self.slips],
        )


class ParlayGroupSchema(FiniteModel):
    id: str = Field(default_factory=make_id)
    label: str
    parlay_desc: str = ""
    market: str = ""
    event: str = ""
    header_book: str = ""
    header_odds_american: float | None = None
    note: str = ""
    slips: list[SlipSchema] = Field(min_length=1)

    @classmethod
    def from_domain(cls, group: ParlayGroup) -> ParlayGroupSchema:
        return cls(
            id=group.id,
            label=group.label,
            parlay_desc=group.parlay_desc,
            market=group.market,
            event=group.event,
            header_book=group.header_book,
            header_odds_american=group.header_odds_american,
            note=group.note,
            slips=[SlipSchema.from_domain(slip) for slip in group.slips],
        )

    def to_domain(self) -> ParlayGroup:
        return ParlayGroup(
            id=self.id,
            label=self.label,
            parlay_desc=self.parlay_desc,
            market=self.market,
            event=self.event,
            header_book=self.header_book,
            header_odds_american=self.header_odds_american,
            note=self.note,
            slips=[slip.to_domain() for slip in self.slips],
        )


class TwoLegDraftSchema(FiniteModel):
    dog: LegSchema
    fav: LegSchema

    @classmethod
    def from_domain(cls, draft: TwoLegDraft) -> TwoLegDraftSchema:
        return cls(dog=LegSchema.from_domain(draft.dog), fav=LegSchema.from_domain(draft.fav))

    def to_domain(self) -> TwoLegDraft:
        return TwoLegDraft(dog=self.dog.to_domain(), fav=self.fav.to_domain())


class ParlayDraftSchema(FiniteModel):
    groups: list[ParlayGroupSchema]

    @classmethod
    def from_domain(cls, draft: ParlayDraft) -> ParlayDraftSchema:
        return cls(groups=[ParlayGroupSchema.from_domain(group) for group in draft.groups])

    def to_domain(self) -> ParlayDraft:
        return ParlayDraft(groups=[group.to_domain() for group in self.groups])


class PickRowSchema(BaseModel):
    id: str = Field(default_factory=make_id)
    pick: str = ""
    market: str = ""
    odds_american: str = ""
    pct_of_bankroll: str = ""


class PickSizerDraftSchema(BaseModel):
    rows: list[PickRowSchema] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, draft: PickSizerDraft) -> PickSizerDraftSchema:
        return cls(rows=[PickRowSchema(**asdict(row)) for row in draft.rows])

    def to_domain(self) -> PickSizerDraft:
        return PickSizerDraft(rows=[PickRow(**row.model_dump()) for row in self.rows])


class BankrollSizeSchema(FiniteModel):
    bankroll: float = Field(gt=0)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
