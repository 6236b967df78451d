"""Pure reducers over calculator drafts.

Every function takes a draft (or a piece of one) and returns a new object;
nothing is mutated in place. Legs and buckets always keep at least one slip:
removing the last one leaves a fresh default line behind.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Callable

from arblab.arbs.types import Leg, ParlayGroup, PromoType, Side, Slip, make_promo
from arblab.sizing.picks import PickRow

DEFAULT_BUCKET_LABELS = ("Team Favs", "Team Dogs", "Team Mix 1", "Team Mix 2")


def make_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class TwoLegDraft:
    dog: Leg
    fav: Leg

    @property
    def legs(self) -> tuple[Leg, Leg]:
        return (self.dog, self.fav)


@dataclass(frozen=True)
class ParlayDraft:
    groups: list[ParlayGroup] = field(default_factory=list)


@dataclass(frozen=True)
class PickSizerDraft:
    rows: list[PickRow] = field(default_factory=list)


# ----- Slips -------------------------------------------------------------------


def new_slip(**overrides: Any) -> Slip:
    return Slip(id=make_id(), **overrides)


def set_promo_type(slip: Slip, promo_type: PromoType | str) -> Slip:
    """Switch promo type; the previous type's boost / bonus value is dropped."""

    return replace(slip, promo=make_promo(promo_type, note=slip.promo.note))


def set_promo_value(slip: Slip, value: float) -> Slip:
    """Set the numeric field of the active promo (boost % or bonus-bet value)."""

    promo = slip.promo
    if promo.type in (PromoType.PROFIT_BOOST, PromoType.ODDS_BOOST):
        return replace(slip, promo=replace(promo, boost_pct=value))
    if promo.type is PromoType.BONUS_BET:
        return replace(slip, promo=replace(promo, bb_value=value))
    return slip


def update_slip(
    slip: Slip,
    *,
    promo_type: PromoType | str | None = None,
    promo_value: float | None = None,
    **changes: Any,
) -> Slip:
    updated = replace(slip, **changes) if changes else slip
    if promo_type is not None:
        updated = set_promo_type(updated, promo_type)
    if promo_value is not None:
        updated = set_promo_value(updated, promo_value)
    return updated


def _map_slip(slips: list[Slip], slip_id: str, fn: Callable[[Slip], Slip]) -> list[Slip]:
    return [fn(slip) if slip.id == slip_id else slip for slip in slips]


def _drop_slip(slips: list[Slip], slip_id: str) -> list[Slip]:
    remaining = [slip for slip in slips if slip.id != slip_id]
    return remaining or [new_slip()]


# ----- Two-leg drafts ----------------------------------------------------------


def make_leg(side: Side) -> Leg:
    return Leg(side=side, market="ML", slips=[new_slip()])


def new_two_leg_draft() -> TwoLegDraft:
    return TwoLegDraft(dog=make_leg("dog"), fav=make_leg("fav"))


def _with_leg(draft: TwoLegDraft, side: Side, leg: Leg) -> TwoLegDraft:
    return replace(draft, **{side: leg})


def update_leg(draft: TwoLegDraft, side: Side, **changes: Any) -> TwoLegDraft:
    return _with_leg(draft, side, replace(getattr(draft, side), **changes))


def update_leg_slip(draft: TwoLegDraft, side: Side, slip_id: str, **changes: Any) -> TwoLegDraft:
    leg: Leg = getattr(draft, side)
    slips = _map_slip(leg.slips, slip_id, lambda slip: update_slip(slip, **changes))
    return _with_leg(draft, side, replace(leg, slips=slips))


def add_leg_slip(draft: TwoLegDraft, side: Side) -> TwoLegDraft:
    leg: Leg = getattr(draft, side)
    return _with_leg(draft, side, replace(leg, slips=[*leg.slips, new_slip()]))


def remove_leg_slip(draft: TwoLegDraft, side: Side, slip_id: str) -> TwoLegDraft:
    leg: Leg = getattr(draft, side)
    return _with_leg(draft, side, replace(leg, slips=_drop_slip(leg.slips, slip_id)))


# ----- Parlay drafts -----------------------------------------------------------


def new_group(label: str = "Team Mix", **overrides: Any) -> ParlayGroup:
    overrides.setdefault("slips", [new_slip()])
    return ParlayGroup(id=make_id(), label=label, **overrides)


def new_parlay_draft() -> ParlayDraft:
    return ParlayDraft(groups=[new_group(label) for label in DEFAULT_BUCKET_LABELS])


def _map_group(
    draft: ParlayDraft,
    group_id: str,
    fn: Callable[[ParlayGroup], ParlayGroup],
) -> ParlayDraft:
    return ParlayDraft(groups=[fn(g) if g.id == group_id else g for g in draft.groups])


def update_group(draft: ParlayDraft, group_id: str, **changes: Any) -> ParlayDraft:
    return _map_group(draft, group_id, lambda g: replace(g, **changes))


def update_group_slip(
    draft: ParlayDraft,
    group_id: str,
    slip_id: str,
    **changes: Any,
) -> ParlayDraft:
    return _map_group(
        draft,
        group_id,
        lambda g: replace(g, slips=_map_slip(g.slips, slip_id, lambda s: update_slip(s, **changes))),
    )


def add_group_slip(draft: ParlayDraft, group_id: str) -> ParlayDraft:
    return _map_group(draft, group_id, lambda g: replace(g, slips=[*g.slips, new_slip()]))


def remove_group_slip(draft: ParlayDraft, group_id: str, slip_id: str) -> ParlayDraft:
    return _map_group(draft, group_id, lambda g: replace(g, slips=_drop_slip(g.slips, slip_id)))


def add_group(draft: ParlayDraft) -> ParlayDraft:
    label = f"Team Mix {len(draft.groups) - 1}"
    return ParlayDraft(groups=[*draft.groups, new_group(label)])


def remove_group(draft: ParlayDraft, group_id: str) -> ParlayDraft:
    return ParlayDraft(groups=[g for g in draft.groups if g.id != group_id])


# ----- Pick sizer --------------------------------------------------------------


def new_pick_row(**overrides: Any) -> PickRow:
    return PickRow(id=make_id(), **overrides)


def new_pick_sizer_draft() -> PickSizerDraft:
    return PickSizerDraft(rows=[new_pick_row()])


def add_pick_row(draft: PickSizerDraft) -> PickSizerDraft:
    return PickSizerDraft(rows=[*draft.rows, new_pick_row()])


def remove_pick_row(draft: PickSizerDraft, row_id: str) -> PickSizerDraft:
    return PickSizerDraft(rows=[row for row in draft.rows if row.id != row_id])


def update_pick_row(draft: PickSizerDraft, row_id: str, **changes: Any) -> PickSizerDraft:
    return PickSizerDraft(
        rows=[replace(row, **changes) if row.id == row_id else row for row in draft.rows]
    )


def reset_pick_sizer() -> PickSizerDraft:
    return PickSizerDraft(rows=[new_pick_row(), new_pick_row()])
