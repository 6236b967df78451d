"""Size picks as a percentage of bankroll and compute what each stake wins."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from arblab.arbs.engine import sum_left
from arblab.arbs.formatting import safe_round2
from arblab.drafts.parsing import parse_num

MARKET_OPTIONS: list[tuple[str, str]] = [
    ("", "Select…"),
    ("ML", "ML"),
    ("SPREAD:+OVER", "SPREAD:(+)OVER"),
    ("SPREAD:-UNDER", "SPREAD:(-)UNDER"),
    ("TOTAL:+OVER", "TOTAL:(+)OVER"),
    ("TOTAL:-UNDER", "TOTAL:(-)UNDER"),
]


@dataclass(frozen=True)
class PickInput:
    odds_american: float
    pct_of_bankroll: float  # 2.2 means 2.20%


@dataclass(frozen=True)
class PickSizing:
    amount: float
    to_win: float


@dataclass(frozen=True)
class PickRow:
    """A pick sizer row as typed; numeric fields stay text while editing."""

    id: str
    pick: str = ""
    market: str = ""
    odds_american: str = ""
    pct_of_bankroll: str = ""


@dataclass(frozen=True)
class SizedPick:
    row: PickRow
    amount: float
    to_win: float


@dataclass(frozen=True)
class PickSizerResult:
    rows: list[SizedPick]
    total_amount: float


def american_to_win(stake: float, odds_american: float) -> float:
    """Profit returned by a winning ``stake`` at ``odds_american`` (0 for unusable input)."""

    if not math.isfinite(stake) or stake < 0:
        return 0.0
    if not math.isfinite(odds_american) or odds_american == 0:
        return 0.0
    if odds_american > 0:
        return stake * (odds_american / 100)
    return stake * (100 / abs(odds_american))


def bankroll_size_pick(bankroll: float, pick: PickInput) -> PickSizing:
    b = bankroll if math.isfinite(bankroll) and bankroll > 0 else 0.0
    pct = pick.pct_of_bankroll if math.isfinite(pick.pct_of_bankroll) else 0.0
    amount = b * (pct / 100)
    return PickSizing(amount=amount, to_win=american_to_win(amount, pick.odds_american))


def bankroll_size_picks(bankroll: float, picks: Iterable[PickInput]) -> list[PickSizing]:
    return [bankroll_size_pick(bankroll, pick) for pick in picks]


def round_to_step(value: float, step: float = 0.01) -> float:
    """Round to the nearest ``step`` (0.01 cents, 0.5, 1, 5, ...)."""

    if not math.isfinite(value):
        return 0.0
    if not math.isfinite(step) or step <= 0:
        return value
    return math.floor(value / step + 0.5) * step


def size_pick_rows(bankroll: float, rows: Sequence[PickRow]) -> PickSizerResult:
    sized = []
    for row in rows:
        pick = PickInput(
            odds_american=parse_num(row.odds_american),
            pct_of_bankroll=parse_num(row.pct_of_bankroll),
        )
        sizing = bankroll_size_pick(bankroll, pick)
        sized.append(
            SizedPick(row=row, amount=safe_round2(sizing.amount), to_win=safe_round2(sizing.to_win))
        )
    total = safe_round2(sum_left(item.amount for item in sized))
    return PickSizerResult(rows=sized, total_amount=total)
