# core/transforms.py
from __future__ import annotations
from datetime import date
from decimal import Decimal
from typing import Dict, List, Mapping, Sequence

from core.config import CARRY_FORWARD, CarryForward
from core.errors import ParseError
from core.models import (
    DailyPoint,
    FundHolding,
    HoldingValuation,
    NavPoint,
    PortfolioHistory,
    PortfolioSummary,
    SchemeRecord,
)

ZERO = Decimal("0")

# ---------- 1) Current valuation ----------

def value_holding(holding: FundHolding, scheme: SchemeRecord, history: Sequence[NavPoint]) -> HoldingValuation:
    """Price a holding at the last point of its (ascending) NAV history."""
    if not history:
        raise ParseError(scheme.scheme_code, "empty NAV history")
    latest = history[-1]
    current = latest.nav * holding.units
    return HoldingValuation(
        holding=holding,
        scheme=scheme,
        latest_nav=latest.nav,
        latest_date=latest.date,
        current=current,
        pl=current - holding.invested,
    )


def summarize(valuations: Sequence[HoldingValuation]) -> PortfolioSummary:
    total_invested = sum((v.holding.invested for v in valuations), ZERO)
    total_current = sum((v.current for v in valuations), ZERO)
    if total_invested <= 0:
        raise ValueError("total invested must be positive to compute P&L %")
    net_pl = total_current - total_invested
    return PortfolioSummary(
        total_invested=total_invested,
        total_current=total_current,
        net_pl=net_pl,
        net_pl_percent=net_pl / total_invested * 100,
    )

# ---------- 2) Historical series ----------

def holding_series(holding: FundHolding, history: Sequence[NavPoint]) -> Dict[date, Decimal]:
    """Market value of one holding per NAV date."""
    return {p.date: p.nav * holding.units for p in history}


def _fold(series: Sequence[Mapping[date, Decimal]]) -> Dict[date, Dict[int, Decimal]]:
    """date -> {holding index: value}, keys ascending."""
    acc: Dict[date, Dict[int, Decimal]] = {}
    for idx, s in enumerate(series):
        for d, v in s.items():
            acc.setdefault(d, {})[idx] = v
    return {d: acc[d] for d in sorted(acc)}


def _per_fund(acc: Dict[date, Dict[int, Decimal]], n: int) -> List[DailyPoint]:
    # Each fund keeps its last known value until it reports again; the series
    # starts on the first date every fund has reported at least once.
    last: Dict[int, Decimal] = {}
    points: List[DailyPoint] = []
    for d, today in acc.items():
        last.update(today)
        if len(last) < n:
            continue
        total = sum((last[i] for i in range(n)), ZERO)
        points.append(DailyPoint(d, total, complete=len(today) == n))
    return points


def _legacy(acc: Dict[date, Dict[int, Decimal]], n: int) -> List[DailyPoint]:
    # Sum whatever reported that day (absent funds count as zero); a zero
    # total falls back to the previous output value.
    prev: Decimal | None = None
    points: List[DailyPoint] = []
    for d, today in acc.items():
        total = sum((today[i] for i in sorted(today)), ZERO)
        if total != 0:
            prev = total
        if prev is None:
            continue
        points.append(DailyPoint(d, prev, complete=len(today) == n))
    return points


def build_history(
    series: Sequence[Mapping[date, Decimal]],
    policy: CarryForward = CARRY_FORWARD,
) -> PortfolioHistory:
    """
    Combine per-holding `date -> value` series into one portfolio series.

    `series` must be in configured-holding order; dates come out strictly
    ascending. See `CarryForward` for how dates with missing funds are valued.
    """
    acc = _fold(series)
    policy = CarryForward(policy)
    if policy is CarryForward.LEGACY:
        return PortfolioHistory(_legacy(acc, len(series)))
    return PortfolioHistory(_per_fund(acc, len(series)))
