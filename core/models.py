# models.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from core.errors import PortfolioError


@dataclass(frozen=True)
class FundHolding:
    name: str
    invested: Decimal
    units: Decimal


@dataclass(frozen=True)
class SchemeRecord:
    scheme_code: str
    scheme_name: str


@dataclass(frozen=True)
class NavPoint:
    date: date
    nav: Decimal


@dataclass(frozen=True)
class HoldingValuation:
    """One holding priced at its latest NAV on or after the buy date."""
    holding: FundHolding
    scheme: SchemeRecord
    latest_nav: Decimal
    latest_date: date
    current: Decimal
    pl: Decimal

    @property
    def display_name(self) -> str:
        return self.scheme.scheme_name

    @property
    def invested(self) -> Decimal:
        return self.holding.invested

    @property
    def pl_percent(self) -> Optional[Decimal]:
        if self.holding.invested <= 0:
            return None
        return self.pl / self.holding.invested * 100


@dataclass(frozen=True)
class HoldingFailure:
    holding: FundHolding
    error: PortfolioError

    @property
    def reason(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class PortfolioSummary:
    total_invested: Decimal
    total_current: Decimal
    net_pl: Decimal
    net_pl_percent: Decimal


@dataclass(frozen=True)
class DailyPoint:
    date: date
    value: Decimal
    complete: bool  # every holding reported a NAV on this exact date


@dataclass(frozen=True)
class PortfolioHistory:
    points: List[DailyPoint] = field(default_factory=list)

    @property
    def dates(self) -> List[date]:
        return [p.date for p in self.points]

    @property
    def values(self) -> List[Decimal]:
        return [p.value for p in self.points]

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class PortfolioReport:
    """
    Everything the page renders for one load.

    `summary` and `history` are only populated when every holding was valued;
    a single failure leaves both as None so no partial totals are ever shown.
    """
    holdings: List[HoldingValuation] = field(default_factory=list)
    failures: List[HoldingFailure] = field(default_factory=list)
    summary: Optional[PortfolioSummary] = None
    history: Optional[PortfolioHistory] = None

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise self.failures[0].error
