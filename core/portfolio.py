# core/portfolio.py
from __future__ import annotations
import concurrent.futures
import logging
import time
from datetime import date
from typing import Callable, Iterable, List, Sequence, Tuple, Union

from core.api import fetch_nav_history
from core.config import BUY_DATE, CARRY_FORWARD, HOLDINGS, MAX_WORKERS, CarryForward
from core.errors import PortfolioError
from core.models import FundHolding, HoldingFailure, NavPoint, PortfolioReport, SchemeRecord
from core.resolver import SchemeResolver
from core.transforms import build_history, holding_series, summarize, value_holding

logger = logging.getLogger(__name__)

_Loaded = Tuple[SchemeRecord, List[NavPoint]]


def load_portfolio(
    holdings: Iterable[FundHolding] = HOLDINGS,
    cutoff: date = BUY_DATE,
    policy: CarryForward = CARRY_FORWARD,
    api_base: str | None = None,
    max_workers: int = MAX_WORKERS,
    resolver: SchemeResolver | None = None,
    fetch_history: Callable[[str], Sequence[NavPoint]] | None = None,
) -> PortfolioReport:
    """
    Resolve, fetch and value every holding, then build totals and history.

    Holdings are loaded in parallel (at most `max_workers` at a time) but
    merged in configured order. Per-holding failures are reported; if any
    holding fails, `summary` and `history` stay None.
    """
    holdings = list(holdings)
    resolver = resolver or SchemeResolver(api_base=api_base)
    fetch = fetch_history or (lambda code: fetch_nav_history(code, cutoff, api_base=api_base))

    def _load_one(h: FundHolding) -> _Loaded:
        scheme = resolver.resolve(h.name)
        return scheme, list(fetch(scheme.scheme_code))

    started = time.perf_counter()
    results: List[Union[_Loaded, PortfolioError, None]] = [None] * len(holdings)
    workers = max(1, min(max_workers, len(holdings)))
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        future_map = {executor.submit(_load_one, h): i for i, h in enumerate(holdings)}
        for future in concurrent.futures.as_completed(future_map):
            i = future_map[future]
            try:
                results[i] = future.result()
            except PortfolioError as e:
                logger.error("Could not load %r: %s", holdings[i].name, e)
                results[i] = e

    report = PortfolioReport()
    series = []
    for h, res in zip(holdings, results):
        if isinstance(res, PortfolioError):
            report.failures.append(HoldingFailure(h, res))
            continue
        scheme, history = res
        try:
            report.holdings.append(value_holding(h, scheme, history))
        except PortfolioError as e:
            report.failures.append(HoldingFailure(h, e))
            continue
        series.append(holding_series(h, history))

    logger.info(
        "Loaded %d/%d holdings in %.2fs",
        len(report.holdings), len(holdings), time.perf_counter() - started,
    )
    if report.failures:
        return report

    report.summary = summarize(report.holdings)
    report.history = build_history(series, policy)
    return report
