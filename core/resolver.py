# resolver.py
from __future__ import annotations
import logging
import threading
from typing import Any, Callable, Dict, List

from core.api import search_schemes
from core.errors import ResolutionError
from core.models import SchemeRecord

logger = logging.getLogger(__name__)

REQUIRED_TERMS = ("direct", "growth", "fund")
EXCLUDED_TERMS = ("etf", "index", "nifty", "sensex", "idcw", "dividend")


def _norm(s: str) -> str:
    return (s or "").strip().lower()


def is_direct_growth(scheme_name: str) -> bool:
    """Direct plan, growth option, and not an index/ETF tracker or payout variant."""
    n = _norm(scheme_name)
    return all(t in n for t in REQUIRED_TERMS) and not any(t in n for t in EXCLUDED_TERMS)


def _records(payload: Any) -> List[SchemeRecord]:
    if not isinstance(payload, list):
        return []
    out: List[SchemeRecord] = []
    for row in payload:
        if not isinstance(row, dict):
            continue
        code, name = row.get("schemeCode"), row.get("schemeName")
        if code in (None, "") or not name:
            continue
        out.append(SchemeRecord(scheme_code=str(code), scheme_name=str(name)))
    return out


def select_scheme(fund_name: str, payload: Any) -> SchemeRecord:
    """
    Pick the Direct Growth scheme for `fund_name` out of a search payload.

    Candidates whose name contains `fund_name` win; otherwise the first
    candidate in API order is taken and the fallback is logged.
    """
    candidates = [r for r in _records(payload) if is_direct_growth(r.scheme_name)]
    if not candidates:
        logger.error("No direct growth scheme for %r; search payload: %r", fund_name, payload)
        raise ResolutionError(fund_name, payload)

    wanted = _norm(fund_name)
    for r in candidates:
        if wanted and wanted in _norm(r.scheme_name):
            return r

    chosen = candidates[0]
    if len(candidates) > 1:
        logger.warning(
            "%r matched %d direct growth schemes, none containing the name; using first in API order: %s (%s)",
            fund_name, len(candidates), chosen.scheme_name, chosen.scheme_code,
        )
    return chosen


class SchemeResolver:
    """Resolves fund names to schemes, hitting the search endpoint once per name."""

    def __init__(self, search: Callable[[str], Any] | None = None, api_base: str | None = None):
        self._search = search or (lambda q: search_schemes(q, api_base=api_base))
        self._cache: Dict[str, SchemeRecord] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, fund_name: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(fund_name, threading.Lock())

    def resolve(self, fund_name: str) -> SchemeRecord:
        hit = self._cache.get(fund_name)
        if hit is not None:
            return hit
        with self._lock_for(fund_name):
            hit = self._cache.get(fund_name)
            if hit is None:
                hit = select_scheme(fund_name, self._search(fund_name))
                self._cache[fund_name] = hit
            return hit
