# api.py
from __future__ import annotations
import logging
import time
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, List

import pandas as pd
import requests

from core.config import API_BASE, BACKOFF, REQUEST_TIMEOUT, RETRIES
from core.errors import NetworkError, ParseError
from core.models import NavPoint

logger = logging.getLogger(__name__)


def _base(api_base: str | None) -> str:
    """Normalize to `.../mf/`; a bare host such as https://api.mfapi.in gets `/mf` appended."""
    base = (api_base or API_BASE).rstrip("/")
    if not base.endswith("/mf"):
        base += "/mf"
    return base + "/"


def _is_transient(err: requests.RequestException) -> bool:
    if isinstance(err, (requests.Timeout, requests.ConnectionError)):
        return True
    status = getattr(getattr(err, "response", None), "status_code", None)
    return status is not None and (status == 429 or status >= 500)


def _retry_get(
    url: str,
    params: dict | None = None,
    timeout: float = REQUEST_TIMEOUT,
    tries: int = RETRIES,
    backoff: float = BACKOFF,
) -> Any:
    """
    GET a JSON document. Timeouts, connection errors, 429 and 5xx are retried with
    exponential backoff; anything else fails straight away as NetworkError.
    """
    tries = max(1, tries)
    for attempt in range(tries):
        try:
            resp = requests.get(url, params=params, timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            if not _is_transient(e):
                raise NetworkError(url, str(e)) from e
            if attempt == tries - 1:
                raise NetworkError(url, f"{e} (after {tries} attempts)") from e
            wait = backoff * (2 ** attempt)
            logger.warning("GET %s failed (%s); retry %d/%d in %.2fs", url, e, attempt + 1, tries - 1, wait)
            time.sleep(wait)
            continue
        try:
            return resp.json()
        except ValueError as e:
            raise NetworkError(url, f"malformed JSON: {e}") from e
    raise NetworkError(url, "request failed")


def search_schemes(query: str, api_base: str | None = None) -> Any:
    """Raw search payload: normally a list of {schemeCode, schemeName}."""
    return _retry_get(f"{_base(api_base)}search", params={"q": query})


def _to_decimal(value: Any) -> Decimal:
    d = Decimal(str(value).strip())
    if not d.is_finite():
        raise InvalidOperation(value)
    return d


def parse_nav_history(scheme_code: str | int, payload: Any, cutoff: date) -> List[NavPoint]:
    """
    mfapi returns {"data": [{"date": "dd-mm-YYYY", "nav": "12.3400"}, ...]},
    newest first. Returns points dated on/after `cutoff`, oldest first.
    """
    rows = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        raise ParseError(scheme_code, "response has no 'data' list")

    hist = pd.DataFrame(rows)
    if hist.empty:
        raise ParseError(scheme_code, "no NAV entries")
    if "date" not in hist or "nav" not in hist:
        raise ParseError(scheme_code, "entries lack 'date'/'nav'")

    raw_dates = hist["date"].copy()
    hist["date"] = pd.to_datetime(hist["date"], format="%d-%m-%Y", errors="coerce")
    bad = hist["date"].isna()
    if bad.any():
        raise ParseError(scheme_code, f"unparseable date {raw_dates[bad].iloc[0]!r}")

    # --- cutoff, then oldest first; first listed wins on duplicate dates ---
    hist = hist[hist["date"] >= pd.Timestamp(cutoff)]
    hist = hist.drop_duplicates(subset="date", keep="first").sort_values("date", kind="stable")
    if hist.empty:
        raise ParseError(scheme_code, f"no NAV on or after {cutoff.isoformat()}")

    points: List[NavPoint] = []
    for ts, nav in zip(hist["date"], hist["nav"]):
        try:
            points.append(NavPoint(ts.date(), _to_decimal(nav)))
        except (InvalidOperation, ValueError) as e:
            raise ParseError(scheme_code, f"unparseable NAV {nav!r} on {ts.date().isoformat()}") from e
    return points


def fetch_nav_history(scheme_code: str | int, cutoff: date, api_base: str | None = None) -> List[NavPoint]:
    payload = _retry_get(f"{_base(api_base)}{scheme_code}")
    return parse_nav_history(scheme_code, payload, cutoff)
