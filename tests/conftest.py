"""
Pytest configuration and shared fixtures.

HTTP never leaves the process: `fake_api` replaces `requests.get` inside
`core.api` with a URL router that returns canned mfapi payloads.
"""
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests


def pytest_configure():
    """Put the repo root on sys.path so `core` / `views` import without an install."""
    root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(root))


# =============================================================================
# Payload helpers
# =============================================================================

def make_response(payload: Any = None, status: int = 200, bad_json: bool = False) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Error", response=resp)
    else:
        resp.raise_for_status.return_value = None
    if bad_json:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        resp.json.return_value = payload
    return resp


def nav_payload(*rows: tuple[str, str]) -> dict:
    """
    Build an mfapi history document. Rows are (iso_date, nav) and are emitted
    newest first, with dd-mm-YYYY dates, like the real API.
    """
    ordered = sorted(rows, key=lambda r: r[0], reverse=True)
    return {
        "meta": {"scheme_name": "test"},
        "data": [
            {"date": date.fromisoformat(d).strftime("%d-%m-%Y"), "nav": nav}
            for d, nav in ordered
        ],
        "status": "SUCCESS",
    }


def scheme(code: int | str, name: str) -> dict:
    return {"schemeCode": code, "schemeName": name}


# =============================================================================
# Fake mfapi
# =============================================================================

class FakeApi:
    """
    Callable stand-in for `requests.get`.

    Each route holds a queue of responses/exceptions; the last one repeats.
    """

    BASE = "https://api.mfapi.in/mf/"

    def __init__(self):
        self.routes: dict[str, list] = {}
        self.calls: list[str] = []

    def on_search(self, query: str, *responses):
        self.routes[f"{self.BASE}search?q={query}"] = list(responses)

    def on_history(self, code: int | str, *responses):
        self.routes[f"{self.BASE}{code}"] = list(responses)

    def on(self, url: str, *responses):
        self.routes[url] = list(responses)

    def __call__(self, url, params=None, timeout=None):
        key = f"{url}?q={params['q']}" if params else url
        self.calls.append(key)
        if key not in self.routes:
            return make_response(status=404)
        queue = self.routes[key]
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    def count(self, fragment: str) -> int:
        return sum(1 for c in self.calls if fragment in c)


@pytest.fixture
def fake_api(monkeypatch) -> FakeApi:
    api = FakeApi()
    monkeypatch.setattr("core.api.requests.get", api)
    return api


@pytest.fixture
def sleeps(monkeypatch) -> list:
    """Records backoff waits instead of sleeping."""
    waited: list = []
    monkeypatch.setattr("core.api.time.sleep", waited.append)
    return waited


# =============================================================================
# Sample data
# =============================================================================

@pytest.fixture
def cutoff() -> date:
    return date(2024, 9, 30)


@pytest.fixture
def two_holdings():
    from core.models import FundHolding

    return [
        FundHolding("Alpha Growth Fund", Decimal("1000"), Decimal("10")),
        FundHolding("Beta Value Fund", Decimal("2000"), Decimal("4")),
    ]
