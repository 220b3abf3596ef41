# errors.py
from __future__ import annotations
from typing import Any


class PortfolioError(Exception):
    """Base class for anything that stops a holding from being valued."""


class ResolutionError(PortfolioError):
    """No Direct Growth scheme qualified for a fund name."""

    def __init__(self, fund_name: str, payload: Any = None):
        self.fund_name = fund_name
        self.payload = payload
        super().__init__(f"No direct growth scheme found for '{fund_name}'")


class NetworkError(PortfolioError):
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}")


class ParseError(PortfolioError):
    def __init__(self, scheme_code: str | int, detail: str):
        self.scheme_code = scheme_code
        self.detail = detail
        super().__init__(f"Bad NAV data for scheme {scheme_code}: {detail}")
