# config.py
from __future__ import annotations
from datetime import date
from decimal import Decimal
from enum import Enum

from core.models import FundHolding

# ============================================================
# DATA SOURCE
# ============================================================
API_BASE = "https://api.mfapi.in/mf/"

REQUEST_TIMEOUT = 8     # seconds, per request
RETRIES = 3             # total attempts for transient failures
BACKOFF = 0.5           # seconds; doubles on every retry
MAX_WORKERS = 4         # concurrent holdings in flight

# ============================================================
# PORTFOLIO
# ============================================================
BUY_DATE = date(2024, 9, 30)

HOLDINGS: tuple[FundHolding, ...] = (
    FundHolding("SBI Innovation Opportunities Fund", Decimal("100000"), Decimal("9861.93")),
    FundHolding("SBI Technology Opportunities Fund", Decimal("35000"), Decimal("158.37")),
    FundHolding("Tata Digital India Fund", Decimal("150000"), Decimal("2500.83")),
    FundHolding("SBI Contra Fund", Decimal("44300"), Decimal("113.59")),
)


# ============================================================
# HISTORY
# ============================================================
class CarryForward(str, Enum):
    PER_FUND = "per_fund"   # carry each fund's last NAV forward before summing
    LEGACY = "legacy"       # sum only funds that reported that day


CARRY_FORWARD = CarryForward.PER_FUND

# chart palette
LINE_COLOR = "#f5c542"
