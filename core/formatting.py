# formatting.py
from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]


def _group_indian(digits: str) -> str:
    """'12345678' -> '1,23,45,678' (last three, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def _quantize(x: Number, decimals: int) -> Decimal:
    q = Decimal(1).scaleb(-decimals)
    return Decimal(str(x)).quantize(q, rounding=ROUND_HALF_UP)


def inr(x: Number, decimals: int = 0) -> str:
    """₹ with lakh/crore grouping, e.g. inr(123274.125) -> '₹1,23,274'."""
    d = _quantize(x, decimals)
    sign = "-" if d < 0 else ""
    whole, _, frac = f"{abs(d):.{decimals}f}".partition(".")
    out = f"₹{_group_indian(whole)}"
    if frac:
        out += f".{frac}"
    return sign + out


def signed_inr(x: Number, decimals: int = 0) -> str:
    sign = "+" if Decimal(str(x)) >= 0 else "-"
    return sign + inr(abs(Decimal(str(x))), decimals)


def signed_pct(x: Number, decimals: int = 2) -> str:
    d = _quantize(x, decimals)
    sign = "+" if Decimal(str(x)) >= 0 else "-"
    return f"{sign}{abs(d):.{decimals}f}%"


def pl_class(x: Number) -> str:
    return "positive" if Decimal(str(x)) >= 0 else "negative"
