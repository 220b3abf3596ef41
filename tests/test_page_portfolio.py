from __future__ import annotations

from streamlit.testing.v1 import AppTest


def _failed_page():
    from datetime import date
    from decimal import Decimal

    from core.errors import NetworkError, ResolutionError
    from core.models import FundHolding, HoldingFailure, NavPoint, PortfolioReport, SchemeRecord
    from core.transforms import value_holding
    from views import page_portfolio

    good = value_holding(
        FundHolding("A Fund", Decimal("1000"), Decimal("10")),
        SchemeRecord("1", "A Fund - Direct Plan - Growth"),
        [NavPoint(date(2024, 10, 1), Decimal("120"))],
    )
    b = FundHolding("B Fund", Decimal("500"), Decimal("5"))
    c = FundHolding("C Fund", Decimal("700"), Decimal("7"))
    report = PortfolioReport(
        holdings=[good],
        failures=[
            HoldingFailure(b, ResolutionError("B Fund", [{"schemeCode": 1, "schemeName": "SECRET-PAYLOAD Regular"}])),
            HoldingFailure(c, NetworkError("https://x/9", "503 Server Error")),
        ],
    )
    page_portfolio.render(report)


def _markdown(at) -> str:
    return "\n".join(m.value for m in at.markdown)


def _all_text(at) -> str:
    parts = [m.value for m in at.markdown]
    parts += [w.value for w in at.warning] + [e.value for e in at.error] + [i.value for i in at.info]
    return "\n".join(parts)


def test_failed_load_shows_reasons_but_no_totals():
    at = AppTest.from_function(_failed_page).run(timeout=30)
    assert not at.exception

    assert "Portfolio totals are unavailable" in at.error[0].value
    warnings = [w.value for w in at.warning]
    assert len(warnings) == 2
    assert "**B Fund**" in warnings[0] and "No direct growth scheme" in warnings[0]
    assert "**C Fund**" in warnings[1] and "503 Server Error" in warnings[1]

    md = _markdown(at)
    assert "skw-hero" not in md
    assert "skw-panel" not in md
    assert "Total Invested" not in md
    assert "Funds that loaded" in md
    assert "A Fund - Direct Plan - Growth" in md
    assert "SECRET-PAYLOAD" not in _all_text(at)


def _breakeven_page():
    from datetime import date
    from decimal import Decimal

    from core.models import DailyPoint, FundHolding, NavPoint, PortfolioHistory, PortfolioReport, SchemeRecord
    from core.transforms import summarize, value_holding
    from views import page_portfolio

    v = value_holding(
        FundHolding("A Fund", Decimal("1000"), Decimal("10")),
        SchemeRecord("1", "A Fund - Direct Plan - Growth"),
        [NavPoint(date(2024, 10, 1), Decimal("100"))],
    )
    history = PortfolioHistory([DailyPoint(date(2024, 10, 1), v.current, True)])
    page_portfolio.render(PortfolioReport(holdings=[v], summary=summarize([v]), history=history))


def _losing_page():
    from datetime import date
    from decimal import Decimal

    from core.models import DailyPoint, FundHolding, NavPoint, PortfolioHistory, PortfolioReport, SchemeRecord
    from core.transforms import summarize, value_holding
    from views import page_portfolio

    v = value_holding(
        FundHolding("A Fund", Decimal("1000"), Decimal("10")),
        SchemeRecord("1", "A Fund - Direct Plan - Growth"),
        [NavPoint(date(2024, 9, 30), Decimal("100")), NavPoint(date(2024, 10, 1), Decimal("75"))],
    )
    history = PortfolioHistory([
        DailyPoint(date(2024, 9, 30), Decimal("1000"), True),
        DailyPoint(date(2024, 10, 1), v.current, True),
    ])
    page_portfolio.render(PortfolioReport(holdings=[v], summary=summarize([v]), history=history))


def test_breakeven_renders_as_profit():
    at = AppTest.from_function(_breakeven_page).run(timeout=30)
    assert not at.exception
    assert len(at.error) == 0 and len(at.warning) == 0

    md = _markdown(at)
    assert 'class="pill positive">+0.00%' in md
    assert "row space profit" in md
    assert 'class="asset-pl positive"' in md
    assert '<div class="label">+0.00%</div>' in md
    assert "Total Invested" in md


def test_loss_renders_negative_row_and_percent():
    at = AppTest.from_function(_losing_page).run(timeout=30)
    assert not at.exception

    md = _markdown(at)
    assert 'class="pill negative">-25.00%' in md
    assert "row space loss" in md
    assert 'class="asset-pl negative"' in md
    assert "<div>-₹250</div>" in md
    assert '<div class="label">-25.00%</div>' in md
