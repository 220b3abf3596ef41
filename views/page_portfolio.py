# views/page_portfolio.py
from __future__ import annotations
import html
import textwrap

import streamlit as st

from core.formatting import inr, pl_class, signed_inr, signed_pct
from core.models import HoldingValuation, PortfolioReport, PortfolioSummary
from core.ui import history_chart, page_head, sticky_footer

DISCLAIMER = "Mutual fund investments are subject to market risks. Read all scheme related documents."


def _pct(v: HoldingValuation) -> str:
    pct = v.pl_percent
    return "" if pct is None else signed_pct(pct)


def _asset_row(v: HoldingValuation) -> str:
    return textwrap.dedent(f"""
    <div class="asset">
      <div class="asset-left">
        <div class="asset-name">{html.escape(v.display_name)}</div>
        <div class="asset-meta">
          <span>Invested: {inr(v.invested)}</span>
          <span>Current: {inr(v.current)}</span>
        </div>
        <div class="label">NAV ({v.latest_date.isoformat()}): ₹{v.latest_nav}</div>
      </div>
      <div class="asset-pl {pl_class(v.pl)}">
        <div>{signed_inr(v.pl)}</div>
        <div class="label">{_pct(v)}</div>
      </div>
    </div>
    """).strip()


def _hero(summary: PortfolioSummary):
    st.markdown(
        textwrap.dedent(f"""
        <div class="skw-hero">
          <div class="val">{inr(summary.total_current)}</div>
          <div class="pill {pl_class(summary.net_pl)}">{signed_pct(summary.net_pl_percent)}</div>
        </div>
        """),
        unsafe_allow_html=True,
    )


def _summary(summary: PortfolioSummary):
    pl_row = "profit" if summary.net_pl >= 0 else "loss"
    st.markdown(
        textwrap.dedent(f"""
        <div class="skw-panel">
          <div class="row space"><span class="label">Total Invested</span><span>{inr(summary.total_invested)}</span></div>
          <div class="row space"><span class="label">Current Value</span><span>{inr(summary.total_current, 2)}</span></div>
          <div class="row space {pl_row}"><span>Net P/L</span><span>{signed_inr(summary.net_pl, 2)}</span></div>
        </div>
        """),
        unsafe_allow_html=True,
    )


def render_failures(report: PortfolioReport):
    """Degraded view: say which holdings failed, never show partial totals."""
    st.error("Portfolio totals are unavailable because some funds could not be loaded.")
    for f in report.failures:
        st.warning(f"**{f.holding.name}**: {f.reason}")
    if report.holdings:
        st.markdown("#### Funds that loaded")
        st.markdown("\n".join(_asset_row(v) for v in report.holdings), unsafe_allow_html=True)


def render(report: PortfolioReport):
    page_head(
        title="My Mutual Fund Portfolio",
        subtitle="Direct growth holdings valued at the latest published NAV",
        icon="📈",
    )

    if not report.ok:
        render_failures(report)
        sticky_footer(DISCLAIMER)
        return

    _hero(report.summary)

    st.markdown("### Portfolio value since purchase")
    if report.history is not None and len(report.history) > 0:
        history_chart(report.history)
    else:
        st.info("No NAV history since the buy date yet.")

    st.markdown("### Holdings")
    st.markdown("\n".join(_asset_row(v) for v in report.holdings), unsafe_allow_html=True)

    _summary(report.summary)

    sticky_footer(DISCLAIMER)
