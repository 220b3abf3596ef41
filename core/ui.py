# ui.py
from __future__ import annotations
import textwrap
from typing import Sequence

import plotly.graph_objects as go
import plotly.io as pio
import streamlit as st

from core.config import LINE_COLOR
from core.formatting import inr
from core.models import PortfolioHistory

# ---------------- Plotly theme ----------------
def setup_theme():
    pio.templates["skw_dark"] = go.layout.Template(
        layout=go.Layout(
            paper_bgcolor="rgba(0,0,0,0)",
            plot_bgcolor="rgba(0,0,0,0)",
            font=dict(color="#FAFAFA", family="Plus Jakarta Sans, Inter, -apple-system, Segoe UI, Roboto, sans-serif"),
            colorway=[LINE_COLOR, "#1DA7E1", "#59C7F2"],
            legend=dict(bgcolor="rgba(0,0,0,0)"),
            margin=dict(l=10, r=10, t=10, b=10),
        )
    )
    pio.templates.default = "skw_dark"

# ---------------- CSS ----------------
def inject_css():
    st.markdown(
        """
        <style>
          @import url('https://fonts.googleapis.com/css2?family=Plus+Jakarta+Sans:wght@400;500;600;700;800&display=swap');

          :root{
            --skw-brand:#1DA7E1;
            --skw-card:#1C1F26;
            --skw-border:#2A2D35;
            --skw-text:#FAFAFA;
            --skw-muted:#A0A0A0;
            --skw-gold:#f5c542;
            --skw-pos:#22c55e;
            --skw-neg:#ef4444;
          }

          .block-container{ max-width:960px; padding-bottom:100px; }
          html, body, [class*="css"] { font-family: "Plus Jakarta Sans", Inter, -apple-system, Segoe UI, Roboto, sans-serif; }

          /* Page header tile */
          .skw-pagehead{
            display:flex; align-items:flex-start; gap:14px;
            background:linear-gradient(180deg, rgba(255,255,255,.02), rgba(255,255,255,0));
            border:1px solid var(--skw-border); border-radius:20px; padding:16px 18px; margin:6px 0 10px 0;
          }
          .skw-pagehead .icon{
            width:45px; height:45px; border-radius:12px; display:flex; align-items:center; justify-content:center;
            background:linear-gradient(180deg, rgba(245,197,66,.18), rgba(245,197,66,.06)); border:1px solid #44402b;
          }
          .skw-pagehead .title{ font-weight:700; font-size:30px; letter-spacing:-0.01em; }
          .skw-pagehead .sub{ color:var(--skw-muted); font-size:16px; margin-top:2px; }

          /* Hero value + pill */
          .skw-hero{ display:flex; align-items:baseline; gap:14px; margin:8px 0 14px 0; }
          .skw-hero .val{ font-weight:800; font-size:40px; letter-spacing:-0.02em; }
          .pill{ display:inline-flex; padding:4px 10px; border-radius:999px; font-size:14px; font-weight:700;
                 border:1px solid var(--skw-border); background:rgba(255,255,255,.04); }
          .pill.positive{ color:var(--skw-pos); }
          .pill.negative{ color:var(--skw-neg); }

          /* Holdings list */
          .asset{ display:flex; justify-content:space-between; align-items:center; gap:16px;
                  padding:14px 6px; border-bottom:1px solid var(--skw-border); }
          .asset-name{ font-weight:600; font-size:15px; }
          .asset-meta{ display:flex; gap:16px; color:var(--skw-muted); font-size:13px; margin-top:4px; }
          .asset .label{ color:var(--skw-muted); font-size:12px; margin-top:2px; }
          .asset-pl{ font-weight:700; font-variant-numeric: tabular-nums; white-space:nowrap; }
          .positive{ color:var(--skw-pos); }
          .negative{ color:var(--skw-neg); }

          /* Summary panel */
          .skw-panel{ background:var(--skw-card); border:1px solid var(--skw-border); border-radius:24px; padding:18px 22px; margin:12px 0; }
          .row.space{ display:flex; justify-content:space-between; padding:6px 0; font-variant-numeric: tabular-nums; }
          .row .label{ color:var(--skw-muted); }
          .row.profit{ color:var(--skw-pos); font-weight:700; }
          .row.loss{ color:var(--skw-neg); font-weight:700; }

          /* Sticky footer */
          .skw-footer-fixed{
            position:fixed; left:0; right:0; bottom:0; z-index:9999;
            background:#0E1117; border-top:1px solid var(--skw-border); padding:10px 24px;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )

# ---------------- Header ----------------
def page_head(title: str, subtitle: str, icon: str = "📈"):
    st.markdown(
        textwrap.dedent(f"""
        <div class="skw-pagehead">
          <div class="icon">{icon}</div>
          <div>
            <div class="title">{title}</div>
            <div class="sub">{subtitle}</div>
          </div>
        </div>
        """),
        unsafe_allow_html=True,
    )

# ---------------- Sticky footer ----------------
def sticky_footer(text: str):
    st.markdown(f'<div class="skw-footer-fixed"><span style="color:#A0A0A0">{text}</span></div>', unsafe_allow_html=True)

# ---------------- Portfolio chart ----------------
def history_figure(history: PortfolioHistory, height: int = 320) -> go.Figure:
    """Single gold line, no legend/grid, y-axis hidden, ~4 date ticks."""
    xs: Sequence = [d.isoformat() for d in history.dates]
    ys = [float(v) for v in history.values]
    fig = go.Figure(
        go.Scatter(
            x=xs,
            y=ys,
            mode="lines",
            line=dict(color=LINE_COLOR, width=3, shape="spline", smoothing=0.35),
            connectgaps=True,
            customdata=[inr(v) for v in history.values],
            hovertemplate="%{x}<br>%{customdata}<extra></extra>",
        )
    )
    fig.update_layout(height=height, showlegend=False)
    fig.update_xaxes(showgrid=False, nticks=4, tickfont=dict(color="#9ca3af"))
    fig.update_yaxes(showgrid=False, showticklabels=False)
    return fig


def history_chart(history: PortfolioHistory):
    st.plotly_chart(history_figure(history), width="stretch")
