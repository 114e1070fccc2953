"""
PDF report generation and reusable chart rendering for the
FD + Nifty 50/50 projection calculator.

Provides:
  - Three-page PDF report (generate_pdf)
  - Base64-encoded chart images for web embedding (get_web_charts)
  - Individual chart renderers reusable by both CLI and web
"""

from __future__ import annotations

import base64
import io
import math
from typing import Any, Dict, List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.ticker import FuncFormatter
import numpy as np

import config as cfg
from projection import ProjectionOutput, balance_schedule, growth_schedule

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

BG = "#0a101f"
CARD = "#131b2e"
TEXT = "#f1f5f9"
TEXT2 = "#cbd5e1"
INDIGO = "#818cf8"
EMERALD = "#34d399"
AMBER = "#fbbf24"
RED = "#f87171"
SLATE = "#94a3b8"
BORDER = "#1e293b"

A4W, A4H = 8.27, 11.69
WEB_W, WEB_H = 10, 6


# ═══════════════════════════════════════════════════════════════════
# Axis formatters
# ═══════════════════════════════════════════════════════════════════

def _inr_fmt(x, _):
    if abs(x) >= cfg.CRORE:
        return f"Rs {x / cfg.CRORE:.1f}Cr"
    if abs(x) >= cfg.LAKH:
        return f"Rs {x / cfg.LAKH:.1f}L"
    if abs(x) >= cfg.THOUSAND:
        return f"Rs {x / cfg.THOUSAND:.0f}k"
    return f"Rs {x:.0f}"


def _rs(x: float) -> str:
    """Full-precision label for annotations."""
    return f"Rs {x:,.0f}" if math.isfinite(x) else "N/A"


INR_FMT = FuncFormatter(_inr_fmt)


# ═══════════════════════════════════════════════════════════════════
# Style helpers
# ═══════════════════════════════════════════════════════════════════

def _style(fig, *axes):
    """Apply dark theme to figure and all axes."""
    fig.patch.set_facecolor(BG)
    for ax in axes:
        ax.set_facecolor(CARD)
        ax.tick_params(colors=TEXT, labelsize=8)
        ax.xaxis.label.set_color(TEXT)
        ax.yaxis.label.set_color(TEXT)
        ax.title.set_color(TEXT)
        for spine in ax.spines.values():
            spine.set_color(BORDER)
        ax.grid(True, alpha=0.15, color=SLATE)


def _legend(ax, loc="upper left"):
    ax.legend(loc=loc, fontsize=8, facecolor=CARD, edgecolor=BORDER, labelcolor=TEXT)


# ═══════════════════════════════════════════════════════════════════
# Page 1: Summary (text only, dark background)
# ═══════════════════════════════════════════════════════════════════

def _page1_summary(d: Dict[str, Any], summary: str) -> plt.Figure:
    fig = plt.figure(figsize=(A4W, A4H))
    fig.patch.set_facecolor(BG)

    fig.text(0.50, 0.93, "FD + Nifty 50/50 Projection",
             ha="center", fontsize=18, color=TEXT, fontweight="bold")
    fig.text(0.50, 0.91, "Fixed deposit survival and Nifty future value",
             ha="center", fontsize=11, color=TEXT2)

    # The same text the summary export holds; rupee glyph swapped for the PDF font.
    y = 0.85
    for line in summary.replace(cfg.CURRENCY_SYMBOL, "Rs ").splitlines():
        color = TEXT if line and line == line.upper() else TEXT2
        fig.text(0.10, y, line, fontsize=10, color=color, family="monospace")
        y -= 0.024

    if d["nifty_net_ok"]:
        y -= 0.02
        fig.text(0.08, y, "Nifty net value in words",
                 fontsize=12, color=EMERALD, fontweight="bold")
        y -= 0.028
        words = d["nifty_net_words"].split()
        line = ""
        for word in words:
            if len(line) + len(word) + 1 <= 80:
                line = f"{line} {word}" if line else word
            else:
                fig.text(0.10, y, line, fontsize=9.5, color=TEXT2)
                y -= 0.022
                line = word
        if line:
            fig.text(0.10, y, line, fontsize=9.5, color=TEXT2)

    fig.text(0.50, 0.03,
             "This is not financial advice. Projected returns are not guaranteed.",
             ha="center", fontsize=8, color=SLATE, style="italic")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Chart: FD balance depletion
# ═══════════════════════════════════════════════════════════════════

def _chart_fd_balance(out: ProjectionOutput, figsize=(WEB_W, WEB_H)) -> plt.Figure:
    inp = out.inputs
    balances = balance_schedule(
        out.allocation.fd_principal, inp.fd_rate_pct, inp.monthly_withdrawal,
    )
    years = np.arange(len(balances)) / 12

    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)

    ax.plot(years, balances, color=INDIGO, linewidth=2.2,
            label="FD balance", solid_capstyle="round")
    ax.fill_between(years, np.maximum(balances, 0.0), alpha=0.1, color=INDIGO)
    ax.axvspan(0, cfg.BASELINE_MONTHS / 12, color=AMBER, alpha=0.08,
               label=f"Year 1 at {cfg.BASELINE_FD_RATE_PCT:g}%")
    ax.axhline(0, color=RED, linewidth=1.0, linestyle="--", alpha=0.6)

    if out.depletion.is_indefinite:
        headline = "Indefinite: interest covers the withdrawal"
        color = EMERALD
    else:
        headline = f"Runs out after {out.depletion.elapsed_months} months"
        color = RED
    ax.text(
        0.98, 0.97, headline,
        transform=ax.transAxes, fontsize=10, color=color,
        fontweight="bold", va="top", ha="right",
        bbox=dict(boxstyle="round,pad=0.4", facecolor=BG,
                  edgecolor=color, alpha=0.92),
    )

    ax.yaxis.set_major_formatter(INR_FMT)
    ax.set_xlabel("Years")
    ax.set_ylabel("Balance")
    ax.set_title("Fixed Deposit Balance Under Monthly Withdrawals", fontsize=13, pad=12)
    _legend(ax, loc="lower left")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Chart: Nifty growth over the FD horizon
# ═══════════════════════════════════════════════════════════════════

def _chart_nifty_growth(out: ProjectionOutput, figsize=(WEB_W, WEB_H)) -> plt.Figure:
    inp = out.inputs
    months = out.depletion.elapsed_months
    gross_path = growth_schedule(out.allocation.nifty_principal, inp.nifty_rate_pct, months)
    years = np.arange(months + 1) / 12

    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)

    ax.plot(years, gross_path, color=EMERALD, linewidth=2.5,
            label="Gross value", solid_capstyle="round")
    ax.fill_between(years, gross_path, alpha=0.1, color=EMERALD)
    ax.axhline(out.allocation.nifty_principal, color=SLATE, linewidth=1.0,
               linestyle="--", alpha=0.7, label="Invested")

    net = out.growth.net_value
    if math.isfinite(net):
        ax.scatter([years[-1]], [net], color=AMBER, zorder=3,
                   label=f"Net after {inp.tax_rate_pct:g}% tax")
        ax.annotate(
            _rs(net),
            xy=(years[-1], net), fontsize=10, color=AMBER,
            fontweight="bold", ha="right",
            xytext=(-10, 8), textcoords="offset points",
            bbox=dict(boxstyle="round,pad=0.3", facecolor=BG,
                      edgecolor=AMBER, alpha=0.9),
        )

    ax.yaxis.set_major_formatter(INR_FMT)
    ax.set_xlabel("Years")
    ax.set_ylabel("Value")
    ax.set_title(
        f"Nifty 50 at {inp.nifty_rate_pct:g}% over {months / 12:.1f} Years",
        fontsize=13, pad=12,
    )
    _legend(ax, loc="upper left")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def figure_to_base64(fig: plt.Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(),
                dpi=150, bbox_inches="tight")
    buf.seek(0)
    b64 = base64.b64encode(buf.read()).decode()
    buf.close()
    return b64


def generate_pdf(
    out: ProjectionOutput,
    d: Dict[str, Any],
    summary: str,
    path: str = cfg.PDF_PATH,
) -> str:
    """Generate the full PDF report. Returns the file path."""
    pages = [
        _page1_summary(d, summary),
        _chart_fd_balance(out, figsize=(A4W, A4H * 0.55)),
        _chart_nifty_growth(out, figsize=(A4W, A4H * 0.55)),
    ]

    with PdfPages(path) as pdf:
        for fig in pages:
            pdf.savefig(fig, facecolor=fig.get_facecolor())
    for fig in pages:
        plt.close(fig)
    return path


def get_web_charts(out: ProjectionOutput) -> List[str]:
    """Return base64-encoded PNG chart images for web embedding.

    Returns 2 charts:
      [0] FD balance month by month
      [1] Nifty gross value over the same horizon
    """
    chart_figs = [
        _chart_fd_balance(out),
        _chart_nifty_growth(out),
    ]

    images = [figure_to_base64(f) for f in chart_figs]
    for f in chart_figs:
        plt.close(f)
    return images
