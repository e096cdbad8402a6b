"""
PDF report generation and reusable chart rendering for the
PVG turnover ROI calculator.

Provides:
  - Three-page PDF report (generate_pdf)
  - Base64-encoded chart images for web embedding (get_web_charts)
  - Individual chart renderers reusable by both CLI and web
"""

from __future__ import annotations

import base64
import io
from typing import Any, Dict, List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.ticker import FuncFormatter
import numpy as np

import config as cfg
from calculator import (
    CURVE_RAMP_UP_WEEKS,
    CURVE_WEEKS,
    IDLE_END_WEEK,
    ONBOARDING_END_WEEK,
    CalcResults,
    curve_phase,
    productivity_curves,
)

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

BG = "#0a101f"
CARD = "#131b2e"
TEXT = "#f1f5f9"
TEXT2 = "#cbd5e1"
BLUE = "#0066CC"
GREEN = "#00C853"
ORANGE = "#FF6B35"
AMBER = "#FFC107"
SLATE = "#94a3b8"
BORDER = "#1e293b"

LETTER_W, LETTER_H = 8.5, 11
WEB_W, WEB_H = 10, 6

COMPONENT_COLORS = {
    "idle_time": ORANGE,
    "onboarding": AMBER,
    "ramp_up": BLUE,
}


# ═══════════════════════════════════════════════════════════════════
# Axis formatters
# ═══════════════════════════════════════════════════════════════════

def _usd_fmt(x, _):
    if abs(x) >= 1e6:
        return f"${x / 1e6:.1f}M"
    if abs(x) >= 1e3:
        return f"${x / 1e3:.0f}k"
    return f"${x:.0f}"


def _pct_fmt(x, _):
    return f"{x:.0f}%"


USD_FMT = FuncFormatter(_usd_fmt)
PCT_FMT = FuncFormatter(_pct_fmt)


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


def _phase_region(ax, x0, x1, color, label):
    """Shade one PVG phase on the week axis and label it."""
    ax.axvspan(x0, x1, color=color, alpha=0.12, zorder=0)
    ax.axvline(x1, color=color, alpha=0.5, linewidth=1)
    ax.text((x0 + x1) / 2, 50, label, ha="center", va="center",
            rotation=90, fontsize=8, color=color)


# ═══════════════════════════════════════════════════════════════════
# Chart 1 — Productivity recovery curve
# ═══════════════════════════════════════════════════════════════════

def _chart_productivity(figsize=(WEB_W, WEB_H)) -> plt.Figure:
    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)

    _phase_region(ax, 0, IDLE_END_WEEK, ORANGE, curve_phase(0))
    _phase_region(ax, IDLE_END_WEEK, ONBOARDING_END_WEEK, AMBER,
                  curve_phase(IDLE_END_WEEK))

    curves = productivity_curves()
    for level, label, color in cfg.CURVE_SERIES:
        curve = curves[level]
        ax.plot(CURVE_WEEKS, curve, color=color, linewidth=2.5,
                label=f"{label} ({CURVE_RAMP_UP_WEEKS[level]:.0f} wk ramp)",
                marker="o", markersize=3)
        ax.fill_between(CURVE_WEEKS, 0, curve, color=color, alpha=0.06)

    ax.set_xlim(0, cfg.CURVE_TIMELINE_WEEKS)
    ax.set_ylim(0, 100)
    ax.set_xticks(CURVE_WEEKS)
    ax.yaxis.set_major_formatter(PCT_FMT)
    ax.set_xlabel("Weeks After Turnover Event")
    ax.set_ylabel("Productivity (%)")
    ax.set_title("Productivity Recovery After Turnover Event",
                 fontsize=13, fontweight="bold", pad=18)
    ax.text(0.5, 1.01,
            "Based on Mirko Kovacevic's Productivity Value Gap framework",
            transform=ax.transAxes, ha="center", fontsize=9,
            color=TEXT2, style="italic")
    _legend(ax, loc="lower right")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Chart 2 — Competitor vs InForce cost (stacked by PVG phase)
# ═══════════════════════════════════════════════════════════════════

def _chart_cost_comparison(results: CalcResults, d: Dict[str, Any],
                           figsize=(WEB_W, WEB_H)) -> plt.Figure:
    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)

    parties = ["competitor", "inforce"]
    x = np.arange(len(parties))
    bottom = np.zeros(len(parties))
    labels = {
        "idle_time": "Idle Time",
        "onboarding": "Onboarding",
        "ramp_up": "Ramp-Up",
    }
    for comp, label in labels.items():
        vals = np.array([d[f"{p}_{comp}_cost"] for p in parties])
        ax.bar(x, vals, bottom=bottom, width=0.5,
               color=COMPONENT_COLORS[comp], label=label)
        bottom += vals

    events = [results.competitor_events, results.inforce_events]
    for i, p in enumerate(parties):
        ax.annotate(
            f"{d[f'{p}_total_fmt']}\n{events[i]} events",
            xy=(x[i], bottom[i]), xytext=(0, 6), textcoords="offset points",
            ha="center", va="bottom", fontsize=10, color=TEXT,
            fontweight="bold",
        )

    ax.set_xticks(x)
    ax.set_xticklabels([
        f"Competitor ({cfg.COMPETITOR_ANNUAL_TURNOVER * 100:.0f}% turnover)",
        f"InForce ({cfg.INFORCE_ANNUAL_TURNOVER * 100:.0f}% turnover)",
    ])
    ax.set_ylim(0, max(bottom.max() * 1.2, 1.0))
    ax.yaxis.set_major_formatter(USD_FMT)
    ax.set_ylabel("Turnover cost over project")
    ax.set_title(
        f"Savings: {d['savings_fmt']} ({d['savings_pct_fmt']})",
        fontsize=13, pad=12,
    )
    _legend(ax, loc="upper right")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Page 1 — Summary (text only, dark background)
# ═══════════════════════════════════════════════════════════════════

def _page1_summary(results: CalcResults, d: Dict[str, Any],
                   summary_text: str) -> plt.Figure:
    fig = plt.figure(figsize=(LETTER_W, LETTER_H))
    fig.patch.set_facecolor(BG)

    fig.text(0.50, 0.93, "The Cost of Turnover",
             ha="center", fontsize=18, color=TEXT, fontweight="bold")
    fig.text(0.50, 0.91, "Productivity Value Gap ROI Report",
             ha="center", fontsize=11, color=TEXT2)

    y = 0.86
    fig.text(0.08, y, "Your Project", fontsize=13, color=TEXT, fontweight="bold")
    y -= 0.028
    fig.text(0.10, y,
             f"Hourly rate: {d['hourly_rate_fmt']}  |  Team size: {d['team_size']}  |  "
             f"Duration: {d['duration']:g} months  |  {d['experience_label']}",
             fontsize=9, color=TEXT2)
    y -= 0.024
    fig.text(0.10, y, f"Estimated project budget: {d['project_budget_fmt']}",
             fontsize=9, color=TEXT2)

    y -= 0.045
    fig.text(0.08, y, "Cost per Turnover Event",
             fontsize=13, color=TEXT, fontweight="bold")
    y -= 0.028
    for label, key in [("Idle time", "idle_time_cost_fmt"),
                       ("Onboarding lag", "onboarding_cost_fmt"),
                       (f"Ramp-up ({results.ramp_up_days} days)", "ramp_up_cost_fmt"),
                       ("Total per event", "cost_per_event_fmt")]:
        fig.text(0.10, y, label, fontsize=9.5, color=TEXT2)
        fig.text(0.45, y, d[key], fontsize=9.5, color=TEXT2)
        y -= 0.024

    y -= 0.025
    fig.text(0.08, y, "Competitor", fontsize=13, color=ORANGE, fontweight="bold")
    y -= 0.028
    fig.text(0.10, y,
             f"{d['competitor_events']} turnover events  →  {d['competitor_total_fmt']}",
             fontsize=9.5, color=TEXT2)

    y -= 0.04
    fig.text(0.08, y, "InForce", fontsize=13, color=GREEN, fontweight="bold")
    y -= 0.028
    fig.text(0.10, y,
             f"{d['inforce_events']} turnover events  →  {d['inforce_total_fmt']}",
             fontsize=9.5, color=TEXT2)

    y -= 0.05
    fig.text(0.08, y, "The Bottom Line", fontsize=13, color=TEXT, fontweight="bold")
    y -= 0.03
    fig.text(0.10, y, f"You save {d['savings_fmt']} ({d['savings_pct_fmt']})",
             fontsize=12, color=GREEN, fontweight="bold")
    y -= 0.03

    words = summary_text.split()
    line = ""
    for word in words:
        if len(line) + len(word) + 1 <= 85:
            line = f"{line} {word}" if line else word
        else:
            fig.text(0.10, y, line, fontsize=9, color=TEXT2)
            y -= 0.022
            line = word
    if line:
        fig.text(0.10, y, line, fontsize=9, color=TEXT2)

    fig.text(0.50, 0.03,
             "Estimates only. Turnover rates and ramp-up timelines are "
             "modelling assumptions.",
             ha="center", fontsize=8, color=SLATE, style="italic")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def figure_to_base64(fig: plt.Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(),
                dpi=120, bbox_inches="tight")
    buf.seek(0)
    b64 = base64.b64encode(buf.read()).decode()
    buf.close()
    return b64


def generate_pdf(
    results: CalcResults,
    d: Dict[str, Any],
    summary_text: str,
    path: str = cfg.PDF_FILENAME,
) -> str:
    """Generate the full PDF report. Returns the file path."""
    pages = [
        _page1_summary(results, d, summary_text),
        _chart_cost_comparison(results, d, figsize=(LETTER_W, LETTER_H * 0.55)),
        _chart_productivity(figsize=(LETTER_W, LETTER_H * 0.55)),
    ]
    with PdfPages(path) as pdf:
        for fig in pages:
            pdf.savefig(fig, facecolor=fig.get_facecolor())
    for fig in pages:
        plt.close(fig)
    return path


def get_web_charts(results: CalcResults, d: Dict[str, Any]) -> List[str]:
    """Return base64-encoded PNG chart images for web embedding.

    Returns 2 charts:
      [0] Competitor vs InForce cost  (stacked by phase)
      [1] Productivity recovery curve
    """
    chart_figs = [
        _chart_cost_comparison(results, d),
        _chart_productivity(),
    ]
    images = [figure_to_base64(f) for f in chart_figs]
    for f in chart_figs:
        plt.close(f)
    return images
