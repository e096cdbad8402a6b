"""
CLI interface and shared display-data computation for the
PVG turnover ROI calculator.
"""

from __future__ import annotations

import sys
from typing import Any, Dict, List

import config as cfg
from calculator import (
    CalcInputs,
    CalcResults,
    calculate,
    round_half_up,
)
import report


# ═══════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════

def fmt(val: float) -> str:
    """Format number as $X,XXX (whole dollars, halves rounded up)."""
    return f"${round_half_up(val):,}"


def pct(val: float, decimals: int = 1) -> str:
    return f"{val:.{decimals}f}%"


# ═══════════════════════════════════════════════════════════════════
# Input collection (CLI)
# ═══════════════════════════════════════════════════════════════════

def _strip_currency(s: str) -> str:
    """Remove currency symbols, commas, spaces."""
    return s.replace("$", "").replace(",", "").replace(" ", "")


def _prompt_float(
    label: str,
    default: float,
    min_val: float | None = None,
    max_val: float | None = None,
) -> float:
    while True:
        raw = input(f"  {label} [{default}]: ").strip()
        if not raw:
            return float(default)
        try:
            val = float(_strip_currency(raw))
            if min_val is not None and val < min_val:
                print(f"    Must be at least {min_val}")
                continue
            if max_val is not None and val > max_val:
                print(f"    Must be at most {max_val}")
                continue
            return val
        except ValueError:
            print("    Invalid number, try again.")


def _prompt_int(
    label: str,
    default: int,
    min_val: int | None = None,
    max_val: int | None = None,
) -> int:
    while True:
        raw = input(f"  {label} [{default}]: ").strip()
        if not raw:
            return default
        try:
            val = int(float(_strip_currency(raw)))
            if min_val is not None and val < min_val:
                print(f"    Must be at least {min_val}")
                continue
            if max_val is not None and val > max_val:
                print(f"    Must be at most {max_val}")
                continue
            return val
        except (ValueError, OverflowError):  # int(float("inf"))
            print("    Invalid number, try again.")


def _prompt_choice(label: str, options: list[str], default: str) -> str:
    opts = "/".join(options)
    while True:
        raw = input(f"  {label} ({opts}) [{default}]: ").strip().lower()
        if not raw:
            return default
        if raw in options:
            return raw
        print(f"    Choose from: {opts}")


def collect_inputs() -> CalcInputs:
    """Prompt the user for the four calculator inputs."""
    print("\n  Enter your project details (press Enter for defaults):\n")

    lo, hi, default = cfg.HOURLY_RATE_RANGE
    rate = _prompt_float("Hourly rate ($)", default, lo, hi)
    lo, hi, default = cfg.TEAM_SIZE_RANGE
    team = _prompt_int("Team size", default, lo, hi)
    lo, hi, default = cfg.PROJECT_DURATION_RANGE
    months = _prompt_float("Project duration (months)", default, lo, hi)
    level = _prompt_choice(
        "Experience level", list(cfg.RAMP_UP_DAYS), cfg.DEFAULT_EXPERIENCE_LEVEL
    )

    return CalcInputs(
        hourly_rate=rate,
        team_size=team,
        project_duration_months=months,
        experience_level=level,
    )


# ═══════════════════════════════════════════════════════════════════
# Shared display-data computation (used by CLI and web app)
# ═══════════════════════════════════════════════════════════════════

def compute_display_data(results: CalcResults) -> Dict[str, Any]:
    """Extract every metric and formatted string the output sections need."""
    inp = results.inputs

    d: Dict[str, Any] = {
        # Inputs echo
        "hourly_rate": inp.hourly_rate,
        "hourly_rate_fmt": fmt(inp.hourly_rate),
        "team_size": inp.team_size,
        "duration": inp.project_duration_months,
        "experience_level": inp.experience_level,
        "experience_label": cfg.EXPERIENCE_LABELS.get(
            inp.experience_level, inp.experience_level.title()
        ),
        "ramp_up_days": results.ramp_up_days,
        # Per event
        "idle_time_cost": results.idle_time_cost,
        "onboarding_cost": results.onboarding_cost,
        "ramp_up_cost": results.ramp_up_cost,
        "cost_per_event": results.cost_per_event,
        # Totals
        "competitor_events": results.competitor_events,
        "inforce_events": results.inforce_events,
        "competitor_total": results.competitor_total,
        "inforce_total": results.inforce_total,
        "savings": results.savings,
        "savings_pct": results.savings_pct,
        "project_budget": results.project_budget,
        "savings_pct_of_budget": results.savings_pct_of_budget,
    }

    # Each party's total split by PVG phase
    for party in ("competitor", "inforce"):
        events = d[f"{party}_events"]
        d[f"{party}_idle_time_cost"] = events * results.idle_time_cost
        d[f"{party}_onboarding_cost"] = events * results.onboarding_cost
        d[f"{party}_ramp_up_cost"] = events * results.ramp_up_cost

    for key in ("idle_time_cost", "onboarding_cost", "ramp_up_cost",
                "cost_per_event", "competitor_total", "inforce_total",
                "savings", "project_budget"):
        d[f"{key}_fmt"] = fmt(d[key])
    d["savings_pct_fmt"] = pct(results.savings_pct)
    d["savings_pct_of_budget_fmt"] = pct(results.savings_pct_of_budget, 2)

    return d


def generate_summary_text(d: Dict[str, Any]) -> str:
    """Build a 2-3 sentence plain-English summary."""
    months = f"{d['duration']:g}"
    if d["competitor_events"] == 0:
        return (
            f"A team of {d['team_size']} over {months} months is too small "
            f"for a typical provider to expect a turnover event, so there is "
            f"no turnover cost to compare."
        )
    return (
        f"Over {months} months a team of {d['team_size']} can expect "
        f"{d['competitor_events']} turnover events with a typical provider "
        f"against {d['inforce_events']} with InForce. Each event costs "
        f"{fmt(d['cost_per_event'])} in idle time, onboarding and "
        f"{d['ramp_up_days']}-day ramp-up, so lower turnover saves "
        f"{fmt(d['savings'])}, about {pct(d['savings_pct_of_budget'], 2)} "
        f"of the estimated project budget."
    )


# ═══════════════════════════════════════════════════════════════════
# Box-drawing CLI output
# ═══════════════════════════════════════════════════════════════════

W = 78  # box width (characters)
H = "═"


def _box_top(title: str) -> str:
    inner = W - 2
    return (
        f"╔{H * inner}╗\n"
        f"║  {title:<{inner - 2}}║\n"
        f"╠{H * inner}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"║  {text:<{inner}}║"


def _box_row(label: str, value: str, lw: int = 38) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{H * (W - 2)}╝"


def _print_section(title: str, rows: List[str]) -> None:
    """Print a titled box with content rows."""
    print(_box_top(title))
    for r in rows:
        print(r)
    print(_box_bottom())
    print()


# ═══════════════════════════════════════════════════════════════════
# CLI Section Printers
# ═══════════════════════════════════════════════════════════════════

def _print_project(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Hourly rate", d["hourly_rate_fmt"]),
        _box_row("Team size", str(d["team_size"])),
        _box_row("Project duration", f"{d['duration']:g} months"),
        _box_row("Experience level", d["experience_label"]),
        _box_line(),
        _box_row("Estimated project budget", d["project_budget_fmt"]),
    ]
    _print_section("YOUR PROJECT", rows)


def _print_per_event(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Idle time (vacancy)",
                 f"{d['idle_time_cost_fmt']:>10}  ({cfg.VACANCY_WEEKS} weeks)"),
        _box_row("Onboarding lag",
                 f"{d['onboarding_cost_fmt']:>10}  ({cfg.ONBOARDING_DAYS} days)"),
        _box_row("Ramp-up",
                 f"{d['ramp_up_cost_fmt']:>10}  ({d['ramp_up_days']} days at "
                 f"{cfg.AVERAGE_RAMP_UP_PRODUCTIVITY * 100:.0f}%)"),
        _box_line("─" * (W - 6)),
        _box_row("Cost per turnover event", f"{d['cost_per_event_fmt']:>10}"),
    ]
    _print_section("COST PER TURNOVER EVENT", rows)


def _print_comparison(d: Dict[str, Any]) -> None:
    h1 = f"{'':<16}{'Events':>8}{'Idle':>12}{'Onboard':>12}{'Ramp-up':>12}{'Total':>12}"
    rows = [_box_line(h1), _box_line("─" * (W - 6))]
    for party, label in (("competitor", "Competitor"), ("inforce", "InForce")):
        rows.append(_box_line(
            f"{label:<16}"
            f"{d[f'{party}_events']:>8}"
            f"{fmt(d[f'{party}_idle_time_cost']):>12}"
            f"{fmt(d[f'{party}_onboarding_cost']):>12}"
            f"{fmt(d[f'{party}_ramp_up_cost']):>12}"
            f"{d[f'{party}_total_fmt']:>12}"
        ))
    _print_section("COMPETITOR vs INFORCE", rows)


def _print_bottom_line(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Savings with InForce", d["savings_fmt"]),
        _box_row("  of competitor turnover cost", d["savings_pct_fmt"]),
        _box_row("  of estimated project budget", d["savings_pct_of_budget_fmt"]),
        _box_line(),
    ]

    line_len = W - 6
    line = ""
    for word in generate_summary_text(d).split():
        if len(line) + len(word) + 1 <= line_len:
            line = f"{line} {word}" if line else word
        else:
            rows.append(_box_line(line))
            line = word
    if line:
        rows.append(_box_line(line))

    _print_section("THE BOTTOM LINE", rows)


def _print_charts(pdf_path: str | None) -> None:
    rows = []
    if pdf_path:
        rows.append(_box_line(f"PDF report saved to: {pdf_path}"))
    else:
        rows.append(_box_line("Charts available in the web app:"))
        rows.append(_box_line("  python main.py  (opens localhost:5000)"))
    _print_section("CHARTS", rows)


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry point
# ═══════════════════════════════════════════════════════════════════

def run_cli(pdf_path: str | None = cfg.PDF_FILENAME) -> None:
    """Run the full CLI workflow."""
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError):
        pass
    print()
    print("=" * W)
    print("  The Cost of Turnover: PVG ROI Calculator")
    print("=" * W)

    inputs = collect_inputs()
    results = calculate(inputs)
    d = compute_display_data(results)

    print()
    _print_project(d)
    _print_per_event(d)
    _print_comparison(d)
    _print_bottom_line(d)

    if pdf_path:
        print("  Generating PDF report...")
        pdf_path = report.generate_pdf(
            results, d, generate_summary_text(d), pdf_path,
        )
        print(f"  Saved to {pdf_path}\n")

    _print_charts(pdf_path)


if __name__ == "__main__":
    run_cli()
