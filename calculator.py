"""
Productivity Value Gap (PVG) calculation engine for the turnover ROI calculator.

Compares the cost of staff turnover for two providers over one project:
  A) A typical competitor at 30% annual turnover
  B) InForce at 5% annual turnover

Each turnover event costs the client three sequential phases of lost
productivity: idle time, onboarding lag and the ramp-up (acclimation)
period. Everything here is a pure function of the inputs; no state is kept
between calls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Mapping

import numpy as np

import config as cfg


# ─── Errors ───────────────────────────────────────────────────────────

class InvalidExperienceLevel(ValueError):
    """Raised when an experience level has no configured ramp-up timeline."""

    def __init__(self, level: str, known: list[str]) -> None:
        self.level = level
        super().__init__(
            f"Unknown experience level {level!r}; "
            f"expected one of: {', '.join(known)}"
        )


# ─── Data Classes ─────────────────────────────────────────────────────

def _clamp(val: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, val))


@dataclass(frozen=True)
class CalcInputs:
    """User inputs for the calculator."""

    hourly_rate: float = cfg.HOURLY_RATE_RANGE[2]                  # $/hour billed
    team_size: int = cfg.TEAM_SIZE_RANGE[2]                        # people on the project
    project_duration_months: float = cfg.PROJECT_DURATION_RANGE[2]
    experience_level: str = cfg.DEFAULT_EXPERIENCE_LEVEL           # junior / mixed / senior

    def clamped(self) -> CalcInputs:
        """Return a copy with the numeric fields held to the slider bounds."""
        return replace(
            self,
            hourly_rate=_clamp(self.hourly_rate, *cfg.HOURLY_RATE_RANGE[:2]),
            team_size=int(_clamp(self.team_size, *cfg.TEAM_SIZE_RANGE[:2])),
            project_duration_months=_clamp(
                self.project_duration_months, *cfg.PROJECT_DURATION_RANGE[:2]
            ),
        )


@dataclass(frozen=True)
class Assumptions:
    """Fixed PVG assumptions. Defaults come from ``config``."""

    inforce_turnover: float = cfg.INFORCE_ANNUAL_TURNOVER
    competitor_turnover: float = cfg.COMPETITOR_ANNUAL_TURNOVER
    vacancy_weeks: float = cfg.VACANCY_WEEKS
    vacancy_payment: float = cfg.VACANCY_PAYMENT
    onboarding_days: float = cfg.ONBOARDING_DAYS
    onboarding_payment: float = cfg.ONBOARDING_PAYMENT
    # Read-only view; left out of the hash since mappings are unhashable
    ramp_up_days: Mapping[str, int] = field(
        default_factory=lambda: cfg.RAMP_UP_DAYS, hash=False
    )
    average_ramp_up_productivity: float = cfg.AVERAGE_RAMP_UP_PRODUCTIVITY
    hours_per_week: float = cfg.HOURS_PER_WEEK
    working_days_per_week: float = cfg.WORKING_DAYS_PER_WEEK
    weeks_per_month: float = cfg.WEEKS_PER_MONTH

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "ramp_up_days", MappingProxyType(dict(self.ramp_up_days))
        )


DEFAULT_ASSUMPTIONS = Assumptions()


@dataclass(frozen=True)
class CalcResults:
    """Everything derived from one set of inputs."""

    inputs: CalcInputs
    ramp_up_days: int

    # ── Turnover events over the project ──
    competitor_events: int
    inforce_events: int

    # ── Cost of a single turnover event ──
    idle_time_cost: float
    onboarding_cost: float
    ramp_up_cost: float
    cost_per_event: float

    # ── Totals ──
    competitor_total: float
    inforce_total: float
    savings: float                # competitor_total - inforce_total
    savings_pct: float            # share of competitor_total, 0 if no cost

    # Rough budget from weeks-per-month; not reconciled with the totals
    project_budget: float

    @property
    def cost_breakdown(self) -> Dict[str, float]:
        return {
            "idle_time": self.idle_time_cost,
            "onboarding": self.onboarding_cost,
            "ramp_up": self.ramp_up_cost,
            "total": self.cost_per_event,
        }

    @property
    def savings_pct_of_budget(self) -> float:
        """Savings as a percentage of the estimated project budget."""
        if self.project_budget == 0:
            return 0.0
        return self.savings / self.project_budget * 100


# ─── Core Calculation ────────────────────────────────────────────────

def round_half_up(x: float) -> int:
    """Round to the nearest integer, ties toward positive infinity.

    >>> round_half_up(4.5), round_half_up(2.5), round_half_up(-2.5)
    (5, 3, -2)
    """
    # x + 0.5 can round up in floating point (0.49999999999999994 -> 1.0)
    f = math.floor(x)
    return int(f + (1 if x - f >= 0.5 else 0))


def turnover_events(annual_rate: float, team_size: float,
                    duration_months: float) -> int:
    """Expected departures over the project, rounded to whole events."""
    annual_events = annual_rate * team_size
    project_events = annual_events * (duration_months / cfg.MONTHS_PER_YEAR)
    return round_half_up(project_events)


def calculate(
    inputs: CalcInputs,
    assumptions: Assumptions = DEFAULT_ASSUMPTIONS,
) -> CalcResults:
    """Run the PVG comparison for one set of inputs.

    Parameters
    ----------
    inputs : CalcInputs
        Hourly rate, team size, project duration and experience level.
        Values outside the slider bounds are used as given.
    assumptions : Assumptions
        Turnover rates and phase lengths. Defaults to the config values.

    Returns
    -------
    CalcResults
        Event counts, per-event cost breakdown, totals and savings.

    Raises
    ------
    InvalidExperienceLevel
        If ``inputs.experience_level`` has no ramp-up timeline.
    """
    a = assumptions
    try:
        ramp_up_days = a.ramp_up_days[inputs.experience_level]
    except KeyError:
        raise InvalidExperienceLevel(
            inputs.experience_level, list(a.ramp_up_days)
        ) from None

    rate = inputs.hourly_rate
    hpw = a.hours_per_week
    days = a.working_days_per_week

    competitor_events = turnover_events(
        a.competitor_turnover, inputs.team_size, inputs.project_duration_months
    )
    inforce_events = turnover_events(
        a.inforce_turnover, inputs.team_size, inputs.project_duration_months
    )

    # Phase 1: full pay, zero output
    idle_time_cost = a.vacancy_weeks * hpw * rate * a.vacancy_payment

    # Phase 2: onboarding days expressed as a fraction of a work week
    onboarding_cost = (a.onboarding_days / days) * hpw * rate * a.onboarding_payment

    # Phase 3: linear ramp, so the gap is 1 - average productivity
    productivity_gap = 1 - a.average_ramp_up_productivity
    ramp_up_cost = (ramp_up_days / days) * hpw * rate * productivity_gap

    cost_per_event = idle_time_cost + onboarding_cost + ramp_up_cost

    competitor_total = competitor_events * cost_per_event
    inforce_total = inforce_events * cost_per_event
    savings = competitor_total - inforce_total

    if competitor_total == 0:
        savings_pct = 0.0
    else:
        savings_pct = savings / competitor_total * 100

    weeks = inputs.project_duration_months * a.weeks_per_month
    project_budget = inputs.team_size * hpw * weeks * rate

    return CalcResults(
        inputs=inputs,
        ramp_up_days=ramp_up_days,
        competitor_events=competitor_events,
        inforce_events=inforce_events,
        idle_time_cost=idle_time_cost,
        onboarding_cost=onboarding_cost,
        ramp_up_cost=ramp_up_cost,
        cost_per_event=cost_per_event,
        competitor_total=competitor_total,
        inforce_total=inforce_total,
        savings=savings,
        savings_pct=savings_pct,
        project_budget=project_budget,
    )


# ─── Productivity Curve ──────────────────────────────────────────────

# Phase boundaries on the week axis, shared with the chart's shaded regions
IDLE_END_WEEK = cfg.VACANCY_WEEKS
ONBOARDING_END_WEEK = cfg.VACANCY_WEEKS + cfg.ONBOARDING_DAYS / cfg.WORKING_DAYS_PER_WEEK

# Fixed durations for the chart. These never follow the live inputs.
CURVE_RAMP_UP_WEEKS = {
    level: d / cfg.WORKING_DAYS_PER_WEEK for level, d in cfg.RAMP_UP_DAYS.items()
}

CURVE_WEEKS = np.arange(cfg.CURVE_TIMELINE_WEEKS + 1)


def productivity_curve(ramp_up_weeks: float) -> np.ndarray:
    """Productivity (%) for each week 0..12 after a turnover event.

    Zero through idle time and onboarding, then a linear ramp to 100%
    over ``ramp_up_weeks``, clamped at 100.
    """
    if ramp_up_weeks <= 0:
        raise ValueError("ramp_up_weeks must be positive")

    weeks = CURVE_WEEKS.astype(float)
    curve = np.minimum(100.0, (weeks - ONBOARDING_END_WEEK) / ramp_up_weeks * 100)
    curve[weeks < ONBOARDING_END_WEEK] = 0.0
    return curve


def productivity_curves() -> Dict[str, np.ndarray]:
    """One curve per experience level, using the fixed chart durations."""
    return {
        level: productivity_curve(weeks)
        for level, weeks in CURVE_RAMP_UP_WEEKS.items()
    }


def curve_phase(week: float) -> str:
    """Name of the PVG phase a week falls in."""
    if week < IDLE_END_WEEK:
        return "Idle Time"
    if week < ONBOARDING_END_WEEK:
        return "Onboarding"
    return "Ramp-Up"


# ─── Smoke Test ──────────────────────────────────────────────────────

if __name__ == "__main__":
    print("=" * 60)
    print("PVG Calculator — Smoke Test")
    print("=" * 60)

    res = calculate(CalcInputs())
    print(f"\nInputs: {res.inputs}")
    print(f"  Competitor events:   {res.competitor_events}")
    print(f"  InForce events:      {res.inforce_events}")
    print(f"  Cost per event:      ${res.cost_per_event:,.0f}")
    print(f"    Idle time:         ${res.idle_time_cost:,.0f}")
    print(f"    Onboarding:        ${res.onboarding_cost:,.0f}")
    print(f"    Ramp-up:           ${res.ramp_up_cost:,.0f}")
    print(f"  Competitor total:    ${res.competitor_total:,.0f}")
    print(f"  InForce total:       ${res.inforce_total:,.0f}")
    print(f"  Savings:             ${res.savings:,.0f} ({res.savings_pct:.1f}%)")
    print(f"  Project budget:      ${res.project_budget:,.0f} "
          f"(savings = {res.savings_pct_of_budget:.2f}%)")

    print("\nProductivity curves:")
    for level, curve in productivity_curves().items():
        print(f"  {level:>6}: {', '.join(f'{v:.0f}' for v in curve)}")
