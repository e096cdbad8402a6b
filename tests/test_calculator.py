"""Tests for the PVG calculation core."""
from __future__ import annotations

import pytest

from calculator import (
    DEFAULT_ASSUMPTIONS,
    Assumptions,
    CalcInputs,
    InvalidExperienceLevel,
    calculate,
    round_half_up,
    turnover_events,
)


# ---------------------------------------------------------------------------
# Default scenario: $200/h, 12 people, 18 months, mixed experience
# ---------------------------------------------------------------------------

def test_default_scenario_event_counts(default_results):
    assert default_results.competitor_events == 5
    assert default_results.inforce_events == 1


def test_default_scenario_cost_per_event(default_results):
    r = default_results
    assert r.ramp_up_days == 45
    assert r.idle_time_cost == 16_000      # 2 wk * 40 h * $200
    assert r.onboarding_cost == 8_000      # 5 days = 1 wk
    assert r.ramp_up_cost == 36_000        # 9 wk at 50% gap
    assert r.cost_per_event == 60_000
    assert r.cost_breakdown == {
        "idle_time": 16_000,
        "onboarding": 8_000,
        "ramp_up": 36_000,
        "total": 60_000,
    }


def test_default_scenario_totals(default_results):
    r = default_results
    assert r.competitor_total == 300_000
    assert r.inforce_total == 60_000
    assert r.savings == 240_000
    assert r.savings_pct == pytest.approx(80.0)


def test_budget_percentage_is_a_separate_figure(default_results):
    r = default_results
    expected_budget = 12 * 40 * (18 * 4.33) * 200
    assert r.project_budget == pytest.approx(expected_budget)
    assert r.savings_pct_of_budget == pytest.approx(240_000 / expected_budget * 100)
    assert r.savings_pct_of_budget == pytest.approx(3.21, abs=0.01)
    assert r.savings_pct_of_budget != pytest.approx(r.savings_pct)


# ---------------------------------------------------------------------------
# Rounding of turnover events
# ---------------------------------------------------------------------------

def test_round_half_up_ties_go_up():
    assert round_half_up(4.5) == 5
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(0.49) == 0
    assert round_half_up(-2.5) == -2
    # x + 0.5 rounds to 1.0 in floating point here
    assert round_half_up(0.49999999999999994) == 0
    assert round_half_up(1.4999999999999998) == 1


def test_just_below_half_event_rounds_down():
    # 0.05 * 25 * (4.8 / 12) == 0.49999999999999994
    assert 0.05 * 25 * (4.8 / 12) < 0.5
    assert turnover_events(0.05, 25, 4.8) == 0
    assert calculate(CalcInputs(team_size=25, project_duration_months=4.8)).inforce_events == 0
    assert turnover_events(0.05, 50, 2.4) == 0
    assert turnover_events(0.05, 100, 1.2) == 0


def test_competitor_tie_rounds_up():
    # 0.30 * 15 * (12 / 12) == 4.5 exactly
    assert 0.30 * 15 * (12 / 12) == 4.5
    assert turnover_events(0.30, 15, 12) == 5
    # banker's rounding would give 4
    assert round(4.5) == 4


def test_inforce_tie_rounds_up():
    assert 0.05 * 10 * (12 / 12) == 0.5
    assert turnover_events(0.05, 10, 12) == 1
    res = calculate(CalcInputs(team_size=10, project_duration_months=12))
    assert res.inforce_events == 1
    assert res.competitor_events == 3


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

GRID = [
    CalcInputs(rate, team, months, level)
    for rate in (150, 200, 275, 350)
    for team in (5, 12, 30)
    for months in (6, 18, 36)
    for level in ("junior", "mixed", "senior")
]


def test_deterministic():
    for inp in GRID:
        assert calculate(inp) == calculate(inp)


def test_non_negative_and_consistent():
    for inp in GRID:
        r = calculate(inp)
        assert r.competitor_events >= 0 and r.inforce_events >= 0
        for val in (r.idle_time_cost, r.onboarding_cost, r.ramp_up_cost,
                    r.cost_per_event, r.competitor_total, r.inforce_total):
            assert val >= 0
        assert r.savings == r.competitor_total - r.inforce_total
        assert r.cost_per_event == r.idle_time_cost + r.onboarding_cost + r.ramp_up_cost


def test_zero_team_size_guards_percentage():
    r = calculate(CalcInputs(team_size=0))
    assert r.competitor_events == 0
    assert r.competitor_total == 0
    assert r.savings_pct == 0
    assert r.savings_pct_of_budget == 0


def test_short_project_without_events_guards_percentage():
    # 0.30 * 5 * (1 / 12) = 0.125 -> 0 events
    r = calculate(CalcInputs(team_size=5, project_duration_months=1))
    assert r.competitor_total == 0
    assert r.savings_pct == 0


def test_hourly_rate_monotonic():
    lo = calculate(CalcInputs(hourly_rate=150))
    hi = calculate(CalcInputs(hourly_rate=151))
    assert hi.cost_per_event > lo.cost_per_event
    assert hi.competitor_total > lo.competitor_total
    assert hi.inforce_total > lo.inforce_total


def test_experience_level_orders_ramp_up_cost():
    cost = {
        level: calculate(CalcInputs(experience_level=level)).ramp_up_cost
        for level in ("junior", "mixed", "senior")
    }
    assert cost["senior"] < cost["mixed"] < cost["junior"]
    assert cost["senior"] == 24_000
    assert cost["junior"] == 48_000


# ---------------------------------------------------------------------------
# Inputs and errors
# ---------------------------------------------------------------------------

def test_invalid_experience_level_fails_fast():
    with pytest.raises(InvalidExperienceLevel) as excinfo:
        calculate(CalcInputs(experience_level="expert"))
    assert excinfo.value.level == "expert"
    assert isinstance(excinfo.value, ValueError)
    assert "junior" in str(excinfo.value)


def test_out_of_range_inputs_are_not_rejected():
    r = calculate(CalcInputs(hourly_rate=1_000, team_size=100,
                             project_duration_months=60))
    assert r.competitor_events == 150
    assert r.competitor_total > 0


def test_clamped_holds_slider_bounds():
    c = CalcInputs(hourly_rate=100, team_size=50, project_duration_months=48).clamped()
    assert (c.hourly_rate, c.team_size, c.project_duration_months) == (150, 30, 36)
    c = CalcInputs(hourly_rate=400, team_size=1, project_duration_months=2).clamped()
    assert (c.hourly_rate, c.team_size, c.project_duration_months) == (350, 5, 6)
    assert CalcInputs().clamped() == CalcInputs()


def test_inputs_are_immutable():
    inp = CalcInputs()
    with pytest.raises(AttributeError):
        inp.hourly_rate = 300


def test_custom_assumptions():
    a = Assumptions(ramp_up_days={"expert": 10}, competitor_turnover=0.5)
    r = calculate(CalcInputs(experience_level="expert"), a)
    assert r.ramp_up_days == 10
    assert r.ramp_up_cost == 8_000
    # 0.5 * 12 * 1.5 = 9
    assert r.competitor_events == 9
    with pytest.raises(InvalidExperienceLevel):
        calculate(CalcInputs(experience_level="mixed"), a)


def test_assumptions_are_read_only_and_hashable():
    with pytest.raises(TypeError):
        DEFAULT_ASSUMPTIONS.ramp_up_days["mixed"] = 1
    assert DEFAULT_ASSUMPTIONS.ramp_up_days["mixed"] == 45
    assert hash(DEFAULT_ASSUMPTIONS) == hash(Assumptions())
    assert DEFAULT_ASSUMPTIONS == Assumptions()


def test_assumptions_copy_caller_mapping():
    days = {"expert": 10}
    a = Assumptions(ramp_up_days=days)
    days["expert"] = 99
    assert a.ramp_up_days["expert"] == 10
    assert a != DEFAULT_ASSUMPTIONS
