"""Tests for the productivity recovery curve."""
from __future__ import annotations

import numpy as np
import pytest

from calculator import (
    CURVE_RAMP_UP_WEEKS,
    CURVE_WEEKS,
    IDLE_END_WEEK,
    ONBOARDING_END_WEEK,
    curve_phase,
    productivity_curve,
    productivity_curves,
)


def test_fixed_ramp_up_durations():
    assert CURVE_RAMP_UP_WEEKS == {"junior": 12, "mixed": 9, "senior": 6}


def test_phase_boundaries_follow_calculator_constants():
    assert IDLE_END_WEEK == 2
    assert ONBOARDING_END_WEEK == 3
    assert list(CURVE_WEEKS) == list(range(13))


@pytest.mark.parametrize("weeks", [6, 9, 12])
def test_curve_shape(weeks):
    curve = productivity_curve(weeks)
    assert len(curve) == 13
    assert curve[0] == 0 and curve[1] == 0
    # onboarding week and the first ramp week are still zero
    assert curve[2] == 0 and curve[3] == 0
    assert np.all(np.diff(curve) >= 0)
    assert curve.max() <= 100


@pytest.mark.parametrize("weeks", [6, 9])
def test_curve_reaches_full_productivity_by_week_12(weeks):
    assert productivity_curve(weeks)[-1] == 100


def test_junior_curve_still_ramping_at_week_12():
    assert productivity_curve(12)[-1] == pytest.approx(75.0)


def test_linear_ramp_values():
    senior = productivity_curve(6)
    assert senior[6] == pytest.approx(50.0)
    assert senior[9] == 100
    assert senior[12] == 100
    mixed = productivity_curve(9)
    assert mixed[7] == pytest.approx(4 / 9 * 100)


def test_curve_restarts_on_each_call():
    first = productivity_curve(9)
    first[:] = -1
    assert np.array_equal(productivity_curve(9), productivity_curves()["mixed"])
    assert productivity_curve(9)[0] == 0


@pytest.mark.parametrize("bad", [0, -3])
def test_non_positive_ramp_rejected(bad):
    with pytest.raises(ValueError):
        productivity_curve(bad)


def test_productivity_curves_one_per_level():
    curves = productivity_curves()
    assert set(curves) == {"junior", "mixed", "senior"}
    # faster ramp is never behind a slower one
    assert np.all(curves["senior"] >= curves["mixed"])
    assert np.all(curves["mixed"] >= curves["junior"])


@pytest.mark.parametrize("week, phase", [
    (0, "Idle Time"),
    (1.9, "Idle Time"),
    (2, "Onboarding"),
    (2.5, "Onboarding"),
    (3, "Ramp-Up"),
    (12, "Ramp-Up"),
])
def test_curve_phase(week, phase):
    assert curve_phase(week) == phase
