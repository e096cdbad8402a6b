"""
PVG Constants for the InForce turnover ROI calculator.

All monetary values in USD. Assumptions follow the Productivity Value Gap
framework from "The Need to Turnaround Turnover"; the ones still pending
validation are noted inline.
"""

# ── Turnover rates ───────────────────────────────────────────────────
INFORCE_ANNUAL_TURNOVER = 0.05       # 95% retention
COMPETITOR_ANNUAL_TURNOVER = 0.30    # industry figure, pending validation

# ── Phase 1: Idle time (vacancy period) ──────────────────────────────
VACANCY_WEEKS = 2
VACANCY_PAYMENT = 1.0                # client keeps paying for a full team

# ── Phase 2: Onboarding lag ──────────────────────────────────────────
ONBOARDING_DAYS = 5                  # access, permissions, setup
ONBOARDING_PAYMENT = 1.0

# ── Phase 3: Acclimation (ramp-up) ───────────────────────────────────
# Days to full productivity, by experience level
RAMP_UP_DAYS = {
    "junior": 60,
    "mixed": 45,
    "senior": 30,
}
AVERAGE_RAMP_UP_PRODUCTIVITY = 0.5   # linear 0% -> 100%

# ── Calendar ─────────────────────────────────────────────────────────
HOURS_PER_WEEK = 40
WEEKS_PER_YEAR = 52
WORKING_DAYS_PER_WEEK = 5
MONTHS_PER_YEAR = 12
WEEKS_PER_MONTH = 4.33               # budget estimate only

# ── Input sliders: (min, max, default) ───────────────────────────────
HOURLY_RATE_RANGE = (150, 350, 200)
TEAM_SIZE_RANGE = (5, 30, 12)
PROJECT_DURATION_RANGE = (6, 36, 18)
DEFAULT_EXPERIENCE_LEVEL = "mixed"

EXPERIENCE_LABELS = {
    "junior": "Junior Developers",
    "mixed": "Mixed Experience",
    "senior": "Senior Developers",
}

# ── Productivity curve chart ─────────────────────────────────────────
CURVE_TIMELINE_WEEKS = 12            # x-axis runs 0..12 inclusive

# Series order matches the legend: fastest ramp first
CURVE_SERIES = [
    ("senior", "Senior Developer", "#00C853"),
    ("mixed", "Mixed Experience", "#0066CC"),
    ("junior", "Junior Developer", "#FF6B35"),
]
IDLE_REGION_COLOR = "#FF6B35"
ONBOARDING_REGION_COLOR = "#FFC107"

# ── Output ───────────────────────────────────────────────────────────
PDF_FILENAME = "pvg_roi_report.pdf"
