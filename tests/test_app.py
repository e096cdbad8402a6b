"""Tests for the Flask web app."""
from __future__ import annotations

import os

import app as app_module


def test_index_shows_default_results(client):
    resp = client.get("/")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "The Cost of Turnover" in html
    assert "$240,000" in html
    assert "$300,000" in html
    assert html.count("data:image/png;base64,") == 2


def test_post_recalculates_and_writes_pdf(client):
    resp = client.post("/", data={
        "hourly_rate": "300",
        "team_size": "20",
        "project_duration": "24",
        "experience_level": "senior",
    })
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    # 12 vs 2 events at $72,000 each (24k idle + 12k onboarding + 36k ramp-up)
    assert "$72,000" in html
    assert "$864,000" in html
    assert "$144,000" in html
    assert "$720,000" in html
    assert os.path.exists(app_module.PDF_PATH)

    pdf = client.get("/download-pdf")
    assert pdf.status_code == 200
    assert pdf.mimetype == "application/pdf"


def test_post_rejects_unknown_experience_level(client):
    resp = client.post("/", data={"experience_level": "expert"})
    assert resp.status_code == 400
    assert "expert" in resp.get_data(as_text=True)


def test_download_without_report_is_404(client):
    assert client.get("/download-pdf").status_code == 404


def test_api_defaults(client):
    data = client.get("/api/calculate").get_json()
    assert data["competitor_events"] == 5
    assert data["inforce_events"] == 1
    assert data["savings"] == 240_000
    assert data["savings_fmt"] == "$240,000"
    assert data["savings_pct_fmt"] == "80.0%"
    assert "summary" in data


def test_api_clamps_to_slider_bounds(client):
    data = client.get(
        "/api/calculate?hourly_rate=1000&team_size=2&project_duration=99"
    ).get_json()
    assert data["hourly_rate"] == 350
    assert data["team_size"] == 5
    assert data["duration"] == 36


def test_api_errors_are_400(client):
    resp = client.get("/api/calculate?experience_level=expert")
    assert resp.status_code == 400
    assert "expert" in resp.get_json()["error"]
    assert client.get("/api/calculate?team_size=abc").status_code == 400


def test_parse_form_accepts_currency():
    inp = app_module.parse_form({"hourly_rate": "$250", "team_size": "8",
                                 "project_duration": "12",
                                 "experience_level": " Junior "})
    assert (inp.hourly_rate, inp.team_size, inp.project_duration_months,
            inp.experience_level) == (250.0, 8, 12.0, "junior")


def test_api_non_finite_numbers_are_400(client):
    for query in ("team_size=inf", "team_size=1e400", "team_size=-inf"):
        resp = client.get(f"/api/calculate?{query}")
        assert resp.status_code == 400
        assert "out of range" in resp.get_json()["error"]


def test_post_non_finite_team_size_is_400(client):
    assert client.post("/", data={"team_size": "inf"}).status_code == 400


def test_page_script_shows_api_error_message(client):
    html = client.get("/").get_data(as_text=True)
    assert "throw new Error(e.error)" in html
