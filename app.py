"""
Flask web application for the PVG turnover ROI calculator.

Single-file app using render_template_string.  Run via ``python main.py``
which starts the dev server on localhost:5000.  The sliders call
``/api/calculate`` on every change so the figures update live; submitting
the form also redraws the charts and refreshes the PDF report.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Tuple

from flask import Flask, jsonify, render_template_string, request, send_file

import config as cfg
from calculator import CalcInputs, CalcResults, calculate
from cli import (
    compute_display_data,
    generate_summary_text,
)
import report

app = Flask(__name__)

PDF_PATH = cfg.PDF_FILENAME

# ═══════════════════════════════════════════════════════════════════
# Form parsing
# ═══════════════════════════════════════════════════════════════════

def _parse_currency(s: str) -> float:
    return float(s.replace("$", "").replace(",", "").replace(" ", ""))


def parse_form(form) -> CalcInputs:
    """Parse the HTML form (or query string) into clamped CalcInputs."""
    try:
        inputs = CalcInputs(
            hourly_rate=_parse_currency(
                form.get("hourly_rate", str(cfg.HOURLY_RATE_RANGE[2]))),
            team_size=int(float(form.get("team_size", cfg.TEAM_SIZE_RANGE[2]))),
            project_duration_months=float(
                form.get("project_duration", cfg.PROJECT_DURATION_RANGE[2])),
            experience_level=form.get(
                "experience_level", cfg.DEFAULT_EXPERIENCE_LEVEL).strip().lower(),
        )
    except OverflowError as exc:
        # int(float("inf")) and friends
        raise ValueError(f"number out of range: {exc}") from exc
    return inputs.clamped()


def _run(inputs: CalcInputs) -> Tuple[CalcResults, Dict[str, Any]]:
    results = calculate(inputs)
    return results, compute_display_data(results)


# ═══════════════════════════════════════════════════════════════════
# HTML Template
# ═══════════════════════════════════════════════════════════════════

HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>The Cost of Turnover: PVG ROI Calculator</title>
<style>
  *{margin:0;padding:0;box-sizing:border-box}
  :root{
    --bg-deep:#050816;
    --bg-surface:rgba(15,23,42,0.55);
    --border-subtle:rgba(0,102,204,0.15);
    --text-primary:#f1f5f9;
    --text-secondary:#94a3b8;
    --blue:#0066CC;
    --green:#00C853;
    --orange:#FF6B35;
    --amber:#FFC107;
    --radius-lg:16px;
    --radius-md:10px;
  }
  body{
    background:var(--bg-deep);color:var(--text-primary);
    font-family:system-ui,-apple-system,sans-serif;line-height:1.6;
  }
  .container{max-width:1140px;margin:0 auto;padding:2rem 1.5rem}

  /* ── hero header ── */
  .hero{text-align:center;padding:1.5rem 0 2.5rem}
  .hero h1{font-size:clamp(1.5rem,4vw,2.5rem);font-weight:800;letter-spacing:-.035em}
  .hero-sub{color:var(--text-secondary);margin-top:.6rem;font-size:.92rem}

  /* ── cards ── */
  .card{
    background:var(--bg-surface);border:1px solid var(--border-subtle);
    border-radius:var(--radius-lg);padding:1.8rem;margin-bottom:1.4rem;
  }
  h2{font-size:1.1rem;font-weight:700;margin-bottom:1rem}

  /* ── sliders ── */
  .form-grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(240px,1fr));gap:1rem 1.5rem}
  .form-group{display:flex;flex-direction:column}
  .form-group label{font-size:.78rem;color:var(--text-secondary);margin-bottom:.3rem;font-weight:500}
  .form-group output{font-weight:700;font-size:1.1rem}
  .form-group select{
    background:#080b16;border:1px solid rgba(71,85,105,.35);border-radius:var(--radius-md);
    color:var(--text-primary);padding:.55rem .8rem;font-family:inherit;
  }
  input[type=range]{accent-color:var(--blue)}

  .btn{
    display:inline-flex;align-items:center;justify-content:center;
    padding:.75rem 2rem;border:none;border-radius:var(--radius-md);
    font-size:.95rem;font-weight:600;cursor:pointer;text-decoration:none;color:#fff;
  }
  .btn-primary{background:var(--blue)}
  .btn-success{background:var(--green)}

  /* ── results ── */
  .options-grid{display:grid;grid-template-columns:1fr 1fr;gap:1.4rem;margin-bottom:1.4rem}
  @media(max-width:768px){.options-grid{grid-template-columns:1fr}}
  .stat-row{display:flex;justify-content:space-between;padding:.5rem 0;border-bottom:1px solid rgba(51,65,85,.3)}
  .stat-row:last-child{border-bottom:none}
  .stat-label{color:var(--text-secondary);font-size:.86rem}
  .stat-value{font-weight:600;font-size:.86rem;font-variant-numeric:tabular-nums}
  .competitor .stat-value{color:var(--orange)}
  .inforce .stat-value{color:var(--green)}
  .savings-big{font-size:clamp(1.6rem,4vw,2.4rem);font-weight:800;color:var(--green)}
  .savings-sub{color:var(--text-secondary)}
  .chart-img{width:100%;border-radius:var(--radius-md);margin-top:.5rem}
  .error{color:var(--orange);font-weight:600}
  .footer{text-align:center;color:var(--text-secondary);font-size:.8rem;padding:2rem 0}
</style>
</head>
<body>
<div class="container">

<div class="hero">
  <h1>The Cost of Turnover</h1>
  <p class="hero-sub">Productivity Value Gap calculator: what staff turnover costs your project, and what lower turnover saves.</p>
</div>

<div class="card">
  <h2>Your Project</h2>
  <form method="POST" id="calc-form">
    <div class="form-grid">
      <div class="form-group">
        <label for="hourly_rate">Hourly rate</label>
        <output id="hourly_rate_out">${{ d.hourly_rate|int }}</output>
        <input type="range" id="hourly_rate" name="hourly_rate"
               min="{{ bounds.hourly_rate[0] }}" max="{{ bounds.hourly_rate[1] }}" step="5"
               value="{{ d.hourly_rate|int }}">
      </div>
      <div class="form-group">
        <label for="team_size">Team size</label>
        <output id="team_size_out">{{ d.team_size }}</output>
        <input type="range" id="team_size" name="team_size"
               min="{{ bounds.team_size[0] }}" max="{{ bounds.team_size[1] }}" step="1"
               value="{{ d.team_size }}">
      </div>
      <div class="form-group">
        <label for="project_duration">Project duration (months)</label>
        <output id="project_duration_out">{{ '%g'|format(d.duration) }}</output>
        <input type="range" id="project_duration" name="project_duration"
               min="{{ bounds.project_duration[0] }}" max="{{ bounds.project_duration[1] }}" step="1"
               value="{{ '%g'|format(d.duration) }}">
      </div>
      <div class="form-group">
        <label for="experience_level">Experience level</label>
        <select id="experience_level" name="experience_level">
          {% for key, label in levels.items() %}
          <option value="{{ key }}" {{ 'selected' if d.experience_level == key }}>{{ label }}</option>
          {% endfor %}
        </select>
      </div>
    </div>
    <div style="margin-top:1.4rem;text-align:center">
      <button type="submit" class="btn btn-primary">Update Charts &amp; Report</button>
    </div>
  </form>
  <p class="error" id="calc-error"></p>
</div>

<div class="card">
  <h2>Cost per Turnover Event</h2>
  <div class="stat-row"><span class="stat-label">Idle time ({{ vacancy_weeks }} weeks)</span><span class="stat-value" data-field="idle_time_cost_fmt">{{ d.idle_time_cost_fmt }}</span></div>
  <div class="stat-row"><span class="stat-label">Onboarding lag ({{ onboarding_days }} days)</span><span class="stat-value" data-field="onboarding_cost_fmt">{{ d.onboarding_cost_fmt }}</span></div>
  <div class="stat-row"><span class="stat-label">Ramp-up (<span data-field="ramp_up_days">{{ d.ramp_up_days }}</span> days)</span><span class="stat-value" data-field="ramp_up_cost_fmt">{{ d.ramp_up_cost_fmt }}</span></div>
  <div class="stat-row"><span class="stat-label">Total per event</span><span class="stat-value" data-field="cost_per_event_fmt">{{ d.cost_per_event_fmt }}</span></div>
</div>

<div class="options-grid">
  <div class="card competitor">
    <h2>Typical Competitor</h2>
    <div class="stat-row"><span class="stat-label">Turnover events</span><span class="stat-value" data-field="competitor_events">{{ d.competitor_events }}</span></div>
    <div class="stat-row"><span class="stat-label">Total turnover cost</span><span class="stat-value" data-field="competitor_total_fmt">{{ d.competitor_total_fmt }}</span></div>
  </div>
  <div class="card inforce">
    <h2>InForce</h2>
    <div class="stat-row"><span class="stat-label">Turnover events</span><span class="stat-value" data-field="inforce_events">{{ d.inforce_events }}</span></div>
    <div class="stat-row"><span class="stat-label">Total turnover cost</span><span class="stat-value" data-field="inforce_total_fmt">{{ d.inforce_total_fmt }}</span></div>
  </div>
</div>

<div class="card">
  <h2>Your Savings</h2>
  <div class="savings-big" data-field="savings_fmt">{{ d.savings_fmt }}</div>
  <p class="savings-sub">
    <span data-field="savings_pct_fmt">{{ d.savings_pct_fmt }}</span> less turnover cost,
    <span data-field="savings_pct_of_budget_fmt">{{ d.savings_pct_of_budget_fmt }}</span>
    of an estimated <span data-field="project_budget_fmt">{{ d.project_budget_fmt }}</span> project budget.
  </p>
  <p class="savings-sub" style="margin-top:.8rem" data-field="summary">{{ summary_text }}</p>
</div>

{% for img in charts %}
<div class="card">
  <img class="chart-img" src="data:image/png;base64,{{ img }}" alt="Chart {{ loop.index }}">
</div>
{% endfor %}

{% if pdf_ready %}
<div style="text-align:center;margin-bottom:1.4rem">
  <a href="/download-pdf" class="btn btn-success">Download PDF Report</a>
</div>
{% endif %}

<div class="footer">Based on the Productivity Value Gap framework &middot; estimates only</div>
</div>

<script>
(function(){
  var form=document.getElementById('calc-form');
  var err=document.getElementById('calc-error');
  function recalc(){
    var params=new URLSearchParams(new FormData(form));
    ['hourly_rate','team_size','project_duration'].forEach(function(k){
      var out=document.getElementById(k+'_out');
      out.textContent=(k==='hourly_rate'?'$':'')+form.elements[k].value;
    });
    fetch('/api/calculate?'+params.toString())
      .then(function(r){return r.ok?r.json():r.json().then(function(e){throw new Error(e.error)})})
      .then(function(d){
        err.textContent='';
        document.querySelectorAll('[data-field]').forEach(function(el){
          var k=el.getAttribute('data-field');
          if(k in d) el.textContent=d[k];
        });
      })
      .catch(function(e){err.textContent=e.message});
  }
  form.addEventListener('input',recalc);
})();
</script>
</body>
</html>
"""


def _render(d: Dict[str, Any], charts, pdf_ready: bool) -> str:
    return render_template_string(
        HTML_TEMPLATE,
        d=d,
        charts=charts,
        summary_text=generate_summary_text(d),
        pdf_ready=pdf_ready,
        levels=cfg.EXPERIENCE_LABELS,
        bounds={
            "hourly_rate": cfg.HOURLY_RATE_RANGE,
            "team_size": cfg.TEAM_SIZE_RANGE,
            "project_duration": cfg.PROJECT_DURATION_RANGE,
        },
        vacancy_weeks=cfg.VACANCY_WEEKS,
        onboarding_days=cfg.ONBOARDING_DAYS,
    )


# ═══════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════

@app.route("/", methods=["GET", "POST"])
def index():
    if request.method == "GET":
        results, d = _run(CalcInputs())
        charts = report.get_web_charts(results, d)
        return _render(d, charts, pdf_ready=os.path.exists(PDF_PATH))

    # POST — recalculate, redraw charts, refresh the PDF
    try:
        results, d = _run(parse_form(request.form))
    except ValueError as exc:
        return f"Invalid input: {exc}", 400

    charts = report.get_web_charts(results, d)
    report.generate_pdf(results, d, generate_summary_text(d), PDF_PATH)
    return _render(d, charts, pdf_ready=True)


@app.route("/api/calculate")
def api_calculate():
    try:
        _, d = _run(parse_form(request.args))
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    d["summary"] = generate_summary_text(d)
    return jsonify(d)


@app.route("/download-pdf")
def download_pdf():
    if os.path.exists(PDF_PATH):
        return send_file(os.path.abspath(PDF_PATH), as_attachment=True,
                         download_name=cfg.PDF_FILENAME)
    return "No report generated yet. Run a calculation first.", 404


# ═══════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════

def run_web(debug: bool = True) -> None:
    """Start the Flask development server and open browser."""
    import webbrowser
    import threading

    print("Starting web app at http://localhost:5000")
    threading.Timer(1.0, lambda: webbrowser.open("http://localhost:5000")).start()
    app.run(host="127.0.0.1", port=5000, debug=debug)


if __name__ == "__main__":
    run_web()
