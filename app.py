"""
Flask web application for the FD + Nifty 50/50 projection calculator.

Single-file app using render_template_string.  Run via ``python main.py``
which starts the dev server on localhost:5000.
"""

from __future__ import annotations

import math
import os
from typing import Any, Dict, Mapping

from flask import Flask, jsonify, render_template_string, request, send_file

import config as cfg
from projection import ProjectionInput, project
from cli import (
    compute_display_data,
    fmt,
    parse_amount,
    pct,
    summary_text,
    write_summary,
)
import report

app = Flask(__name__)


# ═══════════════════════════════════════════════════════════════════
# Form parsing
# ═══════════════════════════════════════════════════════════════════

# form field name -> ProjectionInput field name
FORM_FIELDS = {
    "capital": "capital",
    "fd_rate": "fd_rate_pct",
    "nifty_rate": "nifty_rate_pct",
    "withdrawal": "monthly_withdrawal",
    "tax_rate": "tax_rate_pct",
}


def parse_form(form: Mapping[str, Any]) -> ProjectionInput:
    """Parse the HTML form into ProjectionInput. Blank or junk fields are 0."""
    raw = {field: form.get(name) for name, field in FORM_FIELDS.items()}
    return ProjectionInput.from_raw(raw, coerce=parse_amount)


def parse_api_body(body: Any) -> ProjectionInput:
    """Parse a JSON body keyed by form names or ProjectionInput names.

    ProjectionInput names win when both are given. Anything that is not a
    JSON object counts as an empty one.
    """
    if not isinstance(body, dict):
        body = {}
    raw = {field: body.get(field, body.get(name)) for name, field in FORM_FIELDS.items()}
    return ProjectionInput.from_raw(raw, coerce=parse_amount)


def _json_payload(d: Dict[str, Any]) -> Dict[str, Any]:
    """Display data with non-finite numbers swapped for None (JSON has no nan)."""
    return {
        key: None if isinstance(val, float) and not math.isfinite(val) else val
        for key, val in d.items()
    }


# ═══════════════════════════════════════════════════════════════════
# HTML Template
# ═══════════════════════════════════════════════════════════════════

HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>FD + Nifty 50/50 Projection</title>
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700;800&display=swap" rel="stylesheet">
<style>
  *{margin:0;padding:0;box-sizing:border-box}

  :root{
    --bg-deep:#050816;
    --bg-surface:rgba(15,23,42,0.55);
    --bg-input:rgba(8,11,22,0.85);
    --border-subtle:rgba(99,102,241,0.1);
    --text-primary:#f1f5f9;
    --text-secondary:#94a3b8;
    --text-muted:#64748b;
    --indigo:#818cf8;
    --indigo-deep:#6366f1;
    --violet:#8b5cf6;
    --emerald:#34d399;
    --emerald-deep:#10b981;
    --amber:#fbbf24;
    --radius-lg:16px;
    --radius-md:10px;
  }

  body{
    background:var(--bg-deep);color:var(--text-primary);
    font-family:'Inter',system-ui,-apple-system,sans-serif;
    line-height:1.6;min-height:100vh;
  }
  .container{max-width:1140px;margin:0 auto;padding:2rem 1.5rem}

  .hero{text-align:center;padding:1.5rem 0 2.5rem}
  .hero h1{
    font-size:clamp(1.5rem,4vw,2.5rem);font-weight:800;letter-spacing:-.035em;
    background:linear-gradient(135deg,#e2e8f0 0%,#818cf8 45%,#34d399 100%);
    -webkit-background-clip:text;-webkit-text-fill-color:transparent;background-clip:text;
  }
  .hero-sub{color:var(--text-secondary);margin-top:.6rem;font-size:.92rem}

  .card{
    background:var(--bg-surface);border:1px solid var(--border-subtle);
    border-radius:var(--radius-lg);padding:1.8rem;margin-bottom:1.4rem;
  }
  h2{font-size:1.1rem;font-weight:700;margin-bottom:1rem;letter-spacing:-.015em}

  .form-grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(260px,1fr));gap:1rem 1.5rem}
  .form-group{display:flex;flex-direction:column}
  .form-group label{font-size:.78rem;color:var(--text-secondary);margin-bottom:.3rem;font-weight:500}
  .form-group input{
    background:var(--bg-input);border:1px solid rgba(71,85,105,.35);border-radius:var(--radius-md);
    color:var(--text-primary);padding:.6rem .85rem;font-size:.88rem;font-family:inherit;
  }
  .form-group .words{font-size:.74rem;color:var(--text-muted);margin-top:.25rem;min-height:1em}

  .btn{
    display:inline-flex;align-items:center;gap:.5rem;padding:.75rem 2rem;border:none;
    border-radius:var(--radius-md);font-size:.95rem;font-weight:600;cursor:pointer;
    font-family:inherit;text-decoration:none;color:#fff;
  }
  .btn-primary{background:linear-gradient(135deg,var(--indigo-deep),var(--violet))}
  .btn-success{background:linear-gradient(135deg,var(--emerald-deep),var(--emerald))}

  .options-grid{display:grid;grid-template-columns:1fr 1fr;gap:1.4rem;margin-bottom:1.4rem}
  @media(max-width:768px){.options-grid{grid-template-columns:1fr}}

  .stat-row{display:flex;justify-content:space-between;padding:.5rem 0;border-bottom:1px solid rgba(51,65,85,.3)}
  .stat-row:last-child{border-bottom:none}
  .stat-label{color:var(--text-secondary);font-size:.86rem}
  .stat-value{font-weight:600;font-size:.86rem;font-variant-numeric:tabular-nums}
  .big{font-size:1.6rem;font-weight:800;letter-spacing:-.02em}
  .fd .big,.fd .stat-value{color:var(--indigo)}
  .nifty .big,.nifty .stat-value{color:var(--emerald)}
  .muted{color:var(--text-muted);font-size:.84rem}

  .chart-img{width:100%;border-radius:var(--radius-md)}
  .dl-section{text-align:center;padding:1.5rem 0 2rem;display:flex;gap:1rem;justify-content:center}
  .footer{text-align:center;padding:1rem 0 2rem;color:var(--text-muted);font-size:.78rem}
</style>
</head>
<body>
<div class="container">

<header class="hero">
  <h1>FD + Nifty 50/50 Projection</h1>
  <p class="hero-sub">How long does the FD last, and what is the Nifty half worth by then?</p>
</header>

<!-- Input Form -->
<div class="card">
  <h2>Your Details</h2>
  <form method="POST" id="proj-form">
    <div class="form-grid">
      <div class="form-group">
        <label>Total capital (&#8377;)</label>
        <input type="text" name="capital" value="{{ form.get('capital', defaults.capital) }}">
        <span class="words">{{ d.capital_words if d }}</span>
      </div>
      <div class="form-group">
        <label>FD rate % p.a. (from year 2; year 1 is {{ baseline }}%)</label>
        <input type="number" step="0.1" name="fd_rate" value="{{ form.get('fd_rate', defaults.fd_rate) }}">
      </div>
      <div class="form-group">
        <label>Expected Nifty return % p.a.</label>
        <input type="number" step="0.1" name="nifty_rate" value="{{ form.get('nifty_rate', defaults.nifty_rate) }}">
      </div>
      <div class="form-group">
        <label>Monthly withdrawal (&#8377;)</label>
        <input type="text" name="withdrawal" value="{{ form.get('withdrawal', defaults.withdrawal) }}">
        <span class="words">{{ d.withdrawal_words if d }}</span>
      </div>
      <div class="form-group">
        <label>Tax on Nifty gains %</label>
        <input type="number" step="0.1" name="tax_rate" value="{{ form.get('tax_rate', defaults.tax_rate) }}">
      </div>
    </div>
    <div style="margin-top:1.2rem">
      <button type="submit" class="btn btn-primary">Calculate</button>
    </div>
  </form>
</div>

{% if d %}
<div class="options-grid">

  <div class="card fd">
    <h2>1. Fixed Deposit (Survival Duration)</h2>
    <div class="big">{{ d.fd_duration }}</div>
    <p class="muted">{{ d.fd_details }}</p>
    <div class="stat-row"><span class="stat-label">Initial FD fund</span><span class="stat-value">{{ fmt(d.fd_principal) }}</span></div>
    <div class="stat-row"><span class="stat-label">Rate</span><span class="stat-value">{{ pct(d.baseline_rate) }} in year 1, then {{ pct(d.fd_rate) }}</span></div>
    <div class="stat-row"><span class="stat-label">Monthly withdrawal</span><span class="stat-value">{{ fmt(d.withdrawal) }}</span></div>
  </div>

  <div class="card nifty">
    <h2>2. Nifty 50 (Future Value)</h2>
    <div class="big">{{ fmt(d.nifty_net) }}</div>
    <p class="muted">{{ d.nifty_net_words if d.nifty_net_ok else "Not a finite value for this return rate" }}</p>
    <div class="stat-row"><span class="stat-label">Initial Nifty fund</span><span class="stat-value">{{ fmt(d.nifty_principal) }}</span></div>
    <div class="stat-row"><span class="stat-label">Gross</span><span class="stat-value">{{ fmt(d.nifty_gross) }}</span></div>
    <div class="stat-row"><span class="stat-label">Tax ({{ pct(d.tax_rate) }})</span><span class="stat-value">{{ fmt(d.nifty_tax) }}</span></div>
    <div class="stat-row"><span class="stat-label">Horizon</span><span class="stat-value">{{ "%.1f"|format(d.elapsed_years) }} years</span></div>
  </div>

</div>

{% for chart in charts %}
<div class="card">
  <img class="chart-img" src="data:image/png;base64,{{ chart }}" alt="Projection chart {{ loop.index }}">
</div>
{% endfor %}

<div class="dl-section">
  <a href="/download-summary" class="btn btn-primary">Download Summary</a>
  <a href="/download-pdf" class="btn btn-success">Download PDF Report</a>
</div>
{% endif %}

<div class="footer">For illustration only &middot; not financial advice</div>
</div>
</body>
</html>
"""


# ═══════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════

def _render(form: Dict[str, Any], d: Dict[str, Any] | None, charts: list) -> str:
    return render_template_string(
        HTML_TEMPLATE,
        form=form,
        d=d,
        charts=charts,
        defaults=cfg.DEFAULTS,
        baseline=f"{cfg.BASELINE_FD_RATE_PCT:g}",
        fmt=fmt,
        pct=pct,
    )


@app.route("/", methods=["GET", "POST"])
def index():
    if request.method == "GET":
        return _render({}, None, [])

    # POST: run projection
    form = request.form.to_dict()
    inputs = parse_form(form)
    out = project(inputs)
    d = compute_display_data(out)
    app.logger.info(
        "projection capital=%s withdrawal=%s -> %s months, net %s",
        inputs.capital, inputs.monthly_withdrawal,
        out.depletion.elapsed_months, out.growth.net_value,
    )

    chart_images = report.get_web_charts(out)

    # Save exports for download
    write_summary(d, cfg.SUMMARY_PATH)
    report.generate_pdf(out, d, summary_text(d), cfg.PDF_PATH)

    return _render(form, d, chart_images)


@app.route("/api/project", methods=["POST"])
def api_project():
    """JSON in, JSON out. Accepts the form field names or ProjectionInput names."""
    inputs = parse_api_body(request.get_json(silent=True))
    d = compute_display_data(project(inputs))
    d["summary"] = summary_text(d)
    return jsonify(_json_payload(d))


@app.route("/download-summary")
def download_summary():
    if os.path.exists(cfg.SUMMARY_PATH):
        return send_file(os.path.abspath(cfg.SUMMARY_PATH), as_attachment=True,
                         download_name="projection_summary.txt", mimetype="text/plain")
    return "No summary generated yet. Run a projection first.", 404


@app.route("/download-pdf")
def download_pdf():
    if os.path.exists(cfg.PDF_PATH):
        return send_file(os.path.abspath(cfg.PDF_PATH), as_attachment=True,
                         download_name="projection_report.pdf")
    return "No report generated yet. Run a projection first.", 404


# ═══════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════

def run_web(debug: bool = True, open_browser: bool = True) -> None:
    """Start the Flask development server and open browser."""
    import webbrowser
    import threading

    url = f"http://{cfg.HOST}:{cfg.PORT}"
    print(f"Starting web app at {url}")
    if open_browser:
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()
    app.run(host=cfg.HOST, port=cfg.PORT, debug=debug)


if __name__ == "__main__":
    run_web()
