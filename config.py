"""
Policy constants and defaults for the FD + Nifty projection calculator.

All monetary values in INR. Rates are percentages per annum unless a
name says otherwise.
"""

# ── Fixed deposit policy ─────────────────────────────────────────────
BASELINE_FD_RATE_PCT = 6.0     # first-year FD rate, whatever the user enters
BASELINE_MONTHS = 12           # months the baseline rate applies for
MAX_MONTHS = 1_200             # 100 years; reaching this means "indefinite"

# ── Allocation ───────────────────────────────────────────────────────
FD_SHARE = 0.5                 # 50:50 split between FD and Nifty
NIFTY_SHARE = 0.5

# ── Indian numbering scale ──────────────────────────────────────────
THOUSAND = 1_000
LAKH = 100_000
CRORE = 10_000_000

CURRENCY_SYMBOL = "\u20b9"     # rupee sign

# ── Form / prompt defaults ──────────────────────────────────────────
DEFAULTS = {
    "capital": 10_000_000,
    "fd_rate": 7.0,
    "nifty_rate": 12.0,
    "withdrawal": 50_000,
    "tax_rate": 12.5,
}

# ── Exports & server ────────────────────────────────────────────────
PDF_PATH = "projection_report.pdf"
SUMMARY_PATH = "projection_summary.txt"
HOST = "127.0.0.1"
PORT = 5000
