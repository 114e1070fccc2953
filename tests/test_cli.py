import math

import pytest

import cli
from cli import (
    compute_display_data,
    duration_text,
    fmt,
    group_indian,
    parse_amount,
    pct,
    summary_text,
)
from projection import ProjectionInput, project


# ─── Formatting ──────────────────────────────────────────────────────

@pytest.mark.parametrize("value, expected", [
    (0, "0"),
    (999, "999"),
    (1_000, "1,000"),
    (1_00_000, "1,00,000"),
    (12_34_567, "12,34,567"),
    (1_00_00_000, "1,00,00,000"),
    (-12_34_567, "-12,34,567"),
    (1_234.4, "1,234"),
])
def test_group_indian(value, expected):
    assert group_indian(value) == expected


def test_group_indian_keeps_decimals():
    assert group_indian(1_234.5, 2) == "1,234.50"


def test_fmt():
    assert fmt(560_000) == "₹5,60,000"
    assert fmt(-500) == "-₹500"
    assert fmt(-0.2) == "₹0"
    assert fmt(float("nan")) == "N/A"
    assert fmt(float("inf")) == "N/A"


def test_pct():
    assert pct(7.0) == "7%"
    assert pct(12.5) == "12.5%"


@pytest.mark.parametrize("months, indefinite, expected", [
    (1_200, True, ("Indefinite", "Interest covers monthly withdrawal")),
    (30, False, ("30 Months", "~ 2 Years, 6 Months")),
    (24, False, ("24 Months", "~ 2 Years")),
    (5, False, ("5 Months", "~ 5 Months")),
    (0, False, ("0 Months", "~ 0 Months")),
])
def test_duration_text(months, indefinite, expected):
    assert duration_text(months, indefinite) == expected


# ─── Parsing ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("raw, expected", [
    ("1,00,000", 100_000),
    ("₹ 50,000", 50_000),
    ("Rs. 2.5L", 250_000),
    ("1 Cr", 10_000_000),
    ("3 lakhs", 300_000),
    ("12.5%", 12.5),
    ("-3", -3),
    (7, 7),
    ("", 0),
    ("abc", 0),
    (None, 0),
    ("nan", 0),
    ("inf", 0),
    (10 ** 400, 0),
])
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == pytest.approx(expected)


# ─── Display data & summary ──────────────────────────────────────────

def _display(**overrides):
    values = dict(
        capital=1_000_000,
        fd_rate_pct=7.0,
        nifty_rate_pct=12.0,
        monthly_withdrawal=0,
        tax_rate_pct=10.0,
    )
    values.update(overrides)
    return compute_display_data(project(ProjectionInput(**values)))


def test_display_data_indefinite():
    d = _display()
    assert d["is_indefinite"]
    assert d["fd_duration"] == "Indefinite"
    assert d["fd_principal"] == 500_000
    assert d["capital_words"] == "Ten Lakh"
    assert d["withdrawal_words"] == ""
    assert d["elapsed_years"] == 100


def test_display_data_flags_non_finite_net():
    d = _display(capital=200_000, monthly_withdrawal=60_000, nifty_rate_pct=-150.0)
    assert d["elapsed_months"] == 2
    assert not d["nifty_net_ok"]
    assert math.isnan(d["nifty_net"])


def test_summary_text():
    d = _display(capital=1_000_000, monthly_withdrawal=10_000)
    text = summary_text(d)
    lines = text.splitlines()
    assert lines[0] == "FINANCIAL PROJECTION SUMMARY"
    assert "Capital: ₹10,00,000" in lines
    assert "Strategy: 50:50 Split" in lines
    assert "Rates: FD 7% | Nifty 12%" in lines
    assert "Monthly Withdrawal: ₹10,000" in lines
    assert f"   Duration: {d['fd_duration']}" in lines
    assert f"   - Tax (10%): {fmt(d['nifty_tax'])}" in lines
    assert "FD Fund: ₹5,00,000" in lines


def test_summary_text_shows_na_for_nan():
    d = _display(capital=200_000, monthly_withdrawal=60_000, nifty_rate_pct=-150.0)
    assert "   Net Value: N/A" in summary_text(d).splitlines()


# ─── Prompts & CLI run ───────────────────────────────────────────────

def test_collect_inputs_reprompts_on_bad_values(monkeypatch, capsys):
    answers = iter(["", "abc", "8", "", "1,00,000", "150", "10"])
    monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))

    inp = cli.collect_inputs()

    assert inp.capital == cli.cfg.DEFAULTS["capital"]
    assert inp.fd_rate_pct == 8
    assert inp.nifty_rate_pct == cli.cfg.DEFAULTS["nifty_rate"]
    assert inp.monthly_withdrawal == 100_000
    assert inp.tax_rate_pct == 10
    out = capsys.readouterr().out
    assert "Invalid number" in out
    assert "Must be at most 100" in out


def test_run_cli_writes_summary(tmp_path, capsys):
    summary_path = tmp_path / "summary.txt"
    inp = ProjectionInput(capital=2_000_000, fd_rate_pct=7.0, nifty_rate_pct=12.0,
                          monthly_withdrawal=20_000, tax_rate_pct=12.5)

    d = cli.run_cli(inp, summary_path=str(summary_path), pdf_path=None)

    printed = capsys.readouterr().out
    assert "INPUTS" in printed
    assert "1. FIXED DEPOSIT: SURVIVAL DURATION" in printed
    assert d["fd_duration"] in printed
    assert summary_path.read_text(encoding="utf-8").startswith("FINANCIAL PROJECTION SUMMARY")
