"""
CLI interface and shared display-data computation for the
FD + Nifty 50/50 projection calculator.
"""

from __future__ import annotations

import math
import re
import sys
from typing import Any, Dict, List, Optional, Tuple

import config as cfg
from projection import ProjectionInput, ProjectionOutput, project
import report


# ═══════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════

def group_indian(value: float, decimals: int = 0) -> str:
    """Group digits the Indian way: 1234567 -> '12,34,567'."""
    text = f"{abs(value):.{decimals}f}"
    whole, _, frac = text.partition(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        whole = ",".join(pairs + [tail])
    sign = "-" if value < 0 and text.strip("0.") else ""
    return f"{sign}{whole}.{frac}" if frac else f"{sign}{whole}"


def fmt(val: float, decimals: int = 0) -> str:
    """Format number as ₹XX,XX,XXX; non-finite values become 'N/A'."""
    if val is None or not math.isfinite(val):
        return "N/A"
    grouped = group_indian(val, decimals)
    if grouped.startswith("-"):
        return f"-{cfg.CURRENCY_SYMBOL}{grouped[1:]}"
    return f"{cfg.CURRENCY_SYMBOL}{grouped}"


def pct(val: float) -> str:
    """Show a rate the way it was typed: 7.0 -> '7%', 12.5 -> '12.5%'."""
    return f"{val:g}%"


def duration_text(months: int, indefinite: bool) -> Tuple[str, str]:
    """Headline and detail line for how long the FD lasts."""
    if indefinite:
        return "Indefinite", "Interest covers monthly withdrawal"

    years, rem = divmod(months, 12)
    parts = []
    if years > 0:
        parts.append(f"{years} Years")
    if rem > 0:
        parts.append(f"{rem} Months")
    if not parts:
        parts.append("0 Months")
    return f"{months} Months", f"~ {', '.join(parts)}"


# ═══════════════════════════════════════════════════════════════════
# Input parsing
# ═══════════════════════════════════════════════════════════════════

_CLEAN_RE = re.compile(r"[,\s%]")
_RUPEE_RE = re.compile(r"₹|rs\.?|inr", re.IGNORECASE)
_SUFFIX_RE = re.compile(r"^([-+]?[0-9]*\.?[0-9]+)(l|lakh|cr|crore)$")


def _parse_strict(value: Any) -> float:
    """Parse an INR amount or a rate. Raises ValueError on junk."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        num = float(value)
    else:
        s = _RUPEE_RE.sub("", str(value)).strip().lower()
        s = _CLEAN_RE.sub("", s)
        s = s.replace("lakhs", "lakh").replace("lacs", "lakh").replace("crores", "crore")

        # "25.4l", "50lakh", "1crore", "1cr"
        m = _SUFFIX_RE.match(s)
        if m:
            unit = cfg.LAKH if m.group(2) in ("l", "lakh") else cfg.CRORE
            num = float(m.group(1)) * unit
        else:
            num = float(s)

    if not math.isfinite(num):
        raise ValueError(f"not a finite number: {value!r}")
    return num


def parse_amount(value: Any) -> float:
    """Lenient parser for form fields: empty or non-numeric input is 0."""
    if value is None:
        return 0.0
    try:
        return _parse_strict(value)
    except (ValueError, OverflowError):
        return 0.0


# ═══════════════════════════════════════════════════════════════════
# Input collection (CLI)
# ═══════════════════════════════════════════════════════════════════

def _prompt_float(
    label: str,
    default: float,
    min_val: float | None = None,
    max_val: float | None = None,
    currency: bool = False,
) -> float:
    shown = fmt(default) if currency else pct(default)
    while True:
        raw = input(f"  {label} [{shown}]: ").strip()
        if not raw:
            return float(default)
        try:
            val = _parse_strict(raw)
        except ValueError:
            print("    Invalid number, try again.")
            continue
        if min_val is not None and val < min_val:
            print(f"    Must be at least {min_val}")
            continue
        if max_val is not None and val > max_val:
            print(f"    Must be at most {max_val}")
            continue
        return val


def collect_inputs() -> ProjectionInput:
    """Prompt the user for the five projection inputs."""
    print("\n  Enter your details (press Enter for defaults):\n")

    d = cfg.DEFAULTS
    capital = _prompt_float("Total capital", d["capital"], 0, currency=True)
    fd_rate = _prompt_float("FD rate %/yr (from year 2)", d["fd_rate"])
    nifty_rate = _prompt_float("Expected Nifty return %/yr", d["nifty_rate"])
    withdrawal = _prompt_float("Monthly withdrawal from FD", d["withdrawal"], 0, currency=True)
    tax_rate = _prompt_float("Tax on Nifty gains %", d["tax_rate"], 0, 100)

    return ProjectionInput(
        capital=capital,
        fd_rate_pct=fd_rate,
        nifty_rate_pct=nifty_rate,
        monthly_withdrawal=withdrawal,
        tax_rate_pct=tax_rate,
    )


# ═══════════════════════════════════════════════════════════════════
# Shared display-data computation (used by CLI and web app)
# ═══════════════════════════════════════════════════════════════════

def compute_display_data(out: ProjectionOutput) -> Dict[str, Any]:
    """Extract every value the CLI, web page and report render."""
    inp = out.inputs
    dep = out.depletion
    growth = out.growth
    fd_duration, fd_details = duration_text(dep.elapsed_months, dep.is_indefinite)

    return {
        # Inputs echo
        "capital": inp.capital,
        "fd_rate": inp.fd_rate_pct,
        "nifty_rate": inp.nifty_rate_pct,
        "withdrawal": inp.monthly_withdrawal,
        "tax_rate": inp.tax_rate_pct,
        "capital_words": out.capital_words if inp.capital > 0 else "",
        "withdrawal_words": out.withdrawal_words if inp.monthly_withdrawal > 0 else "",
        # Allocation
        "fd_principal": out.allocation.fd_principal,
        "nifty_principal": out.allocation.nifty_principal,
        # Fixed deposit
        "baseline_rate": cfg.BASELINE_FD_RATE_PCT,
        "elapsed_months": dep.elapsed_months,
        "elapsed_years": dep.elapsed_months / 12,
        "is_indefinite": dep.is_indefinite,
        "fd_duration": fd_duration,
        "fd_details": fd_details,
        # Nifty
        "nifty_gross": growth.gross_value,
        "nifty_gains": growth.gains,
        "nifty_tax": growth.tax,
        "nifty_net": growth.net_value,
        "nifty_net_ok": math.isfinite(growth.net_value),
        "nifty_net_words": out.net_value_words,
    }


def summary_text(d: Dict[str, Any]) -> str:
    """Plain-text summary for copying or saving."""
    return "\n".join([
        "FINANCIAL PROJECTION SUMMARY",
        "----------------------------",
        "INPUTS",
        f"Capital: {fmt(d['capital'])}",
        "Strategy: 50:50 Split",
        f"Rates: FD {pct(d['fd_rate'])} | Nifty {pct(d['nifty_rate'])}",
        f"Tax Rate: {pct(d['tax_rate'])}",
        f"Monthly Withdrawal: {fmt(d['withdrawal'])}",
        "",
        "PROJECTIONS",
        "1. Fixed Deposit (Survival Duration)",
        f"   Duration: {d['fd_duration']}",
        f"   Status: {d['fd_details']}",
        "",
        "2. Nifty 50 (Future Value)",
        f"   Net Value: {fmt(d['nifty_net'])}",
        "   Breakdown: ",
        f"   - Gross: {fmt(d['nifty_gross'])}",
        f"   - Tax ({pct(d['tax_rate'])}): {fmt(d['nifty_tax'])}",
        "",
        "INITIAL ALLOCATION",
        f"FD Fund: {fmt(d['fd_principal'])}",
        f"Nifty Fund: {fmt(d['nifty_principal'])}",
        "----------------------------",
    ])


def write_summary(d: Dict[str, Any], path: str = cfg.SUMMARY_PATH) -> str:
    """Save the plain-text summary. Returns the file path."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(summary_text(d) + "\n")
    return path


# ═══════════════════════════════════════════════════════════════════
# Box-drawing CLI output
# ═══════════════════════════════════════════════════════════════════

W = 78  # box width (characters)
H_LINE = "═"
V_LINE = "║"


def _box_top(title: str) -> str:
    inner = W - 2
    return (
        f"╔{H_LINE * inner}╗\n"
        f"{V_LINE}  {title:<{inner - 2}}{V_LINE}\n"
        f"╠{H_LINE * inner}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"{V_LINE}  {text:<{inner}}{V_LINE}"


def _box_row(label: str, value: str, lw: int = 30) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{H_LINE * (W - 2)}╝"


def _wrap(text: str, indent: str = "") -> List[str]:
    """Word-wrap *text* into box lines."""
    rows = []
    line_len = W - 6 - len(indent)
    line = ""
    for word in text.split():
        if len(line) + len(word) + 1 <= line_len:
            line = f"{line} {word}" if line else word
        else:
            rows.append(_box_line(indent + line))
            line = word
    if line:
        rows.append(_box_line(indent + line))
    return rows


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

def _print_inputs(d: Dict[str, Any]) -> None:
    rows = [_box_row("Capital", fmt(d["capital"]))]
    if d["capital_words"]:
        rows += _wrap(d["capital_words"], "  ")
    rows += [
        _box_row("Strategy", "50:50 Split"),
        _box_row("FD rate", f"{pct(d['baseline_rate'])} in year 1, then {pct(d['fd_rate'])}"),
        _box_row("Nifty return", pct(d["nifty_rate"])),
        _box_row("Tax on gains", pct(d["tax_rate"])),
        _box_row("Monthly withdrawal", fmt(d["withdrawal"])),
    ]
    if d["withdrawal_words"]:
        rows += _wrap(d["withdrawal_words"], "  ")
    _print_section("INPUTS", rows)


def _print_fd(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Initial FD fund", fmt(d["fd_principal"])),
        _box_row("Survival duration", d["fd_duration"]),
        _box_row("", d["fd_details"]),
    ]
    _print_section("1. FIXED DEPOSIT: SURVIVAL DURATION", rows)


def _print_nifty(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Initial Nifty fund", fmt(d["nifty_principal"])),
        _box_row("Horizon", f"{d['elapsed_years']:.1f} years (same as FD)"),
        _box_line(),
        _box_row("Gross value", fmt(d["nifty_gross"])),
        _box_row(f"Tax ({pct(d['tax_rate'])})", fmt(d["nifty_tax"])),
        _box_row("Net value", fmt(d["nifty_net"])),
    ]
    if d["nifty_net_ok"]:
        rows += _wrap(d["nifty_net_words"], "  ")
    _print_section("2. NIFTY 50: FUTURE VALUE", rows)


def _print_exports(summary_path: str | None, pdf_path: str | None) -> None:
    rows = []
    if summary_path:
        rows.append(_box_line(f"Summary saved to: {summary_path}"))
    if pdf_path:
        rows.append(_box_line(f"PDF report saved to: {pdf_path}"))
    rows.append(_box_line("Charts available in the web app:"))
    rows.append(_box_line("  python main.py  (opens localhost:5000)"))
    _print_section("EXPORTS", rows)


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry point
# ═══════════════════════════════════════════════════════════════════

def run_cli(
    inputs: Optional[ProjectionInput] = None,
    summary_path: str | None = cfg.SUMMARY_PATH,
    pdf_path: str | None = cfg.PDF_PATH,
) -> Dict[str, Any]:
    """Run the full CLI workflow. Prompts for inputs unless given."""
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError):
        pass
    print()
    print("=" * W)
    print("  FD + Nifty 50/50 Projection Calculator")
    print("=" * W)

    if inputs is None:
        inputs = collect_inputs()

    out = project(inputs)
    d = compute_display_data(out)

    print()
    _print_inputs(d)
    _print_fd(d)
    _print_nifty(d)

    if summary_path:
        write_summary(d, summary_path)
    if pdf_path:
        print("  Generating PDF report...")
        pdf_path = report.generate_pdf(out, d, summary_text(d), pdf_path)
        print(f"  Saved to {pdf_path}\n")

    _print_exports(summary_path, pdf_path)
    return d


if __name__ == "__main__":
    run_cli()
