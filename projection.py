"""
Projection engine for the FD + Nifty 50/50 calculator.

Splits a lump sum evenly between a fixed deposit and a Nifty 50 index
allocation, then:
  1) simulates how many months the FD balance survives a fixed monthly
     withdrawal under a tiered interest rate, and
  2) compounds the Nifty allocation over that same duration and takes a
     flat tax off the gains.

Everything here is a pure function of its inputs. The month loop is a
plain Python loop bounded by ``cfg.MAX_MONTHS``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import numpy as np

import config as cfg
from words import number_to_words


# ─── Data Classes ─────────────────────────────────────────────────────

def _as_number(value: Any) -> float:
    """Coerce *value* to a finite float, falling back to 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return num if math.isfinite(num) else 0.0


@dataclass(frozen=True)
class ProjectionInput:
    """The five numbers the calculator needs."""

    capital: float = 0.0             # lump sum to split
    fd_rate_pct: float = 0.0         # FD rate from month 13 onward, % p.a.
    nifty_rate_pct: float = 0.0      # expected Nifty return, % p.a.
    monthly_withdrawal: float = 0.0  # taken from the FD every month
    tax_rate_pct: float = 0.0        # flat tax on Nifty gains, %

    @classmethod
    def from_raw(
        cls,
        raw: Mapping[str, Any],
        coerce: Callable[[Any], float] = _as_number,
    ) -> "ProjectionInput":
        """Build inputs from loosely typed values; missing or junk -> 0.

        *coerce* turns each raw value into a float. Boundary code passes a
        parser that also understands formatted amounts like "10,00,000".
        """
        return cls(
            capital=coerce(raw.get("capital")),
            fd_rate_pct=coerce(raw.get("fd_rate_pct")),
            nifty_rate_pct=coerce(raw.get("nifty_rate_pct")),
            monthly_withdrawal=coerce(raw.get("monthly_withdrawal")),
            tax_rate_pct=coerce(raw.get("tax_rate_pct")),
        )


@dataclass(frozen=True)
class AllocationSplit:
    fd_principal: float
    nifty_principal: float


@dataclass(frozen=True)
class DepletionResult:
    elapsed_months: int
    is_indefinite: bool   # True when the cap was reached with money left


@dataclass(frozen=True)
class GrowthResult:
    gross_value: float
    gains: float
    tax: float
    net_value: float


@dataclass(frozen=True)
class ProjectionOutput:
    """Everything a caller needs to render one projection."""

    inputs: ProjectionInput
    allocation: AllocationSplit
    depletion: DepletionResult
    growth: GrowthResult
    capital_words: str
    withdrawal_words: str
    net_value_words: str


# ─── Allocation ──────────────────────────────────────────────────────

def split_allocation(capital: float) -> AllocationSplit:
    """Split *capital* 50:50 between the FD and Nifty."""
    return AllocationSplit(
        fd_principal=capital * cfg.FD_SHARE,
        nifty_principal=capital * cfg.NIFTY_SHARE,
    )


# ─── Stage 1: FD depletion ───────────────────────────────────────────

def monthly_fd_rate(month: int, fd_rate_pct: float) -> float:
    """Monthly FD rate for a zero-based *month* index.

    The first ``cfg.BASELINE_MONTHS`` months earn the baseline rate; the
    user's rate applies from then on.
    """
    annual_pct = cfg.BASELINE_FD_RATE_PCT if month < cfg.BASELINE_MONTHS else fd_rate_pct
    return annual_pct / 12 / 100


def balance_schedule(
    fd_principal: float,
    fd_rate_pct: float,
    monthly_withdrawal: float,
) -> np.ndarray:
    """Walk the FD balance month by month until it runs out or hits the cap.

    Returns
    -------
    np.ndarray
        Balances with index 0 = opening balance and index m = balance after
        month m. Its length minus one is the number of elapsed months.
    """
    balances = [fd_principal]
    balance = fd_principal
    month = 0

    # The opening month always runs, so a zero deposit facing a withdrawal
    # is counted as depleted in month 1.
    while month < cfg.MAX_MONTHS and (balance > 0 or month == 0):
        rate = monthly_fd_rate(month, fd_rate_pct)
        balance = balance + balance * rate - monthly_withdrawal
        month += 1
        balances.append(balance)

    return np.array(balances, dtype=float)


def simulate_depletion(
    fd_principal: float,
    fd_rate_pct: float,
    monthly_withdrawal: float,
) -> DepletionResult:
    """How many whole months the FD survives the withdrawals."""
    months = len(balance_schedule(fd_principal, fd_rate_pct, monthly_withdrawal)) - 1
    return DepletionResult(
        elapsed_months=months,
        is_indefinite=months >= cfg.MAX_MONTHS,
    )


# ─── Stage 2: Nifty growth with tax ──────────────────────────────────

def _compound(principal: float, rate_pct: float, years) -> Any:
    # IEEE semantics: a negative base with a fractional exponent gives nan
    # and overflow gives inf, both without raising.
    with np.errstate(invalid="ignore", over="ignore"):
        return principal * np.power(1 + rate_pct / 100, years)


def grow_with_tax(
    nifty_principal: float,
    nifty_rate_pct: float,
    elapsed_months: int,
    tax_rate_pct: float,
) -> GrowthResult:
    """Compound the Nifty allocation annually over ``elapsed_months / 12`` years.

    Gains are clamped at zero and tax is charged on positive gains only.
    Rates below -100% produce a non-positive base and usually a ``nan``
    result; callers should show non-finite values as "N/A".
    """
    gross = float(_compound(nifty_principal, nifty_rate_pct, elapsed_months / 12))
    diff = gross - nifty_principal
    tax = diff * (tax_rate_pct / 100) if diff > 0 else 0.0
    # Losses report as zero gains; nan passes through.
    gains = diff if math.isnan(diff) else max(0.0, diff)
    return GrowthResult(
        gross_value=gross,
        gains=gains,
        tax=tax,
        net_value=gross - tax,
    )


def growth_schedule(
    nifty_principal: float,
    nifty_rate_pct: float,
    elapsed_months: int,
) -> np.ndarray:
    """Gross Nifty value at each month 0..elapsed_months."""
    months = np.arange(elapsed_months + 1)
    return np.asarray(_compound(nifty_principal, nifty_rate_pct, months / 12), dtype=float)


# ─── Orchestrator ────────────────────────────────────────────────────

def _round_half_up(value: float) -> float:
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def project(inputs: ProjectionInput) -> ProjectionOutput:
    """Run depletion, then growth over the depletion horizon, then words."""
    allocation = split_allocation(inputs.capital)

    depletion = simulate_depletion(
        allocation.fd_principal,
        inputs.fd_rate_pct,
        inputs.monthly_withdrawal,
    )

    growth = grow_with_tax(
        allocation.nifty_principal,
        inputs.nifty_rate_pct,
        depletion.elapsed_months,
        inputs.tax_rate_pct,
    )

    return ProjectionOutput(
        inputs=inputs,
        allocation=allocation,
        depletion=depletion,
        growth=growth,
        capital_words=number_to_words(inputs.capital),
        withdrawal_words=number_to_words(inputs.monthly_withdrawal),
        net_value_words=number_to_words(_round_half_up(growth.net_value)),
    )


# ─── Smoke Test ───────────────────────────────────────────────────────

if __name__ == "__main__":
    out = project(ProjectionInput(
        capital=10_000_000,
        fd_rate_pct=7.0,
        nifty_rate_pct=12.0,
        monthly_withdrawal=50_000,
        tax_rate_pct=12.5,
    ))
    print(f"FD principal:     {out.allocation.fd_principal:,.0f}")
    print(f"Nifty principal:  {out.allocation.nifty_principal:,.0f}")
    print(f"FD lasts:         {out.depletion.elapsed_months} months"
          f"{' (indefinite)' if out.depletion.is_indefinite else ''}")
    print(f"Nifty gross:      {out.growth.gross_value:,.0f}")
    print(f"Nifty tax:        {out.growth.tax:,.0f}")
    print(f"Nifty net:        {out.growth.net_value:,.0f}")
    print(f"In words:         {out.net_value_words}")
