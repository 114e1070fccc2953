"""
Spell rupee amounts in English words on the Indian numbering scale.

    >>> number_to_words(1234567)
    'Twelve Lakh Thirty-Four Thousand Five Hundred and Sixty-Seven'
"""

from __future__ import annotations

import math
from typing import Any

import config as cfg

ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
TEENS = ["Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen",
         "Sixteen", "Seventeen", "Eighteen", "Nineteen"]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# Largest unit first; the remainder below a thousand is spelled separately.
GROUPS = [
    (cfg.CRORE, "Crore"),
    (cfg.LAKH, "Lakh"),
    (cfg.THOUSAND, "Thousand"),
]


def _below_hundred(n: int) -> str:
    if n >= 20:
        return TENS[n // 10] + (f"-{ONES[n % 10]}" if n % 10 else "")
    if n >= 10:
        return TEENS[n - 10]
    return ONES[n]


def _below_thousand(n: int) -> str:
    """Spell 0..999; returns '' for 0."""
    parts = []
    if n >= 100:
        parts.append(f"{ONES[n // 100]} Hundred")
        n %= 100
        if n:
            parts.append("and")
    if n:
        parts.append(_below_hundred(n))
    return " ".join(parts)


def _spell(n: int) -> str:
    parts = []
    for size, name in GROUPS:
        count, n = divmod(n, size)
        if not count:
            continue
        # Anything from a thousand crore up is itself spelled on this scale.
        head = _spell(count) if size == cfg.CRORE and count >= 1000 else _below_thousand(count)
        parts.append(f"{head} {name}")
    if n:
        parts.append(_below_thousand(n))
    return " ".join(parts)


def number_to_words(value: Any) -> str:
    """Floor *value* to an integer and spell it out.

    Zero, ``None``, ``nan``, ``inf`` and anything that is not a number all
    give ``"Zero"``. Negative amounts are prefixed with ``"Minus"``.
    """
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return "Zero"
    if not math.isfinite(num):
        return "Zero"

    n = math.floor(num)
    if n == 0:
        return "Zero"
    if n < 0:
        return f"Minus {_spell(-n)}"
    return _spell(n)
