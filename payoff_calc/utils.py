"""Utility functions for the loan payoff calculator.

This module provides helpers for turning raw user input (command-line option
values and web form fields) into the numbers the engine expects.
"""

from __future__ import annotations

import math
from typing import Optional

# Longest term the calculators accept: 100 years of monthly payments.
MAX_TERM_MONTHS = 1200


def parse_number(value: Optional[str]) -> float:
    """Parse a numeric string with optional suffixes.

    An empty or missing value counts as ``0``, matching a cleared form field.
    Thousands separators are ignored and the shorthand suffixes ``k`` and
    ``m`` are accepted (``"250k"`` means 250 000).

    Raises
    ------
    ValueError
        If the string is not a finite number.
    """
    if value is None:
        return 0.0
    cleaned = value.strip().lower().replace(",", "")
    if not cleaned:
        return 0.0
    factor = 1.0
    if cleaned.endswith("k"):
        factor = 1_000.0
        cleaned = cleaned[:-1]
    elif cleaned.endswith("m"):
        factor = 1_000_000.0
        cleaned = cleaned[:-1]
    try:
        number = float(cleaned) * factor
    except ValueError as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not math.isfinite(number):
        raise ValueError(f"Invalid numeric value: {value}")
    return number


def parse_percent(value: Optional[str]) -> float:
    """Parse an annual rate given in percent, with or without a trailing ``%``."""
    if value is not None:
        value = value.strip().rstrip("%")
    return parse_number(value)


def years_to_months(years: float) -> int:
    """Convert a loan term in years into a whole number of monthly payments."""
    return int(round(years * 12))
