"""Core calculation engine for the loan payoff calculator.

This module implements the amortization logic: the fixed monthly payment of
a level-payment loan and the month-by-month ledger splitting each payment
into interest and principal. A recurring extra payment goes entirely to
principal, which shortens the schedule. Every function here is pure; callers
run ``build_schedule`` once without and once with the extra payment to
compare the two.
"""

from __future__ import annotations

import logging
import math
from typing import List, Tuple

from .data_models import (
    AmortizationResult,
    LoanAnalysis,
    LoanParameters,
    PayoffSummary,
    ScheduleEntry,
)

logger = logging.getLogger(__name__)

# Residual balances below this fraction of the principal are float noise.
RESIDUAL_TOLERANCE = 1e-12


def _level_payment(principal: float, monthly_rate: float, term_months: int, legacy_zero_rate: bool) -> float:
    """Return the level monthly payment for a loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. The growth ``(1 + i)^n - 1`` is taken
    through ``log1p``/``expm1`` so tiny rates keep their precision. When it
    is zero (a zero rate, or one too small to register) the formula is 0/0;
    the payment is then ``P / n``, or ``0`` when ``legacy_zero_rate`` is set.
    Any result that is not finite is returned as ``0``.
    """
    if term_months <= 0:
        return 0.0
    try:
        growth = math.expm1(term_months * math.log1p(monthly_rate))
        if growth == 0 and not legacy_zero_rate:
            return principal / term_months
        payment = principal * monthly_rate * (growth + 1) / growth
    except (OverflowError, ValueError, ZeroDivisionError):
        payment = math.nan
    if not math.isfinite(payment):
        logger.debug(
            "Non-finite payment for principal=%s rate=%s term=%s; using 0",
            principal,
            monthly_rate,
            term_months,
        )
        return 0.0
    return payment


def compute_monthly_payment(
    principal: float,
    annual_rate_percent: float,
    term_months: int,
    *,
    legacy_zero_rate: bool = False,
) -> float:
    """Return the fixed standard monthly payment.

    Parameters
    ----------
    principal: float
        The loan amount.
    annual_rate_percent: float
        Nominal annual rate in percent.
    term_months: int
        Number of monthly payments.
    legacy_zero_rate: bool
        Reproduce the historical zero-rate behavior, where the payment of an
        interest-free loan collapses to ``0`` instead of ``principal / term``.
    """
    monthly_rate = annual_rate_percent / 100 / 12
    return _level_payment(principal, monthly_rate, term_months, legacy_zero_rate)


def build_schedule(
    principal: float,
    monthly_rate: float,
    term_months: int,
    extra_payment: float = 0.0,
    *,
    legacy_zero_rate: bool = False,
) -> Tuple[ScheduleEntry, ...]:
    """Compute the amortization ledger of a loan.

    The fixed payment is derived from ``principal``, ``monthly_rate`` and
    ``term_months`` exactly as ``compute_monthly_payment`` does. Each month
    the interest on the outstanding balance is charged first and the rest of
    the payment, plus ``extra_payment``, reduces the balance. The last
    principal portion is capped at the outstanding balance so the ledger
    never overpays, and the loop stops as soon as the balance reaches zero.
    It never runs past ``term_months``.

    Returns
    -------
    Tuple[ScheduleEntry, ...]
        One entry per elapsed month. Empty when ``principal`` or
        ``term_months`` is not positive.
    """
    fixed_payment = _level_payment(principal, monthly_rate, term_months, legacy_zero_rate)
    residual_limit = principal * RESIDUAL_TOLERANCE

    balance = principal
    total_interest = 0.0
    total_paid = 0.0
    schedule: List[ScheduleEntry] = []
    month = 1

    while balance > 0 and month <= term_months:
        interest_portion = balance * monthly_rate
        principal_portion = fixed_payment - interest_portion + extra_payment
        if principal_portion > balance:
            principal_portion = balance
        balance -= principal_portion

        # Fold float residue into this payment so the ledger ends on zero.
        if 0 < balance < residual_limit:
            principal_portion += balance
            balance = 0.0

        total_interest += interest_portion
        total_paid += principal_portion + interest_portion

        schedule.append(
            ScheduleEntry(
                month=month,
                payment_total=principal_portion + interest_portion,
                principal_portion=principal_portion,
                interest_portion=interest_portion,
                remaining_balance=balance,
                cumulative_interest=total_interest,
                cumulative_paid=total_paid,
            )
        )

        if balance <= 0:
            break
        month += 1

    if schedule and len(schedule) < term_months:
        logger.debug("Loan paid off after %d of %d months", len(schedule), term_months)
    return tuple(schedule)


def amortize(params: LoanParameters, *, legacy_zero_rate: bool = False) -> AmortizationResult:
    """Run the engine once for ``params``, extra payment included."""
    monthly_payment = compute_monthly_payment(
        params.principal,
        params.annual_rate_percent,
        params.term_months,
        legacy_zero_rate=legacy_zero_rate,
    )
    schedule = build_schedule(
        params.principal,
        params.monthly_rate,
        params.term_months,
        params.extra_monthly_payment,
        legacy_zero_rate=legacy_zero_rate,
    )
    return AmortizationResult(monthly_payment=monthly_payment, schedule=schedule)


def summarize(standard: AmortizationResult, accelerated: AmortizationResult, term_months: int) -> PayoffSummary:
    """Derive the comparison metrics of a standard and an accelerated run.

    Totals come from the schedule without extra payments. Payoff time and
    savings compare the accelerated schedule against it; an empty schedule
    counts as zero interest paid.
    """
    payoff_time_years = accelerated.payoff_months / 12
    return PayoffSummary(
        monthly_payment=standard.monthly_payment,
        total_payment=standard.total_paid,
        total_interest=standard.total_interest,
        payoff_time_years=payoff_time_years,
        time_saved_years=term_months / 12 - payoff_time_years,
        interest_saved=standard.total_interest - accelerated.total_interest,
        months_saved=standard.payoff_months - accelerated.payoff_months,
    )


def analyze(params: LoanParameters, *, legacy_zero_rate: bool = False) -> LoanAnalysis:
    """Compute the standard and the accelerated schedule of a loan.

    This is the calculation performed on every parameter change: the engine
    runs once with no extra payment and once with
    ``params.extra_monthly_payment``, and the two runs are summarized.
    """
    standard = amortize(params.without_extra(), legacy_zero_rate=legacy_zero_rate)
    accelerated = amortize(params, legacy_zero_rate=legacy_zero_rate)
    summary = summarize(standard, accelerated, params.term_months)
    logger.debug(
        "Analyzed loan %s: %d standard months, %d accelerated months",
        params,
        standard.payoff_months,
        accelerated.payoff_months,
    )
    return LoanAnalysis(
        parameters=params,
        standard=standard,
        accelerated=accelerated,
        summary=summary,
    )
