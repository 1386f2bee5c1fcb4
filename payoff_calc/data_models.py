"""Data models for the loan payoff calculator.

This module defines the dataclasses passed between the amortization engine
and its callers: the loan parameters collected from the user, the individual
ledger entries of a schedule, a single amortization run and the comparison of
a standard schedule against one with extra payments. All of them are frozen;
a new set is built for every calculation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Tuple

from .utils import years_to_months


@dataclass(frozen=True)
class LoanParameters:
    """Inputs of a single calculation.

    Attributes
    ----------
    principal: float
        Initial loan balance.
    annual_rate_percent: float
        Nominal annual interest rate in percent (``5.0`` means 5 %).
    term_months: int
        Scheduled loan duration in months.
    extra_monthly_payment: float
        Additional amount applied to principal every month. Zero means the
        standard schedule.
    """

    principal: float
    annual_rate_percent: float
    term_months: int
    extra_monthly_payment: float = 0.0

    @classmethod
    def from_years(
        cls,
        principal: float,
        annual_rate_percent: float,
        term_years: float,
        extra_monthly_payment: float = 0.0,
    ) -> "LoanParameters":
        """Build parameters from a term expressed in years, as the web form does."""
        return cls(
            principal=principal,
            annual_rate_percent=annual_rate_percent,
            term_months=years_to_months(term_years),
            extra_monthly_payment=extra_monthly_payment,
        )

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate_percent / 100 / 12

    @property
    def term_years(self) -> float:
        return self.term_months / 12

    def without_extra(self) -> "LoanParameters":
        """Return the same loan with the extra payment set to zero."""
        return replace(self, extra_monthly_payment=0.0)


@dataclass(frozen=True)
class ScheduleEntry:
    """One month of the amortization ledger.

    ``remaining_balance`` is the balance after this month's payment and the
    cumulative fields are running totals up to and including this month.
    """

    month: int
    payment_total: float
    principal_portion: float
    interest_portion: float
    remaining_balance: float
    cumulative_interest: float
    cumulative_paid: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AmortizationResult:
    """The fixed monthly payment and the ledger of one amortization run."""

    monthly_payment: float
    schedule: Tuple[ScheduleEntry, ...]

    @property
    def payoff_months(self) -> int:
        return len(self.schedule)

    @property
    def total_interest(self) -> float:
        return self.schedule[-1].cumulative_interest if self.schedule else 0.0

    @property
    def total_paid(self) -> float:
        return self.schedule[-1].cumulative_paid if self.schedule else 0.0


@dataclass(frozen=True)
class PayoffSummary:
    """Aggregate metrics derived from a standard and an accelerated schedule.

    Attributes
    ----------
    monthly_payment: float
        The fixed standard payment.
    total_payment, total_interest: float
        Totals of the schedule without extra payments.
    payoff_time_years: float
        Length of the schedule with extra payments, in years.
    time_saved_years: float
        Scheduled term minus ``payoff_time_years``.
    interest_saved: float
        Interest avoided by making the extra payments.
    months_saved: int
        Difference in length between the two schedules.
    """

    monthly_payment: float
    total_payment: float
    total_interest: float
    payoff_time_years: float
    time_saved_years: float
    interest_saved: float
    months_saved: int

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LoanAnalysis:
    """Both runs of a calculation request together with their summary."""

    parameters: LoanParameters
    standard: AmortizationResult
    accelerated: AmortizationResult
    summary: PayoffSummary
