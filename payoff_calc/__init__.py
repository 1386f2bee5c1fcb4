"""Loan payoff calculator: amortization schedules with recurring extra payments."""

from .data_models import AmortizationResult, LoanAnalysis, LoanParameters, PayoffSummary, ScheduleEntry
from .engine import amortize, analyze, build_schedule, compute_monthly_payment, summarize

__all__ = [
    "AmortizationResult",
    "LoanAnalysis",
    "LoanParameters",
    "PayoffSummary",
    "ScheduleEntry",
    "amortize",
    "analyze",
    "build_schedule",
    "compute_monthly_payment",
    "summarize",
]
