"""Output helpers for the loan payoff calculator.

This module turns engine results into things people look at: currency
strings, pages of the ledger, balance series for the chart and plain text
tables for the terminal. Text output goes through ``click.echo`` so the
command-line interface can be exercised with click's test runner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import click

from .data_models import PayoffSummary, ScheduleEntry

DEFAULT_PAGE_SIZE = 12


def format_currency(value: float) -> str:
    """Format a number with thousands separators and two decimals (``1,234.56``)."""
    return f"{value:,.2f}"


@dataclass(frozen=True)
class Page:
    """A slice of the schedule for tabular display."""

    items: Tuple[ScheduleEntry, ...]
    page: int
    total_pages: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(schedule: Sequence[ScheduleEntry], page: int = 1, per_page: int = DEFAULT_PAGE_SIZE) -> Page:
    """Return one page of ``schedule``.

    Pages are 1-based. A page number outside the valid range is clamped to
    the first or last page, so a cursor left over from a longer schedule still
    shows rows after recalculation. An empty schedule has a single empty page.
    """
    if per_page < 1:
        per_page = DEFAULT_PAGE_SIZE
    total_pages = max(1, -(-len(schedule) // per_page))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return Page(items=tuple(schedule[start:start + per_page]), page=page, total_pages=total_pages)


def chart_series(standard: Sequence[ScheduleEntry], accelerated: Sequence[ScheduleEntry]) -> Dict[str, object]:
    """Build the balance-over-time chart payload for two schedules.

    Labels run from month 1 to the length of the longer schedule; each
    dataset holds the remaining balance per month of its schedule.
    """
    months = max(len(standard), len(accelerated))
    return {
        "labels": list(range(1, months + 1)),
        "datasets": [
            {
                "label": "Standard Payment",
                "data": [entry.remaining_balance for entry in standard],
            },
            {
                "label": "With Extra Payment",
                "data": [entry.remaining_balance for entry in accelerated],
            },
        ],
    }


def print_summary(summary: PayoffSummary) -> None:
    """Print the payoff summary in a human-readable format."""
    click.echo("Summary")
    click.echo("-" * 72)
    click.echo(f"Monthly payment        : ${format_currency(summary.monthly_payment)}")
    click.echo(f"Total interest         : ${format_currency(summary.total_interest)}")
    click.echo(f"Total payment          : ${format_currency(summary.total_payment)}")
    click.echo(f"Payoff time with extra : {summary.payoff_time_years:.1f} years")
    click.echo(f"Time saved             : {summary.time_saved_years:.1f} years")
    click.echo(f"Interest saved         : ${format_currency(summary.interest_saved)}")
    click.echo("-" * 72)


def print_schedule(schedule: Sequence[ScheduleEntry]) -> None:
    """Print schedule entries as a tab separated table."""
    headers = ["Month", "Payment", "Principal", "Interest", "Balance", "TotInterest", "TotPaid"]
    click.echo("\t".join(headers))
    for entry in schedule:
        row: List[str] = [
            str(entry.month),
            f"{entry.payment_total:.2f}",
            f"{entry.principal_portion:.2f}",
            f"{entry.interest_portion:.2f}",
            f"{entry.remaining_balance:.2f}",
            f"{entry.cumulative_interest:.2f}",
            f"{entry.cumulative_paid:.2f}",
        ]
        click.echo("\t".join(row))


def print_comparison(standard: Sequence[ScheduleEntry], accelerated: Sequence[ScheduleEntry]) -> None:
    """Print the standard and accelerated schedules' totals side by side.

    The difference column is ``accelerated - standard``; a negative value
    means the extra payments make the loan cheaper or shorter.
    """
    def totals(schedule: Sequence[ScheduleEntry]) -> Dict[str, float]:
        last = schedule[-1] if schedule else None
        return {
            "months": float(len(schedule)),
            "total_interest": last.cumulative_interest if last else 0.0,
            "total_paid": last.cumulative_paid if last else 0.0,
        }

    s1 = totals(standard)
    s2 = totals(accelerated)
    click.echo("Comparison")
    click.echo("=" * 72)
    click.echo(f"{'Metric':20s} {'Standard':>15s} {'With extra':>15s} {'Difference':>15s}")
    for key in ("months", "total_interest", "total_paid"):
        v1 = s1[key]
        v2 = s2[key]
        click.echo(f"{key:20s} {v1:15.2f} {v2:15.2f} {v2 - v1:15.2f}")
    click.echo("=" * 72)
