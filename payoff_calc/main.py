"""Command-line interface for the loan payoff calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can print the amortization schedule (one page at a time or
in full), view the payoff summary, or compare the standard schedule against
the one with extra payments. Results can be printed to the terminal or
exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence

import click

from .data_models import LoanParameters, PayoffSummary, ScheduleEntry
from .engine import analyze
from .formatter import DEFAULT_PAGE_SIZE, paginate, print_comparison, print_schedule, print_summary
from .utils import MAX_TERM_MONTHS, parse_number, parse_percent, years_to_months

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "Month",
    "Payment",
    "Principal",
    "Interest",
    "Balance",
    "Cumulative_Interest",
    "Cumulative_Paid",
]


def build_parameters_from_options(
    principal: str,
    rate: str,
    term: str,
    extra: Optional[str] = None,
    years: bool = False,
) -> LoanParameters:
    """Convert raw option strings into ``LoanParameters``.

    ``term`` is read as months unless ``years`` is set, in which case it is
    multiplied by twelve like the web form's "Loan Term (years)" field.
    """
    try:
        principal_value = parse_number(principal)
        rate_value = parse_percent(rate)
        term_value = parse_number(term)
        extra_value = parse_number(extra)
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    term_months = years_to_months(term_value) if years else int(round(term_value))
    if principal_value <= 0:
        raise click.BadParameter("Principal must be positive")
    if rate_value < 0:
        raise click.BadParameter("Interest rate cannot be negative")
    if term_months <= 0:
        raise click.BadParameter("Term must be at least one month")
    if term_months > MAX_TERM_MONTHS:
        raise click.BadParameter(f"Term cannot exceed {MAX_TERM_MONTHS} months")
    if extra_value < 0:
        raise click.BadParameter("Extra payment cannot be negative")
    return LoanParameters(
        principal=principal_value,
        annual_rate_percent=rate_value,
        term_months=term_months,
        extra_monthly_payment=extra_value,
    )


def export_to_json(path: Path, schedule: Sequence[ScheduleEntry], summary: PayoffSummary) -> None:
    """Export schedule and summary to a JSON file."""
    data = {
        "summary": summary.as_dict(),
        "schedule": [entry.as_dict() for entry in schedule],
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: Sequence[ScheduleEntry]) -> None:
    """Export schedule to a CSV file."""
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for e in schedule:
            writer.writerow(
                [
                    e.month,
                    e.payment_total,
                    e.principal_portion,
                    e.interest_portion,
                    e.remaining_balance,
                    e.cumulative_interest,
                    e.cumulative_paid,
                ]
            )


def loan_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the loan input options shared by every command."""
    options = [
        click.option("--principal", "-p", "principal", required=True, help="Loan amount (accepts 250k, 1.2m)"),
        click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)"),
        click.option("--term", "-t", "term", required=True, help="Loan term in months (or years with --years)"),
        click.option("--years", "years", is_flag=True, help="Read --term as years instead of months"),
        click.option("--extra", "-e", "extra", help="Additional monthly payment applied to principal"),
        click.option(
            "--legacy-zero-rate",
            "legacy_zero_rate",
            is_flag=True,
            help="Treat the payment of an interest-free loan as 0 instead of principal / term",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """A command-line loan payoff calculator with extra payments."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@loan_options
@click.option("--standard", "standard", is_flag=True, help="Show the schedule without extra payments")
@click.option("--page", "page", type=int, default=None, help="Show only this page of the schedule")
@click.option("--page-size", "page_size", type=int, default=DEFAULT_PAGE_SIZE, show_default=True, help="Rows per page")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(
    principal: str,
    rate: str,
    term: str,
    years: bool,
    extra: Optional[str],
    legacy_zero_rate: bool,
    standard: bool,
    page: Optional[int],
    page_size: int,
    output: Optional[str],
) -> None:
    """Compute and print the amortization schedule."""
    params = build_parameters_from_options(principal, rate, term, extra, years)
    analysis = analyze(params, legacy_zero_rate=legacy_zero_rate)
    result = analysis.standard if standard else analysis.accelerated
    entries = result.schedule
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, entries, analysis.summary)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, entries)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        logger.info("Wrote %d schedule rows to %s", len(entries), path)
        click.echo(f"Schedule exported to {path}")
        return

    print_summary(analysis.summary)
    if page is None:
        print_schedule(entries)
        return
    view = paginate(entries, page, page_size)
    click.echo(f"Page {view.page} of {view.total_pages}")
    print_schedule(view.items)


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(
    principal: str,
    rate: str,
    term: str,
    years: bool,
    extra: Optional[str],
    legacy_zero_rate: bool,
    output: Optional[str],
) -> None:
    """Compute and print only the payoff summary."""
    params = build_parameters_from_options(principal, rate, term, extra, years)
    summary_data = analyze(params, legacy_zero_rate=legacy_zero_rate).summary
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        payload: Dict[str, Any] = {"summary": summary_data.as_dict()}
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(summary_data)


@cli.command()
@loan_options
def compare(
    principal: str,
    rate: str,
    term: str,
    years: bool,
    extra: Optional[str],
    legacy_zero_rate: bool,
) -> None:
    """Compare the standard schedule with the one including extra payments.

    Example:

        payoff-calc compare -p 10000 -r 5 -t 5 --years --extra 100
    """
    params = build_parameters_from_options(principal, rate, term, extra, years)
    analysis = analyze(params, legacy_zero_rate=legacy_zero_rate)
    print_comparison(analysis.standard.schedule, analysis.accelerated.schedule)
    print_summary(analysis.summary)


if __name__ == "__main__":
    cli()
