import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

from flask import Flask, render_template, request

from payoff_calc.data_models import LoanParameters
from payoff_calc.engine import analyze
from payoff_calc.formatter import DEFAULT_PAGE_SIZE, chart_series, format_currency, paginate
from payoff_calc.utils import MAX_TERM_MONTHS, parse_number, parse_percent

logger = logging.getLogger(__name__)


def _page_size_from_env() -> int:
    try:
        return int(os.environ.get("PAYOFF_PAGE_SIZE", DEFAULT_PAGE_SIZE))
    except ValueError:
        logger.warning("Ignoring non-integer PAYOFF_PAGE_SIZE; using %d", DEFAULT_PAGE_SIZE)
        return DEFAULT_PAGE_SIZE


app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.config["PAGE_SIZE"] = _page_size_from_env()
app.config["DEFAULT_THEME"] = os.environ.get("PAYOFF_DEFAULT_THEME", "system")
app.jinja_env.filters["currency"] = format_currency

THEMES = ("light", "dark", "system")

DEFAULT_FORM = {
    "principal": "10000",
    "rate": "5",
    "term_years": "5",
    "extra": "0",
}


@dataclass(frozen=True)
class ViewState:
    """Display state carried by each request; never stored on the server."""

    theme: str = "system"
    page: int = 1
    show_standard: bool = False


def _view_state_from_form(form) -> ViewState:
    theme = form.get("theme", app.config["DEFAULT_THEME"])
    if theme not in THEMES:
        theme = "system"
    try:
        page = int(form.get("goto_page") or form.get("page") or 1)
    except ValueError:
        page = 1
    return ViewState(theme=theme, page=page, show_standard=form.get("show_standard") == "1")


def _form_to_parameters(form) -> LoanParameters:
    """Parse the loan form into parameters; blank fields count as zero."""
    return LoanParameters.from_years(
        principal=parse_number(form.get("principal")),
        annual_rate_percent=parse_percent(form.get("rate")),
        term_years=parse_number(form.get("term_years")),
        extra_monthly_payment=parse_number(form.get("extra")),
    )


def _input_error(params: LoanParameters) -> Optional[str]:
    """Return why the form cannot be calculated, or None when it can."""
    if params.principal <= 0 or params.annual_rate_percent <= 0 or params.term_months <= 0:
        return "Loan amount, interest rate and term must be greater than zero."
    if params.term_months > MAX_TERM_MONTHS:
        return f"Loan term cannot exceed {MAX_TERM_MONTHS // 12} years."
    if params.extra_monthly_payment < 0:
        return "The extra payment cannot be negative."
    return None


@app.route("/", methods=["GET", "POST"])
def index():
    form = dict(DEFAULT_FORM)
    if request.method == "POST":
        form.update({key: request.form.get(key, "") for key in DEFAULT_FORM})
        view = _view_state_from_form(request.form)
    else:
        view = _view_state_from_form(request.args)

    analysis = None
    page = None
    chart_payload = "null"
    error = None
    try:
        params = _form_to_parameters(form)
    except ValueError as exc:
        logger.warning("Rejected loan form %s: %s", form, exc)
        error = str(exc)
    else:
        error = _input_error(params)
        if error is None:
            analysis = analyze(params)
            shown = analysis.standard if view.show_standard else analysis.accelerated
            page = paginate(shown.schedule, view.page, app.config["PAGE_SIZE"])
            chart_payload = json.dumps(
                chart_series(analysis.standard.schedule, analysis.accelerated.schedule)
            )

    return render_template(
        "index.html",
        form=form,
        view=view,
        themes=THEMES,
        analysis=analysis,
        summary=analysis.summary if analysis else None,
        page=page,
        chart_payload=chart_payload,
        error=error,
        asset_version=app.config["ASSET_VERSION"],
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting Loan Payoff Calculator web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
