"""Command‑line interface for the payoff calculator.

This module uses the ``click`` library to implement a multi‑command
interface. Users can view the payoff summary for an extra monthly payment,
print the full amortization schedule, compare the preset extra payment
scenarios or total the round-up savings from a list of purchases. Results
can be printed to the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
import os
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from .data_models import AmortizationEntry, MortgageDetails, Transaction
from .engine import aggregate_round_ups, compare_scenarios, compute_stats, generate_schedule, savings_progress
from .errors import CalculationError, ValidationError
from .formatter import format_currency, print_scenarios, print_schedule, print_stats
from .utils import decimal_from_str, parse_date
from .validation import ensure_valid

logger = logging.getLogger(__name__)


def _preview_rows() -> int:
    return int(os.environ.get("PAYOFF_CALC_SCHEDULE_PREVIEW_ROWS", "120"))


def parse_amount(value: str) -> Decimal:
    """Parse a monetary string with optional suffixes.

    Accepts plain numbers ("350000", "350,000") and shorthand with ``k``/``m``
    suffixes (e.g., "350k" meaning 350_000). Returns a ``Decimal``.
    """
    value = value.strip().lower().replace(",", "").replace("$", "")
    factor = Decimal(1)
    if value.endswith("k"):
        factor = Decimal(1_000)
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal(1_000_000)
        value = value[:-1]
    try:
        return decimal_from_str(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")


def build_mortgage_from_options(
    balance: str,
    rate: float,
    term: int,
    payment: str,
    start_date: Optional[str],
    extra: Optional[str] = None,
) -> Tuple[MortgageDetails, Decimal]:
    """Turn raw option values into validated mortgage details and extra payment."""
    start = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as exc:
            raise click.BadParameter(str(exc))
    mortgage = MortgageDetails(
        balance=parse_amount(balance),
        interest_rate=decimal_from_str(str(rate)),
        original_term=term,
        monthly_payment=parse_amount(payment),
        start_date=start,
    )
    extra_value = parse_amount(extra) if extra else Decimal("0")
    try:
        ensure_valid(mortgage, extra_value)
    except ValidationError as exc:
        logger.warning("Rejected mortgage input: %s", exc)
        raise click.BadParameter(str(exc))
    return mortgage, extra_value


def export_to_json(path: Path, data: Dict[str, Any]) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: List[AmortizationEntry]) -> None:
    """Export schedule to a CSV file."""
    header = ["Month", "Payment", "Principal", "Interest", "Balance"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for e in schedule:
            writer.writerow(
                [
                    e.month,
                    float(e.payment),
                    float(e.principal),
                    float(e.interest),
                    float(e.balance),
                ]
            )


def mortgage_options(func):
    """Attach the options every mortgage command shares."""
    options = [
        click.option("--balance", "-b", "balance", required=True, help="Outstanding principal"),
        click.option("--rate", "-r", "rate", required=True, type=float, help="Annual interest rate (percent)"),
        click.option("--term", "-t", "term", required=True, type=int, help="Original loan term in years"),
        click.option("--payment", "-m", "payment", required=True, help="Contractual monthly payment"),
        click.option("--start-date", "-s", "start_date", help="Reference date (YYYY-MM-DD), defaults to today"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
def cli() -> None:
    """Project how much extra principal payments save on a mortgage."""
    logging.basicConfig(level=os.environ.get("PAYOFF_CALC_LOG_LEVEL", "INFO").upper())


@cli.command()
@mortgage_options
@click.option("--extra", "-e", "extra", help="Extra monthly payment toward principal")
@click.option("--output", "output", type=str, help="Output file path (.json)")
def stats(
    balance: str,
    rate: float,
    term: int,
    payment: str,
    start_date: Optional[str],
    extra: Optional[str],
    output: Optional[str],
) -> None:
    """Compute and print the payoff summary."""
    mortgage, extra_value = build_mortgage_from_options(balance, rate, term, payment, start_date, extra)
    try:
        result = compute_stats(mortgage, extra_value)
    except CalculationError as exc:
        raise click.ClickException(str(exc))
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Stats export must use .json extension")
        export_to_json(
            path,
            {
                "mortgage": mortgage.to_dict(),
                "extra_payment": float(extra_value),
                "stats": result.to_dict(),
                "progress": savings_progress(mortgage, result),
            },
        )
        click.echo(f"Stats exported to {path}")
    else:
        print_stats(result, extra_value)


@cli.command()
@mortgage_options
@click.option("--extra", "-e", "extra", help="Extra monthly payment toward principal")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(
    balance: str,
    rate: float,
    term: int,
    payment: str,
    start_date: Optional[str],
    extra: Optional[str],
    output: Optional[str],
) -> None:
    """Compute and print the month-by-month amortization schedule."""
    mortgage, extra_value = build_mortgage_from_options(balance, rate, term, payment, start_date, extra)
    try:
        entries = generate_schedule(mortgage, extra_value)
    except CalculationError as exc:
        raise click.ClickException(str(exc))
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, {"schedule": [e.to_dict() for e in entries]})
            click.echo(f"Schedule exported to {path}")
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, entries)
            click.echo(f"Schedule exported to {path}")
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
    else:
        # Limit schedule length printed to avoid flooding the terminal
        max_rows = _preview_rows()
        if len(entries) > max_rows:
            click.echo(f"Schedule has {len(entries)} rows; showing first {max_rows} rows.")
            print_schedule(entries[:max_rows])
        else:
            print_schedule(entries)


@cli.command()
@mortgage_options
@click.option("--amount", "amounts", multiple=True, help="Extra monthly payment to compare (repeatable)")
def scenarios(
    balance: str,
    rate: float,
    term: int,
    payment: str,
    start_date: Optional[str],
    amounts: Tuple[str, ...],
) -> None:
    """Compare extra payment scenarios (50, 100, 200 and 300 by default)."""
    mortgage, _ = build_mortgage_from_options(balance, rate, term, payment, start_date)
    parsed = [parse_amount(a) for a in amounts] if amounts else None
    try:
        results = compare_scenarios(mortgage, parsed)
    except CalculationError as exc:
        raise click.ClickException(str(exc))
    print_scenarios(results)


@cli.command()
@click.argument("amounts", nargs=-1, required=True)
def roundups(amounts: Tuple[str, ...]) -> None:
    """Total the spare change from rounding each purchase up to the next dollar.

    Example: payoff-calc roundups 4.20 9.99 15.00
    """
    try:
        transactions = [Transaction(amount=decimal_from_str(a)) for a in amounts]
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    total = aggregate_round_ups(transactions)
    click.echo(f"Round-up savings: {total:.2f} ({format_currency(total)})")


if __name__ == "__main__":
    cli()
