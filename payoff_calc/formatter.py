"""Output helpers for the payoff calculator.

``format_currency`` and ``format_date`` render values the way every screen
shows them (``$1,234`` and ``March 15, 2024``). The ``print_*`` functions
render stats, schedules and scenario comparisons as plain text tables for the
command line.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from .data_models import AmortizationEntry, MortgageStats, SavingsScenario
from .utils import to_decimal


def format_currency(amount) -> str:
    """Render an amount as whole US dollars, e.g. ``$1,234`` or ``-$1,234``."""
    value = to_decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    if value == 0:
        return "$0"
    if value < 0:
        return f"-${-value:,}"
    return f"${value:,}"


def format_date(value: date) -> str:
    """Render a date in long form, e.g. ``March 15, 2024``."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def _format_time_shaved(stats: MortgageStats) -> str:
    return f"{stats.years_shaved} years, {stats.months_remainder_shaved} months"


def print_stats(stats: MortgageStats, extra_payment=0) -> None:
    """Print payoff statistics in a human-readable format."""
    print("Payoff summary")
    print("-" * 72)
    print(f"Original payoff date : {format_date(stats.original_payoff_date)}")
    print(f"Original interest    : {format_currency(stats.original_total_interest)}")
    print(f"Extra payment        : {format_currency(extra_payment)}/mo")
    print(f"New payoff date      : {format_date(stats.new_payoff_date)}")
    print(f"New interest         : {format_currency(stats.new_total_interest)}")
    print(f"Interest saved       : {format_currency(stats.interest_saved)}")
    print(f"Time shaved          : {_format_time_shaved(stats)}")
    print(f"Payments made        : {stats.total_payments}")
    # Negative savings mean the payment never covers the interest.
    if stats.interest_saved < 0 or stats.time_shaved <= 0:
        print("Warning: this payment does not pay the loan off ahead of schedule.")
    print("-" * 72)


def print_schedule(schedule: Iterable[AmortizationEntry]) -> None:
    """Print the amortization schedule as a simple table."""
    headers = ["Month", "Payment", "Principal", "Interest", "Balance"]
    print("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.month),
            f"{entry.payment:.2f}",
            f"{entry.principal:.2f}",
            f"{entry.interest:.2f}",
            f"{entry.balance:.2f}",
        ]
        print("\t".join(row))


def print_scenarios(scenarios: Sequence[SavingsScenario]) -> None:
    """Print the extra payment scenarios side by side."""
    print("Scenarios")
    print("=" * 72)
    print(f"{'Scenario':14s} {'Extra':>10s} {'Payoff date':>20s} {'Saved':>12s} {'Faster':>12s}")
    for scenario in scenarios:
        stats = scenario.stats
        print(
            f"{scenario.label:14s} "
            f"{format_currency(scenario.extra_payment) + '/mo':>10s} "
            f"{format_date(stats.new_payoff_date):>20s} "
            f"{format_currency(stats.interest_saved):>12s} "
            f"{str(stats.time_shaved) + ' months':>12s}"
        )
    print("=" * 72)
