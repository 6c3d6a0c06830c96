"""Core calculation engine for the payoff calculator.

This module implements the month-by-month amortization used to project how
quickly a mortgage is retired when an extra amount is paid toward principal
every month. ``compute_stats`` derives the payoff summary shown on the goal
and dashboard screens, ``generate_schedule`` returns the full month-by-month
trace for charting and ``aggregate_round_ups`` totals the spare change from a
list of card transactions.

Every function here is pure: nothing is cached and no state survives a call,
so callers may recompute on every keystroke.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from datetime import date
from decimal import ROUND_CEILING, Decimal
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union
import logging

from .data_models import (
    AmortizationEntry,
    CalculationResult,
    MortgageDetails,
    MortgageStats,
    SavingsScenario,
    Transaction,
)
from .errors import CalculationError
from .utils import add_months, to_decimal

logger = logging.getLogger(__name__)

Number = Union[int, float, str, Decimal]

# Extra payment presets offered on the goal-setting screen.
DEFAULT_SCENARIOS: Tuple[Tuple[str, Decimal], ...] = (
    ("Conservative", Decimal("50")),
    ("Moderate", Decimal("100")),
    ("Aggressive", Decimal("200")),
    ("Maximum", Decimal("300")),
)

# Mortgage shown on the dashboard before the user has entered their own.
DEFAULT_MORTGAGE = MortgageDetails(
    balance=Decimal("350000"),
    interest_rate=Decimal("3.75"),
    original_term=30,
    monthly_payment=Decimal("1850"),
)

_ZERO = Decimal("0")


def _monthly_rate(interest_rate: Decimal) -> Decimal:
    """Convert an annual percentage rate to a monthly fractional rate."""
    return interest_rate / Decimal(100) / Decimal(12)


def _total_months(original_term: Any) -> int:
    return int(to_decimal(original_term) * 12)


def _simulate(
    balance: Decimal,
    monthly_rate: Decimal,
    payment: Decimal,
    total_months: int,
) -> Iterator[AmortizationEntry]:
    """Yield one entry per month until the balance is retired or the term ends.

    Interest is charged on the remaining balance first and the rest of the
    payment goes to principal. The principal portion is capped at what is
    still owed, so the final month never overshoots. When the payment does not
    cover the interest the principal portion is negative and the balance
    grows; the loop still stops at ``total_months``.
    """
    remaining = balance
    month = 0
    while remaining > 0 and month < total_months:
        interest = remaining * monthly_rate
        principal = min(payment - interest, remaining)
        remaining -= principal
        month += 1
        yield AmortizationEntry(
            month=month,
            payment=payment,
            principal=principal,
            interest=interest,
            balance=max(remaining, _ZERO),
        )
        if remaining <= 0:
            break


def _compute_stats(mortgage: MortgageDetails, extra: Decimal) -> MortgageStats:
    balance = to_decimal(mortgage.balance)
    monthly_payment = to_decimal(mortgage.monthly_payment)
    monthly_rate = _monthly_rate(to_decimal(mortgage.interest_rate))
    total_months = _total_months(mortgage.original_term)
    start = mortgage.start_date or date.today()

    # The original scenario is term based: it assumes the contractual
    # payments retire the loan exactly at the end of the term.
    original_payoff_date = add_months(start, total_months)
    original_total_interest = monthly_payment * total_months - balance

    month = 0
    total_interest_paid = _ZERO
    for entry in _simulate(balance, monthly_rate, monthly_payment + extra, total_months):
        month = entry.month
        total_interest_paid += entry.interest

    return MortgageStats(
        original_payoff_date=original_payoff_date,
        original_total_interest=original_total_interest,
        new_payoff_date=add_months(start, month),
        new_total_interest=total_interest_paid,
        interest_saved=original_total_interest - total_interest_paid,
        time_shaved=total_months - month,
        total_payments=month,
    )


def compute_stats(mortgage: MortgageDetails, extra_monthly_payment: Number = 0) -> MortgageStats:
    """Compute payoff statistics for a mortgage with an extra monthly payment.

    Parameters
    ----------
    mortgage: MortgageDetails
        The mortgage to analyse. Values are not range checked here; see
        ``payoff_calc.validation`` for the checks applied to user input.
    extra_monthly_payment: number
        Amount added to the contractual payment every month. Zero gives the
        baseline simulation; negative values slow the payoff down.

    Returns
    -------
    MortgageStats
        The term-based original figures next to the simulated ones.

    Raises
    ------
    CalculationError
        If a value reaching the arithmetic is not a finite number or the
        resulting dates fall outside the supported calendar.
    """
    try:
        stats = _compute_stats(mortgage, to_decimal(extra_monthly_payment))
    except CalculationError:
        logger.exception("Error calculating mortgage stats for %r", mortgage)
        raise
    except (TypeError, ValueError, ArithmeticError) as exc:
        logger.exception("Error calculating mortgage stats for %r", mortgage)
        raise CalculationError() from exc
    logger.debug(
        "Computed stats: extra=%s payments=%d interest_saved=%s",
        extra_monthly_payment,
        stats.total_payments,
        stats.interest_saved,
    )
    return stats


def calculate_stats(mortgage: MortgageDetails, extra_monthly_payment: Number = 0) -> CalculationResult:
    """Like ``compute_stats`` but report failure in the result instead of raising."""
    try:
        return CalculationResult(stats=compute_stats(mortgage, extra_monthly_payment))
    except CalculationError as exc:
        return CalculationResult(error=str(exc))


def generate_schedule(mortgage: MortgageDetails, extra_payment: Number = 0) -> List[AmortizationEntry]:
    """Return the month-by-month amortization schedule.

    The schedule uses the same per-month formula as ``compute_stats`` and ends
    when the balance reaches zero or after ``original_term * 12`` months,
    whichever comes first. ``payment`` on every entry is the full monthly
    amount including the extra payment, even in a final month where less is
    actually owed.
    """
    try:
        payment = to_decimal(mortgage.monthly_payment) + to_decimal(extra_payment)
        schedule = list(
            _simulate(
                to_decimal(mortgage.balance),
                _monthly_rate(to_decimal(mortgage.interest_rate)),
                payment,
                _total_months(mortgage.original_term),
            )
        )
    except CalculationError:
        logger.exception("Error generating schedule for %r", mortgage)
        raise
    except (TypeError, ValueError, ArithmeticError) as exc:
        logger.exception("Error generating schedule for %r", mortgage)
        raise CalculationError("Failed to generate amortization schedule") from exc
    logger.debug("Generated schedule with %d entries", len(schedule))
    return schedule


def _transaction_amount(transaction: Union[Transaction, Mapping, Any]) -> Any:
    if isinstance(transaction, Mapping):
        return transaction["amount"]
    return transaction.amount


def aggregate_round_ups(transactions: Iterable[Union[Transaction, Mapping, Any]]) -> Decimal:
    """Total the spare change from rounding each transaction up to a whole unit.

    Each transaction contributes ``ceil(amount) - amount``. Amounts are in
    whole currency units with fractional cents (``4.20`` contributes ``0.80``).
    Transactions may be ``Transaction`` objects, mappings with an ``"amount"``
    key or anything with an ``amount`` attribute.
    """
    total = _ZERO
    try:
        for transaction in transactions:
            amount = to_decimal(_transaction_amount(transaction))
            total += amount.to_integral_value(rounding=ROUND_CEILING) - amount
    except CalculationError:
        logger.exception("Error aggregating round-ups")
        raise
    except (KeyError, AttributeError, TypeError) as exc:
        logger.exception("Error aggregating round-ups")
        raise CalculationError("Failed to calculate round-up savings") from exc
    return total


def compare_scenarios(
    mortgage: MortgageDetails,
    amounts: Optional[Sequence[Number]] = None,
) -> List[SavingsScenario]:
    """Compute statistics for several extra payment amounts.

    Without ``amounts`` the goal-setting presets (50, 100, 200, 300) are used.
    All scenarios share one start date so their payoff dates are comparable.
    """
    if mortgage.start_date is None:
        mortgage = replace(mortgage, start_date=date.today())

    presets: Dict[Decimal, str] = {amount: label for label, amount in DEFAULT_SCENARIOS}
    if amounts is None:
        pairs = [(label, amount) for label, amount in DEFAULT_SCENARIOS]
    else:
        pairs = []
        for raw in amounts:
            amount = to_decimal(raw)
            pairs.append((presets.get(amount, "Custom"), amount))

    return [
        SavingsScenario(label=label, extra_payment=amount, stats=compute_stats(mortgage, amount))
        for label, amount in pairs
    ]


def savings_progress(mortgage: MortgageDetails, stats: MortgageStats) -> Dict[str, float]:
    """Return the interest and time reductions as percentages.

    These drive the progress bars on the goal screen. A percentage is zero
    when its baseline (original interest or term) is not positive.
    """
    total_months = _total_months(mortgage.original_term)
    interest_pct = _ZERO
    if stats.original_total_interest > 0:
        interest_pct = stats.interest_saved / stats.original_total_interest * 100
    time_pct = _ZERO
    if total_months > 0:
        time_pct = Decimal(stats.time_shaved) / Decimal(total_months) * 100
    return {
        "interest_reduction_pct": float(interest_pct),
        "time_reduction_pct": float(time_pct),
    }
