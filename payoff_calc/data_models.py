"""Data models for the payoff calculator.

This module defines the dataclasses passed into and out of the amortization
engine: the mortgage being analysed, the derived payoff statistics, the
individual schedule entries and the bank transactions used for round-up
savings. All of them are frozen so a result can be handed to several callers
without any of them changing it under the others.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional

from .utils import to_decimal


@dataclass(frozen=True)
class MortgageDetails:
    """The mortgage as the user entered it.

    Attributes
    ----------
    balance: Decimal
        Current outstanding principal.
    interest_rate: Decimal
        Nominal annual interest rate in percent (``3.75`` means 3.75 %).
    original_term: int
        Original loan term in whole years.
    monthly_payment: Decimal
        Contractual monthly payment (principal and interest only).
    start_date: date, optional
        Reference date for payoff dates. ``None`` means "today" at the time
        of the calculation.
    """

    balance: Decimal
    interest_rate: Decimal
    original_term: int
    monthly_payment: Decimal
    start_date: Optional[date] = None

    @classmethod
    def from_values(
        cls,
        balance: Any,
        interest_rate: Any,
        original_term: Any,
        monthly_payment: Any,
        start_date: Optional[date] = None,
    ) -> "MortgageDetails":
        """Build details from loosely typed input (ints, floats or strings).

        Raises ``CalculationError`` if any value is not a finite number.
        """
        return cls(
            balance=to_decimal(balance),
            interest_rate=to_decimal(interest_rate),
            original_term=int(to_decimal(original_term)),
            monthly_payment=to_decimal(monthly_payment),
            start_date=start_date,
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "balance": float(self.balance),
            "interest_rate": float(self.interest_rate),
            "original_term": self.original_term,
            "monthly_payment": float(self.monthly_payment),
            "start_date": self.start_date.isoformat() if self.start_date else None,
        }


@dataclass(frozen=True)
class MortgageStats:
    """Payoff statistics with and without the extra monthly payment.

    The ``original_*`` figures are computed from the contractual term, not by
    simulation, so with no extra payment ``original_total_interest`` and
    ``new_total_interest`` can differ slightly.
    """

    original_payoff_date: date
    original_total_interest: Decimal
    new_payoff_date: date
    new_total_interest: Decimal
    interest_saved: Decimal
    time_shaved: int  # months
    total_payments: int

    @property
    def years_shaved(self) -> int:
        return int(self.time_shaved / 12)

    @property
    def months_remainder_shaved(self) -> int:
        return self.time_shaved - self.years_shaved * 12

    def to_dict(self) -> Dict[str, object]:
        return {
            "original_payoff_date": self.original_payoff_date.isoformat(),
            "original_total_interest": float(self.original_total_interest),
            "new_payoff_date": self.new_payoff_date.isoformat(),
            "new_total_interest": float(self.new_total_interest),
            "interest_saved": float(self.interest_saved),
            "time_shaved": self.time_shaved,
            "total_payments": self.total_payments,
        }


@dataclass(frozen=True)
class AmortizationEntry:
    """One simulated month of the schedule.

    ``balance`` is the remaining principal after the payment, never below zero.
    """

    month: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal

    def to_dict(self) -> Dict[str, object]:
        return {
            "month": self.month,
            "payment": float(self.payment),
            "principal": float(self.principal),
            "interest": float(self.interest),
            "balance": float(self.balance),
        }


@dataclass(frozen=True)
class Transaction:
    """A card transaction considered for round-up savings."""

    amount: Decimal
    description: str = ""


@dataclass(frozen=True)
class SavingsScenario:
    """A preset extra payment and what it does to the mortgage."""

    label: str
    extra_payment: Decimal
    stats: MortgageStats

    def to_dict(self) -> Dict[str, object]:
        return {
            "label": self.label,
            "extra_payment": float(self.extra_payment),
            "stats": self.stats.to_dict(),
        }


@dataclass(frozen=True)
class CalculationResult:
    """Either the computed statistics or the reason they could not be computed."""

    stats: Optional[MortgageStats] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.stats is not None
