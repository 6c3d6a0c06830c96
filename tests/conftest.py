"""Shared mortgage fixtures.

Dashboard mortgage: $350K balance, 3.75%, 30yr, $1,850/month.
Calculator example: $300K at 4%, 30yr, $1,432/month.
"""

from datetime import date
from decimal import Decimal

import pytest

from payoff_calc.data_models import MortgageDetails

START = date(2024, 3, 15)


@pytest.fixture
def dashboard_mortgage() -> MortgageDetails:
    return MortgageDetails(
        balance=Decimal("350000"),
        interest_rate=Decimal("3.75"),
        original_term=30,
        monthly_payment=Decimal("1850"),
        start_date=START,
    )


@pytest.fixture
def calculator_mortgage() -> MortgageDetails:
    return MortgageDetails(
        balance=Decimal("300000"),
        interest_rate=Decimal("4"),
        original_term=30,
        monthly_payment=Decimal("1432"),
        start_date=START,
    )


@pytest.fixture
def fully_amortizing_mortgage() -> MortgageDetails:
    """Payment rounded up from the exact annuity payment of ~$1,432.25."""
    return MortgageDetails(
        balance=Decimal("300000"),
        interest_rate=Decimal("4"),
        original_term=30,
        monthly_payment=Decimal("1432.25"),
        start_date=START,
    )
