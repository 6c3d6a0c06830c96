from dataclasses import replace
from decimal import Decimal

import pytest

from payoff_calc.data_models import MortgageDetails
from payoff_calc.errors import CalculationError, ValidationError
from payoff_calc.validation import ensure_valid, validate_extra_payment, validate_mortgage


class TestValidateMortgage:
    def test_valid(self, dashboard_mortgage):
        assert validate_mortgage(dashboard_mortgage) == []

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("balance", Decimal("999"), "Balance must be at least $1,000"),
            ("balance", Decimal("10000001"), "Balance cannot exceed $10,000,000"),
            ("interest_rate", Decimal("0.05"), "Interest rate must be at least 0.1%"),
            ("interest_rate", Decimal("20.5"), "Interest rate cannot exceed 20%"),
            ("original_term", 0, "Term must be at least 1 year"),
            ("original_term", 51, "Term cannot exceed 50 years"),
            ("monthly_payment", Decimal("99"), "Monthly payment must be at least $100"),
            ("monthly_payment", Decimal("100001"), "Monthly payment cannot exceed $100,000"),
        ],
    )
    def test_out_of_range(self, dashboard_mortgage, field, value, message):
        assert validate_mortgage(replace(dashboard_mortgage, **{field: value})) == [message]

    def test_limits_are_inclusive(self):
        mortgage = MortgageDetails(
            balance=Decimal("1000"),
            interest_rate=Decimal("20"),
            original_term=50,
            monthly_payment=Decimal("100"),
        )
        assert validate_mortgage(mortgage) == []


class TestEnsureValid:
    def test_collects_every_error(self, dashboard_mortgage):
        mortgage = replace(dashboard_mortgage, balance=Decimal("10"), original_term=80)
        with pytest.raises(ValidationError) as excinfo:
            ensure_valid(mortgage, Decimal("-5"))
        assert excinfo.value.errors == [
            "Balance must be at least $1,000",
            "Term cannot exceed 50 years",
            "Extra payment cannot be negative",
        ]

    def test_returns_mortgage(self, dashboard_mortgage):
        assert ensure_valid(dashboard_mortgage) is dashboard_mortgage

    def test_negative_extra(self):
        assert validate_extra_payment(Decimal("-1")) == ["Extra payment cannot be negative"]


class TestFromValues:
    def test_coerces_loose_input(self):
        mortgage = MortgageDetails.from_values("350,000", 3.75, "30", 1850)
        assert mortgage.balance == Decimal("350000")
        assert mortgage.interest_rate == Decimal("3.75")
        assert mortgage.original_term == 30
        assert mortgage.monthly_payment == Decimal("1850")

    @pytest.mark.parametrize("bad", ["abc", None, float("inf"), True])
    def test_rejects_non_numbers(self, bad):
        with pytest.raises(CalculationError):
            MortgageDetails.from_values(bad, 3.75, 30, 1850)
