"""Range checks applied to mortgage details entered by a user.

The engine accepts any numeric input; these checks belong to the input
boundary (CLI options, web requests) and mirror the limits of the mortgage
form. ``validate_mortgage`` returns a list of messages, empty when the input
is acceptable, and ``ensure_valid`` raises ``ValidationError`` instead.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List

from .data_models import MortgageDetails
from .errors import ValidationError

BALANCE_RANGE = (Decimal("1000"), Decimal("10000000"))
INTEREST_RATE_RANGE = (Decimal("0.1"), Decimal("20"))
TERM_RANGE = (1, 50)
MONTHLY_PAYMENT_RANGE = (Decimal("100"), Decimal("100000"))


def validate_mortgage(mortgage: MortgageDetails) -> List[str]:
    errors: List[str] = []

    if mortgage.balance < BALANCE_RANGE[0]:
        errors.append("Balance must be at least $1,000")
    elif mortgage.balance > BALANCE_RANGE[1]:
        errors.append("Balance cannot exceed $10,000,000")

    if mortgage.interest_rate < INTEREST_RATE_RANGE[0]:
        errors.append("Interest rate must be at least 0.1%")
    elif mortgage.interest_rate > INTEREST_RATE_RANGE[1]:
        errors.append("Interest rate cannot exceed 20%")

    if mortgage.original_term < TERM_RANGE[0]:
        errors.append("Term must be at least 1 year")
    elif mortgage.original_term > TERM_RANGE[1]:
        errors.append("Term cannot exceed 50 years")

    if mortgage.monthly_payment < MONTHLY_PAYMENT_RANGE[0]:
        errors.append("Monthly payment must be at least $100")
    elif mortgage.monthly_payment > MONTHLY_PAYMENT_RANGE[1]:
        errors.append("Monthly payment cannot exceed $100,000")

    return errors


def validate_extra_payment(extra_payment: Decimal) -> List[str]:
    if extra_payment < 0:
        return ["Extra payment cannot be negative"]
    return []


def ensure_valid(mortgage: MortgageDetails, extra_payment: Decimal = Decimal("0")) -> MortgageDetails:
    """Raise ``ValidationError`` listing every problem with the input."""
    errors = validate_mortgage(mortgage) + validate_extra_payment(extra_payment)
    if errors:
        raise ValidationError(errors)
    return mortgage
