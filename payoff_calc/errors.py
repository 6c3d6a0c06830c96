"""Exception types raised by the payoff calculator.

``CalculationError`` is what the engine raises when a value that reaches the
arithmetic cannot be used (non-numeric, NaN, missing). ``ValidationError`` is
raised at the input boundary when values are numeric but outside the ranges
the mortgage form accepts.
"""

from __future__ import annotations

from typing import List


CALCULATION_FAILED_MESSAGE = "Failed to calculate mortgage statistics"


class CalculationError(ValueError):
    """The engine could not compute a result from the given mortgage."""

    def __init__(self, message: str = CALCULATION_FAILED_MESSAGE) -> None:
        super().__init__(message)


class ValidationError(ValueError):
    """One or more mortgage inputs are outside the accepted ranges."""

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))
