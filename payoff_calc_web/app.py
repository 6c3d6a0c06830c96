import logging
import os
from decimal import Decimal

from flask import Flask, jsonify, request

from payoff_calc.data_models import MortgageDetails
from payoff_calc.engine import (
    DEFAULT_MORTGAGE,
    aggregate_round_ups,
    calculate_stats,
    compare_scenarios,
    generate_schedule,
    savings_progress,
)
from payoff_calc.errors import CalculationError, ValidationError
from payoff_calc.formatter import format_currency, format_date
from payoff_calc.utils import parse_date, to_decimal
from payoff_calc.validation import ensure_valid

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
app.config["SCHEDULE_PREVIEW_ROWS"] = int(os.environ.get("PAYOFF_CALC_SCHEDULE_PREVIEW_ROWS", "120"))


class RequestError(Exception):
    """Raised while reading a request body; rendered as a 400 response."""

    def __init__(self, errors):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


@app.errorhandler(RequestError)
def _handle_request_error(exc: RequestError):
    logger.warning("Rejected request to %s: %s", request.path, exc)
    return jsonify({"errors": exc.errors}), 400


@app.errorhandler(CalculationError)
def _handle_calculation_error(exc: CalculationError):
    return jsonify({"error": str(exc)}), 422


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise RequestError(["Request body must be a JSON object"])
    return data


def _mortgage_from_json(data: dict):
    """Build validated mortgage details and the extra payment from a request body."""
    payload = data.get("mortgage", data)
    if not isinstance(payload, dict):
        raise RequestError(["'mortgage' must be a JSON object"])
    missing = [
        name
        for name in ("balance", "interest_rate", "original_term", "monthly_payment")
        if payload.get(name) in (None, "")
    ]
    if missing:
        raise RequestError([f"Missing field: {name}" for name in missing])

    start_date = None
    if payload.get("start_date"):
        try:
            start_date = parse_date(str(payload["start_date"]))
        except ValueError as exc:
            raise RequestError([str(exc)])

    try:
        mortgage = MortgageDetails.from_values(
            payload["balance"],
            payload["interest_rate"],
            payload["original_term"],
            payload["monthly_payment"],
            start_date=start_date,
        )
        extra_payment = to_decimal(data.get("extra_payment", 0))
    except CalculationError:
        raise RequestError(["Mortgage values must be numbers"])

    try:
        ensure_valid(mortgage, extra_payment)
    except ValidationError as exc:
        raise RequestError(exc.errors)
    return mortgage, extra_payment


def _stats_payload(mortgage: MortgageDetails, stats) -> dict:
    payload = stats.to_dict()
    payload["progress"] = savings_progress(mortgage, stats)
    payload["display"] = {
        "original_payoff_date": format_date(stats.original_payoff_date),
        "new_payoff_date": format_date(stats.new_payoff_date),
        "original_total_interest": format_currency(stats.original_total_interest),
        "new_total_interest": format_currency(stats.new_total_interest),
        "interest_saved": format_currency(stats.interest_saved),
    }
    return payload


@app.get("/api/default-mortgage")
def default_mortgage():
    return jsonify({"mortgage": DEFAULT_MORTGAGE.to_dict()})


@app.post("/api/stats")
def stats():
    mortgage, extra_payment = _mortgage_from_json(_json_body())
    result = calculate_stats(mortgage, extra_payment)
    if not result.ok:
        return jsonify({"error": result.error}), 422
    return jsonify(
        {
            "extra_payment": float(extra_payment),
            "stats": _stats_payload(mortgage, result.stats),
        }
    )


@app.post("/api/schedule")
def schedule():
    data = _json_body()
    mortgage, extra_payment = _mortgage_from_json(data)
    entries = generate_schedule(mortgage, extra_payment)
    serialized = [entry.to_dict() for entry in entries]
    payload = {"extra_payment": float(extra_payment), "total_entries": len(serialized)}
    if data.get("full"):
        payload["schedule"] = serialized
    else:
        max_rows = app.config["SCHEDULE_PREVIEW_ROWS"]
        payload["schedule"] = serialized[:max_rows]
        if len(serialized) > max_rows:
            payload["truncated"] = len(serialized) - max_rows
    return jsonify(payload)


@app.post("/api/scenarios")
def scenarios():
    data = _json_body()
    mortgage, _ = _mortgage_from_json(data)
    amounts = data.get("amounts")
    if amounts is not None:
        if not isinstance(amounts, list) or not amounts:
            raise RequestError(["'amounts' must be a non-empty list of numbers"])
        try:
            amounts = [to_decimal(a) for a in amounts]
        except CalculationError:
            raise RequestError(["'amounts' must be a non-empty list of numbers"])
        if any(a < Decimal("0") for a in amounts):
            raise RequestError(["Extra payment cannot be negative"])
    results = compare_scenarios(mortgage, amounts)
    return jsonify(
        {
            "scenarios": [
                {
                    "label": scenario.label,
                    "extra_payment": float(scenario.extra_payment),
                    "stats": _stats_payload(mortgage, scenario.stats),
                }
                for scenario in results
            ]
        }
    )


@app.post("/api/round-ups")
def round_ups():
    data = _json_body()
    transactions = data.get("transactions")
    if not isinstance(transactions, list):
        raise RequestError(["'transactions' must be a list"])
    total = aggregate_round_ups(transactions)
    return jsonify({"round_up_total": float(total), "display": format_currency(total)})


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("PAYOFF_CALC_LOG_LEVEL", "INFO").upper())
    logger.info("Starting payoff calculator API...")
    app.run(host="0.0.0.0", port=8710, debug=True)
