"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from dripcalc.core.instruments import compare_instruments, get_instrument, load_instruments
from dripcalc.core.ping import get_service_status
from dripcalc.domain.projection import InvalidConfigurationError, run_projection
from dripcalc.schemas.comparison import (
    ComparisonRequest,
    ComparisonResponse,
    InstrumentListResponse,
)
from dripcalc.schemas.ping import PingResponse
from dripcalc.schemas.projection import ProjectionRequest, ProjectionResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _instruments_path():
    return current_app.config["DRIPCALC_SETTINGS"].instruments_path


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(InvalidConfigurationError)
def _handle_invalid_configuration(exc: InvalidConfigurationError):
    logger.info("rejected projection: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(**get_service_status())
    return jsonify(response.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Year-by-year projection for one parameter set."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ProjectionRequest.model_validate(raw_payload)
    result = run_projection(payload.to_parameters())
    response = ProjectionResponse.model_validate(result.model_dump())
    return jsonify(response.model_dump(mode="json"))


@api_bp.get("/instruments")
def instruments() -> Any:
    response = InstrumentListResponse(instruments=load_instruments(_instruments_path()))
    return jsonify(response.model_dump(mode="json"))


@api_bp.get("/instruments/<ticker>")
def instrument(ticker: str) -> Any:
    try:
        found = get_instrument(ticker, _instruments_path())
    except KeyError:
        return jsonify({"error": [f"unknown instrument {ticker}"]}), HTTPStatus.NOT_FOUND
    return jsonify(found.model_dump(mode="json"))


@api_bp.post("/comparison")
def comparison() -> Any:
    """Same principal projected through every instrument, best first."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ComparisonRequest.model_validate(raw_payload)
    rows = compare_instruments(
        payload.principal,
        payload.horizon_years,
        reinvest_dividends=payload.reinvest_dividends,
        dividend_tax_rate=payload.dividend_tax_rate,
        path=_instruments_path(),
    )
    return jsonify(ComparisonResponse(rows=rows).model_dump(mode="json"))
