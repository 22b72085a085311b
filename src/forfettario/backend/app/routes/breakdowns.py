"""REST endpoint for flat-rate tax breakdowns."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from forfettario.backend.services import (
    build_json_response,
    calculate_breakdown,
    parse_json_payload,
)

blueprint = Blueprint("breakdowns", __name__, url_prefix="/api/v1")


@blueprint.post("/breakdowns")
def create_breakdown() -> tuple[Any, int]:
    """Compute a tax breakdown for the submitted invoice amount.

    A missing or non-positive amount is not an error: the response carries a
    ``null`` breakdown so the caller can hide the result sections.
    """

    payload = parse_json_payload(request)
    result = calculate_breakdown(payload)

    return build_json_response(result)
