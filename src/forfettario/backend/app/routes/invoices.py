"""REST endpoint projecting invoice details into an invoice document."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from forfettario.backend.services import (
    build_invoice_document,
    build_json_response,
    parse_json_payload,
)

blueprint = Blueprint("invoices", __name__, url_prefix="/api/v1")


@blueprint.post("/invoices")
def create_invoice_document() -> tuple[Any, int]:
    """Return the invoice document for the submitted details."""

    payload = parse_json_payload(request)
    document = build_invoice_document(payload)

    return build_json_response(document)
