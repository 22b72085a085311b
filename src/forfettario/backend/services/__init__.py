"""Service-layer helpers shared by the Flask blueprints."""

from forfettario.backend.app.services.calculation_service import calculate_breakdown
from forfettario.backend.app.services.invoice_service import build_invoice_document

from .request_parser import parse_json_payload
from .response_builder import build_json_response

__all__ = [
    "build_invoice_document",
    "build_json_response",
    "calculate_breakdown",
    "parse_json_payload",
]
