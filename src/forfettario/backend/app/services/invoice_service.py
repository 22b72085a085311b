"""Project invoice details and their tax breakdown into an invoice document."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import date, timedelta
from typing import Any, cast

from forfettario.backend.app.localization import get_translator
from forfettario.backend.app.models import (
    InvoiceDocument,
    InvoiceRequest,
    coerce_amount,
)
from forfettario.backend.config.regime_config import load_regime_configuration

from .calculation_service import (
    build_invoice_input,
    build_response_sections,
    validate_request,
)
from .calculators import compute_breakdown

_LOGGER = logging.getLogger(__name__)


def resolve_dates(
    request: InvoiceRequest,
    payment_terms_days: int,
    today: Callable[[], date] = date.today,
) -> tuple[date, date]:
    """Return ``(issue_date, due_date)`` with defaults applied.

    A missing due date is counted from the issue date, not from today, so a
    back-dated invoice keeps its ``payment_terms_days`` window.
    """

    issue_date = request.issue_date or today()
    due_date = request.due_date or issue_date + timedelta(days=payment_terms_days)
    return issue_date, due_date


def build_invoice_document(
    payload: Mapping[str, Any] | InvoiceRequest,
    *,
    today: Callable[[], date] = date.today,
) -> dict[str, Any]:
    """Validate ``payload`` and return the invoice document payload.

    Unlike the breakdown endpoint, an invoice cannot be generated without a
    positive amount, so a missing amount is reported as a validation error.
    """

    request = cast(
        InvoiceRequest, validate_request(payload, InvoiceRequest, subject="invoice")
    )

    amount = coerce_amount(request.amount)
    if amount is None or amount <= 0:
        raise ValueError("Invalid invoice payload: amount must be greater than zero")

    config = load_regime_configuration()
    invoice = build_invoice_input(request, config)
    breakdown = compute_breakdown(invoice, config)
    translator = get_translator(request.locale)

    issue_date, due_date = resolve_dates(
        request, config.defaults.payment_terms_days, today
    )

    _LOGGER.debug("Building invoice document %s dated %s", request.number, issue_date)

    document = InvoiceDocument.model_validate(
        {
            "title": translator("invoice.title"),
            "regime": {
                "name": translator("invoice.regime_name"),
                "legal_reference": str(config.meta.get("legal_reference", "")),
            },
            "number": request.number,
            "issue_date": issue_date,
            "due_date": due_date,
            "supplier": request.supplier,
            "client": request.client,
            "description": request.description,
            "line_items": [
                {"description": translator("invoice.line_item"), "amount": amount}
            ],
            "total": amount,
            "notes": translator.sequence("invoice.notes"),
            **build_response_sections(invoice, breakdown, translator),
        }
    )
    return document.model_dump(mode="json")


__all__ = ["build_invoice_document", "resolve_dates"]
