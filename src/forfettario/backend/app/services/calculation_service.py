"""Orchestrate request validation, normalisation, and breakdown calculations.

The calculation service sits between the HTTP layer and the pure calculator:
it validates the incoming payload, applies the configured form defaults,
builds the ``InvoiceInput`` record, and turns the resulting ``TaxBreakdown``
into a localised response. Lookup fallbacks are reported here rather than in
the calculator so that ``compute_breakdown`` stays free of side effects.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from forfettario.backend.app.localization import Translator, get_translator
from forfettario.backend.app.models import (
    BreakdownInputs,
    BreakdownRequest,
    BreakdownResponse,
    InvoiceInput,
    TaxBreakdown,
    format_validation_error,
)
from forfettario.backend.config.regime_config import (
    RegimeConfiguration,
    load_regime_configuration,
)

from .calculators import (
    ACTIVITY_CATEGORY_FALLBACK,
    compute_breakdown,
    parse_rate_percent,
)

_LOGGER = logging.getLogger(__name__)

BREAKDOWN_LABEL_KEYS: dict[str, str] = {
    "invoice_amount": "breakdown.invoice_amount",
    "profitable_income": "breakdown.profitable_income",
    "contribution_amount": "breakdown.contribution_amount",
    "taxable_base": "breakdown.taxable_base",
    "effective_tax_rate_percent": "breakdown.effective_tax_rate_percent",
    "tax_amount": "breakdown.tax_amount",
    "total_taxes_and_contributions": "breakdown.total_taxes_and_contributions",
    "net_income": "breakdown.net_income",
    "amount_to_set_aside": "breakdown.amount_to_set_aside",
}


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("FORFETTARIO_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _validate_tax_rate(value: int | str | None, config: RegimeConfiguration) -> int:
    if value is None or value == "":
        return config.defaults.substitute_tax_rate

    percent = parse_rate_percent(value)
    if percent is None or percent not in config.allowed_tax_rates:
        allowed = ", ".join(str(entry) for entry in config.allowed_tax_rates)
        raise ValueError(
            f"Field 'substitute_tax_rate' must match an allowed rate ({allowed})"
        )
    return percent


def validate_request(
    payload: Mapping[str, Any] | BreakdownRequest,
    model: type[BreakdownRequest] = BreakdownRequest,
    *,
    subject: str = "calculation",
) -> BreakdownRequest:
    """Validate ``payload`` against ``model`` and surface errors as ``ValueError``."""

    if isinstance(payload, BreakdownRequest):
        payload = payload.model_dump(mode="python")
    elif not isinstance(payload, Mapping):
        raise ValueError("Payload must be a mapping")

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc, subject=subject)) from exc


def build_invoice_input(
    request: BreakdownRequest, config: RegimeConfiguration
) -> InvoiceInput:
    """Apply form defaults to ``request`` and return the calculator input."""

    defaults = config.defaults
    category = request.activity_category
    scheme = request.contribution_scheme

    return InvoiceInput(
        amount=request.amount,
        activity_category=defaults.activity_category if category is None else category,
        contribution_scheme=defaults.contribution_scheme if scheme is None else scheme,
        substitute_tax_rate_percent=_validate_tax_rate(request.substitute_tax_rate, config),
    )


def report_fallbacks(invoice: InvoiceInput, breakdown: TaxBreakdown | None) -> list[str]:
    """Log lookups that used the default rate and return their names."""

    if breakdown is None or not breakdown.fallbacks:
        return []

    for fallback in breakdown.fallbacks:
        if fallback == ACTIVITY_CATEGORY_FALLBACK:
            _LOGGER.warning(
                "Unrecognised activity category %r; applied default coefficient %s",
                invoice.activity_category,
                breakdown.profitability_coefficient,
            )
        else:
            _LOGGER.warning(
                "Unrecognised contribution scheme %r; applied default rate %s",
                invoice.contribution_scheme,
                breakdown.contribution_rate,
            )
    return list(breakdown.fallbacks)


def breakdown_labels(translator: Translator) -> dict[str, str]:
    return translator.labels(BREAKDOWN_LABEL_KEYS)


def build_response_sections(
    invoice: InvoiceInput,
    breakdown: TaxBreakdown | None,
    translator: Translator,
) -> dict[str, Any]:
    """Return the ``breakdown``/``labels``/``meta`` sections shared by responses."""

    return {
        "breakdown": breakdown.as_dict() if breakdown is not None else None,
        "labels": breakdown_labels(translator),
        "meta": {
            "locale": translator.locale,
            "fallbacks": report_fallbacks(invoice, breakdown),
            "inputs": BreakdownInputs(
                activity_category=invoice.activity_category,
                contribution_scheme=invoice.contribution_scheme,
                substitute_tax_rate=int(invoice.substitute_tax_rate_percent),
            ),
        },
    }


def calculate_breakdown(
    payload: Mapping[str, Any] | BreakdownRequest,
) -> dict[str, Any]:
    """Compute the tax breakdown for the provided payload."""

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    request_model = validate_request(payload)
    config = load_regime_configuration()

    with _profile_section("normalise_payload", timings):
        invoice = build_invoice_input(request_model, config)

    with _profile_section("compute_breakdown", timings):
        breakdown = compute_breakdown(invoice, config)

    translator = get_translator(request_model.locale)
    sections = build_response_sections(invoice, breakdown, translator)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_breakdown timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    response_model = BreakdownResponse.model_validate(sections)
    return response_model.model_dump(mode="json")


__all__ = [
    "BREAKDOWN_LABEL_KEYS",
    "breakdown_labels",
    "build_invoice_input",
    "build_response_sections",
    "calculate_breakdown",
    "report_fallbacks",
    "validate_request",
]
