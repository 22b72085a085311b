"""Flat-rate regime tax breakdown calculator."""

from __future__ import annotations

from forfettario.backend.app.models import InvoiceInput, TaxBreakdown
from forfettario.backend.config.regime_config import (
    RegimeConfiguration,
    load_regime_configuration,
)

from .utils import parse_rate_percent

ACTIVITY_CATEGORY_FALLBACK = "activity_category"
CONTRIBUTION_SCHEME_FALLBACK = "contribution_scheme"


def compute_breakdown(
    invoice: InvoiceInput,
    config: RegimeConfiguration | None = None,
) -> TaxBreakdown | None:
    """Return the tax breakdown for ``invoice`` or ``None`` on insufficient input.

    Unknown activity categories and contribution schemes fall back to the
    configured default coefficient/rate and are listed in
    ``TaxBreakdown.fallbacks`` instead of raising.
    """

    amount = invoice.amount
    if amount is None or amount <= 0:
        return None

    percent = parse_rate_percent(invoice.substitute_tax_rate_percent)
    if percent is None:
        return None

    tables = config or load_regime_configuration()
    fallbacks: list[str] = []

    coefficient = tables.coefficient_for(invoice.activity_category)
    if coefficient is None:
        coefficient = tables.fallbacks.profitability_coefficient
        fallbacks.append(ACTIVITY_CATEGORY_FALLBACK)
    profitable_income = amount * coefficient

    contribution_rate = tables.rate_for(invoice.contribution_scheme)
    if contribution_rate is None:
        contribution_rate = tables.fallbacks.contribution_rate
        fallbacks.append(CONTRIBUTION_SCHEME_FALLBACK)
    contribution_amount = profitable_income * contribution_rate

    taxable_base = profitable_income - contribution_amount
    rate = percent / 100
    tax_amount = taxable_base * rate

    total = tax_amount + contribution_amount
    net_income = amount - total

    return TaxBreakdown(
        invoice_amount=amount,
        profitable_income=profitable_income,
        contribution_amount=contribution_amount,
        taxable_base=taxable_base,
        effective_tax_rate_percent=rate * 100,
        tax_amount=tax_amount,
        total_taxes_and_contributions=total,
        net_income=net_income,
        amount_to_set_aside=total,
        profitability_coefficient=coefficient,
        contribution_rate=contribution_rate,
        fallbacks=tuple(fallbacks),
    )


__all__ = [
    "ACTIVITY_CATEGORY_FALLBACK",
    "CONTRIBUTION_SCHEME_FALLBACK",
    "compute_breakdown",
]
