"""Typed input/result models shared across the calculation services.

``InvoiceInput`` is the record handed over by the form collaborator: a frozen
Pydantic model that normalises raw form values without ever rejecting them, so
that an unusable amount simply produces no breakdown. ``TaxBreakdown`` is the
lightweight, immutable result of a single calculation.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .api import (
    BreakdownInputs,
    BreakdownLabels,
    BreakdownPayload,
    BreakdownRequest,
    BreakdownResponse,
    InvoiceDocument,
    InvoiceLineItem,
    InvoiceRequest,
    PartyInput,
    RegimeReference,
    ResponseMeta,
    format_validation_error,
)

__all__ = [
    "InvoiceInput",
    "TaxBreakdown",
    "coerce_amount",
    "BreakdownInputs",
    "BreakdownLabels",
    "BreakdownPayload",
    "BreakdownRequest",
    "BreakdownResponse",
    "InvoiceDocument",
    "InvoiceLineItem",
    "InvoiceRequest",
    "PartyInput",
    "RegimeReference",
    "ResponseMeta",
    "format_validation_error",
]


def coerce_amount(value: Any) -> float | None:
    """Return ``value`` as a finite float, or ``None`` when it is not a number."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal) and not value.is_finite():
        return None
    if isinstance(value, (numbers.Real, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


class InvoiceInput(BaseModel):
    """Validated input record for a single tax breakdown."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: float | None = None
    activity_category: str = "professioni"
    contribution_scheme: str = "gestione-separata"
    substitute_tax_rate_percent: str | int = "5"

    @field_validator("amount", mode="before")
    @classmethod
    def _normalise_amount(cls, value: Any) -> float | None:
        return coerce_amount(value)

    @field_validator("activity_category", "contribution_scheme", mode="before")
    @classmethod
    def _normalise_key(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("substitute_tax_rate_percent", mode="before")
    @classmethod
    def _normalise_rate(cls, value: Any) -> str | int:
        if value is None:
            return ""
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return str(value)


@dataclass(frozen=True)
class TaxBreakdown:
    """Figures derived from one ``InvoiceInput``; never rounded."""

    invoice_amount: float
    profitable_income: float
    contribution_amount: float
    taxable_base: float
    effective_tax_rate_percent: float
    tax_amount: float
    total_taxes_and_contributions: float
    net_income: float
    amount_to_set_aside: float
    profitability_coefficient: float
    contribution_rate: float
    fallbacks: tuple[str, ...] = ()

    @property
    def set_aside_share_percent(self) -> float:
        """Amount to set aside as a percentage of the invoice."""

        return self.amount_to_set_aside / self.invoice_amount * 100

    @property
    def net_income_share_percent(self) -> float:
        """Net income as a percentage of the invoice."""

        return self.net_income / self.invoice_amount * 100

    def as_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload.pop("fallbacks")
        payload["set_aside_share_percent"] = self.set_aside_share_percent
        payload["net_income_share_percent"] = self.net_income_share_percent
        return payload
