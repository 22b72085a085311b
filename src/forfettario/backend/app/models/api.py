"""Pydantic models describing the public API surface."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

__all__ = [
    "BreakdownRequest",
    "PartyInput",
    "InvoiceRequest",
    "BreakdownPayload",
    "BreakdownLabels",
    "BreakdownInputs",
    "ResponseMeta",
    "BreakdownResponse",
    "RegimeReference",
    "InvoiceLineItem",
    "InvoiceDocument",
    "format_validation_error",
]


def _normalise_optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class BreakdownRequest(BaseModel):
    """Payload accepted by the breakdown endpoint.

    ``amount`` is kept raw on purpose: a missing or non-numeric amount is an
    expected state of the form and yields an empty breakdown, not an error.
    Omitted selections fall back to the configured form defaults.
    """

    model_config = ConfigDict(extra="forbid")

    locale: str = Field(default="it")
    amount: Any = None
    activity_category: str | None = None
    contribution_scheme: str | None = None
    substitute_tax_rate: int | str | None = None

    @field_validator("locale", mode="before")
    @classmethod
    def _normalise_locale(cls, value: Any) -> str:
        return _normalise_optional_text(value) or "it"

    @field_validator("activity_category", "contribution_scheme", mode="before")
    @classmethod
    def _normalise_selection(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value).strip()

    @field_validator("substitute_tax_rate", mode="before")
    @classmethod
    def _normalise_tax_rate(cls, value: Any) -> int | str | None:
        if value is None:
            return None
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return str(value).strip()


class PartyInput(BaseModel):
    """Supplier or client identity printed on the invoice."""

    model_config = ConfigDict(extra="forbid")

    name: str
    address: str = ""
    city: str = ""
    zip_code: str = ""
    tax_code: str = ""
    vat_id: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _require_name(cls, value: Any) -> str:
        text = _normalise_optional_text(value)
        if text is None:
            raise ValueError("name is required")
        return text

    @field_validator("address", "city", "zip_code", "tax_code", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> str:
        return _normalise_optional_text(value) or ""

    @field_validator("vat_id", mode="before")
    @classmethod
    def _strip_vat_id(cls, value: Any) -> str | None:
        return _normalise_optional_text(value)


class InvoiceRequest(BreakdownRequest):
    """Payload accepted by the invoice document endpoint."""

    supplier: PartyInput
    client: PartyInput
    number: str
    issue_date: date | None = None
    due_date: date | None = None
    description: str = ""

    @field_validator("number", mode="before")
    @classmethod
    def _require_number(cls, value: Any) -> str:
        text = _normalise_optional_text(value)
        if text is None:
            raise ValueError("invoice number is required")
        return text

    @field_validator("issue_date", "due_date", mode="before")
    @classmethod
    def _blank_dates(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _strip_description(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()


class BreakdownPayload(BaseModel):
    """Serialised ``TaxBreakdown`` figures, unrounded."""

    model_config = ConfigDict(extra="forbid")

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
    set_aside_share_percent: float
    net_income_share_percent: float


class BreakdownLabels(BaseModel):
    """Localized labels for breakdown fields."""

    model_config = ConfigDict(extra="forbid")

    invoice_amount: str
    profitable_income: str
    contribution_amount: str
    taxable_base: str
    effective_tax_rate_percent: str
    tax_amount: str
    total_taxes_and_contributions: str
    net_income: str
    amount_to_set_aside: str


class BreakdownInputs(BaseModel):
    """Selections the calculation actually ran with."""

    model_config = ConfigDict(extra="forbid")

    activity_category: str
    contribution_scheme: str
    substitute_tax_rate: int


class ResponseMeta(BaseModel):
    """Metadata returned alongside the calculation output."""

    model_config = ConfigDict(extra="forbid")

    locale: str
    fallbacks: list[str] = Field(default_factory=list)
    inputs: BreakdownInputs


class BreakdownResponse(BaseModel):
    """Full response payload produced by the calculation service."""

    model_config = ConfigDict(extra="forbid")

    breakdown: BreakdownPayload | None
    labels: BreakdownLabels
    meta: ResponseMeta


class RegimeReference(BaseModel):
    """Regime name and statutory reference printed on the invoice header."""

    model_config = ConfigDict(extra="forbid")

    name: str
    legal_reference: str


class InvoiceLineItem(BaseModel):
    """Single invoice row."""

    model_config = ConfigDict(extra="forbid")

    description: str
    amount: float


class InvoiceDocument(BaseModel):
    """Invoice projection consumed by the document renderer."""

    model_config = ConfigDict(extra="forbid")

    title: str
    regime: RegimeReference
    number: str
    issue_date: date
    due_date: date
    supplier: PartyInput
    client: PartyInput
    description: str
    line_items: list[InvoiceLineItem]
    total: float
    notes: list[str]
    breakdown: BreakdownPayload | None
    labels: BreakdownLabels
    meta: ResponseMeta


def format_validation_error(error: ValidationError, *, subject: str = "calculation") -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid {subject} payload: {details}"
