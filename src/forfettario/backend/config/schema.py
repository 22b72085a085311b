"""Pydantic models describing the flat-rate regime configuration schema."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _validate_fraction(value: float, label: str) -> float:
    if value <= 0 or value > 1:
        raise ConfigurationError(f"{label} must be a fraction in (0, 1], got {value}")
    return value


class ActivityCategoryConfig(ImmutableModel):
    """Business activity category and its profitability coefficient."""

    id: str
    coefficient: float
    label_key: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _normalise_id(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise ConfigurationError("Activity categories require an identifier")
        return text

    @model_validator(mode="after")
    def _validate_coefficient(self) -> ActivityCategoryConfig:
        _validate_fraction(self.coefficient, f"Coefficient for '{self.id}'")
        return self

    @computed_field
    @property
    def resolved_label_key(self) -> str:
        return self.label_key or f"activity.{self.id}"


class ContributionSchemeConfig(ImmutableModel):
    """Social-security scheme and the contribution rate it applies."""

    id: str
    rate: float
    label_key: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _normalise_id(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise ConfigurationError("Contribution schemes require an identifier")
        return text

    @model_validator(mode="after")
    def _validate_rate(self) -> ContributionSchemeConfig:
        _validate_fraction(self.rate, f"Contribution rate for '{self.id}'")
        return self

    @computed_field
    @property
    def resolved_label_key(self) -> str:
        return self.label_key or f"scheme.{self.id}"


class SubstituteTaxRateConfig(ImmutableModel):
    """Allowed flat substitute-tax percentage."""

    percent: int = Field(..., ge=0, le=100)
    label_key: str | None = None

    @computed_field
    @property
    def resolved_label_key(self) -> str:
        return self.label_key or f"tax_rate.{self.percent}"


class FallbackConfig(ImmutableModel):
    """Values applied when a lookup key is not recognised."""

    profitability_coefficient: float = 0.67
    contribution_rate: float = 0.2607

    @model_validator(mode="after")
    def _validate_values(self) -> FallbackConfig:
        _validate_fraction(self.profitability_coefficient, "Fallback coefficient")
        _validate_fraction(self.contribution_rate, "Fallback contribution rate")
        return self


class FormDefaults(ImmutableModel):
    """Initial selections offered to the form collaborator."""

    activity_category: str = "professioni"
    contribution_scheme: str = "gestione-separata"
    substitute_tax_rate: int = 5
    payment_terms_days: int = Field(default=30, ge=0)


class RegimeConfiguration(ImmutableModel):
    """Structured representation of the flat-rate regime tables.

    Sections are tuples of frozen entries and ``meta`` is a read-only view, so
    the cached instance cannot be altered after loading. The lookup mappings
    are derived from those tuples on access.
    """

    meta: Mapping[str, Any] = Field(default_factory=dict)
    activity_categories: tuple[ActivityCategoryConfig, ...]
    contribution_schemes: tuple[ContributionSchemeConfig, ...]
    substitute_tax_rates: tuple[SubstituteTaxRateConfig, ...]
    fallbacks: FallbackConfig = Field(default_factory=FallbackConfig)
    defaults: FormDefaults = Field(default_factory=FormDefaults)

    @model_validator(mode="before")
    @classmethod
    def _prepare_sections(cls, data: Any) -> Mapping[str, Any]:
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration file must define a mapping at the top level")

        prepared = dict(data)
        meta = prepared.get("meta")
        if meta is None:
            prepared["meta"] = {}
        elif not isinstance(meta, Mapping):
            raise ConfigurationError("'meta' section must be a mapping if provided")

        for section in ("activity_categories", "contribution_schemes", "substitute_tax_rates"):
            entries = prepared.get(section)
            if not isinstance(entries, Sequence) or isinstance(entries, str) or not entries:
                raise ConfigurationError(
                    f"Regime configuration requires a non-empty '{section}' list"
                )
            prepared[section] = tuple(entries)

        if prepared.get("fallbacks") is None:
            prepared["fallbacks"] = {}
        if prepared.get("defaults") is None:
            prepared["defaults"] = {}

        return prepared

    @field_validator("meta", mode="after")
    @classmethod
    def _freeze_meta(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _validate_tables(self) -> RegimeConfiguration:
        self._ensure_unique(
            [entry.id for entry in self.activity_categories], "activity category"
        )
        self._ensure_unique(
            [entry.id for entry in self.contribution_schemes], "contribution scheme"
        )
        self._ensure_unique(
            [str(entry.percent) for entry in self.substitute_tax_rates],
            "substitute tax rate",
        )

        if self.defaults.activity_category not in self.profitability_coefficients:
            raise ConfigurationError(
                f"Default activity category '{self.defaults.activity_category}' is not declared"
            )
        if self.defaults.contribution_scheme not in self.contribution_rates:
            raise ConfigurationError(
                f"Default contribution scheme '{self.defaults.contribution_scheme}' is not declared"
            )
        if self.defaults.substitute_tax_rate not in self.allowed_tax_rates:
            raise ConfigurationError(
                f"Default substitute tax rate {self.defaults.substitute_tax_rate} is not allowed"
            )
        return self

    @staticmethod
    def _ensure_unique(identifiers: Sequence[str], label: str) -> None:
        seen: set[str] = set()
        for identifier in identifiers:
            if identifier in seen:
                raise ConfigurationError(f"Duplicate {label} '{identifier}' declared")
            seen.add(identifier)

    @property
    def profitability_coefficients(self) -> Mapping[str, float]:
        return MappingProxyType(
            {entry.id: entry.coefficient for entry in self.activity_categories}
        )

    @property
    def contribution_rates(self) -> Mapping[str, float]:
        return MappingProxyType(
            {entry.id: entry.rate for entry in self.contribution_schemes}
        )

    @property
    def allowed_tax_rates(self) -> tuple[int, ...]:
        return tuple(entry.percent for entry in self.substitute_tax_rates)

    def coefficient_for(self, category: str) -> float | None:
        return self.profitability_coefficients.get(category)

    def rate_for(self, scheme: str) -> float | None:
        return self.contribution_rates.get(scheme)


__all__ = [
    "ActivityCategoryConfig",
    "ConfigurationError",
    "ContributionSchemeConfig",
    "FallbackConfig",
    "FormDefaults",
    "ImmutableModel",
    "RegimeConfiguration",
    "SubstituteTaxRateConfig",
    "ValidationError",
]
