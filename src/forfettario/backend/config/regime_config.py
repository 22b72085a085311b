"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .schema import (
    ActivityCategoryConfig,
    ConfigurationError,
    ContributionSchemeConfig,
    FallbackConfig,
    FormDefaults,
    RegimeConfiguration,
    SubstituteTaxRateConfig,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
REGIME_FILE = CONFIG_DIRECTORY / "regime.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


@lru_cache(maxsize=1)
def load_regime_configuration() -> RegimeConfiguration:
    """Load and cache the regime lookup tables from disk."""

    if not REGIME_FILE.exists():
        raise FileNotFoundError(f"Regime configuration missing: {REGIME_FILE.name}")

    raw_config = _load_yaml(REGIME_FILE)

    try:
        return RegimeConfiguration.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Regime configuration validation failed: {error}") from error


def profitability_coefficients() -> Mapping[str, float]:
    """Return the read-only activity category to coefficient table."""

    return load_regime_configuration().profitability_coefficients


def contribution_rates() -> Mapping[str, float]:
    """Return the read-only contribution scheme to rate table."""

    return load_regime_configuration().contribution_rates


def allowed_tax_rates() -> tuple[int, ...]:
    """Return the allowed substitute-tax percentages."""

    return load_regime_configuration().allowed_tax_rates


__all__ = [
    "ActivityCategoryConfig",
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "ContributionSchemeConfig",
    "FallbackConfig",
    "FormDefaults",
    "REGIME_FILE",
    "RegimeConfiguration",
    "SubstituteTaxRateConfig",
    "allowed_tax_rates",
    "contribution_rates",
    "load_regime_configuration",
    "profitability_coefficients",
]
