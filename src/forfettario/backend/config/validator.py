"""Utilities for validating regime configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from typing import Sequence

from .regime_config import (
    ActivityCategoryConfig,
    ConfigurationError,
    ContributionSchemeConfig,
    FallbackConfig,
    RegimeConfiguration,
    SubstituteTaxRateConfig,
    load_regime_configuration,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_fraction(scope: str, label: str, value: float) -> list[str]:
    if value <= 0 or value > 1:
        return [_format_scope(scope, f"{label} {value} must be between 0 (exclusive) and 1")]
    return []


def _duplicates(values: Sequence[str]) -> list[str]:
    return sorted(value for value, count in Counter(values).items() if count > 1)


def _validate_activity_categories(
    categories: Sequence[ActivityCategoryConfig],
) -> list[str]:
    errors: list[str] = []
    if not categories:
        errors.append(_format_scope("activity_categories", "no categories defined"))
        return errors

    duplicates = _duplicates([entry.id for entry in categories])
    if duplicates:
        errors.append(
            _format_scope(
                "activity_categories", f"duplicate identifiers detected: {duplicates}"
            )
        )

    for entry in categories:
        errors.extend(
            _validate_fraction(
                f"activity_categories.{entry.id}", "coefficient", entry.coefficient
            )
        )
    return errors


def _validate_contribution_schemes(
    schemes: Sequence[ContributionSchemeConfig],
) -> list[str]:
    errors: list[str] = []
    if not schemes:
        errors.append(_format_scope("contribution_schemes", "no schemes defined"))
        return errors

    duplicates = _duplicates([entry.id for entry in schemes])
    if duplicates:
        errors.append(
            _format_scope(
                "contribution_schemes", f"duplicate identifiers detected: {duplicates}"
            )
        )

    for entry in schemes:
        errors.extend(
            _validate_fraction(f"contribution_schemes.{entry.id}", "rate", entry.rate)
        )
    return errors


def _validate_tax_rates(rates: Sequence[SubstituteTaxRateConfig]) -> list[str]:
    errors: list[str] = []
    percents = [entry.percent for entry in rates]

    if not percents:
        errors.append(_format_scope("substitute_tax_rates", "no rates defined"))
        return errors

    out_of_range = [value for value in percents if value < 0 or value > 100]
    if out_of_range:
        errors.append(
            _format_scope(
                "substitute_tax_rates",
                f"percentages must lie between 0 and 100: {out_of_range}",
            )
        )

    duplicates = [value for value, count in Counter(percents).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(
                "substitute_tax_rates",
                f"duplicate percentages detected: {sorted(duplicates)}",
            )
        )

    if percents != sorted(percents):
        errors.append(_format_scope("substitute_tax_rates", "percentages should be sorted"))

    return errors


def _validate_fallbacks(fallbacks: FallbackConfig) -> list[str]:
    errors: list[str] = []
    errors.extend(
        _validate_fraction(
            "fallbacks", "profitability coefficient", fallbacks.profitability_coefficient
        )
    )
    errors.extend(
        _validate_fraction("fallbacks", "contribution rate", fallbacks.contribution_rate)
    )
    return errors


def _validate_defaults(config: RegimeConfiguration) -> list[str]:
    errors: list[str] = []
    defaults = config.defaults

    if defaults.activity_category not in config.profitability_coefficients:
        errors.append(
            _format_scope(
                "defaults",
                f"activity category '{defaults.activity_category}' is not declared",
            )
        )
    if defaults.contribution_scheme not in config.contribution_rates:
        errors.append(
            _format_scope(
                "defaults",
                f"contribution scheme '{defaults.contribution_scheme}' is not declared",
            )
        )
    if defaults.substitute_tax_rate not in config.allowed_tax_rates:
        errors.append(
            _format_scope(
                "defaults",
                f"substitute tax rate {defaults.substitute_tax_rate} is not allowed",
            )
        )
    return errors


def validate_regime_configuration(config: RegimeConfiguration) -> list[str]:
    """Return a list of human-readable issues detected in ``config``."""

    errors: list[str] = []

    errors.extend(_validate_activity_categories(config.activity_categories))
    errors.extend(_validate_contribution_schemes(config.contribution_schemes))
    errors.extend(_validate_tax_rates(config.substitute_tax_rates))
    errors.extend(_validate_fallbacks(config.fallbacks))
    errors.extend(_validate_defaults(config))

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        description=(
            "Validate the regime lookup tables and report issues helpful to contributors."
        )
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    parser.parse_args(argv)

    try:
        config = load_regime_configuration()
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"[regime] failed to load configuration: {error}")
        return 1

    issues = validate_regime_configuration(config)
    if issues:
        print(f"[regime] {len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print("[regime] OK")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
