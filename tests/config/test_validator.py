from forfettario.backend.config.validator import main, validate_regime_configuration
from forfettario.backend.config.regime_config import load_regime_configuration


def test_current_configuration_is_valid() -> None:
    issues = validate_regime_configuration(load_regime_configuration())
    assert not issues, issues


def test_validator_flags_invalid_coefficient() -> None:
    config = load_regime_configuration()
    categories = [
        entry.model_copy(update={"coefficient": 1.5}) if entry.id == "commercio" else entry
        for entry in config.activity_categories
    ]
    broken = config.model_copy(update={"activity_categories": categories})

    errors = validate_regime_configuration(broken)

    assert any(
        "activity_categories.commercio" in error and "between 0 (exclusive) and 1" in error
        for error in errors
    )


def test_validator_flags_duplicate_schemes() -> None:
    config = load_regime_configuration()
    schemes = [*config.contribution_schemes, config.contribution_schemes[0]]
    broken = config.model_copy(update={"contribution_schemes": schemes})

    errors = validate_regime_configuration(broken)

    assert any("duplicate identifiers" in error and "commercianti" in error for error in errors)


def test_validator_flags_unsorted_tax_rates() -> None:
    config = load_regime_configuration()
    broken = config.model_copy(
        update={"substitute_tax_rates": list(reversed(config.substitute_tax_rates))}
    )

    errors = validate_regime_configuration(broken)

    assert "substitute_tax_rates: percentages should be sorted" in errors


def test_validator_flags_undeclared_default() -> None:
    config = load_regime_configuration()
    broken = config.model_copy(
        update={
            "defaults": config.defaults.model_copy(update={"activity_category": "consulenza"})
        }
    )

    errors = validate_regime_configuration(broken)

    assert "defaults: activity category 'consulenza' is not declared" in errors


def test_validator_flags_invalid_fallback() -> None:
    config = load_regime_configuration()
    broken = config.model_copy(
        update={"fallbacks": config.fallbacks.model_copy(update={"contribution_rate": 0})}
    )

    errors = validate_regime_configuration(broken)

    assert any(error.startswith("fallbacks: contribution rate") for error in errors)


def test_command_line_entry_point_reports_success(capsys) -> None:
    assert main([]) == 0
    assert "[regime] OK" in capsys.readouterr().out
