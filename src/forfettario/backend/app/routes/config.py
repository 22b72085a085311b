"""Expose regime configuration consumed by the decoupled front-end.

These endpoints bridge the YAML-backed lookup tables and the form so that the
category, scheme and rate selects are populated from the same data the
calculator uses, without duplicating business rules in the UI.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from forfettario.backend.app.localization import Translator, get_translator
from forfettario.backend.config.regime_config import (
    RegimeConfiguration,
    load_regime_configuration,
)
from forfettario.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def _serialise_regime(
    config: RegimeConfiguration, translator: Translator
) -> dict[str, Any]:
    return {
        "meta": dict(config.meta),
        "activity_categories": [
            {
                "id": entry.id,
                "coefficient": entry.coefficient,
                "label": translator(entry.resolved_label_key),
            }
            for entry in config.activity_categories
        ],
        "contribution_schemes": [
            {
                "id": entry.id,
                "rate": entry.rate,
                "label": translator(entry.resolved_label_key),
            }
            for entry in config.contribution_schemes
        ],
        "substitute_tax_rates": [
            {
                "percent": entry.percent,
                "label": translator(entry.resolved_label_key),
            }
            for entry in config.substitute_tax_rates
        ],
        "defaults": config.defaults.model_dump(mode="json"),
        "fallbacks": config.fallbacks.model_dump(mode="json"),
        "notes": translator.sequence("calculator.notes"),
    }


@blueprint.get("/regime")
def get_regime_configuration():
    """Return the lookup tables, defaults and localised option labels."""

    translator = get_translator(request.args.get("locale"))
    payload = _serialise_regime(load_regime_configuration(), translator)
    payload["locale"] = translator.locale
    return jsonify(payload), 200


@blueprint.get("/meta")
def get_metadata():
    """Expose deployment metadata for diagnostics."""

    return jsonify({"version": get_project_version()}), 200


__all__ = ["blueprint"]
