"""Helpers for normalising incoming JSON requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest

from forfettario.backend.app.localization import normalise_locale


def _locale_hint(req: Request, payload: Mapping[str, Any]) -> str | None:
    """Return the first locale hint from the body, query string or headers."""

    locale = payload.get("locale")
    if isinstance(locale, str) and locale.strip():
        return locale

    locale_param = req.args.get("locale")
    if locale_param:
        return locale_param

    accept_language = req.headers.get("Accept-Language")
    if accept_language:
        primary = accept_language.split(",")[0].split(";")[0].strip()
        if primary:
            return primary

    return None


def parse_json_payload(req: Request) -> dict[str, Any]:
    """Extract a JSON object from ``req`` with its locale resolved."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    payload = dict(data)
    payload["locale"] = normalise_locale(_locale_hint(req, payload))

    return payload
