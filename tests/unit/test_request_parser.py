from __future__ import annotations

import pytest
from flask import Flask, request
from werkzeug.exceptions import BadRequest

from forfettario.backend.services.request_parser import parse_json_payload


def _parse(app: Flask, **kwargs):
    with app.test_request_context("/api/v1/breakdowns", method="POST", **kwargs):
        return parse_json_payload(request)


def test_body_locale_takes_precedence(app: Flask) -> None:
    payload = _parse(
        app,
        json={"amount": 100, "locale": "en-GB"},
        headers={"Accept-Language": "it-IT"},
    )

    assert payload == {"amount": 100, "locale": "en"}


def test_query_locale_is_used_when_body_omits_it(app: Flask) -> None:
    payload = _parse(app, json={"amount": 100}, query_string={"locale": "EN"})

    assert payload["locale"] == "en"


def test_accept_language_header_is_used_as_last_hint(app: Flask) -> None:
    payload = _parse(
        app,
        json={"amount": 100},
        headers={"Accept-Language": "en-US;q=0.9,it;q=0.8"},
    )

    assert payload["locale"] == "en"


def test_unknown_locale_falls_back_to_italian(app: Flask) -> None:
    payload = _parse(app, json={"amount": 100, "locale": "fr"})

    assert payload["locale"] == "it"


def test_invalid_json_is_rejected(app: Flask) -> None:
    with pytest.raises(BadRequest, match="valid JSON"):
        _parse(app, data="not-json", content_type="application/json")


def test_non_object_json_is_rejected(app: Flask) -> None:
    with pytest.raises(BadRequest, match="must be an object"):
        _parse(app, json=[1, 2, 3])
