from http import HTTPStatus

from flask.testing import FlaskClient


def test_default_translations_are_italian(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["locale"] == "it"
    assert payload["backend"]["breakdown.amount_to_set_aside"] == "Da Mettere da Parte"
    assert "en" in payload["available_locales"]


def test_locale_translations_include_fallback(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/en")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["locale"] == "en"
    assert payload["frontend"]["app"]["heading"] == "Flat-rate Tax Calculator"
    assert payload["fallback"]["locale"] == "it"


def test_unknown_locale_resolves_to_base_catalogue(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/xx")

    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["locale"] == "it"


def test_query_locale_selects_catalogue(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/?locale=en-GB")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["locale"] == "en"
    assert payload["backend"]["invoice.title"] == "INVOICE"
