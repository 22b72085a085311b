from http import HTTPStatus

from flask.testing import FlaskClient

from forfettario.backend.version import get_project_version


def test_regime_endpoint_lists_tables_and_defaults(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/regime")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()

    categories = {entry["id"]: entry for entry in payload["activity_categories"]}
    assert categories["commercio"]["coefficient"] == 0.40
    assert categories["professioni"]["label"] == "Professioni"

    schemes = {entry["id"]: entry["rate"] for entry in payload["contribution_schemes"]}
    assert schemes["gestione-separata"] == 0.2607

    assert [entry["percent"] for entry in payload["substitute_tax_rates"]] == [5, 15]
    assert payload["defaults"] == {
        "activity_category": "professioni",
        "contribution_scheme": "gestione-separata",
        "substitute_tax_rate": 5,
        "payment_terms_days": 30,
    }
    assert payload["fallbacks"]["profitability_coefficient"] == 0.67
    assert payload["meta"]["legal_reference"].startswith("Art. 1")
    assert len(payload["notes"]) == 5
    assert payload["locale"] == "it"


def test_regime_endpoint_localises_labels(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/regime?locale=en")

    payload = response.get_json()
    labels = {entry["id"]: entry["label"] for entry in payload["activity_categories"]}
    assert labels["commercio"] == "Trade"
    assert payload["locale"] == "en"


def test_meta_endpoint_exposes_version(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/meta")

    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {"version": get_project_version()}
