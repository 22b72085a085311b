"""Integration tests for the health check endpoint."""

from flask.testing import FlaskClient

from forfettario.backend.version import get_project_version


def test_health_endpoint_returns_ok(client: FlaskClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "version": get_project_version()}
