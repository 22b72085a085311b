"""Integration tests for the invoice document endpoint."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict

import pytest
from flask.testing import FlaskClient


def _payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "amount": "1000",
        "activity_category": "commercio",
        "contribution_scheme": "commercianti",
        "substitute_tax_rate": "15",
        "number": "7/2024",
        "issue_date": "2024-01-31",
        "supplier": {"name": "Giulia Bianchi", "tax_code": "BNCGLI85M41H501Z"},
        "client": {"name": "Studio Verdi", "vat_id": "09876543210"},
    }
    payload.update(overrides)
    return payload


def test_invoice_endpoint_returns_document(client: FlaskClient) -> None:
    response = client.post("/api/v1/invoices", json=_payload())

    assert response.status_code == HTTPStatus.OK
    document = response.get_json()
    assert document["number"] == "7/2024"
    assert document["issue_date"] == "2024-01-31"
    assert document["due_date"] == "2024-03-01"
    assert document["total"] == pytest.approx(1000)
    assert document["breakdown"]["amount_to_set_aside"] == pytest.approx(142.212)
    assert document["breakdown"]["net_income"] == pytest.approx(857.788)
    assert document["meta"]["inputs"]["activity_category"] == "commercio"


def test_invoice_endpoint_localises_document(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/invoices",
        json=_payload(),
        query_string={"locale": "en"},
    )

    assert response.status_code == HTTPStatus.OK
    document = response.get_json()
    assert document["title"] == "INVOICE"
    assert document["labels"]["net_income"] == "Net income"


def test_invoice_endpoint_requires_amount(client: FlaskClient) -> None:
    response = client.post("/api/v1/invoices", json=_payload(amount=0))

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "amount" in payload["message"]


def test_invoice_endpoint_requires_client(client: FlaskClient) -> None:
    payload = _payload()
    del payload["client"]

    response = client.post("/api/v1/invoices", json=payload)

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert "client" in response.get_json()["message"]
