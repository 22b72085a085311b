from http import HTTPStatus

from flask import Flask

from forfettario.backend.app.http import problem_response
from forfettario.backend.services.response_builder import build_json_response


def test_build_json_response_serialises_payload(app: Flask) -> None:
    with app.app_context():
        response, status = build_json_response({"breakdown": None})

    assert status == 200
    assert response.get_json() == {"breakdown": None}


def test_build_json_response_honours_status(app: Flask) -> None:
    with app.app_context():
        _, status = build_json_response({}, status=HTTPStatus.CREATED)

    assert status == 201


def test_problem_response_merges_extras() -> None:
    problem = problem_response(
        "validation_error", status=HTTPStatus.BAD_REQUEST, message="bad", field="amount"
    )

    assert problem.status == 400
    assert problem.as_dict() == {
        "error": "validation_error",
        "message": "bad",
        "field": "amount",
    }
