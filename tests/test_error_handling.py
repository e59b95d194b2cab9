"""
Error handling tests.

This test suite covers the exception types and how the API renders them:
- Exception payloads (code, message, details) and HTTP statuses
- The shared error envelope for domain, validation and unexpected errors
- Serialization of non-JSON values in error details
"""

from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.middleware import (
    make_serializable,
    register_exception_handlers,
)
from app.exceptions import (
    ConflictError,
    ForbiddenError,
    InsufficientCandidatesError,
    NoCandidatesError,
    NotFoundError,
    ServiceValidationError,
)


def build_app(exc: Exception) -> TestClient:
    """Tiny app with the production handlers and one route raising exc."""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise exc

    return TestClient(app, raise_server_exceptions=False)


# =============================================================================
# EXCEPTION PAYLOADS
# =============================================================================


def test_service_validation_error_payload():
    exc = ServiceValidationError(
        "Profile is incomplete",
        details={"missing_fields": ["age"]},
        code="PROFILE_INCOMPLETE",
    )

    assert exc.http_status == 400
    assert str(exc) == "Profile is incomplete"
    assert exc.to_dict() == {
        "message": "Profile is incomplete",
        "code": "PROFILE_INCOMPLETE",
        "details": {"missing_fields": ["age"]},
    }


def test_payload_omits_empty_code_and_details():
    assert NotFoundError("Plan not found").to_dict() == {"message": "Plan not found"}


def test_no_candidates_names_slot_and_tag():
    exc = NoCandidatesError("Snack", "afternoon")

    assert isinstance(exc, ServiceValidationError)
    assert exc.http_status == 422
    assert "Snack" in exc.message
    assert "afternoon" in exc.message
    assert exc.to_dict()["details"] == {"slot": "Snack", "tag": "afternoon"}


def test_insufficient_candidates_reports_counts():
    exc = InsufficientCandidatesError("Dinner", "evening", required=7, found=4)

    assert exc.http_status == 422
    assert exc.code == "INSUFFICIENT_CANDIDATES"
    assert (exc.required, exc.found) == (7, 4)


@pytest.mark.parametrize(
    "exc_class, expected_status",
    [(NotFoundError, 404), (ForbiddenError, 403), (ConflictError, 409)],
)
def test_http_statuses(exc_class, expected_status):
    assert exc_class().http_status == expected_status


# =============================================================================
# ERROR ENVELOPE
# =============================================================================


def test_domain_error_envelope():
    client = build_app(NoCandidatesError("Lunch", "midday"))

    r = client.get("/boom")

    assert r.status_code == 422
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "NO_CANDIDATES"
    assert body["error"]["details"] == {"slot": "Lunch", "tag": "midday"}
    assert "timestamp" in body


def test_default_codes_when_exception_has_none():
    assert build_app(ServiceValidationError("bad")).get("/boom").json()["error"]["code"] == (
        "SERVICE_VALIDATION_ERROR"
    )
    assert build_app(ForbiddenError()).get("/boom").json()["error"]["code"] == "FORBIDDEN"
    assert build_app(ConflictError()).get("/boom").json()["error"]["code"] == "CONFLICT"


def test_unexpected_error_is_500_without_internals():
    r = build_app(RuntimeError("connection string leaked")).get("/boom")

    assert r.status_code == 500
    error = r.json()["error"]
    assert error["code"] == "INTERNAL_SERVER_ERROR"
    assert "leaked" not in error["message"]


def test_decimal_details_are_serialized():
    client = build_app(
        ServiceValidationError("Over budget", details={"over_by": Decimal("12.5")})
    )

    assert client.get("/boom").json()["error"]["details"] == {"over_by": 12.5}


def test_make_serializable_walks_nested_values():
    assert make_serializable({"a": [Decimal("1.5"), ("x", Decimal("2"))]}) == {
        "a": [1.5, ["x", 2.0]]
    }
