"""Error Hierarchy — codes, statuses and the REST envelope."""

import pytest

from tandem.core.errors import (
    AlreadyFriendsError,
    ConflictError,
    DatabaseError,
    DuplicateRequestError,
    ErrorCategory,
    ErrorContext,
    ForbiddenError,
    InternalError,
    InvalidRequestError,
    NotFoundError,
    SelfRequestError,
    TandemError,
    UnauthenticatedError,
)


@pytest.mark.parametrize(
    ("error", "code", "status"),
    [
        (SelfRequestError(), "SELF_REQUEST", 400),
        (AlreadyFriendsError(), "ALREADY_FRIENDS", 400),
        (DuplicateRequestError(), "DUPLICATE_REQUEST", 409),
        (NotFoundError("User", "x"), "RESOURCE_NOT_FOUND", 404),
        (ForbiddenError("no"), "FORBIDDEN", 403),
        (UnauthenticatedError(), "UNAUTHENTICATED", 401),
        (ConflictError("race"), "CONCURRENCY_CONFLICT", 409),
        (DatabaseError("down", "execute"), "DATABASE_ERROR", 503),
        (InvalidRequestError([]), "VALIDATION_ERROR", 400),
        (InternalError(), "INTERNAL_ERROR", 500),
    ],
)
def test_each_error_has_distinct_code_and_status(error, code, status):
    assert isinstance(error, TandemError)
    assert error.code == code
    assert error.http_status == status


def test_to_response_envelope():
    ctx = ErrorContext(actor_id="a", target_id="b")
    body = AlreadyFriendsError(ctx).to_response()["error"]
    assert body["code"] == "ALREADY_FRIENDS"
    assert body["category"] == ErrorCategory.BUSINESS_RULE.value
    assert body["context"] == {"actor_id": "a", "target_id": "b", "request_id": None}
    assert "timestamp" in body


def test_not_found_names_resource():
    err = NotFoundError("ConnectionRequest", "123")
    assert err.message == "ConnectionRequest '123' not found"
    assert err.resource_type == "ConnectionRequest"


def test_invalid_request_envelope_carries_details():
    details = [{"field": "body.target_id", "message": "Field required", "type": "missing"}]
    body = InvalidRequestError(details).to_response()["error"]
    assert body["details"] == details
    assert body["category"] == ErrorCategory.VALIDATION.value


def test_internal_error_hides_internals():
    body = InternalError().to_response()["error"]
    assert body["message"] == "An unexpected error occurred"
    assert body["severity"] == "critical"
