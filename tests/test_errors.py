"""
Tests for the failure taxonomy and status classification
"""

import json

import pytest

from aiqlink.integration import (
    AIQError,
    AuthenticationRejected,
    FailureKind,
    HttpResult,
    InvalidInput,
    MalformedResponse,
    TransportFailure,
    classify_failure,
)


def _result(status_code, body=b"", reason=None):
    return HttpResult(status_code=status_code, reason=reason, body=body)


class TestFailureKinds:
    """Test failure classes and their kinds"""

    def test_kinds(self):
        """Test that every failure class carries its kind"""
        assert InvalidInput("x").kind is FailureKind.INVALID_INPUT
        assert TransportFailure("x").kind is FailureKind.TRANSPORT_FAILURE
        assert MalformedResponse("x").kind is FailureKind.MALFORMED_RESPONSE
        assert AuthenticationRejected(401, "x").kind is FailureKind.AUTHENTICATION_REJECTED

    def test_common_base_class(self):
        """Test that all failures share AIQError"""
        for error in (InvalidInput("x"), TransportFailure("x"),
                      MalformedResponse("x"), AuthenticationRejected(500, "x")):
            assert isinstance(error, AIQError)
            assert error.message == "x"

    def test_builtin_bases(self):
        """Test the built-in exception each failure can be caught as"""
        assert isinstance(InvalidInput("x"), ValueError)
        assert isinstance(TransportFailure("x"), RuntimeError)
        assert isinstance(MalformedResponse("x"), RuntimeError)
        assert isinstance(AuthenticationRejected(400, "x"), RuntimeError)

    def test_rejection_message_format(self):
        """Test the rendered rejection message"""
        error = AuthenticationRejected(400, "invalid_grant")

        assert str(error) == (
            "Failed to authenticate, the status code is [400] "
            "and error message is [invalid_grant]"
        )
        assert error.message == "invalid_grant"
        assert error.status_code == 400


class TestClassifyFailure:
    """Test classification of non-200 responses"""

    def test_bad_request_uses_error_description(self):
        """Test that a 400 carries the error description"""
        body = json.dumps({"error": "invalid_grant", "error_description": "Bad credentials"}).encode()

        failure = classify_failure(_result(400, body, "Bad Request"))

        assert isinstance(failure, AuthenticationRejected)
        assert failure.status_code == 400
        assert failure.message == "Bad credentials"

    def test_bad_request_without_description(self):
        """Test that a 400 without description falls back to the reason phrase"""
        body = json.dumps({"error": "invalid_grant"}).encode()

        failure = classify_failure(_result(400, body, "Bad Request"))

        assert failure.message == "Bad Request"

    def test_bad_request_with_unparseable_body(self):
        """Test that a 400 with a non-JSON body falls back to the reason phrase"""
        failure = classify_failure(_result(400, b"<html>bad</html>", "Bad Request"))

        assert failure.message == "Bad Request"

    def test_bad_request_with_structured_description(self):
        """Test that a non-text description is ignored"""
        body = json.dumps({"error_description": {"code": 7}}).encode()

        failure = classify_failure(_result(400, body, "Bad Request"))

        assert failure.message == "Bad Request"

    def test_other_status_uses_reason_phrase(self):
        """Test that non-400 statuses never read the body"""
        body = json.dumps({"error_description": "should not be used"}).encode()

        failure = classify_failure(_result(401, body, "Unauthorized"))

        assert failure.status_code == 401
        assert failure.message == "Unauthorized"

    def test_missing_reason_uses_standard_phrase(self):
        """Test the standard phrase when the server sends no reason"""
        failure = classify_failure(_result(503, b"", None))

        assert failure.message == "Service Unavailable"

    def test_unknown_status_without_reason(self):
        """Test a non-standard status code without reason phrase"""
        failure = classify_failure(_result(599, b"", ""))

        assert failure.message == "HTTP 599"

    def test_classifier_module(self):
        """Test that the classifier lives in its own typed module"""
        from typing import get_type_hints

        from aiqlink.integration import classifier, errors

        hints = get_type_hints(classifier.classify_failure)

        assert classify_failure is classifier.classify_failure
        assert hints["result"] is HttpResult
        assert hints["return"] is AuthenticationRejected
        assert not hasattr(errors, "classify_failure")
