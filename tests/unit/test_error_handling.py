import logging

import pytest

from credential_lifecycle.errors import (
    CredentialsMissing,
    InternalError,
    IssuanceFailed,
    NetworkError,
    ValidationFailed,
    categorize_error,
    log_error,
)
from credential_lifecycle.logging_config import format_structured_error


@pytest.mark.parametrize(
    ("error", "category"),
    [
        (CredentialsMissing("x"), "config"),
        (IssuanceFailed("x", status=500), "issuance"),
        (ValidationFailed("x", status=401), "validation"),
        (NetworkError("x"), "network"),
        (TimeoutError(), "network"),
        (InternalError("x"), "internal"),
        (RuntimeError("x"), "unknown"),
    ],
)
def test_categorize_error(error, category):
    assert categorize_error(error) == category


def test_internal_error_copies_data():
    data = {"a": 1}
    err = InternalError("msg", data=data)
    data["a"] = 2

    assert err.data == {"a": 1}


def test_issuance_failed_exposes_status_and_payload():
    err = IssuanceFailed("rejected", status=401, payload={"error": "nope"})

    assert err.status == 401
    assert err.payload == {"error": "nope"}
    assert err.data["status"] == 401


def test_log_error_includes_error_data(caplog):
    caplog.set_level(logging.WARNING)

    log_error(
        "Token generation failed",
        IssuanceFailed("rejected", status=403),
        context={"trigger": "manual"},
        level=logging.WARNING,
    )

    assert "[ISSUANCE] Token generation failed: rejected" in caplog.text
    assert "status=403" in caplog.text
    assert "trigger=manual" in caplog.text
    assert "payload=" not in caplog.text


def test_log_error_uses_unknown_category_for_foreign_errors(caplog):
    log_error("Token rotation error", RuntimeError("kaboom"), context={"trigger": "scheduled"})

    assert "[UNKNOWN] Token rotation error: kaboom" in caplog.text
    assert "Exception: RuntimeError: kaboom" in caplog.text


def test_format_structured_error_without_extras():
    assert format_structured_error("config", "missing") == "[CONFIG] missing"
