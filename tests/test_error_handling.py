"""
Tests for the error_handling module.

This module tests:
- Exception hierarchy and messages
- Logging levels of each error kind
- The signing_operation_context context manager
"""

import logging

import pytest

from signedstrings.error_handling import (
    InvalidSignatureError,
    KeyDecodeError,
    MalformedError,
    SignedStringError,
    SignerConfigurationError,
    ValidationError,
    signing_operation_context,
)


class TestErrorHierarchy:
    """Test the exception hierarchy."""

    def test_base_initialization(self):
        error = SignedStringError("Test message")
        assert str(error) == "Test message"
        assert error.context == {}

        context = {"key1": "value1", "key2": 42}
        error = SignedStringError("Test message", context)
        assert error.context == context

    def test_validation_kinds(self):
        for error_type in (MalformedError, InvalidSignatureError):
            error = error_type()
            assert isinstance(error, ValidationError)
            assert isinstance(error, SignedStringError)

    def test_default_messages(self):
        assert str(MalformedError()) == "invalid string"
        assert str(InvalidSignatureError()) == "invalid signature"

    def test_kinds_are_distinct(self):
        assert not issubclass(MalformedError, InvalidSignatureError)
        assert not issubclass(InvalidSignatureError, MalformedError)

    def test_configuration_errors_outside_validation(self):
        assert not issubclass(SignerConfigurationError, ValidationError)
        assert not issubclass(KeyDecodeError, ValidationError)

    def test_key_decode_error(self):
        error = KeyDecodeError(3, 65, "bad digit")
        assert isinstance(error, ValueError)
        assert isinstance(error, SignerConfigurationError)
        assert error.position == 3
        assert error.length == 65
        assert error.context == {"position": 3, "length": 65}
        assert str(error) == "invalid hex key at position 3 (65 chars): bad digit"


class TestErrorLogging:
    """Each error kind logs itself at its own level."""

    def test_configuration_error_logs_error(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="signedstrings.error_handling"):
            SignerConfigurationError("empty signing key", {"index": 1})

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert "empty signing key" in record.getMessage()
        assert "index=1" in record.getMessage()

    def test_invalid_signature_logs_warning(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="signedstrings.error_handling"):
            InvalidSignatureError()
        assert caplog.records[-1].levelno == logging.WARNING

    def test_malformed_logs_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="signedstrings.error_handling"):
            MalformedError()
        assert caplog.records[-1].levelno == logging.DEBUG

    def test_malformed_silent_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="signedstrings.error_handling"):
            MalformedError()
        assert caplog.records == []


class TestSigningOperationContext:
    """Test the signing_operation_context context manager."""

    def test_success_logs_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="signedstrings.error_handling"):
            with signing_operation_context("test_op", payload_length=3):
                pass

        messages = [r.getMessage() for r in caplog.records]
        assert "Starting signing operation: test_op" in messages
        assert any("Signing operation completed: test_op" in m for m in messages)

    def test_validation_errors_pass_through_quietly(self, caplog):
        with caplog.at_level(logging.ERROR, logger="signedstrings.error_handling"):
            with pytest.raises(MalformedError):
                with signing_operation_context("test_op"):
                    raise MalformedError()
        assert caplog.records == []

    def test_unexpected_errors_logged_and_reraised(self, caplog):
        with caplog.at_level(logging.ERROR, logger="signedstrings.error_handling"):
            with pytest.raises(RuntimeError, match="boom"):
                with signing_operation_context("test_op"):
                    raise RuntimeError("boom")
        assert "Unexpected error in signing operation: test_op - boom" in caplog.text
