"""
Standardized Error Handling for signedstrings
=============================================

This module defines the exception hierarchy and the logging helpers shared by
the signer, the key ring parser and the configuration loaders.

There are two families of errors:

- Configuration errors (``SignerConfigurationError`` and its subclass
  ``KeyDecodeError``) are deployment mistakes. They are raised as soon as
  the mistake is detected and are not meant to be caught by request-handling
  code.
- Validation errors (``MalformedError``, ``InvalidSignatureError``) are the
  normal outcome of feeding garbage or tampered input to ``Signer.validate``.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class SignedStringError(Exception):
    """Base exception for all signedstrings errors."""

    log_level = logging.ERROR

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.context = context or {}
        super().__init__(message)

        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        logger.log(
            self.log_level,
            f"{type(self).__name__}: {message}"
            + (f" ({context_str})" if context_str else ""),
        )


class SignerConfigurationError(SignedStringError):
    """Raised when the key ring, prefix ring or separator is unusable."""

    pass


class KeyDecodeError(SignerConfigurationError, ValueError):
    """
    Raised when a key ring string contains a token that is not valid hex.

    The token is identified by its position in the ring and its length only;
    a mistyped key is still key material and never ends up in the message.
    """

    def __init__(self, position: int, length: int, reason: str):
        self.position = position
        self.length = length
        super().__init__(
            f"invalid hex key at position {position} ({length} chars): {reason}",
            {"position": position, "length": length},
        )


class ValidationError(SignedStringError):
    """Base class for signed strings that fail validation."""

    default_message = "validation failed"

    def __init__(
        self, message: Optional[str] = None, context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message or self.default_message, context)


class MalformedError(ValidationError):
    """The input is not framed as a signed string produced by this scheme."""

    log_level = logging.DEBUG
    default_message = "invalid string"


class InvalidSignatureError(ValidationError):
    """The input is well framed but no configured key reproduces its authenticator."""

    log_level = logging.WARNING
    default_message = "invalid signature"


@contextmanager
def signing_operation_context(operation: str, **context):
    """
    Context manager for signer operations with standardized logging.

    Validation errors are expected outcomes and pass through quietly; any
    other exception is logged before being re-raised.

    Args:
        operation: Description of the operation
        **context: Additional context for logging
    """
    logger.debug(f"Starting signing operation: {operation}", extra=context)
    start_time = time.perf_counter()

    try:
        yield
    except ValidationError:
        raise
    except SignedStringError:
        logger.error(f"Signing operation failed: {operation}", extra=context)
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error in signing operation: {operation} - {e}", extra=context
        )
        raise
    else:
        duration = time.perf_counter() - start_time
        logger.debug(
            f"Signing operation completed: {operation} ({duration * 1e6:.1f}us)",
            extra=context,
        )
