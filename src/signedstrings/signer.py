"""
Signed String Signing and Validation
====================================

This module appends an HMAC-SHA256 authenticator to arbitrary strings and
checks it again later.

Wire format::

    <prefix><payload><separator><64 lowercase hex chars of HMAC-SHA256>

The authenticator covers ``prefix + payload`` (the frame), never the
separator. Nothing is escaped: the payload may contain the separator or
prefix text, which is why validation splits at the *last* separator and
strips the *longest* matching prefix.

Key and prefix rotation:
- The first key in the ring signs, every key validates.
- The first prefix in the ring is attached, every prefix is accepted.

Security Model:
- Authenticators are compared with ``hmac.compare_digest``
- Output is deterministic; there is no replay protection or expiry
- Payloads are authenticated, not encrypted
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

from .config import KeysLike, SignerConfig, create_signer_config
from .error_handling import (
    InvalidSignatureError,
    MalformedError,
    ValidationError,
    signing_operation_context,
)

logger = logging.getLogger(__name__)

AUTHENTICATOR_LENGTH = hashlib.sha256().digest_size * 2


def compute_authenticator(key: bytes, message: str) -> str:
    """Return the lowercase hex HMAC-SHA256 of ``message`` under ``key``."""
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).hexdigest()


def cut_last(s: str, sep: str) -> Tuple[str, str, bool]:
    """
    Split ``s`` around the last occurrence of ``sep``.

    Returns ``(before, after, True)``, or ``(s, "", False)`` when ``sep``
    does not occur.
    """
    before, found, after = s.rpartition(sep)
    if not found:
        return s, "", False
    return before, after, True


def cut_longest_prefix(s: str, prefixes: Iterable[str]) -> Tuple[str, int]:
    """
    Strip the longest of ``prefixes`` that ``s`` starts with.

    Returns ``(remainder, index)`` where ``index`` points into ``prefixes``,
    or ``(s, -1)`` when none match. Ties go to the earliest entry.
    """
    after, index, best = s, -1, -1
    for i, prefix in enumerate(prefixes):
        if s.startswith(prefix) and len(prefix) > best:
            after, index, best = s[len(prefix):], i, len(prefix)
    return after, index


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a successful validation."""

    payload: str
    prefix: str
    key_index: int
    prefix_index: int

    @property
    def needs_resign(self) -> bool:
        """True when the string was signed with a key or prefix that is no longer active."""
        return self.key_index > 0 or self.prefix_index > 0


class Signer:
    """
    Signs strings and validates signed strings for one configuration.

    A Signer holds no state besides its configuration, so one instance can be
    shared freely between threads.
    """

    def __init__(self, config: SignerConfig):
        if not isinstance(config, SignerConfig):
            raise TypeError(
                f"config must be a SignerConfig, got {type(config).__name__}"
            )
        self.config = config

    def sign(self, payload: str) -> str:
        """
        Sign ``payload``.

        Args:
            payload: Any string, including ones that contain the separator or
                a prefix

        Returns:
            ``prefix + payload + separator + authenticator``
        """
        if not isinstance(payload, str):
            raise TypeError(f"payload must be str, got {type(payload).__name__}")

        framed = self.config.signing_prefix + payload
        auth = compute_authenticator(self.config.signing_key, framed)
        return framed + self.config.separator + auth

    def inspect(self, signed: str) -> ValidationResult:
        """
        Validate ``signed`` and report which key and prefix matched.

        Raises:
            MalformedError: The string is not framed as a signed string
            InvalidSignatureError: No configured key reproduces the authenticator
        """
        with signing_operation_context("validate", signed_length=_safe_len(signed)):
            if not isinstance(signed, str):
                raise MalformedError(
                    "invalid string", {"input_type": type(signed).__name__}
                )

            framed, auth, found = cut_last(signed, self.config.separator)
            if not found or not auth:
                raise MalformedError(
                    "invalid string", {"reason": "missing separator or authenticator"}
                )

            payload, prefix_index = cut_longest_prefix(framed, self.config.prefixes)
            if prefix_index < 0:
                raise MalformedError("invalid string", {"reason": "no matching prefix"})

            key_index = self._match_key(framed, auth)
            if key_index is None:
                raise InvalidSignatureError(
                    "invalid signature", {"key_count": len(self.config.keys)}
                )

        if key_index or prefix_index:
            logger.debug(
                f"Validated with non-active key_index={key_index}, "
                f"prefix_index={prefix_index}"
            )
        return ValidationResult(
            payload=payload,
            prefix=self.config.prefixes[prefix_index],
            key_index=key_index,
            prefix_index=prefix_index,
        )

    def validate(self, signed: str) -> str:
        """
        Validate ``signed`` and return the original payload.

        Raises:
            MalformedError: The string is not framed as a signed string
            InvalidSignatureError: No configured key reproduces the authenticator
        """
        return self.inspect(signed).payload

    def verify(self, signed: str) -> bool:
        """Return True if ``signed`` validates, False otherwise."""
        try:
            self.inspect(signed)
        except ValidationError:
            return False
        return True

    def _match_key(self, framed: str, auth: str) -> Optional[int]:
        # Authenticators have a fixed length; anything else can never match.
        if len(auth) != AUTHENTICATOR_LENGTH:
            return None

        received = auth.encode("utf-8")
        for index, key in enumerate(self.config.keys):
            expected = compute_authenticator(key, framed).encode("ascii")
            if hmac.compare_digest(expected, received):
                return index
        return None

    def __repr__(self) -> str:
        return f"Signer({self.config!r})"


def _safe_len(value) -> int:
    try:
        return len(value)
    except TypeError:
        return -1


def create_signer(
    keys: Union[KeysLike, SignerConfig],
    prefixes: Optional[Union[str, Sequence[str]]] = None,
    separator: Optional[str] = None,
) -> Signer:
    """
    Factory function to create a signer.

    Args:
        keys: Key ring text, a sequence of byte strings, or a ready SignerConfig
        prefixes: A single prefix or a prefix ring (ignored for a SignerConfig)
        separator: Separator between payload and authenticator (ignored for a
            SignerConfig)

    Returns:
        Configured Signer instance
    """
    if isinstance(keys, SignerConfig):
        return Signer(keys)
    return Signer(create_signer_config(keys, prefixes=prefixes, separator=separator))
