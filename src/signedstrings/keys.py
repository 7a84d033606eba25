"""
Key Ring Parsing and Generation
===============================

Key rings travel through configuration as text: a list of hex-encoded keys
separated by commas and/or whitespace, for example::

    787653b737a07fa0 d5d73e9d64076e18,,,81b5a01659b74a84

The first key is the active signing key, the rest are still accepted when
validating, which is how keys are rotated without invalidating strings that
were signed earlier.
"""

import logging
import re
import secrets
from typing import Iterable

from .error_handling import KeyDecodeError

logger = logging.getLogger(__name__)

# HMAC-SHA256 block-size-friendly default for newly generated keys
DEFAULT_KEY_LENGTH = 32

_KEY_SEPARATORS = re.compile(r"[\s,]+")


def parse_keys(text: str) -> "Keys":
    """
    Parse a comma or whitespace separated list of hex-encoded keys.

    Consecutive separators collapse and empty tokens are skipped, so an empty
    string yields an empty ring.

    Args:
        text: Key ring text

    Returns:
        Keys in the order they appear in ``text``

    Raises:
        KeyDecodeError: If a token is not valid hex
    """
    keys = []
    for position, token in enumerate(t for t in _KEY_SEPARATORS.split(text) if t):
        try:
            keys.append(bytes.fromhex(token))
        except ValueError as e:
            raise KeyDecodeError(position, len(token), str(e)) from e

    logger.debug(f"Parsed key ring with {len(keys)} key(s)")
    return Keys(keys)


def generate_key(length: int = DEFAULT_KEY_LENGTH) -> bytes:
    """Generate a new random signing key."""
    if length <= 0:
        raise ValueError("key length must be positive")
    return secrets.token_bytes(length)


class Keys(tuple):
    """
    Immutable ordered key ring.

    ``str()`` renders the ring in the same text format ``parse_keys`` reads,
    so a ring can be written back to a config file or environment variable.
    ``repr()`` never shows key material.
    """

    def __new__(cls, keys: Iterable[bytes] = ()):
        return super().__new__(cls, (bytes(k) for k in keys))

    @classmethod
    def parse(cls, text: str) -> "Keys":
        """Parse key ring text; usable directly as an ``argparse`` ``type=``."""
        return parse_keys(text)

    def __str__(self) -> str:
        return " ".join(k.hex() for k in self)

    def __repr__(self) -> str:
        lengths = ", ".join(str(len(k)) for k in self)
        return f"Keys(<{len(self)} key(s), lengths=[{lengths}]>)"
