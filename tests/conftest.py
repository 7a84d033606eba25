"""
Shared fixtures for signedstrings tests.
"""

import pytest

from signedstrings import Signer, SignerConfig

# Key and authenticators from the reference examples
HELLO_KEY = b"hello world"
TOKEN_FOO_AUTH = "1c54d5a9d70312670528e4046ccdad77d97dcd2bcccdc161f25dd63dd7c97a1e"
PLAIN_TEXT_AUTH = "3fa50b5e152cc7eeb37bd0f9e9e4bb61ee3c31939e97f020fb154f3a01cfd441"

STRONG_KEY = bytes(range(32))
OLD_KEY = bytes(range(100, 132))


@pytest.fixture
def token_signer():
    """Signer with the reference key and a TOKEN- prefix."""
    return Signer(SignerConfig(keys=(HELLO_KEY,), prefixes=("TOKEN-",)))


@pytest.fixture
def plain_signer():
    """Signer with the reference key, no prefix and a ' :: ' separator."""
    return Signer(SignerConfig(keys=(HELLO_KEY,), separator=" :: "))


@pytest.fixture
def strong_config():
    """Configuration with a full-length key and default framing."""
    return SignerConfig(keys=(STRONG_KEY,))
