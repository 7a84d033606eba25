"""
signedstrings - Tamper-evident strings with HMAC-SHA256, key rotation and prefixes.

A signed string is the original payload with a label in front and an
authenticator at the end. Anyone holding one of the keys can recover the
payload and be sure it was not altered.

Key Features:
- Deterministic HMAC-SHA256 authenticators, compared in constant time
- Key ring rotation: the first key signs, every key validates
- Prefix ring rotation: the first prefix is attached, every prefix is accepted
- Distinct errors for malformed input and bad signatures
- Key rings configurable as hex text, from JSON files or the environment

Quick Start:
    >>> from signedstrings import create_signer
    >>>
    >>> signer = create_signer([b"hello world"], prefixes="TOKEN-")
    >>> token = signer.sign("foo")
    >>> token
    'TOKEN-foo-1c54d5a9d70312670528e4046ccdad77d97dcd2bcccdc161f25dd63dd7c97a1e'
    >>> signer.validate(token)
    'foo'
"""

from .config import (
    SignerConfig,
    create_signer_config,
    load_config_from_dict,
    load_config_from_env,
    load_config_from_json,
)
from .error_handling import (
    InvalidSignatureError,
    KeyDecodeError,
    MalformedError,
    SignedStringError,
    SignerConfigurationError,
    ValidationError,
)
from .keys import Keys, generate_key, parse_keys
from .signer import Signer, ValidationResult, create_signer

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "Signer",
    "SignerConfig",
    "ValidationResult",
    "create_signer",
    "create_signer_config",
    # Configuration loaders
    "load_config_from_dict",
    "load_config_from_env",
    "load_config_from_json",
    # Key rings
    "Keys",
    "parse_keys",
    "generate_key",
    # Errors
    "SignedStringError",
    "SignerConfigurationError",
    "KeyDecodeError",
    "ValidationError",
    "MalformedError",
    "InvalidSignatureError",
    # Version info
    "__version__",
]
