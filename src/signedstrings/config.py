"""
Configuration Management for signedstrings
==========================================

A ``SignerConfig`` bundles the key ring, the prefix ring and the separator.
It is built once, validated on construction and never mutated afterwards, so
a single instance can be shared by every thread that signs or validates.

Configurations can be created directly, or loaded from a dict, a JSON file
or environment variables.
"""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

import orjson

from .error_handling import SignerConfigurationError
from .keys import Keys, parse_keys

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "-"
DEFAULT_PREFIXES: Tuple[str, ...] = ("",)

# Shorter keys are accepted but flagged
RECOMMENDED_KEY_LENGTH = 32

ENV_PREFIX = "SIGNEDSTRINGS_"

# Authenticators are lowercase hex
HEX_DIGITS = frozenset("0123456789abcdef")

KeysLike = Union[str, Iterable[bytes]]


@dataclass(frozen=True)
class SignerConfig:
    """
    Immutable signer configuration.

    Attributes:
        keys: Key ring. ``keys[0]`` signs, every key validates.
        prefixes: Prefix ring. ``prefixes[0]`` is attached to new strings,
            every prefix is accepted on validation. Defaults to a single
            empty prefix.
        separator: Delimiter between the framed payload and the
            authenticator. Defaults to ``"-"``.
    """

    keys: Tuple[bytes, ...]
    prefixes: Tuple[str, ...] = DEFAULT_PREFIXES
    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self):
        """Normalize the rings and validate the configuration."""
        keys = _normalize_keys(self.keys)
        prefixes = _normalize_prefixes(self.prefixes)

        separator = self.separator
        if separator is None or separator == "":
            separator = DEFAULT_SEPARATOR
        elif not isinstance(separator, str):
            raise SignerConfigurationError(
                "separator must be a string",
                {"separator_type": type(separator).__name__},
            )
        elif set(separator) <= HEX_DIGITS:
            logger.warning(
                f"Separator {separator!r} consists of hex digits and can occur "
                "inside an authenticator; signed strings will not validate"
            )

        # frozen dataclass: normalized values are written back once, here
        object.__setattr__(self, "keys", keys)
        object.__setattr__(self, "prefixes", prefixes)
        object.__setattr__(self, "separator", separator)

        logger.debug(
            f"Signer configured: keys={len(keys)}, prefixes={list(prefixes)}, "
            f"separator={separator!r}"
        )

    @property
    def signing_key(self) -> bytes:
        return self.keys[0]

    @property
    def signing_prefix(self) -> str:
        return self.prefixes[0]

    def with_rotated_key(self, key: bytes) -> "SignerConfig":
        """Return a copy whose active signing key is ``key``; old keys keep validating."""
        key = bytes(key)
        return replace(self, keys=(key,) + tuple(k for k in self.keys if k != key))

    def with_rotated_prefix(self, prefix: str) -> "SignerConfig":
        """Return a copy whose active signing prefix is ``prefix``; old prefixes keep validating."""
        return replace(
            self, prefixes=(prefix,) + tuple(p for p in self.prefixes if p != prefix)
        )

    def to_dict(self, include_keys: bool = False) -> Dict[str, Any]:
        """
        Describe the configuration.

        Key material is only included when ``include_keys`` is set; otherwise
        the ring is reported by size.
        """
        data: Dict[str, Any] = {
            "prefixes": list(self.prefixes),
            "separator": self.separator,
        }
        if include_keys:
            data["keys"] = str(Keys(self.keys))
        else:
            data["key_count"] = len(self.keys)
        return data

    def __repr__(self) -> str:
        return (
            f"SignerConfig(keys=<{len(self.keys)} key(s)>, "
            f"prefixes={self.prefixes!r}, separator={self.separator!r})"
        )


def _normalize_keys(keys: Any) -> Tuple[bytes, ...]:
    if keys is None:
        raise SignerConfigurationError("signer not configured: key ring is empty")
    if isinstance(keys, (bytes, bytearray, str)):
        raise SignerConfigurationError(
            "keys must be a sequence of byte strings, not a single value; "
            "use parse_keys() for key ring text",
            {"keys_type": type(keys).__name__},
        )

    keys = _as_tuple(keys, "keys")

    normalized = []
    for index, key in enumerate(keys):
        if not isinstance(key, (bytes, bytearray, memoryview)):
            raise SignerConfigurationError(
                "signing keys must be bytes",
                {"index": index, "key_type": type(key).__name__},
            )
        key = bytes(key)
        if len(key) == 0:
            raise SignerConfigurationError("empty signing key", {"index": index})
        if len(key) < RECOMMENDED_KEY_LENGTH:
            logger.warning(
                f"Signing key at index {index} is {len(key)} bytes, "
                f"{RECOMMENDED_KEY_LENGTH} or more is recommended"
            )
        normalized.append(key)

    if not normalized:
        raise SignerConfigurationError("signer not configured: key ring is empty")
    return tuple(normalized)


def _normalize_prefixes(prefixes: Any) -> Tuple[str, ...]:
    if prefixes is None:
        return DEFAULT_PREFIXES
    if isinstance(prefixes, str):
        prefixes = (prefixes,)

    normalized = _as_tuple(prefixes, "prefixes")
    for index, prefix in enumerate(normalized):
        if not isinstance(prefix, str):
            raise SignerConfigurationError(
                "prefixes must be strings",
                {"index": index, "prefix_type": type(prefix).__name__},
            )
    return normalized or DEFAULT_PREFIXES


def _as_tuple(value: Any, field_name: str) -> tuple:
    try:
        return tuple(value)
    except TypeError as e:
        raise SignerConfigurationError(
            f"{field_name} must be a sequence, got {type(value).__name__}",
            {"field": field_name, "value_type": type(value).__name__},
        ) from e


def _coerce_keys(keys: KeysLike) -> Sequence[bytes]:
    if isinstance(keys, str):
        return parse_keys(keys)
    if isinstance(keys, (bytes, bytearray)):
        # rejected with a clear message by SignerConfig
        return keys
    keys = _as_tuple(keys, "keys")
    if all(isinstance(k, str) for k in keys):
        return [k for item in keys for k in parse_keys(item)]
    return keys


def create_signer_config(
    keys: KeysLike,
    prefixes: Optional[Union[str, Sequence[str]]] = None,
    separator: Optional[str] = None,
) -> SignerConfig:
    """
    Factory function for creating configurations with convenience parameters.

    Args:
        keys: Key ring text (hex, comma/whitespace separated), a list of such
            strings, or a sequence of byte strings
        prefixes: A single prefix or a prefix ring
        separator: Separator between payload and authenticator

    Returns:
        Validated SignerConfig instance
    """
    return SignerConfig(
        keys=_coerce_keys(keys),
        prefixes=prefixes,
        separator=separator,
    )


def load_config_from_dict(data: Mapping[str, Any]) -> SignerConfig:
    """
    Build a configuration from a plain mapping.

    Recognized keys are ``keys`` (key ring text or a list of hex strings),
    ``prefixes`` (a list or a single string) and ``separator``. Unknown keys
    are ignored with a warning.
    """
    known = {"keys", "prefixes", "separator"}
    for key in data:
        if key not in known:
            logger.warning(f"Unknown configuration parameter ignored: {key}")

    if not data.get("keys"):
        raise SignerConfigurationError("signer not configured: key ring is empty")

    return create_signer_config(
        keys=data["keys"],
        prefixes=data.get("prefixes"),
        separator=data.get("separator"),
    )


def load_config_from_json(path: Union[str, Path]) -> SignerConfig:
    """Load a configuration from a JSON file."""
    path = Path(path)
    try:
        data = orjson.loads(path.read_bytes())
    except OSError as e:
        raise SignerConfigurationError(
            f"Cannot read configuration file: {e}", {"path": str(path)}
        ) from e
    except orjson.JSONDecodeError as e:
        raise SignerConfigurationError(
            f"Invalid JSON in configuration file: {e}", {"path": str(path)}
        ) from e

    if not isinstance(data, dict):
        raise SignerConfigurationError(
            "Configuration file must contain a JSON object", {"path": str(path)}
        )

    logger.info(f"Loaded signer configuration from {path}")
    return load_config_from_dict(data)


def load_config_from_env(
    environ: Optional[Mapping[str, str]] = None, prefix: str = ENV_PREFIX
) -> SignerConfig:
    """
    Load a configuration from environment variables.

    Reads ``<prefix>KEYS`` (key ring text), ``<prefix>PREFIXES`` and
    ``<prefix>SEPARATOR``. Prefixes are comma separated and empty entries are
    kept, so ``"TOKEN-,"`` accepts both ``TOKEN-`` and unprefixed strings.
    """
    if environ is None:
        environ = os.environ

    keys_text = environ.get(f"{prefix}KEYS", "")
    if not keys_text.strip():
        raise SignerConfigurationError(
            "signer not configured: key ring is empty",
            {"variable": f"{prefix}KEYS"},
        )

    prefixes_text = environ.get(f"{prefix}PREFIXES")
    prefixes = prefixes_text.split(",") if prefixes_text is not None else None

    return create_signer_config(
        keys=keys_text,
        prefixes=prefixes,
        separator=environ.get(f"{prefix}SEPARATOR"),
    )
