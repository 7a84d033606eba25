"""
Command-line interface for signedstrings.

Usage:
    python -m signedstrings genkey
    SIGNEDSTRINGS_KEYS=<hex> python -m signedstrings sign --prefix TOKEN- foo
    python -m signedstrings validate --keys <hex>,<old hex> --prefix TOKEN- TOKEN-foo-...

Exit status is 0 on success, 1 when validation fails and 2 on usage or
configuration errors.
"""

import argparse
import logging
import os
import sys
from typing import List, Mapping, Optional

from .config import ENV_PREFIX, SignerConfig, create_signer_config, load_config_from_env
from .error_handling import (
    InvalidSignatureError,
    MalformedError,
    SignerConfigurationError,
)
from .keys import DEFAULT_KEY_LENGTH, Keys, generate_key
from .signer import Signer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="signedstrings",
        description="Sign and validate tamper-evident strings.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ring = argparse.ArgumentParser(add_help=False)
    ring.add_argument(
        "--keys",
        type=Keys.parse,
        help=f"hex keys separated by commas or spaces (default: ${ENV_PREFIX}KEYS)",
    )
    ring.add_argument(
        "--prefix",
        dest="prefixes",
        action="append",
        help="accepted prefix, first one signs; repeatable "
        f"(default: ${ENV_PREFIX}PREFIXES)",
    )
    ring.add_argument(
        "--separator", help=f"payload/authenticator separator (default: ${ENV_PREFIX}SEPARATOR or '-')"
    )

    sign = subparsers.add_parser("sign", parents=[ring], help="sign a payload")
    sign.add_argument("payload")

    validate = subparsers.add_parser(
        "validate", parents=[ring], help="validate a signed string, print its payload"
    )
    validate.add_argument("signed")

    genkey = subparsers.add_parser("genkey", help="generate a random hex key")
    genkey.add_argument("--length", type=int, default=DEFAULT_KEY_LENGTH)

    return parser


def resolve_config(
    args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None
) -> SignerConfig:
    """Combine command-line options with environment defaults; options win."""
    if environ is None:
        environ = os.environ

    if args.keys is None:
        config = load_config_from_env(environ)
        keys = config.keys
        prefixes = config.prefixes
        separator = config.separator
    else:
        keys = args.keys
        prefixes_text = environ.get(f"{ENV_PREFIX}PREFIXES")
        prefixes = prefixes_text.split(",") if prefixes_text is not None else None
        separator = environ.get(f"{ENV_PREFIX}SEPARATOR")

    return create_signer_config(
        keys,
        prefixes=args.prefixes if args.prefixes else prefixes,
        separator=args.separator if args.separator else separator,
    )


def main(
    argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None
) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    if args.command == "genkey":
        try:
            print(generate_key(args.length).hex())
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            return EXIT_USAGE
        return EXIT_OK

    try:
        signer = Signer(resolve_config(args, environ))
    except SignerConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.command == "sign":
        print(signer.sign(args.payload))
        return EXIT_OK

    try:
        print(signer.validate(args.signed))
    except MalformedError as e:
        print(f"malformed: {e}", file=sys.stderr)
        return EXIT_INVALID
    except InvalidSignatureError as e:
        print(f"signature invalid: {e}", file=sys.stderr)
        return EXIT_INVALID
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
