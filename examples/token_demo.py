#!/usr/bin/env python3
"""
Signed Token Example
====================

Shows signing a value, reading it back, and what happens with garbage or
tampered input.

Usage:
    python token_demo.py
"""

from signedstrings import (
    InvalidSignatureError,
    MalformedError,
    create_signer,
    generate_key,
)


def main():
    """Demonstrate signing and validating tokens."""

    print("=== Signed Token Demo ===\n")

    signer = create_signer([generate_key()], prefixes="TOKEN-")

    token = signer.sign("user:42")
    print(f"🔐 Signed:    {token}")
    print(f"✅ Validated: {signer.validate(token)}")

    # Payloads may contain the separator and the prefix text
    tricky = signer.sign("TOKEN-a-b-c")
    print(f"✅ Tricky:    {signer.validate(tricky)}")

    print("\n🚫 Rejections:")
    for label, candidate in [
        ("empty string", ""),
        ("missing prefix", token[len("TOKEN-"):]),
        ("tampered payload", token.replace("user:42", "user:43")),
        ("tampered authenticator", token[:-1] + ("0" if token[-1] != "0" else "1")),
    ]:
        try:
            signer.validate(candidate)
            print(f"   {label:24} accepted?!")
        except MalformedError as e:
            print(f"   {label:24} malformed ({e})")
        except InvalidSignatureError as e:
            print(f"   {label:24} bad signature ({e})")


if __name__ == "__main__":
    main()
