#!/usr/bin/env python3
"""
Key and Prefix Rotation Example
===============================

Rotating in a new key (or prefix) keeps every string issued before the
rotation valid, while new strings use the new key. ``inspect()`` reports
which key matched, so old strings can be re-issued lazily.

Usage:
    python rotation_demo.py
"""

from signedstrings import Signer, SignerConfig, generate_key


def main():
    print("=== Rotation Demo ===\n")

    config_v1 = SignerConfig(keys=(generate_key(),), prefixes=("sess1_",))
    signer_v1 = Signer(config_v1)
    old_token = signer_v1.sign("alice")
    print(f"📜 Issued before rotation: {old_token}")

    # Rotate both the key and the label
    config_v2 = config_v1.with_rotated_key(generate_key()).with_rotated_prefix("sess2_")
    signer_v2 = Signer(config_v2)
    print(f"🔄 Rotated: {config_v2}")

    new_token = signer_v2.sign("alice")
    print(f"📜 Issued after rotation:  {new_token}")

    for token in (old_token, new_token):
        result = signer_v2.inspect(token)
        action = "re-issue" if result.needs_resign else "keep"
        print(
            f"✅ payload={result.payload!r} key_index={result.key_index} "
            f"prefix={result.prefix!r} -> {action}"
        )
        if result.needs_resign:
            print(f"   ↪ {signer_v2.sign(result.payload)}")

    # Retiring the old key invalidates the old token
    retired = Signer(SignerConfig(keys=config_v2.keys[:1], prefixes=config_v2.prefixes))
    print(f"\n🗑️  After retiring the old key, old token valid: {retired.verify(old_token)}")


if __name__ == "__main__":
    main()
