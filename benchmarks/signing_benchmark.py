#!/usr/bin/env python3
"""
Signing Benchmark
=================

Benchmark the cost of signing and validating signed strings.

Signer uses HMAC-SHA256 over prefix + payload. Validation tries the keys of
the ring in order, so strings signed with an old key cost one HMAC per key
ahead of it.

Measures:
  - Raw sign / validate micro-cost
  - Rejection cost for malformed and tampered input
  - Impact of payload length
  - Impact of key ring position on validating old strings
"""

import logging
import time

from signedstrings import InvalidSignatureError, Signer, SignerConfig, generate_key

# Suppress signature failure warnings during benchmarks
logging.getLogger("signedstrings").setLevel(logging.ERROR)


# ── Helpers ──────────────────────────────────────────────────────────────────


def time_op(func, iterations: int = 100) -> float:
    """Return average ms per call."""
    for _ in range(min(5, iterations)):
        func()
    start = time.perf_counter()
    for _ in range(iterations):
        func()
    return ((time.perf_counter() - start) / iterations) * 1000


def expect_invalid(signer, signed):
    try:
        signer.validate(signed)
    except InvalidSignatureError:
        pass


# ── Benchmarks ───────────────────────────────────────────────────────────────


def benchmark_raw_sign_validate():
    """Micro-benchmark of sign and validate alone."""
    print("\n🔐 Raw sign / validate Micro-Benchmark")
    print("-" * 60)

    signer = Signer(SignerConfig(keys=(generate_key(),), prefixes=("TOKEN-",)))
    payload = "user:42:session:abcdef"

    sign_t = time_op(lambda: signer.sign(payload), iterations=20000)
    signed = signer.sign(payload)
    validate_t = time_op(lambda: signer.validate(signed), iterations=20000)

    tampered = signed[:-1] + ("0" if signed[-1] != "0" else "1")
    invalid_t = time_op(lambda: expect_invalid(signer, tampered), iterations=20000)

    print(f"  sign:                {sign_t * 1000:8.2f} μs")
    print(f"  validate (valid):    {validate_t * 1000:8.2f} μs")
    print(f"  validate (tampered): {invalid_t * 1000:8.2f} μs")
    print(f"  Signed length:       {len(signed)} chars")


def benchmark_payload_length():
    """Measure how payload length affects sign and validate time."""
    print("\n📊 Payload Length Impact")
    print("-" * 60)

    signer = Signer(SignerConfig(keys=(generate_key(),)))

    print(f"  {'Length':>8} {'Sign μs':>10} {'Validate μs':>12}")
    print("  " + "-" * 32)

    for length in [16, 256, 4096, 65536]:
        payload = "x" * length
        signed = signer.sign(payload)
        sign_t = time_op(lambda: signer.sign(payload), iterations=2000)
        validate_t = time_op(lambda: signer.validate(signed), iterations=2000)
        print(f"  {length:>8} {sign_t * 1000:10.2f} {validate_t * 1000:12.2f}")


def benchmark_key_ring_position():
    """Validating strings signed by keys deeper in the ring."""
    print("\n🔄 Key Ring Position Impact")
    print("-" * 60)

    ring = tuple(generate_key() for _ in range(8))
    signer = Signer(SignerConfig(keys=ring))

    print(f"  {'Index':>8} {'Validate μs':>12}")
    print("  " + "-" * 22)

    for index in range(len(ring)):
        signed = Signer(SignerConfig(keys=(ring[index],))).sign("payload")
        validate_t = time_op(lambda: signer.validate(signed), iterations=5000)
        print(f"  {index:>8} {validate_t * 1000:12.2f}")

    bogus = "payload-" + "0" * 64
    invalid_t = time_op(lambda: expect_invalid(signer, bogus), iterations=5000)
    print(f"  {'no match':>8} {invalid_t * 1000:12.2f}")


if __name__ == "__main__":
    print("=" * 60)
    print("signedstrings Signing Benchmark")
    print("=" * 60)
    benchmark_raw_sign_validate()
    benchmark_payload_length()
    benchmark_key_ring_position()
