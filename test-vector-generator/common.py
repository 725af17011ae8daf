"""
Common utilities for test vector generation.
Provides deterministic payloads and an independent bit-field oracle.
"""
import hashlib
import numpy as np
from typing import List


def make_rng(seed: int) -> np.random.Generator:
    """Create a seeded generator for reproducible payloads."""
    return np.random.default_rng(seed)


def random_payload(rng: np.random.Generator, length: int) -> bytes:
    """Draw length random bytes."""
    return bytes(rng.integers(0, 256, length, dtype=np.uint8))


def payload_bits(payload: bytes) -> np.ndarray:
    """Unpack a payload into its bit stream, LSB of byte 0 first."""
    return np.unpackbits(np.frombuffer(payload, dtype=np.uint8), bitorder="little")


def expected_fields(payload: bytes, widths: List[int], natural_width: int = 64) -> List[int]:
    """
    Compute the values of consecutive LSB-first fields.

    A field wider than natural_width keeps only its first natural_width
    bits, the same truncation the decoder applies.
    """
    stream = payload_bits(payload)
    values = []
    offset = 0
    for width in widths:
        kept = stream[offset:offset + min(width, natural_width)]
        value = 0
        for i, bit in enumerate(kept):
            value |= int(bit) << i
        values.append(value)
        offset += width
    return values


def calculate_md5(data: bytes) -> str:
    """Calculate MD5 hash of data."""
    return hashlib.md5(data).hexdigest()
