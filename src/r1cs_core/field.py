"""Balanced representatives for prime-field residues."""
from __future__ import annotations


def normalize(coeff: int, prime: int) -> int:
    """Map a residue in [0, prime) to its representative in (-prime/2, prime/2]."""
    if coeff > prime // 2:
        return coeff - prime
    return coeff


def from_bytes_le(raw) -> int:
    return int.from_bytes(raw, "little", signed=False)


def to_bytes_le(value: int, width: int) -> bytes:
    return int(value).to_bytes(width, "little", signed=False)
