import pytest

from r1cs_core.field import from_bytes_le, normalize, to_bytes_le

from r1cs_builder import BN254_PRIME, SMALL_PRIME

PRIMES = [2, 3, SMALL_PRIME, 12289, 2**61 - 1, BN254_PRIME]


def _samples(p):
    vals = {0, 1, p // 2, p // 2 + 1, p - 1}
    vals.update((p * k) // 7 for k in range(7))
    return sorted(v for v in vals if 0 <= v < p)


@pytest.mark.parametrize("p", PRIMES)
def test_normalize_is_congruent_and_balanced(p):
    for c in _samples(p):
        n = normalize(c, p)
        assert (n - c) % p == 0
        assert -p < 2 * n <= p


def test_normalize_boundary_small_prime():
    assert normalize(50, 101) == 50
    assert normalize(51, 101) == -50
    assert normalize(100, 101) == -1
    assert normalize(0, 101) == 0


def test_normalize_keeps_full_precision():
    assert normalize(BN254_PRIME - 1, BN254_PRIME) == -1
    half = BN254_PRIME // 2
    assert normalize(half, BN254_PRIME) == half
    assert normalize(half + 1, BN254_PRIME) == half + 1 - BN254_PRIME


def test_little_endian_helpers():
    raw = to_bytes_le(BN254_PRIME, 32)
    assert len(raw) == 32
    assert raw[0] == BN254_PRIME & 0xFF
    assert from_bytes_le(raw) == BN254_PRIME
