"""Closed-form constraint counts for the lattice signature verification circuit.

Each level fixes a ring dimension ``n`` and a squared-norm bound ``beta``.
The count splits into the coefficient range checks, one term per ring
coefficient for the public-key product, and the final norm comparison.
"""
from __future__ import annotations

from typing import NamedTuple

from .errors import ConstraintCountMismatch, UnsupportedSecurityLevel

RANGE_CHECK_BOUND = 4096


class SecurityParameterSet(NamedTuple):
    level: int
    n: int
    beta: int


SECURITY_LEVELS = {
    1: SecurityParameterSet(level=1, n=512, beta=34034726),
    5: SecurityParameterSet(level=5, n=1024, beta=70265242),
}


class ConstraintEstimate(NamedTuple):
    range_check: int
    proof_term: int
    norm_check: int

    @property
    def total(self) -> int:
        return self.range_check + self.proof_term + self.norm_check


def security_parameters(level: int) -> SecurityParameterSet:
    # bool is an int subclass; True must not select level 1.
    if isinstance(level, bool) or level not in SECURITY_LEVELS:
        raise UnsupportedSecurityLevel(level)
    return SECURITY_LEVELS[level]


def estimate_breakdown(level: int) -> ConstraintEstimate:
    params = security_parameters(level)
    n, beta = params.n, params.beta
    return ConstraintEstimate(
        range_check=2 * n * RANGE_CHECK_BOUND.bit_length(),
        proof_term=n,
        norm_check=2 * n + 1 + beta.bit_length() + 1,
    )


def estimate_constraints(level: int) -> int:
    """Expected constraint count of the circuit at ``level`` (1 or 5)."""
    return estimate_breakdown(level).total


def check_constraint_count(declared: int, level: int) -> int:
    """Return the estimate for ``level``; raise if ``declared`` differs from it."""
    expected = estimate_constraints(level)
    if declared != expected:
        raise ConstraintCountMismatch(level, expected, declared)
    return expected
