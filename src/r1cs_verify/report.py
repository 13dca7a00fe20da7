"""Human-readable dump of a decoded container."""
from __future__ import annotations

from typing import Iterator

from .reader import R1CSFile


def format_header(r1cs: R1CSFile) -> Iterator[str]:
    h = r1cs.header
    yield "=== R1CS Binary Format Parser ==="
    yield ""
    yield f"Version: {r1cs.version}"
    yield f"Number of sections: {len(r1cs.sections)}"
    yield ""
    yield "=== Header Details ==="
    yield ""
    yield f"  Field size: {h.field_size} bytes"
    yield f"  Prime (field modulus): {h.prime}"
    yield f"  Number of wires: {h.n_wires}"
    yield f"  Number of public outputs: {h.n_pub_out}"
    yield f"  Number of public inputs: {h.n_pub_in}"
    yield f"  Number of private inputs: {h.n_prv_in}"
    yield f"  Number of labels: {h.n_labels}"
    yield f"  Number of constraints: {h.n_constraints}"


def format_constraints(r1cs: R1CSFile) -> Iterator[str]:
    yield "=== Constraints Section ==="
    yield ""
    for i, text in enumerate(r1cs.constraints.rendered()):
        yield f"  Constraint {i}: {text}"


def format_r1cs(r1cs: R1CSFile) -> Iterator[str]:
    """Yield the report line by line; constraints are decoded as they are printed."""
    yield from format_header(r1cs)
    yield ""
    yield from format_constraints(r1cs)
