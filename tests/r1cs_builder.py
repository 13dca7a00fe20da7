"""Pack R1CS containers for tests."""
from __future__ import annotations

import struct

from r1cs_core.field import to_bytes_le
from r1cs_core.protocol import (
    HEADER_COUNTS_FMT,
    MAGIC,
    PREAMBLE_FMT,
    SECTION_CONSTRAINTS,
    SECTION_ENTRY_FMT,
    SECTION_HEADER,
    SECTION_WIRE2LABEL,
    VERSION,
)

BN254_PRIME = 21888242871839275222246405745257275088548364400416034343698204186575808495617
SMALL_PRIME = 101


def header_payload(
    prime: int,
    field_size: int = 32,
    n_wires: int = 4,
    n_pub_out: int = 1,
    n_pub_in: int = 1,
    n_prv_in: int = 1,
    n_labels: int = 4,
    n_constraints: int = 0,
) -> bytes:
    return (
        struct.pack("<I", field_size)
        + to_bytes_le(prime, field_size)
        + struct.pack(HEADER_COUNTS_FMT, n_wires, n_pub_out, n_pub_in, n_prv_in, n_labels, n_constraints)
    )


def lc_payload(terms, field_size: int = 32) -> bytes:
    out = struct.pack("<I", len(terms))
    for wire, coeff in terms:
        out += struct.pack("<I", wire) + to_bytes_le(coeff, field_size)
    return out


def constraints_payload(constraints, field_size: int = 32) -> bytes:
    return b"".join(
        lc_payload(a, field_size) + lc_payload(b, field_size) + lc_payload(c, field_size)
        for a, b, c in constraints
    )


def wire_map_payload(labels) -> bytes:
    return struct.pack(f"<{len(labels)}Q", *labels)


def container(sections, version: int = VERSION, magic: bytes = MAGIC, layout: str = "table") -> bytes:
    """``sections`` is a list of (type, payload)."""
    out = struct.pack(PREAMBLE_FMT, magic, version, len(sections))
    if layout == "table":
        for sec_type, payload in sections:
            out += struct.pack(SECTION_ENTRY_FMT, sec_type, len(payload))
        for _, payload in sections:
            out += payload
    else:
        for sec_type, payload in sections:
            out += struct.pack(SECTION_ENTRY_FMT, sec_type, len(payload)) + payload
    return out


def r1cs_bytes(
    constraints,
    prime: int = BN254_PRIME,
    field_size: int = 32,
    n_wires: int = 4,
    wire_map=None,
    layout: str = "table",
    **counts,
) -> bytes:
    sections = [
        (SECTION_HEADER, header_payload(prime, field_size, n_wires=n_wires, n_constraints=len(constraints), **counts)),
        (SECTION_CONSTRAINTS, constraints_payload(constraints, field_size)),
    ]
    if wire_map is not None:
        sections.append((SECTION_WIRE2LABEL, wire_map_payload(wire_map)))
    return container(sections, layout=layout)


# x1 * x2 = x3, and 2*x1 - x2 - 1 = 0 written as (1)(2*x1 - x2 - 1) = 0
SAMPLE_CONSTRAINTS = [
    ([(1, 1)], [(2, 1)], [(3, 1)]),
    ([(0, 1)], [(1, 2), (2, BN254_PRIME - 1), (0, BN254_PRIME - 1)], []),
]
