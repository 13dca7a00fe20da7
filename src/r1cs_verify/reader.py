"""R1CS container decoder.

The whole container is held in memory once; every section, header and
constraint record is decoded straight out of a ``memoryview`` over it, so no
section's bytes are ever copied. Constraints are decoded lazily.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, NamedTuple
from warnings import warn

from r1cs_core.canonical import CanonicalForm, factor_leading_sign, render_constraint
from r1cs_core.errors import (
    BadMagic,
    BadWireMap,
    CoefficientOutOfRange,
    HeaderSizeMismatch,
    MissingSection,
    SectionCountMismatch,
    SectionSizeMismatch,
    Truncated,
    UnsupportedVersion,
    WireOutOfRange,
)
from r1cs_core.field import from_bytes_le
from r1cs_core.protocol import (
    HEADER_COUNTS_FMT,
    HEADER_COUNTS_LEN,
    HEADER_FIXED_LEN,
    LABEL_LEN,
    MAGIC,
    SECTION_CONSTRAINTS,
    SECTION_ENTRY_FMT,
    SECTION_ENTRY_LEN,
    SECTION_HEADER,
    SECTION_NAMES,
    SECTION_WIRE2LABEL,
    VERSION,
)

# Section table up front, payloads after it.
LAYOUT_TABLE = "table"
# circom's own writer: each (type, size) entry directly precedes its payload.
LAYOUT_INTERLEAVED = "interleaved"
LAYOUTS = (LAYOUT_TABLE, LAYOUT_INTERLEAVED)


class Cursor:
    """Forward-only little-endian reader over ``buf[start:end]``."""

    def __init__(self, buf, start: int = 0, end: int | None = None):
        self._buf = buf if isinstance(buf, memoryview) else memoryview(buf)
        self.pos = start
        self.end = len(self._buf) if end is None else end

    @property
    def remaining(self) -> int:
        return self.end - self.pos

    def _require(self, n: int, what: str) -> None:
        if n > self.remaining:
            raise Truncated(self.pos, n, self.remaining, what)

    def unpack(self, fmt: str, size: int, what: str) -> tuple:
        self._require(size, what)
        values = struct.unpack_from(fmt, self._buf, self.pos)
        self.pos += size
        return values

    def read_u32(self, what: str = "u32") -> int:
        return self.unpack("<I", 4, what)[0]

    def read_u64(self, what: str = "u64") -> int:
        return self.unpack("<Q", 8, what)[0]

    def read_bytes(self, n: int, what: str = "bytes") -> memoryview:
        self._require(n, what)
        view = self._buf[self.pos:self.pos + n]
        self.pos += n
        return view

    def read_field(self, width: int, what: str = "field element") -> int:
        """Unsigned little-endian integer exactly ``width`` bytes wide."""
        return from_bytes_le(self.read_bytes(width, what))

    def skip(self, n: int, what: str = "bytes") -> None:
        self._require(n, what)
        self.pos += n


@dataclass(frozen=True)
class Section:
    type: int
    size: int
    offset: int

    @property
    def end(self) -> int:
        return self.offset + self.size

    @property
    def name(self) -> str:
        return SECTION_NAMES.get(self.type, f"unknown({self.type})")

    def cursor(self, buf) -> Cursor:
        return Cursor(buf, self.offset, self.end)


@dataclass(frozen=True)
class SectionTable:
    version: int
    sections: tuple[Section, ...]

    def __len__(self) -> int:
        return len(self.sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def find(self, section_type: int) -> Section | None:
        """First section with ``section_type`` in table order; later duplicates are ignored."""
        for section in self.sections:
            if section.type == section_type:
                return section
        return None

    def require(self, section_type: int) -> Section:
        section = self.find(section_type)
        if section is None:
            raise MissingSection(section_type, SECTION_NAMES.get(section_type, "unknown"))
        return section


def read_section_table(buf, layout: str = LAYOUT_TABLE) -> SectionTable:
    """Decode magic, version and the section list.

    Section sizes are checked against the buffer: a section running past the
    end is a short read, unclaimed trailing bytes are a count mismatch.
    Overlap is not checked; offsets come from running accumulation.
    """
    if layout not in LAYOUTS:
        raise ValueError(f"Unknown section layout {layout!r}")

    cur = Cursor(buf)
    magic = cur.read_bytes(len(MAGIC), "magic")
    if bytes(magic) != MAGIC:
        raise BadMagic(magic)

    version = cur.read_u32("version")
    if version != VERSION:
        raise UnsupportedVersion(version)

    n_sections = cur.read_u32("section count")

    sections: list[Section] = []
    if layout == LAYOUT_TABLE:
        entries = [
            cur.unpack(SECTION_ENTRY_FMT, SECTION_ENTRY_LEN, f"section table entry {i}")
            for i in range(n_sections)
        ]
        offset = cur.pos
        for sec_type, size in entries:
            if size > cur.end - offset:
                raise Truncated(offset, size, cur.end - offset, f"section type {sec_type}")
            sections.append(Section(sec_type, size, offset))
            offset += size
    else:
        for i in range(n_sections):
            sec_type, size = cur.unpack(SECTION_ENTRY_FMT, SECTION_ENTRY_LEN, f"section entry {i}")
            offset = cur.pos
            cur.skip(size, f"section type {sec_type}")
            sections.append(Section(sec_type, size, offset))
        offset = cur.pos

    if offset != cur.end:
        raise SectionCountMismatch(
            f"{cur.end - offset} unclaimed bytes after {n_sections} sections at offset {offset}"
        )

    seen: set[int] = set()
    for section in sections:
        if section.type in seen:
            warn(f"Duplicate {section.name} section at offset {section.offset} ignored")
        seen.add(section.type)

    return SectionTable(version, tuple(sections))


@dataclass(frozen=True)
class Header:
    field_size: int
    prime: int
    n_wires: int
    n_pub_out: int
    n_pub_in: int
    n_prv_in: int
    n_labels: int
    n_constraints: int

    @property
    def public_output_indices(self) -> range:
        return range(1, 1 + self.n_pub_out)

    @property
    def public_input_indices(self) -> range:
        start = 1 + self.n_pub_out
        return range(start, start + self.n_pub_in)

    def as_dict(self) -> dict:
        return {
            "field_size": self.field_size,
            "prime": str(self.prime),
            "n_wires": self.n_wires,
            "n_pub_out": self.n_pub_out,
            "n_pub_in": self.n_pub_in,
            "n_prv_in": self.n_prv_in,
            "n_labels": self.n_labels,
            "n_constraints": self.n_constraints,
        }


def read_header(buf, section: Section) -> Header:
    cur = section.cursor(buf)
    field_size = cur.read_u32("field size")
    prime = cur.read_field(field_size, "prime")
    n_wires, n_pub_out, n_pub_in, n_prv_in, n_labels, n_constraints = cur.unpack(
        HEADER_COUNTS_FMT, HEADER_COUNTS_LEN, "header counts"
    )
    if section.size != HEADER_FIXED_LEN + field_size:
        raise HeaderSizeMismatch(
            f"Invalid header section size {section.size}, expected {HEADER_FIXED_LEN + field_size}"
        )
    return Header(
        field_size=field_size,
        prime=prime,
        n_wires=n_wires,
        n_pub_out=n_pub_out,
        n_pub_in=n_pub_in,
        n_prv_in=n_prv_in,
        n_labels=n_labels,
        n_constraints=n_constraints,
    )


def read_wire_map(buf, section: Section, header: Header) -> tuple[int, ...]:
    expected = header.n_wires * LABEL_LEN
    if section.size != expected:
        raise SectionSizeMismatch(
            f"Invalid wire map section size {section.size}, expected {expected}"
        )
    cur = section.cursor(buf)
    labels = cur.unpack(f"<{header.n_wires}Q", expected, "wire map")
    if labels and labels[0] != 0:
        raise BadWireMap(f"Wire 0 should always be mapped to 0, found {labels[0]}")
    return labels


class Constraint(NamedTuple):
    """A*B = C, each side a tuple of (wire, coeff) in encounter order."""

    a: tuple
    b: tuple
    c: tuple

    def canonical(self, prime: int) -> tuple[CanonicalForm, CanonicalForm, CanonicalForm]:
        return (
            factor_leading_sign(self.a, prime),
            factor_leading_sign(self.b, prime),
            factor_leading_sign(self.c, prime),
        )

    def render(self, prime: int) -> str:
        return render_constraint(*self.canonical(prime))


class ConstraintStream:
    """Lazy, restartable view of the constraints section.

    Each iteration decodes exactly ``header.n_constraints`` records from the
    section's byte range and yields them one at a time.
    """

    def __init__(self, buf, section: Section, header: Header, strict_wires: bool = False):
        self._buf = buf if isinstance(buf, memoryview) else memoryview(buf)
        self.section = section
        self.header = header
        self.strict_wires = strict_wires
        self._term_len = 4 + header.field_size

    def __len__(self) -> int:
        return self.header.n_constraints

    def __iter__(self) -> Iterator[Constraint]:
        cur = self.section.cursor(self._buf)
        for _ in range(self.header.n_constraints):
            yield self._read_constraint(cur)
        self._check_exhausted(cur)

    def rendered(self) -> Iterator[str]:
        prime = self.header.prime
        for constraint in self:
            yield constraint.render(prime)

    def offsets(self) -> list[int]:
        """Index pass: absolute offset of every constraint record."""
        cur = self.section.cursor(self._buf)
        out = []
        for _ in range(self.header.n_constraints):
            out.append(cur.pos)
            for side in "ABC":
                count = cur.read_u32(f"{side} term count")
                cur.skip(count * self._term_len, f"{side} terms")
        self._check_exhausted(cur)
        return out

    def decode_at(self, offset: int) -> Constraint:
        if not self.section.offset <= offset < self.section.end:
            raise ValueError(f"Offset {offset} outside the constraints section")
        return self._read_constraint(Cursor(self._buf, offset, self.section.end))

    def _check_exhausted(self, cur: Cursor) -> None:
        if cur.remaining:
            raise SectionCountMismatch(
                f"{cur.remaining} bytes left in constraints section after "
                f"{self.header.n_constraints} constraints"
            )

    def _read_constraint(self, cur: Cursor) -> Constraint:
        return Constraint(
            self._read_lc(cur, "A"),
            self._read_lc(cur, "B"),
            self._read_lc(cur, "C"),
        )

    def _read_lc(self, cur: Cursor, side: str) -> tuple:
        count = cur.read_u32(f"{side} term count")
        # Reject a bogus count before looping over it.
        if count * self._term_len > cur.remaining:
            raise Truncated(cur.pos, count * self._term_len, cur.remaining, f"{side} terms")

        width = self.header.field_size
        prime = self.header.prime
        terms = []
        for _ in range(count):
            wire = cur.read_u32("wire index")
            coeff = cur.read_field(width, "coefficient")
            if coeff >= prime:
                raise CoefficientOutOfRange(
                    f"Coefficient {coeff} of wire {wire} at offset {cur.pos - width} is not below the prime"
                )
            if self.strict_wires and wire >= self.header.n_wires:
                raise WireOutOfRange(
                    f"Wire {wire} at offset {cur.pos - width - 4} exceeds wire count {self.header.n_wires}"
                )
            terms.append((wire, coeff))
        return tuple(terms)


@dataclass
class R1CSFile:
    sections: SectionTable
    header: Header
    constraints: ConstraintStream
    wire_map: tuple[int, ...] | None = None

    @property
    def version(self) -> int:
        return self.sections.version

    @classmethod
    def from_bytes(
        cls,
        data,
        layout: str = LAYOUT_TABLE,
        strict_wires: bool = False,
    ) -> "R1CSFile":
        buf = memoryview(data)
        table = read_section_table(buf, layout)
        header = read_header(buf, table.require(SECTION_HEADER))
        constraints = ConstraintStream(
            buf, table.require(SECTION_CONSTRAINTS), header, strict_wires=strict_wires
        )
        wire_section = table.find(SECTION_WIRE2LABEL)
        wire_map = read_wire_map(buf, wire_section, header) if wire_section else None
        return cls(table, header, constraints, wire_map)


def load_r1cs(path: str | Path, layout: str = LAYOUT_TABLE, strict_wires: bool = False) -> R1CSFile:
    return R1CSFile.from_bytes(Path(path).read_bytes(), layout=layout, strict_wires=strict_wires)
