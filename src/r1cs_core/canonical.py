"""Sign-factoring canonical text for linear combinations and constraints.

A linear combination prints with a non-negative leading term; the sign that
was factored out travels separately so the constraint renderer can push it
onto the right-hand side.
"""
from __future__ import annotations

from typing import Iterable, NamedTuple

from .field import normalize
from .protocol import CONSTANT_WIRE


class CanonicalForm(NamedTuple):
    sign: int
    text: str

    @property
    def is_multi_term(self) -> bool:
        return " " in self.text


ZERO = CanonicalForm(1, "0")


def _leading_term(wire: int, c: int) -> str:
    if wire == CONSTANT_WIRE:
        return "1" if c == 1 else str(c)
    if c == 1:
        return f"x{wire}"
    return f"{c}*x{wire}"


def _trailing_term(wire: int, c: int) -> str:
    op = "-" if c < 0 else "+"
    mag = -c if c < 0 else c
    if wire == CONSTANT_WIRE:
        return f"{op} {mag}"
    if mag == 1:
        return f"{op} x{wire}"
    return f"{op} {mag}*x{wire}"


def factor_leading_sign(terms: Iterable[tuple[int, int]], prime: int) -> CanonicalForm:
    """Render ``terms`` so the first coefficient is non-negative.

    ``terms`` is a sequence of ``(wire, coeff)`` with ``coeff`` in [0, prime).
    Duplicate wires are rendered as they come, not merged.
    """
    terms = tuple(terms)
    if not terms:
        return ZERO

    sign = -1 if normalize(terms[0][1], prime) < 0 else 1

    parts = []
    for i, (wire, coeff) in enumerate(terms):
        c = normalize(coeff, prime) * sign
        parts.append(_leading_term(wire, c) if i == 0 else _trailing_term(wire, c))
    return CanonicalForm(sign, " ".join(parts))


def _wrap(form: CanonicalForm) -> str:
    return f"({form.text})" if form.is_multi_term else form.text


def render_constraint(a: CanonicalForm, b: CanonicalForm, c: CanonicalForm) -> str:
    """Print ``A * B = C`` with every factored sign moved onto C.

    (sA*A)(sB*B) = sC*C rearranges to A*B = (sA*sB*sC)*C.
    """
    if a.text == "0" or b.text == "0":
        return f"{c.text} = 0"

    total_sign = a.sign * b.sign * c.sign
    rhs = c.text
    if total_sign < 0:
        if c.is_multi_term:
            rhs = f"-({c.text})"
        elif c.text != "0":
            rhs = f"-{c.text}"
    return f"{_wrap(a)} * {_wrap(b)} = {rhs}"

