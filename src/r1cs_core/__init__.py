"""R1CS Core - field arithmetic, canonical rendering and size estimates."""
from .canonical import CanonicalForm, factor_leading_sign, render_constraint
from .field import normalize
from .params import estimate_constraints

__all__ = [
    "CanonicalForm",
    "factor_leading_sign",
    "render_constraint",
    "normalize",
    "estimate_constraints",
]
