import hashlib
from pathlib import Path

from r1cs_core.errors import ConstraintCountMismatch, FormatError, ParameterError
from r1cs_core.params import check_constraint_count

from .const import ERRORS
from .reader import LAYOUT_TABLE, R1CSFile


def _fail(errors: list, **extra) -> dict:
    return {"status": "FAIL", "error_count": len(errors), "errors": errors, **extra}


def _error(exc) -> dict:
    return {"code": exc.code, "message": ERRORS.get(exc.code, exc.code), "detail": str(exc)}


def verify_container(
    data: bytes,
    layout: str = LAYOUT_TABLE,
    security_level: int | None = None,
    strict_wires: bool = False,
) -> dict:
    """Decode every section and constraint of ``data`` and report PASS or FAIL.

    Format and parameter problems never escape as exceptions; they come back
    as coded entries in ``errors``.
    """
    errors = []
    base = {"sha256": hashlib.sha256(data).hexdigest(), "size": len(data)}

    try:
        r1cs = R1CSFile.from_bytes(data, layout=layout, strict_wires=strict_wires)
    except FormatError as e:
        errors.append(_error(e))
        return _fail(errors, **base)

    base["header"] = r1cs.header.as_dict()
    base["sections"] = [
        {"type": s.type, "name": s.name, "offset": s.offset, "size": s.size}
        for s in r1cs.sections
    ]

    decoded = 0
    try:
        for _ in r1cs.constraints:
            decoded += 1
    except FormatError as e:
        err = _error(e)
        err["constraint"] = decoded
        errors.append(err)
        return _fail(errors, **base)
    base["decoded_constraints"] = decoded

    if security_level is not None:
        try:
            check_constraint_count(r1cs.header.n_constraints, security_level)
        except ConstraintCountMismatch as e:
            err = _error(e)
            err.update(security_level=e.level, expected=e.expected, declared=e.declared)
            errors.append(err)
            return _fail(errors, **base)
        except ParameterError as e:
            errors.append(_error(e))
            return _fail(errors, **base)

    return {"status": "PASS", "error_count": 0, "errors": [], **base}


def verify_file(path: Path, **kwargs) -> dict:
    return verify_container(Path(path).read_bytes(), **kwargs)
