"""Boundary to the external circom compiler."""
from __future__ import annotations

import subprocess
from pathlib import Path

from r1cs_core.errors import CompilationFailed, CompilerNotFound

OPT_LEVELS = ("O0", "O1", "O2")
DEFAULT_OPT_LEVEL = "O1"
DEFAULT_CIRCOM = "circom"


def r1cs_path_for(source: Path) -> Path:
    """circom writes ``<stem>.r1cs`` next to the source when ``-o`` is its directory."""
    source = Path(source)
    return source.parent / f"{source.stem}.r1cs"


def circom_command(source: Path, level: str, binary: str = DEFAULT_CIRCOM) -> list[str]:
    if level not in OPT_LEVELS:
        raise ValueError(f"Unknown optimization level {level!r}")
    source = Path(source)
    return [binary, str(source), "--r1cs", f"--{level}", "-o", str(source.parent)]


def compile_circuit(source: Path, level: str = DEFAULT_OPT_LEVEL, binary: str = DEFAULT_CIRCOM) -> Path:
    """Run circom on ``source`` and return the path of the container it should have written.

    The container's existence is left for the caller to check.
    """
    cmd = circom_command(source, level, binary)
    try:
        proc = subprocess.run(cmd, check=False, capture_output=True, text=True)
    except FileNotFoundError:
        raise CompilerNotFound(binary) from None
    if proc.returncode != 0:
        raise CompilationFailed(proc.returncode, proc.stderr)
    return r1cs_path_for(source)
