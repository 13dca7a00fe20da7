"""R1CS Inspect - compile a circom source and dump the resulting constraint system."""
from __future__ import annotations

import time
from contextlib import ExitStack
from pathlib import Path

import click

from r1cs_core.errors import CompilationFailed, R1CSError
from r1cs_core.params import check_constraint_count
from r1cs_verify.reader import LAYOUT_INTERLEAVED, LAYOUTS, load_r1cs
from r1cs_verify.report import format_r1cs

from r1cs_compile.circom import DEFAULT_CIRCOM, DEFAULT_OPT_LEVEL, compile_circuit
from r1cs_compile.export import write_constraint_table

DEFAULT_SOURCE = "circuits/test.circom"


def select_level(o0: bool, o1: bool, o2: bool) -> str:
    chosen = [name for name, flag in (("O0", o0), ("O1", o1), ("O2", o2)) if flag]
    if len(chosen) > 1:
        raise click.UsageError("--O0, --O1 and --O2 are mutually exclusive")
    return chosen[0] if chosen else DEFAULT_OPT_LEVEL


def run(
    source: Path,
    level: str,
    echo,
    circom: str = DEFAULT_CIRCOM,
    layout: str = LAYOUT_INTERLEAVED,
    export: Path | None = None,
    security_level: int | None = None,
) -> None:
    """Compile ``source``, then print the decoded container."""
    if not source.exists():
        raise FileNotFoundError(f"Circom source not found: {source}")

    echo("=== Compiling Circom File ===")
    echo("")
    echo(f"Compiling {source} with optimization {level}...")
    start = time.perf_counter()
    try:
        r1cs_path = compile_circuit(source, level, binary=circom)
    except CompilationFailed as e:
        echo("Error during circom compilation:", err=True)
        echo(e.stderr.rstrip(), err=True)
        raise
    echo(f"Compilation successful in {time.perf_counter() - start:.2f}s.")
    echo("")

    if not r1cs_path.exists():
        raise FileNotFoundError(f"Could not open R1CS file: {r1cs_path}")

    r1cs = load_r1cs(r1cs_path, layout=layout)
    for line in format_r1cs(r1cs):
        echo(line)

    if export is not None:
        rows = write_constraint_table(r1cs, export)
        echo(f"Exported {rows} constraints to {export}")

    if security_level is not None:
        expected = check_constraint_count(r1cs.header.n_constraints, security_level)
        echo(f"Estimated constraints for level {security_level}: {expected}")


@click.command()
@click.argument("source", type=click.Path(path_type=Path), default=DEFAULT_SOURCE)
@click.option("--O0", "o0", is_flag=True, help="No simplification")
@click.option("--O1", "o1", is_flag=True, help="Signal-to-signal and signal-to-constant simplification (default)")
@click.option("--O2", "o2", is_flag=True, help="Full constraint simplification")
@click.option("-l", "--log", is_flag=True, help="Write output to <source>.log instead of stdout/stderr")
@click.option("--export", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write the constraint table to this Parquet file")
@click.option("--level", "security_level", type=int, default=None, help="Cross-check the constraint count for this security level")
@click.option("--layout", type=click.Choice(LAYOUTS), default=LAYOUT_INTERLEAVED, show_default=True)
@click.option("--circom", default=DEFAULT_CIRCOM, envvar="R1CS_CIRCOM", show_default=True, help="circom binary to run")
def main(
    source: Path,
    o0: bool,
    o1: bool,
    o2: bool,
    log: bool,
    export: Path | None,
    security_level: int | None,
    layout: str,
    circom: str,
) -> None:
    """Compile a circom source and parse the resulting R1CS container."""
    level = select_level(o0, o1, o2)

    with ExitStack() as stack:
        log_file = None

        def echo(message: str = "", err: bool = False) -> None:
            click.echo(message, file=log_file, err=err)

        try:
            if log:
                log_file = stack.enter_context(open(source.with_suffix(".log"), "w", encoding="utf-8"))
            run(source, level, echo, circom=circom, layout=layout, export=export, security_level=security_level)
        except (R1CSError, OSError) as e:
            # Fail closed, with a single-line reason.
            echo(f"FATAL: {e}", err=True)
            raise SystemExit(1)


if __name__ == "__main__":
    main()
