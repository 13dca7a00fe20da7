import json
from contextlib import ExitStack
from pathlib import Path

import click

from r1cs_core.errors import R1CSError
from r1cs_core.params import estimate_breakdown, security_parameters

from .logic import verify_file
from .reader import LAYOUT_TABLE, LAYOUTS, load_r1cs
from .report import format_r1cs

LAYOUT_OPTION = click.option(
    "--layout",
    type=click.Choice(LAYOUTS),
    default=LAYOUT_TABLE,
    show_default=True,
    help="Section table up front, or circom's interleaved section entries",
)


@click.group()
def main():
    pass


@main.command("parse")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@LAYOUT_OPTION
@click.option("-l", "--log", is_flag=True, help="Write output to <path>.log instead of stdout/stderr")
def parse_cmd(path: Path, layout: str, log: bool):
    """Print header details and every rendered constraint."""
    with ExitStack() as stack:
        log_file = None

        def echo(message: str = "", err: bool = False) -> None:
            click.echo(message, file=log_file, err=err)

        try:
            if log:
                log_file = stack.enter_context(open(path.with_suffix(".log"), "w", encoding="utf-8"))
            for line in format_r1cs(load_r1cs(path, layout=layout)):
                echo(line)
        except (R1CSError, OSError) as e:
            echo(f"FATAL: {e}", err=True)
            raise SystemExit(1)


@main.command("check")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@LAYOUT_OPTION
@click.option("--level", "security_level", type=int, default=None, help="Cross-check the constraint count for this security level")
@click.option("--strict-wires", is_flag=True, help="Reject wire indices beyond the declared wire count")
def check_cmd(path: Path, layout: str, security_level: int | None, strict_wires: bool):
    result = verify_file(path, layout=layout, security_level=security_level, strict_wires=strict_wires)
    click.echo(json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    if result["status"] != "PASS":
        raise SystemExit(1)


@main.command("estimate")
@click.argument("level", type=int)
def estimate_cmd(level: int):
    try:
        params = security_parameters(level)
        est = estimate_breakdown(level)
    except R1CSError as e:
        click.echo(f"FATAL: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"Security level {level}: n={params.n}, beta={params.beta}")
    click.echo(f"  Range checks: {est.range_check}")
    click.echo(f"  Proof term: {est.proof_term}")
    click.echo(f"  Norm check: {est.norm_check}")
    click.echo(f"  Total: {est.total}")


if __name__ == "__main__":
    main()
