"""
CLI commands for proving touches.

Reads touches in the text format (one row per line, the last line being the
leftover change) and reports whether they are true.
"""

import json
from pathlib import Path
from typing import Optional

import click

from bellproof.config import config
from bellproof.core.errors import BellproofError
from bellproof.logging import get_bellproof_logger, initialize_logging
from bellproof.proving.canon import CANONS, get_canon
from bellproof.proving.report import prove_touch
from bellproof.touch.touch import Touch


@click.group()
def cli():
    """Touch proving CLI."""
    pass


@cli.command()
@click.argument("touch_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--canon",
    type=click.Choice(list(CANONS)),
    default=None,
    help="Row equivalence to prove under (default from configuration)",
)
@click.option(
    "--prover",
    type=click.Choice(["auto", "naive", "hash", "compact"]),
    default=None,
    help="Prover to use (default from configuration)",
)
@click.option(
    "--full/--quick",
    default=True,
    help="Report every falseness group, or stop at the first repeated row",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.option("--log-level", default=None, help="Log level (e.g. DEBUG)")
def prove(
    touch_file: str,
    canon: Optional[str],
    prover: Optional[str],
    full: bool,
    as_json: bool,
    log_level: Optional[str],
):
    """
    Prove a touch file.

    Exits with status 0 if the touch is true and 1 if it is false.

    Example:
        python -m bellproof.cli.prove prove touch.txt --canon full-cyclic
    """
    initialize_logging(level=log_level)
    log = get_bellproof_logger("cli")

    try:
        touch = Touch.from_str(Path(touch_file).read_text())
        log.debug(f"Loaded {touch_file}", rows=touch.length(), stage=touch.stage())
        report = prove_touch(
            touch,
            canon=get_canon(canon or config.proving.default_canon),
            prover=prover,
            full=full,
        )
    except BellproofError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        click.echo(report.format())

    if not report.is_true:
        raise SystemExit(1)


@cli.command("config")
def show_config():
    """Show the effective proving configuration."""
    click.echo(json.dumps(config.model_dump(), indent=2))


if __name__ == "__main__":
    cli()
