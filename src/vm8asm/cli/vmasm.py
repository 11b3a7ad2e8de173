"""
vmasm - VM8 Assembler Command-Line Interface
============================================

This module implements the command-line interface for the VM8 assembler.

Usage Examples
--------------
Basic assembly:
    $ vmasm -in loop.asm -out loop.bin

Generate listing and symbol files:
    $ vmasm -in loop.asm -out loop.bin -l loop.lst -s loop.sym

Treat symbol redefinition and address-space overflow as errors:
    $ vmasm --strict -in loop.asm -out loop.bin

Verbose mode:
    $ vmasm -v -in loop.asm -out loop.bin
"""

from dataclasses import replace
from pathlib import Path
from typing import Optional
import logging

import click

from vm8asm import __version__
from vm8asm.assembler import Assembler
from vm8asm.cli.errors import handle_cli_exception
from vm8asm.config import AssemblerConfig

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.option(
    "-in", "--input", "input_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Assembly source file",
)
@click.option(
    "-out", "--output", "output_file",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output binary image",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Reject duplicate symbols and address-space overflow instead of "
         "overwriting and wrapping. Default: VM8ASM_STRICT or disabled.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="vmasm")
def main(
    input_file: Path,
    output_file: Path,
    listing: Optional[Path],
    symbols: Optional[Path],
    strict: Optional[bool],
    verbose: bool,
) -> None:
    """
    Assemble VM8 source code into a raw binary image.

    \b
    Examples:
        vmasm -in loop.asm -out loop.bin
        vmasm -in loop.asm -out loop.bin -l loop.lst
    """
    setup_logging(verbose)

    config = AssemblerConfig.from_env()
    if strict is not None:
        config = replace(config, strict=strict)

    asm = Assembler(config=config, verbose=verbose)

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        try:
            asm.assemble_file(input_file)
        except UnicodeDecodeError as e:
            raise click.BadParameter(
                f"'{input_file}' is not a UTF-8 text file ({e.reason})",
                param_hint="'-in'",
            ) from e

        report = asm.get_size_report()
        click.echo(str(report))
        click.echo("Saving to file...")
        asm.write_binary(output_file)

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if verbose:
            click.echo(f"Defined {len(asm.get_symbols())} symbols")
            click.echo(
                f"Data region: {report.variables} variable(s) "
                f"from ${config.data_start:02X}"
            )

        click.echo("Done")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
