"""
ndrasm - Neander Assembler Command-Line Interface
================================================

Usage Examples
--------------
Basic assembly (writes output.mem in the current directory):
    $ ndrasm sum.asm

With output file:
    $ ndrasm sum.asm -o sum.mem

Check that an existing file is a valid memory image:
    $ ndrasm --check sum.mem

Verbose mode:
    $ ndrasm -v sum.asm

Exit Codes
----------
0 - Success
1 - Assembly or image error
2 - Invalid arguments or missing input file
3 - Internal error
"""

import logging
from pathlib import Path

import click

from neander_asm import __version__
from neander_asm.assembler import Assembler
from neander_asm.cli.errors import handle_cli_exception
from neander_asm.image import DEFAULT_OUTPUT, MemImage

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
        force=True,
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT,
    show_default=True,
    help="Output memory image file",
)
@click.option(
    "--check",
    is_flag=True,
    help="Validate INPUT_FILE as a memory image instead of assembling it",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ndrasm")
def main(input_file: Path, output: Path, check: bool, verbose: bool) -> None:
    """
    Assemble Neander source code into a memory image.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    The output is a 516-byte .mem file: the 03 4E 44 52 header followed
    by 256 two-byte memory cells. No file is written if assembly fails.

    \b
    Examples:
        ndrasm sum.asm               # Outputs output.mem
        ndrasm sum.asm -o sum.mem    # Specify output file
    """
    setup_logging(verbose)

    if check:
        try:
            image = MemImage.from_file(input_file)
        except Exception as e:
            handle_cli_exception(e, verbose=verbose, error_type="Image")
        used = sum(1 for cell in image.cells if cell)
        click.echo(f"{input_file}: valid memory image ({used} non-zero cells)")
        return

    asm = Assembler(verbose=verbose)

    try:
        asm.assemble_file(input_file)
        asm.write_mem(output)
    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")

    if verbose:
        symbols = asm.get_symbols()
        click.echo(f"Assembly complete: {len(asm.get_code())} bytes, {len(symbols)} labels")
        for name, address in sorted(symbols.items()):
            click.echo(f"  {name:20s} = ${address:02X}")

    click.echo(f"Memory image written to {output}")


if __name__ == "__main__":
    main()
