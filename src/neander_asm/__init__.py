"""
Neander Assembler - Toolchain for the Neander 8-bit CPU
=======================================================

Neander is a minimal accumulator machine used to teach computer
architecture: an 8-bit accumulator, an 8-bit program counter, 256 bytes of
memory and eleven instructions. This package assembles Neander source into
the `.mem` memory image the simulator loads.

Main Components
---------------
- **assembler**: Two-pass assembler (ndrasm)
    Converts assembly source files (.asm) to memory images (.mem)

- **image**: Memory image handling
    Builds, writes, reads and validates 516-byte `.mem` files

Quick Start
-----------
Assemble a program:
    >>> from neander_asm import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("sum.asm")
    >>> asm.write_mem("output.mem")

Inspect an image:
    >>> from neander_asm import MemImage
    >>> image = MemImage.from_file("output.mem")
    >>> image.cells[:4]
    [32, 128, 48, 129]

Or use the command-line tool:
    $ ndrasm sum.asm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from neander_asm.assembler import Assembler
from neander_asm.errors import (
    NeanderError,
    AssemblerError,
    MissingOperandError,
    InvalidNumberError,
    UnknownInstructionError,
    UndefinedLabelError,
    ImageError,
    ImageWriteError,
    ImageOverflowError,
    ImageFormatError,
)
from neander_asm.image import (
    MemImage,
    MEM_MAGIC,
    MEM_SIZE,
    CELL_COUNT,
    DEFAULT_OUTPUT,
    build_image,
    write_image,
    validate_mem,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    # Memory image
    "MemImage",
    "MEM_MAGIC",
    "MEM_SIZE",
    "CELL_COUNT",
    "DEFAULT_OUTPUT",
    "build_image",
    "write_image",
    "validate_mem",
    # Exception hierarchy
    "NeanderError",
    "AssemblerError",
    "MissingOperandError",
    "InvalidNumberError",
    "UnknownInstructionError",
    "UndefinedLabelError",
    "ImageError",
    "ImageWriteError",
    "ImageOverflowError",
    "ImageFormatError",
]
