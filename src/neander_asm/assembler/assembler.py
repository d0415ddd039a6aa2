"""
Neander Assembler - Main Interface
==================================

This module provides the Assembler class, the primary interface for
turning Neander assembly source into a memory image. It coordinates the
lexer, the two-pass code generator and the image writer.

Example Usage
-------------
>>> from neander_asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
...     LDA 0x80
...     ADD 0x81
...     STA 0x82
...     HLT
... ''')
>>> code = asm.get_code()
>>> print(f"Generated {len(code)} bytes")
Generated 14 bytes
>>> asm.write_mem("output.mem")

Command-Line Usage
------------------
    $ ndrasm program.asm
    $ ndrasm program.asm -o program.mem -v
"""

from pathlib import Path
import logging

from neander_asm.assembler.codegen import CodeGenerator
from neander_asm.assembler.lexer import Lexer
from neander_asm.errors import AssemblerError
from neander_asm.image import DEFAULT_OUTPUT, build_image, write_image

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main Neander assembler class.

    Each assemble_* call runs the full pipeline from scratch:
    tokenize, pass 1, pass 2. Results stay available until the next call.

    Attributes:
        verbose: If True, log progress at INFO instead of DEBUG
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize the assembler.

        Args:
            verbose: Report pipeline progress at INFO level
        """
        self._verbose = verbose
        self._codegen = CodeGenerator()
        self._assembled = False

    def _progress(self, message: str) -> None:
        logger.log(logging.INFO if self._verbose else logging.DEBUG, message)

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> bytes:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            The output buffer (memory cells without the image header)

        Raises:
            AssemblerError: If assembly fails
        """
        lexer = Lexer(source, filename)
        tokens = tuple(lexer.tokenize())
        self._progress(f"Tokenized {filename}: {len(tokens)} tokens")

        self._assembled = False
        self._codegen = CodeGenerator(source_lines=source.splitlines())
        code = self._codegen.generate(tokens)
        self._assembled = True

        self._progress(f"Generated {len(code)} bytes of code")
        return code

    def assemble_file(self, filepath: str | Path) -> bytes:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            The output buffer

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._assembled = False

        self._progress(f"Assembling {filepath}...")
        source = filepath.read_text()
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> bytes:
        """Get the output buffer from the last assembly."""
        return self._codegen.get_code()

    def has_output(self) -> bool:
        """Check if the last assembly succeeded and left code to write."""
        return self._assembled

    def get_image(self) -> bytes:
        """
        Get the full 516-byte memory image for the last assembly.

        Raises:
            AssemblerError: If the last assembly failed or none was run
            ImageOverflowError: If the program does not fit
        """
        self._require_output()
        return build_image(self.get_code())

    def get_symbols(self) -> dict[str, int]:
        """
        Get the label table.

        Returns:
            Dictionary mapping label names to addresses
        """
        return self._codegen.get_symbols()

    def get_pc(self) -> int:
        """Get the program counter value left by pass 1."""
        return self._codegen.get_pc()

    def write_mem(self, filepath: str | Path = DEFAULT_OUTPUT) -> None:
        """
        Write the memory image file.

        Args:
            filepath: Output file path (default: output.mem)

        Raises:
            AssemblerError: If the last assembly failed or none was run
            ImageOverflowError: If the program does not fit
            ImageWriteError: If the file cannot be written
        """
        self._require_output()
        write_image(self.get_code(), filepath)
        self._progress(f"Wrote {filepath}")

    def _require_output(self) -> None:
        if not self._assembled:
            raise AssemblerError("no successful assembly to write")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> bytes:
    """
    Convenience function to assemble source code.

    Returns:
        The output buffer (memory cells without the image header)

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler().assemble_string(source, filename)


def assemble_file(filepath: str | Path, output: str | Path = DEFAULT_OUTPUT) -> bytes:
    """
    Assemble a file and write its memory image.

    Nothing is written unless both passes succeed.

    Returns:
        The memory image bytes that were written
    """
    asm = Assembler()
    asm.assemble_file(filepath)
    asm.write_mem(output)
    return asm.get_image()
