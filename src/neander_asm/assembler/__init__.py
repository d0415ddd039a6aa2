"""
Neander Assembler
=================

This package turns Neander assembly source into a 516-byte memory image.

Main Components
---------------
- **Assembler**: Orchestrates the full pipeline
- **Lexer**: Splits source into typed tokens
- **CodeGenerator**: Runs pass 1 (labels) and pass 2 (cells)
- **OPCODE_TABLE / DIRECTIVE_TABLE**: Fixed, read-only lookup tables

Assembly Process
----------------
1. **Tokenizing (Lexer)**: source text -> flat token sequence
2. **Pass 1**: simulate the 8-bit PC, bind labels
3. **Pass 2**: emit one 2-byte cell per value using the frozen label table
4. **Image writing**: header + cells + zero padding

Example Usage
-------------
>>> from neander_asm.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_string("NOP")
b'\\x00\\x00'
"""

from neander_asm.assembler.assembler import Assembler, assemble, assemble_file
from neander_asm.assembler.lexer import Lexer, Token, TokenType, tokenize
from neander_asm.assembler.codegen import CodeGenerator, Label
from neander_asm.assembler.opcodes import (
    OPCODE_TABLE,
    DIRECTIVE_TABLE,
    MNEMONICS,
    DIRECTIVES,
    get_opcode,
    is_directive,
    parse_number,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    # Code generator
    "CodeGenerator",
    "Label",
    # Tables
    "OPCODE_TABLE",
    "DIRECTIVE_TABLE",
    "MNEMONICS",
    "DIRECTIVES",
    "get_opcode",
    "is_directive",
    "parse_number",
]
