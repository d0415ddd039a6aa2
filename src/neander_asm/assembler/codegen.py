"""
Neander Code Generator
======================

This module turns the token sequence into Neander memory cells. It
implements a two-pass assembly process over the same immutable tokens:

Pass 1 (Label Collection)
-------------------------
- Simulate the 8-bit program counter across the whole source
- Bind every VARIABLE token to the current PC
- ORG sets the PC; DB, instructions and numbers advance it by 2

Pass 2 (Code Generation)
------------------------
- Emit one 2-byte cell per instruction, number, label and DB constant
- Resolve labels against the table frozen at the end of pass 1
- ORG only consumes its operand; it does not move the output position

Cell Encoding
-------------
Every value occupies one cell: the value byte followed by $00.

    LDA 0x80    ->  20 00 80 00
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Sequence
import difflib
import logging

from neander_asm.errors import (
    AssemblerError,
    InvalidNumberError,
    MissingOperandError,
    SourceLocation,
    UndefinedLabelError,
    UnknownInstructionError,
)
from neander_asm.assembler.lexer import Token, TokenType
from neander_asm.assembler.opcodes import (
    BYTE_MAX,
    MNEMONICS,
    get_opcode,
    parse_number,
)

logger = logging.getLogger(__name__)


# Program counter and addresses are 8 bits wide
PC_MODULUS = BYTE_MAX + 1

# Address units consumed by one emitted cell
CELL_ADVANCE = 2


# =============================================================================
# Label Table Entry
# =============================================================================

@dataclass(frozen=True)
class Label:
    """
    Label table entry.

    Attributes:
        name: Label name, as written in the source
        address: 8-bit address bound in pass 1
        location: Where the (last) binding happened
    """
    name: str
    address: int
    location: SourceLocation


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Generates Neander memory cells from a token sequence.

    The code generator maintains:
    - Program counter tracking (pass 1 only)
    - Label table (written in pass 1, read-only in pass 2)
    - Output code buffer (pass 2 only)

    Usage:
        codegen = CodeGenerator()
        code = codegen.generate(tokens)
        labels = codegen.get_symbols()
    """

    def __init__(self, source_lines: Optional[Sequence[str]] = None):
        """
        Args:
            source_lines: Source text by line, used to quote the offending
                          line in error messages
        """
        self._tokens: tuple[Token, ...] = ()
        self._pc = 0
        self._labels: dict[str, Label] = {}
        self._frozen_labels: Mapping[str, Label] = MappingProxyType({})
        self._code = bytearray()
        self._source_lines = list(source_lines or [])

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, tokens: Sequence[Token]) -> bytes:
        """
        Run both passes over a token sequence.

        Args:
            tokens: The full token sequence from the lexer

        Returns:
            The output buffer (raw cells, no image header)

        Raises:
            AssemblerError: On the first error in either pass. No labels,
                            code or PC from the failed run are kept.
        """
        self._reset()
        self._tokens = tuple(tokens)

        try:
            self._pass1()
            # The table never changes once pass 2 starts
            self._frozen_labels = MappingProxyType(dict(self._labels))
            logger.debug(
                f"Pass 1 complete: {len(self._frozen_labels)} labels, PC=${self._pc:02X}"
            )

            self._pass2()
        except AssemblerError:
            self._reset()
            raise

        logger.debug(f"Pass 2 complete: {len(self._code)} bytes")
        return bytes(self._code)

    def _reset(self) -> None:
        self._tokens = ()
        self._pc = 0
        self._labels = {}
        self._frozen_labels = MappingProxyType({})
        self._code = bytearray()

    def get_code(self) -> bytes:
        """Return the output buffer from the last generate() call."""
        return bytes(self._code)

    def get_pc(self) -> int:
        """Return the program counter as left by pass 1."""
        return self._pc

    def get_symbols(self) -> dict[str, int]:
        """
        Get the label table.

        Returns:
            Dictionary mapping label names to addresses
        """
        return {name: label.address for name, label in self._frozen_labels.items()}

    def get_labels(self) -> Mapping[str, Label]:
        """Return the read-only label table with definition locations."""
        return self._frozen_labels

    # =========================================================================
    # Pass 1: Label Collection
    # =========================================================================

    def _pass1(self) -> None:
        """
        First pass: bind labels to addresses.

        VARIABLE binds the current PC (later bindings replace earlier ones).
        INSTRUCTION, NUMBER and DB advance the PC by one cell; ORG sets it;
        DS advances it by the reserved cell count.
        """
        i = 0
        while i < len(self._tokens):
            token = self._tokens[i]

            if token.type == TokenType.VARIABLE:
                self._bind_label(token)

            elif token.type in (TokenType.INSTRUCTION, TokenType.NUMBER):
                self._advance_pc(CELL_ADVANCE)

            elif token.type == TokenType.DEFINE:
                i = self._pass1_directive(token, i)

            i += 1

    def _pass1_directive(self, directive: Token, index: int) -> int:
        """Process a directive in pass 1. Returns the index of its operand."""
        name = directive.value

        if name == "DB":
            # The literal is checked in pass 2, where it is emitted
            index, _ = self._operand(directive, index)
            self._advance_pc(CELL_ADVANCE)

        elif name == "ORG":
            index, operand = self._operand(directive, index)
            self._pc = self._number(operand) % PC_MODULUS
            logger.debug(f"ORG: PC=${self._pc:02X}")

        elif name == "DS":
            index, operand = self._operand(directive, index)
            self._advance_pc(CELL_ADVANCE * self._number(operand))

        return index

    def _bind_label(self, token: Token) -> None:
        previous = self._labels.get(token.value)
        if previous is not None and previous.address != self._pc:
            logger.debug(
                f"Label '{token.value}' rebound from ${previous.address:02X} "
                f"to ${self._pc:02X} at {token.location}"
            )
        self._labels[token.value] = Label(token.value, self._pc, token.location)

    def _advance_pc(self, amount: int) -> None:
        self._pc = (self._pc + amount) % PC_MODULUS

    # =========================================================================
    # Pass 2: Code Generation
    # =========================================================================

    def _pass2(self) -> None:
        """
        Second pass: emit cells.

        Uses only the token sequence and the frozen label table; the
        program counter from pass 1 plays no part here.
        """
        i = 0
        while i < len(self._tokens):
            token = self._tokens[i]

            if token.type == TokenType.INSTRUCTION:
                self._emit_instruction(token)

            elif token.type == TokenType.NUMBER:
                self._emit_cell(self._number(token))

            elif token.type == TokenType.VARIABLE:
                self._emit_label(token)

            elif token.type == TokenType.DEFINE:
                i = self._pass2_directive(token, i)

            i += 1

    def _pass2_directive(self, directive: Token, index: int) -> int:
        """Process a directive in pass 2. Returns the index of its operand."""
        name = directive.value

        if name == "DB":
            index, operand = self._operand(directive, index)
            self._emit_cell(self._number(operand))

        elif name == "ORG":
            # Address bookkeeping only; nothing is emitted
            index, _ = self._operand(directive, index)

        elif name == "DS":
            index, operand = self._operand(directive, index)
            for _ in range(self._number(operand)):
                self._emit_cell(0)

        return index

    def _emit_instruction(self, token: Token) -> None:
        opcode = get_opcode(token.value)
        if opcode is None:
            raise UnknownInstructionError(
                token.value,
                token.location,
                source_line=self._source_line(token),
                known_mnemonics=sorted(MNEMONICS),
            )
        self._emit_cell(opcode)

    def _emit_label(self, token: Token) -> None:
        label = self._frozen_labels.get(token.value)
        if label is None:
            similar = difflib.get_close_matches(token.value, list(self._frozen_labels))
            raise UndefinedLabelError(
                token.value,
                token.location,
                source_line=self._source_line(token),
                similar_labels=similar,
            )
        self._emit_cell(label.address)

    def _emit_cell(self, value: int) -> None:
        """Append one cell: the value byte, then the $00 high byte."""
        self._code.append(value & BYTE_MAX)
        self._code.append(0x00)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _operand(self, directive: Token, index: int) -> tuple[int, Token]:
        """
        Consume the token following a directive.

        Raises:
            MissingOperandError: If only EOF (or nothing) follows the directive
        """
        index += 1
        if index >= len(self._tokens) or self._tokens[index].type == TokenType.EOF:
            raise MissingOperandError(
                directive.value,
                directive.location,
                source_line=self._source_line(directive),
            )
        return index, self._tokens[index]

    def _number(self, token: Token) -> int:
        """
        Parse a token's text as an 8-bit literal.

        Raises:
            InvalidNumberError: If the text is not a valid literal
        """
        try:
            return parse_number(token.value or "")
        except ValueError:
            raise InvalidNumberError(
                token.value if token.value is not None else token.type.name,
                token.location,
                source_line=self._source_line(token),
            ) from None

    def _source_line(self, token: Token) -> Optional[str]:
        if 1 <= token.line <= len(self._source_lines):
            return self._source_lines[token.line - 1]
        return None
