"""
Neander Assembly Language Lexer
===============================

This module converts source text into the flat, typed token sequence both
assembler passes walk.

Token Types
-----------
- SECTION: a section marker line (".code", ".data", "SECTION data")
- INSTRUCTION: the statement word of a line (mnemonic)
- DEFINE: the statement word when it is a directive (DB, DS, ORG)
- NUMBER: an operand that starts with a digit (validated later)
- VARIABLE: a label definition ("loop:") or a label reference ("loop")
- UNKNOWN: anything else
- EOF: end of input

Source Format
-------------
One statement per line. ";" starts a comment. Operands are separated by
whitespace or commas:

    .code
    start:  LDA value
            ADD one
            STA value
            HLT
    value:  DB 0x10
    one:    DB 1

Number literals are kept as text; range checking happens in the passes so
errors point at the statement that uses the value.

Labels
------
A label reference is a VARIABLE token exactly like a definition, so the
assembler treats every occurrence as a binding: each one rebinds the label
to the address it appears at, and the last occurrence wins. In
"start: LDA count" the operand "count" is itself bound to the cell it
occupies, and that address is what gets emitted.

Example
-------
>>> from neander_asm.assembler.lexer import Lexer
>>> for token in Lexer("loop: JMP loop").tokenize():
...     print(token)
Token(VARIABLE, 'loop', 1:1)
Token(INSTRUCTION, 'JMP', 1:7)
Token(VARIABLE, 'loop', 1:11)
Token(EOF, 1:15)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator
import string

from neander_asm.errors import SourceLocation
from neander_asm.assembler.opcodes import DIRECTIVE_TABLE


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token categories the assembler passes dispatch on."""

    SECTION = auto()
    EOF = auto()
    INSTRUCTION = auto()
    NUMBER = auto()
    VARIABLE = auto()
    DEFINE = auto()
    UNKNOWN = auto()


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from the source code.

    Attributes:
        type: The TokenType classification
        value: The literal token text (None for EOF)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str | None
    line: int = 0
    column: int = 0
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Neander assembly source code.

    The lexer never fails: text it cannot classify becomes an UNKNOWN
    token, which both passes ignore.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    SECTION_KEYWORD = "SECTION"

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Args:
            source: The assembly source code to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source
        self.filename = filename
        self._lines = source.splitlines()

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects for each word, ending with a single EOF token
        """
        for line_number, line in enumerate(self._lines, start=1):
            yield from self._scan_line(line, line_number)

        last_line = max(len(self._lines), 1)
        last_column = len(self._lines[-1]) + 1 if self._lines else 1
        yield self._make_token(TokenType.EOF, None, last_line, last_column)

    def get_line(self, line_number: int) -> str | None:
        """Return the text of a 1-indexed source line, if it exists."""
        if 1 <= line_number <= len(self._lines):
            return self._lines[line_number - 1]
        return None

    # =========================================================================
    # Line Scanning
    # =========================================================================

    def _scan_line(self, line: str, line_number: int) -> Iterator[Token]:
        words = self._split_words(line)
        if not words:
            return

        first_column, first = words[0]
        if first.startswith(".") or first.upper() == self.SECTION_KEYWORD:
            yield self._make_token(TokenType.SECTION, line.strip(), line_number, first_column)
            return

        statement_seen = False
        for column, word in words:
            if word.endswith(":") and self._is_identifier(word[:-1]):
                yield self._make_token(TokenType.VARIABLE, word[:-1], line_number, column)
            elif not statement_seen:
                statement_seen = True
                yield self._classify_statement(word, line_number, column)
            else:
                yield self._classify_operand(word, line_number, column)

    def _split_words(self, line: str) -> list[tuple[int, str]]:
        """
        Split a line into (column, word) pairs, dropping comments.

        Commas separate words just like whitespace.
        """
        comment = line.find(";")
        if comment != -1:
            line = line[:comment]

        words = []
        start = None
        for index, char in enumerate(line + " "):
            if char in " \t,":
                if start is not None:
                    words.append((start + 1, line[start:index]))
                    start = None
            elif start is None:
                start = index
        return words

    def _classify_statement(self, word: str, line: int, column: int) -> Token:
        if self._is_identifier(word):
            name = word.upper()
            if name in DIRECTIVE_TABLE:
                return self._make_token(TokenType.DEFINE, name, line, column)
            return self._make_token(TokenType.INSTRUCTION, name, line, column)
        # A bare literal on its own line is raw data
        return self._classify_operand(word, line, column)

    def _classify_operand(self, word: str, line: int, column: int) -> Token:
        if word[0].isdigit():
            return self._make_token(TokenType.NUMBER, word, line, column)
        if self._is_identifier(word):
            return self._make_token(TokenType.VARIABLE, word, line, column)
        return self._make_token(TokenType.UNKNOWN, word, line, column)

    def _is_identifier(self, word: str) -> bool:
        return (
            bool(word)
            and word[0] in self.IDENT_START
            and all(ch in self.IDENT_CHARS for ch in word)
        )

    def _make_token(self, token_type: TokenType, value: str | None,
                    line: int, column: int) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=line,
            column=column,
            filename=self.filename,
        )


def tokenize(source: str, filename: str = "<input>") -> tuple[Token, ...]:
    """Tokenize source into the immutable sequence the assembler passes walk."""
    return tuple(Lexer(source, filename).tokenize())
