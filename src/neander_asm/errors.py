"""
Neander Assembler Error Hierarchy
=================================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from NeanderError, allowing callers to catch every
assembler- or image-related error with a single except clause.

Exception Hierarchy
-------------------
NeanderError (base)
├── AssemblerError (assembly of source text)
│   ├── MissingOperandError - DB/DS/ORG not followed by an operand
│   ├── InvalidNumberError - malformed or out-of-range numeric literal
│   ├── UnknownInstructionError - mnemonic not in the opcode table
│   └── UndefinedLabelError - reference to a label with no binding
└── ImageError (memory image handling)
    ├── ImageWriteError - output file could not be created or written
    ├── ImageOverflowError - program does not fit in the image
    └── ImageFormatError - existing file is not a valid memory image

Error messages follow this format when a source location is known:
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

import difflib
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class NeanderError(Exception):
    """
    Base exception for all errors raised by this package.

        try:
            assembler.assemble_file("program.asm")
        except NeanderError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(NeanderError):
    """
    Base exception for errors found while assembling source text.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            loop.asm:4:9: error: undefined label 'lop'
                    JMP lop
                        ^
            hint: did you mean 'loop'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class MissingOperandError(AssemblerError):
    """
    A directive that takes an operand reached the end of the token stream.

    Example:
        ORG        ; Error: expected a number after ORG
    """

    def __init__(
        self,
        directive: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.directive = directive
        super().__init__(
            f"expected an operand after {directive}",
            location=location,
            hint=f"write e.g. '{directive} 0x10'",
            source_line=source_line,
        )


class InvalidNumberError(AssemblerError):
    """
    Numeric literal is malformed or outside the unsigned 8-bit range.

    Accepted forms are unprefixed decimal (0-255) and 0x-prefixed
    hexadecimal (0x00-0xFF).
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"invalid number '{text}'",
            location=location,
            hint="numbers are decimal 0-255 or hexadecimal 0x00-0xFF",
            source_line=source_line,
        )


class UnknownInstructionError(AssemblerError):
    """Instruction mnemonic is not in the opcode table."""

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        known_mnemonics: Optional[list[str]] = None,
    ):
        self.mnemonic = mnemonic

        hint = None
        close = difflib.get_close_matches(mnemonic, known_mnemonics or [], n=1)
        if close:
            hint = f"did you mean '{close[0]}'?"

        super().__init__(
            f"unknown instruction '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndefinedLabelError(AssemblerError):
    """
    Reference to a label that pass 1 never bound.

    Similarly named labels are suggested to help catch typos.
    """

    def __init__(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_labels: Optional[list[str]] = None,
    ):
        self.label = label
        self.similar_labels = similar_labels or []

        hint = None
        if self.similar_labels:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_labels[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"undefined label '{label}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Memory Image Exceptions
# =============================================================================

class ImageError(NeanderError):
    """Base exception for memory image handling errors."""
    pass


class ImageWriteError(ImageError):
    """
    The image file could not be created or written.

    Wraps the underlying OSError, available as ``__cause__``.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot write '{path}': {reason}")


class ImageOverflowError(ImageError):
    """The assembled program does not fit in the 512-byte cell area."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(
            f"program is {size} bytes but the image holds only {capacity} bytes"
        )


class ImageFormatError(ImageError):
    """
    Data is not a valid memory image.

    Raised when reading a file that:
    - Has the wrong length
    - Is missing the 03 4E 44 52 magic header
    """
    pass
