"""
Neander Instruction Set Tables
==============================

Fixed lookup tables shared by both assembler passes, plus the numeric
literal parser.

Neander is an 8-bit accumulator machine with a 256-byte address space.
Every instruction opcode keeps its operation in the high nibble:

| Mnemonic | Opcode | Operation               |
|----------|--------|-------------------------|
| NOP      | $00    | no operation            |
| STA      | $10    | MEM[addr] <- AC         |
| LDA      | $20    | AC <- MEM[addr]         |
| ADD      | $30    | AC <- AC + MEM[addr]    |
| OR       | $40    | AC <- AC or MEM[addr]   |
| AND      | $50    | AC <- AC and MEM[addr]  |
| NOT      | $60    | AC <- not AC            |
| JMP      | $80    | PC <- addr              |
| JN       | $90    | if N: PC <- addr        |
| JZ       | $A0    | if Z: PC <- addr        |
| HLT      | $F0    | halt                    |

Both tables are read-only mappings; nothing mutates them at runtime.
"""

from types import MappingProxyType
from typing import Mapping


OPCODE_TABLE: Mapping[str, int] = MappingProxyType({
    "NOP": 0x00,
    "STA": 0x10,
    "LDA": 0x20,
    "ADD": 0x30,
    "OR": 0x40,
    "AND": 0x50,
    "NOT": 0x60,
    "JMP": 0x80,
    "JN": 0x90,
    "JZ": 0xA0,
    "HLT": 0xF0,
})

MNEMONICS = frozenset(OPCODE_TABLE)

# Directive name -> whether it places data at a literal position.
# DB emits a constant and ORG moves the address counter; DS only reserves.
DIRECTIVE_TABLE: Mapping[str, bool] = MappingProxyType({
    "DB": True,
    "DS": False,
    "ORG": True,
})

DIRECTIVES = frozenset(DIRECTIVE_TABLE)

# Largest value a literal, address or cell byte may hold
BYTE_MAX = 0xFF


def get_opcode(mnemonic: str) -> int | None:
    """Return the opcode for a mnemonic, or None if it is not in the table."""
    return OPCODE_TABLE.get(mnemonic.upper())


def is_directive(name: str) -> bool:
    """Check if a word names an assembler directive."""
    return name.upper() in DIRECTIVE_TABLE


def parse_number(text: str) -> int:
    """
    Parse an unsigned 8-bit numeric literal.

    Accepted forms:
        - Decimal:     "0" .. "255"
        - Hexadecimal: "0x0" .. "0xFF" (lowercase prefix, digits any case)

    Signs, whitespace, underscores and other prefixes are rejected.

    Args:
        text: The literal exactly as it appeared in the source

    Returns:
        The parsed value (0-255)

    Raises:
        ValueError: If the literal is malformed or does not fit in 8 bits
    """
    if text.startswith("0x"):
        digits, base = text[2:], 16
        valid = "0123456789abcdefABCDEF"
    else:
        digits, base = text, 10
        valid = "0123456789"

    # int() alone would accept "+1", " 1" and "1_0"
    if not digits or any(ch not in valid for ch in digits):
        raise ValueError(f"malformed literal {text!r}")

    value = int(digits, base)
    if value > BYTE_MAX:
        raise ValueError(f"literal {text!r} does not fit in 8 bits")
    return value
