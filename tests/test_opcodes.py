# =============================================================================
# test_opcodes.py - Instruction Table and Literal Parser Tests
# =============================================================================

import pytest
from neander_asm.assembler.opcodes import (
    OPCODE_TABLE,
    DIRECTIVE_TABLE,
    get_opcode,
    is_directive,
    parse_number,
)


class TestOpcodeTable:
    """The fixed Neander instruction set."""

    def test_has_eleven_entries(self):
        assert len(OPCODE_TABLE) == 11

    @pytest.mark.parametrize("mnemonic,opcode", [
        ("NOP", 0x00), ("STA", 0x10), ("LDA", 0x20), ("ADD", 0x30),
        ("OR", 0x40), ("AND", 0x50), ("NOT", 0x60), ("JMP", 0x80),
        ("JN", 0x90), ("JZ", 0xA0), ("HLT", 0xF0),
    ])
    def test_opcode_values(self, mnemonic, opcode):
        assert OPCODE_TABLE[mnemonic] == opcode

    def test_lookup_is_case_insensitive(self):
        assert get_opcode("hlt") == 0xF0

    def test_unknown_mnemonic(self):
        assert get_opcode("FOO") is None

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            OPCODE_TABLE["SUB"] = 0x70


class TestDirectiveTable:

    def test_entries(self):
        assert dict(DIRECTIVE_TABLE) == {"DB": True, "DS": False, "ORG": True}

    def test_is_directive(self):
        assert is_directive("org")
        assert not is_directive("LDA")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DIRECTIVE_TABLE["EQU"] = True


class TestParseNumber:
    """Unsigned 8-bit literals: decimal or 0x-prefixed hexadecimal."""

    @pytest.mark.parametrize("text,value", [
        ("0", 0),
        ("42", 42),
        ("255", 255),
        ("0x0", 0),
        ("0x10", 16),
        ("0xFF", 255),
        ("0xff", 255),
        ("007", 7),
    ])
    def test_valid(self, text, value):
        assert parse_number(text) == value

    @pytest.mark.parametrize("text", [
        "256",
        "0x100",
        "",
        "0x",
        "-1",
        "+1",
        "1_0",
        "12ab",
        "0XFF",
        "$FF",
        "0b101",
        " 1",
    ])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_number(text)
