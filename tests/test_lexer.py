# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the Neander assembler lexer/tokenizer.
#
# Test coverage includes:
#   - Statement words: instructions and directives
#   - Operands: numbers, label references, unknown text
#   - Label definitions and section markers
#   - Comments, commas and whitespace handling
#   - Source locations
# =============================================================================

import pytest
from neander_asm.assembler.lexer import Lexer, TokenType, Token, tokenize as lex


# =============================================================================
# Helper Function
# =============================================================================

def tokenize(source: str) -> list:
    """Tokenize and drop the trailing EOF token."""
    return [t for t in Lexer(source, "<test>").tokenize() if t.type != TokenType.EOF]


def kinds(source: str) -> list:
    return [(t.type, t.value) for t in tokenize(source)]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source produces only EOF."""
        tokens = list(Lexer("").tokenize())
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].value is None

    def test_whitespace_only(self):
        assert tokenize("   \t   \n\n") == []

    def test_instruction(self):
        assert kinds("NOP") == [(TokenType.INSTRUCTION, "NOP")]

    def test_instruction_is_uppercased(self):
        assert kinds("lda 5") == [
            (TokenType.INSTRUCTION, "LDA"),
            (TokenType.NUMBER, "5"),
        ]

    def test_unknown_mnemonic_is_still_instruction(self):
        """Mnemonic validity is checked by the code generator, not the lexer."""
        assert kinds("FOO") == [(TokenType.INSTRUCTION, "FOO")]

    def test_stream_ends_with_eof(self):
        tokens = lex("NOP\nHLT")
        assert isinstance(tokens, tuple)
        assert tokens[-1].type == TokenType.EOF
        assert sum(1 for t in tokens if t.type == TokenType.EOF) == 1


# =============================================================================
# Directive Tests
# =============================================================================

class TestDirectives:
    """DB, DS and ORG are DEFINE tokens."""

    @pytest.mark.parametrize("name", ["DB", "DS", "ORG"])
    def test_directive(self, name):
        assert kinds(f"{name} 1") == [
            (TokenType.DEFINE, name),
            (TokenType.NUMBER, "1"),
        ]

    def test_lowercase_directive(self):
        assert kinds("org 0x10")[0] == (TokenType.DEFINE, "ORG")

    def test_hex_operand_kept_as_text(self):
        assert kinds("DB 0xFF")[1] == (TokenType.NUMBER, "0xFF")

    def test_out_of_range_number_is_not_rejected(self):
        """Range checking belongs to the passes."""
        assert kinds("DB 999")[1] == (TokenType.NUMBER, "999")


# =============================================================================
# Label Tests
# =============================================================================

class TestLabels:
    """Label definitions and references are VARIABLE tokens."""

    def test_label_definition(self):
        assert kinds("loop:") == [(TokenType.VARIABLE, "loop")]

    def test_label_definition_keeps_case(self):
        assert kinds("Loop:")[0] == (TokenType.VARIABLE, "Loop")

    def test_label_then_instruction(self):
        assert kinds("loop: JMP loop") == [
            (TokenType.VARIABLE, "loop"),
            (TokenType.INSTRUCTION, "JMP"),
            (TokenType.VARIABLE, "loop"),
        ]

    def test_label_before_directive(self):
        assert kinds("value: DB 7") == [
            (TokenType.VARIABLE, "value"),
            (TokenType.DEFINE, "DB"),
            (TokenType.NUMBER, "7"),
        ]


# =============================================================================
# Operand Tests
# =============================================================================

class TestOperands:

    def test_comma_separated_operands(self):
        assert kinds("ADD a, b") == [
            (TokenType.INSTRUCTION, "ADD"),
            (TokenType.VARIABLE, "a"),
            (TokenType.VARIABLE, "b"),
        ]

    def test_unknown_operand(self):
        assert kinds("LDA $80") == [
            (TokenType.INSTRUCTION, "LDA"),
            (TokenType.UNKNOWN, "$80"),
        ]

    def test_bare_number_line(self):
        """A literal alone on a line is raw data."""
        assert kinds("0x10") == [(TokenType.NUMBER, "0x10")]

    def test_digit_led_word_is_number(self):
        assert kinds("LDA 12ab")[1] == (TokenType.NUMBER, "12ab")


# =============================================================================
# Sections and Comments
# =============================================================================

class TestSectionsAndComments:

    def test_dot_section(self):
        assert kinds(".data") == [(TokenType.SECTION, ".data")]

    def test_section_keyword(self):
        assert kinds("SECTION code") == [(TokenType.SECTION, "SECTION code")]

    def test_comment_dropped(self):
        assert kinds("LDA 128 ; load") == [
            (TokenType.INSTRUCTION, "LDA"),
            (TokenType.NUMBER, "128"),
        ]

    def test_comment_only_line(self):
        assert tokenize("; nothing here") == []


# =============================================================================
# Location Tests
# =============================================================================

class TestLocations:

    def test_line_and_column(self):
        tokens = tokenize("NOP\n  LDA 5")
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (2, 3)
        assert (tokens[2].line, tokens[2].column) == (2, 7)

    def test_filename(self):
        tokens = list(Lexer("NOP", "prog.asm").tokenize())
        assert tokens[0].filename == "prog.asm"
        assert str(tokens[0].location) == "prog.asm:1:1"

    def test_eof_location(self):
        tokens = list(Lexer("loop: JMP loop").tokenize())
        assert (tokens[-1].line, tokens[-1].column) == (1, 15)

    def test_get_line(self):
        lexer = Lexer("NOP\nHLT")
        assert lexer.get_line(2) == "HLT"
        assert lexer.get_line(3) is None

    def test_tokens_are_immutable(self):
        token = tokenize("NOP")[0]
        with pytest.raises(AttributeError):
            token.value = "HLT"

    def test_repr(self):
        assert repr(Token(TokenType.NUMBER, "5", 1, 2)) == "Token(NUMBER, '5', 1:2)"
