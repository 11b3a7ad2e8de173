# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the VM8 assembler lexer.
#
# Test coverage includes:
#   - Whitespace splitting (spaces, tabs, newlines, blank lines)
#   - Line and column tracking for error reporting
#   - Tokens are passed through verbatim (no classification)
# =============================================================================

from vm8asm.assembler.lexer import Lexer, Token, tokenize
from vm8asm.errors import SourceLocation


def texts(source: str) -> list[str]:
    """Helper returning just the token texts."""
    return [t.text for t in tokenize(source, "<test>")]


# =============================================================================
# Splitting Tests
# =============================================================================

class TestSplitting:
    """Test whitespace-delimited splitting."""

    def test_empty_source(self):
        """Empty source yields no tokens."""
        assert texts("") == []

    def test_whitespace_only(self):
        """Whitespace-only source yields no tokens."""
        assert texts("  \t\n\n   \n") == []

    def test_single_line(self):
        """Tokens on one line are split on spaces."""
        assert texts("LDA 0x05") == ["LDA", "0x05"]

    def test_newlines_are_not_significant(self):
        """A statement may span lines; newlines are plain whitespace."""
        assert texts("LDA\n0x05\nOUTA") == ["LDA", "0x05", "OUTA"]

    def test_tabs_and_runs_of_spaces(self):
        """Runs of mixed whitespace separate tokens."""
        assert texts("\tLOOP:   JMP\t\t&LOOP  ") == ["LOOP:", "JMP", "&LOOP"]

    def test_punctuation_stays_in_token(self):
        """Prefixes and suffixes are part of the token text."""
        assert texts("; X: &&PTR ;") == [";", "X:", "&&PTR", ";"]

    def test_windows_line_endings(self):
        """CRLF line endings are treated as whitespace."""
        assert texts("HLT\r\nOUTA\r\n") == ["HLT", "OUTA"]


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositions:
    """Test line and column tracking."""

    def test_line_and_column(self):
        """Each token records its 1-indexed line and column."""
        tokens = tokenize("LDA 0x05\n  OUTA", "prog.asm")
        assert tokens[0] == Token("LDA", 1, 1, "prog.asm")
        assert tokens[1] == Token("0x05", 1, 5, "prog.asm")
        assert tokens[2] == Token("OUTA", 2, 3, "prog.asm")

    def test_blank_lines_counted(self):
        """Blank lines still advance the line counter."""
        tokens = tokenize("\n\n\nHLT")
        assert tokens[0].line == 4

    def test_location_property(self):
        """Token.location produces a SourceLocation."""
        token = tokenize("  HLT", "a.asm")[0]
        assert token.location == SourceLocation("a.asm", 1, 3)
        assert str(token.location) == "a.asm:1:3"

    def test_get_line(self):
        """The lexer returns source lines for error context."""
        lexer = Lexer("HLT\nJMP &X\n", "<test>")
        assert lexer.get_line(2) == "JMP &X"
        assert lexer.get_line(0) == ""
        assert lexer.get_line(99) == ""

    def test_repr(self):
        """Token repr shows text and position."""
        token = tokenize("HLT")[0]
        assert repr(token) == "Token('HLT', 1:1)"
