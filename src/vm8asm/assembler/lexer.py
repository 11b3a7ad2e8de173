"""
VM8 Assembly Language Lexer
===========================

This module implements the lexer (tokenizer) for VM8 assembly language.

The language has no grammar beyond whitespace: a token is any maximal run
of non-whitespace characters, and line breaks carry no meaning. The lexer
therefore only splits the source and records where each token came from so
that later stages can report errors with a file, line and column.

Token classification (comment toggles, labels, VAR declarations,
mnemonics and operands) is done by the parser, which needs lookahead.

Example
-------
>>> from vm8asm.assembler.lexer import Lexer
>>> lexer = Lexer("LOOP: LDA 0x05\\nJMP &LOOP", "example.asm")
>>> for token in lexer.tokenize():
...     print(token)
Token('LOOP:', 1:1)
Token('LDA', 1:7)
Token('0x05', 1:11)
Token('JMP', 2:1)
Token('&LOOP', 2:5)
"""

from dataclasses import dataclass
from typing import Iterator
import re

from vm8asm.errors import SourceLocation


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single whitespace-delimited token.

    Attributes:
        text: The token text exactly as written
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    text: str
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Splits VM8 assembly source into whitespace-delimited tokens.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    _TOKEN_PATTERN = re.compile(r"\S+")

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename
        self._lines = source.splitlines()

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects in source order
        """
        for line_number, line in enumerate(self._lines, start=1):
            for match in self._TOKEN_PATTERN.finditer(line):
                yield Token(
                    text=match.group(),
                    line=line_number,
                    column=match.start() + 1,
                    filename=self.filename,
                )

    def get_line(self, line_number: int) -> str:
        """
        Return the text of a source line for error context.

        Args:
            line_number: Line number (1-indexed)

        Returns:
            The line text, or an empty string if out of range
        """
        if 1 <= line_number <= len(self._lines):
            return self._lines[line_number - 1]
        return ""


def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Convenience function returning all tokens of a source string."""
    return list(Lexer(source, filename).tokenize())
