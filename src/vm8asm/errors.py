"""
vm8asm Error Hierarchy
======================

This module defines the exception hierarchy for the assembler.
All exceptions inherit from Vm8Error, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
Vm8Error (base)
└── AssemblerError (assembler-related)
    ├── AssemblySyntaxError - malformed literal or declaration
    ├── InvalidInstructionError - no table entry for mnemonic + operand mode
    ├── UndefinedSymbolError - reference to undefined label/variable
    ├── DuplicateSymbolError - symbol defined multiple times (strict mode)
    └── AddressSpaceError - program or data region overflow (strict mode)

Every error is fatal: the first one raised aborts the compilation and no
partial output is produced.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Vm8Error(Exception):
    """
    Base exception for all vm8asm errors.

        try:
            assembler.assemble_file("program.asm")
        except Vm8Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(Vm8Error):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
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
            loop.asm:3:5: error: undefined symbol 'LOPP'
                JMP &LOPP
                    ^
            hint: did you mean 'LOOP'?
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


class AssemblySyntaxError(AssemblerError):
    """
    Syntax error in assembly source code.

    Examples:
        - Non-hexadecimal text after a 0x prefix (LDA 0xZZ)
        - Immediate value that does not fit in a byte (LDA 0x100)
        - VAR at end of input with no variable name
        - Address operand with no symbol name (JMP &)
    """
    pass


class InvalidInstructionError(AssemblerError):
    """
    No instruction table entry for a mnemonic and operand mode.

    Raised in the first pass when the operand shape following a mnemonic
    has no matching row in the instruction table, or when the mnemonic is
    not known at all.

    Example:
        HLT 0x01  ; Error: HLT takes no operand
    """

    def __init__(
        self,
        mnemonic: str,
        mode: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid_modes: Optional[list[str]] = None,
    ):
        self.mnemonic = mnemonic
        self.mode = mode
        self.valid_modes = valid_modes or []

        if self.valid_modes:
            modes_str = ", ".join(self.valid_modes)
            hint = f"{mnemonic} supports: {modes_str}"
        else:
            hint = f"'{mnemonic}' is not a known mnemonic"

        super().__init__(
            f"invalid instruction '{mnemonic}' with {mode} operand",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndefinedSymbolError(AssemblerError):
    """
    Reference to an undefined symbol (label or variable).

    Raised during the second pass when an address or dereference operand
    cannot be resolved because no definition was found. Similarly-named
    symbols are offered as suggestions to help catch typos.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        similar_symbols: Optional[list[str]] = None,
    ):
        self.symbol = symbol
        self.similar_symbols = similar_symbols or []

        if not hint and self.similar_symbols:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_symbols[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"undefined symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class DuplicateSymbolError(AssemblerError):
    """
    Symbol defined multiple times.

    Labels and variables share one namespace. Only raised in strict mode;
    by default a redefinition silently replaces the earlier address.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{symbol}' was first defined at {original_location}"

        super().__init__(
            f"duplicate symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AddressSpaceError(AssemblerError):
    """
    Program or data region overflow.

    The machine has a single byte of address space: the program region
    is 0-127 and variables are allocated from 128 upwards. Only raised in
    strict mode; by default addresses wrap around modulo 256.
    """

    def __init__(
        self,
        region: str,
        address: int,
        limit: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.region = region
        self.address = address
        self.limit = limit

        super().__init__(
            f"{region} region overflow: address {address} exceeds limit {limit}",
            location=location,
            hint="reduce the number of instructions or variables",
            source_line=source_line,
        )
