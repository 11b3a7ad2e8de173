"""
VM8 Code Generator (Pass 2)
===========================

This module implements the second pass of the assembler: it walks the
operations produced by the parser, in source order, and emits bytes.

Encoding
--------
| Argument mode        | Bytes                        |
|----------------------|------------------------------|
| None                 | opcode                       |
| Value                | opcode, immediate value      |
| Address, Dereference | opcode, resolved address     |

There is no alignment, padding or relocation: the output is the raw
concatenation of the encoded operations.

By the time this pass runs the symbol table is complete, so every
reference, forward or backward, resolves with a single lookup. An
unresolved reference aborts the whole compilation.
"""

from pathlib import Path
from typing import Optional
import logging

from vm8asm.assembler.parser import Operation
from vm8asm.assembler.symbols import SymbolTable
from vm8asm.cpu import ArgumentMode

logger = logging.getLogger(__name__)


class CodeGenerator:
    """
    Generates VM8 machine code from first-pass operations.

    The code generator maintains:
    - Output code buffer
    - Listing lines (address, bytes, source line, statement)
    - A reference to the completed symbol table

    Usage:
        codegen = CodeGenerator()
        code = codegen.generate(result.operations, result.symbols)
        codegen.write_binary("program.bin")
    """

    def __init__(self, source_lines: Optional[list[str]] = None):
        """
        Initialize the code generator.

        Args:
            source_lines: Source text split into lines, used to attach
                          context to undefined-symbol errors
        """
        self._code = bytearray()
        self._symbols = SymbolTable()
        self._listing_lines: list[str] = []
        self._source_lines = source_lines or []

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, operations: list[Operation], symbols: SymbolTable) -> bytes:
        """
        Generate machine code for a list of operations.

        Args:
            operations: Operations from the first pass, in source order
            symbols: The completed symbol table

        Returns:
            The encoded binary image

        Raises:
            UndefinedSymbolError: If an operand names an undefined symbol
        """
        self._code.clear()
        self._listing_lines.clear()
        self._symbols = SymbolTable()

        code = bytearray()
        listing: list[str] = []
        for operation in operations:
            encoded = self._encode(operation, symbols)
            code.extend(encoded)
            listing.append(self._format_listing_line(operation, encoded))

        # Nothing is kept from a failed run
        self._code = code
        self._listing_lines = listing
        self._symbols = symbols
        logger.debug(f"Pass 2 complete: {len(code)} bytes from {len(operations)} operations")
        return bytes(code)

    def get_code(self) -> bytes:
        """Return the generated code."""
        return bytes(self._code)

    def get_symbols(self) -> dict[str, int]:
        """Return a dictionary of symbol names to addresses."""
        return self._symbols.as_dict()

    # =========================================================================
    # Encoding
    # =========================================================================

    def _encode(self, operation: Operation, symbols: SymbolTable) -> bytes:
        """Encode one operation as 1 or 2 bytes."""
        opcode = operation.instruction.opcode
        argument = operation.argument

        if argument.is_symbolic:
            # Address and dereference operands are resolved identically
            address = symbols.resolve(
                argument.symbol,
                location=operation.location,
                source_line=self._get_source_line(operation.location.line),
            )
            return bytes([opcode, address & 0xFF])

        if argument.mode is ArgumentMode.VALUE:
            return bytes([opcode, argument.value])

        return bytes([opcode])

    def _get_source_line(self, line_number: int) -> Optional[str]:
        if 1 <= line_number <= len(self._source_lines):
            return self._source_lines[line_number - 1]
        return None

    # =========================================================================
    # Listing and Symbol Output
    # =========================================================================

    @staticmethod
    def _format_listing_line(operation: Operation, encoded: bytes) -> str:
        hex_str = " ".join(f"{b:02X}" for b in encoded)
        return f"${operation.address:02X}  {hex_str:6s}  {operation.location.line:4d}  {operation}"

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            The listing showing addresses, generated bytes, and source lines,
            followed by the symbol table.
        """
        lines = []
        lines.append("VM8 Assembler Listing")
        lines.append("=" * 40)
        lines.append("")
        lines.append("Addr Code    Line  Source")
        lines.append("-" * 40)
        lines.extend(self._listing_lines)
        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for sym in sorted(self._symbols, key=lambda s: s.name):
            lines.append(f"{sym.name:20s} = ${sym.address:02X}  {sym.kind}")
        return "\n".join(lines)

    def write_binary(self, filepath: str | Path) -> None:
        """Write the raw binary image."""
        with open(filepath, "wb") as f:
            f.write(self._code)

    def write_listing(self, filepath: str | Path) -> None:
        """
        Write assembly listing file.

        The listing shows addresses, generated bytes, and source lines.
        """
        with open(filepath, "w") as f:
            f.write(self.get_listing())

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address kind (one per line)
        """
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by vmasm\n")
            for sym in sorted(self._symbols, key=lambda s: s.name):
                f.write(f"{sym.name} ${sym.address:02X} {sym.kind}\n")
