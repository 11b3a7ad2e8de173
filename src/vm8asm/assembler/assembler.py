"""
VM8 Assembler - Main Interface
==============================

This module provides the main Assembler class, the primary interface for
assembling VM8 source code. It coordinates the lexer, the first-pass parser
and the code generator to produce a flat binary image.

Example Usage
-------------
>>> from vm8asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
...     VAR COUNT
... LOOP:
...     LDA &COUNT
...     OUTA
...     JMP &LOOP
... ''')
b'\\n\\x80\\x1d\\x02\\x00'
>>> asm.get_symbols()
{'COUNT': 128, 'LOOP': 0}
>>> asm.write_binary("loop.bin")

Command-Line Usage
------------------
The assembler can also be invoked from the command line:

    $ vmasm -in loop.asm -out loop.bin -l loop.lst -s loop.sym
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

from vm8asm.assembler.codegen import CodeGenerator
from vm8asm.assembler.lexer import Lexer
from vm8asm.assembler.parser import Parser, ParseResult
from vm8asm.config import AssemblerConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SizeReport:
    """
    Size of an assembled image relative to the program region.

    Attributes:
        size: Output size in bytes
        capacity: Size of the program region in bytes
        variables: Number of declared variables
    """
    size: int
    capacity: int
    variables: int = 0

    @property
    def remaining(self) -> int:
        """Bytes left before the program region boundary (negative if over)."""
        return self.capacity - self.size

    @property
    def fits(self) -> bool:
        return self.remaining >= 0

    def __str__(self) -> str:
        if self.fits:
            return f"Binary size: {self.size} bytes ({self.remaining} left)"
        return f"Binary size: {self.size} bytes ({-self.remaining} over)"


class Assembler:
    """
    Main VM8 assembler class.

    A compilation runs in two passes:

    1. **Parse & symbolize**: tokens are classified, labels and variables
       are entered in the symbol table, and each mnemonic is resolved
       against the instruction table.
    2. **Encode**: operations are emitted as bytes, with every symbolic
       operand looked up in the now-complete symbol table.

    Each assemble call starts from a clean state, so an instance can be
    reused. Any error aborts the compilation and leaves no output.

    Attributes:
        config: Assembler configuration
        verbose: If True, log progress at INFO level instead of DEBUG
    """

    def __init__(self, config: Optional[AssemblerConfig] = None, verbose: bool = False):
        """
        Initialize the assembler.

        Args:
            config: Assembler configuration. Defaults to AssemblerConfig().
            verbose: Report progress at INFO level
        """
        self.config = config or AssemblerConfig()
        self.verbose = verbose
        self._codegen = CodeGenerator()
        self._result: Optional[ParseResult] = None

    def _log(self, message: str) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, message)

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> bytes:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            Generated binary image

        Raises:
            AssemblerError: If assembly fails
        """
        self._result = None
        self._codegen = CodeGenerator()

        lexer = Lexer(source, filename)
        tokens = list(lexer.tokenize())
        self._log(f"Read {len(tokens)} tokens from {filename}")

        result = Parser(tokens, config=self.config, lexer=lexer).parse()
        self._log(
            f"Pass 1: {len(result.operations)} operations, "
            f"{len(result.symbols)} symbols"
        )

        codegen = CodeGenerator(source_lines=source.splitlines())
        code = codegen.generate(result.operations, result.symbols)
        self._log(f"Pass 2: generated {len(code)} bytes")

        self._result = result
        self._codegen = codegen
        return code

    def assemble_file(self, filepath: str | Path) -> bytes:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            Generated binary image

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
            UnicodeDecodeError: If the source is not UTF-8 text
        """
        filepath = Path(filepath)
        self._log(f"Assembling {filepath}...")

        source = filepath.read_text(encoding="utf-8")
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> bytes:
        """Get the generated binary image (empty before a successful run)."""
        return self._codegen.get_code()

    def get_symbols(self) -> dict[str, int]:
        """Get the symbol table as a name -> address dictionary."""
        return self._codegen.get_symbols()

    def get_listing(self) -> str:
        """Get the assembly listing as a string."""
        return self._codegen.get_listing()

    def get_size_report(self) -> SizeReport:
        """Report the output size against the program region."""
        variables = self._result.variable_count if self._result else 0
        return SizeReport(
            size=len(self.get_code()),
            capacity=self.config.program_size,
            variables=variables,
        )

    def write_binary(self, filepath: str | Path) -> None:
        """Write the raw binary image."""
        self._codegen.write_binary(filepath)
        self._log(f"Wrote binary to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing."""
        self._codegen.write_listing(filepath)
        self._log(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """Write the symbol table."""
        self._codegen.write_symbols(filepath)
        self._log(f"Wrote symbols to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>",
             config: Optional[AssemblerConfig] = None) -> bytes:
    """
    Convenience function to assemble source code.

    Args:
        source: Assembly source code
        filename: Virtual filename for errors
        config: Assembler configuration

    Returns:
        Generated binary image

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(config=config).assemble_string(source, filename)


def assemble_file(filepath: str | Path,
                  config: Optional[AssemblerConfig] = None) -> bytes:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(config=config).assemble_file(filepath)
