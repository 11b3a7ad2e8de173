"""
vm8asm - Assembler for an 8-bit Virtual Machine
===============================================

This package translates a human-readable instruction listing for a small
8-bit virtual machine into a flat binary image.

The machine has a single-byte address space. Programs occupy the first
128 bytes; variables are allocated from address 128 upwards. Each
instruction is one opcode byte, optionally followed by one operand byte.

Main Components
---------------
- **cpu**: Instruction set definitions (opcodes, mnemonics, argument modes)
- **assembler**: Two-pass assembler (lexer, parser, symbol table, codegen)
- **cli**: The ``vmasm`` command-line tool

Quick Start
-----------
Assemble a program:
    >>> from vm8asm import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("loop.asm")
    >>> asm.write_binary("loop.bin")

Or use the command-line tool:
    $ vmasm -in loop.asm -out loop.bin

Source Syntax
-------------
    ; comments are toggled by tokens starting with a semicolon ;
    VAR COUNT           declare a variable at the next data address
    LOOP:               define a label at the current program counter
    LDA 0x05            immediate hexadecimal byte
    STA &COUNT          address of a label or variable
    LDB &&COUNT         dereferenced address
    JMP &LOOP
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from vm8asm.assembler import Assembler, SizeReport, assemble, assemble_file
from vm8asm.config import AssemblerConfig
from vm8asm.errors import (
    Vm8Error,
    SourceLocation,
    AssemblerError,
    AssemblySyntaxError,
    InvalidInstructionError,
    UndefinedSymbolError,
    DuplicateSymbolError,
    AddressSpaceError,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "SizeReport",
    "assemble",
    "assemble_file",
    "AssemblerConfig",
    # Errors
    "Vm8Error",
    "SourceLocation",
    "AssemblerError",
    "AssemblySyntaxError",
    "InvalidInstructionError",
    "UndefinedSymbolError",
    "DuplicateSymbolError",
    "AddressSpaceError",
]
