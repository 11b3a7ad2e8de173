"""
VM8 Assembler
=============

This package provides a two-pass assembler for the 8-bit virtual machine.
It converts whitespace-delimited assembly source into a flat binary image.

Main Components
---------------
- **Assembler**: Main assembler class that orchestrates the assembly process
- **Lexer**: Splits source into whitespace-delimited tokens
- **Parser**: First pass; builds the symbol table and resolves instructions
- **SymbolTable**: Flat label/variable name -> address table
- **CodeGenerator**: Second pass; encodes operations and resolves symbols

Assembly Process
----------------
1. **Parse & symbolize (Lexer + Parser)**:
   - Toggle comments on ``;`` tokens
   - Record labels (``NAME:``) at the program counter
   - Record variables (``VAR NAME``) at the memory pointer (from 128)
   - Resolve each mnemonic + operand mode against the instruction table

2. **Encode (CodeGenerator)**:
   - Emit opcode and operand bytes in source order
   - Resolve forward and backward symbol references

Example Usage
-------------
>>> from vm8asm.assembler import assemble
>>> assemble("LDA 0x05 OUTA")
b'\\t\\x05\\x1d'
"""

from vm8asm.assembler.assembler import Assembler, SizeReport, assemble, assemble_file
from vm8asm.assembler.lexer import Lexer, Token, tokenize
from vm8asm.assembler.parser import (
    Parser,
    ParseResult,
    Operation,
    OperationArgument,
    detect_argument_mode,
    parse_immediate,
    parse_source,
)
from vm8asm.assembler.symbols import Symbol, SymbolKind, SymbolTable
from vm8asm.assembler.codegen import CodeGenerator

__all__ = [
    # Main class and functions
    "Assembler",
    "SizeReport",
    "assemble",
    "assemble_file",
    # Lexer
    "Lexer",
    "Token",
    "tokenize",
    # Parser
    "Parser",
    "ParseResult",
    "Operation",
    "OperationArgument",
    "detect_argument_mode",
    "parse_immediate",
    "parse_source",
    # Symbols
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    # Code generator
    "CodeGenerator",
]
