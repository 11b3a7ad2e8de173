"""
vm8asm CPU Package
==================

Instruction set definitions for the 8-bit virtual machine. The assembler
encodes instructions from these tables; keeping them in one place means
any other tool (a loader, a VM, a listing viewer) shares the same view of
the instruction set.

Usage:
    from vm8asm.cpu import (
        ArgumentMode,
        InstructionSpec,
        OPCODE_TABLE,
        resolve_instruction,
    )
"""

from vm8asm.cpu.instructions import (
    # Memory layout
    ADDRESS_SPACE,
    PROGRAM_SIZE,
    DATA_START,
    # Core types
    ArgumentMode,
    InstructionSpec,
    # Instruction tables
    INSTRUCTIONS,
    OPCODE_TABLE,
    MNEMONIC_TABLE,
    OPCODE_INDEX,
    MNEMONICS,
    # Lookup functions
    get_instruction_info,
    get_valid_modes,
    is_valid_instruction,
    resolve_instruction,
)

__all__ = [
    "ADDRESS_SPACE",
    "PROGRAM_SIZE",
    "DATA_START",
    "ArgumentMode",
    "InstructionSpec",
    "INSTRUCTIONS",
    "OPCODE_TABLE",
    "MNEMONIC_TABLE",
    "OPCODE_INDEX",
    "MNEMONICS",
    "get_instruction_info",
    "get_valid_modes",
    "is_valid_instruction",
    "resolve_instruction",
]
