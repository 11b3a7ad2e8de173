"""
VM8 Instruction Set Definition
==============================

This module defines the instruction set of the 8-bit virtual machine:
opcodes, mnemonics and argument modes.

Argument Modes
--------------
The VM supports four operand shapes:

1. **NONE**: No operand (e.g., ADD, OUTA, HLT)
   - 1 byte instruction
   - Example: OUTA -> $1D

2. **VALUE**: Immediate literal byte, written with a 0x prefix
   - 2 bytes: opcode + value
   - Example: LDA 0x05 -> $09 $05

3. **ADDRESS**: Symbolic address of a label or variable, written &NAME
   - 2 bytes: opcode + resolved address
   - Example: JMP &LOOP -> $02 $00

4. **DEREFERENCE**: Symbolic dereferenced address, written &&NAME
   - 2 bytes: opcode + resolved address (encoded exactly like ADDRESS,
     the VM interprets the opcode differently)
   - Example: LDA &&PTR -> $0B $80

A mnemonic may appear several times in the table with different argument
modes (LDA has VALUE, ADDRESS and DEREFERENCE forms). An instruction is
therefore identified by the (mnemonic, argument_mode) pair, never by the
mnemonic alone.

Memory Layout
-------------
The address space is a single byte. By convention the first 128 bytes
hold the program and variables are allocated from address 128 upwards.
"""

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Optional


# =============================================================================
# Memory Layout Constants
# =============================================================================

ADDRESS_SPACE = 256     # Single-byte address space
PROGRAM_SIZE = 128      # Bytes reserved for the program region
DATA_START = 128        # First variable address (first byte past the program)


# =============================================================================
# Argument Mode Enumeration
# =============================================================================

class ArgumentMode(Enum):
    """
    VM8 argument modes.

    The mode drives both instruction lookup (it disambiguates overloaded
    mnemonics) and operand encoding.
    """
    NONE = auto()         # No operand
    VALUE = auto()        # 0xNN immediate byte
    ADDRESS = auto()      # &NAME
    DEREFERENCE = auto()  # &&NAME

    def __str__(self) -> str:
        """Return human-readable name for error messages."""
        return {
            ArgumentMode.NONE: "no",
            ArgumentMode.VALUE: "value",
            ArgumentMode.ADDRESS: "address",
            ArgumentMode.DEREFERENCE: "dereference",
        }[self]


# =============================================================================
# Instruction Information
# =============================================================================

@dataclass(frozen=True)
class InstructionSpec:
    """
    A single row of the instruction table.

    This dataclass is immutable (frozen) to prevent accidental modification
    of the instruction table at runtime.

    Attributes:
        opcode: The opcode byte
        mnemonic: Upper-case mnemonic (not unique across the table)
        argument_mode: The operand shape this row expects
    """
    opcode: int
    mnemonic: str
    argument_mode: ArgumentMode

    @property
    def size(self) -> int:
        """Encoded size in bytes (opcode plus optional operand byte)."""
        return 1 if self.argument_mode is ArgumentMode.NONE else 2

    def __repr__(self) -> str:
        return (
            f"InstructionSpec(opcode=${self.opcode:02X}, "
            f"mnemonic={self.mnemonic!r}, mode={self.argument_mode.name})"
        )


# =============================================================================
# Instruction Table
# =============================================================================
# Master table of all VM8 instructions, in opcode order. The order matters:
# the no-operand fallback in resolve_instruction() picks the first row
# matching a mnemonic.
# =============================================================================

_N = ArgumentMode.NONE
_V = ArgumentMode.VALUE
_A = ArgumentMode.ADDRESS
_D = ArgumentMode.DEREFERENCE

INSTRUCTIONS: tuple[InstructionSpec, ...] = (
    # =========================================================================
    # CONTROL FLOW
    # =========================================================================
    InstructionSpec(0x01, "HLT", _N),
    InstructionSpec(0x02, "JMP", _A),
    InstructionSpec(0x03, "JEQ", _A),
    InstructionSpec(0x04, "JNQ", _A),
    InstructionSpec(0x05, "JGR", _A),
    InstructionSpec(0x06, "JGQ", _A),
    InstructionSpec(0x07, "JLE", _A),
    InstructionSpec(0x08, "JLQ", _A),

    # =========================================================================
    # LOAD / STORE
    # =========================================================================
    InstructionSpec(0x09, "LDA", _V),
    InstructionSpec(0x0A, "LDA", _A),
    InstructionSpec(0x0B, "LDA", _D),
    InstructionSpec(0x0C, "LDB", _V),
    InstructionSpec(0x0D, "LDB", _A),
    InstructionSpec(0x0E, "LDB", _D),
    InstructionSpec(0x0F, "STA", _A),
    InstructionSpec(0x10, "STA", _D),
    InstructionSpec(0x11, "STB", _A),
    InstructionSpec(0x12, "STB", _D),

    # =========================================================================
    # ARITHMETIC / LOGIC (operate on the A and B registers)
    # =========================================================================
    InstructionSpec(0x13, "ADD", _N),
    InstructionSpec(0x14, "SUB", _N),
    InstructionSpec(0x15, "NEG", _N),
    InstructionSpec(0x16, "AND", _N),
    InstructionSpec(0x17, "OR", _N),
    InstructionSpec(0x18, "XOR", _N),
    InstructionSpec(0x19, "NOT", _N),
    InstructionSpec(0x1A, "SHL", _N),
    InstructionSpec(0x1B, "SHR", _N),
    InstructionSpec(0x1C, "CMP", _N),

    # =========================================================================
    # OUTPUT
    # =========================================================================
    InstructionSpec(0x1D, "OUTA", _N),
    InstructionSpec(0x1E, "OUTB", _N),
    InstructionSpec(0x1F, "OUTC", _N),
    InstructionSpec(0x20, "OUTD", _N),
)

del _N, _V, _A, _D


def _build_opcode_table() -> dict[tuple[str, ArgumentMode], InstructionSpec]:
    table: dict[tuple[str, ArgumentMode], InstructionSpec] = {}
    for spec in INSTRUCTIONS:
        key = (spec.mnemonic, spec.argument_mode)
        if key in table:
            raise ValueError(f"duplicate instruction table entry {key}")
        table[key] = spec
    return table


def _build_mnemonic_table() -> dict[str, InstructionSpec]:
    table: dict[str, InstructionSpec] = {}
    for spec in INSTRUCTIONS:
        table.setdefault(spec.mnemonic, spec)
    return table


# Key: (mnemonic, argument_mode) -> InstructionSpec
OPCODE_TABLE = MappingProxyType(_build_opcode_table())

# Key: mnemonic -> first InstructionSpec with that mnemonic
MNEMONIC_TABLE = MappingProxyType(_build_mnemonic_table())

# Key: opcode byte -> InstructionSpec
OPCODE_INDEX = MappingProxyType({spec.opcode: spec for spec in INSTRUCTIONS})

MNEMONICS: frozenset[str] = frozenset(MNEMONIC_TABLE)


# =============================================================================
# Lookup Functions
# =============================================================================

def get_instruction_info(mnemonic: str, mode: ArgumentMode) -> Optional[InstructionSpec]:
    """
    Get the exact table entry for a mnemonic and argument mode.

    Args:
        mnemonic: Instruction mnemonic (case-sensitive, e.g., "LDA")
        mode: Argument mode

    Returns:
        InstructionSpec if the combination is valid, None otherwise
    """
    return OPCODE_TABLE.get((mnemonic, mode))


def get_valid_modes(mnemonic: str) -> list[ArgumentMode]:
    """Return the argument modes supported by a mnemonic, in table order."""
    return [spec.argument_mode for spec in INSTRUCTIONS if spec.mnemonic == mnemonic]


def is_valid_instruction(mnemonic: str) -> bool:
    """Check if a mnemonic appears anywhere in the table."""
    return mnemonic in MNEMONICS


def resolve_instruction(mnemonic: str, mode: ArgumentMode) -> Optional[InstructionSpec]:
    """
    Select the table entry for a mnemonic and a detected operand mode.

    An operand-bearing mode requires an exact (mnemonic, mode) match. When
    no operand was detected, the first row with the mnemonic is accepted
    whatever its mode, so that e.g. HLT matches directly.

    Returns:
        The matching InstructionSpec, or None if there is none
    """
    if mode is ArgumentMode.NONE:
        return MNEMONIC_TABLE.get(mnemonic)
    return OPCODE_TABLE.get((mnemonic, mode))
