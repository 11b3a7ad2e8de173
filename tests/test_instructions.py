# =============================================================================
# test_instructions.py - Instruction Table Tests
# =============================================================================
# Tests for the VM8 instruction set definitions in vm8asm.cpu.
#
# Test coverage includes:
#   - Table shape: 32 entries, unique opcodes 0x01-0x20
#   - Overloaded mnemonics keyed by (mnemonic, argument mode)
#   - Exact lookup and the no-operand fallback
#   - Immutability of the table
# =============================================================================

import dataclasses

import pytest

from vm8asm.cpu import (
    ArgumentMode,
    INSTRUCTIONS,
    InstructionSpec,
    MNEMONIC_TABLE,
    MNEMONICS,
    OPCODE_INDEX,
    OPCODE_TABLE,
    get_instruction_info,
    get_valid_modes,
    is_valid_instruction,
    resolve_instruction,
)


# =============================================================================
# Table Shape
# =============================================================================

class TestInstructionTable:
    """Test the static instruction table."""

    def test_table_has_32_entries(self):
        assert len(INSTRUCTIONS) == 32
        assert len(OPCODE_TABLE) == 32

    def test_opcodes_are_unique_and_contiguous(self):
        """Opcodes run from 0x01 to 0x20 without gaps."""
        opcodes = [spec.opcode for spec in INSTRUCTIONS]
        assert opcodes == list(range(0x01, 0x21))
        assert len(OPCODE_INDEX) == 32

    def test_mnemonics_are_uppercase(self):
        for mnemonic in MNEMONICS:
            assert mnemonic == mnemonic.upper()

    def test_overloaded_mnemonic(self):
        """LDA has a value, an address and a dereference form."""
        assert get_valid_modes("LDA") == [
            ArgumentMode.VALUE,
            ArgumentMode.ADDRESS,
            ArgumentMode.DEREFERENCE,
        ]

    @pytest.mark.parametrize("mnemonic,mode,opcode", [
        ("HLT", ArgumentMode.NONE, 0x01),
        ("JMP", ArgumentMode.ADDRESS, 0x02),
        ("JLQ", ArgumentMode.ADDRESS, 0x08),
        ("LDA", ArgumentMode.VALUE, 0x09),
        ("LDA", ArgumentMode.ADDRESS, 0x0A),
        ("LDA", ArgumentMode.DEREFERENCE, 0x0B),
        ("LDB", ArgumentMode.VALUE, 0x0C),
        ("STA", ArgumentMode.ADDRESS, 0x0F),
        ("STB", ArgumentMode.DEREFERENCE, 0x12),
        ("ADD", ArgumentMode.NONE, 0x13),
        ("CMP", ArgumentMode.NONE, 0x1C),
        ("OUTA", ArgumentMode.NONE, 0x1D),
        ("OUTD", ArgumentMode.NONE, 0x20),
    ])
    def test_known_opcodes(self, mnemonic, mode, opcode):
        assert get_instruction_info(mnemonic, mode).opcode == opcode

    def test_instruction_size(self):
        assert OPCODE_TABLE[("HLT", ArgumentMode.NONE)].size == 1
        assert OPCODE_TABLE[("LDA", ArgumentMode.VALUE)].size == 2
        assert OPCODE_TABLE[("STA", ArgumentMode.DEREFERENCE)].size == 2

    def test_table_is_immutable(self):
        """Neither the mapping nor its entries can be modified."""
        with pytest.raises(TypeError):
            OPCODE_TABLE[("NOP", ArgumentMode.NONE)] = InstructionSpec(0x21, "NOP", ArgumentMode.NONE)
        with pytest.raises(dataclasses.FrozenInstanceError):
            INSTRUCTIONS[0].opcode = 0x99

    def test_mode_str(self):
        assert str(ArgumentMode.VALUE) == "value"
        assert str(ArgumentMode.DEREFERENCE) == "dereference"


# =============================================================================
# Lookup
# =============================================================================

class TestResolveInstruction:
    """Test (mnemonic, mode) resolution."""

    def test_exact_match(self):
        spec = resolve_instruction("LDB", ArgumentMode.ADDRESS)
        assert spec.opcode == 0x0D

    def test_missing_combination(self):
        """HLT has no value form."""
        assert resolve_instruction("HLT", ArgumentMode.VALUE) is None
        assert resolve_instruction("STA", ArgumentMode.VALUE) is None

    def test_unknown_mnemonic(self):
        assert resolve_instruction("NOP", ArgumentMode.NONE) is None
        assert not is_valid_instruction("NOP")

    def test_case_sensitive(self):
        assert resolve_instruction("hlt", ArgumentMode.NONE) is None

    def test_no_operand_fallback_picks_first_entry(self):
        """Without an operand the first row for the mnemonic is used."""
        assert resolve_instruction("JMP", ArgumentMode.NONE).opcode == 0x02
        assert resolve_instruction("LDA", ArgumentMode.NONE).opcode == 0x09
        assert MNEMONIC_TABLE["STB"].opcode == 0x11
