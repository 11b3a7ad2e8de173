# =============================================================================
# test_codegen.py - Code Generator Tests
# =============================================================================
# Tests for the VM8 second pass (encoding).
#
# Test coverage includes:
#   - Encoding of each argument mode
#   - Forward and backward symbol resolution
#   - Undefined symbol errors and state after a failed run
#   - Listing and symbol file output
# =============================================================================

import pytest

from vm8asm.assembler.codegen import CodeGenerator
from vm8asm.assembler.parser import parse_source
from vm8asm.errors import UndefinedSymbolError


def generate(source: str) -> bytes:
    """Helper running both passes through a fresh CodeGenerator."""
    result = parse_source(source)
    return CodeGenerator().generate(result.operations, result.symbols)


class TestEncoding:
    """Test byte emission per argument mode."""

    def test_none_mode_one_byte_each(self):
        assert generate("ADD SUB NEG AND OR XOR NOT SHL SHR CMP") == bytes(range(0x13, 0x1D))

    def test_value_mode(self):
        assert generate("LDA 0x05 LDB 0xFF") == bytes([0x09, 0x05, 0x0C, 0xFF])

    def test_address_mode(self):
        assert generate("VAR X STA &X STB &X") == bytes([0x0F, 0x80, 0x11, 0x80])

    def test_dereference_resolves_like_address(self):
        assert generate("VAR P LDA &&P STB &&P") == bytes([0x0B, 0x80, 0x12, 0x80])

    def test_no_operand_fallback_emits_one_byte(self):
        """JMP with no operand still matches its table row but emits only the opcode."""
        assert generate("JMP") == bytes([0x02])

    def test_empty_program(self):
        assert generate("") == b""


class TestSymbolResolution:
    """Test forward and backward references."""

    def test_forward_reference(self):
        code = generate("JMP &END OUTA END: HLT")
        assert code == bytes([0x02, 0x03, 0x1D, 0x01])

    def test_backward_reference(self):
        code = generate("START: OUTA JNQ &START")
        assert code == bytes([0x1D, 0x04, 0x00])

    def test_variable_declared_after_use(self):
        code = generate("LDA &X VAR X")
        assert code == bytes([0x0A, 0x80])

    def test_undefined_symbol(self):
        result = parse_source("JMP &NOWHERE")
        with pytest.raises(UndefinedSymbolError, match="NOWHERE"):
            CodeGenerator().generate(result.operations, result.symbols)

    def test_failed_run_keeps_no_code(self):
        codegen = CodeGenerator()
        good = parse_source("HLT")
        codegen.generate(good.operations, good.symbols)

        bad = parse_source("OUTA JMP &NOWHERE")
        with pytest.raises(UndefinedSymbolError):
            codegen.generate(bad.operations, bad.symbols)
        assert codegen.get_code() == b""

    def test_failed_run_keeps_no_symbols(self):
        codegen = CodeGenerator()
        good = parse_source("L: HLT")
        codegen.generate(good.operations, good.symbols)

        bad = parse_source("X: JMP &NOPE")
        with pytest.raises(UndefinedSymbolError):
            codegen.generate(bad.operations, bad.symbols)
        assert codegen.get_symbols() == {}
        assert "JMP &NOPE" not in codegen.get_listing()

    def test_undefined_symbol_has_source_context(self):
        source = "HLT\nJMP &LOPP\nLOOP:"
        result = parse_source(source, "p.asm")
        codegen = CodeGenerator(source_lines=source.splitlines())
        with pytest.raises(UndefinedSymbolError) as exc_info:
            codegen.generate(result.operations, result.symbols)
        message = str(exc_info.value)
        assert message.startswith("p.asm:2:1: error: undefined symbol 'LOPP'")
        assert "    JMP &LOPP" in message
        assert "did you mean 'LOOP'?" in message


class TestOutputFiles:
    """Test listing, symbol and binary output."""

    def _codegen(self, source: str) -> CodeGenerator:
        result = parse_source(source)
        codegen = CodeGenerator()
        codegen.generate(result.operations, result.symbols)
        return codegen

    def test_listing(self):
        listing = self._codegen("VAR X\nLOOP: LDA &X\nOUTA\nJMP &LOOP").get_listing()
        assert "$00  0A 80      2  LDA &X" in listing
        assert "$02  1D         3  OUTA" in listing
        assert "$03  02 00      4  JMP &LOOP" in listing
        assert "LOOP                 = $00  label" in listing
        assert "X                    = $80  variable" in listing

    def test_write_binary(self, tmp_path):
        path = tmp_path / "out.bin"
        self._codegen("LDA 0x05 OUTA").write_binary(path)
        assert path.read_bytes() == bytes([0x09, 0x05, 0x1D])

    def test_write_symbols(self, tmp_path):
        path = tmp_path / "out.sym"
        self._codegen("VAR X L: HLT").write_symbols(path)
        lines = path.read_text().splitlines()
        assert lines[0] == "# Symbol table"
        assert "L $00 label" in lines
        assert "X $80 variable" in lines

    def test_write_listing(self, tmp_path):
        path = tmp_path / "out.lst"
        self._codegen("HLT").write_listing(path)
        assert path.read_text().startswith("VM8 Assembler Listing")

    def test_get_symbols(self):
        assert self._codegen("VAR X L: HLT").get_symbols() == {"X": 128, "L": 0}
