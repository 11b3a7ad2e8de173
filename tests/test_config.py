"""
Tests for vm8asm.config
=======================

Tests for AssemblerConfig defaults, validation and environment loading.
"""

import dataclasses

import pytest

from vm8asm.config import AssemblerConfig


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self):
        config = AssemblerConfig()
        assert config.strict is False
        assert config.program_size == 128
        assert config.address_space == 256
        assert config.data_start == 128

    def test_data_start_follows_program_size(self):
        assert AssemblerConfig(program_size=64).data_start == 64

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            AssemblerConfig().strict = True


class TestValidation:
    """Tests for __post_init__ validation."""

    @pytest.mark.parametrize("size", [0, -1, 257])
    def test_invalid_program_size(self, size):
        with pytest.raises(ValueError, match="program_size"):
            AssemblerConfig(program_size=size)

    def test_program_may_fill_address_space(self):
        assert AssemblerConfig(program_size=256).program_size == 256


class TestFromEnv:
    """Tests for AssemblerConfig.from_env()."""

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("VM8ASM_STRICT", raising=False)
        assert AssemblerConfig.from_env().strict is False

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on", " On "])
    def test_truthy(self, monkeypatch, value):
        monkeypatch.setenv("VM8ASM_STRICT", value)
        assert AssemblerConfig.from_env().strict is True

    @pytest.mark.parametrize("value", ["", "0", "false", "no", "off", "strict"])
    def test_falsy(self, monkeypatch, value):
        monkeypatch.setenv("VM8ASM_STRICT", value)
        assert AssemblerConfig.from_env().strict is False

    def test_replace_overrides_environment(self, monkeypatch):
        """Command-line flags are applied over the environment with replace()."""
        monkeypatch.setenv("VM8ASM_STRICT", "1")
        config = dataclasses.replace(AssemblerConfig.from_env(), strict=False)
        assert config.strict is False
