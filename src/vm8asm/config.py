"""
vm8asm - Configuration
======================

Assembler configuration. Values can come from:
- Default values (defined here)
- Environment variables (AssemblerConfig.from_env)
- Command-line flags, which override both

Environment variables:
    VM8ASM_STRICT       Treat duplicate symbols and address-space overflow
                        as errors (1/true/yes/on)
"""

from dataclasses import dataclass
import os

from vm8asm.cpu import ADDRESS_SPACE, PROGRAM_SIZE


_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class AssemblerConfig:
    """
    Configuration for a compilation.

    Attributes:
        strict: Raise DuplicateSymbolError on symbol redefinition and
                AddressSpaceError on region overflow. When False (default),
                the last definition wins and addresses wrap modulo the
                address space, with a logged warning in both cases.
        program_size: Bytes reserved for the program region. Variables
                      are allocated starting at this address.
        address_space: Total addressable bytes.
    """

    strict: bool = False
    program_size: int = PROGRAM_SIZE
    address_space: int = ADDRESS_SPACE

    def __post_init__(self) -> None:
        if not 0 < self.program_size <= self.address_space:
            raise ValueError(
                f"program_size must be in 1..{self.address_space}, got {self.program_size}"
            )

    @property
    def data_start(self) -> int:
        """First variable address (the memory pointer's initial value)."""
        return self.program_size

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Returns:
            AssemblerConfig with values from environment variables
        """
        strict = os.environ.get("VM8ASM_STRICT", "").strip().lower() in _TRUTHY
        return cls(strict=strict)
