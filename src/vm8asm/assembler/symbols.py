"""
VM8 Symbol Table
================

Labels and variables share one flat, global namespace mapping a name to a
one-byte address:

- **Labels** (``NAME:``) take the current program counter.
- **Variables** (``VAR NAME``) take the memory pointer, which starts at the
  first byte past the program region (128) and advances by one per
  declaration.

The table is filled during the first pass and only read during the second.
Lookup is by exact name; names are case-sensitive.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import difflib
import logging

from vm8asm.errors import (
    DuplicateSymbolError,
    SourceLocation,
    UndefinedSymbolError,
)

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    """What a symbol names."""
    LABEL = auto()
    VARIABLE = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name
        address: Resolved address (0-255)
        kind: LABEL or VARIABLE
        location: Where the symbol was defined
    """
    name: str
    address: int
    kind: SymbolKind
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Flat name -> address table built during the first pass.

    Args:
        strict: If True, redefining a name raises DuplicateSymbolError.
                Otherwise the newer definition replaces the older one and
                a warning is logged.
    """

    def __init__(self, strict: bool = False):
        self._symbols: dict[str, Symbol] = {}
        self._strict = strict

    # =========================================================================
    # Definition
    # =========================================================================

    def define_label(self, name: str, address: int,
                     location: Optional[SourceLocation] = None) -> Symbol:
        """Record a label at a program-counter address."""
        return self._define(Symbol(name, address, SymbolKind.LABEL, location))

    def define_variable(self, name: str, address: int,
                        location: Optional[SourceLocation] = None) -> Symbol:
        """Record a variable at a data-region address."""
        return self._define(Symbol(name, address, SymbolKind.VARIABLE, location))

    def _define(self, symbol: Symbol) -> Symbol:
        existing = self._symbols.get(symbol.name)
        if existing is not None:
            if self._strict:
                raise DuplicateSymbolError(
                    symbol.name,
                    location=symbol.location,
                    original_location=existing.location,
                )
            logger.warning(
                f"{symbol.kind} '{symbol.name}' redefined at "
                f"{symbol.location or '<unknown>'}: ${existing.address:02X} -> "
                f"${symbol.address:02X}"
            )

        self._symbols[symbol.name] = symbol
        logger.debug(f"Defined {symbol.kind} '{symbol.name}' = ${symbol.address:02X}")
        return symbol

    # =========================================================================
    # Lookup
    # =========================================================================

    def lookup(self, name: str) -> Optional[Symbol]:
        """Return the symbol with this exact name, or None."""
        return self._symbols.get(name)

    def resolve(self, name: str, location: Optional[SourceLocation] = None,
                source_line: Optional[str] = None) -> int:
        """
        Resolve a symbol name to its address.

        Raises:
            UndefinedSymbolError: If the name was never defined. The error
                carries up to three similarly-spelled names as suggestions.
        """
        symbol = self._symbols.get(name)
        if symbol is None:
            raise UndefinedSymbolError(
                name,
                location=location,
                source_line=source_line,
                similar_symbols=self.similar(name),
            )
        return symbol.address

    def similar(self, name: str, limit: int = 3) -> list[str]:
        """Return defined names that look like a misspelling of ``name``."""
        return difflib.get_close_matches(name, list(self._symbols), n=limit)

    # =========================================================================
    # Views
    # =========================================================================

    def as_dict(self) -> dict[str, int]:
        """Return a dictionary of symbol names to addresses."""
        return {name: sym.address for name, sym in self._symbols.items()}

    def labels(self) -> list[Symbol]:
        return [s for s in self._symbols.values() if s.kind is SymbolKind.LABEL]

    def variables(self) -> list[Symbol]:
        return [s for s in self._symbols.values() if s.kind is SymbolKind.VARIABLE]

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())
