"""
VM8 Assembly Language Parser (Pass 1)
=====================================

This module implements the first pass of the assembler. It walks the token
stream from the lexer, builds the symbol table, and resolves every
instruction against the instruction table, producing an ordered list of
Operation objects for the code generator.

Token Classification
--------------------
Each token is classified in this order:

| Token form  | Meaning                                              |
|-------------|------------------------------------------------------|
| ``;...``    | Toggle the comment flag (comments are delimited by a |
|             | pair of such tokens, not by end of line)             |
| (comment)   | Any token while the flag is on is discarded          |
| ``NAME:``   | Label at the current program counter                 |
| ``VAR``     | The next token names a variable at the memory pointer|
| other       | Mnemonic, with a lookahead for an operand            |

Operand Detection
-----------------
The token after a mnemonic is an operand if it starts with one of these
prefixes; otherwise the instruction has no operand and the token is left
for the next iteration.

| Prefix  | Mode        | Example    |
|---------|-------------|------------|
| ``0x``  | Value       | LDA 0x05   |
| ``&&``  | Dereference | LDA &&PTR  |
| ``&``   | Address     | JMP &LOOP  |

Symbolic operands are stored by name and resolved by the code generator
once the whole source has been scanned, so forward references need no
special handling here.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import re

from vm8asm.assembler.lexer import Lexer, Token
from vm8asm.assembler.symbols import SymbolTable
from vm8asm.config import AssemblerConfig
from vm8asm.cpu import (
    ArgumentMode,
    InstructionSpec,
    get_valid_modes,
    resolve_instruction,
)
from vm8asm.errors import (
    AddressSpaceError,
    AssemblySyntaxError,
    InvalidInstructionError,
    SourceLocation,
)

logger = logging.getLogger(__name__)


COMMENT_PREFIX = ";"
LABEL_SUFFIX = ":"
VARIABLE_KEYWORD = "VAR"
VALUE_PREFIX = "0x"
DEREFERENCE_PREFIX = "&&"
ADDRESS_PREFIX = "&"

_HEX_DIGITS = re.compile(r"[0-9A-Fa-f]+")


# =============================================================================
# Operation Data Classes
# =============================================================================

@dataclass(frozen=True)
class OperationArgument:
    """
    The concrete operand of one operation.

    Exactly one of ``value`` (VALUE mode) or ``symbol`` (ADDRESS and
    DEREFERENCE modes) is set; neither is set for NONE.
    """
    mode: ArgumentMode = ArgumentMode.NONE
    value: Optional[int] = None
    symbol: Optional[str] = None

    @classmethod
    def none(cls) -> "OperationArgument":
        return cls()

    @classmethod
    def immediate(cls, value: int) -> "OperationArgument":
        return cls(ArgumentMode.VALUE, value=value)

    @classmethod
    def address(cls, symbol: str) -> "OperationArgument":
        return cls(ArgumentMode.ADDRESS, symbol=symbol)

    @classmethod
    def dereference(cls, symbol: str) -> "OperationArgument":
        return cls(ArgumentMode.DEREFERENCE, symbol=symbol)

    @property
    def is_symbolic(self) -> bool:
        """True if the operand must be resolved through the symbol table."""
        return self.symbol is not None

    def __str__(self) -> str:
        if self.mode is ArgumentMode.VALUE:
            return f"0x{self.value:02X}"
        if self.mode is ArgumentMode.ADDRESS:
            return f"{ADDRESS_PREFIX}{self.symbol}"
        if self.mode is ArgumentMode.DEREFERENCE:
            return f"{DEREFERENCE_PREFIX}{self.symbol}"
        return ""


@dataclass(frozen=True)
class Operation:
    """
    One decoded source statement.

    Attributes:
        instruction: The resolved instruction table entry
        argument: The operand as written (value or symbol name)
        location: Where the mnemonic appeared
        address: Program counter assigned in pass 1
    """
    instruction: InstructionSpec
    argument: OperationArgument
    location: SourceLocation
    address: int

    @property
    def size(self) -> int:
        """Encoded size: 2 bytes when an operand was consumed, else 1."""
        return 1 if self.argument.mode is ArgumentMode.NONE else 2

    def __str__(self) -> str:
        operand = str(self.argument)
        if operand:
            return f"{self.instruction.mnemonic} {operand}"
        return self.instruction.mnemonic


@dataclass
class ParseResult:
    """
    Output of the first pass.

    Attributes:
        operations: Operations in source order
        symbols: Completed symbol table
        program_size: Final program counter (bytes of code)
        variable_count: Number of VAR declarations
    """
    operations: list[Operation]
    symbols: SymbolTable
    program_size: int
    variable_count: int


# =============================================================================
# Operand Classification
# =============================================================================

def detect_argument_mode(text: str) -> ArgumentMode:
    """
    Determine the operand mode implied by a lookahead token's prefix.

    ``&&`` is checked before ``&`` so that a dereference is never mistaken
    for an address.
    """
    if text.startswith(VALUE_PREFIX):
        return ArgumentMode.VALUE
    if text.startswith(DEREFERENCE_PREFIX):
        return ArgumentMode.DEREFERENCE
    if text.startswith(ADDRESS_PREFIX):
        return ArgumentMode.ADDRESS
    return ArgumentMode.NONE


def parse_immediate(text: str) -> Optional[int]:
    """
    Parse the hexadecimal byte after a ``0x`` prefix.

    Returns:
        The value (0-255), or None if the text is not a valid byte
    """
    digits = text[len(VALUE_PREFIX):]
    if not _HEX_DIGITS.fullmatch(digits):
        return None
    value = int(digits, 16)
    if value > 0xFF:
        return None
    return value


# =============================================================================
# Parser
# =============================================================================

class Parser:
    """
    First pass: symbolize the token stream and resolve instructions.

    Usage:
        lexer = Lexer(source, filename)
        parser = Parser(list(lexer.tokenize()), lexer=lexer)
        result = parser.parse()
    """

    def __init__(
        self,
        tokens: list[Token],
        config: Optional[AssemblerConfig] = None,
        lexer: Optional[Lexer] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: List of tokens from the lexer
            config: Assembler configuration (strict mode, region sizes)
            lexer: Lexer that produced the tokens, used for error context
        """
        self._tokens = tokens
        self._config = config or AssemblerConfig()
        self._lexer = lexer
        self._pos = 0

        self._operations: list[Operation] = []
        self._symbols = SymbolTable(strict=self._config.strict)
        self._pc = 0
        self._memory_pointer = self._config.data_start
        self._in_comment = False
        self._program_overflow_reported = False
        self._data_overflow_reported = False

    def parse(self) -> ParseResult:
        """
        Run the first pass over all tokens.

        Returns:
            ParseResult with operations and the completed symbol table

        Raises:
            AssemblySyntaxError: Malformed literal or incomplete declaration
            InvalidInstructionError: No table entry for mnemonic + mode
            DuplicateSymbolError: Redefinition in strict mode
            AddressSpaceError: Region overflow in strict mode
        """
        while not self._at_end():
            token = self._advance()

            if token.text.startswith(COMMENT_PREFIX):
                self._in_comment = not self._in_comment
                continue

            if self._in_comment:
                continue

            if token.text.endswith(LABEL_SUFFIX):
                self._define_label(token)
            elif token.text == VARIABLE_KEYWORD:
                self._declare_variable(token)
            else:
                self._parse_instruction(token)

        if self._in_comment:
            logger.debug("Source ends inside an unterminated comment")

        variable_count = self._memory_pointer - self._config.data_start
        logger.debug(
            f"Pass 1 complete: {len(self._operations)} operations, "
            f"{self._pc} bytes, {len(self._symbols)} symbols"
        )

        return ParseResult(
            operations=self._operations,
            symbols=self._symbols,
            program_size=self._pc,
            variable_count=variable_count,
        )

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _peek(self) -> Optional[Token]:
        """Look at the next unconsumed token without consuming it."""
        if self._at_end():
            return None
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _source_line(self, token: Token) -> Optional[str]:
        if self._lexer is None:
            return None
        return self._lexer.get_line(token.line)

    # =========================================================================
    # Labels and Variables
    # =========================================================================

    def _define_label(self, token: Token) -> None:
        name = token.text.strip(LABEL_SUFFIX)
        self._symbols.define_label(name, self._wrap(self._pc), token.location)

    def _declare_variable(self, keyword: Token) -> None:
        name_token = self._peek()
        if name_token is None:
            raise AssemblySyntaxError(
                "incomplete variable declaration",
                keyword.location,
                hint=f"{VARIABLE_KEYWORD} must be followed by a variable name",
                source_line=self._source_line(keyword),
            )
        self._advance()

        self._check_data_space(name_token)
        self._symbols.define_variable(
            name_token.text, self._wrap(self._memory_pointer), name_token.location
        )
        self._memory_pointer += 1

    # =========================================================================
    # Instructions
    # =========================================================================

    def _parse_instruction(self, mnemonic_token: Token) -> None:
        mnemonic = mnemonic_token.text
        operand_token = self._peek()
        mode = ArgumentMode.NONE
        if operand_token is not None:
            mode = detect_argument_mode(operand_token.text)

        instruction = resolve_instruction(mnemonic, mode)
        if instruction is None:
            raise InvalidInstructionError(
                mnemonic,
                str(mode),
                location=mnemonic_token.location,
                source_line=self._source_line(mnemonic_token),
                valid_modes=[str(m) for m in get_valid_modes(mnemonic)],
            )

        if mode is ArgumentMode.NONE:
            argument = OperationArgument.none()
        else:
            argument = self._parse_operand(operand_token, mode)
            self._advance()

        operation = Operation(
            instruction=instruction,
            argument=argument,
            location=mnemonic_token.location,
            address=self._wrap(self._pc),
        )
        self._check_program_space(operation)
        self._operations.append(operation)
        self._pc += operation.size

    def _parse_operand(self, token: Token, mode: ArgumentMode) -> OperationArgument:
        if mode is ArgumentMode.VALUE:
            value = parse_immediate(token.text)
            if value is None:
                raise AssemblySyntaxError(
                    f"invalid argument '{token.text}'",
                    token.location,
                    hint="immediate values are hexadecimal bytes, 0x00 to 0xFF",
                    source_line=self._source_line(token),
                )
            return OperationArgument.immediate(value)

        name = token.text.strip(ADDRESS_PREFIX)
        if not name:
            raise AssemblySyntaxError(
                f"missing symbol name in '{token.text}'",
                token.location,
                source_line=self._source_line(token),
            )

        if mode is ArgumentMode.DEREFERENCE:
            return OperationArgument.dereference(name)
        return OperationArgument.address(name)

    # =========================================================================
    # Address Space
    # =========================================================================

    def _wrap(self, address: int) -> int:
        """Truncate an address to the machine's address space."""
        return address % self._config.address_space

    def _check_program_space(self, operation: Operation) -> None:
        last_byte = self._pc + operation.size - 1
        limit = self._config.program_size - 1
        if last_byte <= limit:
            return

        if self._config.strict:
            raise AddressSpaceError(
                "program", last_byte, limit,
                location=operation.location,
            )
        if not self._program_overflow_reported:
            self._program_overflow_reported = True
            logger.warning(
                f"{operation.location}: program exceeds {self._config.program_size} "
                f"bytes and overlaps the data region"
            )

    def _check_data_space(self, name_token: Token) -> None:
        limit = self._config.address_space - 1
        if self._memory_pointer <= limit:
            return

        if self._config.strict:
            raise AddressSpaceError(
                "data", self._memory_pointer, limit,
                location=name_token.location,
                source_line=self._source_line(name_token),
            )
        if not self._data_overflow_reported:
            self._data_overflow_reported = True
            logger.warning(
                f"{name_token.location}: variable '{name_token.text}' wraps around "
                f"to address ${self._wrap(self._memory_pointer):02X}"
            )


def parse_source(
    source: str,
    filename: str = "<input>",
    config: Optional[AssemblerConfig] = None,
) -> ParseResult:
    """
    Convenience function to run the first pass over assembly source.

    Args:
        source: Assembly source text
        filename: Source filename for error messages
        config: Assembler configuration

    Returns:
        ParseResult with operations and symbol table
    """
    lexer = Lexer(source, filename)
    tokens = list(lexer.tokenize())
    logger.debug(f"Tokenized {filename}: {len(tokens)} tokens")
    return Parser(tokens, config=config, lexer=lexer).parse()
