"""
Operator table for the Monkey Pratt parser.

Binding powers form an explicit total order: comparisons in the parser
rely on ``Precedence`` members comparing as integers, so the member order
below is part of the parser's contract.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from ..lexer.tokens import TokenType
from .ast_nodes import Expression


class Precedence(IntEnum):
    """Operator precedence levels for Pratt parsing, lowest first."""
    LOWEST = 1
    EQUALS = 2          # == !=
    LESSGREATER = 3     # < >
    SUM = 4             # + -
    PRODUCT = 5         # * /
    PREFIX = 6          # -x !x
    CALL = 7            # reserved for call expressions


PRECEDENCES: Mapping[TokenType, Precedence] = MappingProxyType({
    TokenType.EQUAL: Precedence.EQUALS,
    TokenType.NOT_EQUAL: Precedence.EQUALS,
    TokenType.LESS_THAN: Precedence.LESSGREATER,
    TokenType.GREATER_THAN: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.MULTIPLY: Precedence.PRODUCT,
    TokenType.DIVIDE: Precedence.PRODUCT,
})


PrefixParser = Callable[[], Optional[Expression]]
InfixParser = Callable[[Expression], Optional[Expression]]


def binding_power(token_type: TokenType) -> Precedence:
    """Get precedence for a token type, LOWEST when none is registered."""
    return PRECEDENCES.get(token_type, Precedence.LOWEST)


@dataclass(frozen=True, eq=False)
class OperatorTable:
    """
    Prefix/infix handler dispatch plus binding powers.

    Built once per parser; the mappings are wrapped read-only so the
    table cannot change after construction.
    """
    prefix_parsers: Mapping[TokenType, PrefixParser]
    infix_parsers: Mapping[TokenType, InfixParser]
    precedences: Mapping[TokenType, Precedence] = field(default_factory=lambda: PRECEDENCES)

    def __post_init__(self):
        for name in ("prefix_parsers", "infix_parsers", "precedences"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def binding_power(self, token_type: TokenType) -> Precedence:
        return self.precedences.get(token_type, Precedence.LOWEST)

    def prefix_parser(self, token_type: TokenType) -> Optional[PrefixParser]:
        return self.prefix_parsers.get(token_type)

    def infix_parser(self, token_type: TokenType) -> Optional[InfixParser]:
        return self.infix_parsers.get(token_type)
