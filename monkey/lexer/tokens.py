"""
Token definitions for the Monkey lexer.

This module defines all token types the Monkey front end understands:
- Keywords (let, return, if, else, true, false)
- Operators (arithmetic, comparison, logical not, assignment)
- Literals (integers) and identifiers
- Punctuation and delimiters
"""

from enum import Enum, auto
from dataclasses import dataclass


class TokenType(Enum):
    """Token types of the Monkey language."""

    # Special
    EOF = auto()                    # End of input (repeats forever)
    INVALID = auto()                # Unrecognized character

    # Literals and Identifiers
    IDENTIFIER = auto()             # x, foo_bar
    INTEGER = auto()                # 42, 0x2A, 1_000

    # Keywords
    LET = auto()                    # let
    RETURN = auto()                 # return
    IF = auto()                     # if
    ELSE = auto()                   # else
    TRUE = auto()                   # true
    FALSE = auto()                  # false

    # Operators
    ASSIGN = auto()                 # =
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    LOGICAL_NOT = auto()            # !
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /

    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=
    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >

    # Delimiters
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    SEMICOLON = auto()              # ;


@dataclass(frozen=True)
class SourceLocation:
    """Position of a token in the source text."""
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Monkey language.

    Contains the token type, the lexeme (raw literal text) and the
    source location of its first character.
    """
    type: TokenType
    lexeme: str
    location: SourceLocation

    def __str__(self) -> str:
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.location!r})"

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORDS.values()

    @property
    def is_operator(self) -> bool:
        """Check if this token is an operator or delimiter."""
        return self.type in OPERATORS.values()


# Lookup tables for keyword/operator recognition

KEYWORDS = {
    "let": TokenType.LET,
    "return": TokenType.RETURN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

OPERATORS = {
    # Arithmetic
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,

    # Assignment
    "=": TokenType.ASSIGN,

    # Comparison
    "==": TokenType.EQUAL,
    "!=": TokenType.NOT_EQUAL,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,

    # Logical
    "!": TokenType.LOGICAL_NOT,

    # Punctuation
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ";": TokenType.SEMICOLON,
}

# Canonical spelling of fixed-text token types, used in diagnostics
TOKEN_SPELLINGS = {token_type: text for text, token_type in {**KEYWORDS, **OPERATORS}.items()}


def describe_token_type(token_type: TokenType) -> str:
    """Render a token type with its spelling, e.g. ``ASSIGN ('=')``."""
    spelling = TOKEN_SPELLINGS.get(token_type)
    if spelling is None:
        return token_type.name
    return f"{token_type.name} ({spelling!r})"
