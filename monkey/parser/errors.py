"""
Error handling for the Monkey parser.

Parse errors are exception objects so callers that want a hard failure
can raise them, but the parser itself only records them in a
DiagnosticCollector and keeps going.
"""

from typing import Iterator, List, Optional

from ..lexer.tokens import Token, TokenType, SourceLocation, describe_token_type
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Base class for syntax errors found by the parser.

    Carries the offending token and a Diagnostic with code and help text.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message,
            location,
            code=code,
            help_text=help_text,
            suggestions=list(suggestions or []),
        )
        self.token = token

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class ExpectedTokenError(ParseError):
    """A required token was not where the grammar expects it."""

    def __init__(self, expected: TokenType, found: Token, **kwargs):
        self.expected = expected
        self.found = found
        super().__init__(
            message=f"Expected {describe_token_type(expected)}, found {found.type.name} ({found.lexeme!r})",
            location=found.location,
            token=found,
            **kwargs
        )


class UnknownOperatorError(ParseError):
    """No prefix parse function exists for a token in expression position."""


class LiteralFormatError(ParseError):
    """Literal text could not be converted to its value type."""


class UnterminatedBlockError(ParseError):
    """A block was opened but the input ended before its closing brace."""


class SyntaxErrorRecovery:
    """
    Utilities for error recovery in the parser.

    Provides the token sets used to resynchronise after a broken statement
    and suggestion texts for missing tokens.
    """

    # Tokens ending the current statement; resynchronisation stops on them
    STATEMENT_TERMINATORS = {
        TokenType.SEMICOLON,
        TokenType.EOF,
    }

    # Tokens starting the next statement or closing the enclosing block
    STATEMENT_BOUNDARIES = {
        TokenType.LET,
        TokenType.RETURN,
        TokenType.RIGHT_BRACE,
        TokenType.EOF,
    }

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.IDENTIFIER: ["Add a variable name after 'let'"],
            TokenType.ASSIGN: ["Add an assignment operator '='"],
            TokenType.LEFT_PAREN: ["Wrap the condition in parentheses '( ... )'"],
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
            TokenType.LEFT_BRACE: ["Add an opening brace '{' to start a block"],
            TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
        }

        return list(token_suggestions.get(expected, []))


class DiagnosticCollector:
    """Ordered, append-only list of parse errors."""

    def __init__(self):
        self._errors: List[ParseError] = []

    def report(self, error: ParseError) -> ParseError:
        self._errors.append(error)
        return error

    @property
    def errors(self) -> List[ParseError]:
        """A copy of the recorded errors, in the order they were found."""
        return list(self._errors)

    def messages(self) -> List[str]:
        return [error.message for error in self._errors]

    def has_errors(self) -> bool:
        return len(self._errors) > 0

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[ParseError]:
        return iter(list(self._errors))


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Expected token not found",
    "P002": "Unknown operator in expression position",
    "P003": "Invalid literal",
    "P004": "Unterminated block",
}


# Helper functions for creating common parser errors

def create_expected_token_error(expected: TokenType, found: Token) -> ExpectedTokenError:
    """Create an error for a token that is not the one the grammar requires."""
    expected_str = describe_token_type(expected)

    return ExpectedTokenError(
        expected,
        found,
        code="P001",
        help_text=f"The parser expected to see {expected_str} at this position, but found {found.type.name} instead.",
        suggestions=SyntaxErrorRecovery.suggest_missing_token(expected)
    )


def create_unknown_operator_error(token: Token) -> UnknownOperatorError:
    """Create an error for a token that cannot start an expression."""
    return UnknownOperatorError(
        message=f"No prefix parse function for {token.type.name} ({token.lexeme!r}) found",
        location=token.location,
        token=token,
        code="P002",
        help_text=f"'{token.lexeme}' cannot start an expression.",
        suggestions=["Check for a missing operand", "Ensure all operators have operands"]
    )


def create_literal_format_error(token: Token, type_name: str = "integer") -> LiteralFormatError:
    """Create an error for literal text that cannot be converted."""
    return LiteralFormatError(
        message=f"Could not parse {token.lexeme!r} as {type_name}",
        location=token.location,
        token=token,
        code="P003",
        help_text=f"{type_name.capitalize()} literals must fit in a signed 64-bit value.",
        suggestions=["Check the numeric format", "Use a 0x, 0o or 0b prefix for other bases"]
    )


def create_unterminated_block_error(open_token: Token, eof_token: Token) -> UnterminatedBlockError:
    """Create an error for a block that reaches end of input before '}'."""
    return UnterminatedBlockError(
        message=f"Unterminated block: expected {describe_token_type(TokenType.RIGHT_BRACE)} before end of input",
        location=eof_token.location,
        token=eof_token,
        code="P004",
        help_text=f"The opening '{{' at {open_token.location} was never closed.",
        suggestions=SyntaxErrorRecovery.suggest_missing_token(TokenType.RIGHT_BRACE)
    )
