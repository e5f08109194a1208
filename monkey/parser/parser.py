"""
Monkey Pratt Parser Implementation

Implements a top-down operator precedence (Pratt) parser for Monkey.
The parser keeps a two-token lookahead window (current and peek) over a
token source, dispatches statements on the current token and climbs
operator precedence for expressions.

Errors never abort the parse: each one is recorded in the diagnostics
collector, the affected statement is dropped and parsing resumes at the
next statement.
"""

import logging
import re
from typing import Iterable, List, Optional, Union

from ..lexer.tokens import Token, TokenType
from ..lexer.lexer import Lexer, TokenSource, TokenStream
from .ast_nodes import (
    Program, Identifier, IntegerLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, IfExpression,
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement,
    Expression, Statement,
)
from .errors import (
    ParseError, DiagnosticCollector, SyntaxErrorRecovery,
    create_expected_token_error, create_unknown_operator_error,
    create_literal_format_error, create_unterminated_block_error,
)
from .operators import OperatorTable, Precedence, PRECEDENCES
from .tracing import traced

logger = logging.getLogger(__name__)

INT64_MAX = 2 ** 63 - 1

# Leading-zero octal such as 0755
_LEGACY_OCTAL = re.compile(r'0[0-7_]+')


def convert_integer(lexeme: str) -> Optional[int]:
    """
    Convert integer literal text to its value.

    Accepts decimal, 0x/0o/0b prefixed and leading-zero octal literals
    with ``_`` separators. Returns None for malformed text or values that
    do not fit in a signed 64-bit integer.
    """
    try:
        if _LEGACY_OCTAL.fullmatch(lexeme):
            value = int(lexeme, 8)
        else:
            value = int(lexeme, 0)
    except ValueError:
        return None

    if value > INT64_MAX:
        return None
    return value


class Parser:
    """
    Monkey Pratt parser.

    A parser instance is single-use: build it over one token source, call
    ``parse_program`` once and read ``errors`` afterwards.
    """

    def __init__(self, tokens: Union[TokenSource, Iterable[Token]], filename: str = "<tokens>"):
        """
        Initialize parser over a token source.

        Args:
            tokens: Object with a ``next_token()`` method, or a sequence of
                tokens (wrapped in a TokenStream)
            filename: Name used for a synthesised EOF token
        """
        if hasattr(tokens, "next_token"):
            self.source = tokens
        else:
            self.source = TokenStream(tokens, filename)

        self.diagnostics = DiagnosticCollector()
        self._trace_depth = 0

        self.current_token: Optional[Token] = None
        self.peek_token: Optional[Token] = None

        self._init_parsing_tables()

        # Fill the lookahead window: current = first token, peek = second
        self._advance()
        self._advance()

    def _init_parsing_tables(self):
        """Build the operator table; it is read-only afterwards."""

        # Prefix parsing functions (for tokens that can start expressions)
        prefix_parsers = {
            TokenType.IDENTIFIER: self._parse_identifier,
            TokenType.INTEGER: self._parse_integer_literal,
            TokenType.TRUE: self._parse_boolean_literal,
            TokenType.FALSE: self._parse_boolean_literal,
            TokenType.LOGICAL_NOT: self._parse_prefix_expression,
            TokenType.MINUS: self._parse_prefix_expression,
            TokenType.LEFT_PAREN: self._parse_grouped_expression,
            TokenType.IF: self._parse_if_expression,
        }

        # Infix parsing functions (binary operators)
        infix_parsers = {token_type: self._parse_infix_expression for token_type in PRECEDENCES}

        self.operators = OperatorTable(prefix_parsers, infix_parsers, PRECEDENCES)

    @property
    def errors(self) -> List[ParseError]:
        """Recorded parse errors, in source order."""
        return self.diagnostics.errors

    def messages(self) -> List[str]:
        return self.diagnostics.messages()

    def has_errors(self) -> bool:
        return self.diagnostics.has_errors()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    @traced
    def parse_program(self) -> Program:
        """
        Parse the whole token source into a Program.

        Always returns a Program; statements that failed to parse are
        omitted and their errors are available through ``errors``.
        """
        statements = []

        while not self._current_is(TokenType.EOF):
            statement = self._parse_statement()
            if statement is not None:
                statements.append(statement)
            else:
                self._synchronize()
            self._advance()

        logger.debug("parsed %d statements, %d errors", len(statements), len(self.diagnostics))
        return Program(tuple(statements))

    def _parse_statement(self) -> Optional[Statement]:
        """Dispatch on the current token; None if the statement is broken."""
        if self._current_is(TokenType.LET):
            return self._parse_let_statement()
        if self._current_is(TokenType.RETURN):
            return self._parse_return_statement()
        return self._parse_expression_statement()

    @traced
    def _parse_let_statement(self) -> Optional[LetStatement]:
        """Parse ``let <identifier> = <expression>;``."""
        start_token = self.current_token

        if not self._expect_peek(TokenType.IDENTIFIER):
            return None
        name = Identifier(self.current_token, self.current_token.lexeme)

        if not self._expect_peek(TokenType.ASSIGN):
            return None

        # Move onto the first token of the value
        self._advance()
        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._consume_statement_terminator()
        return LetStatement(start_token, name, value)

    @traced
    def _parse_return_statement(self) -> Optional[ReturnStatement]:
        """Parse ``return <expression>;``."""
        start_token = self.current_token

        self._advance()
        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._consume_statement_terminator()
        return ReturnStatement(start_token, value)

    @traced
    def _parse_expression_statement(self) -> Optional[ExpressionStatement]:
        start_token = self.current_token

        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        self._consume_statement_terminator()
        return ExpressionStatement(start_token, expression)

    @traced
    def _parse_block_statement(self) -> BlockStatement:
        """
        Parse ``{ ... }`` starting at the opening brace.

        A block cut short by end of input is reported and returned with
        the statements collected so far.
        """
        start_token = self.current_token
        statements = []

        self._advance()
        while not self._current_is(TokenType.RIGHT_BRACE) and not self._current_is(TokenType.EOF):
            statement = self._parse_statement()
            if statement is not None:
                statements.append(statement)
            elif self._current_is(TokenType.RIGHT_BRACE):
                # The broken statement ran into this block's closing brace
                break
            else:
                self._synchronize()
            self._advance()

        if self._current_is(TokenType.EOF):
            self.diagnostics.report(create_unterminated_block_error(start_token, self.current_token))

        return BlockStatement(start_token, tuple(statements))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    @traced
    def _parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        """Parse an expression whose operators bind tighter than ``precedence``."""
        prefix_parser = self.operators.prefix_parser(self.current_token.type)
        if prefix_parser is None:
            self.diagnostics.report(create_unknown_operator_error(self.current_token))
            return None

        left = prefix_parser()
        if left is None:
            return None

        # Strict comparison keeps operators of equal precedence left-associative
        while not self._peek_is(TokenType.SEMICOLON) and precedence < self._peek_precedence():
            infix_parser = self.operators.infix_parser(self.peek_token.type)
            if infix_parser is None:
                return left

            self._advance()
            left = infix_parser(left)
            if left is None:
                return None

        return left

    # Prefix parsers (tokens that can start expressions)

    def _parse_identifier(self) -> Identifier:
        token = self.current_token
        return Identifier(token, token.lexeme)

    @traced
    def _parse_integer_literal(self) -> Optional[IntegerLiteral]:
        token = self.current_token

        value = convert_integer(token.lexeme)
        if value is None:
            self.diagnostics.report(create_literal_format_error(token))
            return None

        return IntegerLiteral(token, value)

    def _parse_boolean_literal(self) -> BooleanLiteral:
        token = self.current_token
        return BooleanLiteral(token, self._current_is(TokenType.TRUE))

    @traced
    def _parse_prefix_expression(self) -> Optional[PrefixExpression]:
        """Parse ``!<operand>`` or ``-<operand>``."""
        operator_token = self.current_token

        self._advance()
        operand = self._parse_expression(Precedence.PREFIX)
        if operand is None:
            return None

        return PrefixExpression(operator_token, operator_token.lexeme, operand)

    def _parse_grouped_expression(self) -> Optional[Expression]:
        """Parse parenthesized expression."""
        self._advance()  # Consume (

        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if not self._expect_peek(TokenType.RIGHT_PAREN):
            return None
        return expression

    @traced
    def _parse_if_expression(self) -> Optional[IfExpression]:
        """Parse ``if (<condition>) { ... } else { ... }``."""
        start_token = self.current_token

        if not self._expect_peek(TokenType.LEFT_PAREN):
            return None

        self._advance()
        condition = self._parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self._expect_peek(TokenType.RIGHT_PAREN):
            return None
        if not self._expect_peek(TokenType.LEFT_BRACE):
            return None
        consequence = self._parse_block_statement()

        alternative = None
        if self._peek_is(TokenType.ELSE):
            self._advance()
            if not self._expect_peek(TokenType.LEFT_BRACE):
                return None
            alternative = self._parse_block_statement()

        return IfExpression(start_token, condition, consequence, alternative)

    # Infix parsers

    @traced
    def _parse_infix_expression(self, left: Expression) -> Optional[InfixExpression]:
        """Parse the right operand of the binary operator under ``current``."""
        operator_token = self.current_token
        precedence = self._current_precedence()

        self._advance()
        right = self._parse_expression(precedence)
        if right is None:
            return None

        return InfixExpression(operator_token, operator_token.lexeme, left, right)

    # ------------------------------------------------------------------
    # Token window helpers
    # ------------------------------------------------------------------

    def _advance(self):
        """Shift peek into current and pull the next token from the source."""
        self.current_token = self.peek_token
        self.peek_token = self.source.next_token()

    def _current_is(self, token_type: TokenType) -> bool:
        return self.current_token.type == token_type

    def _peek_is(self, token_type: TokenType) -> bool:
        return self.peek_token.type == token_type

    def _expect_peek(self, token_type: TokenType) -> bool:
        """Advance if peek has the expected type, otherwise record an error."""
        if self._peek_is(token_type):
            self._advance()
            return True

        self.diagnostics.report(create_expected_token_error(token_type, self.peek_token))
        return False

    def _peek_precedence(self) -> Precedence:
        return self.operators.binding_power(self.peek_token.type)

    def _current_precedence(self) -> Precedence:
        return self.operators.binding_power(self.current_token.type)

    def _consume_statement_terminator(self):
        """Consume an optional trailing semicolon."""
        if self._peek_is(TokenType.SEMICOLON):
            self._advance()

    def _synchronize(self):
        """
        Skip the remainder of a statement that failed to parse.

        Stops on the statement's terminator or just before the next
        statement boundary. Braces opened in the skipped text are skipped
        through their match, so no stray '}' is left behind.
        """
        depth = 1 if self._current_is(TokenType.LEFT_BRACE) else 0
        while not self._current_is(TokenType.EOF):
            if depth == 0 and (
                    self.current_token.type in SyntaxErrorRecovery.STATEMENT_TERMINATORS
                    or self.peek_token.type in SyntaxErrorRecovery.STATEMENT_BOUNDARIES):
                return

            self._advance()
            if self._current_is(TokenType.LEFT_BRACE):
                depth += 1
            elif self._current_is(TokenType.RIGHT_BRACE):
                depth -= 1


def parse_string(source: str, filename: str = "<string>", strict: bool = True) -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        strict: Raise the first lexer or parser error instead of returning
            a partial program

    Returns:
        Program AST

    Raises:
        LexerError: In strict mode, if the source has invalid characters
        ParseError: In strict mode, if parsing reported errors
    """
    lexer = Lexer(source, filename)
    parser = Parser(lexer)
    program = parser.parse_program()

    if strict:
        if lexer.has_errors():
            raise lexer.errors[0]
        if parser.has_errors():
            raise parser.errors[0]

    return program


def parse_file(filepath: str, strict: bool = True) -> Program:
    """
    Convenience function to parse a source file.

    Args:
        filepath: Path to source file
        strict: See ``parse_string``

    Returns:
        Program AST

    Raises:
        ParseError: If parsing fails in strict mode
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath, strict=strict)
