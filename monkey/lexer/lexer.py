"""
Monkey Lexer - turns source text into tokens on demand.

The parser only needs a token source with a ``next_token()`` method that
keeps returning EOF once the input is exhausted. Both ``Lexer`` and
``TokenStream`` (a replay over an already built token list) provide that.
"""

import re
from typing import Iterable, List, Optional, Protocol, Sequence

from .tokens import Token, TokenType, SourceLocation, KEYWORDS, OPERATORS
from .errors import LexerError, create_invalid_character_error


class TokenSource(Protocol):
    """Anything the parser can pull tokens from."""

    def next_token(self) -> Token:
        ...


class Lexer:
    """
    Monkey lexical analyzer.

    Produces one token per ``next_token()`` call. Characters that do not
    start any token are reported in ``errors`` and surface as INVALID
    tokens so the parser can diagnose them in context.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.errors: List[LexerError] = []

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""

        # Integer lexemes swallow trailing identifier characters so that
        # base prefixes (0x1F) and malformed literals (12ab) stay one token
        self.integer_pattern = re.compile(r'\d\w*', re.ASCII)
        self.identifier_pattern = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')

    def next_token(self) -> Token:
        """Return the next token; EOF is returned forever at end of input."""
        self._skip_whitespace_and_comments()

        start_pos = self.pos
        location = SourceLocation(self.filename, self.line, self.column, start_pos)

        if self.pos >= len(self.source):
            return Token(TokenType.EOF, "", location)

        current_char = self.source[self.pos]

        # Numbers
        if current_char.isdigit():
            match = self.integer_pattern.match(self.source, self.pos)
            if match:
                return self._emit(TokenType.INTEGER, match.group(0), location)

        # Identifiers and keywords
        match = self.identifier_pattern.match(self.source, self.pos)
        if match:
            lexeme = match.group(0)
            token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
            return self._emit(token_type, lexeme, location)

        # Operators and punctuation (longest match first)
        for op_len in (2, 1):
            potential_op = self.source[self.pos:self.pos + op_len]
            if len(potential_op) == op_len and potential_op in OPERATORS:
                return self._emit(OPERATORS[potential_op], potential_op, location)

        self.errors.append(create_invalid_character_error(current_char, location))
        return self._emit(TokenType.INVALID, current_char, location)

    def tokenize(self) -> List[Token]:
        """
        Tokenize the remaining source code.

        Returns:
            List of tokens including the final EOF token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def _emit(self, token_type: TokenType, lexeme: str, location: SourceLocation) -> Token:
        self._advance_by(len(lexeme))
        return Token(token_type, lexeme, location)

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and // line comments."""
        while self.pos < len(self.source):
            if self.source[self.pos].isspace():
                self._advance()
                continue

            if self.source.startswith('//', self.pos):
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self._advance()
                continue

            break

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        for _ in range(count):
            self._advance()

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0


class TokenStream:
    """
    Token source over a pre-built token sequence.

    Once the sequence is exhausted (or an EOF token is reached) the final
    EOF token is returned on every further call.
    """

    def __init__(self, tokens: Iterable[Token], filename: str = "<tokens>"):
        self._tokens: Sequence[Token] = list(tokens)
        self._index = 0
        self._eof = self._find_eof(filename)

    def _find_eof(self, filename: str) -> Token:
        for token in self._tokens:
            if token.type == TokenType.EOF:
                return token
        if self._tokens:
            location = self._tokens[-1].location
        else:
            location = SourceLocation(filename, 1, 1, 0)
        return Token(TokenType.EOF, "", location)

    def next_token(self) -> Token:
        if self._index >= len(self._tokens):
            return self._eof
        token = self._tokens[self._index]
        if token.type == TokenType.EOF:
            return token
        self._index += 1
        return token


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        # Raise the first error encountered
        raise lexer.errors[0]

    return tokens


def tokenize_file(filepath: str, encoding: Optional[str] = "utf-8") -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Args:
        filepath: Path to source file
        encoding: Text encoding of the file

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding=encoding) as f:
        source = f.read()

    return tokenize_string(source, filepath)
