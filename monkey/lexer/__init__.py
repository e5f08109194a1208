"""
Monkey Lexer Package

Implements the reference tokenizer for the Monkey language and the token
source contract the parser consumes.

Key Features:
- On-demand tokenization through ``next_token()``
- EOF repeats indefinitely once the input is exhausted
- Invalid characters become INVALID tokens plus a recorded LexerError
- Source location tracking for diagnostics
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, TokenSource, TokenStream, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "TokenSource",
    "TokenStream",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
