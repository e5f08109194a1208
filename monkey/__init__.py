"""
Monkey Front End Package

A lexer and Pratt parser for the Monkey expression language: let and
return statements, integer and boolean literals, prefix and infix
operators, and if/else expressions with block bodies.

Architecture:
    monkey/
    ├── lexer/           # Tokens, reference tokenizer, token sources
    └── parser/          # AST, operator table, diagnostics, Pratt parser
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer
from .parser import Parser, parse_string, parse_file

__all__ = [
    "Lexer",
    "Parser",
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__license__",
]
