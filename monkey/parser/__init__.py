"""
Monkey Parser Package

Implements a Pratt-based recursive descent parser for the Monkey language.
Produces immutable Abstract Syntax Trees and an ordered list of diagnostics.

Key Features:
- Top-down operator precedence (Pratt parsing) with a read-only operator table
- let/return/expression statements, blocks and if/else expressions
- Canonical fully parenthesized rendering of every node
- Error recovery: errors are collected, never raised out of the parser
"""

from .ast_nodes import *
from .operators import OperatorTable, Precedence, binding_power
from .parser import Parser, parse_string, parse_file
from .errors import (
    ParseError, ExpectedTokenError, UnknownOperatorError,
    LiteralFormatError, UnterminatedBlockError, DiagnosticCollector,
)
from .tracing import enable_tracing, disable_tracing

__all__ = [
    # Core parser
    "Parser", "parse_string", "parse_file",
    "OperatorTable", "Precedence", "binding_power",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "walk",
    "Program", "Statement", "Expression",
    "LetStatement", "ReturnStatement", "ExpressionStatement", "BlockStatement",
    "Identifier", "IntegerLiteral", "BooleanLiteral",
    "PrefixExpression", "InfixExpression", "IfExpression",

    # Error handling
    "ParseError", "ExpectedTokenError", "UnknownOperatorError",
    "LiteralFormatError", "UnterminatedBlockError", "DiagnosticCollector",

    # Tracing
    "enable_tracing", "disable_tracing",
]
