"""
Test suite for Monkey AST nodes.

Tests cover:
- Canonical rendering of hand-built trees
- Token literals
- Structural equality and immutability
- Visitor dispatch and pre-order walking
"""

import dataclasses
import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from monkey.lexer import Token, TokenType, SourceLocation
from monkey.parser import (
    parse_string, walk, ASTVisitor, ASTNodeType,
    Program, Identifier, IntegerLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, IfExpression,
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement,
)


def tok(token_type: TokenType, lexeme: str) -> Token:
    return Token(token_type, lexeme, SourceLocation("<test>", 1, 1, 0))


def ident(name: str) -> Identifier:
    return Identifier(tok(TokenType.IDENTIFIER, name), name)


class TestRendering(unittest.TestCase):
    """Test cases for str() of hand-built nodes."""

    def test_let_statement(self):
        program = Program((
            LetStatement(tok(TokenType.LET, "let"), ident("myVar"), ident("anotherVar")),
        ))

        self.assertEqual(str(program), "let myVar = anotherVar;")

    def test_return_statement(self):
        statement = ReturnStatement(
            tok(TokenType.RETURN, "return"),
            BooleanLiteral(tok(TokenType.FALSE, "false"), False),
        )

        self.assertEqual(str(statement), "return false;")

    def test_integer_renders_lexeme(self):
        literal = IntegerLiteral(tok(TokenType.INTEGER, "0x10"), 16)

        self.assertEqual(str(literal), "0x10")

    def test_nested_expressions(self):
        expression = InfixExpression(
            tok(TokenType.MULTIPLY, "*"), "*",
            PrefixExpression(tok(TokenType.MINUS, "-"), "-", ident("a")),
            ident("b"),
        )

        self.assertEqual(str(expression), "((-a) * b)")
        self.assertEqual(expression.token_literal(), "*")

    def test_if_expression(self):
        consequence = BlockStatement(
            tok(TokenType.LEFT_BRACE, "{"),
            (ExpressionStatement(tok(TokenType.IDENTIFIER, "x"), ident("x")),),
        )
        expression = IfExpression(tok(TokenType.IF, "if"), ident("c"), consequence)

        self.assertEqual(str(expression), "if (c) { x }")
        self.assertEqual(expression.token_literal(), "if")
        self.assertEqual(consequence.token_literal(), "{")

    def test_program_joins_statements_with_newlines(self):
        program = parse_string("let a = 1; return a; a * 2")

        self.assertEqual(str(program), "let a = 1;\nreturn a;\n(a * 2)")


class TestNodeSemantics(unittest.TestCase):
    """Test cases for equality, immutability and node types."""

    def test_equality_ignores_tokens(self):
        left = Identifier(tok(TokenType.IDENTIFIER, "x"), "x")
        right = Identifier(Token(TokenType.IDENTIFIER, "x", SourceLocation("other", 9, 9, 99)), "x")

        self.assertEqual(left, right)
        self.assertEqual(hash(left), hash(right))
        self.assertNotEqual(left, ident("y"))

    def test_nodes_are_frozen(self):
        node = ident("x")

        with self.assertRaises(dataclasses.FrozenInstanceError):
            node.name = "y"

    def test_program_statements_are_tuple(self):
        program = parse_string("a; b")

        self.assertIsInstance(program.statements, tuple)
        self.assertIsInstance(program.statements[0].expression, Identifier)

    def test_node_types(self):
        program = parse_string("let a = !true;")
        statement = program.statements[0]

        self.assertEqual(program.node_type, ASTNodeType.PROGRAM)
        self.assertEqual(statement.node_type, ASTNodeType.LET_STATEMENT)
        self.assertEqual(statement.value.node_type, ASTNodeType.PREFIX_EXPRESSION)
        self.assertEqual(statement.value.operand.node_type, ASTNodeType.BOOLEAN_LITERAL)


class TestTraversal(unittest.TestCase):
    """Test cases for ASTVisitor and walk."""

    def test_walk_pre_order(self):
        program = parse_string("-a + 1")

        self.assertEqual(
            [type(node).__name__ for node in walk(program)],
            [
                "Program", "ExpressionStatement", "InfixExpression",
                "PrefixExpression", "Identifier", "IntegerLiteral",
            ],
        )

    def test_walk_if_children(self):
        program = parse_string("if (a) { b } else { c }")
        names = [node.name for node in walk(program) if isinstance(node, Identifier)]

        self.assertEqual(names, ["a", "b", "c"])

    def test_visitor_dispatch(self):
        """Visitor methods are found by node type; other nodes are walked."""

        class IdentifierCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_identifier(self, node):
                self.names.append(node.name)

            def visit_integer_literal(self, node):
                self.names.append(node.value)

        collector = IdentifierCollector()
        parse_string("let x = y * 2; return z;").accept(collector)

        self.assertEqual(collector.names, ["x", "y", 2, "z"])

    def test_visitor_return_value(self):

        class Depth(ASTVisitor):
            def generic_visit(self, node):
                return 1 + max((self.visit(child) for child in node.children()), default=0)

        self.assertEqual(Depth().visit(parse_string("1 + 2 * 3")), 5)


if __name__ == '__main__':
    unittest.main()
