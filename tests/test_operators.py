"""
Test suite for the Monkey operator table.
"""

import dataclasses
import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from monkey.lexer import Lexer, TokenType
from monkey.parser import OperatorTable, Parser, Precedence, binding_power
from monkey.parser.operators import PRECEDENCES


class TestPrecedence(unittest.TestCase):
    """Test cases for binding powers."""

    def test_total_order(self):
        ordered = [
            Precedence.LOWEST, Precedence.EQUALS, Precedence.LESSGREATER,
            Precedence.SUM, Precedence.PRODUCT, Precedence.PREFIX, Precedence.CALL,
        ]

        self.assertEqual(sorted(Precedence), ordered)
        self.assertEqual(int(Precedence.LOWEST), 1)

    def test_binding_powers(self):
        cases = {
            TokenType.EQUAL: Precedence.EQUALS,
            TokenType.NOT_EQUAL: Precedence.EQUALS,
            TokenType.LESS_THAN: Precedence.LESSGREATER,
            TokenType.GREATER_THAN: Precedence.LESSGREATER,
            TokenType.PLUS: Precedence.SUM,
            TokenType.MINUS: Precedence.SUM,
            TokenType.MULTIPLY: Precedence.PRODUCT,
            TokenType.DIVIDE: Precedence.PRODUCT,
        }
        for token_type, precedence in cases.items():
            with self.subTest(token_type=token_type):
                self.assertEqual(binding_power(token_type), precedence)

    def test_unregistered_tokens_bind_lowest(self):
        for token_type in (TokenType.SEMICOLON, TokenType.RIGHT_PAREN, TokenType.LEFT_PAREN,
                           TokenType.LOGICAL_NOT, TokenType.EOF):
            with self.subTest(token_type=token_type):
                self.assertEqual(binding_power(token_type), Precedence.LOWEST)

    def test_call_level_unused(self):
        self.assertNotIn(Precedence.CALL, set(PRECEDENCES.values()))


class TestOperatorTable(unittest.TestCase):
    """Test cases for the read-only dispatch table."""

    def test_table_is_read_only(self):
        table = Parser(Lexer("")).operators

        with self.assertRaises(TypeError):
            table.prefix_parsers[TokenType.ELSE] = lambda: None
        with self.assertRaises(TypeError):
            table.precedences[TokenType.ASSIGN] = Precedence.CALL
        with self.assertRaises(dataclasses.FrozenInstanceError):
            table.infix_parsers = {}

    def test_table_copies_its_inputs(self):
        prefix = {TokenType.IDENTIFIER: lambda: None}
        table = OperatorTable(prefix, {})

        prefix[TokenType.INTEGER] = lambda: None

        self.assertIsNone(table.prefix_parser(TokenType.INTEGER))
        self.assertIsNotNone(table.prefix_parser(TokenType.IDENTIFIER))

    def test_default_precedences(self):
        table = OperatorTable({}, {})

        self.assertEqual(table.binding_power(TokenType.MULTIPLY), Precedence.PRODUCT)
        self.assertEqual(table.binding_power(TokenType.ASSIGN), Precedence.LOWEST)

    def test_parser_registrations(self):
        table = Parser(Lexer("")).operators

        for token_type in (TokenType.IDENTIFIER, TokenType.INTEGER, TokenType.TRUE,
                           TokenType.FALSE, TokenType.LOGICAL_NOT, TokenType.MINUS,
                           TokenType.LEFT_PAREN, TokenType.IF):
            self.assertIsNotNone(table.prefix_parser(token_type), token_type)

        self.assertEqual(set(table.infix_parsers), set(PRECEDENCES))
        self.assertIsNone(table.prefix_parser(TokenType.PLUS))


if __name__ == '__main__':
    unittest.main()
