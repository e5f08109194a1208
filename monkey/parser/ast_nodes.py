"""
Abstract Syntax Tree node definitions for Monkey.

Every node is an immutable dataclass that exclusively owns its children
(child sequences are tuples, there are no parent links). Each node knows
the literal text of the token it started from and renders a canonical,
fully parenthesized form via ``str(node)``.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Iterator, List, Optional, Tuple, Union
from dataclasses import dataclass, field
from enum import Enum

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    PROGRAM = "Program"

    # Statements
    LET_STATEMENT = "LetStatement"
    RETURN_STATEMENT = "ReturnStatement"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    BLOCK_STATEMENT = "BlockStatement"

    # Expressions
    IDENTIFIER = "Identifier"
    INTEGER_LITERAL = "IntegerLiteral"
    BOOLEAN_LITERAL = "BooleanLiteral"
    PREFIX_EXPRESSION = "PrefixExpression"
    INFIX_EXPRESSION = "InfixExpression"
    IF_EXPRESSION = "IfExpression"


class ASTVisitor:
    """
    Base visitor for traversing AST nodes.

    ``visit`` dispatches to ``visit_<node type>`` (for example
    ``visit_infix_expression``) and falls back to ``generic_visit``,
    which visits every child in order.
    """

    def visit(self, node: 'ASTNode') -> Any:
        method = getattr(self, "visit_" + node.node_type.name.lower(), self.generic_visit)
        return method(node)

    def generic_visit(self, node: 'ASTNode') -> Any:
        for child in node.children():
            self.visit(child)
        return None


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ClassVar[ASTNodeType]

    @abstractmethod
    def token_literal(self) -> str:
        """Literal text of the token this node was built from."""

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)


class Statement(ASTNode):
    """Base class for statements."""


class Expression(ASTNode):
    """Base class for expressions."""


# ============================================================================
# Top-level
# ============================================================================

@dataclass(frozen=True)
class Program(ASTNode):
    """Root AST node; statements are kept in source order."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.PROGRAM

    statements: Tuple['StatementNode', ...] = ()

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def __str__(self) -> str:
        return "\n".join(str(statement) for statement in self.statements)


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class Identifier(Expression):
    """Variable reference, also used as the bound name of a let statement."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.IDENTIFIER

    token: Token = field(compare=False, repr=False)
    name: str

    def token_literal(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return []

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    """64-bit signed integer literal."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.INTEGER_LITERAL

    token: Token = field(compare=False, repr=False)
    value: int

    def token_literal(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return []

    def __str__(self) -> str:
        return self.token.lexeme


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.BOOLEAN_LITERAL

    token: Token = field(compare=False, repr=False)
    value: bool

    def token_literal(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return []

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class PrefixExpression(Expression):
    """Unary operation such as ``!ok`` or ``-x``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.PREFIX_EXPRESSION

    token: Token = field(compare=False, repr=False)
    operator: str
    operand: 'ExpressionNode'

    def token_literal(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return [self.operand]

    def __str__(self) -> str:
        return f"({self.operator}{self.operand})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    """Binary operation; the token is the operator token."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.INFIX_EXPRESSION

    token: Token = field(compare=False, repr=False)
    operator: str
    left: 'ExpressionNode'
    right: 'ExpressionNode'

    def token_literal(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IfExpression(Expression):
    """Conditional expression with block bodies and an optional else block."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.IF_EXPRESSION

    token: Token = field(compare=False, repr=False)
    condition: 'ExpressionNode'
    consequence: 'BlockStatement'
    alternative: Optional['BlockStatement'] = None

    def token_literal(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        children: List[ASTNode] = [self.condition, self.consequence]
        if self.alternative is not None:
            children.append(self.alternative)
        return children

    def __str__(self) -> str:
        result = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            result += f" else {self.alternative}"
        return result


# ============================================================================
# Statements
# ============================================================================

@dataclass(frozen=True)
class LetStatement(Statement):
    """``let <name> = <value>;``"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.LET_STATEMENT

    token: Token = field(compare=False, repr=False)
    name: Identifier
    value: 'ExpressionNode'

    def token_literal(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return [self.name, self.value]

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    """``return <value>;``"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.RETURN_STATEMENT

    token: Token = field(compare=False, repr=False)
    value: 'ExpressionNode'

    def token_literal(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return [self.value]

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    """An expression used in statement position; the token is its first token."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.EXPRESSION_STATEMENT

    token: Token = field(compare=False, repr=False)
    expression: 'ExpressionNode'

    def token_literal(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return [self.expression]

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    """Brace-delimited statement sequence; the token is the opening brace."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.BLOCK_STATEMENT

    token: Token = field(compare=False, repr=False)
    statements: Tuple['StatementNode', ...] = ()

    def token_literal(self) -> str:
        return self.token.lexeme

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        return "{ " + " ".join(str(statement) for statement in self.statements) + " }"


# Closed variant sets
StatementNode = Union[LetStatement, ReturnStatement, ExpressionStatement, BlockStatement]
ExpressionNode = Union[
    Identifier, IntegerLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, IfExpression,
]


def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Yield ``node`` and all of its descendants in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))
