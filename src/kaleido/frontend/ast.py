"""
Kaleido Abstract Syntax Tree (AST) Definitions
==============================================

This module defines the AST node types produced by the Kaleido parser.

Node Set
--------
The set of nodes is closed and small:

Expressions (Expr)
├── NumberLiteral - numeric constant
├── VariableRef - reference to a named value
├── BinaryOp - left op right, op in + - *
└── Call - callee(args...)

Top-level
├── Prototype - function name and parameter names
└── FunctionDef - prototype plus body (no body for extern declarations)

Design Notes
------------
- All nodes are frozen dataclasses; sequences are tuples, so a tree is
  immutable once built and no node is shared between trees.
- Nodes carry no behaviour beyond construction. Consumers match on the
  concrete class (isinstance, match, or ASTVisitor dispatch).
- BinaryOperator is a str enum, so BinaryOp.operator compares equal to
  its character: BinaryOperator.ADD == "+".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from kaleido.frontend.lexer import format_number


# =============================================================================
# AST Node Base Class
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """Base class for all AST nodes."""


# =============================================================================
# Expression Nodes
# =============================================================================

class BinaryOperator(str, Enum):
    """Recognised binary operators. All share one precedence level."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"

    def __str__(self) -> str:
        return self.value


# Characters the parser treats as binary operators ('/' is not one)
BINARY_OPERATORS = frozenset(op.value for op in BinaryOperator)


@dataclass(frozen=True)
class NumberLiteral(ASTNode):
    """
    Numeric constant.

    Attributes:
        value: The floating-point value
    """
    value: float


@dataclass(frozen=True)
class VariableRef(ASTNode):
    """
    Reference to a variable or parameter.

    Attributes:
        name: The referenced name
    """
    name: str


@dataclass(frozen=True)
class BinaryOp(ASTNode):
    """
    Binary operation (left op right).

    Attributes:
        operator: The operator character
        left: Left operand
        right: Right operand
    """
    operator: BinaryOperator
    left: "Expr"
    right: "Expr"


@dataclass(frozen=True)
class Call(ASTNode):
    """
    Function call.

    Attributes:
        callee: Name of the called function
        args: Argument expressions in source order
    """
    callee: str
    args: tuple["Expr", ...] = ()


Expr = Union[NumberLiteral, VariableRef, BinaryOp, Call]


# =============================================================================
# Top-Level Nodes
# =============================================================================

@dataclass(frozen=True)
class Prototype(ASTNode):
    """
    Function signature: name and parameter names, no body.

    Attributes:
        name: Function name
        params: Parameter names in declaration order
    """
    name: str
    params: tuple[str, ...] = ()


@dataclass(frozen=True)
class FunctionDef(ASTNode):
    """
    Function definition, or extern declaration when body is None.

    Top-level expressions are wrapped in an anonymous FunctionDef with
    a zero-parameter prototype, so every top-level form has this shape.

    Attributes:
        prototype: The function signature
        body: The body expression (None for extern)
    """
    prototype: Prototype
    body: Optional[Expr] = None

    @property
    def is_extern(self) -> bool:
        """True for a body-less extern declaration."""
        return self.body is None


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches visit(node) to visit_<ClassName>. Nodes without a
    matching method fall through to generic_visit, which walks children.

    Usage:
        class CallCollector(ASTVisitor):
            def __init__(self):
                self.callees = []

            def visit_Call(self, node):
                self.callees.append(node.callee)
                self.generic_visit(node)
    """

    def visit(self, node: ASTNode):
        """Visit a node by dispatching on its class name."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes in field order."""
        for value in node.__dict__.values():
            if isinstance(value, ASTNode):
                self.visit(value)
            elif isinstance(value, tuple):
                for item in value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# AST Pretty Printer
# =============================================================================

def format_expr(expr: Expr) -> str:
    """
    Render an expression on one line, binary operations parenthesized.

    >>> one_minus_two = BinaryOp("-", NumberLiteral(1), NumberLiteral(2))
    >>> format_expr(BinaryOp("*", one_minus_two, NumberLiteral(3)))
    '((1 - 2) * 3)'
    """
    if isinstance(expr, NumberLiteral):
        return format_number(expr.value)
    if isinstance(expr, VariableRef):
        return expr.name
    if isinstance(expr, BinaryOp):
        return f"({format_expr(expr.left)} {expr.operator} {format_expr(expr.right)})"
    if isinstance(expr, Call):
        args = ", ".join(format_expr(a) for a in expr.args)
        return f"{expr.callee}({args})"
    raise TypeError(f"not an expression node: {type(expr).__name__}")


def format_form(node: Union[FunctionDef, Prototype]) -> str:
    """Render a top-level form on one line."""
    if isinstance(node, Prototype):
        return f"extern {node.name}({' '.join(node.params)})"
    proto = node.prototype
    if node.is_extern:
        return format_form(proto)
    return f"def {proto.name}({' '.join(proto.params)}) {format_expr(node.body)}"


class ASTPrinter(ASTVisitor):
    """
    Indented tree dump for debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(function_def))
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the tree and return it as a string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _visit_indented(self, node: ASTNode) -> None:
        self.indent_level += 1
        self.visit(node)
        self.indent_level -= 1

    def visit_FunctionDef(self, node: FunctionDef):
        kind = "Extern" if node.is_extern else "Function"
        self._emit(kind)
        self._visit_indented(node.prototype)
        if node.body is not None:
            self._visit_indented(node.body)

    def visit_Prototype(self, node: Prototype):
        self._emit(f"Prototype: {node.name}({', '.join(node.params)})")

    def visit_NumberLiteral(self, node: NumberLiteral):
        self._emit(f"Number: {format_number(node.value)}")

    def visit_VariableRef(self, node: VariableRef):
        self._emit(f"Variable: {node.name}")

    def visit_BinaryOp(self, node: BinaryOp):
        self._emit(f"BinaryOp: {node.operator}")
        self._visit_indented(node.left)
        self._visit_indented(node.right)

    def visit_Call(self, node: Call):
        self._emit(f"Call: {node.callee}")
        for arg in node.args:
            self._visit_indented(arg)
