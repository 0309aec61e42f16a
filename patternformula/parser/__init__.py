"""
Formula Parser Package

Precedence-climbing recursive descent parser for pattern-drafting formulas,
producing a small immutable expression tree.

Key Features:
- Arithmetic, power, comparison and ternary operators
- Function calls with one or two arguments (',' or ';' separated)
- '@custom' and '#hashed' measurement references
- Explicit parentheses kept in the tree
- All-or-nothing parsing with located diagnostics

Author: xwest
"""

from .ast_nodes import *
from .parser import FormulaParser, Precedence, parse, DEFAULT_MAX_DEPTH
from .errors import FormulaError

__all__ = [
    # Core parser
    "FormulaParser",
    "Precedence",
    "parse",
    "DEFAULT_MAX_DEPTH",

    # AST nodes
    "Expression", "ASTNodeType",
    "IntegerLiteral", "DecimalLiteral", "Reference", "Parenthesized",
    "Call", "BinaryOp", "Ternary",
    "BinaryOperator", "ReferenceKind", "OPERATOR_SYMBOLS",
    "walk", "format_number",

    # Error handling
    "FormulaError",
]
