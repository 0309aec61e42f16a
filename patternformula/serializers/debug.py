"""
Debug rendering of an expression tree.

Shows how the parser grouped things: every operation is wrapped in [ ],
integers are suffixed I and decimals D, and unary minus shows as -(x).

    a + 5 / 2   ->   " [a +  [ 5I  /  2I ] ] "
"""

from ..parser.ast_nodes import (
    Expression, IntegerLiteral, DecimalLiteral, Reference, Parenthesized,
    Call, BinaryOp, Ternary, OPERATOR_SYMBOLS, format_number
)
from .errors import create_unknown_node_error, create_unknown_operator_error


def to_debug_string(node: Expression) -> str:
    """Render ``node`` in the bracketed debug form."""
    if isinstance(node, IntegerLiteral):
        return " " + format_number(node.value) + "I "

    if isinstance(node, DecimalLiteral):
        return " " + format_number(node.value) + "D "

    if isinstance(node, Reference):
        return node.name

    if isinstance(node, Parenthesized):
        return "(" + to_debug_string(node.inner) + ")"

    if isinstance(node, Call):
        text = node.function + "(" + to_debug_string(node.arg1)
        if node.arg2 is not None:
            text += "," + to_debug_string(node.arg2)
        return text + ")"

    if isinstance(node, BinaryOp):
        symbol = OPERATOR_SYMBOLS.get(node.operator)
        if symbol is None:
            raise create_unknown_operator_error(node.operator)
        return " [" + to_debug_string(node.left) + " " + symbol + " " + to_debug_string(node.right) + "] "

    if isinstance(node, Ternary):
        return (" [" + to_debug_string(node.condition)
                + " ? " + to_debug_string(node.if_true)
                + ": " + to_debug_string(node.if_false) + "] ")

    raise create_unknown_node_error(node)
