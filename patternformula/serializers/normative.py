"""
Canonical ("normative") rendering of an expression tree.

The output is the formula with all insignificant whitespace removed and
nothing added: parentheses appear only where the user wrote them. Parsing
the output again and rendering it gives the same text.
"""

from ..parser.ast_nodes import (
    Expression, IntegerLiteral, DecimalLiteral, Reference, Parenthesized,
    Call, BinaryOp, Ternary, OPERATOR_SYMBOLS, format_number
)
from .errors import create_unknown_node_error, create_unknown_operator_error


def to_normative_string(node: Expression) -> str:
    """Render ``node`` as minimal formula text, e.g. "a+5/2"."""
    if isinstance(node, (IntegerLiteral, DecimalLiteral)):
        return format_number(node.value)

    if isinstance(node, Reference):
        return node.name

    if isinstance(node, Parenthesized):
        return "(" + to_normative_string(node.inner) + ")"

    if isinstance(node, Call):
        # Negation is written as a prefix, never as -(x)
        if node.is_negation:
            return Call.NEGATION + to_normative_string(node.arg1)

        text = node.function + "(" + to_normative_string(node.arg1)
        if node.arg2 is not None:
            text += "," + to_normative_string(node.arg2)
        return text + ")"

    if isinstance(node, BinaryOp):
        symbol = OPERATOR_SYMBOLS.get(node.operator)
        if symbol is None:
            raise create_unknown_operator_error(node.operator)
        return to_normative_string(node.left) + symbol + to_normative_string(node.right)

    if isinstance(node, Ternary):
        return (to_normative_string(node.condition)
                + "?" + to_normative_string(node.if_true)
                + ":" + to_normative_string(node.if_false))

    raise create_unknown_node_error(node)
