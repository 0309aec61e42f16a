"""
XML document rendering of an expression tree.

Element names:

    operation    type="add|subtract|...|ternary", two children (three for
                 ternary: condition, if true, if false)
    parenthesis  one child
    function     type="<name>", one or two children; unary minus is "-"
    variable     optional custom="true" / hash="true", text is the full name
    integer      text is the value
    decimal      text is the value

The document starts with '<?xml version="1.0" ?>' followed directly by the
root element, with no whitespace anywhere between elements.

Author: xwest
"""

from xml.dom import minidom

from ..parser.ast_nodes import (
    Expression, IntegerLiteral, DecimalLiteral, Reference, Parenthesized,
    Call, BinaryOp, BinaryOperator, Ternary, TERNARY_TYPE, format_number
)
from .errors import create_unknown_node_error, create_unknown_operator_error


def to_document(node: Expression) -> str:
    """Render ``node`` as an XML document string."""
    document = minidom.Document()
    document.appendChild(_build_element(document, node))
    return document.toxml()


def to_document_bytes(node: Expression) -> bytes:
    """Render ``node`` as a UTF-8 encoded XML document."""
    return to_document(node).encode("utf-8")


def _build_element(document: minidom.Document, node: Expression) -> minidom.Element:
    if isinstance(node, BinaryOp):
        if not isinstance(node.operator, BinaryOperator):
            raise create_unknown_operator_error(node.operator)
        return _operation(document, node.operator.value, node.left, node.right)

    if isinstance(node, Ternary):
        return _operation(document, TERNARY_TYPE, node.condition, node.if_true, node.if_false)

    if isinstance(node, Parenthesized):
        element = document.createElement("parenthesis")
        element.appendChild(_build_element(document, node.inner))
        return element

    if isinstance(node, Call):
        element = document.createElement("function")
        element.setAttribute("type", node.function)
        for arg in node.args:
            element.appendChild(_build_element(document, arg))
        return element

    if isinstance(node, Reference):
        element = document.createElement("variable")
        if node.is_custom:
            element.setAttribute("custom", "true")
        if node.is_hashed:
            element.setAttribute("hash", "true")
        element.appendChild(document.createTextNode(node.name))
        return element

    if isinstance(node, DecimalLiteral):
        return _literal(document, "decimal", node.value)

    if isinstance(node, IntegerLiteral):
        return _literal(document, "integer", node.value)

    raise create_unknown_node_error(node)


def _operation(document, operation_type, *operands):
    element = document.createElement("operation")
    element.setAttribute("type", operation_type)
    for operand in operands:
        element.appendChild(_build_element(document, operand))
    return element


def _literal(document, tag, value):
    element = document.createElement(tag)
    element.appendChild(document.createTextNode(format_number(value)))
    return element
