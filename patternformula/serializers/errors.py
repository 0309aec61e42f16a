"""
Errors raised by the serializers.

A serializer only fails when it is handed something outside the closed set
of AST nodes or operators. That is a bug in the caller, not a problem with
the formula, so it is never wrapped into FormulaError.

Author: xwest
"""

from typing import Any


class SerializerError(Exception):
    """Raised when a tree contains a node or operator no serializer knows."""

    def __init__(self, message: str, node: Any = None):
        super().__init__(message)
        self.node = node


def create_unknown_node_error(node: Any) -> SerializerError:
    return SerializerError(f"Unknown expression node: {type(node).__name__}", node)


def create_unknown_operator_error(operator: Any) -> SerializerError:
    return SerializerError(f"Unknown operator: {operator!r}", operator)
