"""
Abstract Syntax Tree node definitions for formulas.

The node set is closed: a parsed formula is built from exactly the seven
variants below and nothing else. Nodes are frozen dataclasses, so a tree can
not be modified once the parser has built it, and two trees compare equal
when they have the same shape and values.

Presentation lives in the serializers package, not on the nodes.

Author: xwest
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Iterator, List, Optional, Union


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Literals
    INTEGER_LITERAL = "IntegerLiteral"
    DECIMAL_LITERAL = "DecimalLiteral"

    # Names
    REFERENCE = "Reference"

    # Grouping
    PARENTHESIZED = "Parenthesized"

    # Operations
    CALL = "Call"
    BINARY_OP = "BinaryOp"
    TERNARY = "Ternary"


class BinaryOperator(Enum):
    """Two-operand operators. The value is the name used in XML documents."""
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    POWER = "power"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    EQUAL_TO = "equalTo"
    NOT_EQUAL_TO = "notEqualTo"


OPERATOR_SYMBOLS = {
    BinaryOperator.ADD: "+",
    BinaryOperator.SUBTRACT: "-",
    BinaryOperator.MULTIPLY: "*",
    BinaryOperator.DIVIDE: "/",
    BinaryOperator.POWER: "^",
    BinaryOperator.GREATER_THAN: ">",
    BinaryOperator.LESS_THAN: "<",
    BinaryOperator.GREATER_THAN_OR_EQUAL: ">=",
    BinaryOperator.LESS_THAN_OR_EQUAL: "<=",
    BinaryOperator.EQUAL_TO: "==",
    BinaryOperator.NOT_EQUAL_TO: "!=",
}

# Operation type written for ternary nodes
TERNARY_TYPE = "ternary"


class ReferenceKind(Enum):
    """How a reference was written: bare, '@name' or '#name'."""
    PLAIN = ""
    CUSTOM = "@"
    HASHED = "#"

    @property
    def sigil(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral:
    """Whole number constant, e.g. 2 or -3."""
    value: int

    node_type: ClassVar[ASTNodeType] = ASTNodeType.INTEGER_LITERAL

    def children(self) -> List["Expression"]:
        return []


@dataclass(frozen=True)
class DecimalLiteral:
    """Decimal constant, e.g. 3.1415."""
    value: float

    node_type: ClassVar[ASTNodeType] = ASTNodeType.DECIMAL_LITERAL

    def children(self) -> List["Expression"]:
        return []


@dataclass(frozen=True)
class Reference:
    """
    Variable or measurement name.

    ``name`` is the text as written, including any leading '@' or '#';
    ``kind`` records which sigil it was.
    """
    name: str
    kind: ReferenceKind = ReferenceKind.PLAIN

    node_type: ClassVar[ASTNodeType] = ASTNodeType.REFERENCE

    def __post_init__(self):
        if self.kind is not ReferenceKind.PLAIN and not self.name.startswith(self.kind.sigil):
            raise ValueError(f"{self.kind.name} reference must start with '{self.kind.sigil}': {self.name!r}")

    @property
    def is_custom(self) -> bool:
        return self.kind is ReferenceKind.CUSTOM

    @property
    def is_hashed(self) -> bool:
        return self.kind is ReferenceKind.HASHED

    def children(self) -> List["Expression"]:
        return []


@dataclass(frozen=True)
class Parenthesized:
    """A '( ... )' group written by the user, kept so output can reproduce it."""
    inner: "Expression"

    node_type: ClassVar[ASTNodeType] = ASTNodeType.PARENTHESIZED

    def children(self) -> List["Expression"]:
        return [self.inner]


@dataclass(frozen=True)
class Call:
    """
    Function call with one or two arguments, e.g. sin(a) or max(a;b).

    Unary minus on anything but a number literal is also a Call, using the
    reserved function name '-' and exactly one argument.
    """
    function: str
    arg1: "Expression"
    arg2: Optional["Expression"] = None

    node_type: ClassVar[ASTNodeType] = ASTNodeType.CALL
    NEGATION: ClassVar[str] = "-"

    def __post_init__(self):
        if self.function == self.NEGATION and self.arg2 is not None:
            raise ValueError("unary negation takes exactly one argument")

    @classmethod
    def negation(cls, operand: "Expression") -> "Call":
        return cls(cls.NEGATION, operand)

    @property
    def is_negation(self) -> bool:
        return self.function == self.NEGATION

    @property
    def args(self) -> List["Expression"]:
        if self.arg2 is None:
            return [self.arg1]
        return [self.arg1, self.arg2]

    def children(self) -> List["Expression"]:
        return self.args


@dataclass(frozen=True)
class BinaryOp:
    """Two-operand operation, e.g. a + b or a >= b."""
    left: "Expression"
    operator: BinaryOperator
    right: "Expression"

    node_type: ClassVar[ASTNodeType] = ASTNodeType.BINARY_OP

    @property
    def symbol(self) -> str:
        return OPERATOR_SYMBOLS[self.operator]

    def children(self) -> List["Expression"]:
        return [self.left, self.right]


@dataclass(frozen=True)
class Ternary:
    """Conditional expression: condition ? if_true : if_false."""
    condition: "Expression"
    if_true: "Expression"
    if_false: "Expression"

    node_type: ClassVar[ASTNodeType] = ASTNodeType.TERNARY

    def children(self) -> List["Expression"]:
        return [self.condition, self.if_true, self.if_false]


Expression = Union[
    IntegerLiteral, DecimalLiteral, Reference, Parenthesized, Call, BinaryOp, Ternary
]

NODE_CLASSES = (
    IntegerLiteral, DecimalLiteral, Reference, Parenthesized, Call, BinaryOp, Ternary
)


def walk(node: Expression) -> Iterator[Expression]:
    """Yield ``node`` and all of its descendants, parents before children."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


def format_number(value: Union[int, float]) -> str:
    """
    Text for a numeric literal.

    Integers use their plain decimal form. Decimals use the shortest digits
    that round-trip, always in positional notation and always with a
    fractional part: 3.1415, 100.0, 0.0000001.
    """
    if isinstance(value, int):
        return str(value)

    text = repr(float(value))
    if "e" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    return text
