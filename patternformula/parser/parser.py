"""
Formula Grammar Engine

Precedence-climbing recursive descent parser for pattern-drafting formulas
such as "(#BustCircumfence < 100 ? #BustCircumfence/5-1 : 10.5) + 3".

Two procedures share the work:

    parse_expression(min_precedence)
        Parses a primary, then loops over operators that are at least as
        strong as min_precedence. In practice this is where the ternary
        operator is handled.

    parse_primary(min_precedence)
        Parses a literal, reference, call or parenthesised group, then
        absorbs every binary operator strictly stronger than min_precedence,
        parsing each right operand at that operator's own precedence. This
        keeps every binary level left-associative: a / 3 * 2 is (a / 3) * 2.

The ternary operator has the lowest precedence and its branches are parsed
from the lowest level again, so a ? b : c ? d : e nests to the right.

Author: xwest
"""

import logging
import math
import re
from enum import IntEnum
from typing import Dict, Optional, Union

from ..scanner.scanner import Scanner
from ..scanner.errors import FormulaSyntaxError, SourceLocation
from .ast_nodes import (
    Expression, IntegerLiteral, DecimalLiteral, Reference, ReferenceKind,
    Parenthesized, Call, BinaryOp, BinaryOperator, Ternary
)
from .errors import (
    FormulaError, create_operator_not_expected_error, create_trailing_input_error,
    create_nesting_error, create_number_range_error
)


logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64


class Precedence(IntEnum):
    """Operator precedence levels, higher binds tighter."""
    NONE = 0
    TERNARY = 1         # ? :
    COMPARISON = 2      # > < >= <= == !=
    TERM = 3            # + -
    FACTOR = 4          # * /
    POWER = 5           # ^


# Lookahead marker for the '?' of a ternary expression
TERNARY = "?"

Operator = Union[BinaryOperator, str]

# Operator recognised from its first character. '>' and '<' may be followed
# by '='; '=' and '!' must be.
OPERATOR_CHARACTERS: Dict[str, Operator] = {
    '*': BinaryOperator.MULTIPLY,
    '+': BinaryOperator.ADD,
    '/': BinaryOperator.DIVIDE,
    '-': BinaryOperator.SUBTRACT,
    '^': BinaryOperator.POWER,
    '?': TERNARY,
    '>': BinaryOperator.GREATER_THAN,
    '<': BinaryOperator.LESS_THAN,
    '=': BinaryOperator.EQUAL_TO,
    '!': BinaryOperator.NOT_EQUAL_TO,
}

PRECEDENCES: Dict[Operator, Precedence] = {
    BinaryOperator.POWER: Precedence.POWER,
    BinaryOperator.MULTIPLY: Precedence.FACTOR,
    BinaryOperator.DIVIDE: Precedence.FACTOR,
    BinaryOperator.ADD: Precedence.TERM,
    BinaryOperator.SUBTRACT: Precedence.TERM,
    BinaryOperator.GREATER_THAN: Precedence.COMPARISON,
    BinaryOperator.LESS_THAN: Precedence.COMPARISON,
    BinaryOperator.GREATER_THAN_OR_EQUAL: Precedence.COMPARISON,
    BinaryOperator.LESS_THAN_OR_EQUAL: Precedence.COMPARISON,
    BinaryOperator.EQUAL_TO: Precedence.COMPARISON,
    BinaryOperator.NOT_EQUAL_TO: Precedence.COMPARISON,
    TERNARY: Precedence.TERNARY,
}

# Operators that can never start a primary. '-' can, as unary minus.
NON_PREFIX_OPERATORS = frozenset("+*/^")

ARGUMENT_SEPARATORS = frozenset(",;")

INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')
DECIMAL_PATTERN = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')


class FormulaParser:
    """
    Parser for a single formula.

    Each instance owns its scanner, so parse() is meant to be called once.
    Use the module level parse() for the usual one-shot case.
    """

    def __init__(self, text: str, filename: str = "<formula>",
                 strict: bool = False, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize parser with formula text.

        Args:
            text: Formula source, surrounding whitespace is allowed
            filename: Name used in error locations
            strict: Reject text left over after a complete formula
            max_depth: Deepest nesting of groups, call arguments and
                ternary branches accepted
        """
        self.scanner = Scanner(text, filename)
        self.strict = strict
        self.max_depth = max_depth
        self._depth = 0
        self._deepest = 0

    def parse(self) -> Expression:
        """Parse the whole formula and return the root node."""
        try:
            expression = self.parse_expression(Precedence.TERNARY)
        except RecursionError:
            # max_depth set above what the interpreter stack can hold
            raise create_nesting_error(self._deepest - 1, self.scanner.location()) from None

        if self.strict:
            self.scanner.skip_whitespace()
            if not self.scanner.at_end():
                raise create_trailing_input_error(self.scanner.location(), str(self.scanner))

        return expression

    def parse_expression(self, min_precedence: int) -> Expression:
        """
        Parse an expression, stopping at the first operator weaker than
        ``min_precedence`` and leaving it for the caller.
        """
        self._enter()
        try:
            return self._parse_expression(min_precedence)
        finally:
            self._depth -= 1

    def _parse_expression(self, min_precedence: int) -> Expression:
        scanner = self.scanner

        scanner.skip_whitespace()
        expression = self.parse_primary(min_precedence)
        scanner.skip_whitespace()

        while not scanner.at_end():
            operator = self._peek_operator()
            if operator is None:
                break

            precedence = PRECEDENCES[operator]
            if precedence < min_precedence:
                break

            if operator is TERNARY:
                expression = self._parse_ternary(expression)
            else:
                operator = self._consume_operator(operator)
                scanner.skip_whitespace()
                right = self.parse_primary(precedence)
                expression = BinaryOp(expression, operator, right)

            scanner.skip_whitespace()

        return expression

    def parse_primary(self, min_precedence: int) -> Expression:
        """
        Parse one operand plus any binary operators that bind tighter than
        ``min_precedence``.

        e.g. with min_precedence TERM, "3 * 4^5 + 1" gives back "3 * 4^5"
        and leaves "+ 1" unread.
        """
        scanner = self.scanner
        lookahead = scanner.peek()

        if lookahead in NON_PREFIX_OPERATORS:
            raise create_operator_not_expected_error(lookahead, scanner.location(), str(scanner))

        if lookahead == '(':
            expression = Parenthesized(self._parse_group())
        elif lookahead == '@' or lookahead == '#':
            expression = self._parse_sigil_reference()
        else:
            expression = self._parse_value()

        scanner.skip_whitespace()
        operator = self._peek_operator()

        while operator is not None and operator is not TERNARY:
            precedence = PRECEDENCES[operator]
            if precedence <= min_precedence:
                break

            operator = self._consume_operator(operator)
            scanner.skip_whitespace()
            right = self.parse_primary(precedence)
            expression = BinaryOp(expression, operator, right)

            scanner.skip_whitespace()
            operator = self._peek_operator()

        return expression

    # Primaries

    def _parse_group(self) -> Expression:
        """Parse '( expression )' and return the inner expression."""
        self.scanner.expect('(')
        inner = self.parse_expression(Precedence.TERNARY)
        self.scanner.skip_whitespace()
        self.scanner.expect(')')
        return inner

    def _parse_sigil_reference(self) -> Reference:
        """Parse '@name' or '#name'."""
        kind = ReferenceKind.CUSTOM if self.scanner.advance() == '@' else ReferenceKind.HASHED
        return Reference(kind.sigil + self.scanner.read_token(), kind)

    def _parse_value(self) -> Expression:
        """
        Parse a number, name or call, with an optional leading unary minus.

        Minus in front of a number literal becomes part of the number. In
        front of anything else it becomes a Call to '-'.
        """
        scanner = self.scanner
        negative = False

        if scanner.peek() == '-':
            scanner.advance()
            negative = True
            scanner.skip_whitespace()

        if negative and scanner.peek() == '(':
            return Call.negation(self._parse_group())

        if negative and (scanner.peek() == '@' or scanner.peek() == '#'):
            return Call.negation(self._parse_sigil_reference())

        location = scanner.location()
        token = scanner.read_token()

        literal = self._parse_number(token, negative, location)
        if literal is not None:
            return literal

        scanner.skip_whitespace()
        if scanner.peek() == '(':
            expression = self._parse_call(token)
        else:
            expression = Reference(token)

        if negative:
            expression = Call.negation(expression)

        return expression

    def _parse_number(self, token: str, negative: bool,
                      location: SourceLocation) -> Optional[Expression]:
        """Return a literal if ``token`` is a number, otherwise None."""
        if INTEGER_PATTERN.fullmatch(token):
            value = int(token)
            return IntegerLiteral(-value if negative else value)

        if DECIMAL_PATTERN.fullmatch(token):
            value = float(token)
            if not math.isfinite(value):
                raise create_number_range_error(token, location)
            return DecimalLiteral(-value if negative else value)

        return None

    def _parse_call(self, function: str) -> Call:
        """Parse 'name(arg)' or 'name(arg1, arg2)', either ',' or ';' separating."""
        scanner = self.scanner

        scanner.expect('(')
        arg1 = self.parse_expression(Precedence.TERNARY)
        scanner.skip_whitespace()

        arg2 = None
        # '-' is reserved for negation, which only ever has one argument
        if scanner.peek() in ARGUMENT_SEPARATORS and function != Call.NEGATION:
            scanner.advance()
            arg2 = self.parse_expression(Precedence.TERNARY)
            scanner.skip_whitespace()

        scanner.expect(')')
        return Call(function, arg1, arg2)

    def _parse_ternary(self, condition: Expression) -> Ternary:
        """Parse '? if_true : if_false' following ``condition``."""
        scanner = self.scanner

        scanner.expect(TERNARY)
        scanner.skip_whitespace()
        if_true = self.parse_expression(Precedence.TERNARY)

        scanner.skip_whitespace()
        scanner.expect(':')
        scanner.skip_whitespace()
        if_false = self.parse_expression(Precedence.TERNARY)

        return Ternary(condition, if_true, if_false)

    # Operators

    def _peek_operator(self) -> Optional[Operator]:
        """Operator starting at the cursor, without consuming it."""
        return OPERATOR_CHARACTERS.get(self.scanner.peek())

    def _consume_operator(self, operator: BinaryOperator) -> BinaryOperator:
        """Consume a binary operator, returning its two-character form if present."""
        scanner = self.scanner
        scanner.advance()

        if operator is BinaryOperator.GREATER_THAN and scanner.peek() == '=':
            scanner.advance()
            return BinaryOperator.GREATER_THAN_OR_EQUAL

        if operator is BinaryOperator.LESS_THAN and scanner.peek() == '=':
            scanner.advance()
            return BinaryOperator.LESS_THAN_OR_EQUAL

        if operator is BinaryOperator.EQUAL_TO or operator is BinaryOperator.NOT_EQUAL_TO:
            scanner.expect('=')

        return operator

    def _enter(self):
        self._depth += 1
        self._deepest = max(self._deepest, self._depth)
        if self._depth > self.max_depth:
            raise create_nesting_error(self.max_depth, self.scanner.location())


def parse(formula: str, filename: str = "<formula>", strict: bool = False,
          max_depth: int = DEFAULT_MAX_DEPTH) -> Expression:
    """
    Parse formula text into an expression tree.

    Raises:
        FormulaError: the formula is not valid. No partial tree is returned.
    """
    parser = FormulaParser(formula, filename, strict=strict, max_depth=max_depth)

    try:
        expression = parser.parse()
    except FormulaSyntaxError as e:
        logger.debug("Failed to parse formula %r: %s", formula, e.message)
        raise FormulaError(e, formula) from e

    logger.debug("Parsed formula %r", formula)
    return expression
