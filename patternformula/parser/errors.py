"""
Error handling for the formula grammar engine.

Inside the parser every failure is a FormulaSyntaxError. The public entry
points wrap it in a single FormulaError so callers only have one exception
type to catch; the original syntax error stays reachable as ``cause``.

Author: xwest
"""

from typing import Optional

from ..scanner.errors import FormulaSyntaxError, SourceLocation, describe_char


class FormulaError(Exception):
    """
    Raised when a formula can not be parsed.

    Parsing is all or nothing: when this is raised no tree is produced.
    """

    def __init__(self, cause: FormulaSyntaxError, formula: Optional[str] = None):
        super().__init__(cause.message)
        self.cause = cause
        self.formula = formula

    @property
    def location(self) -> SourceLocation:
        return self.cause.location

    def __str__(self) -> str:
        if self.formula is None:
            return f"Invalid formula: {self.cause.message} at {self.location}"
        return f"Invalid formula {self.formula!r}: {self.cause.message} at {self.location}"


# Helper functions for creating common parser errors

def create_operator_not_expected_error(operator: str, location: SourceLocation,
                                       context: Optional[str] = None) -> FormulaSyntaxError:
    """Create an error for a binary operator where a value should start."""
    return FormulaSyntaxError(
        message=f"Unexpected token (operator not expected here): {describe_char(operator)}",
        location=location,
        code="S004",
        help_text=context
    )


def create_trailing_input_error(location: SourceLocation,
                                context: Optional[str] = None) -> FormulaSyntaxError:
    """Create an error for text left over after a complete formula."""
    return FormulaSyntaxError(
        message="Unexpected input after the end of the formula",
        location=location,
        code="S005",
        help_text=context
    )


def create_nesting_error(max_depth: int, location: SourceLocation) -> FormulaSyntaxError:
    """Create an error for a formula nested beyond the configured depth."""
    return FormulaSyntaxError(
        message=f"Formula is nested more than {max_depth} levels deep",
        location=location,
        code="S006"
    )


def create_number_range_error(token: str, location: SourceLocation) -> FormulaSyntaxError:
    """Create an error for a decimal literal too large to represent."""
    return FormulaSyntaxError(
        message=f"Numeric literal out of range: {token}",
        location=location,
        code="S007"
    )
