"""
Error handling for the formula scanner.

Every low-level failure (an unexpected character, running off the end of the
formula, an operator where a value was expected) is raised as a
FormulaSyntaxError carrying the position it happened at.

Author: xwest
"""

from typing import Optional
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the formula text.

    Line and column are 1-based, offset is the 0-based character index.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass
class Diagnostic:
    """A single syntax diagnostic."""
    message: str
    location: SourceLocation
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __str__(self) -> str:
        if self.code:
            result = f"ERROR[{self.code}]: {self.message}\n"
        else:
            result = f"ERROR: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        return result


class FormulaSyntaxError(Exception):
    """
    Raised when the scanner or the grammar engine cannot make sense of the input.

    The plain message is available as ``message``; ``str()`` gives the full
    diagnostic including the location.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            code=code,
            help_text=help_text
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


# Error codes for categorization
ERROR_CODES = {
    "S001": "Unexpected character",
    "S002": "Unexpected end of input",
    "S003": "Whitespace where a token was expected",
    "S004": "Operator not expected here",
    "S005": "Trailing input after formula",
    "S006": "Formula nested too deeply",
    "S007": "Numeric literal out of range",
}


def describe_char(char: Optional[str]) -> str:
    """Render a lookahead character for a message."""
    if char is None:
        return "<end of input>"
    if char == "\n":
        return "'\\n'"
    if char == "\t":
        return "'\\t'"
    return f"'{char}'"


# Helper functions for creating common errors

def create_unexpected_character_error(expected: str, found: Optional[str],
                                      location: SourceLocation,
                                      context: Optional[str] = None) -> FormulaSyntaxError:
    """Create an error for a character that does not match the expected one."""
    if found is None:
        return create_unexpected_eof_error(describe_char(expected), location, context)

    return FormulaSyntaxError(
        message=f"Expected {describe_char(expected)} found {describe_char(found)}",
        location=location,
        code="S001",
        help_text=context
    )


def create_unexpected_eof_error(expected: str, location: SourceLocation,
                                context: Optional[str] = None) -> FormulaSyntaxError:
    """Create an error for running out of input."""
    return FormulaSyntaxError(
        message=f"Unexpected end of input, expected {expected}",
        location=location,
        code="S002",
        help_text=context
    )


def create_whitespace_error(location: SourceLocation,
                            context: Optional[str] = None) -> FormulaSyntaxError:
    """Create an error for whitespace found where a token should start."""
    return FormulaSyntaxError(
        message="Found whitespace where a token was expected",
        location=location,
        code="S003",
        help_text=context
    )
