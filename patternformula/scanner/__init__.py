"""
Formula Scanner Package

Character-level cursor over formula text, used by the grammar engine to pull
characters and delimiter-bounded tokens one at a time.

Author: xwest
"""

from .scanner import Scanner, DEFAULT_DELIMITERS, WHITESPACE
from .errors import FormulaSyntaxError, SourceLocation, Diagnostic, ERROR_CODES

__all__ = [
    "Scanner",
    "DEFAULT_DELIMITERS",
    "WHITESPACE",
    "FormulaSyntaxError",
    "SourceLocation",
    "Diagnostic",
    "ERROR_CODES",
]
