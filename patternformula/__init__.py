"""
Pattern Formula Package

Parser for the small formula language used by pattern-drafting tools
(Valentina / Seamly2D style), e.g.

    (#BustCircumfence < 100 ? #BustCircumfence/5-1 : #BustCircumfence/10+10.5)+3

Formulas are parsed into an immutable expression tree which can be rendered
as a debug string, as canonical formula text, or as an XML document.

Architecture:
    patternformula/
    ├── scanner/         # Character cursor and syntax errors
    ├── parser/          # Grammar engine and AST
    ├── serializers/     # Debug, canonical and XML renderings
    ├── conversion.py    # One-call text -> XML / canonical text
    └── cli.py           # Command line front end

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@patternformula.org"
__license__ = "MIT"

from .scanner import Scanner, FormulaSyntaxError, SourceLocation
from .parser import (
    FormulaParser, FormulaError, parse, Precedence, DEFAULT_MAX_DEPTH,
    Expression, IntegerLiteral, DecimalLiteral, Reference, ReferenceKind,
    Parenthesized, Call, BinaryOp, BinaryOperator, Ternary, walk
)
from .serializers import (
    to_debug_string, to_normative_string, to_document, to_document_bytes,
    SerializerError
)
from .conversion import formula_to_xml, normalize_formula

__all__ = [
    # Entry points
    "parse",
    "formula_to_xml",
    "normalize_formula",

    # Core classes
    "Scanner",
    "FormulaParser",
    "Precedence",
    "DEFAULT_MAX_DEPTH",

    # AST
    "Expression", "IntegerLiteral", "DecimalLiteral", "Reference", "ReferenceKind",
    "Parenthesized", "Call", "BinaryOp", "BinaryOperator", "Ternary", "walk",

    # Serializers
    "to_debug_string",
    "to_normative_string",
    "to_document",
    "to_document_bytes",

    # Errors
    "FormulaError",
    "FormulaSyntaxError",
    "SerializerError",
    "SourceLocation",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
