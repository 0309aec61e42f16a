"""
One-call conversions from formula text.

Author: xwest
"""

from .parser.parser import parse, DEFAULT_MAX_DEPTH
from .serializers.document import to_document_bytes
from .serializers.normative import to_normative_string


def formula_to_xml(formula: str, strict: bool = False,
                   max_depth: int = DEFAULT_MAX_DEPTH) -> bytes:
    """
    Parse ``formula`` and return it as a UTF-8 encoded XML document.

    Raises:
        FormulaError: the formula is not valid
    """
    return to_document_bytes(parse(formula, strict=strict, max_depth=max_depth))


def normalize_formula(formula: str, strict: bool = False,
                      max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """
    Parse ``formula`` and return its canonical text, e.g. " a + 5 " -> "a+5".

    Raises:
        FormulaError: the formula is not valid
    """
    return to_normative_string(parse(formula, strict=strict, max_depth=max_depth))
