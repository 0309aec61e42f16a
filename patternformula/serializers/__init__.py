"""
Formula Serializers Package

Three independent renderings of a parsed formula:

- to_debug_string: bracketed form showing the grouping the parser chose
- to_normative_string: minimal canonical formula text
- to_document / to_document_bytes: XML element tree

Author: xwest
"""

from .debug import to_debug_string
from .normative import to_normative_string
from .document import to_document, to_document_bytes
from .errors import SerializerError

__all__ = [
    "to_debug_string",
    "to_normative_string",
    "to_document",
    "to_document_bytes",
    "SerializerError",
]
