"""
Formula scanner - a character cursor with one character of lookahead.

The scanner has no notion of token types. The grammar engine drives it
directly, asking for single characters or for a run of characters up to the
next delimiter, and decides itself what the text means.

Note that '=' and '!' are not delimiters. A formula like "1==2" written
without spaces is read as the single token "1==2". Existing formulas depend
on this so it stays.
"""

from typing import FrozenSet, Iterable, Optional

from .errors import (
    SourceLocation, create_unexpected_character_error,
    create_unexpected_eof_error, create_whitespace_error
)


WHITESPACE: FrozenSet[str] = frozenset(" \t\n")

# These can not validly be included in any token
DEFAULT_DELIMITERS: FrozenSet[str] = frozenset(
    [' ', '\t', '\n', '(', ')', '*', '+', '-', '/', '^', ',', ';', ':', '<', '>', '?']
)


class Scanner:
    """
    Read cursor over an immutable formula string.

    The cursor only ever moves forward. Reading past the end is not an
    error: peek() returns None so callers can look ahead at end of input.
    """

    def __init__(self, text: str, filename: str = "<formula>"):
        self.text = text
        self.filename = filename
        self.pos = 0

    def peek(self) -> Optional[str]:
        """Character at the cursor, or None at end of input."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_next(self) -> Optional[str]:
        """Character after the cursor, or None."""
        if self.pos + 1 >= len(self.text):
            return None
        return self.text[self.pos + 1]

    def advance(self) -> str:
        """
        Return the character at the cursor and move past it.

        Callers check at_end() or peek() first; calling this at end of input
        raises IndexError.
        """
        char = self.text[self.pos]
        self.pos += 1
        return char

    def expect(self, char: str) -> str:
        """Consume ``char`` or raise a FormulaSyntaxError."""
        if self.peek() == char:
            return self.advance()

        raise create_unexpected_character_error(
            char, self.peek(), self.location(), context=str(self)
        )

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def skip_whitespace(self) -> bool:
        """Consume a run of whitespace, return True if there was any."""
        found = False
        while self.peek() in WHITESPACE:
            self.pos += 1
            found = True
        return found

    def read_token(self, delimiters: Iterable[str] = DEFAULT_DELIMITERS) -> str:
        """
        Read the next token.

        The first character is always taken, even if it is a delimiter, as
        long as it is not whitespace. After that characters are taken up to
        the next delimiter or the end of input.
        """
        if not isinstance(delimiters, (set, frozenset)):
            delimiters = frozenset(delimiters)

        if self.at_end():
            raise create_unexpected_eof_error("a token", self.location(), context=str(self))

        if self.peek() in WHITESPACE:
            raise create_whitespace_error(self.location(), context=str(self))

        start = self.pos
        self.pos += 1

        while not self.at_end() and self.text[self.pos] not in delimiters:
            self.pos += 1

        return self.text[start:self.pos]

    def location(self) -> SourceLocation:
        """Source location of the cursor."""
        consumed = self.text[:self.pos]
        line = consumed.count("\n") + 1
        column = self.pos - (consumed.rfind("\n") + 1) + 1
        return SourceLocation(self.filename, line, column, self.pos)

    def __str__(self) -> str:
        if self.at_end():
            return self.text + "[]"

        return self.text[:self.pos] + "[" + self.text[self.pos] + "]" + self.text[self.pos + 1:]

    def __repr__(self) -> str:
        return f"Scanner({self.text!r}, pos={self.pos})"
