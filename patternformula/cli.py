"""
Command line front end.

    patternformula "a + 5 / 2"                     # XML document
    patternformula --format normative " a + 5 "    # a+5
    echo "sin(a) > 1 ? 2 : 3" | patternformula -   # read from stdin

Author: xwest
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .parser.errors import FormulaError
from .parser.parser import parse, DEFAULT_MAX_DEPTH
from .serializers import to_debug_string, to_normative_string, to_document


logger = logging.getLogger(__name__)

RENDERERS = {
    "xml": to_document,
    "normative": to_normative_string,
    "debug": to_debug_string,
}


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="patternformula",
        description="Parse a pattern-drafting formula and print it as XML, canonical text or debug form",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    patternformula "a + 5 / 2"                       # XML document
    patternformula --format normative " a + 5 "      # canonical text
    patternformula --format debug "1+2*3"            # show grouping
    patternformula --strict "a b"                    # reject trailing text
        """
    )

    parser.add_argument('formula', nargs='?', default='-',
                        help="Formula text, or '-' to read it from standard input (default)")

    # Output options
    parser.add_argument('--format', choices=sorted(RENDERERS), default='xml',
                        help='Output rendering (default: xml)')

    # Parsing options
    parser.add_argument('--strict', action='store_true',
                        help='Fail if text is left over after the formula')
    parser.add_argument('--max-depth', type=int, default=DEFAULT_MAX_DEPTH,
                        help=f'Deepest nesting accepted (default: {DEFAULT_MAX_DEPTH})')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log parser activity to standard error')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point, returns the process exit status."""
    args = build_argument_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    formula = args.formula
    if formula == '-':
        # Only the trailing newline from the pipe is dropped
        formula = sys.stdin.read().rstrip("\n")

    try:
        expression = parse(formula, strict=args.strict, max_depth=args.max_depth)
    except FormulaError as e:
        print(f"error: {e}", file=sys.stderr)
        print(str(e.cause), file=sys.stderr, end="")
        return 1

    logger.debug("Rendering as %s", args.format)
    print(RENDERERS[args.format](expression))
    return 0


if __name__ == "__main__":
    sys.exit(main())
