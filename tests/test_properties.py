"""
Property tests over the whole pipeline.

Tests cover:
- Canonical text is stable under re-parsing
- Trees evaluate to what the written formula means
- Canonical text evaluates to the same value as the formula it came from

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from patternformula import parse, to_normative_string, walk, Call, BinaryOp, Ternary
from reference_evaluator import evaluate


def has_negated_operation(tree):
    """True if unary minus is applied to a binary or ternary expression."""
    return any(
        isinstance(node, Call) and node.is_negation and isinstance(node.arg1, (BinaryOp, Ternary))
        for node in walk(tree)
    )


FORMULAS = [
    "a + 5",
    "a + 5 / 2",
    "(a + 5) / 2",
    "2 + 3 + 4 / 5 + 6 + 7",
    "-3 + -3.1415",
    "3.1415 * 22 + @width * height ",
    "a == 1 ? 1 : a == 2 ? 2 : 3",
    "sin(a) > atan(b+c/2) ? 2.41 * #length : Line_A1_A2",
    "(#BustCircumfence < 100 ? #BustCircumfence/5-1: #BustCircumfence/10+10.5)+3",
    "-(AngleLine_A50_A27-AngleLine_A51_A27)",
    "( #isCloseFittingSleevelessBlock == 0 ? 0 : -1 )",
    " - sin(360)",
    " - bust_circ / 2",
    "1+2*3^4*5",
    "tan(a) * cos(b) + max( a, b ) + max( a; b )",
    "(( 2 + 3 + 4 ) / (( 5 + 6 ) + 7) )",
    "#CG/10+(#CG<116?11:10.5 )",
    "3.5 / 12 * #BustWaistDifference  + ( #isCloseFittingSleevelessBlock == 0 ? 0 : -1 )",
    "( -(bust_circ) / 2 * #NegativeBustEase)",
    "bust_circ <= 112 ? (bust_circ*(2/10)) +#FaktorBrustbreite+#ZugabeBrustbreite : "
    "(bust_circ/2) - (bust_circ/10+#FaktorRückenbreite) - (bust_circ/10+#FaktorArmlochdurchmesser) +#ZugabeBrustbreite",
    "a >= b ? x - -y : 1e20",
    "max(a; -b) != 2",
]

VARIABLES = {
    "a": 3, "b": 7, "c": 4, "x": 2.5, "y": 1.5, "height": 160,
    "@width": 12.5, "#length": 40, "Line_A1_A2": 9, "bust_circ": 96,
    "AngleLine_A50_A27": 30, "AngleLine_A51_A27": 45,
    "#BustCircumfence": 92, "#CG": 120, "#BustWaistDifference": 18,
    "#isCloseFittingSleevelessBlock": 1, "#NegativeBustEase": 2,
    "#FaktorBrustbreite": 1.5, "#ZugabeBrustbreite": 2,
    "#FaktorRückenbreite": 0.5, "#FaktorArmlochdurchmesser": 1,
}


class TestCanonicalForm(unittest.TestCase):
    """Canonical text survives a second parse unchanged."""

    def test_canonical_text_is_idempotent(self):
        for formula in FORMULAS:
            with self.subTest(formula=formula):
                first = to_normative_string(parse(formula))
                second = to_normative_string(parse(first))
                self.assertEqual(first, second)

    def test_canonical_text_has_no_whitespace(self):
        for formula in FORMULAS:
            with self.subTest(formula=formula):
                text = to_normative_string(parse(formula))
                self.assertFalse(any(c in text for c in " \t\n"))

    def test_canonical_text_keeps_meaning(self):
        """Re-parsed canonical text evaluates to the same value.

        Skipped: formulas using == or != (without spaces those read as
        names, see TestKnownDelimiterQuirk in test_parser) and formulas
        negating an operator expression (see test_negated_group_loses_grouping).
        """
        for formula in FORMULAS:
            if "==" in formula or "!=" in formula or has_negated_operation(parse(formula)):
                continue
            with self.subTest(formula=formula):
                original = evaluate(parse(formula), VARIABLES)
                reparsed = evaluate(parse(to_normative_string(parse(formula))), VARIABLES)
                self.assertAlmostEqual(original, reparsed)

    def test_negated_group_loses_grouping(self):
        """-(a - b) renders as -a-b, which reads back as (-a) - b."""
        tree = parse("-(a - b)")
        self.assertTrue(has_negated_operation(tree))

        text = to_normative_string(tree)
        self.assertEqual(text, "-a-b")
        self.assertEqual(to_normative_string(parse(text)), text)

        self.assertEqual(evaluate(tree, {"a": 1, "b": 4}), 3)
        self.assertEqual(evaluate(parse(text), {"a": 1, "b": 4}), -5)

    def test_negated_operand_keeps_meaning(self):
        for formula in ["-(bust_circ) / 2", " - sin(30)", "-(a) * -(b)"]:
            with self.subTest(formula=formula):
                tree = parse(formula)
                self.assertFalse(has_negated_operation(tree))
                variables = {"a": 3, "b": 7, "bust_circ": 96}
                self.assertAlmostEqual(
                    evaluate(tree, variables),
                    evaluate(parse(to_normative_string(tree)), variables)
                )


class TestEvaluation(unittest.TestCase):
    """Trees mean what the formula says."""

    def value(self, formula, **variables):
        return evaluate(parse(formula), variables)

    def test_left_associative_division(self):
        self.assertEqual(self.value("a / 3 * 2", a=6), 4)

    def test_left_associative_subtraction(self):
        self.assertEqual(self.value("10 - 3 - 2"), 5)
        self.assertEqual(self.value("2 + 3 + 4 / 5 + 6 + 7"), 18.8)

    def test_left_associative_power(self):
        self.assertEqual(self.value("2 ^ 3 ^ 2"), 64)

    def test_precedence(self):
        self.assertEqual(self.value("1+2*3^4*5"), 811)
        self.assertEqual(self.value("a + 5 * 2", a=1), 11)

    def test_parentheses(self):
        self.assertEqual(self.value("(a + 5) / 2", a=1), 3)

    def test_nested_ternary(self):
        formula = "a == 1 ? 10 : a == 2 ? 20 : 30"
        self.assertEqual(self.value(formula, a=1), 10)
        self.assertEqual(self.value(formula, a=2), 20)
        self.assertEqual(self.value(formula, a=3), 30)

    def test_unary_minus(self):
        self.assertEqual(self.value(" - bust_circ / 2", bust_circ=90), -45)
        self.assertEqual(self.value("-(a - b)", a=1, b=4), 3)

    def test_functions(self):
        self.assertEqual(self.value("max(a; b) - min(a, b)", a=3, b=7), 4)
        self.assertAlmostEqual(self.value("sin(30) * 2"), 1.0)

    def test_comparison_in_condition(self):
        formula = "#BustCircumfence < 100 ? #BustCircumfence/5-1 : #BustCircumfence/10+10.5"
        self.assertEqual(evaluate(parse(formula), {"#BustCircumfence": 90}), 17)
        self.assertEqual(evaluate(parse(formula), {"#BustCircumfence": 110}), 21.5)


if __name__ == '__main__':
    unittest.main()
