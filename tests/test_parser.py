"""Unit tests for the tokenizer and parser modules."""

import unittest

from bigcalc_pkg import functions
from bigcalc_pkg.parser import (
    Absolute,
    BinaryOp,
    Call,
    Chain,
    Factorial,
    Name,
    Negate,
    Number,
    RawCall,
    parse,
    referenced_names,
    validate_text,
)
from bigcalc_pkg.tokenizer import (
    ABS_CLOSE,
    ABS_OPEN,
    FUNCTION,
    NAME,
    NUMBER,
    OPERATOR,
    tokenize,
)
from bigcalc_pkg.types import ParseError, ValidationError


def kinds_and_texts(text):
    return [(t.kind, t.text) for t in tokenize(text, functions.is_function)]


class TestTokenize(unittest.TestCase):
    """Test token classification."""

    def test_numbers(self):
        self.assertEqual(
            kinds_and_texts("12.5 + .5"),
            [(NUMBER, "12.5"), (OPERATOR, "+"), (NUMBER, ".5")],
        )

    def test_scientific_number(self):
        self.assertEqual(kinds_and_texts("1.5e3"), [(NUMBER, "1.5e3")])

    def test_unicode_operators(self):
        self.assertEqual(
            [t for _, t in kinds_and_texts("6 × 2 ÷ 3 − 1")],
            ["6", "*", "2", "/", "3", "-", "1"],
        )

    def test_function_needs_parenthesis(self):
        self.assertEqual(kinds_and_texts("sin(1)")[0], (FUNCTION, "sin"))
        self.assertEqual(kinds_and_texts("sin")[0], (NAME, "sin"))
        self.assertEqual(kinds_and_texts("foo(1)")[0], (NAME, "foo"))

    def test_implicit_multiplication(self):
        self.assertEqual([t for _, t in kinds_and_texts("2x")], ["2", "*", "x"])
        self.assertEqual([t for _, t in kinds_and_texts("3(4)")], ["3", "*", "(", "4", ")"])
        self.assertEqual(
            [t for _, t in kinds_and_texts("(1)(2)")], ["(", "1", ")", "*", "(", "2", ")"]
        )
        self.assertEqual([t for _, t in kinds_and_texts("2sin(1)")], ["2", "*", "sin", "(", "1", ")"])

    def test_symbols(self):
        self.assertEqual(kinds_and_texts("√(4)")[0], (FUNCTION, "sqrt"))
        self.assertEqual(kinds_and_texts("³√(8)")[0], (FUNCTION, "cbrt"))
        self.assertEqual(kinds_and_texts("2π")[-1], (NAME, "π"))

    def test_inverse_suffix(self):
        self.assertEqual(kinds_and_texts("sin⁻¹(1)")[0], (FUNCTION, "sin⁻¹"))

    def test_word_operators(self):
        self.assertEqual(
            kinds_and_texts("5 nCr 2"), [(NUMBER, "5"), (OPERATOR, "nCr"), (NUMBER, "2")]
        )
        # Without a preceding operand "n" is an ordinary name
        self.assertEqual(kinds_and_texts("nCr")[0], (NAME, "nCr"))

    def test_absolute_value_bars(self):
        kinds = [k for k, _ in kinds_and_texts("|-3| + |x|")]
        self.assertEqual(kinds[0], ABS_OPEN)
        self.assertEqual(kinds[3], ABS_CLOSE)
        self.assertEqual(kinds.count(ABS_OPEN), 2)
        self.assertEqual(kinds.count(ABS_CLOSE), 2)

    def test_unbalanced_bars(self):
        with self.assertRaises(ParseError) as ctx:
            tokenize("|3", functions.is_function)
        self.assertEqual(ctx.exception.code, "UNBALANCED_ABS")

    def test_unknown_character(self):
        with self.assertRaises(ParseError):
            tokenize("2 $ 3", functions.is_function)

    def test_positions(self):
        tokens = tokenize("10 + x", functions.is_function)
        self.assertEqual((tokens[0].start, tokens[0].end), (0, 2))
        self.assertEqual((tokens[2].start, tokens[2].end), (5, 6))


class TestParse(unittest.TestCase):
    """Test tree construction and precedence."""

    def test_number(self):
        tree = parse("42")
        self.assertIsInstance(tree, Number)
        self.assertEqual(str(tree.value), "42")

    def test_additive_run_is_one_flat_chain(self):
        """1-2-3 is a single chain evaluated left to right."""
        tree = parse("1-2-3")
        self.assertIsInstance(tree, Chain)
        self.assertEqual(tree.operators, ("-", "-"))
        self.assertEqual([str(operand.value) for operand in tree.operands], ["1", "2", "3"])

    def test_multiplication_binds_tighter(self):
        """The product is a nested chain inside the sum."""
        tree = parse("1+2*3")
        self.assertEqual(tree.operators, ("+",))
        self.assertIsInstance(tree.operands[1], Chain)
        self.assertEqual(tree.operands[1].operators, ("*",))

    def test_long_chain_stays_shallow(self):
        """Thousands of chained terms parse without deepening the tree."""
        tree = parse("1+" * 3000 + "1")
        self.assertIsInstance(tree, Chain)
        self.assertEqual(len(tree.operands), 3001)
        self.assertIsInstance(tree.operands[-1], Number)

    def test_power_is_right_associative(self):
        tree = parse("2^3^2")
        self.assertEqual(tree.operator, "^")
        self.assertIsInstance(tree.right, BinaryOp)
        self.assertEqual(tree.right.operator, "^")

    def test_unary_minus_applies_after_power(self):
        tree = parse("-2^2")
        self.assertIsInstance(tree, Negate)
        self.assertEqual(tree.operand.operator, "^")

    def test_negative_exponent(self):
        tree = parse("2^-1")
        self.assertIsInstance(tree.right, Negate)

    def test_factorial(self):
        tree = parse("3!!")
        self.assertIsInstance(tree, Factorial)
        self.assertIsInstance(tree.operand, Factorial)

    def test_absolute(self):
        self.assertIsInstance(parse("|x - 1|"), Absolute)

    def test_call_and_alias(self):
        tree = parse("log(100)")
        self.assertIsInstance(tree, Call)
        self.assertEqual(tree.name, "log10")
        tree = parse("gcd(4; 6)")
        self.assertEqual(len(tree.arguments), 2)

    def test_prefix_symbol(self):
        tree = parse("√16")
        self.assertIsInstance(tree, Call)
        self.assertEqual(tree.name, "sqrt")

    def test_raw_call_keeps_body_text(self):
        tree = parse("sum(1; 10; k^2 + (k-1))")
        self.assertIsInstance(tree, RawCall)
        self.assertEqual(tree.body, "k^2 + (k-1)")
        self.assertEqual(len(tree.arguments), 2)

    def test_referenced_names(self):
        self.assertEqual(referenced_names("a*x + b - sin(c)"), frozenset({"a", "x", "b", "c"}))
        self.assertEqual(referenced_names("sum(1; n; k)"), frozenset({"n"}))

    def test_name_node(self):
        self.assertEqual(parse("alpha"), Name("alpha"))

    def test_trees_are_cached(self):
        self.assertIs(parse("1 + 2 + 3"), parse("1 + 2 + 3"))


class TestParseErrors(unittest.TestCase):
    """Test malformed input."""

    def test_syntax_errors(self):
        for text in ("2+", "(2", "2)", "*3", "sin(1;", "sum(1;2;)"):
            with self.subTest(text=text):
                with self.assertRaises(ParseError):
                    parse(text)

    def test_wrong_arity(self):
        with self.assertRaises(ParseError) as ctx:
            parse("sin(1; 2)")
        self.assertEqual(ctx.exception.code, "WRONG_ARITY")
        with self.assertRaises(ParseError):
            parse("avg()")

    def test_blank(self):
        for text in ("", "   "):
            with self.assertRaises(ValidationError) as ctx:
                validate_text(text)
            self.assertEqual(ctx.exception.code, "EMPTY_INPUT")

    def test_too_long(self):
        with self.assertRaises(ValidationError) as ctx:
            parse("1+" * 6000 + "1")
        self.assertEqual(ctx.exception.code, "TOO_LONG")

    def test_too_deep(self):
        """Nesting past the configured depth is rejected, not a crash."""
        deep_inputs = (
            "(" * 150 + "1" + ")" * 150,
            "√" * 400 + "16",
            "-" * 400 + "1",
            "2^" * 400 + "2",
            "3" + "!" * 400,
        )
        for text in deep_inputs:
            with self.subTest(text=text[:12]):
                with self.assertRaises(ValidationError) as ctx:
                    parse(text)
                self.assertEqual(ctx.exception.code, "TOO_COMPLEX")

    def test_nesting_within_limit(self):
        """Nesting below the limit still parses."""
        self.assertIsInstance(parse("√" * 50 + "16"), Call)
        self.assertIsInstance(parse("(" * 50 + "1" + ")" * 50), Number)


if __name__ == "__main__":
    unittest.main()
