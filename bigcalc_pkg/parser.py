"""Recursive-descent parser producing immutable expression trees.

Precedence, lowest first::

    additive        + -
    multiplicative  * / %   (including implicit multiplication)
    unary           leading + -
    power           ^       (right associative, -2^2 == -4)
    combinatoric    nPr nCr
    postfix         !
    primary         numbers, names, calls, ( ), | |
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Union

from . import basic, functions
from .config import CACHE_SIZE_PARSE, MAX_EXPRESSION_DEPTH, MAX_INPUT_LENGTH
from .coordinates import Coordinate
from .number import PrecisionNumber
from .tokenizer import (
    ABS_CLOSE,
    ABS_OPEN,
    FUNCTION,
    LPAREN,
    NAME,
    NUMBER,
    OPERATOR,
    POSTFIX,
    RPAREN,
    SEPARATOR,
    Token,
    tokenize,
)
from .types import ParseError, ValidationError

Operand = Union[PrecisionNumber, Coordinate]


def as_number(operand: Operand) -> PrecisionNumber:
    """Use the first component of a coordinate pair in arithmetic."""
    if isinstance(operand, Coordinate):
        return operand.first
    return operand


BINARY_OPERATIONS = {
    "+": lambda scope, a, b: a + b,
    "-": lambda scope, a, b: a - b,
    "*": lambda scope, a, b: a * b,
    "/": lambda scope, a, b: basic.divide(a, b, scope.context),
    "%": lambda scope, a, b: basic.modulo(a, b),
    "^": lambda scope, a, b: basic.power(a, b, scope.context),
    "nPr": lambda scope, a, b: basic.permutation(a, b),
    "nCr": lambda scope, a, b: basic.combination(a, b),
}


@dataclass(frozen=True)
class Number:
    value: PrecisionNumber

    def evaluate(self, scope) -> Operand:
        return self.value

    def names(self) -> frozenset:
        return frozenset()


@dataclass(frozen=True)
class Name:
    name: str

    def evaluate(self, scope) -> Operand:
        return scope.lookup(self.name)

    def names(self) -> frozenset:
        return frozenset((self.name,))


@dataclass(frozen=True)
class Negate:
    operand: object

    def evaluate(self, scope) -> Operand:
        return -as_number(self.operand.evaluate(scope))

    def names(self) -> frozenset:
        return self.operand.names()


@dataclass(frozen=True)
class BinaryOp:
    operator: str
    left: object
    right: object

    def evaluate(self, scope) -> Operand:
        left = as_number(self.left.evaluate(scope))
        right = as_number(self.right.evaluate(scope))
        return BINARY_OPERATIONS[self.operator](scope, left, right)

    def names(self) -> frozenset:
        return self.left.names() | self.right.names()


@dataclass(frozen=True)
class Chain:
    """Left-associative run of operators of one precedence level, e.g. ``1-2+3``.

    The run is one tree level deep however many operators it holds.
    """

    first: object
    rest: tuple

    @property
    def operators(self) -> tuple:
        return tuple(operator for operator, _ in self.rest)

    @property
    def operands(self) -> tuple:
        return (self.first,) + tuple(operand for _, operand in self.rest)

    def evaluate(self, scope) -> Operand:
        result = as_number(self.first.evaluate(scope))
        for operator, operand in self.rest:
            right = as_number(operand.evaluate(scope))
            result = BINARY_OPERATIONS[operator](scope, result, right)
        return result

    def names(self) -> frozenset:
        result = frozenset()
        for operand in self.operands:
            result |= operand.names()
        return result


@dataclass(frozen=True)
class Factorial:
    operand: object

    def evaluate(self, scope) -> Operand:
        return basic.factorial(as_number(self.operand.evaluate(scope)))

    def names(self) -> frozenset:
        return self.operand.names()


@dataclass(frozen=True)
class Absolute:
    operand: object

    def evaluate(self, scope) -> Operand:
        return abs(as_number(self.operand.evaluate(scope)))

    def names(self) -> frozenset:
        return self.operand.names()


@dataclass(frozen=True)
class Call:
    name: str
    arguments: tuple

    def evaluate(self, scope) -> Operand:
        spec = functions.lookup(self.name)
        values = [as_number(argument.evaluate(scope)) for argument in self.arguments]
        return spec.handler(scope, *values)

    def names(self) -> frozenset:
        result = frozenset()
        for argument in self.arguments:
            result |= argument.names()
        return result


@dataclass(frozen=True)
class RawCall:
    """Call whose last argument is passed on as expression text."""

    name: str
    arguments: tuple
    body: str

    def evaluate(self, scope) -> Operand:
        spec = functions.lookup(self.name)
        values = [as_number(argument.evaluate(scope)) for argument in self.arguments]
        return spec.handler(scope, *values, self.body)

    def names(self) -> frozenset:
        result = frozenset()
        for argument in self.arguments:
            result |= argument.names()
        return result


class Parser:
    """Builds an expression tree from a token list."""

    def __init__(self, text: str, tokens: list[Token]):
        self.text = text
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    def peek(self) -> Token | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise ParseError("Unexpected end of expression")
        self.pos += 1
        return token

    def accept(self, kind: str, *texts: str) -> Token | None:
        token = self.peek()
        if token is not None and token.kind == kind and (not texts or token.text in texts):
            self.pos += 1
            return token
        return None

    def expect(self, kind: str, description: str) -> Token:
        token = self.accept(kind)
        if token is None:
            found = self.peek()
            where = f"'{found.text}' at position {found.start}" if found else "end of expression"
            raise ParseError(f"Expected {description}, found {where}")
        return token

    def _descend(self) -> None:
        self.depth += 1
        if self.depth > MAX_EXPRESSION_DEPTH:
            raise ValidationError(
                f"Expression nesting exceeds {MAX_EXPRESSION_DEPTH} levels", "TOO_COMPLEX"
            )

    def parse(self):
        tree = self.parse_expression()
        leftover = self.peek()
        if leftover is not None:
            raise ParseError(f"Unexpected '{leftover.text}' at position {leftover.start}")
        return tree

    def _nested(self, parse_operand):
        self._descend()
        try:
            return parse_operand()
        finally:
            self.depth -= 1

    def _finish_chain(self, first, rest: list):
        return Chain(first, tuple(rest)) if rest else first

    def parse_expression(self):
        self._descend()
        try:
            first, rest = self.parse_multiplicative(), []
            while (token := self.accept(OPERATOR, "+", "-")) is not None:
                rest.append((token.text, self.parse_multiplicative()))
            return self._finish_chain(first, rest)
        finally:
            self.depth -= 1

    def parse_multiplicative(self):
        first, rest = self.parse_unary(), []
        while (token := self.accept(OPERATOR, "*", "/", "%")) is not None:
            rest.append((token.text, self.parse_unary()))
        return self._finish_chain(first, rest)

    def parse_unary(self):
        token = self.accept(OPERATOR, "+", "-")
        if token is None:
            return self.parse_power()
        operand = self._nested(self.parse_unary)
        return Negate(operand) if token.text == "-" else operand

    def parse_power(self):
        base = self.parse_combinatoric()
        if self.accept(OPERATOR, "^") is not None:
            return BinaryOp("^", base, self._nested(self.parse_unary))
        return base

    def parse_combinatoric(self):
        first, rest = self.parse_postfix(), []
        while (token := self.accept(OPERATOR, "nPr", "nCr")) is not None:
            rest.append((token.text, self.parse_postfix()))
        return self._finish_chain(first, rest)

    def parse_postfix(self):
        node = self.parse_primary()
        count = 0
        while self.accept(POSTFIX) is not None:
            count += 1
            if self.depth + count > MAX_EXPRESSION_DEPTH:
                raise ValidationError(
                    f"Expression nesting exceeds {MAX_EXPRESSION_DEPTH} levels", "TOO_COMPLEX"
                )
            node = Factorial(node)
        return node

    def parse_primary(self):
        token = self.advance()
        if token.kind == NUMBER:
            return Number(PrecisionNumber(Decimal(token.text)))
        if token.kind == NAME:
            return Name(token.text)
        if token.kind == FUNCTION:
            return self.parse_call(token)
        if token.kind == LPAREN:
            node = self.parse_expression()
            self.expect(RPAREN, "')'")
            return node
        if token.kind == ABS_OPEN:
            node = self.parse_expression()
            self.expect(ABS_CLOSE, "'|'")
            return Absolute(node)
        raise ParseError(f"Unexpected '{token.text}' at position {token.start}")

    def parse_call(self, token: Token):
        spec = functions.lookup(token.text)
        following = self.peek()
        if spec.arity == 1 and (following is None or following.kind != LPAREN):
            # Prefix form of a symbol, e.g. √16
            return Call(spec.name, (self._nested(self.parse_postfix),))
        self.expect(LPAREN, f"'(' after {token.text}")
        if spec.raw:
            arguments = []
            for _ in range(spec.arity - 1):
                arguments.append(self.parse_expression())
                self.expect(SEPARATOR, f"';' in {token.text}")
            return RawCall(spec.name, tuple(arguments), self._raw_body(token.text))

        arguments = []
        if self.peek() is not None and self.peek().kind != RPAREN:
            arguments.append(self.parse_expression())
            while self.accept(SEPARATOR) is not None:
                arguments.append(self.parse_expression())
        self.expect(RPAREN, f"')' closing {token.text}")
        expected = spec.arity
        if (expected is None and not arguments) or (
            expected is not None and len(arguments) != expected
        ):
            wanted = "at least 1" if expected is None else str(expected)
            raise ParseError(
                f"{token.text} takes {wanted} argument(s), got {len(arguments)}",
                "WRONG_ARITY",
            )
        return Call(spec.name, tuple(arguments))

    def _raw_body(self, name: str) -> str:
        start = self.peek()
        nesting = 0
        while True:
            token = self.peek()
            if token is None:
                raise ParseError(f"Missing ')' closing {name}")
            if token.kind == LPAREN:
                nesting += 1
            elif token.kind == RPAREN:
                if nesting == 0:
                    break
                nesting -= 1
            self.pos += 1
        body = self.text[start.start : token.start].strip() if start is not token else ""
        if not body:
            raise ParseError(f"{name} is missing its expression argument")
        self.pos += 1
        return body


def validate_text(text: str) -> str:
    if not isinstance(text, str):
        raise ValidationError("Expression must be text", "EMPTY_INPUT")
    if not text.strip():
        raise ValidationError("Expression is empty", "EMPTY_INPUT")
    if len(text) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Expression is too long ({len(text)} > {MAX_INPUT_LENGTH} characters)",
            "TOO_LONG",
        )
    return text.strip()


@lru_cache(maxsize=CACHE_SIZE_PARSE)
def parse(text: str):
    """Parse expression text into a tree; trees are cached by text.

    Raises:
        ValidationError: For blank, too long or too deeply nested input
        ParseError: For malformed input
    """
    text = validate_text(text)
    try:
        return Parser(text, tokenize(text, functions.is_function)).parse()
    except RecursionError as e:
        raise ValidationError("Expression is nested too deeply", "TOO_COMPLEX") from e


def referenced_names(text: str) -> frozenset:
    """Names an expression reads from its environment."""
    return parse(text).names()
