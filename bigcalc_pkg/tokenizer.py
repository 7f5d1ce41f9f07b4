"""Tokenizer for calculator expressions.

Produces a flat list of tokens with their positions in the source text.
Implicit multiplication (``2x``, ``3(4)``, ``(1)(2)``, ``2pi``) is made
explicit by inserting ``*`` tokens, and absolute-value bars are classified
as opening or closing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .config import IDENTIFIER_REGEX, INVERSE_SUFFIX, NUMBER_REGEX
from .types import ParseError

NUMBER = "NUMBER"
NAME = "NAME"
FUNCTION = "FUNCTION"
OPERATOR = "OPERATOR"
POSTFIX = "POSTFIX"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
SEPARATOR = "SEPARATOR"
ABS_OPEN = "ABS_OPEN"
ABS_CLOSE = "ABS_CLOSE"

OPERATOR_SYMBOLS = {
    "+": "+",
    "-": "-",
    "−": "-",
    "*": "*",
    "×": "*",
    "·": "*",
    "/": "/",
    "÷": "/",
    "%": "%",
    "^": "^",
}
WORD_OPERATORS = ("nPr", "nCr")
SEPARATORS = (";", ",")

# Symbols spelled as a single character that stand for a named function or constant
SYMBOL_NAMES = {
    "³√": "cbrt",
    "√": "sqrt",
    "∑": "sum",
    "∏": "prod",
    "∫": "integral",
    "Γ": "gamma",
    "π": "π",
}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    start: int
    end: int

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r})"


def _ends_operand(token: Token | None) -> bool:
    return token is not None and token.kind in (NUMBER, NAME, RPAREN, ABS_CLOSE, POSTFIX)


def _starts_operand(token: Token) -> bool:
    return token.kind in (NUMBER, NAME, FUNCTION, LPAREN, ABS_OPEN)


def _next_non_space(text: str, index: int) -> str:
    while index < len(text) and text[index].isspace():
        index += 1
    return text[index] if index < len(text) else ""


def tokenize(text: str, is_function: Callable[[str], bool]) -> list[Token]:
    """Split expression text into tokens.

    Args:
        text: Expression text, e.g. ``"2x + sin(30)"``
        is_function: Predicate telling whether a name is a callable function

    Returns:
        Tokens including the inserted implicit-multiplication operators

    Raises:
        ParseError: On unknown characters or unbalanced absolute-value bars
    """
    tokens: list[Token] = []
    open_bars = 0
    index = 0

    def emit(kind: str, value: str, start: int, end: int) -> None:
        token = Token(kind, value, start, end)
        previous = tokens[-1] if tokens else None
        if _ends_operand(previous) and _starts_operand(token):
            tokens.append(Token(OPERATOR, "*", start, start))
        tokens.append(token)

    while index < len(text):
        char = text[index]
        if char.isspace():
            index += 1
            continue

        previous = tokens[-1] if tokens else None
        if _ends_operand(previous):
            word = next((w for w in WORD_OPERATORS if text.startswith(w, index)), None)
            if word:
                tokens.append(Token(OPERATOR, word, index, index + len(word)))
                index += len(word)
                continue

        number = NUMBER_REGEX.match(text, index)
        if number:
            emit(NUMBER, number.group(), index, number.end())
            index = number.end()
            continue

        symbol = next((s for s in SYMBOL_NAMES if text.startswith(s, index)), None)
        identifier = IDENTIFIER_REGEX.match(text, index)
        if symbol or identifier:
            if symbol:
                name, end = SYMBOL_NAMES[symbol], index + len(symbol)
            else:
                name, end = identifier.group(), identifier.end()
            if text.startswith(INVERSE_SUFFIX, end):
                name += INVERSE_SUFFIX
                end += len(INVERSE_SUFFIX)
            # Function symbols such as √ may also prefix a bare operand
            callable_here = symbol is not None or _next_non_space(text, end) == "("
            kind = FUNCTION if callable_here and is_function(name) else NAME
            emit(kind, name, index, end)
            index = end
            continue

        if char in OPERATOR_SYMBOLS:
            tokens.append(Token(OPERATOR, OPERATOR_SYMBOLS[char], index, index + 1))
        elif char == "!":
            tokens.append(Token(POSTFIX, "!", index, index + 1))
        elif char == "(":
            emit(LPAREN, char, index, index + 1)
        elif char == ")":
            tokens.append(Token(RPAREN, char, index, index + 1))
        elif char in SEPARATORS:
            tokens.append(Token(SEPARATOR, char, index, index + 1))
        elif char == "|":
            if open_bars and _ends_operand(previous):
                open_bars -= 1
                tokens.append(Token(ABS_CLOSE, char, index, index + 1))
            else:
                open_bars += 1
                emit(ABS_OPEN, char, index, index + 1)
        else:
            raise ParseError(f"Unexpected character '{char}' at position {index}")
        index += 1

    if open_bars:
        raise ParseError("Unbalanced absolute value bars", "UNBALANCED_ABS")
    return tokens
