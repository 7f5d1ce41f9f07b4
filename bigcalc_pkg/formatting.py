"""Regional number formats: parsing decimal text and rendering values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from .config import SCIENTIFIC_TEXT_REGEX
from .types import ValidationError


@dataclass(frozen=True)
class FormatProfile:
    """Decimal and grouping separators of a regional number format.

    ``grouping_separator`` is used when rendering; ``alternate_grouping``
    lists further separators accepted when parsing.
    """

    name: str
    decimal_separator: str
    grouping_separator: str
    alternate_grouping: tuple = ()

    def __post_init__(self):
        if self.decimal_separator in self.grouping_separators:
            raise ValidationError(
                "Decimal and grouping separators must differ", "INVALID_PROFILE"
            )

    @property
    def grouping_separators(self) -> tuple:
        return (self.grouping_separator,) + tuple(self.alternate_grouping)

    def _pattern(self) -> re.Pattern:
        dec = re.escape(self.decimal_separator)
        grp = "[" + "".join(re.escape(sep) for sep in self.grouping_separators) + "]"
        return re.compile(
            rf"^[+-]?(?:\d{{1,3}}(?:{grp}\d{{3}})+|\d+)(?:{dec}\d*)?$|^[+-]?{dec}\d+$"
        )

    def matches(self, text: str) -> bool:
        return bool(self._pattern().match(text))

    def normalize(self, text: str) -> str:
        """Rewrite text of this profile into the canonical ``1234.5`` form."""
        if not self.matches(text):
            raise ValidationError(
                f"'{text}' is not a number in the {self.name} format", "INVALID_NUMBER"
            )
        for separator in self.grouping_separators:
            text = text.replace(separator, "")
        return text.replace(self.decimal_separator, ".")


US = FormatProfile("US", ".", ",")
GERMAN = FormatProfile("German", ",", ".")
# Narrow no-break space when rendering; plain and no-break spaces also parse
FRENCH = FormatProfile("French", ",", "\u202f", (" ", "\u00a0"))
SWISS = FormatProfile("Swiss", ".", "'")

DEFAULT_PROFILE = US
SUPPORTED_PROFILES = (US, GERMAN, FRENCH, SWISS)


def detect_profile(text: str) -> FormatProfile:
    """Return the first supported profile the text is a valid number in."""
    stripped = text.strip()
    for profile in SUPPORTED_PROFILES:
        if profile.matches(stripped):
            return profile
    raise ValidationError(f"'{text}' is not a recognised number", "INVALID_NUMBER")


def parse_decimal(text: str, profile: FormatProfile | None = None) -> Decimal:
    """Parse decimal text into an exact Decimal.

    Args:
        text: Number text, e.g. ``"1,234.5"``, ``"1.234,5"`` or ``"1.5e-3"``
        profile: Expected format; auto-detected when None

    Returns:
        Exact Decimal value

    Raises:
        ValidationError: If the text is not a number in the profile
    """
    if not isinstance(text, str):
        raise ValidationError(f"Expected text, got {type(text).__name__}", "INVALID_NUMBER")
    stripped = text.strip()
    if not stripped:
        raise ValidationError("Empty number text", "INVALID_NUMBER")
    if SCIENTIFIC_TEXT_REGEX.match(stripped):
        canonical = stripped
    else:
        if profile is None:
            profile = detect_profile(stripped)
        canonical = profile.normalize(stripped)
    if canonical.endswith("."):
        canonical += "0"
    try:
        return Decimal(canonical)
    except InvalidOperation as e:
        raise ValidationError(f"'{text}' is not a number", "INVALID_NUMBER") from e


def _group(digits: str, separator: str) -> str:
    head = len(digits) % 3 or 3
    groups = [digits[:head]] + [digits[i : i + 3] for i in range(head, len(digits), 3)]
    return separator.join(groups)


def render(value: Decimal, profile: FormatProfile = DEFAULT_PROFILE, grouping: bool = False) -> str:
    """Render a Decimal in plain (never scientific) notation for a profile."""
    plain = format(value, "f")
    sign = ""
    if plain.startswith("-"):
        sign, plain = "-", plain[1:]
    integer, _, fraction = plain.partition(".")
    if grouping:
        integer = _group(integer, profile.grouping_separator)
    if fraction:
        return f"{sign}{integer}{profile.decimal_separator}{fraction}"
    return f"{sign}{integer}"
