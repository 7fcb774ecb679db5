"""Pure functions for converting between amount text and cents.

All monetary amounts are integer cents (Cents type). No floats are involved
at any step.
"""

import re

from cashio.domain.models import CENTS_MAX, CENTS_MIN, Cents
from cashio.errors import AmountOverflowError, ParseError, ValidationError

_INTEGER_PART = re.compile(r"[+-]?[0-9]+")
_FRACTION_PART = re.compile(r"[0-9]+")


def parse_amount(text: str) -> Cents:
    """Parse a decimal amount string into cents.

    Args:
        text: Amount such as "10", "10.5", "-10.90".

    Returns:
        Amount in cents. The sign of the integer part applies to the whole
        amount, so "-10.9" is -1090.

    Raises:
        ParseError: If the text is not a decimal number.
        ValidationError: If more than two fractional digits are given.
        AmountOverflowError: If the amount does not fit the stored range.
    """
    chunks = text.strip().split(".")
    if len(chunks) > 2:
        raise ParseError("Not a valid decimal amount", text)

    integer_text = chunks[0]
    if not _INTEGER_PART.fullmatch(integer_text):
        raise ParseError("Invalid amount", text)

    fraction = 0
    if len(chunks) == 2:
        fraction_text = chunks[1]
        if not _FRACTION_PART.fullmatch(fraction_text):
            raise ParseError("Invalid amount", text)
        if len(fraction_text) > 2:
            raise ValidationError(f"Amount has more than two decimal places: {text!r}")
        fraction = int(fraction_text) * 10 if len(fraction_text) == 1 else int(fraction_text)

    whole = int(integer_text) * 100
    # "-0.5" is negative even though int("-0") is not
    cents = whole - fraction if integer_text.startswith("-") else whole + fraction

    if not CENTS_MIN <= cents <= CENTS_MAX:
        raise AmountOverflowError(text)

    return Cents(cents)


def format_cents(cents: int) -> str:
    """Format cents as a plain decimal string, e.g. -1090 -> "-10.90"."""
    sign = "-" if cents < 0 else ""
    whole, part = divmod(abs(cents), 100)
    return f"{sign}{whole:,}.{part:02d}"
