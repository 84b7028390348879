"""Signed integers for the pfx language. Number tokens keep their literal text (including sign and zero padding) until
an operator or print consumes them, so conversions live here.
"""

import re

from pfx.lang.error import TypeMismatch


INTEGER = re.compile(r"-?[0-9]+")


def is_number(text):
    """Returns whether text is a (possibly signed, possibly zero-padded) decimal integer."""
    return INTEGER.fullmatch(text) is not None


def to_int(text, operator):
    """Returns int(text), raising a TypeMismatch naming operator if text isn't an integer (or is too long to convert)."""
    if not is_number(text):
        raise TypeMismatch(operator, "Number", text)

    try:
        return int(text)
    except ValueError:
        raise TypeMismatch(operator, "Number", text) from None


def to_text(value, operator):
    """Returns str(value), raising a TypeMismatch naming operator if value has too many digits to convert."""
    try:
        return str(value)
    except ValueError:
        raise TypeMismatch(operator, "Number", "<integer too long>") from None


def normalize(text):
    """Strips zero padding from a number's text: '007' -> '7', '-007' -> '-7', '000' -> '0'. Text that isn't an integer
    is returned unchanged.
    """
    if not is_number(text):
        return text

    sign, digits = ("-", text[1:]) if text.startswith("-") else ("", text)
    digits = digits.lstrip("0")
    return sign + digits if digits else "0"
