"""Digit-system normalization.

Staff type phone numbers, national IDs and page counts with Persian
(U+06F0..U+06F9) or Arabic-Indic (U+0660..U+0669) digits. Everything sent to
the backend is canonical ASCII; re-localizing for display happens in the
presentation layer.
"""

_PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
_ARABIC_INDIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"
_ASCII_DIGITS = "0123456789"

_TO_ASCII = str.maketrans(
    _PERSIAN_DIGITS + _ARABIC_INDIC_DIGITS,
    _ASCII_DIGITS + _ASCII_DIGITS,
)


def to_ascii_digits(value: str) -> str:
    """Replace every Persian/Arabic-Indic digit with its ASCII counterpart."""
    return value.translate(_TO_ASCII)


def parse_positive_int(value: str | int) -> int | None:
    """Canonicalize and parse a count; None unless it is an integer > 0."""
    text = to_ascii_digits(str(value)).strip()
    if not text.isdecimal():
        return None
    number = int(text)
    return number if number > 0 else None
