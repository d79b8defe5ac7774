"""Conversion between human-entered percent strings and fixed-point values.

Percents are stored multiplied by 100 (hundredths of a percent), so 500
means 5.00% and the valid range 1..1000 covers 0.01%..10%.
"""
import re
from decimal import Decimal, InvalidOperation

from domain.exceptions import (
    InvalidNumberError,
    TooManyDecimalsError,
    TooLowPercentError,
    TooHighPercentError
)


MIN_FEE_PERCENT = 1
MAX_FEE_PERCENT = 1000
DEFAULT_FEE_PERCENT = 500

MAX_DECIMALS = 2

# Anything at or above this is out of range before scaling
_CEILING = Decimal(MAX_FEE_PERCENT)

_FLOAT_LITERAL = re.compile(
    r"[+-]?(inf|infinity|nan|(\d+\.?\d*|\.\d+)(e[+-]?\d+)?)",
    re.IGNORECASE | re.ASCII
)


def validate_decimal_part(percent: str) -> None:
    _, dot, decimals = percent.partition(".")
    if dot and len(decimals) > MAX_DECIMALS:
        raise TooManyDecimalsError()


def parse_number(percent: str) -> Decimal:
    if not percent:
        raise InvalidNumberError("cannot parse float from empty string")
    if not _FLOAT_LITERAL.fullmatch(percent):
        raise InvalidNumberError()
    try:
        return Decimal(percent)
    except InvalidOperation:
        # exponent out of range; a float reads it as signed zero or infinity
        return Decimal(float(percent))


def parse_percent(percent: str) -> int:
    """Parse a decimal percent string into its fixed-point value.

    ``"10"`` gives 1000, ``"0.25"`` gives 25. Raises a
    ``PercentParseError`` subclass when the string has more than two
    decimals, is not a number, or falls outside 0.01%..10%.
    """
    validate_decimal_part(percent)
    value = parse_number(percent)

    if value.is_nan() or value.is_signed():
        raise TooLowPercentError()
    if value.is_infinite() or value >= _CEILING:
        raise TooHighPercentError()

    # int() truncates toward zero, which only matters for exponent forms
    scaled = int(value.scaleb(MAX_DECIMALS))
    if scaled < MIN_FEE_PERCENT:
        raise TooLowPercentError()
    if scaled > MAX_FEE_PERCENT:
        raise TooHighPercentError()
    return scaled


def format_percent(percent: int) -> str:
    return str(
        Decimal(percent).scaleb(-MAX_DECIMALS).quantize(Decimal("0.01"))
    )
