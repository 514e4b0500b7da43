"""
Parsing helpers shared by the metadata resolver and the line evaluator.

Metafield values arrive as strings. Numbers are read the way the host
platform's decimal parser reads them: leading whitespace is ignored and
the longest leading decimal prefix is used, so "12.50 USD" is 12.5 and
"USD 12.50" is not a number.
"""
import json
import math
import re
from decimal import Decimal
from typing import Any, Optional

from .errors import MetadataParseError, NumericParseError

_LEADING_NUMBER = re.compile(
    r'^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))'
)


def parse_number(value: Any) -> float:
    """
    Parse a numeric value from a metafield string or JSON number.

    Raises NumericParseError when no number can be read.
    """
    if isinstance(value, bool):
        raise NumericParseError(value)
    if isinstance(value, (int, float)):
        if math.isnan(value):
            raise NumericParseError(value)
        return float(value)
    if not isinstance(value, str):
        raise NumericParseError(value)

    match = _LEADING_NUMBER.match(value)
    if not match:
        raise NumericParseError(value)
    return float(match.group(1).replace('Infinity', 'inf'))


def parse_optional_number(value: Any) -> Optional[float]:
    """Like parse_number, but returns None instead of raising."""
    try:
        return parse_number(value)
    except NumericParseError:
        return None


def parse_amount(value: Any) -> float:
    """Parse a finite, non-negative money amount."""
    amount = parse_number(value)
    if not math.isfinite(amount) or amount < 0:
        raise NumericParseError(value)
    return amount


def format_amount(amount: float) -> str:
    """
    Render an amount the way the host expects decimal strings.

    Uses the shortest round-trip digits. Integral values drop the
    fractional part ("105", not "105.0"); values of 1e21 and above or
    below 1e-6 switch to exponent form ("1e+21", "1.5e-7").
    """
    if not math.isfinite(amount):
        raise NumericParseError(amount)
    if amount == 0:
        return "0"

    sign = "-" if amount < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(amount))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    k = len(digits)
    # Position of the decimal point relative to the first digit
    n = k + exponent

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"
    return sign + text


def load_pricing_payload(value: str) -> tuple[str, dict]:
    """
    Decode a combined pricing metafield.

    The payload is an object with a single top-level key whose name is
    not known in advance. Returns (key, record) for the first key.
    """
    try:
        data = json.loads(value)
    except (TypeError, ValueError) as e:
        raise MetadataParseError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict) or not data:
        raise MetadataParseError("Invalid JSON structure")

    key = next(iter(data))
    record = data[key]
    if not record or not isinstance(record, dict):
        raise MetadataParseError("Invalid JSON structure")
    return key, record
