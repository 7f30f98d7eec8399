"""Number formatting, URL helpers and message placeholders of the expression language."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Union

from .string_functions import _url_encode

MAX_PATTERN_LENGTH = 120
STATIC_PREFIX = "/static/"
_MAX_INTEGER = 0xFFFFFFFF


class FormatError(ValueError):
    """Raised when a number cannot be formatted with the given pattern."""


@dataclass(frozen=True)
class DecimalFormat:
    """The symbols a decimal format uses; only the first character of each sign counts."""

    decimal_separator: str = "."
    grouping_separator: str = ","
    percent: str = "%"
    zero_digit: str = "0"
    digit: str = "#"
    pattern_separator: str = ";"
    infinity: str = "Infinity"
    nan: str = "NaN"
    minus_sign: str = "-"

    _ATTRIBUTES = {
        "decimal-separator": "decimal_separator",
        "grouping-separator": "grouping_separator",
        "percent": "percent",
        "zero-digit": "zero_digit",
        "digit": "digit",
        "pattern-separator": "pattern_separator",
        "infinity": "infinity",
        "NaN": "nan",
        "minus-sign": "minus_sign",
    }

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Optional[str]]) -> "DecimalFormat":
        """Build a format from ``xsl:decimal-format`` attribute names and values."""
        values = {
            field_name: attributes[name]
            for name, field_name in cls._ATTRIBUTES.items()
            if attributes.get(name) is not None
        }
        return cls(**values)


def _integer_digits(number: int, minimum: int) -> str:
    text = str(number) if number > 0 else ""
    return text.rjust(max(len(text), minimum), "0")


def format_number(
    number: float, pattern: str, decimal_format: Optional[DecimalFormat] = None
) -> str:
    """Format ``number`` following ``pattern`` as ``format-number()`` does."""
    fmt = decimal_format or DecimalFormat()
    if len(pattern) > MAX_PATTERN_LENGTH:
        raise FormatError("pattern length error")
    if fmt.pattern_separator in pattern:
        raise FormatError("pattern separator not supported")
    if fmt.percent in pattern:
        raise FormatError("percent not supported")

    number = float(number)
    if math.isnan(number):
        return fmt.nan
    if math.isinf(number):
        return fmt.infinity

    separator = fmt.decimal_separator[:1]
    grouping = fmt.grouping_separator[:1]
    zero = fmt.zero_digit[:1]
    digit_sign = fmt.digit[:1]

    index = pattern.find(fmt.decimal_separator)
    if index >= 0:
        integer_part, fractional_part = pattern[:index], pattern[index + 1:]
    else:
        integer_part, fractional_part = pattern, ""

    out: list[str] = []
    if math.copysign(1.0, number) < 0:
        out.append(fmt.minus_sign[:1])

    fraction, whole = math.modf(abs(number))
    integer_number = int(whole)
    if integer_number > _MAX_INTEGER:
        raise FormatError("integer number error")

    minimum_integer = 0
    maximum_integer = 0
    grouping_position = 0
    for char in reversed(integer_part):
        if char == zero:
            minimum_integer += 1
            maximum_integer += 1
        if char == digit_sign:
            maximum_integer += 1
        if char == grouping and grouping_position == 0:
            grouping_position = maximum_integer
    minimum_integer = max(minimum_integer, 1)

    digits = list(_integer_digits(integer_number, minimum_integer))
    precision = len(digits)

    if fractional_part:
        minimum_fraction = sum(1 for char in fractional_part if char == zero)
        maximum_fraction = sum(1 for char in fractional_part if char in (zero, digit_sign) and char)

        digits.append(separator)
        for i in range(maximum_fraction + 1):
            value = int(math.floor(math.pow(10, i + 1) * fraction)) % 10
            digits.append(str(value))
            if value == 0 and i == minimum_fraction:
                break

        if digits[-1] >= "5":
            digits.pop()
            overflow = False
            for i in range(len(digits) - 1, -1, -1):
                char = digits[i]
                if char == separator:
                    continue
                if char == "9":
                    digits[i] = "0"
                    if i == 0:
                        overflow = True
                else:
                    digits[i] = chr(ord(char) + 1)
                    break
            if overflow:
                digits.insert(0, "1")
                precision += 1
        else:
            digits.pop()

    group = 0 < grouping_position < precision
    for i, char in enumerate(digits):
        if group and i < precision and (precision - i) % grouping_position == 0:
            out.append(grouping)
        out.append(char)
    return "".join(out)


def url_encode(text: Optional[str]) -> Optional[str]:
    """Percent-encode every UTF-8 byte of ``text`` except letters, digits and ``-._~``."""
    if text is None:
        return None
    return _url_encode(text)


def veristat_url(url: str, revisions: Mapping[str, str]) -> str:
    """Return the static URL of ``url``, tagged with its revision when one is known."""
    if url is None:
        raise ValueError("url is required")
    result = STATIC_PREFIX + url
    revision = revisions.get(url)
    if revision is not None:
        result += "?" + revision
    return result


def localize(
    template: str,
    substitutions: Union[Mapping[str, Optional[str]], Iterable[tuple[str, Optional[str]]]],
) -> str:
    """Replace each ``{name}`` in ``template`` with its value, one name after another.

    A value of ``None`` removes the placeholder.
    """
    pairs = substitutions.items() if isinstance(substitutions, Mapping) else substitutions
    result = template
    for name, value in pairs:
        result = result.replace("{" + str(name) + "}", value or "")
    return result