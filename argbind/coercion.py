"""
Argbind value coercion: pure text → value conversions.

Rules
- booleans: ASCII case-insensitive match against TRUE_STRINGS / FALSE_STRINGS.
- integers: the token's shape is detected first (general decimal, hex "0x",
  negative hex "-0x"), the leading digits are read into a 64-bit accumulator
  and the result saturates into the destination range. out-of-range numbers
  never fail; they clamp to the nearest bound.
- floats: decimal (with exponent), inf/nan, hex and negative hex. finite values
  past the destination's maximum saturate to ±max.
- numbers are read from the longest numeric prefix; text after it is ignored,
  and a token without leading digits fails.
- characters: exactly one character, copied raw.
- strings: verbatim, never fail.

Every function either returns the coerced value or raises CoercionError; none
of them writes any storage.
"""
import math
import re
import string
import struct
import sys
from enum import Enum


TRUE_STRINGS = ("true", "t", "yes", "y", "1")
FALSE_STRINGS = ("false", "f", "no", "n", "0")

HEX_PREFIXES = ("0x", "0X")
NEGATIVE_HEX_PREFIXES = ("-0x", "-0X")

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

FLOAT32_MAX = float.fromhex("0x1.fffffep+127")
FLOAT64_MAX = sys.float_info.max

# digits needed for the largest 64-bit accumulator value, per base
_ACCUMULATOR_DIGITS = {10: len(str(UINT64_MAX)), 16: 16}

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

_DECIMAL_DIGITS = re.compile(r"[0-9]+")
_HEX_DIGITS = re.compile(r"[0-9A-Fa-f]+")
_DECIMAL_FLOAT = re.compile(r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")
_SPECIAL_FLOAT = re.compile(r"-?(?:infinity|inf|nan)", re.IGNORECASE)
_HEX_FLOAT = re.compile(r"-?0[xX](?:[0-9A-Fa-f]+\.?[0-9A-Fa-f]*|\.[0-9A-Fa-f]+)(?:[pP][-+]?[0-9]+)?")


class CoercionError(ValueError):
    """
    raised when a token does not satisfy its destination's parsing rule.
    """


class NumberShape(Enum):
    GENERAL      = "general"
    HEX          = "hex"
    NEGATIVE_HEX = "negative-hex"


def numbershape(token):
    """
    classify a numeric token by its prefix.

    - "-0x"/"-0X" → NEGATIVE_HEX
    - "0x"/"0X"   → HEX
    - anything else → GENERAL (the digits are validated later)
    """
    if token.startswith(NEGATIVE_HEX_PREFIXES):
        return NumberShape.NEGATIVE_HEX
    if token.startswith(HEX_PREFIXES):
        return NumberShape.HEX
    return NumberShape.GENERAL


def clamp(value, low, high):
    return max(low, min(value, high))


def parsebool(token):
    lowered = token.translate(_ASCII_LOWER)
    if lowered in TRUE_STRINGS:
        return True
    if lowered in FALSE_STRINGS:
        return False
    raise CoercionError("%r is not a boolean keyword" % token)


def parseint(token, low, high, /, *, signed):
    """
    parse an integer token and saturate it into [low, high].

    parameters
    - token: str
      the raw value text.
    - low, high: int
      destination bounds (inclusive).
    - signed: bool
      selects the 64-bit accumulator; unsigned destinations reject any
      leading minus (including negative hex).

    returns
    - int within [low, high].

    errors
    - CoercionError when the token does not start with a digit of its shape.
      trailing text after the leading digits is ignored ("12abc" → 12).
    """
    match numbershape(token):
        case NumberShape.NEGATIVE_HEX:
            if not signed:
                raise CoercionError("%r is negative but the destination is unsigned" % token)
            digits, base, negative = token[3:], 16, True
        case NumberShape.HEX:
            digits, base, negative = token[2:], 16, False
        case NumberShape.GENERAL:
            negative = token.startswith("-")
            if negative and not signed:
                raise CoercionError("%r is negative but the destination is unsigned" % token)
            digits, base = token[negative:], 10

    if not (match := (_HEX_DIGITS if base == 16 else _DECIMAL_DIGITS).match(digits)):
        raise CoercionError("%r is not a number" % token)

    # wider than the accumulator saturates without converting the digits
    digits = match.group().lstrip("0")
    if len(digits) > _ACCUMULATOR_DIGITS[base]:
        value = UINT64_MAX + 1
    else:
        value = int(digits or "0", base)
    if negative:
        value = -value

    if signed:
        value = clamp(value, INT64_MIN, INT64_MAX)
    else:
        value = clamp(value, 0, UINT64_MAX)

    return clamp(value, low, high)


def roundsingle(value):
    """
    round a float to IEEE single precision.

    errors
    - OverflowError when a finite value does not fit in single precision.
    """
    result = struct.unpack("f", struct.pack("f", value))[0]
    if math.isinf(result) and not math.isinf(value):
        raise OverflowError("%r is out of range for single precision" % value)
    return result


def parsefloat(token, /, *, single=False):
    """
    parse a floating point token, saturating finite overflow to ±max.

    the longest numeric prefix is used ("1.5x" → 1.5); hex tokens accept an
    optional fraction and binary exponent ("0x1.8p3").
    """
    if numbershape(token) is NumberShape.GENERAL:
        if match := _SPECIAL_FLOAT.match(token):
            value = float(match.group())
        elif match := _DECIMAL_FLOAT.match(token):
            value = float(match.group())
            # only the literal spellings may produce infinities
            if math.isinf(value):
                value = FLOAT64_MAX if value > 0 else -FLOAT64_MAX
        else:
            raise CoercionError("%r is not a floating point number" % token)
    else:
        if not (match := _HEX_FLOAT.match(token)):
            raise CoercionError("%r is not a hexadecimal floating point number" % token)
        try:
            value = float.fromhex(match.group())
        except OverflowError:
            value = -FLOAT64_MAX if token.startswith("-") else FLOAT64_MAX

    if not single:
        return value
    try:
        return roundsingle(value)
    except OverflowError:
        return FLOAT32_MAX if value > 0 else -FLOAT32_MAX


def parsechar(token):
    if len(token) != 1:
        raise CoercionError("%r is not a single character" % token)
    return token


def parsestring(token):
    return token


__all__ = (
    "TRUE_STRINGS",
    "FALSE_STRINGS",
    "HEX_PREFIXES",
    "NEGATIVE_HEX_PREFIXES",
    "CoercionError",
    "NumberShape",
    "numbershape",
    "clamp",
    "parsebool",
    "parseint",
    "roundsingle",
    "parsefloat",
    "parsechar",
    "parsestring",
)
