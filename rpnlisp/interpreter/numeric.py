"""
Number parsing and formatting for stack values.

Stack values are text. Operators read them as IEEE doubles and write their
results back as text, so these helpers define how that round trip behaves:

- parse_float reads the longest numeric prefix of a token ("12px" is 12)
  and yields NaN when there is none, instead of raising.
- format_number prints integral values without a fractional part
  ("25", not "25.0") and spells non-finite values NaN / Infinity.
- Domain and range errors from the math module are mapped to NaN and
  Infinity so that a bad operand poisons the result rather than aborting
  the evaluation.
"""

import math
import re
from decimal import Decimal
from typing import Optional


NAN = float('nan')
INF = float('inf')

RADIX_DIGITS = '0123456789abcdefghijklmnopqrstuvwxyz'
MAX_FRACTION_DIGITS = 64

_FLOAT_PREFIX = re.compile(r'[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)', re.ASCII)


# =============================================================================
# Parsing
# =============================================================================

def parse_float(token: Optional[str]) -> float:
    """Parse the numeric prefix of a token, NaN if there is none."""
    if token is None:
        return NAN
    match = _FLOAT_PREFIX.match(token.lstrip())
    if not match:
        return NAN
    return float(match.group(0))


def parse_int(token: Optional[str], base: int) -> float:
    """Parse the leading digits of a token in the given base.

    An optional sign is accepted, and for base 16 an optional 0x prefix.
    Parsing stops at the first character that is not a digit of the base.

    Returns:
        The integer value as a float, or NaN if no digit was found
    """
    if token is None:
        return NAN

    text = token.strip()
    sign = 1
    if text and text[0] in '+-':
        if text[0] == '-':
            sign = -1
        text = text[1:]
    if base == 16 and text[:2].lower() == '0x':
        text = text[2:]

    digits = RADIX_DIGITS[:base]
    end = 0
    while end < len(text) and text[end].lower() in digits:
        end += 1
    if end == 0:
        return NAN

    try:
        return float(sign * int(text[:end], base))
    except OverflowError:
        return sign * INF


# =============================================================================
# Formatting
# =============================================================================

def format_number(value: float) -> str:
    """Format a number for the stack.

    Integral values print without a fractional part. Values use the
    shortest representation that round-trips, in positional notation from
    1e-6 up to 1e21 and in exponent notation (1e-7, 1.5e+21) beyond that.
    """
    try:
        value = float(value)
    except OverflowError:
        return 'Infinity' if value > 0 else '-Infinity'

    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0:
        return '0'
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))

    text = repr(value)
    if 'e' not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), 'f')

    mantissa, exponent = text.split('e')
    sign = '-' if exponent.startswith('-') else '+'
    return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"


def to_radix(value: float, base: int) -> str:
    """Format a number in another base, fractional digits included."""
    if base == 10:
        return format_number(value)
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'

    negative = value < 0
    value = abs(value)
    whole = int(value)
    fraction = value - whole

    digits = []
    while whole:
        whole, rem = divmod(whole, base)
        digits.append(RADIX_DIGITS[rem])
    text = ''.join(reversed(digits)) or '0'

    if fraction:
        frac_digits = []
        while fraction and len(frac_digits) < MAX_FRACTION_DIGITS:
            fraction *= base
            digit = int(fraction)
            frac_digits.append(RADIX_DIGITS[digit])
            fraction -= digit
        text += '.' + ''.join(frac_digits)

    return '-' + text if negative else text


# =============================================================================
# Integer coercion (bitwise operators)
# =============================================================================

def to_uint32(value: float) -> int:
    """Truncate to an unsigned 32-bit integer; NaN and Infinity become 0."""
    if not math.isfinite(value):
        return 0
    return int(value) & 0xFFFFFFFF


def to_int32(value: float) -> int:
    """Truncate to a signed 32-bit integer; NaN and Infinity become 0."""
    n = to_uint32(value)
    return n - 0x100000000 if n & 0x80000000 else n


def to_uint16(value: float) -> int:
    """Truncate to an unsigned 16-bit integer (a UTF-16 code unit)."""
    return to_uint32(value) & 0xFFFF


# =============================================================================
# IEEE arithmetic
# =============================================================================

def ieee(func):
    """Wrap a math function so domain errors give NaN and overflow Infinity."""
    def wrapper(*args):
        try:
            return float(func(*args))
        except ValueError:
            return NAN
        except OverflowError:
            return INF
    wrapper.__name__ = getattr(func, '__name__', 'wrapper')
    wrapper.__doc__ = getattr(func, '__doc__', None)
    return wrapper


def divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return NAN
        return math.copysign(INF, a) * math.copysign(1.0, b)
    return a / b


def power(a: float, b: float) -> float:
    # math.pow(1, nan) and math.pow(-1, inf) are 1; here they are NaN
    if math.isnan(b) or abs(a) == 1 and math.isinf(b):
        return NAN
    if a == 0 and b < 0:
        return INF
    try:
        return math.pow(a, b)
    except ValueError:
        return NAN
    except OverflowError:
        return INF if a > 0 or float(b).is_integer() and b % 2 == 0 else -INF


def _logarithm(func):
    def log(a: float) -> float:
        if math.isnan(a) or a < 0:
            return NAN
        if a == 0:
            return -INF
        if math.isinf(a):
            return INF
        return func(a)
    return log


natural_log = _logarithm(math.log)
log10 = _logarithm(math.log10)
log2 = _logarithm(math.log2)


def floor(a: float) -> float:
    return float(math.floor(a)) if math.isfinite(a) else a


def ceil(a: float) -> float:
    return float(math.ceil(a)) if math.isfinite(a) else a


def round_half_up(a: float) -> float:
    """Round to the nearest integer, halves toward positive infinity."""
    return float(math.floor(a + 0.5)) if math.isfinite(a) else a


def sign(a: float) -> float:
    """-1, 1, or the value itself for zero and NaN."""
    if a > 0:
        return 1.0
    if a < 0:
        return -1.0
    return a


def factorial(a: float) -> float:
    """Product of the integers 1..k for every k below a + 1."""
    result = 1.0
    k = 1
    while k < a + 1:
        result *= k
        if math.isinf(result):
            break
        k += 1
    return result


def gcd(a: float, b: float) -> float:
    """Euclid's algorithm on floats with truncated remainder."""
    while b != 0:
        if not (math.isfinite(a) and math.isfinite(b)):
            return NAN
        a, b = b, math.fmod(a, b)
    return a


def count_ones(a: float) -> float:
    """Number of set bits in the 32-bit pattern of a."""
    return float(bin(to_uint32(a)).count('1'))
