"""Numbers in the calc language are 32-bit floats. Python only has doubles, so every literal and every arithmetic
result is squeezed through a single-precision float before it is stored. Also provides the float -> int64 cast used by
modulo and the text representation used when printing results.
"""

import math
import struct


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def f32(num):
    """Rounds num to the nearest 32-bit float. Values outside of the 32-bit range become signed infinity."""
    try:
        return struct.unpack("f", struct.pack("f", num))[0]
    except OverflowError:
        return math.copysign(math.inf, num)


def to_int64(num):
    """Truncating, saturating float -> int64 cast: nan is 0 and out-of-range values clamp to the int64 bounds."""
    if math.isnan(num):
        return 0
    if num >= INT64_MAX:
        return INT64_MAX
    if num <= INT64_MIN:
        return INT64_MIN
    return int(num)


def truncated_mod(left, right):
    """Integer remainder whose sign follows the dividend (unlike Python's %, which follows the divisor)."""
    remainder = abs(left) % abs(right)
    return -remainder if left < 0 else remainder


def number(num):
    """Returns the shortest str of num that reads back as the same 32-bit float. Integral values have no fraction."""
    if math.isnan(num):
        return "nan"
    if math.isinf(num):
        return "inf" if num > 0 else "-inf"
    if num == int(num) and abs(num) < 1e16:
        return str(int(num))

    for precision in range(1, 10):
        text = f"{num:.{precision}g}"
        if f32(float(text)) == num:
            return text
    return repr(num)


def format_result(result):
    """Formats an evaluated line: '= <number>' for numbers and '()' when the line produced no value."""
    if result is None:
        return "()"
    return f"= {number(result)}"
