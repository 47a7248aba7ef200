import struct
import math
import numpy as np

from fixpoint.config import RAW_BITS


def float_to_bits32(f):
    # pack float32 → 4 bytes, then unpack to unsigned int
    [bits] = struct.unpack('>I', struct.pack('>f', np.float32(f)))
    # Convert to lexicographically ordered integer space
    return bits ^ ((bits >> 31) & 0x7FFFFFFF)

def ulp_distance(x, y):
    if isinstance(x, (float, np.floating)) and isinstance(y, (float, np.floating)):
        if math.isnan(x) or math.isnan(y):
            return float('nan')
        if math.isinf(x) or math.isinf(y):
            return float('inf') if x != y else 0
        return abs(float_to_bits32(x) - float_to_bits32(y))

    elif isinstance(x, int) and isinstance(y, int):
        return abs(x - y)

    elif isinstance(x, tuple) and isinstance(y, tuple):
        return max([ulp_distance(x_, y_) for x_, y_ in zip(x, y)])

    else:
        raise TypeError(f"Arguments are expected to have the same type, given {x} and {y}")

def max_abs_error(x, y):
    """Largest absolute difference between two floats or two equally shaped tuples."""
    if isinstance(x, tuple) and isinstance(y, tuple):
        if len(x) != len(y):
            raise TypeError(f"Tuples of different length, given {x} and {y}")
        return max([max_abs_error(x_, y_) for x_, y_ in zip(x, y)])
    return abs(float(x) - float(y))

def mask(x, n):
    return x & ((1 << n) - 1)

def wrap(x: int, n: int = RAW_BITS) -> int:
    """Narrows x to an n-bit two's-complement integer, wrapping on overflow."""
    x = mask(x, n)
    if x >> (n - 1):
        x -= 1 << n
    return x

def trunc_div(x: int, y: int) -> int:
    """Integer division rounding toward zero, as fixed-width hardware divides."""
    q = abs(x) // abs(y)
    return -q if (x < 0) != (y < 0) else q
