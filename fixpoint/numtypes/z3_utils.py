from z3 import BitVec, BitVecVal, Extract, If, SignExt, simplify

from fixpoint.config import RAW_BITS, WIDE_BITS
from fixpoint.numtypes.RuntimeTypes import Fixed

# Bits added by sign extension to reach the wide intermediate
_EXT = WIDE_BITS - RAW_BITS

# z3py's >>, / and < on bit-vectors are the signed variants (bvashr, bvsdiv, bvslt),
# which round and compare the way the Python implementation does.

def bv_var(name: str):
    return BitVec(name, RAW_BITS)

def bv_const(x):
    raw = x.raw if isinstance(x, Fixed) else x
    return BitVecVal(raw, RAW_BITS)

def bv_to_int(expr) -> int:
    """Folds a closed bit-vector expression to a signed Python int."""
    return simplify(expr).as_signed_long()

def bv_add(x, y):
    return x + y

def bv_sub(x, y):
    return x - y

def bv_neg(x):
    return -x

def bv_mul(x, y, frac_bits: int):
    wide = SignExt(_EXT, x) * SignExt(_EXT, y)
    return Extract(RAW_BITS - 1, 0, wide >> frac_bits)

def bv_div(x, y, frac_bits: int):
    wide = SignExt(_EXT, x) << frac_bits
    return Extract(RAW_BITS - 1, 0, wide / SignExt(_EXT, y))

def bv_abs(x):
    return If(x < 0, -x, x)

def bv_min(x, y):
    return If(x <= y, x, y)

def bv_max(x, y):
    return If(x >= y, x, y)
