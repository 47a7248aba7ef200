import math
import typing as tp
from contextlib import contextmanager
from contextvars import ContextVar

from fixpoint.ast.AST import Primitive
from fixpoint.config import INV_SQRT_ITERATIONS
from fixpoint.errors import DivisionByZero, InvalidArgument
from fixpoint.numtypes.RuntimeTypes import Fixed
from fixpoint.numtypes.StaticTypes import BoolT, FixedT
from fixpoint.utils.utils import trunc_div, wrap

# Default Newton-Raphson step count of fixed_inv_sqrt for the current context
_inv_sqrt_iterations: ContextVar[int] = ContextVar(
    "inv_sqrt_iterations", default=INV_SQRT_ITERATIONS
)

########### Private Helpers ############

def _same_format(*types: FixedT) -> FixedT:
    first = types[0]
    for t in types[1:]:
        if t != first:
            raise TypeError(f"Mixed fixed-point formats: {first} and {t}")
    return first.copy()


def _check_iterations(iterations: int):
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 0:
        raise InvalidArgument(f"iteration count must be a non-negative integer, {iterations!r} is given")


def _comparison(op: tp.Callable[[int, int], bool], name: str) -> Primitive:
    def spec(x: float, y: float) -> bool:
        return op(x, y)

    def sign(x: FixedT, y: FixedT) -> BoolT:
        _same_format(x, y)
        return BoolT()

    def impl(x: Fixed, y: Fixed) -> bool:
        return op(x.raw, y.raw)

    return Primitive(spec=spec, impl=impl, sign=sign, name=name)


def _unary_sign(x: FixedT) -> FixedT:
    return x.copy()


def _binary_sign(x: FixedT, y: FixedT) -> FixedT:
    return _same_format(x, y)

############# Public API ###############

def get_inv_sqrt_iterations() -> int:
    return _inv_sqrt_iterations.get()


@contextmanager
def precision(iterations: int):
    """Sets the default fixed_inv_sqrt iteration count within the block.

    The setting is context-local: other threads and tasks keep their own.
    """
    _check_iterations(iterations)
    token = _inv_sqrt_iterations.set(iterations)
    try:
        yield
    finally:
        _inv_sqrt_iterations.reset(token)


def _fixed_add() -> Primitive:
    def spec(x: float, y: float) -> float:
        return x + y

    def impl(x: Fixed, y: Fixed) -> Fixed:
        return x.copy(wrap(x.raw + y.raw))

    return Primitive(spec=spec, impl=impl, sign=_binary_sign, name="fixed_add")


def _fixed_sub() -> Primitive:
    def spec(x: float, y: float) -> float:
        return x - y

    def impl(x: Fixed, y: Fixed) -> Fixed:
        return x.copy(wrap(x.raw - y.raw))

    return Primitive(spec=spec, impl=impl, sign=_binary_sign, name="fixed_sub")


# NOTE: -Min wraps back to Min, so spec does not hold for that single value
def _fixed_neg() -> Primitive:
    def spec(x: float) -> float:
        return -x

    def impl(x: Fixed) -> Fixed:
        return x.copy(wrap(-x.raw))

    return Primitive(spec=spec, impl=impl, sign=_unary_sign, name="fixed_neg")


def _fixed_mul() -> Primitive:
    def spec(x: float, y: float) -> float:
        return x * y

    def impl(x: Fixed, y: Fixed) -> Fixed:
        # int32 * int32 always fits the 64-bit intermediate; >> floors
        return x.copy(wrap((x.raw * y.raw) >> x.frac_bits))

    return Primitive(spec=spec, impl=impl, sign=_binary_sign, name="fixed_mul")


def _fixed_div() -> Primitive:
    def spec(x: float, y: float) -> float:
        return x / y

    def impl(x: Fixed, y: Fixed) -> Fixed:
        if y.raw == 0:
            raise DivisionByZero(f"{x} / {y}")
        return x.copy(wrap(trunc_div(x.raw << x.frac_bits, y.raw)))

    return Primitive(spec=spec, impl=impl, sign=_binary_sign, name="fixed_div")


# NOTE: abs(Min) wraps to Min
def _fixed_abs() -> Primitive:
    def spec(x: float) -> float:
        return abs(x)

    def impl(x: Fixed) -> Fixed:
        return x.copy(wrap(-x.raw)) if x.raw < 0 else x

    return Primitive(spec=spec, impl=impl, sign=_unary_sign, name="fixed_abs")


def _fixed_min() -> Primitive:
    def spec(x: float, y: float) -> float:
        return min(x, y)

    def impl(x: Fixed, y: Fixed) -> Fixed:
        return x if x.raw <= y.raw else y

    return Primitive(spec=spec, impl=impl, sign=_binary_sign, name="fixed_min")


def _fixed_max() -> Primitive:
    def spec(x: float, y: float) -> float:
        return max(x, y)

    def impl(x: Fixed, y: Fixed) -> Fixed:
        return x if x.raw >= y.raw else y

    return Primitive(spec=spec, impl=impl, sign=_binary_sign, name="fixed_max")


def _fixed_inv_sqrt() -> Primitive:
    def spec(x: float) -> float:
        return 1.0 / math.sqrt(x)

    def impl(x: Fixed, iterations: tp.Optional[int] = None) -> Fixed:
        if iterations is None:
            iterations = _inv_sqrt_iterations.get()
        _check_iterations(iterations)
        if x.raw <= 0:
            raise InvalidArgument(f"inverse square root of non-positive {x}")

        F = x.frac_bits
        one = 1 << F
        # Values up to 1.0 short-circuit to exactly One, far off 1/sqrt below 1
        if x.raw <= one:
            return x.One()

        # Number of halvings that bring x below 1.0
        msb, n = 0, x.raw
        while n >= one:
            n >>= 1
            msb += 1

        # y0 = 2**(-msb/2); only Q6 values >= 2**13 push the exponent below raw 1
        shift = F - msb // 2
        y = 1 << shift if shift >= 0 else 1

        three_halves = 3 << (F - 1)  # 98304 for Q16
        x_half = x.raw >> 1
        for _ in range(iterations):
            y_sq = wrap((y * y) >> F)
            t = wrap((x_half * y_sq) >> F)
            y = wrap((y * (three_halves - t)) >> F)
        return x.copy(y)

    return Primitive(spec=spec, impl=impl, sign=_unary_sign, name="fixed_inv_sqrt")


fixed_add = _fixed_add()
fixed_sub = _fixed_sub()
fixed_neg = _fixed_neg()
fixed_mul = _fixed_mul()
fixed_div = _fixed_div()
fixed_abs = _fixed_abs()
fixed_min = _fixed_min()
fixed_max = _fixed_max()
fixed_inv_sqrt = _fixed_inv_sqrt()

fixed_less = _comparison(lambda x, y: x < y, "fixed_less")
fixed_less_or_equal = _comparison(lambda x, y: x <= y, "fixed_less_or_equal")
fixed_greater = _comparison(lambda x, y: x > y, "fixed_greater")
fixed_greater_or_equal = _comparison(lambda x, y: x >= y, "fixed_greater_or_equal")
fixed_equal = _comparison(lambda x, y: x == y, "fixed_equal")
fixed_not_equal = _comparison(lambda x, y: x != y, "fixed_not_equal")
