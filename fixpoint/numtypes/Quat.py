from fixpoint.ast.AST import Primitive
from fixpoint.numtypes.Fixed import fixed_mul, fixed_sub
from fixpoint.numtypes.RuntimeTypes import Q16, Quat, Vec3
from fixpoint.numtypes.StaticTypes import QuatT, Vec3T
from fixpoint.numtypes.Vec3 import vec3_add, vec3_cross, vec3_dot, vec3_mul


def _hamilton(x: tuple, y: tuple) -> tuple:
    w1, x1, y1, z1 = x
    w2, x2, y2, z2 = y
    return (
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
    )


def quat_identity(fixed: type = Q16) -> Quat:
    return Quat.identity(fixed)


# Fixed-point multiplication truncates, so it is not associative: the grouping
# and order below are part of the result and must not be rearranged.
def _quat_mul() -> Primitive:
    def sign(x: QuatT, y: QuatT) -> QuatT:
        if x != y:
            raise TypeError(f"Mixed fixed-point formats: {x} and {y}")
        return x.copy()

    def impl(x: Quat, y: Quat) -> Quat:
        # w = w1*w2 - v1.v2
        w = fixed_sub(fixed_mul(x.w, y.w), vec3_dot(x.v, y.v))
        # v = v1 x v2 + v2*w1 + v1*w2
        v = vec3_add(vec3_add(vec3_cross(x.v, y.v), vec3_mul(y.v, x.w)), vec3_mul(x.v, y.w))
        return Quat(w, v)

    return Primitive(spec=_hamilton, impl=impl, sign=sign, name="quat_mul")


def _quat_rotate() -> Primitive:
    def spec(q: tuple, v: tuple) -> tuple:
        w, qv = q[0], q[1:]
        c = (
            qv[1] * v[2] - qv[2] * v[1],
            qv[2] * v[0] - qv[0] * v[2],
            qv[0] * v[1] - qv[1] * v[0],
        )
        d = (
            qv[1] * c[2] - qv[2] * c[1],
            qv[2] * c[0] - qv[0] * c[2],
            qv[0] * c[1] - qv[1] * c[0],
        )
        return tuple(v[i] + 2 * w * c[i] + 2 * d[i] for i in range(3))

    def sign(q: QuatT, v: Vec3T) -> Vec3T:
        if q.elem != v.elem:
            raise TypeError(f"Mixed fixed-point formats: {q.elem} and {v.elem}")
        return v.copy()

    # v + 2w (q_v x v) + 2 q_v x (q_v x v), without the conjugate sandwich.
    # Assumes a unit quaternion; any other norm also scales the result.
    def impl(q: Quat, v: Vec3) -> Vec3:
        two = q.fixed.Two()
        cross = vec3_cross(q.v, v)
        return vec3_add(
            vec3_add(v, vec3_mul(cross, fixed_mul(two, q.w))),
            vec3_cross(vec3_mul(q.v, two), cross),
        )

    return Primitive(spec=spec, impl=impl, sign=sign, name="quat_rotate")


def _quat_increment() -> Primitive:
    def spec(v: tuple) -> tuple:
        return (1.0 - 0.5 * sum(a * a for a in v),) + tuple(v)

    def sign(v: Vec3T) -> QuatT:
        return QuatT(v.elem.copy())

    # Small-angle rotation: w = 1 - |v|^2 / 2 keeps the quaternion near unit
    # norm for |v| << 1.
    def impl(v: Vec3) -> Quat:
        fixed = v.fixed
        return Quat(fixed_sub(fixed.One(), fixed_mul(fixed.Half(), vec3_dot(v, v))), v)

    return Primitive(spec=spec, impl=impl, sign=sign, name="quat_increment")


quat_mul = _quat_mul()
quat_rotate = _quat_rotate()
quat_increment = _quat_increment()


def quat_trajectory(increment: Vec3, vector: Vec3, steps: int) -> list:
    """Rotations of vector by identity * increment**k for k = 1..steps.

    The composed rotation is never renormalized, so drift accumulates exactly
    as it would in a simulation loop that forgets to.
    """
    inc = quat_increment(increment)
    rotation = Quat.identity(increment.fixed)
    out = []
    for _ in range(steps):
        rotation = quat_mul(rotation, inc)
        out.append(quat_rotate(rotation, vector))
    return out
