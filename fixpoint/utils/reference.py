"""
Single-precision float model of the vector and quaternion operations.

It mirrors the fixed-point formulas operation for operation, so the two can be
run side by side and compared component-wise. A quaternion is a pair
(w, v) of a float32 scalar and a float32 3-vector.
"""
import numpy as np

_ONE = np.float32(1.0)
_HALF = np.float32(0.5)
_TWO = np.float32(2.0)


def vec3(x, y, z) -> np.ndarray:
    return np.array([x, y, z], dtype=np.float32)


def quat(w, v) -> tuple:
    return np.float32(w), np.asarray(v, dtype=np.float32)


def quat_ident() -> tuple:
    return _ONE, vec3(0, 0, 0)


def quat_increment(v) -> tuple:
    v = np.asarray(v, dtype=np.float32)
    return _ONE - _HALF * np.float32(np.dot(v, v)), v


def quat_mul(q1: tuple, q2: tuple) -> tuple:
    w1, v1 = q1
    w2, v2 = q2
    w = w1 * w2 - np.float32(np.dot(v1, v2))
    v = np.cross(v1, v2) + v2 * w1 + v1 * w2
    return np.float32(w), v.astype(np.float32)


def quat_rotate(q: tuple, v: np.ndarray) -> np.ndarray:
    w, qv = q
    cross = np.cross(qv, v)
    return (v + cross * (_TWO * w) + np.cross(qv * _TWO, cross)).astype(np.float32)


def trajectory(increment, vector, steps: int) -> list:
    """Rotations of vector by identity * increment**k for k = 1..steps."""
    inc = quat_increment(increment)
    rotation = quat_ident()
    vector = np.asarray(vector, dtype=np.float32)
    out = []
    for _ in range(steps):
        rotation = quat_mul(rotation, inc)
        out.append(quat_rotate(rotation, vector))
    return out
