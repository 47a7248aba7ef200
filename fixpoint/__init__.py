"""Deterministic fixed-point scalars, 3-D vectors and quaternions.

Every operation is pure integer arithmetic on 32-bit raw values, so results
are bit-identical on every platform. Results that leave the 32-bit range wrap
silently; keeping values in range is up to the caller.
"""
import logging

from fixpoint.errors import DivisionByZero, FixedPointError, InvalidArgument
from fixpoint.numtypes.RuntimeTypes import Fixed, Q6, Q16, Quat, Vec3
from fixpoint.numtypes.Fixed import (
    fixed_abs,
    fixed_add,
    fixed_div,
    fixed_equal,
    fixed_greater,
    fixed_greater_or_equal,
    fixed_inv_sqrt,
    fixed_less,
    fixed_less_or_equal,
    fixed_max,
    fixed_min,
    fixed_mul,
    fixed_neg,
    fixed_not_equal,
    fixed_sub,
    get_inv_sqrt_iterations,
    precision,
)
from fixpoint.numtypes.Vec3 import (
    vec3_add,
    vec3_cross,
    vec3_dot,
    vec3_mul,
    vec3_neg,
    vec3_normalize,
    vec3_sub,
)
from fixpoint.numtypes.Quat import (
    quat_identity,
    quat_increment,
    quat_mul,
    quat_rotate,
    quat_trajectory,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
