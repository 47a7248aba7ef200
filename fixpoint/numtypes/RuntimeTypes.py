import math
import random
import time

import numpy as np

from fixpoint.config import *
from fixpoint.errors import DivisionByZero, InvalidArgument
from fixpoint.utils.utils import trunc_div, wrap
from fixpoint.numtypes.StaticTypes import *

MIN_RAW = -(1 << (RAW_BITS - 1))
MAX_RAW = (1 << (RAW_BITS - 1)) - 1
# Largest fractional width for which every constant, Two included, fits in RAW_BITS
MAX_FRAC_BITS = RAW_BITS - 3


def _check_frac_bits(frac_bits):
    if isinstance(frac_bits, bool) or not isinstance(frac_bits, int) or not 1 <= frac_bits <= MAX_FRAC_BITS:
        raise InvalidArgument(f"fractional bit count must be an integer in [1, {MAX_FRAC_BITS}], {frac_bits!r} is given")


class RuntimeType:
    __slots__ = ()

    def to_spec(self):
        raise NotImplementedError

    def __str__(self):
        raise NotImplementedError

    def static_type(self):
        raise NotImplementedError

    def copy(self):
        raise NotImplementedError

    def __eq__(self, other):
        raise NotImplementedError

    def __hash__(self):
        raise NotImplementedError

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")


class Fixed(RuntimeType):
    """Signed fixed-point scalar: value = raw / 2**frac_bits, raw a RAW_BITS two's-complement integer.

    Fixed is generic over the fractional bit count; Q16 and Q6 below are its
    instantiations and further ones come from Fixed.instantiation(frac_bits).

    Arithmetic wraps silently once a result leaves [MIN_RAW, MAX_RAW], the same
    way native 32-bit integers do. Keeping |value| < 2**(31 - frac_bits) is the
    caller's job.
    """
    __slots__ = ("_raw",)
    frac_bits = None
    _instantiations = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.frac_bits is not None:
            _check_frac_bits(cls.frac_bits)
            Fixed._instantiations.setdefault(cls.frac_bits, cls)

    def __init__(self, raw: int):
        if self.frac_bits is None:
            raise TypeError("Fixed is generic, use an instantiation such as Q16 or Q6")
        if isinstance(raw, bool) or not isinstance(raw, (int, np.integer)):
            raise TypeError(f"raw value must be an integer, {raw!r} is given")
        raw = int(raw)
        if not MIN_RAW <= raw <= MAX_RAW:
            raise InvalidArgument(f"raw value {raw} does not fit in {RAW_BITS} bits")
        object.__setattr__(self, "_raw", raw)

    @property
    def raw(self) -> int:
        return self._raw

    @classmethod
    def instantiation(cls, frac_bits: int) -> type:
        """Returns the Fixed subclass with frac_bits fractional bits, creating it on first use."""
        _check_frac_bits(frac_bits)
        if frac_bits not in cls._instantiations:
            type(f"Q{frac_bits}", (Fixed,), {"__slots__": (), "frac_bits": frac_bits})
        return cls._instantiations[frac_bits]

    def __str__(self):
        return f"{type(self).__name__}({self.to_spec()})"

    def __repr__(self):
        return f"{type(self).__name__}({self.raw})"

    def to_spec(self) -> float:
        # Exact: a 32-bit integer over a power of two always fits a double
        return self.raw / (1 << self.frac_bits)

    def to_float(self) -> float:
        return self.to_spec()

    def to_float32(self) -> np.float32:
        """Single-precision conversion, float32(raw) / 2**frac_bits; rounds once |raw| > 2**24."""
        return np.float32(self.raw) / np.float32(1 << self.frac_bits)

    def to_scaled_int(self, scale: int) -> int:
        """Returns raw / (2**frac_bits / scale), both divisions truncating toward zero.

        Exact only when scale evenly divides 2**frac_bits.
        """
        if scale == 0:
            raise DivisionByZero("scale must be non-zero")
        step = trunc_div(1 << self.frac_bits, scale)
        if step == 0:
            raise DivisionByZero(f"scale {scale} exceeds 2**{self.frac_bits}")
        return wrap(trunc_div(self.raw, step))

    def static_type(self):
        return FixedT(self.frac_bits)

    def copy(self, raw=None):
        if raw is None:
            raw = self.raw
        return type(self)(raw)

    # Custom methods
    @classmethod
    def from_int(cls, x: int):
        return cls(wrap(x << cls.frac_bits))

    @classmethod
    def from_float(cls, x: float):
        """Truncates x * 2**frac_bits toward zero; inverse of to_float up to that truncation."""
        if not math.isfinite(x):
            raise InvalidArgument(f"cannot convert {x} to {cls.__name__}")
        return cls(wrap(int(x * (1 << cls.frac_bits))))

    @classmethod
    def Zero(cls):
        return cls(0)

    @classmethod
    def Half(cls):
        return cls(1 << (cls.frac_bits - 1))

    @classmethod
    def One(cls):
        return cls(1 << cls.frac_bits)

    @classmethod
    def Two(cls):
        return cls(2 << cls.frac_bits)

    @classmethod
    def Max(cls):
        return cls(MAX_RAW)

    @classmethod
    def Min(cls):
        return cls(MIN_RAW)

    @classmethod
    def random_generator(cls, seed: int = int(time.time()), low: float = -1.0, high: float = 1.0):
        """Deterministic generator of values drawn uniformly from [low, high)."""
        lo, hi = cls.from_float(low).raw, cls.from_float(high).raw
        assert lo < hi, f"empty range [{low}, {high}) for {cls.__name__}"
        rnd = random.Random(seed)

        def gen():
            return cls(rnd.randrange(lo, hi))

        return gen

    def __eq__(self, other):
        return (
            isinstance(other, Fixed)
            and other.frac_bits == self.frac_bits
            and other.raw == self.raw
        )

    def __hash__(self):
        return hash((self.frac_bits, self.raw))


class Q16(Fixed):
    """Q15.16: the primary format, sized for unit vectors with headroom against overflow."""
    __slots__ = ()
    frac_bits = Q16_FRAC_BITS


class Q6(Fixed):
    """Q25.6: trades precision for range."""
    __slots__ = ()
    frac_bits = Q6_FRAC_BITS


def _check_elements(*args):
    for x in args:
        if not isinstance(x, Fixed):
            raise TypeError(f"expected Fixed elements, {x!r} is given")
    if len({type(x) for x in args}) != 1:
        raise TypeError(f"elements mix fixed-point formats: {', '.join(type(x).__name__ for x in args)}")


class Vec3(RuntimeType):
    __slots__ = ("_x", "_y", "_z")

    def __init__(self, x: Fixed, y: Fixed, z: Fixed):
        _check_elements(x, y, z)
        object.__setattr__(self, "_x", x)
        object.__setattr__(self, "_y", y)
        object.__setattr__(self, "_z", z)

    @property
    def x(self) -> Fixed:
        return self._x

    @property
    def y(self) -> Fixed:
        return self._y

    @property
    def z(self) -> Fixed:
        return self._z

    @property
    def fixed(self) -> type:
        """The Fixed instantiation of the components."""
        return type(self._x)

    def __iter__(self):
        return iter((self._x, self._y, self._z))

    def __str__(self):
        return f"Vec3[{', '.join([str(c) for c in self])}]"

    def __repr__(self):
        return f"Vec3({self._x!r}, {self._y!r}, {self._z!r})"

    def to_spec(self) -> tuple:
        return tuple(c.to_spec() for c in self)

    def to_float32(self) -> np.ndarray:
        return np.array([c.to_float32() for c in self], dtype=np.float32)

    def static_type(self):
        return Vec3T(self._x.static_type())

    def copy(self):
        return Vec3(self._x, self._y, self._z)

    @classmethod
    def from_float(cls, x: float, y: float, z: float, fixed: type = Q16):
        return cls(fixed.from_float(x), fixed.from_float(y), fixed.from_float(z))

    @classmethod
    def zero(cls, fixed: type = Q16):
        return cls(fixed.Zero(), fixed.Zero(), fixed.Zero())

    def __eq__(self, other):
        return (
            isinstance(other, Vec3)
            and all([a == b for a, b in zip(self, other)])
        )

    def __hash__(self):
        return hash((self._x, self._y, self._z))


class Quat(RuntimeType):
    """Quaternion w + v; a rotation only when it has unit norm, which is not enforced."""
    __slots__ = ("_w", "_v")

    def __init__(self, w: Fixed, v: Vec3):
        if not isinstance(v, Vec3):
            raise TypeError(f"vector part must be a Vec3, {v!r} is given")
        _check_elements(w, v.x)
        object.__setattr__(self, "_w", w)
        object.__setattr__(self, "_v", v)

    @property
    def w(self) -> Fixed:
        return self._w

    @property
    def v(self) -> Vec3:
        return self._v

    @property
    def fixed(self) -> type:
        return type(self._w)

    def x(self) -> Fixed:
        return self._v.x

    def y(self) -> Fixed:
        return self._v.y

    def z(self) -> Fixed:
        return self._v.z

    def __str__(self):
        return f"Quat[{self._w}, {self._v}]"

    def __repr__(self):
        return f"Quat({self._w!r}, {self._v!r})"

    def to_spec(self) -> tuple:
        return (self._w.to_spec(),) + self._v.to_spec()

    def static_type(self):
        return QuatT(self._w.static_type())

    def copy(self):
        return Quat(self._w, self._v)

    @classmethod
    def identity(cls, fixed: type = Q16):
        return cls(fixed.One(), Vec3.zero(fixed))

    @classmethod
    def from_float(cls, w: float, x: float, y: float, z: float, fixed: type = Q16):
        return cls(fixed.from_float(w), Vec3.from_float(x, y, z, fixed))

    def __eq__(self, other):
        return (
            isinstance(other, Quat)
            and self._w == other.w
            and self._v == other.v
        )

    def __hash__(self):
        return hash((self._w, self._v))
