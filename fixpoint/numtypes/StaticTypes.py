from fixpoint.config import RAW_BITS


class StaticType:
    def copy(self) -> "StaticType":
        """Return a fresh StaticType instance with the same shape."""
        return self._clone_impl()

    def _clone_impl(self) -> "StaticType":
        raise NotImplementedError

    def __repr__(self):
        raise NotImplementedError

    def __eq__(self, other):
        raise NotImplementedError

    def __hash__(self):
        return hash(repr(self))


class FixedT(StaticType):
    """Signed fixed-point scalar stored in RAW_BITS bits, frac_bits of them below the point."""
    def __init__(self, frac_bits: int, raw_bits: int = RAW_BITS):
        assert 0 < frac_bits < raw_bits
        self.frac_bits, self.raw_bits = frac_bits, raw_bits

    @property
    def int_bits(self):
        return self.raw_bits - self.frac_bits

    def __repr__(self):
        return f"Fixed<{self.int_bits},{self.frac_bits}>"

    def __eq__(self, other):
        return (
            isinstance(other, FixedT)
            and self.frac_bits == other.frac_bits
            and self.raw_bits == other.raw_bits
        )

    def __hash__(self):
        return hash(repr(self))

    def _clone_impl(self) -> "FixedT":
        return FixedT(self.frac_bits, self.raw_bits)


class Vec3T(StaticType):
    def __init__(self, elem: FixedT):
        assert isinstance(elem, FixedT)
        self.elem = elem

    def __repr__(self):
        return f"Vec3<{self.elem}>"

    def __eq__(self, other):
        return isinstance(other, Vec3T) and self.elem == other.elem

    def __hash__(self):
        return hash(repr(self))

    def _clone_impl(self) -> "Vec3T":
        return Vec3T(self.elem.copy())


class QuatT(StaticType):
    def __init__(self, elem: FixedT):
        assert isinstance(elem, FixedT)
        self.elem = elem

    def __repr__(self):
        return f"Quat<{self.elem}>"

    def __eq__(self, other):
        return isinstance(other, QuatT) and self.elem == other.elem

    def __hash__(self):
        return hash(repr(self))

    def _clone_impl(self) -> "QuatT":
        return QuatT(self.elem.copy())


class BoolT(StaticType):
    def __repr__(self):
        return "Bool<1>"

    def __eq__(self, other):
        return isinstance(other, BoolT)

    def __hash__(self):
        return hash(repr(self))

    def _clone_impl(self) -> "BoolT":
        return BoolT()
