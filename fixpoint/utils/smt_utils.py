import logging
import typing as tp

from z3 import BitVecVal, Not, Or, Solver, unknown, unsat

from fixpoint.config import RAW_BITS
from fixpoint.numtypes.RuntimeTypes import MIN_RAW
from fixpoint.numtypes.z3_utils import *

log = logging.getLogger(__name__)


def prove(claim, name: str = "claim", timeout_ms: tp.Optional[int] = None) -> tp.Tuple[bool, tp.Optional[str]]:
    """Proves claim for every assignment of its free bit-vectors.

    Returns (True, None) when proved, otherwise (False, reason) where reason is
    a counterexample or the solver's reason for giving up.
    """
    s = Solver()
    if timeout_ms is not None:
        s.set("timeout", timeout_ms)
    s.add(Not(claim))

    log.debug(s.sexpr())
    res = s.check()

    if res == unsat:
        log.info("%s: proved", name)
        return True, None
    elif res == unknown:
        reason = s.reason_unknown()
        log.warning("%s: unknown (%s)", name, reason)
        return False, reason
    else:
        model = s.model()
        log.warning("%s: failed to prove, counterexample found:\n%s", name, model)
        return False, str(model)


def scalar_laws(frac_bits: int) -> tp.Dict[str, tp.Any]:
    """Bit-level laws of the scalar operations over all pairs of raw values."""
    x = bv_var("x")
    y = bv_var("y")
    zero = BitVecVal(0, RAW_BITS)
    one = BitVecVal(1 << frac_bits, RAW_BITS)
    two = BitVecVal(2 << frac_bits, RAW_BITS)
    min_raw = BitVecVal(MIN_RAW, RAW_BITS)
    return {
        "add_commutative": bv_add(x, y) == bv_add(y, x),
        "sub_is_add_neg": bv_sub(x, y) == bv_add(x, bv_neg(y)),
        "neg_involution": bv_neg(bv_neg(x)) == x,
        "mul_two_is_add": bv_mul(x, two, frac_bits) == bv_add(x, x),
        "mul_neg_one_is_neg": bv_mul(x, bv_neg(one), frac_bits) == bv_neg(x),
        "mul_one_identity": bv_mul(x, one, frac_bits) == x,
        "mul_zero": bv_mul(x, zero, frac_bits) == zero,
        "abs_non_negative": Or(bv_abs(x) >= 0, x == min_raw),
        "min_not_above_max": bv_min(x, y) <= bv_max(x, y),
    }


def prove_laws(frac_bits: int,
               names: tp.Optional[tp.Iterable[str]] = None,
               timeout_ms: tp.Optional[int] = None) -> tp.Dict[str, bool]:
    laws = scalar_laws(frac_bits)
    if names is not None:
        laws = {name: laws[name] for name in names}
    return {
        name: prove(claim, name=f"Q{frac_bits}.{name}", timeout_ms=timeout_ms)[0]
        for name, claim in laws.items()
    }
