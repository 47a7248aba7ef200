import unittest
import random

from fixpoint.numtypes.RuntimeTypes import Q16, Q6, MAX_RAW, MIN_RAW
from fixpoint.numtypes.Fixed import *
from fixpoint.numtypes.z3_utils import *
from fixpoint.utils.smt_utils import prove, prove_laws, scalar_laws


class TestScalarLaws(unittest.TestCase):
    def test_laws_hold(self):
        for fixed in (Q16, Q6):
            for name, proved in prove_laws(fixed.frac_bits).items():
                with self.subTest(fixed=fixed.__name__, law=name):
                    self.assertTrue(proved)

    def test_law_subset(self):
        self.assertEqual(prove_laws(16, names=["mul_one_identity"]), {"mul_one_identity": True})
        self.assertIn("neg_involution", scalar_laws(6))

    def test_false_claim_has_counterexample(self):
        # Adding one ulp does not always increase the value: Max wraps to Min
        x = bv_var("x")
        proved, reason = prove(bv_add(x, bv_const(1)) > x, name="add_increases")
        self.assertFalse(proved)
        self.assertIsNotNone(reason)


class TestEncodingsMatchImplementation(unittest.TestCase):
    """The bit-vector encodings the laws are proved on compute what fixed_* compute."""
    def _pairs(self, fixed, seed):
        rnd = random.Random(seed)
        edges = [MIN_RAW, MIN_RAW + 1, -1, 0, 1, MAX_RAW]
        for a in edges:
            for b in edges:
                yield fixed(a), fixed(b)
        for _ in range(100):
            yield fixed(rnd.randint(MIN_RAW, MAX_RAW)), fixed(rnd.randint(MIN_RAW, MAX_RAW))

    def test_binary_operations(self):
        for fixed in (Q16, Q6):
            F = fixed.frac_bits
            for x, y in self._pairs(fixed, seed=F):
                with self.subTest(x=x, y=y):
                    bx, by = bv_const(x), bv_const(y)
                    self.assertEqual(bv_to_int(bv_add(bx, by)), fixed_add(x, y).raw)
                    self.assertEqual(bv_to_int(bv_sub(bx, by)), fixed_sub(x, y).raw)
                    self.assertEqual(bv_to_int(bv_mul(bx, by, F)), fixed_mul(x, y).raw)
                    self.assertEqual(bv_to_int(bv_min(bx, by)), fixed_min(x, y).raw)
                    self.assertEqual(bv_to_int(bv_max(bx, by)), fixed_max(x, y).raw)
                    if y.raw != 0:
                        self.assertEqual(bv_to_int(bv_div(bx, by, F)), fixed_div(x, y).raw)

    def test_unary_operations(self):
        for x, _ in self._pairs(Q16, seed=1):
            bx = bv_const(x)
            self.assertEqual(bv_to_int(bv_neg(bx)), fixed_neg(x).raw)
            self.assertEqual(bv_to_int(bv_abs(bx)), fixed_abs(x).raw)


if __name__ == "__main__":
    unittest.main()
