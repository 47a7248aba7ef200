import contextlib
import io
import unittest

from fixpoint.cli import main, spec_deviations, trajectory_deviation
from fixpoint.numtypes.RuntimeTypes import Q16


def run(argv):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        code = main(argv)
    return code, out.getvalue()


class TestCli(unittest.TestCase):
    def test_default_q16_passes(self):
        code, out = run(["--seed", "1"])
        self.assertEqual(code, 0, out)
        self.assertIn("rotation scenario", out)

    def test_tolerance_breach_fails(self):
        code, _ = run(["--seed", "1", "--tolerance", "0"])
        self.assertEqual(code, 1)

    def test_prove(self):
        code, out = run(["--seed", "2", "--format", "q6", "--tolerance", "1", "--prove"])
        self.assertEqual(code, 0, out)
        self.assertIn("Q6.mul_one_identity: proved", out)

    def test_deviations(self):
        self.assertLess(trajectory_deviation(Q16, 10), 0.001)
        worst = spec_deviations(Q16, seed=4, iterations=4)
        self.assertLess(worst["fixed_mul"], 2.0 ** -16)
        self.assertLess(worst["fixed_div"], 2.0 ** -16)
        self.assertLess(worst["fixed_inv_sqrt"], 0.001)


if __name__ == "__main__":
    unittest.main()
