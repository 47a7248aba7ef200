import math
import unittest

import tqdm

from fixpoint import config
from fixpoint.numtypes.RuntimeTypes import Q16, Q6, Quat, Vec3
from fixpoint.numtypes.Quat import *
from fixpoint.utils import reference


def random_quat(gen):
    return Quat(gen(), Vec3(gen(), gen(), gen()))


class TestQuat(unittest.TestCase):
    def test_identity(self):
        ident = quat_identity()
        self.assertEqual(ident.w, Q16.One())
        self.assertEqual(ident.v, Vec3.zero())
        self.assertEqual(quat_identity(Q6), Quat(Q6.One(), Vec3.zero(Q6)))

    def test_accessors(self):
        q = Quat.from_float(0.5, 0.1, -0.2, 0.3)
        self.assertEqual(q.w, Q16.from_float(0.5))
        self.assertEqual(q.x(), Q16.from_float(0.1))
        self.assertEqual(q.y(), Q16.from_float(-0.2))
        self.assertEqual(q.z(), Q16.from_float(0.3))

    def test_mixed_formats_rejected(self):
        with self.assertRaises(TypeError):
            Quat(Q16.One(), Vec3.zero(Q6))
        with self.assertRaises(TypeError):
            quat_mul(quat_identity(Q16), quat_identity(Q6))
        with self.assertRaises(TypeError):
            quat_rotate(quat_identity(Q16), Vec3.zero(Q6))

    def test_identity_laws(self):
        for fixed in (Q16, Q6):
            gen = fixed.random_generator(seed=21, low=-1.0, high=1.0)
            ident = quat_identity(fixed)
            for _ in range(300):
                q = random_quat(gen)
                with self.subTest(q=q):
                    self.assertEqual(quat_mul(ident, q), q)
                    self.assertEqual(quat_mul(q, ident), q)

    def test_identity_rotation_is_noop(self):
        v = Vec3.from_float(0, 0.832, 0.554)
        self.assertEqual(quat_rotate(quat_identity(), v), v)

    def test_hamilton_product(self):
        i = Quat.from_float(0, 1, 0, 0)
        j = Quat.from_float(0, 0, 1, 0)
        k = Quat.from_float(0, 0, 0, 1)
        self.assertEqual(quat_mul(i, j), k)
        self.assertEqual(quat_mul(j, i), Quat.from_float(0, 0, 0, -1))
        self.assertEqual(quat_mul(i, i), Quat.from_float(-1, 0, 0, 0))

    def test_mul_spec_error(self):
        gen = Q16.random_generator(seed=22, low=-1.0, high=1.0)
        for _ in range(300):
            self.assertLess(quat_mul.spec_error(random_quat(gen), random_quat(gen)), 6 * 2.0 ** -16)

    def test_rotate_quarter_turn(self):
        s = math.sqrt(0.5)
        q = Quat.from_float(s, 0, 0, s)
        v = quat_rotate(q, Vec3.from_float(1, 0, 0))
        for got, want in zip(v.to_spec(), (0.0, 1.0, 0.0)):
            self.assertAlmostEqual(got, want, delta=0.001)

    def test_rotate_non_unit_scales(self):
        # |q|^2 = 2: the result is rotated and stretched, not a pure rotation
        q = Quat.from_float(1, 0, 0, 1)
        self.assertEqual(quat_rotate(q, Vec3.from_float(1, 0, 0)), Vec3.from_float(-1, 2, 0))

    def test_rotate_spec_error(self):
        gen = Q16.random_generator(seed=23, low=-0.5, high=0.5)
        for _ in range(300):
            q, v = random_quat(gen), Vec3(gen(), gen(), gen())
            self.assertLess(quat_rotate.spec_error(q, v), 0.001)

    def test_increment(self):
        inc = quat_increment(Vec3.from_float(0.07, 0, 0))
        self.assertEqual(inc.w.raw, 65376)
        self.assertEqual(inc.v, Vec3.from_float(0.07, 0, 0))
        self.assertLess(quat_increment.spec_error(Vec3.from_float(0.07, 0, 0)), 0.001)


class TestRotationTrajectory(unittest.TestCase):
    def test_tracks_float_reference(self):
        """Composing a small rotation 10 times stays within 0.001 of float32 math."""
        inc = Vec3.from_float(0.07, 0, 0)
        vec = Vec3.from_float(0, 0.832, 0.554)
        ours = quat_trajectory(inc, vec, 10)
        ref = reference.trajectory((0.07, 0, 0), (0, 0.832, 0.554), 10)
        self.assertEqual(len(ours), 10)
        for step, (v, r) in enumerate(tqdm.tqdm(list(zip(ours, ref)), desc="Rotation trajectory")):
            for axis, got, want in zip("xyz", v.to_spec(), r):
                with self.subTest(step=step, axis=axis):
                    self.assertLess(abs(got - float(want)), config.TOLERANCE,
                                    f"difference too big: fixed={got:.8f} float={float(want):.8f}")

    def test_deterministic(self):
        inc = Vec3.from_float(*config.INCREMENT)
        vec = Vec3.from_float(*config.VECTOR)
        self.assertEqual(quat_trajectory(inc, vec, 10), quat_trajectory(inc, vec, 10))

    def test_reference_identity_rotation(self):
        v = reference.vec3(0, 0.832, 0.554)
        self.assertTrue((reference.quat_rotate(reference.quat_ident(), v) == v).all())


if __name__ == "__main__":
    unittest.main()
