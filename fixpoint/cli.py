import argparse
import logging
import time

from fixpoint.config import *
from fixpoint.numtypes.RuntimeTypes import Fixed, Vec3
from fixpoint.numtypes.Fixed import fixed_div, fixed_inv_sqrt, fixed_mul
from fixpoint.numtypes.Quat import quat_trajectory
from fixpoint.utils import reference
from fixpoint.utils.smt_utils import prove_laws
from fixpoint.utils.utils import max_abs_error

log = logging.getLogger("fixpoint.cli")

FORMATS = {"q16": Q16_FRAC_BITS, "q6": Q6_FRAC_BITS}

# Inputs of the randomized spec checks; kept small enough that products never wrap
SAMPLES = 1000
SAMPLE_RANGE = (-8.0, 8.0)
INV_SQRT_RANGE = (1.0, 20.0)


def trajectory_deviation(fixed: type, steps: int) -> float:
    """Largest per-component gap between the fixed-point and float32 rotation trajectories."""
    inc = Vec3.from_float(*INCREMENT, fixed=fixed)
    vec = Vec3.from_float(*VECTOR, fixed=fixed)
    ours = quat_trajectory(inc, vec, steps)
    ref = reference.trajectory(INCREMENT, VECTOR, steps)
    return max(
        max_abs_error(tuple(float(c) for c in r), tuple(float(c) for c in v.to_float32()))
        for v, r in zip(ours, ref)
    )


def spec_deviations(fixed: type, seed: int, iterations: int) -> dict:
    """Largest spec_error of mul, div and inv_sqrt over seeded random inputs."""
    gen = fixed.random_generator(seed=seed, low=SAMPLE_RANGE[0], high=SAMPLE_RANGE[1])
    gen_pos = fixed.random_generator(seed=seed + 1, low=INV_SQRT_RANGE[0], high=INV_SQRT_RANGE[1])
    worst = {"fixed_mul": 0.0, "fixed_div": 0.0, "fixed_inv_sqrt": 0.0}
    for _ in range(SAMPLES):
        x, y = gen(), gen()
        worst["fixed_mul"] = max(worst["fixed_mul"], fixed_mul.spec_error(x, y))
        # Small divisors push the quotient out of range, where wrapping is expected
        if abs(y.to_spec()) >= 1.0:
            worst["fixed_div"] = max(worst["fixed_div"], fixed_div.spec_error(x, y))
        worst["fixed_inv_sqrt"] = max(
            worst["fixed_inv_sqrt"],
            fixed_inv_sqrt.spec_error(gen_pos(), iterations=iterations),
        )
    return worst


def main(argv=None):
    parser = argparse.ArgumentParser(description="Fixed-point parity check against a float32 reference")
    parser.add_argument(
        "-s",
        "--seed",
        help="RANDOM SEED",
        default=int(time.time()),
        type=int,
    )
    parser.add_argument(
        "-f",
        "--format",
        help="fixed-point format",
        choices=sorted(FORMATS),
        default="q16",
    )
    parser.add_argument(
        "-n",
        "--steps",
        help="quaternion compositions in the rotation scenario",
        default=STEPS,
        type=int,
    )
    parser.add_argument(
        "-i",
        "--iterations",
        help="Newton-Raphson steps of the inverse square root",
        default=INV_SQRT_ITERATIONS,
        type=int,
    )
    parser.add_argument(
        "-t",
        "--tolerance",
        help="largest accepted per-component deviation of the rotation scenario",
        default=TOLERANCE,
        type=float,
    )
    parser.add_argument(
        "--prove",
        help="also prove the scalar laws with z3",
        action="store_true",
    )
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    print(args)

    fixed = Fixed.instantiation(FORMATS[args.format])
    ok = True

    deviation = trajectory_deviation(fixed, args.steps)
    print(f"rotation scenario: {args.steps} steps, max deviation {deviation:.8f}")
    if deviation > args.tolerance:
        log.error("rotation deviation %.8f exceeds tolerance %.8f", deviation, args.tolerance)
        ok = False

    for name, err in spec_deviations(fixed, args.seed, args.iterations).items():
        print(f"{name}: max spec error {err:.8f}")

    if args.prove:
        results = prove_laws(fixed.frac_bits)
        for name, proved in results.items():
            print(f"{fixed.__name__}.{name}: {'proved' if proved else 'FAILED'}")
        ok = ok and all(results.values())

    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
