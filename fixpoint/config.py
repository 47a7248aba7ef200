# Width of the raw two's-complement representation
RAW_BITS = 32
# Width of the intermediates used by mul/div/inv_sqrt before narrowing
WIDE_BITS = 64

Q16_FRAC_BITS = 16
Q6_FRAC_BITS = 6

# Newton-Raphson steps of the integer inverse square root
INV_SQRT_ITERATIONS = 4

# Per-component tolerance of the float reference comparisons
TOLERANCE = 0.001

# Quaternion composition scenario used by the CLI harness
STEPS = 10
INCREMENT = (0.07, 0.0, 0.0)
VECTOR = (0.0, 0.832, 0.554)
