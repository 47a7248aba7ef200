def test_public_imports() -> None:
    # A lightweight contract test: keep the most common imports stable.
    import fixpoint

    assert hasattr(fixpoint, "__version__")

    from fixpoint import Q16, Q6, Quat, Vec3, fixed_inv_sqrt, quat_mul, quat_rotate  # noqa: F401
