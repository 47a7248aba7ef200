"""
Lightweight initializer to avoid import-time cycles.
Import submodules directly (e.g., `from fixpoint.numtypes import Fixed`).
"""
