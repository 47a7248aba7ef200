class FixedPointError(Exception):
    """Base class of the errors raised by fixpoint operations."""


class DivisionByZero(FixedPointError, ZeroDivisionError):
    """Raised when a raw divisor is zero."""


class InvalidArgument(FixedPointError, ValueError):
    """Raised when an operation's precondition does not hold."""
