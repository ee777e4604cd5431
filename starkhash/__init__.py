"""
Copyright (c) 2020, the Decred developers
See LICENSE for details
"""


class StarkHashError(Exception):
    pass


class InvalidArgument(StarkHashError, ValueError):
    """
    The caller passed a value that cannot be used, e.g. a field element outside
    of [0, P) or a malformed numeric string.
    """

    pass


class NotInvertible(StarkHashError):
    """
    A modular inverse was requested for a value sharing a factor with the
    modulus. Cannot happen for nonzero elements of a prime field.
    """

    pass


class SamePointCollision(StarkHashError):
    """
    A Pedersen table point shares its x coordinate with the accumulator.
    """

    pass


class InternalInvariantViolation(StarkHashError):
    """
    An arithmetic self-check failed. This indicates a bug, not bad input.
    """

    pass
