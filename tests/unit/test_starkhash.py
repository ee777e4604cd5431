"""
Copyright (c) 2020, the Decred developers
See LICENSE for details
"""

import pytest

from starkhash import (
    InternalInvariantViolation,
    InvalidArgument,
    NotInvertible,
    SamePointCollision,
    StarkHashError,
)


def test_error_hierarchy():
    for err in (
        InvalidArgument,
        NotInvertible,
        SamePointCollision,
        InternalInvariantViolation,
    ):
        assert issubclass(err, StarkHashError)
        with pytest.raises(StarkHashError):
            raise err("boom")

    # Bad input can also be caught as a plain ValueError.
    assert issubclass(InvalidArgument, ValueError)
    # The fatal kinds are not input errors.
    assert not issubclass(NotInvertible, ValueError)
    assert not issubclass(SamePointCollision, ValueError)
    assert not issubclass(InternalInvariantViolation, ValueError)
