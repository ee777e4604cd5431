"""
Copyright (c) 2020, the Decred developers
See LICENSE for details
"""

import random

import pytest

from starkhash import InvalidArgument, NotInvertible
from starkhash.crypto.stark import field


def test_prime():
    assert field.CURVE_P == 2 ** 251 + 17 * 2 ** 192 + 1
    assert field.CURVE_P == int(
        "800000000000011000000000000000000000000000000000000000000000001", 16
    )
    assert field.CURVE_P.bit_length() == 252


def test_fromHex():
    assert field.fromHex("ff") == 255
    assert field.fromHex("0xff") == 255
    assert field.fromHex("0XFF") == 255
    assert field.fromHex("0") == 0
    with pytest.raises(InvalidArgument):
        field.fromHex("0xzz")
    with pytest.raises(InvalidArgument):
        field.fromHex("")


def test_mod():
    P = field.CURVE_P
    assert field.mod(0) == 0
    assert field.mod(5) == 5
    assert field.mod(P) == 0
    assert field.mod(P + 3) == 3
    assert field.mod(-1) == P - 1
    assert field.mod(-P - 1) == P - 1
    assert field.mod(10, 7) == 3
    assert field.mod(-10, 7) == 4
    assert field.mod(P * P - 1) == P - 1


def test_invert():
    assert field.invert(3, 7) == 5
    assert field.invert(-4, 7) == 5
    assert field.invert(1, field.CURVE_P) == 1
    assert field.invert(field.CURVE_P - 1, field.CURVE_P) == field.CURVE_P - 1

    random.seed(0)
    for _ in range(50):
        a = random.randint(1, field.CURVE_P - 1)
        inv = field.invert(a, field.CURVE_P)
        assert 0 <= inv < field.CURVE_P
        assert a * inv % field.CURVE_P == 1
        assert inv == pow(a, field.CURVE_P - 2, field.CURVE_P)


def test_invert_errors():
    with pytest.raises(InvalidArgument):
        field.invert(0, field.CURVE_P)
    with pytest.raises(InvalidArgument):
        field.invert(5, 0)
    with pytest.raises(InvalidArgument):
        field.invert(5, -7)
    # Shares a factor with the modulus.
    with pytest.raises(NotInvertible):
        field.invert(2, 4)
    with pytest.raises(NotInvertible):
        field.invert(6, 9)
    # A nonzero multiple of the modulus reduces to zero.
    with pytest.raises(NotInvertible):
        field.invert(field.CURVE_P, field.CURVE_P)
