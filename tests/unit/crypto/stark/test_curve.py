"""
Copyright (c) 2020, the Decred developers
See LICENSE for details
"""

import pytest

from starkhash import InternalInvariantViolation, InvalidArgument
from starkhash.crypto.stark import curve
from starkhash.crypto.stark.curve import JacobianPoint, Point
from starkhash.crypto.stark.curve import curve as curve_obj
from starkhash.crypto.stark.field import CURVE_P, mod


def _isJacobianOnStarkCurve(p):
    """
    _isJacobianOnStarkCurve returns boolean if the point (x,y,z) is on the
    STARK curve.
    In Jacobian coordinates, Y = y/z^3 and X = x/z^2, so the curve equation
    y^2 = x^3 + a*x + b becomes
    y^2 = x^3 + a*x*z^4 + b*z^6
    """
    z2 = p.z * p.z % CURVE_P
    z4 = z2 * z2 % CURVE_P
    z6 = z4 * z2 % CURVE_P
    lhs = p.y * p.y % CURVE_P
    rhs = (p.x ** 3 + curve.CURVE_A * p.x * z4 + curve.CURVE_B * z6) % CURVE_P
    return lhs == rhs


def _scaled(p, z):
    """
    The Jacobian representative of affine p with the given z.
    """
    return JacobianPoint(mod(p.x * z * z), mod(p.y * z * z * z), z)


def test_parameters():
    assert curve.CURVE_A == 1
    assert curve.CURVE_P == 2 ** 251 + 17 * 2 ** 192 + 1
    assert curve.CURVE_N.bit_length() == curve.CURVE_N_BITS == 252
    assert curve.CURVE_N == int(
        "800000000000010ffffffffffffffffb781126dcae7b2321e66a241adc64d2f", 16
    )
    assert curve_obj.P == curve.CURVE_P
    assert curve_obj.N == curve.CURVE_N
    assert curve_obj.BitSize == 252
    assert curve_obj.isAffineOnCurve(curve.CURVE_GX, curve.CURVE_GY)
    assert Point.BASE.isOnCurve()
    assert not Point.ZERO.isOnCurve()
    assert not curve_obj.isAffineOnCurve(curve.CURVE_GX, curve.CURVE_GY + 1)


def test_generator_order():
    G = Point.BASE
    assert G.multiply(curve.CURVE_N - 1) == G.negate()
    assert G.multiply(curve.CURVE_N + 1) == G
    assert G.multiply(curve.CURVE_N) == Point.ZERO


def test_fromAffine():
    assert JacobianPoint.fromAffine(Point.ZERO) is JacobianPoint.ZERO
    j = JacobianPoint.fromAffine(Point.BASE)
    assert (j.x, j.y, j.z) == (curve.CURVE_GX, curve.CURVE_GY, 1)
    assert j == JacobianPoint.BASE
    with pytest.raises(InvalidArgument):
        JacobianPoint.fromAffine((curve.CURVE_GX, curve.CURVE_GY))


def test_jacobian_equals():
    G = Point.BASE
    base = JacobianPoint.fromAffine(G)
    for z in (2, 5, CURVE_P - 1, 0xDEADBEEF):
        scaled = _scaled(G, z)
        assert _isJacobianOnStarkCurve(scaled)
        assert scaled.equals(base)
        assert base.equals(scaled)
        assert scaled == base
        assert not scaled.equals(base.negate())

    # Any z == 0 triple is infinity.
    zero = JacobianPoint.ZERO
    assert zero.equals(JacobianPoint(0, 1, 0))
    assert zero.equals(JacobianPoint(7, 11, 0))
    assert zero.isZero()
    assert not base.equals(zero)
    assert not zero.equals(base)
    assert not base.isZero()

    with pytest.raises(InvalidArgument):
        base.equals(G)
    assert (base == G) is False


def test_jacobian_immutable():
    j = JacobianPoint.BASE
    with pytest.raises(AttributeError):
        j.x = 5
    with pytest.raises(AttributeError):
        j.foo = 5
    with pytest.raises(TypeError):
        hash(j)
    p = Point.BASE
    with pytest.raises(AttributeError):
        p.y = 5
    assert hash(p) == hash(Point(curve.CURVE_GX, curve.CURVE_GY))


def test_negate():
    G = Point.BASE
    neg = G.negate()
    assert neg.x == G.x
    assert neg.y == CURVE_P - G.y
    assert neg.isOnCurve()
    assert neg.negate() == G
    assert Point.ZERO.negate() == Point.ZERO

    j = JacobianPoint.fromAffine(G).negate()
    assert j.toAffine() == neg


def test_doubleJacobian():
    G = Point.BASE
    j = JacobianPoint.fromAffine(G)
    d = j.double()
    assert _isJacobianOnStarkCurve(d)
    assert d.equals(j.add(j))
    # The result does not depend on the representative.
    assert _scaled(G, 3).double().equals(d)
    # Doubling infinity is still infinity.
    assert JacobianPoint.ZERO.double().isZero()
    assert JacobianPoint.ZERO.double().toAffine() == Point.ZERO


def test_addJacobian():
    G = Point.BASE
    j = JacobianPoint.fromAffine(G)
    j2 = j.double()
    zero = JacobianPoint.ZERO

    # ∞ + P = P and P + ∞ = P, unchanged.
    assert zero.add(j) is j
    assert j.add(zero) is j
    assert zero.add(zero).isZero()

    # Different x values, different z values.
    j3 = j.add(j2)
    assert _isJacobianOnStarkCurve(j3)
    assert j3.equals(j2.add(j))
    assert j3.toAffine() == G.multiply(3)
    assert _scaled(G, 7).add(_scaled(G.double(), 9)).equals(j3)

    # P(x, y, z) + P(x, -y, z) = infinity
    assert j.add(j.negate()).isZero()
    assert _scaled(G, 4).add(j.negate()).isZero()

    # P(x, y, z) + P(x, y, z) = 2P
    assert j.add(j).equals(j2)
    assert _scaled(G, 4).add(j).equals(j2)

    with pytest.raises(InvalidArgument):
        j.add(G)


def test_add_zero_coordinate_shortcut():
    # Operands with a raw zero x or y are taken to be infinity.
    j = JacobianPoint.BASE
    odd = JacobianPoint(0, 5, 1)
    assert j.add(odd) is j
    assert odd.add(j) is j
    odd = JacobianPoint(5, 0, 1)
    assert j.add(odd) is j
    assert odd.add(j) is j


def test_subtract():
    G = Point.BASE
    G2 = G.double()
    assert G2.subtract(G) == G
    assert G.subtract(G) == Point.ZERO
    j = JacobianPoint.fromAffine(G)
    assert j.double().subtract(j).equals(j)


def test_multiply():
    G = Point.BASE
    assert G.multiply(0) == Point.ZERO
    assert G.multiply(1) == G
    assert G.multiply(2) == G.double()
    assert G.multiply(3) == G.double().add(G)
    assert G.multiply(10) == G.multiply(4).add(G.multiply(6))
    assert Point.ZERO.multiply(1000) == Point.ZERO
    assert JacobianPoint.BASE.multiply(5).toAffine() == G.multiply(5)
    with pytest.raises(InvalidArgument):
        G.multiply(-1)
    with pytest.raises(InvalidArgument):
        G.multiply(1.5)
    with pytest.raises(InvalidArgument):
        G.multiply(True)


def test_toAffine():
    G = Point.BASE
    assert JacobianPoint.ZERO.toAffine() is Point.ZERO
    assert JacobianPoint(3, 4, 0).toAffine() is Point.ZERO
    assert JacobianPoint.BASE.toAffine() == G
    for z in (2, 3, CURVE_P - 2, 0x1234567890ABCDEF):
        assert _scaled(G, z).toAffine() == G


def test_toAffine_invariant(monkeypatch):
    # A broken inverse must be caught rather than produce a wrong point.
    monkeypatch.setattr(curve, "invert", lambda n, m: 2)
    with pytest.raises(InternalInvariantViolation):
        JacobianPoint.BASE.toAffine()
    # Infinity never calls invert.
    assert JacobianPoint.ZERO.toAffine() == Point.ZERO


def test_group_law():
    for _ in range(4):
        P = curve.randPoint()
        Q = curve.randPoint()
        R = curve.randPoint()
        assert P.isOnCurve() and Q.isOnCurve() and R.isOnCurve()

        assert P.add(Q) == Q.add(P)
        assert P.add(Q).add(R) == P.add(Q.add(R))
        assert P.double() == P.add(P)
        assert P.add(P.negate()) == Point.ZERO
        assert P.add(Point.ZERO) == P
        assert Point.ZERO.add(P) == P
        assert P.add(Q).isOnCurve()
        assert P.double().isOnCurve()


def test_round_trip():
    for _ in range(10):
        p = curve.randPoint()
        assert JacobianPoint.fromAffine(p).toAffine() == p


def test_randFieldElement():
    for _ in range(20):
        k = curve.randFieldElement()
        assert 1 <= k < curve.CURVE_N


def test_serialize():
    G = Point.BASE
    hx = G.toHex()
    assert len(hx) == 130
    assert hx.startswith("04")
    assert hx[2:66] == G.toHexX()
    assert int(hx[66:], 16) == G.y
    assert G.toHexX() == "%064x" % curve.CURVE_GX
    assert G.toRawX() == curve.CURVE_GX.to_bytes(32, "big")
    assert Point.fromHex(hx) == G
    assert Point.fromHex("0x" + hx) == G

    small = Point(1, 2)
    assert small.toHexX() == "0" * 63 + "1"
    assert small.toRawX() == bytes(31) + b"\x01"
    assert Point.ZERO.toHex() == "04" + "0" * 128


def test_fromHex_errors():
    hx = Point.BASE.toHex()
    # Wrong length.
    with pytest.raises(InvalidArgument):
        Point.fromHex(hx[:-2])
    with pytest.raises(InvalidArgument):
        Point.fromHex("")
    # Compressed encodings are not supported.
    with pytest.raises(InvalidArgument):
        Point.fromHex("02" + hx[2:])
    # Not on the curve.
    with pytest.raises(InvalidArgument):
        Point.fromHex(Point(curve.CURVE_GX, curve.CURVE_GY + 1).toHex())
    # Coordinate out of range.
    with pytest.raises(InvalidArgument):
        Point.fromHex(Point(CURVE_P, curve.CURVE_GY).toHex())
    with pytest.raises(InvalidArgument):
        Point.fromHex(Point(curve.CURVE_GX, CURVE_P + curve.CURVE_GY).toHex())
    # Not hex.
    with pytest.raises(InvalidArgument):
        Point.fromHex("04" + "zz" * 64)
