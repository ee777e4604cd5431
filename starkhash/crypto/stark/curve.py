"""
Copyright (c) 2020, the Decred developers
See LICENSE for details

Pure Python STARK curve implementation.

References:
  [STARK] STARK curve
    https://docs.starkware.co/starkex/stark-curve.html

  [EFD] Explicit-Formulas Database, short Weierstrass curves in Jacobian
    coordinates
    http://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian.html

The curve is y² = x³ + a*x + b over the prime field P.

Group operations are performed using Jacobian coordinates, since they don't
require a costly inversion per operation.  For a given (x, y) position on the
curve, the Jacobian coordinates are (x1, y1, z1) where x = x1/z1^2 and
y = y1/z1^3.  Affine coordinates are only recovered at the end, with a single
inversion.
"""

from starkhash import InternalInvariantViolation, InvalidArgument
from starkhash.crypto.rando import FIELD_ELEMENT_SIZE, generateSeed
from starkhash.util.encode import (
    COORDINATE_LEN,
    ByteArray,
    hexToBytes,
    intFromBytes,
    numTo32bStr,
)

from .field import CURVE_P, invert, mod


CURVE_A = 1
CURVE_B = 3141592653589793238462643383279502884197169399375105820974944592307816406665
# Curve order, the count of valid points. The order is prime, so every point
# other than infinity generates the whole group.
CURVE_N = 3618502788666131213697322783095070105526743751716087489154079457884512865583
CURVE_N_BITS = 252  # N.bit_length()

# Base point (x, y) aka generator point.
CURVE_GX = 874739451078007766457464989774322083649278607533249481151382481072868806602
CURVE_GY = 152666792071518830868575557812948353041420400780739481342941381225525861407

PUBKEY_LEN = 2 * COORDINATE_LEN + 1
PUBKEY_UNCOMPRESSED = 0x04  # 0x04 x coord + y coord


def _checkScalar(k):
    if not isinstance(k, int) or isinstance(k, bool):
        raise InvalidArgument(f"expected int scalar, got {type(k).__name__}")
    if k < 0:
        raise InvalidArgument(f"scalar must be non-negative, got {k}")


class JacobianPoint:
    """
    JacobianPoint is a point in Jacobian coordinates (x, y, z) where the
    affine point is (x/z², y/z³). z == 0 is the point at infinity, with the
    canonical representative (0, 1, 0).

    JacobianPoint values are immutable.
    """

    __slots__ = ("_x", "_y", "_z")

    def __init__(self, x, y, z):
        self._x = x
        self._y = y
        self._z = z

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    @property
    def z(self):
        return self._z

    def __repr__(self):
        return f"JacobianPoint({self._x:#x}, {self._y:#x}, {self._z:#x})"

    def __eq__(self, other):
        if not isinstance(other, JacobianPoint):
            return NotImplemented
        return self.equals(other)

    # Many triples represent the same point.
    __hash__ = None

    @staticmethod
    def fromAffine(p):
        """
        fromAffine lifts an affine Point to Jacobian coordinates.
        """
        if not isinstance(p, Point):
            raise InvalidArgument("JacobianPoint.fromAffine: expected Point")
        # (0, 0) would otherwise become (0, 0, 1), which is not infinity.
        if p.equals(Point.ZERO):
            return JacobianPoint.ZERO
        return JacobianPoint(p.x, p.y, 1)

    def equals(self, other):
        """
        equals compares two Jacobian points by clearing the denominators of
        both, so no inversion is needed and infinity compares correctly.
        """
        if not isinstance(other, JacobianPoint):
            raise InvalidArgument("JacobianPoint expected")
        X1, Y1, Z1 = self._x, self._y, self._z
        X2, Y2, Z2 = other._x, other._y, other._z

        Z1Z1 = mod(Z1 * Z1)
        Z2Z2 = mod(Z2 * Z2)
        U1 = mod(X1 * Z2Z2)
        U2 = mod(X2 * Z1Z1)
        S1 = mod(mod(Y1 * Z2) * Z2Z2)
        S2 = mod(mod(Y2 * Z1) * Z1Z1)
        return U1 == U2 and S1 == S2

    def isZero(self):
        """
        True for the point at infinity.
        """
        return self.equals(JacobianPoint.ZERO)

    def negate(self):
        """
        negate flips the point to the one corresponding to (x, -y) in affine
        coordinates.
        """
        return JacobianPoint(self._x, mod(-self._y), self._z)

    def double(self):
        """
        double returns 2 * self. Valid for any point, including infinity.
        """
        # http://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian.html#doubling-dbl-2007-bl
        # Cost: 1M + 8S + 1*a + 10add + 2*2 + 1*3 + 1*8.
        X1, Y1, Z1 = self._x, self._y, self._z
        # fmt: off
        XX = mod(X1 * X1)                       # XX = X1^2
        YY = mod(Y1 * Y1)                       # YY = Y1^2
        YYYY = mod(YY * YY)                     # YYYY = YY^2
        ZZ = mod(Z1 * Z1)                       # ZZ = Z1^2
        tmp1 = mod(X1 + YY)                     # (X1+YY)
        tmp2 = mod(tmp1 * tmp1)                 # (X1+YY)^2
        S = mod(2 * (tmp2 - XX - YYYY))         # 2*((X1+YY)^2-XX-YYYY)
        ZZZZ = mod(ZZ * ZZ)                     # ZZ^2
        M = mod(3 * XX + CURVE_A * ZZZZ)        # 3*XX+a*ZZ^2
        MM = mod(M * M)                         # M^2
        T = mod(MM - 2 * S)                     # M^2-2*S
        X3 = T
        Y3 = mod(M * (S - T) - 8 * YYYY)        # M*(S-T)-8*YYYY
        Y1Z1 = mod(Y1 + Z1)                     # (Y1+Z1)
        tmp3 = mod(Y1Z1 * Y1Z1)                 # (Y1+Z1)^2
        Z3 = mod(tmp3 - YY - ZZ)                # (Y1+Z1)^2-YY-ZZ
        # fmt: on
        return JacobianPoint(X3, Y3, Z3)

    def add(self, other):
        """
        add returns self + other.

        NOTE: An operand with a raw x or y coordinate of exactly zero is taken
        to be the point at infinity. That holds for the canonical infinity
        (0, 1, 0), but a finite intermediate point that happens to carry a zero
        coordinate would be treated as infinity too. Published Pedersen digests
        are computed with this rule in place.
        """
        if self.equals(JacobianPoint.ZERO):
            return other
        if not isinstance(other, JacobianPoint):
            raise InvalidArgument("JacobianPoint expected")
        X1, Y1, Z1 = self._x, self._y, self._z
        X2, Y2, Z2 = other._x, other._y, other._z
        if X2 == 0 or Y2 == 0:
            return self
        if X1 == 0 or Y1 == 0:
            return other

        # http://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian.html#addition-add-1998-cmo-2
        # Cost: 12M + 4S + 6add + 1*2.
        # fmt: off
        Z1Z1 = mod(Z1 * Z1)                     # Z1Z1 = Z1^2
        Z2Z2 = mod(Z2 * Z2)                     # Z2Z2 = Z2^2
        U1 = mod(X1 * Z2Z2)                     # U1 = X1*Z2Z2
        U2 = mod(X2 * Z1Z1)                     # U2 = X2*Z1Z1
        S1 = mod(mod(Y1 * Z2) * Z2Z2)           # S1 = Y1*Z2*Z2Z2
        S2 = mod(mod(Y2 * Z1) * Z1Z1)           # S2 = Y2*Z1*Z1Z1
        H = mod(U2 - U1)                        # H = U2-U1
        r = mod(S2 - S1)                        # r = S2-S1
        # fmt: on

        # When the x coordinates are the same for two points on the curve, the
        # y coordinates either must be the same, in which case it is point
        # doubling, or they are opposite and the result is the point at
        # infinity per the group law.
        if H == 0:
            if r == 0:
                return self.double()
            return JacobianPoint.ZERO

        # fmt: off
        HH = mod(H * H)                         # HH = H^2
        HHH = mod(H * HH)                       # HHH = H*HH
        V = mod(U1 * HH)                        # V = U1*HH
        X3 = mod(r * r - HHH - 2 * V)           # X3 = r^2-HHH-2*V
        Y3 = mod(r * (V - X3) - S1 * HHH)       # Y3 = r*(V-X3)-S1*HHH
        Z3 = mod(Z1 * Z2 * H)                   # Z3 = Z1*Z2*H
        # fmt: on
        return JacobianPoint(X3, Y3, Z3)

    def subtract(self, other):
        return self.add(other.negate())

    def multiply(self, scalar):
        """
        multiply returns scalar * self using right-to-left double-and-add. The
        scalar is reduced modulo the curve order.
        """
        _checkScalar(scalar)
        k = scalar % CURVE_N
        result = JacobianPoint.ZERO
        addend = self
        while k:
            if k & 1:
                result = result.add(addend)
            addend = addend.double()
            k >>= 1
        return result

    def toAffine(self):
        """
        toAffine converts the point to affine (x, y) coordinates with a single
        inversion of z.
        """
        # http://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian.html#scaling-z
        is0 = self.equals(JacobianPoint.ZERO)
        # z has no inverse at infinity. 8 is an arbitrary stand-in and the
        # values computed from it are thrown away.
        invZ = 8 if is0 else invert(self._z, CURVE_P)
        # fmt: off
        iz2 = mod(invZ * invZ)                  # AA = A^2
        iz3 = mod(iz2 * invZ)                   # AAA = A^3
        ax = mod(self._x * iz2)                 # X3 = X1*AA
        ay = mod(self._y * iz3)                 # Y3 = Y1*AAA
        zz = mod(self._z * invZ)
        # fmt: on
        if is0:
            return Point.ZERO
        if zz != 1:
            raise InternalInvariantViolation("toAffine: invZ was invalid")
        return Point(ax, ay)


class Point:
    """
    Point is a curve point in affine coordinates (x, y). (0, 0) is used for
    the point at infinity. Arithmetic is delegated to JacobianPoint.

    Since this accepts arbitrary x and y coordinates, it allows creation of
    points that are not on the curve. Use Point.fromHex or isOnCurve when the
    coordinates come from outside.
    """

    __slots__ = ("_x", "_y")

    def __init__(self, x, y):
        self._x = x
        self._y = y

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    def __repr__(self):
        return f"Point({self._x:#x}, {self._y:#x})"

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self.equals(other)

    def __hash__(self):
        return hash((self._x, self._y))

    @staticmethod
    def fromHex(hx):
        """
        fromHex parses a point from the uncompressed encoding produced by
        toHex:

          <format byte = 0x04><32-byte X coordinate><32-byte Y coordinate>

        Args:
            hx (str): The hex encoding. A 0x prefix is accepted.

        Returns:
            Point: The decoded point.

        Raises:
            InvalidArgument: The encoding is malformed or the point is not on
                the curve.
        """
        b = hexToBytes(hx)
        if len(b) != PUBKEY_LEN:
            raise InvalidArgument("invalid point length %d" % len(b))
        if b[0] != PUBKEY_UNCOMPRESSED:
            raise InvalidArgument("invalid magic in point: %d" % b[0])
        x = intFromBytes(b[1 : 1 + COORDINATE_LEN])
        y = intFromBytes(b[1 + COORDINATE_LEN :])
        if x >= CURVE_P:
            raise InvalidArgument("point X parameter is >= to P")
        if y >= CURVE_P:
            raise InvalidArgument("point Y parameter is >= to P")
        if not curve.isAffineOnCurve(x, y):
            raise InvalidArgument("point [%d, %d] isn't on the STARK curve" % (x, y))
        return Point(x, y)

    def toHex(self):
        """
        toHex serializes the point in the uncompressed format, without a 0x
        prefix.
        """
        return f"{PUBKEY_UNCOMPRESSED:02x}{numTo32bStr(self._x)}{numTo32bStr(self._y)}"

    def toHexX(self):
        """
        toHexX serializes the x coordinate alone, as 64 hex characters.
        """
        return numTo32bStr(self._x)

    def toRawX(self):
        """
        toRawX returns the x coordinate as 32 big-endian bytes.
        """
        return ByteArray(self._x, length=COORDINATE_LEN).bytes()

    def equals(self, other):
        return self._x == other.x and self._y == other.y

    def isOnCurve(self):
        """
        True if the point satisfies the curve equation. The point at infinity
        does not.
        """
        return curve.isAffineOnCurve(self._x, self._y)

    def negate(self):
        """
        negate returns the same point with inverted y.
        """
        return Point(self._x, mod(-self._y))

    def double(self):
        return JacobianPoint.fromAffine(self).double().toAffine()

    def add(self, other):
        return (
            JacobianPoint.fromAffine(self).add(JacobianPoint.fromAffine(other)).toAffine()
        )

    def subtract(self, other):
        return self.add(other.negate())

    def multiply(self, scalar):
        return JacobianPoint.fromAffine(self).multiply(scalar).toAffine()


# Base point aka generator.
Point.BASE = Point(CURVE_GX, CURVE_GY)
# Identity point aka point at infinity. point = point + zero_point
Point.ZERO = Point(0, 0)

JacobianPoint.BASE = JacobianPoint(CURVE_GX, CURVE_GY, 1)
JacobianPoint.ZERO = JacobianPoint(0, 1, 0)


class Curve:
    """
    Curve holds the STARK curve domain parameters.
    """

    def __init__(self):
        self.P = CURVE_P
        self.N = CURVE_N
        self.A = CURVE_A
        self.B = CURVE_B
        self.Gx = CURVE_GX
        self.Gy = CURVE_GY
        self.BitSize = CURVE_N_BITS
        self.H = 1

    def isAffineOnCurve(self, x, y):
        """
        isAffineOnCurve returns boolean if the point (x,y) is on the STARK
        curve.
        """
        # y² = x³ + a*x + b
        y2 = y * y % self.P
        x3 = (x * x * x + self.A * x + self.B) % self.P
        return y2 == x3


def randFieldElement():
    """
    randFieldElement returns a random scalar in [1, N), reducing 8 more bytes
    than needed so the bias is negligible.
    """
    b = ByteArray(generateSeed(FIELD_ELEMENT_SIZE + 8))
    k = b.int() % (curve.N - 1)
    return k + 1


def randPoint():
    """
    randPoint returns a random point of the curve other than infinity.
    """
    return Point.BASE.multiply(randFieldElement())


# curve is a global instance of Curve.
curve = Curve()
