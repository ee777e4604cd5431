"""
Copyright (c) 2020, the Decred developers
See LICENSE for details

Pedersen hash over the STARK curve.

References:
  [PEDERSEN] StarkEx Pedersen hash function
    https://docs.starkware.co/starkex/pedersen-hash-function.html

The hash of two field elements a and b is the x coordinate of

  shift_point + a_low * P1 + a_high * P2 + b_low * P3 + b_high * P4

where a_low is the 248 low bits of a and a_high the 4 high bits. Each term is
evaluated bit by bit against a table of precomputed doublings, so the
accumulator itself is never doubled.
"""

import time

from starkhash import InvalidArgument, SamePointCollision
from starkhash.util import helpers
from starkhash.util.encode import bytesToHexEth, parseFieldElement

from .curve import JacobianPoint, Point
from .field import CURVE_P


log = helpers.getLogger("PEDERSEN")

# Number of bits consumed from each field element.
N_ELEMENT_BITS_HASH = 252
# The low part of an element goes against the first point of a pair, the
# remaining high bits against the second.
N_LOW_BITS = 248
N_HIGH_BITS = N_ELEMENT_BITS_HASH - N_LOW_BITS

PEDERSEN_POINTS = (
    Point(
        2089986280348253421170679821480865132823066470938446095505822317253594081284,
        1713931329540660377023406109199410414810705867260802078187082345529207694986,
    ),
    Point(
        996781205833008774514500082376783249102396023663454813447423147977397232763,
        1668503676786377725805489344771023921079126552019160156920634619255970485781,
    ),
    Point(
        2251563274489750535117886426533222435294046428347329203627021249169616184184,
        1798716007562728905295480679789526322175868328062420237419143593021674992973,
    ),
    Point(
        2138414695194151160943305727036575959195309218611738193261179310511854807447,
        113410276730064486255102093846540133784865286929052426931474106396135072156,
    ),
    Point(
        2379962749567351885752724891227938183011949129833673362440656643086021394946,
        776496453633298175483985398648758586525933812536653089401905292063708816422,
    ),
)


def pedersenPrecompute(p1, p2):
    """
    Build the doubling table for one hash input.

    Args:
        p1 (JacobianPoint): The base point for the low bits.
        p2 (JacobianPoint): The base point for the high bits.

    Returns:
        tuple(JacobianPoint): 252 points. Entry i is 2^i * p1 for i < 248 and
            2^(i-248) * p2 for the last 4.
    """
    out = []
    p = p1
    for _ in range(N_LOW_BITS):
        out.append(p)
        p = p.double()
    p = p2
    for _ in range(N_HIGH_BITS):
        out.append(p)
        p = p.double()
    return tuple(out)


class PedersenConstants:
    """
    The fixed points of the hash and the two doubling tables derived from
    them. An instance is built once, at import, and never modified.
    """

    __slots__ = ("points", "shiftPoint", "table1", "table2")

    def __init__(self, points):
        if len(points) != 5:
            raise InvalidArgument(f"expected 5 Pedersen points, got {len(points)}")
        stamp = time.perf_counter()
        jacobian = tuple(JacobianPoint.fromAffine(p) for p in points)
        self.points = tuple(points)
        self.shiftPoint = jacobian[0]
        self.table1 = pedersenPrecompute(jacobian[1], jacobian[2])
        self.table2 = pedersenPrecompute(jacobian[3], jacobian[4])
        log.debug(
            "built Pedersen tables of %d points in %.3f ms",
            len(self.table1) + len(self.table2),
            (time.perf_counter() - stamp) * 1000,
        )


CONSTANTS = PedersenConstants(PEDERSEN_POINTS)


def pedersenArg(value):
    """
    Check that value is a valid hash input, 0 <= value < P.

    Returns:
        int: The value.

    Raises:
        InvalidArgument: The value is out of range.
    """
    if not 0 <= value < CURVE_P:
        raise InvalidArgument(f"value should be 0<=ARG<CURVE.P: {value}")
    return value


def pedersenSingle(point, value, constants):
    """
    Fold one field element into the accumulator point.

    Args:
        point (JacobianPoint): The accumulator.
        value (int): The field element.
        constants (sequence(JacobianPoint)): A 252-point doubling table.

    Returns:
        JacobianPoint: The new accumulator.

    Raises:
        InvalidArgument: value is out of range.
        SamePointCollision: A table point shares the accumulator's x.
    """
    x = pedersenArg(value)
    for j in range(N_ELEMENT_BITS_HASH):
        pt = constants[j]
        if pt.x == point.x:
            raise SamePointCollision(f"same point at bit {j}")
        if x & 1:
            point = point.add(pt)
        x >>= 1
    return point


def pedersenPoint(x, y):
    """
    pedersenPoint computes the full affine point of the Pedersen hash of x
    and y. pedersen returns its x coordinate.
    """
    point = CONSTANTS.shiftPoint
    point = pedersenSingle(point, parseFieldElement(x), CONSTANTS.table1)
    point = pedersenSingle(point, parseFieldElement(y), CONSTANTS.table2)
    return point.toAffine()


def pedersen(x, y):
    """
    Compute the Pedersen hash of two field elements.

    Args:
        x (str or int): A decimal or 0x-prefixed hex string, or an int, in
            [0, P).
        y (str or int): Same as x.

    Returns:
        str: The hash, 0x-prefixed lowercase hex without leading zeros.

    Raises:
        InvalidArgument: Either input is malformed or out of range.
    """
    return bytesToHexEth(pedersenPoint(x, y).toRawX())


def computeHashOnElements(data):
    """
    Hash a sequence of field elements by chaining pedersen, starting from 0
    and ending with the number of elements.

    h(h(h(h(0, data[0]), data[1]), ...), len(data))

    Args:
        data (iterable(str or int)): The elements.

    Returns:
        str: The hash, encoded like the output of pedersen.
    """
    elements = list(data)
    elements.append(str(len(elements)))
    h = "0"
    for element in elements:
        h = pedersen(h, element)
    return h
