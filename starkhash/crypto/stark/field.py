"""
Copyright (c) 2020, the Decred developers
See LICENSE for details

Modular arithmetic over the STARK curve prime field.

Field elements are plain Python ints. Every public operation returns a value
reduced into [0, modulus).
"""

from starkhash import InvalidArgument, NotInvertible


# P = 2^251 + 17*2^192 + 1. No efficient square root exists since P % 4 == 1.
CURVE_P = 2 ** 251 + 17 * 2 ** 192 + 1


def fromHex(hexString):
    """
    Parse a hexadecimal string, with or without a 0x prefix, to an int.

    Args:
        hexString (str): The hex string.

    Returns:
        int: The parsed value.
    """
    if hexString[:2].lower() == "0x":
        hexString = hexString[2:]
    try:
        return int(hexString, 16)
    except ValueError:
        raise InvalidArgument(f"invalid hex string {hexString!r}")


def mod(a, modulus=CURVE_P):
    """
    mod returns the representative of a in [0, modulus).
    """
    result = a % modulus
    return result if result >= 0 else modulus + result


def invert(number, modulus):
    """
    invert computes the inverse of number modulo modulus with the extended
    Euclidean algorithm.

    Args:
        number (int): The value to invert. Must be nonzero.
        modulus (int): The modulus. Must be positive.

    Returns:
        int: The inverse in [0, modulus).

    Raises:
        InvalidArgument: number is zero or modulus is not positive.
        NotInvertible: gcd(number, modulus) != 1.
    """
    if number == 0 or modulus <= 0:
        raise InvalidArgument(
            f"invert: expected positive integers, got n={number} mod={modulus}"
        )
    a = mod(number, modulus)
    b = modulus
    x, y, u, v = 0, 1, 1, 0
    while a != 0:
        q, r = divmod(b, a)
        m = x - u * q
        n = y - v * q
        b, a, x, y, u, v = a, r, u, v, m, n
    gcd = b
    if gcd != 1:
        raise NotInvertible(f"invert: {number} has no inverse mod {modulus}")
    return mod(x, modulus)
