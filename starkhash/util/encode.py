"""
Copyright (c) 2020, the Decred developers
See LICENSE for details

Fixed-width encodings for field elements and a small bytearray wrapper.
"""

import string

from starkhash import InvalidArgument, StarkHashError


# Field elements and point coordinates are serialized as 32 big-endian bytes.
COORDINATE_LEN = 32
COORDINATE_HEX_LEN = COORDINATE_LEN * 2

POW_2_256 = 1 << 256

DEC_DIGITS = frozenset(string.digits)
HEX_DIGITS = frozenset(string.hexdigits)


def intToBytes(i):
    """
    Encodes a non-negative integer to the minimal number of bytes.

    Args:
        i (int): The integer.

    Returns:
        bytearray: The encoded integer.
    """
    return bytearray(i.to_bytes((i.bit_length() + 7) // 8, byteorder="big"))


def intFromBytes(b):
    """
    Decodes an unsigned big-endian integer from bytes.

    Args:
        b (bytes-like): The encoded integer.

    Returns:
        int: The decoded integer.
    """
    return int.from_bytes(b, "big")


def decodeBA(b, copy=False):
    """
    Decode into a bytearray.

    Args:
        b (str, bytes-like, ByteArray, int, list(int)): The value to decode to
            a bytearray. Strings are interpreted as hexadecimal. Integers are
            minimally encoded to an unsigned integer.

    Returns:
        bytearray: The decoded bytes.
    """
    if isinstance(b, ByteArray):
        return bytearray(b.b) if copy else b.b
    if isinstance(b, bytearray):
        return bytearray(b) if copy else b
    if isinstance(b, bytes):
        return bytearray(b)
    if isinstance(b, int):
        return intToBytes(b) if b else bytearray([0])
    if isinstance(b, str):
        return bytearray.fromhex(strip0x(b))
    if hasattr(b, "__iter__"):
        return bytearray(b)
    raise TypeError("decodeBA: unknown type %s" % type(b))


class ByteArray:
    """
    ByteArray is a bytearray manager that accepts hex strings, integers and
    bytes-like values alike. An integer argument results in the shortest
    big-endian representation of the integer. To get a zero-padded ByteArray
    of length n, use the `length` keyword argument.
    """

    def __init__(self, b=b"", copy=True, length=None):
        if length:
            raw = decodeBA(b)
            if len(raw) > length:
                raise StarkHashError(
                    "decode: invalid length %i > %i" % (len(raw), length)
                )
            self.b = bytearray(length - len(raw)) + raw
        else:
            self.b = decodeBA(b, copy=copy)

    def __eq__(self, a):
        try:
            return bytearray.__eq__(self.b, decodeBA(a))
        except (TypeError, ValueError):
            return False

    def __ne__(self, a):
        return not self.__eq__(a)

    def __repr__(self):
        return "ByteArray(" + self.hex() + ")"

    def __len__(self):
        return len(self.b)

    def __add__(self, a):
        return ByteArray(self.b + decodeBA(a))

    def __getitem__(self, k):
        if isinstance(k, slice):
            return ByteArray(self.b[k.start : k.stop : k.step], copy=False)
        return self.b[k]

    def __hash__(self):
        """Enables ByteArray to be a dict key."""
        return hash(bytes(self.b))

    def hex(self):
        """
        A hexadecimal string representation of the bytes.

        Returns:
            str: The hex bytes.
        """
        return self.b.hex()

    def int(self):
        """The bytes as an integer."""
        return intFromBytes(self.b)

    def bytes(self):
        """The bytes as Python `bytes`."""
        return bytes(self.b)


def strip0x(hx):
    """
    Remove a leading 0x, if present.
    """
    return hx[2:] if hx[:2].lower() == "0x" else hx


def numTo32bStr(num):
    """
    Encode an integer in [0, 2^256) as 64 zero-padded lowercase hex characters.

    Args:
        num (int): The number to encode.

    Returns:
        str: The fixed-width hex encoding.
    """
    if not isinstance(num, int) or isinstance(num, bool):
        raise InvalidArgument(f"expected int, got {type(num).__name__}")
    if not 0 <= num < POW_2_256:
        raise InvalidArgument(f"expected number < 2^256, got {num}")
    return format(num, "x").zfill(COORDINATE_HEX_LEN)


def hexToBytes(hx):
    """
    Decode a hex string to bytes. A 0x prefix is accepted and an odd number of
    digits is padded with a leading zero.

    Args:
        hx (str): The hex string.

    Returns:
        bytes: The decoded bytes.
    """
    if not isinstance(hx, str):
        raise TypeError("hexToBytes: expected string, got %s" % type(hx))
    hx = strip0x(hx)
    if len(hx) & 1:
        hx = "0" + hx
    try:
        return bytes.fromhex(hx)
    except ValueError:
        raise InvalidArgument(f"invalid byte sequence {hx!r}")


def bytesToHex(b):
    """
    Encode bytes as lowercase hex with no prefix.
    """
    return ByteArray(b).hex()


def stripLeadingZeros(hx):
    """
    Remove redundant leading zero digits from a hex string. A value of zero
    keeps a single digit.
    """
    return hx.lstrip("0") or "0"


def bytesToHexEth(b):
    """
    Encode bytes as a 0x-prefixed hex string with no leading zeros, the form
    used for digests.

    Args:
        b (bytes-like): The big-endian bytes.

    Returns:
        str: e.g. "0x30e480bed5fe..."
    """
    return "0x" + stripLeadingZeros(bytesToHex(b))


def parseFieldElement(value):
    """
    Parse a field element given as a decimal string, a 0x-prefixed hex string
    or an int. Range checks are left to the caller.

    Args:
        value (str or int): The value to parse.

    Returns:
        int: The parsed value. May be negative.

    Raises:
        InvalidArgument: The value is of the wrong type or is not a number.
    """
    if isinstance(value, bool):
        raise InvalidArgument("expected a field element, got bool")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise InvalidArgument(
            f"expected a field element string, got {type(value).__name__}"
        )
    s = value.strip()
    neg = s.startswith("-")
    digits = s[1:] if neg else s
    base = 10
    if digits[:2].lower() == "0x":
        digits, base = digits[2:], 16
    # int() alone would also take signs, underscores and whitespace.
    valid = HEX_DIGITS if base == 16 else DEC_DIGITS
    if not digits or not all(c in valid for c in digits):
        raise InvalidArgument(f"malformed field element {value!r}")
    n = int(digits, base)
    return -n if neg else n
