"""
Packing of status values into the Token Status List byte layout.
See: https://datatracker.ietf.org/doc/html/draft-looker-oauth-jwt-cwt-status-list-01

Each value takes `bits` bits. Bits are laid out least significant first,
both inside a byte and inside a multi-bit value, so index 0 lives in the
lowest bits of byte 0.
"""
from enum import IntEnum
from typing import Iterable, List, Optional

from bitarray import bitarray
from bitarray.util import ba2int, int2ba

from statuslist.errors import (
    InvalidBitSizeError,
    PaddingError,
    ValueOutOfRangeError,
)

BIT_SIZES = (1, 2, 4, 8)


class StatusType(IntEnum):
    """
    Named status values. Any integer that fits the bit size is legal,
    these are only the ones registered by the draft.
    """

    # The status of the token is valid, correct or legal
    VALID = 0
    # The status of the token is revoked, annulled, taken back, recalled or cancelled
    INVALID = 1
    # The status of the token is temporarily invalid. This state is reversible
    SUSPENDED = 2
    APPLICATION_SPECIFIC = 3


def check_bits(bits: int) -> int:
    if not isinstance(bits, int) or isinstance(bits, bool) or bits not in BIT_SIZES:
        raise InvalidBitSizeError(bits)
    return bits


def max_value(bits: int) -> int:
    return (1 << check_bits(bits)) - 1


def packed_size(count: int, bits: int) -> int:
    """
    Number of bytes needed to hold `count` values of `bits` bits each
    """
    return -(-count * check_bits(bits) // 8)


def check_value(value: int, bits: int, index: Optional[int] = None) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"Status values must be integers, got {value!r}")
    if value < 0 or value > max_value(bits):
        raise ValueOutOfRangeError(value, bits, index)
    return value


def value_bits(value: int, bits: int) -> bitarray:
    """Bits of a single value, least significant first."""
    return int2ba(value, length=bits, endian="little")


def pack(values: Iterable[int], bits: int) -> bytes:
    """
    Pack status values into bytes.

    Every value is checked before anything is written, so a value that does
    not fit raises ValueOutOfRangeError without producing output. Unused
    high bits of the last byte are zero.
    """
    check_bits(bits)
    values = list(values)
    for i, value in enumerate(values):
        check_value(value, bits, i)

    stream = bitarray(endian="little")
    for value in values:
        stream.extend(value_bits(value, bits))
    # tobytes() zero fills the last byte
    return stream.tobytes()


def unpack(
    buffer: bytes,
    bits: int,
    count: Optional[int] = None,
    strict: bool = False,
) -> List[int]:
    """
    Unpack bytes into status values.

    Without `count` every field in the buffer is returned, so padding in the
    last byte comes back as trailing zero values. With `count` only the
    first `count` values are returned. `strict` needs `count` and rejects a
    buffer whose length does not match it or whose padding bits are set.
    """
    check_bits(bits)
    stream = bitarray(endian="little")
    stream.frombytes(bytes(buffer))

    if count is not None:
        if count < 0:
            raise ValueError(f"Value count must not be negative, got {count}")
        if count * bits > len(stream):
            raise PaddingError(
                f"Buffer of {len(buffer)} bytes holds fewer than {count} values of {bits} bits"
            )
    if strict:
        if count is None:
            raise ValueError("Strict unpacking needs the value count")
        expected = packed_size(count, bits)
        if len(buffer) != expected:
            raise PaddingError(
                f"Expected {expected} bytes for {count} values of {bits} bits, got {len(buffer)}"
            )
        if stream[count * bits :].any():
            raise PaddingError("Padding bits after the last value are not zero")

    end = len(stream) if count is None else count * bits
    return [ba2int(stream[i : i + bits]) for i in range(0, end, bits)]
