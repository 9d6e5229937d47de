"""
Implementation of the JWT/CWT Token Status List encoding.
See here for details: https://datatracker.ietf.org/doc/html/draft-looker-oauth-jwt-cwt-status-list-01
"""

from typing import Iterable, Iterator, List, Optional

from bitarray import bitarray
from bitarray.util import ba2int, zeros

from statuslist.bitpack import (
    BIT_SIZES,
    StatusType,
    check_bits,
    check_value,
    max_value,
    pack,
    packed_size,
    unpack,
    value_bits,
)
from statuslist.codec import (
    COMPRESS_LEVEL,
    GZIP_MTIME,
    decode,
    decode_status_list,
    encode,
    encode_status_list,
)
from statuslist.config import DEFAULT_CONFIG, CodecConfig, load_config
from statuslist.errors import (
    CompressionError,
    DecodeError,
    DecompressionError,
    InvalidBitSizeError,
    PaddingError,
    StatusListError,
    ValueOutOfRangeError,
)

# Default number of entries in a status list (for herd privacy)
DefaultListSize = 16 * 1024 * 8


class StatusList:
    bits: int

    def __init__(self, bits: int = 1, size: int = DefaultListSize):
        self.bits = check_bits(bits)
        if size < 0:
            raise ValueError(f"Status list size must not be negative, got {size}")
        self._size = size
        self._stream = zeros(size * bits, endian="little")

    def _offset(self, index: int) -> int:
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError(f"Index {index} out of range for status list of {self._size}")
        return index * self.bits

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> int:
        i = self._offset(index)
        return ba2int(self._stream[i : i + self.bits])

    def __setitem__(self, index: int, value: int):
        check_value(value, self.bits, index)
        i = self._offset(index)
        self._stream[i : i + self.bits] = value_bits(value, self.bits)

    def __iter__(self) -> Iterator[int]:
        for index in range(self._size):
            yield self[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, StatusList):
            return NotImplemented
        return self.bits == other.bits and self._stream == other._stream

    def __repr__(self) -> str:
        return f"StatusList(bits={self.bits}, size={self._size})"

    def status(self, index: int) -> int:
        """
        Status value for the given index. Known values come back as StatusType
        """
        value = self[index]
        try:
            return StatusType(value)
        except ValueError:
            return value

    def revoke(self, index: int):
        """
        Revoke a token for the given status list index
        """
        self[index] = StatusType.INVALID

    def suspend(self, index: int):
        """
        Suspend a token. Needs at least 2 bits per entry
        """
        self[index] = StatusType.SUSPENDED

    def is_revoked(self, index: int) -> bool:
        return self[index] == StatusType.INVALID

    def is_suspended(self, index: int) -> bool:
        return self[index] == StatusType.SUSPENDED

    def batch_revoke(self, indices: Iterable[int]):
        for i in indices:
            self.revoke(i)

    def to_values(self) -> List[int]:
        return unpack(self._stream.tobytes(), self.bits, count=self._size)

    @classmethod
    def from_values(cls, values: Iterable[int], bits: int = 1):
        values = list(values)
        packed = pack(values, bits)
        lst = cls(bits, len(values))
        lst._stream = bitarray(endian="little")
        lst._stream.frombytes(packed)
        del lst._stream[len(values) * bits :]
        return lst

    @classmethod
    def decode(
        cls,
        encoded: str,
        bits: int = 1,
        size: Optional[int] = None,
        config: Optional[CodecConfig] = None,
    ):
        """
        Decode an encoded list. Without `size` the list is as long as the
        packed bytes allow, padding included.
        """
        return cls.from_values(decode_status_list(encoded, bits, size, config), bits)

    def encode(self, config: Optional[CodecConfig] = None) -> str:
        config = config or DEFAULT_CONFIG
        return encode(self._stream.tobytes(), config.mtime, config.compresslevel)

    def size(self):
        return self._size


__all__ = [
    "BIT_SIZES",
    "COMPRESS_LEVEL",
    "DEFAULT_CONFIG",
    "GZIP_MTIME",
    "CodecConfig",
    "CompressionError",
    "DecodeError",
    "DecompressionError",
    "DefaultListSize",
    "InvalidBitSizeError",
    "PaddingError",
    "StatusList",
    "StatusListError",
    "StatusType",
    "ValueOutOfRangeError",
    "decode",
    "decode_status_list",
    "encode",
    "encode_status_list",
    "load_config",
    "max_value",
    "pack",
    "packed_size",
    "unpack",
]
