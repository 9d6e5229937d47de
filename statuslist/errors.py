"""
Errors raised by the status list encoder/decoder.
"""
from typing import Optional


class StatusListError(Exception):
    """Raised when a status list operation fails."""


class InvalidBitSizeError(StatusListError, ValueError):
    """Raised when the bit size is not one of 1, 2, 4 or 8."""

    def __init__(self, bits):
        self.bits = bits
        super().__init__(f"Bit size must be one of 1, 2, 4, 8, got {bits!r}")


class ValueOutOfRangeError(StatusListError, ValueError):
    """
    Raised when a status value does not fit in the bit size
    """

    def __init__(self, value: int, bits: int, index: Optional[int] = None):
        self.value = value
        self.bits = bits
        self.index = index
        message = f"Value {value} is too large for bit size {bits}"
        if value < 0:
            message = f"Value {value} is negative"
        if index is not None:
            message += f" (index {index})"
        super().__init__(message)


class CompressionError(StatusListError):
    pass


class DecodeError(StatusListError, ValueError):
    """Raised when the encoded list is not valid base64url text."""


class PaddingError(DecodeError):
    """Raised by strict decoding on a bad length or non-zero padding bits."""


class DecompressionError(StatusListError):
    """Raised when the gzip stream is corrupt, truncated or empty."""
