"""
Compression and text encoding of a packed status list.

The packed bytes are gzip compressed and then base64url encoded without
padding. The gzip header carries a fixed modification time so two
implementations produce the same string for the same list.
"""
import base64
import binascii
import gzip
import logging
import struct
import zlib
from typing import Iterable, List, Optional, Union

from statuslist.bitpack import check_bits, pack, unpack
from statuslist.errors import CompressionError, DecodeError, DecompressionError

logger = logging.getLogger(__name__)

# mtime written by the draft's reference implementation: 2023-06-16T10:56:10Z
GZIP_MTIME = 1686912970
COMPRESS_LEVEL = 9

_TO_URLSAFE = str.maketrans("+/", "-_")


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64url_decode(text: Union[str, bytes]) -> bytes:
    """
    Decode base64url text. Standard alphabet characters and missing or
    present padding are accepted too.
    """
    try:
        if isinstance(text, bytes):
            text = text.decode("ascii")
        text = text.strip().rstrip("=").translate(_TO_URLSAFE)
        padded = text + "=" * (-len(text) % 4)
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Encoded status list is not valid base64url: {exc}") from exc


def compress(
    buffer: bytes,
    mtime: int = GZIP_MTIME,
    compresslevel: int = COMPRESS_LEVEL,
) -> bytes:
    try:
        return gzip.compress(bytes(buffer), compresslevel=compresslevel, mtime=mtime)
    except (zlib.error, struct.error, MemoryError) as exc:
        raise CompressionError(f"Failed to compress status list: {exc}") from exc


def decompress(data: bytes) -> bytes:
    if not data:
        raise DecompressionError("Compressed status list is empty")
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as exc:
        raise DecompressionError(f"Failed to decompress status list: {exc}") from exc


def encode(
    buffer: bytes,
    mtime: int = GZIP_MTIME,
    compresslevel: int = COMPRESS_LEVEL,
) -> str:
    """
    Compress a packed status list and encode it as base64url text
    """
    compressed = compress(buffer, mtime, compresslevel)
    logger.debug("Compressed %d bytes to %d bytes", len(buffer), len(compressed))
    return b64url_encode(compressed)


def decode(text: Union[str, bytes]) -> bytes:
    """
    Decode base64url text and decompress it back to the packed status list
    """
    buffer = decompress(b64url_decode(text))
    logger.debug("Decompressed status list of %d bytes", len(buffer))
    return buffer


def encode_status_list(values: Iterable[int], bits: int, config=None) -> str:
    """
    Pack, compress and encode a list of status values.

    `config` is a CodecConfig; the defaults reproduce the reference
    implementation byte for byte.
    """
    if config is None:
        return encode(pack(values, bits))
    return encode(pack(values, bits), config.mtime, config.compresslevel)


def decode_status_list(
    text: Union[str, bytes],
    bits: int,
    count: Optional[int] = None,
    config=None,
) -> List[int]:
    """
    Decode, decompress and unpack a status list.

    The bit size is not part of the encoded string and has to come from the
    surrounding claim.
    """
    check_bits(bits)
    strict = config.strict if config is not None else False
    return unpack(decode(text), bits, count=count, strict=strict)
