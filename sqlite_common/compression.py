"""Compression helpers for storing large text values in TEXT columns

Values are UTF-8 encoded, gzip compressed and base64 encoded so the result
is printable and survives any text column.
"""

import base64
import binascii
import gzip
import zlib

from .errors import CompressionError


def compress(text: str) -> str:
    """Compress text into a base64 string"""
    raw = gzip.compress(text.encode("utf-8", "surrogatepass"))
    return base64.b64encode(raw).decode("ascii")


def decompress(compressed: str) -> str:
    """Inverse of compress()

    Raises:
        CompressionError: If the input is not base64, not gzip data, or
            does not decode as UTF-8
    """
    try:
        raw = base64.b64decode(compressed, validate=True)
        return gzip.decompress(raw).decode("utf-8", "surrogatepass")
    except (binascii.Error, OSError, EOFError, zlib.error, UnicodeDecodeError) as e:
        raise CompressionError(f"Cannot decompress value: {e}") from e
