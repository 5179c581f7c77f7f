from __future__ import annotations

import binascii
import re

from hashup._utils.bytes import StrOrBytes, as_bytes
from hashup.errors import MalformedHashError

_BASE64_STRIP = b"=\n"
_BASE64_PAD1 = b"="
_BASE64_PAD2 = b"=="
_BASE64_CHARS = re.compile(rb"[A-Za-z0-9+/]*")


def b64s_encode(data: bytes) -> str:
    """
    encode using shortened base64 format which omits padding & whitespace.
    uses default ``+/`` altchars.
    """
    return binascii.b2a_base64(data).rstrip(_BASE64_STRIP).decode("ascii")


def b64s_decode(data: StrOrBytes) -> bytes:
    """
    decode from shortened base64 format which omits padding & whitespace.
    uses default ``+/`` altchars.
    """
    data = as_bytes(data)
    # a2b_base64() silently skips characters outside the alphabet
    if not _BASE64_CHARS.fullmatch(data):
        raise MalformedHashError("invalid base64 input")
    offset = len(data) % 4
    if offset == 0:
        pass
    elif offset == 2:
        data += _BASE64_PAD2
    elif offset == 3:
        data += _BASE64_PAD1
    else:
        raise MalformedHashError("invalid base64 input")
    try:
        return binascii.a2b_base64(data)
    except binascii.Error as err:
        raise MalformedHashError(f"invalid base64 input: {err}") from err


def ab64_encode(data: bytes) -> str:
    """
    encode using shortened base64 format which omits padding & whitespace.
    uses custom ``./`` altchars.

    it is used by the ``$pbkdf2-<digest>$`` hashes.
    """
    return b64s_encode(data).replace("+", ".")


def ab64_decode(data: StrOrBytes) -> bytes:
    """
    decode from shortened base64 format which omits padding & whitespace.
    uses custom ``./`` altchars, but supports decoding normal ``+/`` altchars as well.
    """
    return b64s_decode(as_bytes(data).replace(b".", b"+"))
