from typing import Union

from hashup.errors import InvalidParametersError, MalformedHashError

StrOrBytes = Union[str, bytes]


def as_bytes(value: StrOrBytes) -> bytes:
    if isinstance(value, str):
        return value.encode("utf8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    msg = f"expected str or bytes, got {type(value).__name__}"
    raise InvalidParametersError(msg)


def as_str(value: StrOrBytes) -> str:
    """decode a hash given as bytes, hashes are always ascii"""
    if not isinstance(value, bytes):
        return value
    try:
        return value.decode("utf8")
    except UnicodeDecodeError:
        raise MalformedHashError("hash is not valid utf-8") from None
