from __future__ import annotations

from hashup._utils.bytes import StrOrBytes, as_bytes
from hashup.errors import InvalidParametersError

__all__ = ["compose", "resolve_pepper"]


def compose(secret: StrOrBytes, pepper: StrOrBytes | None = None) -> bytes:
    """
    Build the exact byte sequence fed to a hashing function.

    The pepper is always a prefix (``pepper + secret``); stored hashes depend on
    that ordering. Salt is never part of the composed input, every hashing
    function embeds it on its own.
    """
    if not pepper:
        return as_bytes(secret)
    return as_bytes(pepper) + as_bytes(secret)


def resolve_pepper(
    pepper: StrOrBytes | None, default: StrOrBytes | None
) -> StrOrBytes:
    if pepper is not None:
        return pepper
    if default is None:
        raise InvalidParametersError("no pepper given and none configured")
    return default
