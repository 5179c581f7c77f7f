from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hashup.hashers.bcrypt import BCryptFunction
from hashup.hashers.digest import MessageDigestFunction
from hashup.hashers.pbkdf2 import CompressedPBKDF2Function, PBKDF2Function
from hashup.hashers.scrypt import SCryptFunction
from hashup.inspect.identify import identify_family
from hashup.kinds import AlgorithmKind

if TYPE_CHECKING:
    from hashup._utils.bytes import StrOrBytes
    from hashup.hashers.abc import HashingFunction

__all__ = ["get_hashing_function_class", "from_hash", "check"]

log = logging.getLogger(__name__)

_FAMILIES: dict[AlgorithmKind, type[HashingFunction]] = {
    AlgorithmKind.PBKDF2: PBKDF2Function,
    AlgorithmKind.COMPRESSED_PBKDF2: CompressedPBKDF2Function,
    AlgorithmKind.BCRYPT: BCryptFunction,
    AlgorithmKind.SCRYPT: SCryptFunction,
    AlgorithmKind.MESSAGE_DIGEST: MessageDigestFunction,
}


def get_hashing_function_class(kind: AlgorithmKind) -> type[HashingFunction]:
    return _FAMILIES[AlgorithmKind(kind)]


def from_hash(hash: StrOrBytes) -> HashingFunction:
    """
    Rebuilds the hashing function that produced ``hash``, without knowing its family up front.

    :raises UnsupportedAlgorithmError: if no family recognizes the hash prefix.
    :raises MalformedHashError: if the hash doesn't parse under its family's format.
    """
    kind = identify_family(hash)
    function = _FAMILIES[kind].from_hash(hash)
    log.debug("rebuilt %s hashing function from hash: %r", kind.value, function)
    return function


def check(
    secret: StrOrBytes,
    hash: StrOrBytes,
    *,
    pepper: StrOrBytes | None = None,
) -> bool:
    return from_hash(hash).check(secret, hash, pepper=pepper)
