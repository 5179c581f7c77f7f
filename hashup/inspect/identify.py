from __future__ import annotations

import re

from hashup._utils.bytes import StrOrBytes, as_str
from hashup.errors import MalformedHashError, UnsupportedAlgorithmError
from hashup.kinds import AlgorithmKind

__all__ = ["identify_family"]

# prefixes are disjoint: bcrypt versions are not all-digit, compressed configs are
_FAMILY_PREFIXES = (
    (AlgorithmKind.BCRYPT, re.compile(r"\$2[aby]\$")),
    (AlgorithmKind.PBKDF2, re.compile(r"\$pbkdf2-")),
    (AlgorithmKind.COMPRESSED_PBKDF2, re.compile(r"\$[0-9]+\$")),
    (AlgorithmKind.SCRYPT, re.compile(r"\$scrypt\$")),
    (AlgorithmKind.MESSAGE_DIGEST, re.compile(r"\$digest\$")),
)


def identify_family(hash: StrOrBytes) -> AlgorithmKind:
    """Tell which algorithm family produced ``hash`` from its prefix alone."""
    try:
        hash = as_str(hash)
    except MalformedHashError:
        raise UnsupportedAlgorithmError("hash is not valid utf-8") from None

    for kind, prefix in _FAMILY_PREFIXES:
        if prefix.match(hash):
            return kind

    msg = f"unrecognized hash format: {hash[:16]!r}"
    raise UnsupportedAlgorithmError(msg)
