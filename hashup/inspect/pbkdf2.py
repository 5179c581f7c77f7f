from __future__ import annotations

import dataclasses
import re
from typing import ClassVar, TypeVar

from hashup._utils.b64 import ab64_decode, ab64_encode, b64s_decode, b64s_encode
from hashup._utils.validation import parse_int
from hashup.errors import MalformedHashError, UnsupportedAlgorithmError

__all__ = [
    "PBKDF2_ALGORITHM_CODES",
    "PBKDF2HashInfo",
    "CompressedPBKDF2HashInfo",
    "decode_pbkdf2_hash",
]

# Identifiers packed into compressed hashes. Stored hashes depend on these values.
PBKDF2_ALGORITHM_CODES = {
    "sha1": 1,
    "sha224": 2,
    "sha256": 3,
    "sha384": 4,
    "sha512": 5,
}
_ALGORITHMS_BY_CODE = {code: name for name, code in PBKDF2_ALGORITHM_CODES.items()}

_ITERATIONS_SHIFT = 32
_CODE_SHIFT = 16
_FIELD_MASK = 0xFFFF
_ITERATIONS_MASK = 0xFFFFFFFF


@dataclasses.dataclass
class PBKDF2HashInfo:
    """
    ``$pbkdf2-<digest>$<iterations>$<key length in bits>$<salt>$<hash>``

    salt and hash use the ``./`` base64 alphabet without padding.
    """

    PREFIX: ClassVar[str] = "$pbkdf2-"
    ALGORITHM_REGEX: ClassVar[re.Pattern[str]] = re.compile(r"[a-z0-9_]+")

    algorithm: str
    iterations: int
    key_length: int
    salt: bytes
    hash: bytes

    def as_str(self) -> str:
        return (
            f"{self.PREFIX}{self.algorithm}${self.iterations}${self.key_length}"
            f"${ab64_encode(self.salt)}${ab64_encode(self.hash)}"
        )

    @classmethod
    def parse(cls, hash: str) -> PBKDF2HashInfo:
        if not hash.startswith(cls.PREFIX):
            raise MalformedHashError("not a pbkdf2 hash")

        fields = hash.split("$")
        if len(fields) != 6:
            msg = f"pbkdf2 hash must have 6 '$' separated fields, got {len(fields)}"
            raise MalformedHashError(msg)

        _, ident, iterations, key_length, salt, digest = fields
        algorithm = ident[len(cls.PREFIX) - 1 :]
        if not cls.ALGORITHM_REGEX.fullmatch(algorithm):
            msg = f"invalid pbkdf2 digest name: {algorithm!r}"
            raise MalformedHashError(msg)

        return cls(
            algorithm=algorithm,
            iterations=parse_int(iterations, "iterations"),
            key_length=parse_int(key_length, "key length"),
            salt=ab64_decode(salt),
            hash=ab64_decode(digest),
        )


@dataclasses.dataclass
class CompressedPBKDF2HashInfo(PBKDF2HashInfo):
    """
    ``$<packed>$<salt>$<hash>`` where ``packed`` is the decimal form of
    ``iterations << 32 | algorithm code << 16 | key length in bits``.

    salt and hash use the standard base64 alphabet without padding.
    """

    REGEX: ClassVar[re.Pattern[str]] = re.compile(r"^\$[0-9]+\$")

    def as_str(self) -> str:
        code = PBKDF2_ALGORITHM_CODES.get(self.algorithm)
        if code is None:
            msg = f"{self.algorithm!r} has no compressed pbkdf2 identifier"
            raise UnsupportedAlgorithmError(msg)
        packed = (
            (self.iterations << _ITERATIONS_SHIFT)
            | (code << _CODE_SHIFT)
            | self.key_length
        )
        return f"${packed}${b64s_encode(self.salt)}${b64s_encode(self.hash)}"

    @classmethod
    def parse(cls, hash: str) -> CompressedPBKDF2HashInfo:
        fields = hash.split("$")
        if len(fields) != 4 or fields[0]:
            msg = f"compressed pbkdf2 hash must have 4 '$' separated fields, got {len(fields)}"
            raise MalformedHashError(msg)

        _, packed_str, salt, digest = fields
        packed = parse_int(packed_str, "configuration")
        if packed >> _ITERATIONS_SHIFT > _ITERATIONS_MASK:
            raise MalformedHashError("configuration field is too large")

        code = (packed >> _CODE_SHIFT) & _FIELD_MASK
        algorithm = _ALGORITHMS_BY_CODE.get(code)
        if algorithm is None:
            msg = f"unknown compressed pbkdf2 algorithm code: {code}"
            raise UnsupportedAlgorithmError(msg)

        return cls(
            algorithm=algorithm,
            iterations=packed >> _ITERATIONS_SHIFT,
            key_length=packed & _FIELD_MASK,
            salt=b64s_decode(salt),
            hash=b64s_decode(digest),
        )


_TPBKDF2HashInfo = TypeVar("_TPBKDF2HashInfo", bound=PBKDF2HashInfo)


def decode_pbkdf2_hash(
    hash: str, cls: type[_TPBKDF2HashInfo] = PBKDF2HashInfo
) -> _TPBKDF2HashInfo:
    info = cls.parse(hash)
    if info.iterations < 1:
        raise MalformedHashError("iterations must be positive")
    if not info.salt:
        raise MalformedHashError("salt must not be empty")
    if info.key_length != len(info.hash) * 8:
        msg = f"key length {info.key_length} does not match a {len(info.hash)} byte hash"
        raise MalformedHashError(msg)
    return info  # type: ignore[return-value]
