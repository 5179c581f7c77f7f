from __future__ import annotations

import dataclasses
import re

from hashup._utils.binary import bcrypt64
from hashup.errors import MalformedHashError

__all__ = [
    "BCRYPT_HASH_SIZE",
    "BCRYPT_SALT_SIZE",
    "BCRYPT_MIN_COST",
    "BCRYPT_MAX_COST",
    "BcryptHashInfo",
    "decode_bcrypt_hash",
]

BCRYPT_SALT_SIZE = 16
BCRYPT_HASH_SIZE = 23
BCRYPT_MIN_COST = 4
BCRYPT_MAX_COST = 31
BCRYPT_HASH_LENGTH = 60

BCRYPT_HASH_REGEX = re.compile(
    r"^\$(?P<prefix>2a|2b|2y)\$(?P<rounds>[0-9]{2})\$"
    r"(?P<salt>[./A-Za-z0-9]{22})(?P<hash>[./A-Za-z0-9]{31})$"
)


@dataclasses.dataclass
class BcryptHashInfo:
    prefix: str
    rounds: int
    salt: bytes
    hash: bytes

    @property
    def bcrypt_salt(self) -> bytes:
        """settings string accepted by ``bcrypt.hashpw()``"""
        return f"${self.prefix}${self.rounds:02}$".encode() + bcrypt64.encode_bytes(
            self.salt
        )

    def as_str(self) -> str:
        return (self.bcrypt_salt + bcrypt64.encode_bytes(self.hash)).decode("ascii")


def decode_bcrypt_hash(hash: str) -> BcryptHashInfo:
    if len(hash) != BCRYPT_HASH_LENGTH:
        msg = f"bcrypt hash must be {BCRYPT_HASH_LENGTH} characters, got {len(hash)}"
        raise MalformedHashError(msg)

    result = BCRYPT_HASH_REGEX.match(hash)
    if not result:
        raise MalformedHashError("invalid bcrypt version marker or encoding")

    rounds = int(result.group("rounds"))
    if not BCRYPT_MIN_COST <= rounds <= BCRYPT_MAX_COST:
        msg = f"bcrypt cost must be between {BCRYPT_MIN_COST} - {BCRYPT_MAX_COST}, got {rounds}"
        raise MalformedHashError(msg)

    return BcryptHashInfo(
        prefix=result.group("prefix"),
        rounds=rounds,
        salt=bcrypt64.decode_bytes(result.group("salt").encode("ascii")),
        hash=bcrypt64.decode_bytes(result.group("hash").encode("ascii")),
    )
