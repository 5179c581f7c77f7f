from __future__ import annotations

import dataclasses
import hmac
from typing import ClassVar, Literal

import bcrypt
from typing_extensions import Self

from hashup._pepper import compose
from hashup._salt import generate_salt
from hashup._utils.bytes import StrOrBytes, as_bytes, as_str
from hashup._utils.validation import validate_range
from hashup.errors import InvalidParametersError, MalformedHashError, Panic
from hashup.hashers.abc import HashingFunction
from hashup.inspect.bcrypt import (
    BCRYPT_MAX_COST,
    BCRYPT_MIN_COST,
    BCRYPT_SALT_SIZE,
    BcryptHashInfo,
    decode_bcrypt_hash,
)
from hashup.kinds import AlgorithmKind
from hashup.results import HashResult

BcryptPrefix = Literal["2a", "2b", "2y"]
_bcrypt_prefixes = ("2a", "2b", "2y")

# bcrypt only reads the first 72 bytes of a secret
BCRYPT_MAX_SECRET_SIZE = 72

__all__ = ["BCryptFunction"]


def _hashpw(secret: bytes, info: BcryptHashInfo) -> BcryptHashInfo:
    raw = bcrypt.hashpw(secret[:BCRYPT_MAX_SECRET_SIZE], info.bcrypt_salt)
    try:
        return decode_bcrypt_hash(as_str(raw))
    except MalformedHashError as err:
        raise Panic("bcrypt returned an unparsable hash") from err


@dataclasses.dataclass(frozen=True)
class BCryptFunction(HashingFunction):
    """
    :param cost: log2 of the number of rounds, between 4 and 31.
    :param prefix: bcrypt version marker written into new hashes.
    """

    kind: ClassVar[AlgorithmKind] = AlgorithmKind.BCRYPT

    cost: int = 10
    prefix: BcryptPrefix = "2b"

    def __post_init__(self) -> None:
        validate_range("bcrypt cost", self.cost, min=BCRYPT_MIN_COST, max=BCRYPT_MAX_COST)
        if self.prefix not in _bcrypt_prefixes:
            msg = f"bcrypt prefix must be one of {_bcrypt_prefixes}, got {self.prefix!r}"
            raise InvalidParametersError(msg)

    def hash(
        self,
        secret: StrOrBytes,
        *,
        salt: StrOrBytes | None = None,
        pepper: StrOrBytes | None = None,
    ) -> HashResult:
        """
        :param secret: Secret to hash
        :param salt: 16 raw salt bytes, generated when omitted
        :param pepper: Prefix for the secret
        :return: Hash
        """
        salt = as_bytes(salt) if salt is not None else generate_salt(BCRYPT_SALT_SIZE)
        if len(salt) != BCRYPT_SALT_SIZE:
            msg = f"bcrypt salt must be {BCRYPT_SALT_SIZE} bytes, got {len(salt)}"
            raise InvalidParametersError(msg)

        settings = BcryptHashInfo(prefix=self.prefix, rounds=self.cost, salt=salt, hash=b"")
        info = _hashpw(compose(secret, pepper), settings)
        return HashResult(
            result=info.as_str(),
            hash=info.hash,
            salt=info.salt,
            hashing_function=self,
        )

    def check(
        self,
        secret: StrOrBytes,
        hash: StrOrBytes,
        *,
        pepper: StrOrBytes | None = None,
    ) -> bool:
        # cost and salt always come from the hash, never from this instance
        info = decode_bcrypt_hash(as_str(hash))
        candidate = _hashpw(compose(secret, pepper), info)
        return hmac.compare_digest(candidate.hash, info.hash)

    @classmethod
    def from_hash(cls, hash: StrOrBytes) -> Self:
        info = decode_bcrypt_hash(as_str(hash))
        return cls(cost=info.rounds, prefix=info.prefix)  # type: ignore[arg-type]
