from __future__ import annotations

import dataclasses
import hashlib
import hmac
from hashlib import pbkdf2_hmac
from typing import TYPE_CHECKING, ClassVar

from typing_extensions import Self

from hashup._pepper import compose
from hashup._salt import DEFAULT_SALT_SIZE, generate_salt
from hashup._utils.bytes import as_bytes, as_str
from hashup._utils.validation import validate_range
from hashup.errors import (
    InvalidParametersError,
    MalformedHashError,
    UnsupportedAlgorithmError,
)
from hashup.hashers.abc import HashingFunction
from hashup.inspect.pbkdf2 import (
    PBKDF2_ALGORITHM_CODES,
    CompressedPBKDF2HashInfo,
    PBKDF2HashInfo,
    decode_pbkdf2_hash,
)
from hashup.kinds import AlgorithmKind
from hashup.results import HashResult

if TYPE_CHECKING:
    from hashup._utils.bytes import StrOrBytes

__all__ = ["PBKDF2Function", "CompressedPBKDF2Function"]


def _validate_hmac_algorithm(
    algorithm: str, error: type[Exception] = InvalidParametersError
) -> None:
    try:
        pbkdf2_hmac(algorithm, b"", b"salt", 1)
    except (ValueError, TypeError):
        msg = f"{algorithm!r} can't be used as a pbkdf2 hmac digest"
        raise error(msg) from None


def _canonical_hmac_algorithm(algorithm: str) -> str:
    """name hashlib reports for ``algorithm``, the only form pbkdf2 hashes can carry"""
    _validate_hmac_algorithm(algorithm)
    try:
        name = hashlib.new(algorithm).name
    except (ValueError, TypeError):
        msg = f"{algorithm!r} can't be used as a pbkdf2 hmac digest"
        raise InvalidParametersError(msg) from None
    if not PBKDF2HashInfo.ALGORITHM_REGEX.fullmatch(name):
        msg = f"{name!r} can't be written into a pbkdf2 hash"
        raise InvalidParametersError(msg)
    return name


# PBKDF2 Recommended rounds:
# https://cheatsheetseries.owasp.org/cheatsheets/Password_Storage_Cheat_Sheet.html#pbkdf2


@dataclasses.dataclass(frozen=True)
class PBKDF2Function(HashingFunction):
    """
    PBKDF2 with a configurable HMAC digest.

    :param algorithm: :mod:`hashlib` digest name used as the HMAC function.
    :param iterations: number of PBKDF2 iterations.
    :param key_length: length of the derived key, in bits.
    :param salt_length: size of generated salts in bytes. Not part of equality,
        a hash does not record how its salt was produced.
    """

    kind: ClassVar[AlgorithmKind] = AlgorithmKind.PBKDF2
    HASH_INFO_CLS: ClassVar[type[PBKDF2HashInfo]] = PBKDF2HashInfo

    algorithm: str = hashlib.sha512().name
    iterations: int = 310_000
    key_length: int = 512
    salt_length: int = dataclasses.field(default=DEFAULT_SALT_SIZE, compare=False)

    def __post_init__(self) -> None:
        validate_range("iterations", self.iterations, min=1)
        validate_range("key length", self.key_length, min=8)
        if self.key_length % 8:
            msg = f"key length must be a multiple of 8 bits, got {self.key_length}"
            raise InvalidParametersError(msg)
        validate_range("salt length", self.salt_length, min=1)
        object.__setattr__(self, "algorithm", _canonical_hmac_algorithm(self.algorithm))

    def hash(
        self,
        secret: StrOrBytes,
        *,
        salt: StrOrBytes | None = None,
        pepper: StrOrBytes | None = None,
    ) -> HashResult:
        salt = as_bytes(salt) if salt is not None else generate_salt(self.salt_length)
        if not salt:
            raise InvalidParametersError("salt must not be empty")

        hash = pbkdf2_hmac(
            self.algorithm,
            password=compose(secret, pepper),
            salt=salt,
            iterations=self.iterations,
            dklen=self.key_length // 8,
        )
        info = self.HASH_INFO_CLS(
            algorithm=self.algorithm,
            iterations=self.iterations,
            key_length=self.key_length,
            salt=salt,
            hash=hash,
        )
        return HashResult(
            result=info.as_str(),
            hash=hash,
            salt=salt,
            hashing_function=self,
        )

    def check(
        self,
        secret: StrOrBytes,
        hash: StrOrBytes,
        *,
        pepper: StrOrBytes | None = None,
    ) -> bool:
        info = decode_pbkdf2_hash(as_str(hash), cls=self.HASH_INFO_CLS)
        _validate_hmac_algorithm(info.algorithm, UnsupportedAlgorithmError)
        candidate = pbkdf2_hmac(
            info.algorithm,
            password=compose(secret, pepper),
            salt=info.salt,
            iterations=info.iterations,
            dklen=len(info.hash),
        )
        return hmac.compare_digest(candidate, info.hash)

    @classmethod
    def from_hash(cls, hash: StrOrBytes) -> Self:
        info = decode_pbkdf2_hash(as_str(hash), cls=cls.HASH_INFO_CLS)
        _validate_hmac_algorithm(info.algorithm, UnsupportedAlgorithmError)
        try:
            return cls(
                algorithm=info.algorithm,
                iterations=info.iterations,
                key_length=info.key_length,
                salt_length=len(info.salt),
            )
        except InvalidParametersError as err:
            raise MalformedHashError(str(err)) from err


@dataclasses.dataclass(frozen=True)
class CompressedPBKDF2Function(PBKDF2Function):
    """
    PBKDF2 rendered as ``$<packed>$<salt>$<hash>``.

    Iterations, digest and key length share one integer field, so the digest
    is limited to the ones in :data:`PBKDF2_ALGORITHM_CODES`, iterations to
    32 bits and key length to 16 bits.
    """

    kind: ClassVar[AlgorithmKind] = AlgorithmKind.COMPRESSED_PBKDF2
    HASH_INFO_CLS: ClassVar[type[PBKDF2HashInfo]] = CompressedPBKDF2HashInfo

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.algorithm not in PBKDF2_ALGORITHM_CODES:
            msg = f"{self.algorithm!r} has no compressed pbkdf2 identifier"
            raise InvalidParametersError(msg)
        validate_range("iterations", self.iterations, min=1, max=0xFFFFFFFF)
        validate_range("key length", self.key_length, min=8, max=0xFFFF)
