from __future__ import annotations

import dataclasses
import hashlib
import hmac
from typing import TYPE_CHECKING, ClassVar

from typing_extensions import Self

from hashup._pepper import compose
from hashup._utils.bytes import as_str
from hashup.errors import (
    InvalidParametersError,
    MalformedHashError,
    UnsupportedAlgorithmError,
)
from hashup.hashers.abc import HashingFunction
from hashup.inspect.digest import (
    ALGORITHM_REGEX,
    MessageDigestHashInfo,
    decode_message_digest_hash,
)
from hashup.kinds import AlgorithmKind
from hashup.results import HashResult

if TYPE_CHECKING:
    from hashup._utils.bytes import StrOrBytes

__all__ = ["MessageDigestFunction"]


def _digest_size(algorithm: str, error: type[Exception]) -> int:
    try:
        size = hashlib.new(algorithm).digest_size
    except (ValueError, TypeError):
        msg = f"unknown digest algorithm: {algorithm!r}"
        raise error(msg) from None
    if not size:
        msg = f"variable length digest {algorithm!r} is not supported"
        raise error(msg)
    return size


@dataclasses.dataclass(frozen=True)
class MessageDigestFunction(HashingFunction):
    """
    Plain :mod:`hashlib` digest of ``pepper + secret``.

    Hashes carry no salt. Callers that want a salted digest prepend the salt
    to the secret themselves, passing ``salt`` raises :exc:`InvalidParametersError`.
    """

    kind: ClassVar[AlgorithmKind] = AlgorithmKind.MESSAGE_DIGEST

    algorithm: str = hashlib.sha512().name

    def __post_init__(self) -> None:
        _digest_size(self.algorithm, InvalidParametersError)
        # hashlib accepts aliases such as "SHA256", tokens carry the canonical name
        object.__setattr__(self, "algorithm", hashlib.new(self.algorithm).name)
        if not ALGORITHM_REGEX.fullmatch(self.algorithm):
            msg = f"{self.algorithm!r} can't be written into a message digest hash"
            raise InvalidParametersError(msg)

    def hash(
        self,
        secret: StrOrBytes,
        *,
        salt: StrOrBytes | None = None,
        pepper: StrOrBytes | None = None,
    ) -> HashResult:
        if salt is not None:
            raise InvalidParametersError("message digest hashes can't embed a salt")

        hash = hashlib.new(self.algorithm, compose(secret, pepper)).digest()
        info = MessageDigestHashInfo(algorithm=self.algorithm, hash=hash)
        return HashResult(
            result=info.as_str(),
            hash=hash,
            salt=None,
            hashing_function=self,
        )

    def check(
        self,
        secret: StrOrBytes,
        hash: StrOrBytes,
        *,
        pepper: StrOrBytes | None = None,
    ) -> bool:
        info = self._decode(hash)
        candidate = hashlib.new(info.algorithm, compose(secret, pepper)).digest()
        return hmac.compare_digest(candidate, info.hash)

    @classmethod
    def from_hash(cls, hash: StrOrBytes) -> Self:
        return cls(algorithm=cls._decode(hash).algorithm)

    @staticmethod
    def _decode(hash: StrOrBytes) -> MessageDigestHashInfo:
        info = decode_message_digest_hash(as_str(hash))
        size = _digest_size(info.algorithm, UnsupportedAlgorithmError)
        if len(info.hash) != size:
            msg = f"{info.algorithm} hash must be {size} bytes, got {len(info.hash)}"
            raise MalformedHashError(msg)
        return info
