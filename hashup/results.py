from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, ClassVar

from hashup.errors import InvalidParametersError

if TYPE_CHECKING:
    from hashup._utils.bytes import StrOrBytes
    from hashup.hashers.abc import HashingFunction

__all__ = ["HashResult", "HashUpdateResult"]


@dataclasses.dataclass(frozen=True)
class HashResult:
    """
    Outcome of hashing a secret.

    :ivar result: the self-describing hash string, the value to store.
    :ivar hash: raw digest bytes.
    :ivar salt: salt embedded in ``result``, ``None`` for salt-less functions.
    :ivar hashing_function: the function that produced ``result``.
    """

    result: str
    hash: bytes = dataclasses.field(repr=False)
    salt: bytes | None = dataclasses.field(repr=False)
    hashing_function: HashingFunction

    def check(self, secret: StrOrBytes, *, pepper: StrOrBytes | None = None) -> bool:
        return self.hashing_function.check(secret, self.result, pepper=pepper)

    def __str__(self) -> str:
        return self.result


@dataclasses.dataclass(frozen=True)
class HashUpdateResult:
    """
    Outcome of a hash migration.

    ``hash`` holds the new hash if and only if the secret was verified against the old one.
    """

    UNVERIFIED: ClassVar[HashUpdateResult]

    verified: bool
    hash: HashResult | None = None

    def __post_init__(self) -> None:
        if self.verified != (self.hash is not None):
            raise InvalidParametersError(
                "a new hash must be present exactly when the secret was verified"
            )


HashUpdateResult.UNVERIFIED = HashUpdateResult(verified=False)
