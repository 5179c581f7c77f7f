from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Protocol

from typing_extensions import Self

from hashup.errors import MalformedHashError, UnsupportedAlgorithmError
from hashup.inspect.identify import identify_family

if TYPE_CHECKING:
    from hashup._utils.bytes import StrOrBytes
    from hashup.kinds import AlgorithmKind
    from hashup.results import HashResult

__all__ = ["HashingFunction"]


class HashingFunction(Protocol):
    kind: ClassVar[AlgorithmKind]

    def hash(
        self,
        secret: StrOrBytes,
        *,
        salt: StrOrBytes | None = None,
        pepper: StrOrBytes | None = None,
    ) -> HashResult: ...

    def check(
        self,
        secret: StrOrBytes,
        hash: StrOrBytes,
        *,
        pepper: StrOrBytes | None = None,
    ) -> bool:
        """
        Checks ``pepper + secret`` against ``hash`` using the parameters embedded in the hash.

        Raises :exc:`MalformedHashError` if ``hash`` was not produced by this family.
        """
        ...

    @classmethod
    def from_hash(cls, hash: StrOrBytes) -> Self:
        """Rebuilds the hashing function that produced ``hash``."""
        ...

    def identify(self, hash: StrOrBytes) -> bool:
        try:
            return identify_family(hash) is self.kind
        except UnsupportedAlgorithmError:
            return False

    def needs_update(self, hash: StrOrBytes) -> bool:
        """Checks if hash needs to be updated, returns True if hash is not recognized."""
        try:
            return type(self).from_hash(hash) != self
        except (MalformedHashError, UnsupportedAlgorithmError):
            return True
