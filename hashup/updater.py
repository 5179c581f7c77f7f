from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from typing_extensions import Self

from hashup import registry
from hashup._pepper import resolve_pepper
from hashup._salt import generate_salt
from hashup.config import HashingConfig
from hashup.errors import InvalidParametersError
from hashup.hashers.bcrypt import BCryptFunction
from hashup.hashers.digest import MessageDigestFunction
from hashup.hashers.pbkdf2 import CompressedPBKDF2Function, PBKDF2Function
from hashup.hashers.scrypt import SCryptFunction
from hashup.results import HashUpdateResult

if TYPE_CHECKING:
    from hashup._utils.bytes import StrOrBytes
    from hashup.hashers.abc import HashingFunction

__all__ = ["update_hash", "HashUpdater"]

log = logging.getLogger(__name__)


def update_hash(
    secret: StrOrBytes,
    hash: StrOrBytes,
    old: HashingFunction,
    new: HashingFunction,
    *,
    pepper: StrOrBytes | None = None,
    new_salt: StrOrBytes | None = None,
    new_pepper: StrOrBytes | None = None,
) -> HashUpdateResult:
    """
    Checks ``secret`` against ``hash`` with ``old`` and, only if it matches, hashes it again with ``new``.

    :param pepper: pepper the old hash was created with.
    :param new_salt: salt for the new hash, generated by ``new`` when omitted.
    :param new_pepper: pepper for the new hash.
    :returns: :attr:`HashUpdateResult.UNVERIFIED` for a wrong secret,
        otherwise a verified result carrying the new hash.
    :raises MalformedHashError: if ``hash`` was not produced by ``old``'s family.
    """
    if old is None:
        raise InvalidParametersError("old hashing function can't be None")
    if new is None:
        raise InvalidParametersError("new hashing function can't be None")

    if not old.check(secret, hash, pepper=pepper):
        log.debug("%s verification failed, hash not updated", old.kind.value)
        return HashUpdateResult.UNVERIFIED

    new_hash = new.hash(secret, salt=new_salt, pepper=new_pepper)
    log.debug("updated %s hash to %s", old.kind.value, new.kind.value)
    return HashUpdateResult(verified=True, hash=new_hash)


@dataclasses.dataclass(frozen=True)
class HashUpdater:
    """
    Migration request for one stored hash.

    ``add_new_*`` methods return a new updater, the ``with_*`` methods run the migration::

        >>> updater = HashUpdater("password", stored_bcrypt_hash, pepper="pepper")
        >>> result = updater.add_new_pepper().with_bcrypt(config.scrypt())
        >>> if result.verified:
        ...     store(result.hash.result)
    """

    secret: StrOrBytes = dataclasses.field(repr=False)
    hash: StrOrBytes
    pepper: StrOrBytes | None = dataclasses.field(default=None, repr=False)
    config: HashingConfig = dataclasses.field(default_factory=HashingConfig)
    new_salt: StrOrBytes | None = dataclasses.field(default=None, repr=False)
    new_pepper: StrOrBytes | None = dataclasses.field(default=None, repr=False)

    def add_new_salt(self, salt: StrOrBytes) -> Self:
        return dataclasses.replace(self, new_salt=salt)

    def add_new_random_salt(self, length: int | None = None) -> Self:
        """
        Salts the new hash with ``length`` random bytes.

        Without ``length`` the new hashing function draws a fresh salt itself,
        sized for its family (bcrypt always uses 16 bytes).

        :raises InvalidParametersError: if ``length`` is not positive.
        """
        new_salt = None if length is None else generate_salt(length)
        return dataclasses.replace(self, new_salt=new_salt)

    def add_new_pepper(self, pepper: StrOrBytes | None = None) -> Self:
        """Peppers the new hash with ``pepper``, or the configured pepper when omitted."""
        return dataclasses.replace(
            self, new_pepper=resolve_pepper(pepper, self.config.pepper)
        )

    def update(self, old: HashingFunction, new: HashingFunction) -> HashUpdateResult:
        return update_hash(
            self.secret,
            self.hash,
            old,
            new,
            pepper=self.pepper,
            new_salt=self.new_salt,
            new_pepper=self.new_pepper,
        )

    def with_detected(self, new: HashingFunction) -> HashUpdateResult:
        """Migrates from whatever family produced the stored hash to ``new``."""
        return self.update(registry.from_hash(self.hash), new)

    def with_pbkdf2(self, new: HashingFunction | None = None) -> HashUpdateResult:
        return self.update(PBKDF2Function.from_hash(self.hash), new or self.config.pbkdf2())

    def with_compressed_pbkdf2(
        self, new: HashingFunction | None = None
    ) -> HashUpdateResult:
        return self.update(
            CompressedPBKDF2Function.from_hash(self.hash),
            new or self.config.compressed_pbkdf2(),
        )

    def with_bcrypt(self, new: HashingFunction | None = None) -> HashUpdateResult:
        return self.update(BCryptFunction.from_hash(self.hash), new or self.config.bcrypt())

    def with_scrypt(self, new: HashingFunction | None = None) -> HashUpdateResult:
        return self.update(SCryptFunction.from_hash(self.hash), new or self.config.scrypt())

    def with_message_digest(
        self, new: HashingFunction | None = None
    ) -> HashUpdateResult:
        return self.update(
            MessageDigestFunction.from_hash(self.hash),
            new or self.config.message_digest(),
        )
