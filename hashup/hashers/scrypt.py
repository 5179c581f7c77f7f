from __future__ import annotations

import dataclasses
import hashlib
import hmac
import logging
from typing import TYPE_CHECKING, ClassVar

from typing_extensions import Self

from hashup._pepper import compose
from hashup._salt import DEFAULT_SALT_SIZE, generate_salt
from hashup._utils.bytes import as_bytes, as_str
from hashup._utils.validation import is_power_of_two, validate_range
from hashup.errors import InvalidParametersError, MalformedHashError
from hashup.hashers.abc import HashingFunction
from hashup.inspect.scrypt import ScryptPHC, decode_scrypt_hash
from hashup.kinds import AlgorithmKind
from hashup.results import HashResult

if TYPE_CHECKING:
    from hashup._utils.bytes import StrOrBytes

__all__ = ["SCryptFunction"]

log = logging.getLogger(__name__)


def _scrypt(
    secret: bytes, salt: bytes, n: int, r: int, p: int, dklen: int
) -> bytes:
    # openssl refuses anything above 32MiB unless maxmem says otherwise,
    # hashlib caps maxmem at INT_MAX
    maxmem = min(128 * r * (n + p + 2) + 1024 * 1024, 2**31 - 1)
    try:
        return hashlib.scrypt(
            secret, salt=salt, n=n, r=r, p=p, maxmem=maxmem, dklen=dklen
        )
    except (ValueError, MemoryError) as err:
        log.debug("scrypt rejected parameters n=%d r=%d p=%d: %s", n, r, p, err)
        msg = f"scrypt can't run with n={n}, r={r}, p={p}"
        raise InvalidParametersError(msg) from err


@dataclasses.dataclass(frozen=True)
class SCryptFunction(HashingFunction):
    """
    :param work_factor: CPU/memory cost ``N``, a power of two.
    :param resources: block size ``r``.
    :param parallelization: parallelization ``p``.
    :param derived_key_length: length of the produced hash, in bytes.
    :param salt_length: size of generated salts in bytes, not part of equality.

    .. warning::

        Memory use grows with ``128 * N * r`` bytes.
    """

    kind: ClassVar[AlgorithmKind] = AlgorithmKind.SCRYPT

    work_factor: int = 65536
    resources: int = 8
    parallelization: int = 1
    derived_key_length: int = 64
    salt_length: int = dataclasses.field(default=DEFAULT_SALT_SIZE, compare=False)

    def __post_init__(self) -> None:
        if not is_power_of_two(self.work_factor):
            msg = f"scrypt work factor must be a power of two, got {self.work_factor}"
            raise InvalidParametersError(msg)
        validate_range("scrypt resources", self.resources, min=1)
        validate_range("scrypt parallelization", self.parallelization, min=1)
        validate_range("derived key length", self.derived_key_length, min=1)
        validate_range("salt length", self.salt_length, min=1)

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

        hash = _scrypt(
            compose(secret, pepper),
            salt=salt,
            n=self.work_factor,
            r=self.resources,
            p=self.parallelization,
            dklen=self.derived_key_length,
        )
        info = ScryptPHC(
            work_factor=self.work_factor,
            resources=self.resources,
            parallelization=self.parallelization,
            derived_key_length=self.derived_key_length,
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
        info = decode_scrypt_hash(as_str(hash))
        candidate = _scrypt(
            compose(secret, pepper),
            salt=info.salt,
            n=info.work_factor,
            r=info.resources,
            p=info.parallelization,
            dklen=info.derived_key_length,
        )
        return hmac.compare_digest(candidate, info.hash)

    @classmethod
    def from_hash(cls, hash: StrOrBytes) -> Self:
        info = decode_scrypt_hash(as_str(hash))
        try:
            return cls(
                work_factor=info.work_factor,
                resources=info.resources,
                parallelization=info.parallelization,
                derived_key_length=info.derived_key_length,
                salt_length=len(info.salt),
            )
        except InvalidParametersError as err:
            raise MalformedHashError(str(err)) from err
