"""
hashup.config -- default parameters for every hashing function family

The hashing functions never read configuration on their own, a
:class:`HashingConfig` hands out fully-formed instances instead::

    >>> from hashup.config import HashingConfig
    >>> config = HashingConfig.from_string('''
    ... [hashup]
    ... bcrypt.cost = 12
    ... pepper = s3cr3t
    ... ''')
    >>> config.bcrypt()
    BCryptFunction(cost=12, prefix='2b')
"""

from __future__ import annotations

import configparser
import dataclasses
import io
import logging
from typing import TYPE_CHECKING, Any, Callable

from hashup._salt import DEFAULT_SALT_SIZE
from hashup.errors import InvalidParametersError
from hashup.hashers.bcrypt import BCryptFunction
from hashup.hashers.digest import MessageDigestFunction
from hashup.hashers.pbkdf2 import CompressedPBKDF2Function, PBKDF2Function
from hashup.hashers.scrypt import SCryptFunction
from hashup.kinds import AlgorithmKind

if TYPE_CHECKING:
    from collections.abc import Mapping
    from os import PathLike

    from hashup.hashers.abc import HashingFunction

__all__ = ["HashingConfig", "DEFAULT_SECTION"]

log = logging.getLogger(__name__)

DEFAULT_SECTION = "hashup"

# option key -> (HashingConfig field, converter)
_OPTIONS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "pbkdf2.algorithm": ("pbkdf2_algorithm", str),
    "pbkdf2.iterations": ("pbkdf2_iterations", int),
    "pbkdf2.length": ("pbkdf2_length", int),
    "bcrypt.prefix": ("bcrypt_prefix", str),
    "bcrypt.cost": ("bcrypt_cost", int),
    "scrypt.work_factor": ("scrypt_work_factor", int),
    "scrypt.resources": ("scrypt_resources", int),
    "scrypt.parallelization": ("scrypt_parallelization", int),
    "scrypt.derived_key_length": ("scrypt_derived_key_length", int),
    "digest.algorithm": ("message_digest_algorithm", str),
    "salt.length": ("salt_length", int),
    "pepper": ("pepper", str),
}


@dataclasses.dataclass(frozen=True)
class HashingConfig:
    pbkdf2_algorithm: str = "sha512"
    pbkdf2_iterations: int = 310_000
    pbkdf2_length: int = 512
    bcrypt_prefix: str = "2b"
    bcrypt_cost: int = 10
    scrypt_work_factor: int = 65536
    scrypt_resources: int = 8
    scrypt_parallelization: int = 1
    scrypt_derived_key_length: int = 64
    message_digest_algorithm: str = "sha512"
    salt_length: int = DEFAULT_SALT_SIZE
    pepper: str | None = dataclasses.field(default=None, repr=False)

    def __post_init__(self) -> None:
        # compressed pbkdf2 is left out, it only accepts a subset of pbkdf2 digests
        for factory in (self.pbkdf2, self.bcrypt, self.scrypt, self.message_digest):
            factory()

    def pbkdf2(self) -> PBKDF2Function:
        return PBKDF2Function(
            algorithm=self.pbkdf2_algorithm,
            iterations=self.pbkdf2_iterations,
            key_length=self.pbkdf2_length,
            salt_length=self.salt_length,
        )

    def compressed_pbkdf2(self) -> CompressedPBKDF2Function:
        return CompressedPBKDF2Function(
            algorithm=self.pbkdf2_algorithm,
            iterations=self.pbkdf2_iterations,
            key_length=self.pbkdf2_length,
            salt_length=self.salt_length,
        )

    def bcrypt(self) -> BCryptFunction:
        return BCryptFunction(cost=self.bcrypt_cost, prefix=self.bcrypt_prefix)  # type: ignore[arg-type]

    def scrypt(self) -> SCryptFunction:
        return SCryptFunction(
            work_factor=self.scrypt_work_factor,
            resources=self.scrypt_resources,
            parallelization=self.scrypt_parallelization,
            derived_key_length=self.scrypt_derived_key_length,
            salt_length=self.salt_length,
        )

    def message_digest(self) -> MessageDigestFunction:
        return MessageDigestFunction(algorithm=self.message_digest_algorithm)

    def for_kind(self, kind: AlgorithmKind) -> HashingFunction:
        factories: dict[AlgorithmKind, Callable[[], HashingFunction]] = {
            AlgorithmKind.PBKDF2: self.pbkdf2,
            AlgorithmKind.COMPRESSED_PBKDF2: self.compressed_pbkdf2,
            AlgorithmKind.BCRYPT: self.bcrypt,
            AlgorithmKind.SCRYPT: self.scrypt,
            AlgorithmKind.MESSAGE_DIGEST: self.message_digest,
        }
        return factories[AlgorithmKind(kind)]()

    #===================================================================
    # secondary constructors
    #===================================================================
    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> HashingConfig:
        """create new HashingConfig from ``{"bcrypt.cost": 12, ...}`` style options.

        :raises InvalidParametersError: on unknown keys or values of the wrong type.
        """
        kwds = {}
        for key, value in options.items():
            try:
                field, converter = _OPTIONS[key]
            except KeyError:
                msg = f"unknown hashing option: {key!r}"
                raise InvalidParametersError(msg) from None
            try:
                kwds[field] = converter(value)
            except (TypeError, ValueError):
                msg = f"invalid value for hashing option {key!r}: {value!r}"
                raise InvalidParametersError(msg) from None
        return cls(**kwds)

    @classmethod
    def from_string(cls, source: str, section: str = DEFAULT_SECTION) -> HashingConfig:
        """create new HashingConfig from an INI-formatted string.

        :param section:
            option name of section to read from, defaults to ``"hashup"``.
        """
        return cls.from_mapping(_parse_ini_stream(io.StringIO(source), section, "<string>"))

    @classmethod
    def from_path(
        cls,
        path: str | PathLike[str],
        section: str = DEFAULT_SECTION,
        encoding: str = "utf-8",
    ) -> HashingConfig:
        """create new HashingConfig from an INI-formatted file.

        this functions exactly the same as :meth:`from_string`,
        except that it loads from a local file.
        """
        with open(path, encoding=encoding) as stream:
            options = _parse_ini_stream(stream, section, str(path))
        log.debug("loaded hashing config from %r", str(path))
        return cls.from_mapping(options)


def _parse_ini_stream(stream: io.TextIOBase, section: str, filename: str) -> dict[str, str]:
    """helper read INI from stream, extract section as dict"""
    # interpolation would mangle peppers containing '%'
    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read_file(stream, filename)
        return dict(parser.items(section))
    except configparser.Error as err:
        msg = f"can't read hashing config from {filename}: {err}"
        raise InvalidParametersError(msg) from err
