from __future__ import annotations

import dataclasses
from typing import Annotated, ClassVar, Optional

from hashup._utils.validation import is_power_of_two
from hashup.errors import MalformedHashError
from hashup.inspect.phc import PHC, Param, inspect_phc

__all__ = ["ScryptPHC", "decode_scrypt_hash"]


@dataclasses.dataclass
class ScryptPHC(PHC):
    """``$scrypt$n=<N>,r=<r>,p=<p>,l=<key length>$<salt>$<hash>``"""

    id: ClassVar[str] = "scrypt"
    version: ClassVar[Optional[int]] = None

    work_factor: Annotated[int, Param("n")]
    resources: Annotated[int, Param("r")]
    parallelization: Annotated[int, Param("p")]
    derived_key_length: Annotated[int, Param("l")]


def decode_scrypt_hash(hash: str) -> ScryptPHC:
    info = inspect_phc(hash, ScryptPHC)
    if info is None:
        raise MalformedHashError("not an scrypt hash")

    if not is_power_of_two(info.work_factor):
        msg = f"scrypt work factor must be a power of two, got {info.work_factor}"
        raise MalformedHashError(msg)
    if info.resources < 1 or info.parallelization < 1:
        raise MalformedHashError("scrypt block size and parallelization must be positive")
    if not info.salt:
        raise MalformedHashError("salt must not be empty")
    if info.derived_key_length != len(info.hash):
        msg = (
            f"key length {info.derived_key_length} does not match "
            f"a {len(info.hash)} byte hash"
        )
        raise MalformedHashError(msg)
    return info
