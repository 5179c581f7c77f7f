from __future__ import annotations

import dataclasses
import re

from hashup._utils.b64 import b64s_decode, b64s_encode
from hashup.errors import MalformedHashError

__all__ = ["MessageDigestHashInfo", "decode_message_digest_hash"]

ALGORITHM_REGEX = re.compile(r"[a-z0-9_-]+")
MESSAGE_DIGEST_REGEX = re.compile(
    rf"^\$digest\$(?P<algorithm>{ALGORITHM_REGEX.pattern})\$(?P<hash>[A-Za-z0-9+/]+)$"
)


@dataclasses.dataclass
class MessageDigestHashInfo:
    """``$digest$<hashlib name>$<hash>``, no salt field"""

    algorithm: str
    hash: bytes

    def as_str(self) -> str:
        return f"$digest${self.algorithm}${b64s_encode(self.hash)}"


def decode_message_digest_hash(hash: str) -> MessageDigestHashInfo:
    match = MESSAGE_DIGEST_REGEX.fullmatch(hash)
    if match is None:
        raise MalformedHashError("not a message digest hash")

    return MessageDigestHashInfo(
        algorithm=match.group("algorithm"),
        hash=b64s_decode(match.group("hash")),
    )
