import math
import secrets

from hashup.errors import InvalidParametersError

DEFAULT_SALT_SIZE = 16


def generate_salt(length: int = DEFAULT_SALT_SIZE) -> bytes:
    if length <= 0:
        msg = f"salt length must be positive, got {length}"
        raise InvalidParametersError(msg)
    return secrets.token_bytes(length)


def generate_salt_by_entropy(entropy_bits: int) -> bytes:
    return generate_salt(length=math.ceil(entropy_bits / 8))
