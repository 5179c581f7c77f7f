__all__ = [
    "HashupError",
    "InvalidParametersError",
    "MalformedHashError",
    "UnsupportedAlgorithmError",
    "Panic",
]


class HashupError(Exception):
    """Base class for all errors raised by hashup."""


class InvalidParametersError(HashupError, ValueError):
    """Algorithm parameter (cost, work factor, salt length, ...) is out of its valid domain."""


class MalformedHashError(HashupError, ValueError):
    """Hash does not parse under the structural rules of the claimed algorithm."""


class UnsupportedAlgorithmError(HashupError, ValueError):
    """Hash claims an algorithm family (or digest) that is not recognized."""


class Panic(HashupError):
    """Should never be raised, signals a broken internal invariant."""
