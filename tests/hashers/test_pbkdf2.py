import pytest

from hashup.errors import (
    InvalidParametersError,
    MalformedHashError,
    UnsupportedAlgorithmError,
)
from hashup.hashers.pbkdf2 import CompressedPBKDF2Function, PBKDF2Function
from tests.utils_ import COMPRESSED_PBKDF2, PBKDF2

KNOWN_HASHES = [
    (
        "password",
        "$pbkdf2-sha256$1212$256$4vjV83LKPjQzk31VI4E0Vw$hsYF68OiOUPdDZ1Fg.fJPeq1h/gXXY7acBp9/6c.tmQ",
    ),
    (
        "password",
        "$pbkdf2-sha512$1212$512$RHY0Fr3IDMSVO/RSZyb5ow$eNLfBK.eVozomMr.1gYa17k9B7KIK25NOEshvhrSX.esqY3s.FvWZViXz4KoLlQI.BzY/YTNJOiKc5gBYFYGww",
    ),
]


@pytest.mark.parametrize(("secret", "hash"), KNOWN_HASHES)
def test_known_hashes(secret: str, hash: str) -> None:
    assert PBKDF2Function().check(secret, hash)
    assert not PBKDF2Function().check(secret + "x", hash)


@pytest.mark.parametrize(
    ("hash", "expected"),
    [
        (KNOWN_HASHES[0][1], PBKDF2Function(algorithm="sha256", iterations=1212, key_length=256)),
        (KNOWN_HASHES[1][1], PBKDF2Function(algorithm="sha512", iterations=1212, key_length=512)),
    ],
)
def test_from_known_hashes(hash: str, expected: PBKDF2Function) -> None:
    assert PBKDF2Function.from_hash(hash) == expected
    assert not expected.needs_update(hash)


@pytest.mark.parametrize(
    ("iterations", "expected"),
    [
        # RFC 6070
        (1, "0c60c80f961f0e71f3a9b524af6012062fe037a6"),
        (2, "ea6c014dc72d6f8ccd1ed92ace1d41f0d8de8957"),
    ],
)
def test_rfc6070(iterations: int, expected: str) -> None:
    function = PBKDF2Function(algorithm="sha1", iterations=iterations, key_length=160)
    result = function.hash("password", salt="salt")
    assert result.hash.hex() == expected
    assert result.salt == b"salt"
    assert result.result.startswith(f"$pbkdf2-sha1${iterations}$160$")


def test_pepper_is_prefixed() -> None:
    peppered = PBKDF2.hash("password", salt="salt", pepper="pepper")
    assert peppered.result == PBKDF2.hash("pepperpassword", salt="salt").result
    assert peppered.check("password", pepper="pepper")
    assert not peppered.check("password")
    assert not peppered.check("password", pepper="reppep")
    # not the reverse concatenation
    assert peppered.result != PBKDF2.hash("passwordpepper", salt="salt").result
    assert not peppered.check("pepper", pepper="password")


def test_generated_salt_length() -> None:
    function = PBKDF2Function(
        algorithm="sha256", iterations=1000, key_length=256, salt_length=24
    )
    result = function.hash("password")
    assert result.salt is not None
    assert len(result.salt) == 24
    # salt length isn't recorded in a way that changes the function's identity
    assert PBKDF2Function.from_hash(result.result) == function


def test_check_uses_embedded_parameters() -> None:
    result = PBKDF2Function(algorithm="sha1", iterations=500, key_length=160).hash(
        "password"
    )
    assert PBKDF2.check("password", result.result)
    assert PBKDF2.needs_update(result.result)


def test_compressed_format() -> None:
    result = COMPRESSED_PBKDF2.hash("password", salt="salt")
    # 1000 << 32 | sha256 (3) << 16 | 256
    assert result.result.startswith("$4294967492864$c2FsdA$")
    assert result.hash == PBKDF2.hash("password", salt="salt").hash
    assert COMPRESSED_PBKDF2.check("password", result.result)
    assert CompressedPBKDF2Function.from_hash(result.result) == COMPRESSED_PBKDF2


def test_compressed_and_plain_are_distinct() -> None:
    plain = PBKDF2.hash("password", salt="salt").result
    compressed = COMPRESSED_PBKDF2.hash("password", salt="salt").result
    with pytest.raises(MalformedHashError):
        COMPRESSED_PBKDF2.check("password", plain)
    with pytest.raises(MalformedHashError):
        PBKDF2.check("password", compressed)


def test_unknown_hmac_in_hash() -> None:
    hash = "$pbkdf2-nosuchdigest$1212$256$4vjV83LKPjQzk31VI4E0Vw$hsYF68OiOUPdDZ1Fg.fJPeq1h/gXXY7acBp9/6c.tmQ"
    with pytest.raises(UnsupportedAlgorithmError):
        PBKDF2.check("password", hash)
    with pytest.raises(UnsupportedAlgorithmError):
        PBKDF2Function.from_hash(hash)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"iterations": 0},
        {"iterations": -1},
        {"key_length": 0},
        {"key_length": 260},
        {"salt_length": 0},
        {"algorithm": "nosuchdigest"},
    ],
)
def test_invalid_parameters(kwargs: dict) -> None:
    with pytest.raises(InvalidParametersError):
        PBKDF2Function(**kwargs)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"algorithm": "md5"},
        {"algorithm": "sha3_256"},
        {"iterations": 2**32},
        {"key_length": 2**16 * 8},
    ],
)
def test_compressed_invalid_parameters(kwargs: dict) -> None:
    with pytest.raises(InvalidParametersError):
        CompressedPBKDF2Function(**kwargs)


def test_empty_salt() -> None:
    with pytest.raises(InvalidParametersError):
        PBKDF2.hash("password", salt="")


@pytest.mark.parametrize("cls", [PBKDF2Function, CompressedPBKDF2Function])
def test_algorithm_alias_is_canonicalized(cls: type[PBKDF2Function]) -> None:
    function = cls(algorithm="SHA256", iterations=1000, key_length=256)
    assert function.algorithm == "sha256"
    assert function == cls(algorithm="sha256", iterations=1000, key_length=256)

    result = function.hash("password")
    assert function.check("password", result.result)
    assert cls.from_hash(result.result) == function
    assert not function.needs_update(result.result)


def test_iterations_too_long() -> None:
    hash = "$pbkdf2-sha256$" + "9" * 5000 + "$256$c2FsdA$" + "A" * 43
    with pytest.raises(MalformedHashError):
        PBKDF2.check("password", hash)
    assert PBKDF2.needs_update(hash)
    assert COMPRESSED_PBKDF2.needs_update("$" + "9" * 5000 + "$c2FsdA$" + "A" * 43)
