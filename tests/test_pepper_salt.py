import pytest

from hashup._pepper import compose, resolve_pepper
from hashup._salt import DEFAULT_SALT_SIZE, generate_salt, generate_salt_by_entropy
from hashup._utils.bytes import as_bytes
from hashup.errors import InvalidParametersError


@pytest.mark.parametrize(
    ("secret", "pepper", "expected"),
    [
        ("password", None, b"password"),
        ("password", "", b"password"),
        ("password", b"", b"password"),
        ("password", "pepper", b"pepperpassword"),
        (b"password", b"pepper", b"pepperpassword"),
        ("Ιω", "π", "πΙω".encode("utf8")),
        ("", "pepper", b"pepper"),
    ],
)
def test_compose(secret, pepper, expected: bytes) -> None:
    assert compose(secret, pepper) == expected


def test_compose_rejects_other_types() -> None:
    with pytest.raises(InvalidParametersError):
        compose(1234)  # type: ignore[arg-type]
    with pytest.raises(InvalidParametersError):
        as_bytes(None)  # type: ignore[arg-type]


def test_resolve_pepper() -> None:
    assert resolve_pepper("given", "configured") == "given"
    assert resolve_pepper("", "configured") == ""
    assert resolve_pepper(None, "configured") == "configured"
    with pytest.raises(InvalidParametersError):
        resolve_pepper(None, None)


@pytest.mark.parametrize("length", [1, DEFAULT_SALT_SIZE, 64])
def test_generate_salt(length: int) -> None:
    salt = generate_salt(length)
    assert isinstance(salt, bytes)
    assert len(salt) == length


def test_generate_salt_default() -> None:
    assert len(generate_salt()) == DEFAULT_SALT_SIZE
    assert generate_salt() != generate_salt()


@pytest.mark.parametrize("length", [0, -1])
def test_generate_salt_invalid_length(length: int) -> None:
    with pytest.raises(InvalidParametersError):
        generate_salt(length)


@pytest.mark.parametrize(("bits", "length"), [(128, 16), (129, 17), (1, 1)])
def test_generate_salt_by_entropy(bits: int, length: int) -> None:
    assert len(generate_salt_by_entropy(bits)) == length
