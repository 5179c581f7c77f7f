import pytest

from hashup.errors import InvalidParametersError
from hashup.hashers.scrypt import SCryptFunction
from hashup.inspect.scrypt import ScryptPHC
from tests.utils_ import SCRYPT

# RFC 7914, section 12
RFC_HASH = bytes.fromhex(
    "fdbabe1c9d3472007856e7190d01e9fe7c6ad7cbc8237830e77376634b373162"
    "2eaf30d92e22a3886ff109279d9830dac727afb94a83ee6d8360cbdfa2cc0640"
)


def test_rfc7914() -> None:
    function = SCryptFunction(
        work_factor=1024, resources=8, parallelization=16, derived_key_length=64
    )
    result = function.hash("password", salt="NaCl")
    assert result.hash == RFC_HASH
    assert result.salt == b"NaCl"
    assert result.result == ScryptPHC(
        work_factor=1024,
        resources=8,
        parallelization=16,
        derived_key_length=64,
        salt=b"NaCl",
        hash=RFC_HASH,
    ).as_str()
    assert result.result.startswith("$scrypt$n=1024,r=8,p=16,l=64$TmFDbA$")


def test_known_hash() -> None:
    hash = ScryptPHC(
        work_factor=1024,
        resources=8,
        parallelization=16,
        derived_key_length=64,
        salt=b"NaCl",
        hash=RFC_HASH,
    ).as_str()
    assert SCRYPT.check("password", hash)
    assert not SCRYPT.check("Password", hash)
    assert SCryptFunction.from_hash(hash) == SCryptFunction(
        work_factor=1024, resources=8, parallelization=16, derived_key_length=64
    )
    assert SCRYPT.needs_update(hash)


def test_generated_salt() -> None:
    result = SCRYPT.hash("password")
    assert result.salt is not None
    assert len(result.salt) == 16
    assert SCRYPT.check("password", result.result)


def test_check_uses_embedded_parameters() -> None:
    result = SCRYPT.hash("password")
    stronger = SCryptFunction(work_factor=2048)
    assert stronger.check("password", result.result)
    assert not stronger.check("Password", result.result)
    assert stronger.needs_update(result.result)
    assert not SCRYPT.needs_update(result.result)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"work_factor": 1000},
        {"work_factor": 1},
        {"work_factor": 0},
        {"resources": 0},
        {"parallelization": 0},
        {"derived_key_length": 0},
        {"salt_length": 0},
    ],
)
def test_invalid_parameters(kwargs: dict) -> None:
    with pytest.raises(InvalidParametersError):
        SCryptFunction(**kwargs)


def test_parameters_rejected_by_scrypt() -> None:
    # r * p must stay below 2**30
    function = SCryptFunction(work_factor=2, resources=2**16, parallelization=2**16)
    with pytest.raises(InvalidParametersError):
        function.hash("password")


def test_empty_salt() -> None:
    with pytest.raises(InvalidParametersError):
        SCRYPT.hash("password", salt=b"")
