from __future__ import annotations

import dataclasses
import functools
import re
import typing
from collections.abc import Sequence
from typing import TYPE_CHECKING, ClassVar, Optional, TypeVar

from hashup._utils.b64 import b64s_decode, b64s_encode
from hashup._utils.validation import parse_int
from hashup.errors import MalformedHashError

if TYPE_CHECKING:
    from collections.abc import Mapping

PHC_REGEX = re.compile(
    r"\$(?P<id>[a-z0-9-]{1,32})"
    r"(\$v=(?P<version>[0-9]+))?"
    r"\$(?P<params>[a-z0-9-]{1,32}=[a-zA-Z0-9/+.-]+(,([a-z0-9-]{1,32}=[a-zA-Z0-9/+.-]+))*)"
    r"\$(?P<salt>[a-zA-Z0-9/+.-]+)"
    r"\$(?P<hash>[a-zA-Z0-9/+.-]+)"
)


@dataclasses.dataclass
class Param:
    name: str


@dataclasses.dataclass
class ParsedParameter:
    param: Param
    type: type


@dataclasses.dataclass
class PHC:
    id: ClassVar[str]
    version: ClassVar[Optional[int]]

    salt: bytes
    hash: bytes

    def as_str(self) -> str:
        parts: list[str] = [f"${self.id}"]
        if self.version is not None:
            parts.append(f"v={self.version}")
        params = ",".join(
            f"{value.param.name}={getattr(self, key)}"
            for key, value in _parse_phc_def(self.__class__).parameters.items()
        )
        parts.extend((params, b64s_encode(self.salt), b64s_encode(self.hash)))
        return "$".join(parts)


TPHC = TypeVar("TPHC", bound=PHC)


@dataclasses.dataclass
class _PHCDefinitionInfo:
    parameters: Mapping[str, ParsedParameter]


def _parse_phc_def(definition: type[TPHC]) -> _PHCDefinitionInfo:
    result = {}
    for key, value in typing.get_type_hints(definition, include_extras=True).items():
        args = typing.get_args(value)
        for arg in args:
            if isinstance(arg, Param):
                result[key] = ParsedParameter(param=arg, type=args[0])
    return _PHCDefinitionInfo(parameters=result)


if not TYPE_CHECKING:
    _parse_phc_def = functools.cache(_parse_phc_def)


def _choose_definition(
    definitions: Sequence[type[TPHC]] | type[TPHC], id: str | None, version: int | None
) -> type[TPHC] | None:
    if not isinstance(definitions, Sequence):
        definitions = (definitions,)

    for definition in definitions:
        if definition.id == id and definition.version == version:
            return definition
    return None


def inspect_phc(
    hash: str,
    definition: Sequence[type[TPHC]] | type[TPHC],
) -> TPHC | None:
    """
    Parses PHC-style formatted string

    https://github.com/P-H-C/phc-string-format/blob/master/phc-sf-spec.md

    Returns ``None`` if the string is not a PHC string for one of the given
    definitions, raises :exc:`MalformedHashError` if it is but its
    parameters, salt or hash can't be decoded.
    """

    match = PHC_REGEX.fullmatch(hash)
    if match is None:
        return None

    groups = match.groupdict()
    id_ = groups["id"]
    version = (
        parse_int(groups["version"], "version") if groups["version"] is not None else None
    )

    chosen_definition = _choose_definition(definition, id=id_, version=version)
    if chosen_definition is None:
        return None

    params = dict(p.split("=", 1) for p in groups["params"].split(","))
    definition_info = _parse_phc_def(chosen_definition)
    expected = {param.param.name for param in definition_info.parameters.values()}
    if set(params) != expected:
        msg = f"{id_} hash parameters must be {sorted(expected)}, got {sorted(params)}"
        raise MalformedHashError(msg)

    values = {}
    for name, param in definition_info.parameters.items():
        try:
            values[name] = param.type(params[param.param.name])
        except ValueError:
            msg = f"invalid value for {id_} parameter {param.param.name!r}"
            raise MalformedHashError(msg) from None

    return chosen_definition(
        salt=b64s_decode(groups["salt"]),
        hash=b64s_decode(groups["hash"]),
        **values,
    )
