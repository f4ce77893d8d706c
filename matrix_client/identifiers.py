# SPDX-License-Identifier: MIT
"""
matrix_client.identifiers

Matrix identifiers as immutable pydantic values.

Every identifier has the shape ``<sigil><opaque>:<server_name>`` where the
server name is a hostname optionally followed by ``:port``. Models accept the
canonical string form on validation and dump back to it, so they can be used
directly as fields of request/response models.

    >>> uid = UserId.parse("@alice:matrix.org")
    >>> uid.localpart, uid.hostname, uid.port
    ('alice', 'matrix.org', None)
"""
from __future__ import annotations

from typing import Any, ClassVar, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator

__all__ = [
    "UserId",
    "RoomId",
    "RoomAliasId",
    "room_id_or_alias",
]

MAX_BYTES = 255


def _split_server_name(server_name: str) -> Tuple[str, Optional[int]]:
    """Split ``host[:port]`` (IPv6 literals in brackets) into its parts."""
    if server_name.startswith("["):
        end = server_name.find("]")
        if end == -1:
            raise ValueError(f"unterminated IPv6 literal in {server_name!r}")
        host, rest = server_name[: end + 1], server_name[end + 1 :]
        if not rest:
            return host, None
        if not rest.startswith(":"):
            raise ValueError(f"invalid server name {server_name!r}")
        port_str = rest[1:]
    else:
        host, sep, port_str = server_name.rpartition(":")
        if not sep:
            return server_name, None

    if not host:
        raise ValueError(f"missing host in server name {server_name!r}")
    if not port_str.isdigit() or not (0 < int(port_str) < 65536):
        raise ValueError(f"invalid port in server name {server_name!r}")
    return host, int(port_str)


def _parse(value: str, sigil: str) -> Tuple[str, str]:
    if len(value.encode("utf-8")) > MAX_BYTES:
        raise ValueError(f"identifier exceeds {MAX_BYTES} bytes")
    if not value.startswith(sigil):
        raise ValueError(f"identifier {value!r} must start with {sigil!r}")
    opaque, sep, server_name = value[1:].partition(":")
    if not sep:
        raise ValueError(f"identifier {value!r} is missing a server name")
    if not opaque:
        raise ValueError(f"identifier {value!r} has an empty local part")
    if not server_name:
        raise ValueError(f"identifier {value!r} has an empty server name")
    _split_server_name(server_name)
    return opaque, server_name


class _Identifier(BaseModel):
    model_config = ConfigDict(frozen=True)

    SIGIL: ClassVar[str] = ""
    OPAQUE_FIELD: ClassVar[str] = "opaque"

    server_name: str

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            opaque, server_name = _parse(data, cls.SIGIL)
            return {cls.OPAQUE_FIELD: opaque, "server_name": server_name}
        return data

    @model_serializer
    def _to_string(self) -> str:
        return str(self)

    @classmethod
    def parse(cls, value: str):
        return cls.model_validate(value)

    @property
    def hostname(self) -> str:
        return _split_server_name(self.server_name)[0]

    @property
    def port(self) -> Optional[int]:
        return _split_server_name(self.server_name)[1]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __str__(self) -> str:
        return f"{self.SIGIL}{getattr(self, self.OPAQUE_FIELD)}:{self.server_name}"


class UserId(_Identifier):
    """A user identifier, e.g. ``@alice:matrix.org``."""

    SIGIL: ClassVar[str] = "@"
    OPAQUE_FIELD: ClassVar[str] = "localpart"

    localpart: str


class RoomId(_Identifier):
    """A room identifier, e.g. ``!OGEhHVWSdvArJzumhm:matrix.org``."""

    SIGIL: ClassVar[str] = "!"

    opaque: str


class RoomAliasId(_Identifier):
    """A room alias, e.g. ``#ruma:matrix.org``."""

    SIGIL: ClassVar[str] = "#"
    OPAQUE_FIELD: ClassVar[str] = "alias"

    alias: str


def room_id_or_alias(value: Union[str, RoomId, RoomAliasId]) -> Union[RoomId, RoomAliasId]:
    """Parse a string that is either a room id or a room alias."""
    if isinstance(value, (RoomId, RoomAliasId)):
        return value
    if value.startswith(RoomAliasId.SIGIL):
        return RoomAliasId.parse(value)
    if value.startswith(RoomId.SIGIL):
        return RoomId.parse(value)
    raise ValueError(f"{value!r} is neither a room id nor a room alias")

