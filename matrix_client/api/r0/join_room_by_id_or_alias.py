"""[POST /_matrix/client/r0/join/{roomIdOrAlias}] Join a room using its ID or one of its aliases."""
from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, field_validator

from ...endpoint import JsonEndpoint, Metadata
from ...identifiers import RoomAliasId, RoomId, room_id_or_alias


class Request(BaseModel):
    room_id_or_alias: Union[RoomId, RoomAliasId]
    third_party_signed: Optional[Dict[str, Any]] = None

    @field_validator("room_id_or_alias", mode="before")
    @classmethod
    def _parse_room(cls, v: Any) -> Any:
        if isinstance(v, str):
            return room_id_or_alias(v)
        return v


class Response(BaseModel):
    room_id: RoomId


class JoinRoomByIdOrAlias(JsonEndpoint[Request, Response]):
    METADATA = Metadata(
        description="Join a room using its ID or one of its aliases.",
        method="POST",
        name="join_room_by_id_or_alias",
        path="/_matrix/client/r0/join/{room_id_or_alias}",
        rate_limited=True,
        requires_authentication=True,
    )
    Request = Request
    Response = Response


call = JoinRoomByIdOrAlias.call
