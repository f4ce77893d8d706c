"""[PUT /_matrix/client/r0/rooms/{roomId}/send/{eventType}/{txnId}] Send a message event to a room."""
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel

from ...endpoint import JsonEndpoint, Metadata
from ...identifiers import RoomId

ROOM_MESSAGE = "m.room.message"


def text_content(body: str) -> Dict[str, Any]:
    """Content of a plain ``m.text`` room message."""
    return {"msgtype": "m.text", "body": body}


class Request(BaseModel):
    room_id: RoomId
    event_type: str = ROOM_MESSAGE
    # unique per access token; retries with the same id are idempotent
    txn_id: str
    data: Dict[str, Any]


class Response(BaseModel):
    event_id: str


class SendMessageEvent(JsonEndpoint[Request, Response]):
    METADATA = Metadata(
        description="Send a message event to a room.",
        method="PUT",
        name="send_message_event",
        path="/_matrix/client/r0/rooms/{room_id}/send/{event_type}/{txn_id}",
        rate_limited=False,
        requires_authentication=True,
    )
    BODY_FIELD = "data"
    Request = Request
    Response = Response


call = SendMessageEvent.call
