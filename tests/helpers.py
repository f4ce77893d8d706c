"""Shared test helpers: a recording mock handler and a test-only endpoint."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Union

import httpx
from pydantic import BaseModel

from matrix_client import JsonEndpoint, Metadata, Session, UserId

Reply = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]

SESSION = Session(
    access_token="T",
    user_id=UserId.parse("@alice:matrix.org"),
    device_id="D",
)


def ok(payload: Any, status: int = 200) -> httpx.Response:
    return httpx.Response(status, json=payload)


def matrix_error(status: int, errcode: str, error: str) -> httpx.Response:
    return httpx.Response(status, json={"errcode": errcode, "error": error})


class Recorder:
    """
    MockTransport handler. Every request is appended to ``requests``; replies
    are consumed from the queue in order (an Exception is raised instead).
    """

    def __init__(self, *replies: Reply) -> None:
        self.requests: List[httpx.Request] = []
        self.replies: List[Reply] = list(replies)

    def queue(self, *replies: Reply) -> "Recorder":
        self.replies.extend(replies)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(request)
        return reply

    @property
    def last(self) -> Optional[httpx.Request]:
        return self.requests[-1] if self.requests else None


class WhoAmIRequest(BaseModel):
    pass


class WhoAmIResponse(BaseModel):
    user_id: UserId


class WhoAmI(JsonEndpoint[WhoAmIRequest, WhoAmIResponse]):
    """An authenticated endpoint the client itself never calls."""

    METADATA = Metadata(
        description="Gets information about the owner of an access token.",
        method="GET",
        name="whoami",
        path="/_matrix/client/r0/account/whoami",
        requires_authentication=True,
    )
    Request = WhoAmIRequest
    Response = WhoAmIResponse


class PublicRoomsRequest(BaseModel):
    limit: Optional[int] = None
    server: Optional[str] = None


class PublicRoomsResponse(BaseModel):
    chunk: List[Any] = []


class PublicRooms(JsonEndpoint[PublicRoomsRequest, PublicRoomsResponse]):
    """An unauthenticated GET with query parameters."""

    METADATA = Metadata(
        description="Lists the public rooms on the server.",
        method="GET",
        name="get_public_rooms",
        path="/_matrix/client/r0/publicRooms",
        requires_authentication=False,
    )
    QUERY_FIELDS = ("limit", "server")
    Request = PublicRoomsRequest
    Response = PublicRoomsResponse
