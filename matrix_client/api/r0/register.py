"""[POST /_matrix/client/r0/register] Register an account on this homeserver."""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ...endpoint import JsonEndpoint, Metadata
from ...identifiers import UserId


class RegistrationKind(str, Enum):
    GUEST = "guest"
    USER = "user"


class AuthenticationData(BaseModel):
    """User-interactive auth stage data; extra keys are passed through."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    kind: str = Field(alias="type")
    session: Optional[str] = None


class Request(BaseModel):
    auth: Optional[AuthenticationData] = None
    bind_email: Optional[bool] = None
    device_id: Optional[str] = None
    initial_device_display_name: Optional[str] = None
    # sent as a query parameter
    kind: Optional[RegistrationKind] = None
    password: Optional[str] = Field(None, repr=False)
    username: Optional[str] = None


class Response(BaseModel):
    access_token: str = Field(repr=False)
    home_server: Optional[str] = None
    user_id: UserId
    device_id: str


class Register(JsonEndpoint[Request, Response]):
    METADATA = Metadata(
        description="Register an account on this homeserver.",
        method="POST",
        name="register",
        path="/_matrix/client/r0/register",
        rate_limited=True,
        requires_authentication=False,
    )
    QUERY_FIELDS = ("kind",)
    Request = Request
    Response = Response


call = Register.call
