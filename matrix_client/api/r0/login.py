"""[POST /_matrix/client/r0/login] Log in with a password."""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ...endpoint import JsonEndpoint, Metadata
from ...identifiers import UserId


class LoginType(str, Enum):
    PASSWORD = "m.login.password"


class Medium(str, Enum):
    EMAIL = "email"


class Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    login_type: LoginType = Field(LoginType.PASSWORD, alias="type")
    user: str
    password: str = Field(repr=False)
    device_id: Optional[str] = None
    medium: Optional[Medium] = None
    address: Optional[str] = None


class Response(BaseModel):
    access_token: str = Field(repr=False)
    home_server: Optional[str] = None
    user_id: UserId
    device_id: str


class Login(JsonEndpoint[Request, Response]):
    METADATA = Metadata(
        description="Login to the homeserver.",
        method="POST",
        name="login",
        path="/_matrix/client/r0/login",
        rate_limited=True,
        requires_authentication=False,
    )
    Request = Request
    Response = Response


call = Login.call
