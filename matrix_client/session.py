# SPDX-License-Identifier: MIT
"""User session credentials returned by the login and registration flows."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .identifiers import UserId

__all__ = ["Session"]


class Session(BaseModel):
    """
    A user session: an access token and the account/device it was issued for.

    Immutable; equality and hashing use all three fields.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(repr=False)
    """The access token used for this session."""
    user_id: UserId
    """The user the access token was issued for."""
    device_id: str
    """The ID of the client device."""
