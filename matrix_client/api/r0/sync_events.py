"""[GET /_matrix/client/r0/sync] Get all new events from all rooms since the last sync."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ...endpoint import JsonEndpoint, Metadata


class SetPresence(str, Enum):
    """Presence the server should set for the user while syncing."""

    OFFLINE = "offline"


class FilterDefinition(BaseModel):
    """An inline filter. Only the top-level keys are typed."""

    model_config = ConfigDict(extra="allow")

    event_fields: Optional[List[str]] = None
    event_format: Optional[str] = None
    account_data: Optional[Dict[str, Any]] = None
    room: Optional[Dict[str, Any]] = None
    presence: Optional[Dict[str, Any]] = None


# Either the ID of a filter created on the server, or an inline definition.
Filter = Union[str, FilterDefinition]


class Request(BaseModel):
    filter: Optional[Filter] = None
    since: Optional[str] = None
    full_state: Optional[bool] = None
    set_presence: Optional[SetPresence] = None
    # milliseconds
    timeout: Optional[int] = None


class Rooms(BaseModel):
    model_config = ConfigDict(extra="allow")

    join: Dict[str, Any] = Field(default_factory=dict)
    invite: Dict[str, Any] = Field(default_factory=dict)
    leave: Dict[str, Any] = Field(default_factory=dict)


class Response(BaseModel):
    model_config = ConfigDict(extra="allow")

    next_batch: str
    rooms: Rooms = Field(default_factory=Rooms)
    presence: Dict[str, Any] = Field(default_factory=dict)
    account_data: Dict[str, Any] = Field(default_factory=dict)
    to_device: Dict[str, Any] = Field(default_factory=dict)
    device_lists: Dict[str, Any] = Field(default_factory=dict)


class SyncEvents(JsonEndpoint[Request, Response]):
    METADATA = Metadata(
        description="Get all new events from all rooms since the last sync or a given point of time.",
        method="GET",
        name="sync",
        path="/_matrix/client/r0/sync",
        rate_limited=False,
        requires_authentication=True,
    )
    QUERY_FIELDS = ("filter", "since", "full_state", "set_presence", "timeout")
    Request = Request
    Response = Response


call = SyncEvents.call
