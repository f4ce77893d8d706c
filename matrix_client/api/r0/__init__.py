"""
Endpoints of the r0 client-server API used by this client.

Each module exposes ``Request``, ``Response``, the endpoint class and a
module-level ``call(client, request)`` shortcut.
"""
from . import (
    join_room_by_id_or_alias,
    login,
    register,
    send_message_event,
    sync_events,
)

__all__ = [
    "join_room_by_id_or_alias",
    "login",
    "register",
    "send_message_event",
    "sync_events",
]
