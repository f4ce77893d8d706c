# -*- coding: utf-8 -*-
"""
matrix_client.__init__

Public surface of the Matrix client-server API runtime.

Exports:
    - Client       : async client owning the homeserver URL, transport and session.
    - Session      : access token + user id + device id.
    - SyncStream   : async iterator over /sync threading the ``since`` cursor.
    - Endpoint, JsonEndpoint, Metadata : the endpoint descriptor contract.
    - MatrixError and its subclasses   : unified error taxonomy.
    - UserId, RoomId, RoomAliasId      : Matrix identifiers.
"""

from .client import Client
from .endpoint import Endpoint, JsonEndpoint, Metadata
from .errors import (
    AuthenticationRequired,
    EndpointError,
    MatrixError,
    ResponseDeserializationError,
    SerializationError,
    TlsInitError,
    TransportError,
    UriParseError,
    UrlParseError,
)
from .identifiers import RoomAliasId, RoomId, UserId
from .session import Session
from .sync import SyncStream

__version__ = "0.1.0"

__all__ = [
    "AuthenticationRequired",
    "Client",
    "Endpoint",
    "EndpointError",
    "JsonEndpoint",
    "MatrixError",
    "Metadata",
    "ResponseDeserializationError",
    "RoomAliasId",
    "RoomId",
    "SerializationError",
    "Session",
    "SyncStream",
    "TlsInitError",
    "TransportError",
    "UriParseError",
    "UrlParseError",
    "UserId",
]
