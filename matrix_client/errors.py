# SPDX-License-Identifier: MIT
"""
matrix_client.errors

Unified failure type for every stage of a client-server API call.

All errors derive from :class:`MatrixError` so callers can catch a single
type. Each subclass keeps the underlying cause on ``__cause__`` (raised with
``raise ... from exc``) for diagnostics.

    MatrixError
    ├── AuthenticationRequired   endpoint needs a session, none present
    ├── UrlParseError            homeserver or rebased URL malformed
    ├── UriParseError            final URL not usable as a transport URI
    ├── SerializationError       request could not be encoded
    ├── TransportError           DNS / connect / I/O / TLS / protocol failure
    ├── EndpointError            response could not be materialised
    │   └── ResponseDeserializationError
    └── TlsInitError             TLS context could not be built
"""
from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "MatrixError",
    "AuthenticationRequired",
    "UrlParseError",
    "UriParseError",
    "SerializationError",
    "TransportError",
    "EndpointError",
    "ResponseDeserializationError",
    "TlsInitError",
]


class MatrixError(RuntimeError):
    """
    Base error raised by this client.

    Attributes:
        status (int): HTTP status code (0 when no response was received).
        detail (str|None): Short human-friendly explanation.
        body (Any): Decoded response payload, when one exists.
    """

    def __init__(
        self,
        detail: Optional[str] = None,
        *,
        status: int = 0,
        body: Any = None,
    ) -> None:
        self.status = status
        self.detail = detail
        self.body = body
        super().__init__(detail or self.__class__.__name__)


class AuthenticationRequired(MatrixError):
    """The endpoint requires authentication but the client has no session."""

    def __init__(self, endpoint: Optional[str] = None) -> None:
        self.endpoint = endpoint
        msg = "authentication required"
        if endpoint:
            msg = f"{endpoint}: {msg}"
        super().__init__(msg)


class UrlParseError(MatrixError):
    """A homeserver URL (or a URL rebased onto it) could not be parsed."""


class UriParseError(MatrixError):
    """The rebased URL could not be turned back into a transport URI."""


class SerializationError(MatrixError):
    """An endpoint could not encode its typed request into an HTTP request."""


class TransportError(MatrixError):
    """The HTTP exchange itself failed."""


class EndpointError(MatrixError):
    """
    The HTTP exchange succeeded but no typed response could be built.

    When the homeserver answers with the standard Matrix error body
    (``{"errcode": "M_FORBIDDEN", "error": "..."}``) both parts are exposed.
    """

    def __init__(
        self,
        detail: Optional[str] = None,
        *,
        status: int = 0,
        body: Any = None,
        errcode: Optional[str] = None,
        error: Optional[str] = None,
    ) -> None:
        self.errcode = errcode
        self.error = error
        super().__init__(detail, status=status, body=body)


class ResponseDeserializationError(EndpointError):
    """A successful response body did not match the endpoint's schema."""


class TlsInitError(MatrixError):
    """The TLS context for an HTTPS client could not be initialised."""
