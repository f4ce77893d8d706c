# -*- coding: utf-8 -*-
"""
Matrix client-server API: async HTTP client.

Owns a homeserver URL, an ``httpx.AsyncClient`` and an optional
:class:`~matrix_client.session.Session`, and exposes:

- request(endpoint, req)       → generic dispatcher used by endpoint call sites
- log_in(user, password, ...)  → POST /login, stores the session
- register_guest()             → POST /register?kind=guest, stores the session
- register_user(name, pw)      → POST /register?kind=user, stores the session
- sync(filter, since, ...)     → SyncStream over GET /sync

Constructors:
- Client.new(url)              → plain HTTP homeserver
- Client.new_https(url)        → HTTPS homeserver (TLS context built eagerly)
- Client.new_custom(http, url) → caller-supplied httpx.AsyncClient

Limitations:
- Only the scheme, host and port of the homeserver URL are used. Its path and
  query are replaced on every request, so homeservers mounted under a path
  prefix are not supported.
- No retries: exactly one HTTP exchange per dispatched request.
"""
from __future__ import annotations

import logging
import os
import ssl
from typing import Any, Optional, Type, TypeVar, Union

import certifi
import httpx
from pydantic import BaseModel

from .api.r0 import login, register, sync_events
from .endpoint import Endpoint, make_request
from .errors import (
    AuthenticationRequired,
    MatrixError,
    ResponseDeserializationError,
    SerializationError,
    TlsInitError,
    TransportError,
    UriParseError,
    UrlParseError,
)
from .session import Session
from .sync import SyncStream

__all__ = [
    "Client",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
]

ReqT = TypeVar("ReqT", bound=BaseModel)
RespT = TypeVar("RespT", bound=BaseModel)

DEFAULT_TIMEOUT = 20.0
DEFAULT_USER_AGENT = "matrix-client-runtime/0.1 (+python-httpx)"

ACCESS_TOKEN_PARAM = "access_token"

# --------------------------------------------------------------------------------------
# Logging (library-safe): only attach a handler if MATRIX_CLIENT_DEBUG=1
# --------------------------------------------------------------------------------------
logger = logging.getLogger("matrix_client.client")


def _maybe_configure_logging() -> None:
    dbg = (os.getenv("MATRIX_CLIENT_DEBUG") or "").strip().lower()
    if dbg in ("1", "true", "yes", "on"):
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("[matrix-client][client] %(levelname)s: %(message)s")
            )
            logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)


_maybe_configure_logging()


# ------------------------------- helpers ------------------------------- #

def _parse_homeserver_url(url: Union[str, httpx.URL]) -> httpx.URL:
    try:
        parsed = url if isinstance(url, httpx.URL) else httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise UrlParseError(f"invalid homeserver URL {url!r}: {e}") from e

    if parsed.scheme not in ("http", "https"):
        raise UrlParseError(f"homeserver URL {url!r} must use http or https")
    if not parsed.host:
        raise UrlParseError(f"homeserver URL {url!r} has no host")
    return parsed


def _redact(url: httpx.URL) -> str:
    if ACCESS_TOKEN_PARAM in url.params:
        url = url.copy_set_param(ACCESS_TOKEN_PARAM, "REDACTED")
    return str(url)


def _transport_uri(url: Union[str, httpx.URL]) -> httpx.URL:
    # Round-trips through the string form so the transport gets a URI parsed
    # from exactly what is sent on the wire.
    try:
        return httpx.URL(str(url))
    except httpx.InvalidURL as e:
        raise UriParseError(f"invalid request URI {str(url)!r}: {e}") from e


def _tls_context() -> ssl.SSLContext:
    try:
        return ssl.create_default_context(cafile=certifi.where())
    except (ssl.SSLError, OSError) as e:
        raise TlsInitError(f"could not initialise TLS: {e}") from e


def _build_http(
    timeout: float,
    user_agent: Optional[str],
    verify: Union[bool, ssl.SSLContext] = True,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=transport,
        timeout=timeout,
        verify=verify,
        headers={
            "Accept": "application/json",
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
        },
        # one connection per request, no pooling
        limits=httpx.Limits(max_keepalive_connections=0),
    )


class Client:
    """
    A client for the Matrix client-server API.

    Example:
        async with Client.new_https("https://matrix.org") as client:
            await client.log_in("alice", password)
            async for batch in client.sync(set_presence=False):
                ...
    """

    # ---------------------------- construction ---------------------------- #

    def __init__(
        self,
        http: httpx.AsyncClient,
        homeserver_url: Union[str, httpx.URL],
        *,
        owns_http: bool = False,
    ) -> None:
        self.homeserver_url = _parse_homeserver_url(homeserver_url)
        if self.homeserver_url.path not in ("", "/") or self.homeserver_url.query:
            logger.warning(
                "homeserver URL %s has a path or query; it is replaced on every request",
                self.homeserver_url,
            )
        self._http = http
        self._owns_http = owns_http
        # The current Matrix session credentials
        self.session: Optional[Session] = None

    @classmethod
    def new(
        cls,
        homeserver_url: Union[str, httpx.URL],
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "Client":
        """
        Create a client for a plain HTTP homeserver.

        ``transport`` replaces the default network transport (e.g. with an
        ``httpx.MockTransport``); timeout and user agent still apply.
        """
        url = _parse_homeserver_url(homeserver_url)
        if url.scheme != "http":
            raise UrlParseError(f"{url} is not an http URL; use Client.new_https")
        return cls(_build_http(timeout, user_agent, transport=transport), url, owns_http=True)

    @classmethod
    def new_https(
        cls,
        homeserver_url: Union[str, httpx.URL],
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "Client":
        """
        Create a client for an HTTPS homeserver.

        Raises TlsInitError if the TLS context cannot be built.
        """
        url = _parse_homeserver_url(homeserver_url)
        return cls(_build_http(timeout, user_agent, _tls_context(), transport), url, owns_http=True)

    @classmethod
    def new_custom(
        cls, http: httpx.AsyncClient, homeserver_url: Union[str, httpx.URL]
    ) -> "Client":
        """
        Create a client using the given ``httpx.AsyncClient``.

        This lets the caller configure transport, TLS, proxies and timeouts.
        The caller keeps ownership and is responsible for closing it.
        """
        return cls(http, homeserver_url)

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"Client(homeserver_url={str(self.homeserver_url)!r}, session={self.session!r})"

    # ------------------------------ auth flows ----------------------------- #

    async def log_in(
        self,
        user: str,
        password: str,
        device_id: Optional[str] = None,
    ) -> "Client":
        """
        Log in with a username and password.

        Unlike ``api.r0.login.call()``, the returned session is stored in this
        client. The password is not kept anywhere once this returns.
        """
        try:
            response = await self.request(
                login.Login,
                make_request(login.Request, user=user, password=password, device_id=device_id),
            )
        finally:
            del password
        return self._store_session(response)

    async def register_guest(self) -> "Client":
        """Register as a guest and store the resulting session."""
        response = await self.request(
            register.Register,
            make_request(register.Request, kind=register.RegistrationKind.GUEST),
        )
        return self._store_session(response)

    async def register_user(
        self,
        username: Optional[str],
        password: str,
    ) -> "Client":
        """
        Register as a new user on this server and store the resulting session.

        The username is the local part of the returned user_id. If it is
        omitted, the server generates one.
        """
        try:
            response = await self.request(
                register.Register,
                make_request(
                    register.Request,
                    kind=register.RegistrationKind.USER,
                    username=username,
                    password=password,
                ),
            )
        finally:
            del password
        return self._store_session(response)

    def _store_session(self, response: Union[login.Response, register.Response]) -> "Client":
        self.session = Session(
            access_token=response.access_token,
            user_id=response.user_id,
            device_id=response.device_id,
        )
        logger.info("session established for %s (device %s)", response.user_id, response.device_id)
        return self

    # -------------------------------- sync -------------------------------- #

    def sync(
        self,
        filter: Optional[sync_events.Filter] = None,
        since: Optional[str] = None,
        set_presence: bool = True,
    ) -> SyncStream:
        """
        Repeated calls to the sync endpoint as an async iterator.

        If ``since`` is None, the first item may take a long time to arrive:
        it contains every event visible to the user over the account's
        lifetime. With ``set_presence=False`` the server is told to keep the
        user offline while polling.
        """
        return SyncStream(self, filter=filter, since=since, set_presence=set_presence)

    # ------------------------------ dispatcher ----------------------------- #

    async def request(self, endpoint: Type[Endpoint[ReqT, RespT]], request: ReqT) -> RespT:
        """
        Make a request to a Matrix API endpoint.

        The endpoint's HTTP request is rebased onto the homeserver URL and, for
        authenticated endpoints, gets the session's ``access_token`` query
        parameter. Nothing on the client is modified.
        """
        session = self.session
        meta = endpoint.METADATA

        try:
            http_request = endpoint.to_http_request(request)
            content = http_request.content
        except (ValueError, TypeError, httpx.RequestNotRead) as e:
            raise SerializationError(f"{meta.name}: could not encode request: {e}") from e

        try:
            url = self.homeserver_url.copy_with(raw_path=http_request.url.raw_path)
        except httpx.InvalidURL as e:
            raise UrlParseError(f"{meta.name}: could not rebase URL: {e}") from e

        if meta.requires_authentication:
            if session is None:
                raise AuthenticationRequired(meta.name)
            url = url.copy_set_param(ACCESS_TOKEN_PARAM, session.access_token)

        uri = _transport_uri(url)

        headers = httpx.Headers(http_request.headers)
        # recomputed from the rebased URI
        headers.pop("Host", None)
        outgoing = self._http.build_request(
            http_request.method,
            uri,
            headers=headers,
            content=content or None,
        )
        failure: Optional[TransportError] = None
        try:
            response = await self._http.send(outgoing)
        except httpx.RequestError as e:
            # DNS, connect, timeouts, TLS, protocol errors
            if not content:
                raise TransportError(f"{meta.name}: {str(e) or type(e).__name__}") from e
            # e.request holds the body (e.g. a password); keep only its type and message
            failure = TransportError(f"{meta.name}: {type(e).__name__}: {e}")
        if failure is not None:
            # raised outside the handler so neither the cause, the context nor
            # this frame's locals keep the request body alive
            del request, http_request, content, outgoing
            raise failure

        logger.debug("request: %s %s -> %d", outgoing.method, _redact(uri), response.status_code)

        try:
            return endpoint.from_http_response(response)
        except MatrixError:
            raise
        except (ValueError, TypeError) as e:
            raise ResponseDeserializationError(
                f"{meta.name}: could not decode response: {e}",
                status=response.status_code,
            ) from e
