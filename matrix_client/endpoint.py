# SPDX-License-Identifier: MIT
"""
matrix_client.endpoint

The contract every client-server API call satisfies so that
:meth:`matrix_client.client.Client.request` can dispatch it uniformly.

An endpoint descriptor is a class carrying:

- ``METADATA``   : :class:`Metadata`; the dispatcher only reads
                   ``requires_authentication``.
- ``Request``    : pydantic model of the typed request.
- ``Response``   : pydantic model of the typed response.
- ``to_http_request(request)``    -> ``httpx.Request`` whose URL holds only the
                                     endpoint's path and query.
- ``from_http_response(response)`` -> typed ``Response`` or raises
                                     :class:`~matrix_client.errors.EndpointError`.

:class:`JsonEndpoint` implements both conversions for the common Matrix shape
(path template + query fields + JSON body, JSON response).
"""
from __future__ import annotations

import json
import string
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Dict,
    Generic,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
)
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from .errors import EndpointError, ResponseDeserializationError, SerializationError

if TYPE_CHECKING:  # pragma: no cover
    from .client import Client

__all__ = [
    "Metadata",
    "Endpoint",
    "JsonEndpoint",
    "endpoint_error",
    "make_request",
]

ReqT = TypeVar("ReqT", bound=BaseModel)
RespT = TypeVar("RespT", bound=BaseModel)


@dataclass(frozen=True)
class Metadata:
    """Static description of one API call."""

    description: str
    method: str
    name: str
    path: str
    rate_limited: bool = False
    requires_authentication: bool = True


class Endpoint(Generic[ReqT, RespT]):
    """Abstract endpoint descriptor. Subclasses are never instantiated."""

    METADATA: ClassVar[Metadata]
    Request: ClassVar[Type[BaseModel]]
    Response: ClassVar[Type[BaseModel]]

    @classmethod
    def to_http_request(cls, request: ReqT) -> httpx.Request:
        raise NotImplementedError

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> RespT:
        raise NotImplementedError

    @classmethod
    async def call(cls, client: "Client", request: ReqT) -> RespT:
        """Dispatch ``request`` through ``client``."""
        return await client.request(cls, request)


def endpoint_error(response: httpx.Response, name: str) -> EndpointError:
    """Build an :class:`EndpointError` from a non-success response."""
    body: Any
    try:
        body = response.json()
    except ValueError:
        body = response.text

    errcode = error = None
    if isinstance(body, dict):
        errcode = body.get("errcode")
        error = body.get("error")

    detail = f"{name} failed ({response.status_code})"
    if errcode or error:
        detail = f"{detail}: {errcode or 'M_UNKNOWN'} {error or ''}".rstrip()
    return EndpointError(
        detail,
        status=response.status_code,
        body=body,
        errcode=errcode,
        error=error,
    )


def _query_value(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return value


class JsonEndpoint(Endpoint[ReqT, RespT]):
    """
    Endpoint speaking JSON in both directions.

    Request fields named by a ``{placeholder}`` in ``METADATA.path`` fill the
    path (percent-encoded), fields listed in ``QUERY_FIELDS`` become query
    parameters, the rest form the JSON body. ``BODY_FIELD`` makes a single
    field's value the whole body instead. ``None`` values are omitted.
    """

    QUERY_FIELDS: ClassVar[Tuple[str, ...]] = ()
    BODY_FIELD: ClassVar[Optional[str]] = None

    @classmethod
    def path_fields(cls) -> List[str]:
        return [name for _, name, _, _ in string.Formatter().parse(cls.METADATA.path) if name]

    @classmethod
    def to_http_request(cls, request: ReqT) -> httpx.Request:
        if not isinstance(request, cls.Request):
            raise TypeError(
                f"{cls.METADATA.name} expects {cls.Request.__name__}, got {type(request).__name__}"
            )
        data: Dict[str, Any] = request.model_dump(mode="json", by_alias=True, exclude_none=True)

        segments: Dict[str, str] = {}
        for name in cls.path_fields():
            if name not in data:
                raise ValueError(f"{cls.METADATA.name}: missing path parameter {name!r}")
            segments[name] = quote(str(data.pop(name)), safe="")
        path = cls.METADATA.path.format(**segments)

        params = {k: _query_value(data.pop(k)) for k in cls.QUERY_FIELDS if k in data}

        body: Optional[Any]
        if cls.BODY_FIELD is not None:
            body = data.get(cls.BODY_FIELD, {})
        elif cls.METADATA.method in ("GET", "HEAD"):
            body = None
        else:
            body = data

        return httpx.Request(
            cls.METADATA.method,
            httpx.URL(path, params=params),
            json=body,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> RespT:
        if not response.is_success:
            raise endpoint_error(response, cls.METADATA.name)
        try:
            data = response.json()
        except ValueError as e:
            raise ResponseDeserializationError(
                f"{cls.METADATA.name}: response body is not JSON",
                status=response.status_code,
                body=response.text,
            ) from e
        try:
            return cls.Response.model_validate(data)  # type: ignore[return-value]
        except ValidationError as e:
            raise ResponseDeserializationError(
                f"{cls.METADATA.name}: unexpected response shape",
                status=response.status_code,
                body=data,
            ) from e


def make_request(model_cls: Type[ReqT], **fields: Any) -> ReqT:
    """Instantiate a request model, reporting invalid input as a serialization failure."""
    try:
        return model_cls(**fields)
    except ValidationError as e:
        raise SerializationError(f"invalid {model_cls.__module__}.{model_cls.__name__}: {e}") from e
