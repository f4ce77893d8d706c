from __future__ import annotations

import json

import httpx
import pytest

from matrix_client import EndpointError, ResponseDeserializationError, RoomAliasId
from matrix_client.api.r0 import (
    join_room_by_id_or_alias,
    login,
    register,
    send_message_event,
    sync_events,
)
from tests.helpers import PublicRooms, ok


def test_login_request_is_json_post():
    req = login.Login.to_http_request(login.Request(user="alice", password="hunter2"))
    assert req.method == "POST"
    assert req.url.path == "/_matrix/client/r0/login"
    assert json.loads(req.content) == {
        "type": "m.login.password",
        "user": "alice",
        "password": "hunter2",
    }


def test_login_request_repr_hides_password():
    assert "hunter2" not in repr(login.Request(user="alice", password="hunter2"))


def test_register_kind_goes_to_query():
    req = register.Register.to_http_request(
        register.Request(kind=register.RegistrationKind.USER, username="bob", password="pw")
    )
    assert req.url.params["kind"] == "user"
    assert json.loads(req.content) == {"username": "bob", "password": "pw"}


def test_register_guest_sends_empty_object():
    req = register.Register.to_http_request(register.Request(kind=register.RegistrationKind.GUEST))
    assert req.url.params["kind"] == "guest"
    assert json.loads(req.content) == {}


def test_sync_query_parameters():
    req = sync_events.SyncEvents.to_http_request(
        sync_events.Request(
            filter=sync_events.FilterDefinition(room={"timeline": {"limit": 10}}),
            since="s72594_4483_1934",
            set_presence=sync_events.SetPresence.OFFLINE,
        )
    )
    assert req.method == "GET"
    assert req.content == b""
    assert req.url.params["since"] == "s72594_4483_1934"
    assert req.url.params["set_presence"] == "offline"
    assert json.loads(req.url.params["filter"]) == {"room": {"timeline": {"limit": 10}}}
    assert "timeout" not in req.url.params
    assert "full_state" not in req.url.params


def test_sync_filter_id_passes_verbatim():
    req = sync_events.SyncEvents.to_http_request(sync_events.Request(filter="66696p746572"))
    assert req.url.params["filter"] == "66696p746572"


def test_path_parameters_are_percent_encoded():
    req = join_room_by_id_or_alias.JoinRoomByIdOrAlias.to_http_request(
        join_room_by_id_or_alias.Request(room_id_or_alias="#ruma:matrix.org")
    )
    assert req.url.raw_path == b"/_matrix/client/r0/join/%23ruma%3Amatrix.org"


def test_join_request_parses_alias():
    req = join_room_by_id_or_alias.Request(room_id_or_alias="#ruma:matrix.org")
    assert isinstance(req.room_id_or_alias, RoomAliasId)


def test_body_field_becomes_whole_body():
    req = send_message_event.SendMessageEvent.to_http_request(
        send_message_event.Request(
            room_id="!room:matrix.org",
            txn_id="1",
            data=send_message_event.text_content("Hello, World"),
        )
    )
    assert req.method == "PUT"
    assert req.url.raw_path == b"/_matrix/client/r0/rooms/%21room%3Amatrix.org/send/m.room.message/1"
    assert json.loads(req.content) == {"msgtype": "m.text", "body": "Hello, World"}


def test_wrong_request_type_is_rejected():
    with pytest.raises(TypeError):
        login.Login.to_http_request(register.Request())


def test_get_query_fields_skip_none():
    req = PublicRooms.to_http_request(PublicRooms.Request(limit=5))
    assert dict(req.url.params) == {"limit": "5"}


def test_response_success():
    res = login.Login.from_http_response(
        ok({"access_token": "T", "user_id": "@alice:matrix.org", "device_id": "D"})
    )
    assert res.access_token == "T"
    assert str(res.user_id) == "@alice:matrix.org"


def test_response_matrix_error():
    resp = httpx.Response(403, json={"errcode": "M_FORBIDDEN", "error": "Invalid password"})
    with pytest.raises(EndpointError) as exc:
        login.Login.from_http_response(resp)
    err = exc.value
    assert err.status == 403
    assert err.errcode == "M_FORBIDDEN"
    assert err.error == "Invalid password"
    assert "M_FORBIDDEN" in str(err)


def test_response_non_json_error_body():
    with pytest.raises(EndpointError) as exc:
        login.Login.from_http_response(httpx.Response(502, text="Bad Gateway"))
    assert exc.value.status == 502
    assert exc.value.body == "Bad Gateway"
    assert exc.value.errcode is None


def test_response_not_json():
    with pytest.raises(ResponseDeserializationError):
        login.Login.from_http_response(httpx.Response(200, text="<html>"))


def test_response_schema_mismatch():
    with pytest.raises(ResponseDeserializationError) as exc:
        sync_events.SyncEvents.from_http_response(ok({"rooms": {}}))
    assert exc.value.body == {"rooms": {}}
