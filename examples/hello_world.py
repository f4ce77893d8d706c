#!/usr/bin/env python3
# examples/hello_world.py
"""
Write a message to a room using the given credentials.

    MATRIX_USER=alice python examples/hello_world.py -s https://matrix.org -r my-room -m "Hello"
"""

import argparse
import asyncio
import getpass
import os

from matrix_client import Client, MatrixError
from matrix_client.api.r0 import join_room_by_id_or_alias, send_message_event

HOMESERVER = os.getenv("MATRIX_HOMESERVER", "https://matrix.org")


async def hello_world(homeserver: str, user: str, password: str, room_alias: str, message: str) -> None:
    client = Client.new_https(homeserver) if homeserver.startswith("https:") else Client.new(homeserver)
    async with client:
        await client.log_in(user, password)
        print(f"The logged in client: {client!r}")

        # the alias lives on the homeserver we logged into
        server_name = client.session.user_id.server_name
        joined = await join_room_by_id_or_alias.call(
            client,
            join_room_by_id_or_alias.Request(room_id_or_alias=f"#{room_alias}:{server_name}"),
        )
        sent = await send_message_event.call(
            client,
            send_message_event.Request(
                room_id=joined.room_id,
                txn_id="1",
                data=send_message_event.text_content(message),
            ),
        )
        print(f"Top-level result: {sent!r}")


def main() -> None:
    p = argparse.ArgumentParser(description="Write a message to a room using the specified credentials")
    p.add_argument("-r", "--room", default="ruma-client-test-room", help="Target room alias; has to exist")
    p.add_argument("-s", "--server", default=HOMESERVER, help="The room's and user's homeserver")
    p.add_argument("-m", "--message", default="Hello, World", help="Whatever you'd like the client to say for you")
    args = p.parse_args()

    user = os.getenv("MATRIX_USER") or input("User: ").strip()
    password = os.getenv("MATRIX_PASSWORD") or getpass.getpass("Password: ")

    try:
        asyncio.run(hello_world(args.server, user, password, args.room, args.message))
    except MatrixError as e:
        status = getattr(e, "status", None) or "?"
        print(f"Failed: HTTP {status}: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
