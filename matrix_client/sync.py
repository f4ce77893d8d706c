# SPDX-License-Identifier: MIT
"""
matrix_client.sync

Event synchronisation as an endless async iterator.

Each pull issues exactly one ``/sync`` request; the ``since`` cursor is set
from the previous response's ``next_batch`` and only advances on success.

Failure policy: a failed pull raises out of ``__anext__`` (and therefore out
of ``async for``), but the stream itself stays usable. Iterating it again
retries from the unchanged cursor. The stream never ends by itself, so a
persistent failure repeats on every pull until the consumer stops.
"""
from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Optional

from .api.r0 import sync_events
from .endpoint import make_request

if TYPE_CHECKING:  # pragma: no cover
    from .client import Client

__all__ = ["SyncStream"]

logger = logging.getLogger("matrix_client.sync")


def _maybe_configure_logging() -> None:
    # Mirrors the setup in matrix_client.client.
    dbg = (os.getenv("MATRIX_CLIENT_DEBUG") or "").strip().lower()
    if dbg in ("1", "true", "yes", "on"):
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("[matrix-client][sync] %(levelname)s: %(message)s")
            )
            logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)


_maybe_configure_logging()


class SyncStream:
    """
    Lazy, restartable sequence of :class:`sync_events.Response`.

        async for batch in client.sync(since=saved_token):
            handle(batch)
            saved_token = batch.next_batch

    Attributes:
        since: the cursor the next pull will send (``None`` = full history).
        filter: filter id or inline definition, reused on every request.
    """

    def __init__(
        self,
        client: "Client",
        filter: Optional[sync_events.Filter] = None,
        since: Optional[str] = None,
        set_presence: bool = True,
    ) -> None:
        self._client = client
        self.filter = filter
        self.since = since
        # None lets the server mark the user online; OFFLINE keeps polling silent
        self.set_presence: Optional[sync_events.SetPresence] = (
            None if set_presence else sync_events.SetPresence.OFFLINE
        )

    def __aiter__(self) -> "SyncStream":
        return self

    async def __anext__(self) -> sync_events.Response:
        request = make_request(
            sync_events.Request,
            filter=self.filter,
            since=self.since,
            set_presence=self.set_presence,
        )
        response = await self._client.request(sync_events.SyncEvents, request)
        logger.debug("sync: %s -> %s", self.since, response.next_batch)
        self.since = response.next_batch
        return response

    def restart(self, since: Optional[str]) -> "SyncStream":
        """Re-seed the cursor, e.g. with a ``next_batch`` saved earlier."""
        self.since = since
        return self
