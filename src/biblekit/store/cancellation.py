from __future__ import annotations

import threading


class QueryCancelled(Exception):
    """Raised inside a query when its cancellation token was set."""


class CancellationToken:
    """
    Thread-safe cancellation flag checked by storage queries per row.

    Cancelling after the query finished has no effect.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise QueryCancelled("The query was interrupted.")
