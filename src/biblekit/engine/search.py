from __future__ import annotations

import asyncio
import logging
from typing import Optional

from biblekit.core.reference import Reference
from biblekit.core.sharing import Verse
from biblekit.provider import BibleProvider
from biblekit.store.cancellation import CancellationToken, QueryCancelled

logger = logging.getLogger(__name__)


class SearchSession:
    """
    Interactive search with at most one search in flight.

    submit() cancels the previous search before starting the next one, so a
    slow earlier query can never overwrite the results of a newer one.
    """

    def __init__(self, provider: BibleProvider, reference: Optional[Reference] = None) -> None:
        self.provider = provider
        self.reference = reference or Reference.whole_bible()
        self.query = ""
        self.results: list[Verse] = []
        self.error: Optional[Exception] = None
        self._task: Optional[asyncio.Task] = None
        self._token: Optional[CancellationToken] = None

    @property
    def loading(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(
        self,
        query: str,
        reference: Optional[Reference] = None,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> asyncio.Task:
        """Start a search; must be called from a running event loop."""
        self.cancel()
        self.query = query
        if reference is not None:
            self.reference = reference
        token = CancellationToken()
        self._token = token
        self._task = asyncio.get_running_loop().create_task(
            self._run(query, self.reference, limit, offset, token)
        )
        return self._task

    def cancel(self) -> None:
        if self._token is not None:
            self._token.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> list[Verse]:
        """Wait for the current search (if any) and return the published results."""
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        return self.results

    async def _run(
        self,
        query: str,
        reference: Reference,
        limit: Optional[int],
        offset: int,
        token: CancellationToken,
    ) -> None:
        if not query.strip():
            self.results = []
            self.error = None
            return
        try:
            found = await self.provider.search_in_range(query, reference, limit=limit, offset=offset, token=token)
        except QueryCancelled:
            return
        except Exception as e:  # noqa: BLE001 - surfaced through self.error
            if not token.cancelled:
                logger.warning("search for %r failed: %s", query, e)
                self.error = e
            return
        if token.cancelled:
            return
        self.results = found
        self.error = None
