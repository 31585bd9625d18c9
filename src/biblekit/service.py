from __future__ import annotations

from typing import Optional, Sequence

from biblekit.core.sharing import Verse
from biblekit.store.base import Page, VerseEntity, VerseRepository
from biblekit.store.cancellation import CancellationToken
from biblekit.utils.verse_id import VerseID


def _to_verses(rows: list[VerseEntity]) -> list[Verse]:
    return [Verse(id=VerseID(row.id), text=row.text) for row in rows]


class BibleStoreService:
    """
    Adapter between storage rows and domain verses.

    Converts VerseIDs to the textual ids storage expects and rows back to
    Verse values, keeping storage order.
    """

    def __init__(self, repository: VerseRepository) -> None:
        self.repository = repository

    async def search_verses(
        self,
        text: str,
        verse_ids: Optional[Sequence[VerseID]],
        page: Page,
        token: Optional[CancellationToken] = None,
    ) -> list[Verse]:
        if verse_ids is None:
            rows = await self.repository.search_verses(text, page, token)
        else:
            rows = await self.repository.search_verses_by_ids(text, [v.value for v in verse_ids], page, token)
        return _to_verses(rows)

    async def search_verses_in_range(
        self,
        text: str,
        start: VerseID,
        end: VerseID,
        page: Page,
        token: Optional[CancellationToken] = None,
    ) -> list[Verse]:
        rows = await self.repository.search_verses_in_range(text, start.value, end.value, page, token)
        return _to_verses(rows)

    async def get_verses(
        self, verse_ids: Sequence[VerseID], page: Page, token: Optional[CancellationToken] = None
    ) -> list[Verse]:
        rows = await self.repository.get_verses_by_ids([v.value for v in verse_ids], page, token)
        return _to_verses(rows)

    async def get_verses_in_range(
        self, start: VerseID, end: VerseID, page: Page, token: Optional[CancellationToken] = None
    ) -> list[Verse]:
        rows = await self.repository.get_verses_in_range(start.value, end.value, page, token)
        return _to_verses(rows)
