from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

from biblekit.core.reference import ChapterReference, Reference
from biblekit.core.sharing import Verse
from biblekit.data.catalog import CATALOG, BookKey
from biblekit.service import BibleStoreService
from biblekit.store.base import Page
from biblekit.store.cancellation import CancellationToken
from biblekit.store.sqlite import SqliteVerseRepository
from biblekit.utils.verse_id import VerseID


class BibleProvider:
    """
    Entry point for retrieving and searching verses.

    All methods take limit/offset applied after ordering by canonical order:
    limit=None returns every matching verse, offset=0 starts at the first.
    Searches with a blank query return [] without touching storage. Storage
    errors propagate unchanged; nothing is retried.
    """

    def __init__(self, store: BibleStoreService) -> None:
        self.store = store

    @classmethod
    def create(cls, db_path: Union[str, Path]) -> "BibleProvider":
        return cls(store=BibleStoreService(SqliteVerseRepository(db_path)))

    async def search(
        self,
        query: str,
        verse_ids: Optional[Sequence[VerseID]] = None,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
        token: Optional[CancellationToken] = None,
    ) -> list[Verse]:
        """Search the whole corpus, or only verse_ids when given."""
        if not query.strip():
            return []
        return await self.store.search_verses(query, verse_ids, Page(limit, offset), token)

    async def search_in_range(
        self,
        query: str,
        reference: Reference,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
        token: Optional[CancellationToken] = None,
    ) -> list[Verse]:
        if not query.strip():
            return []
        start, end = reference.bounds()
        return await self.store.search_verses_in_range(query, start, end, Page(limit, offset), token)

    async def verses(
        self,
        ids: Sequence[VerseID],
        *,
        limit: Optional[int] = None,
        offset: int = 0,
        token: Optional[CancellationToken] = None,
    ) -> list[Verse]:
        return await self.store.get_verses(ids, Page(limit, offset), token)

    async def verses_in_range(
        self,
        reference: Reference,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
        token: Optional[CancellationToken] = None,
    ) -> list[Verse]:
        start, end = reference.bounds()
        return await self.store.get_verses_in_range(start, end, Page(limit, offset), token)

    async def chapter(
        self,
        chapter: ChapterReference,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
        token: Optional[CancellationToken] = None,
    ) -> list[Verse]:
        return await self.store.get_verses_in_range(
            chapter.start_verse_id, chapter.end_verse_id, Page(limit, offset), token
        )

    async def book(
        self,
        book: BookKey,
        *,
        limit: Optional[int] = None,
        offset: int = 0,
        token: Optional[CancellationToken] = None,
    ) -> list[Verse]:
        resolved = CATALOG.lookup(book)
        return await self.store.get_verses_in_range(
            resolved.start_verse_id, resolved.end_verse_id, Page(limit, offset), token
        )
