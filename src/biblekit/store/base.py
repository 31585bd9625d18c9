from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from biblekit.store.cancellation import CancellationToken
from biblekit.utils.verse_id import sort_key


@dataclass(frozen=True)
class VerseEntity:
    """A stored verse row: textual id plus text."""

    id: str
    text: str

    @property
    def key(self) -> int:
        return sort_key(self.id)


@dataclass(frozen=True)
class Page:
    """
    Limit/offset applied after ordering by sort key.

    limit=None (or a negative limit) means no limit; a negative offset is
    treated as no offset.
    """

    limit: Optional[int] = None
    offset: int = 0

    @property
    def sql_limit(self) -> int:
        if self.limit is None or self.limit < 0:
            return -1
        return self.limit

    @property
    def sql_offset(self) -> int:
        return max(self.offset, 0)


ALL = Page()


class VerseRepository:
    """
    Storage collaborator. Every query orders rows by sort key ascending and
    then applies the page. Text filters are case-insensitive substring matches.
    """

    async def search_verses(
        self, text: str, page: Page = ALL, token: Optional[CancellationToken] = None
    ) -> list[VerseEntity]:
        raise NotImplementedError

    async def search_verses_in_range(
        self,
        text: str,
        start_verse: str,
        end_verse: str,
        page: Page = ALL,
        token: Optional[CancellationToken] = None,
    ) -> list[VerseEntity]:
        raise NotImplementedError

    async def search_verses_by_ids(
        self,
        text: str,
        ids: Sequence[str],
        page: Page = ALL,
        token: Optional[CancellationToken] = None,
    ) -> list[VerseEntity]:
        raise NotImplementedError

    async def get_verses_by_ids(
        self, ids: Sequence[str], page: Page = ALL, token: Optional[CancellationToken] = None
    ) -> list[VerseEntity]:
        raise NotImplementedError

    async def get_verses_in_range(
        self,
        start_verse: str,
        end_verse: str,
        page: Page = ALL,
        token: Optional[CancellationToken] = None,
    ) -> list[VerseEntity]:
        raise NotImplementedError

    async def insert(self, verses: Sequence[VerseEntity]) -> None:
        raise NotImplementedError
