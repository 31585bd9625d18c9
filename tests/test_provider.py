import asyncio
from typing import Optional, Sequence

import pytest

from biblekit.core.reference import ChapterReference, Reference
from biblekit.core.sharing import Verse
from biblekit.provider import BibleProvider
from biblekit.service import BibleStoreService
from biblekit.store.base import ALL, Page, VerseEntity, VerseRepository
from biblekit.store.cancellation import CancellationToken
from biblekit.utils.verse_id import VerseID


class RecordingRepository(VerseRepository):
    """Returns canned rows and records every call it receives."""

    def __init__(self, rows: Optional[list[VerseEntity]] = None) -> None:
        self.rows = rows or []
        self.calls: list[tuple] = []

    async def search_verses(self, text, page=ALL, token=None):
        self.calls.append(("search_verses", text, page))
        return self.rows

    async def search_verses_in_range(self, text, start_verse, end_verse, page=ALL, token=None):
        self.calls.append(("search_verses_in_range", text, start_verse, end_verse, page))
        return self.rows

    async def search_verses_by_ids(self, text, ids: Sequence[str], page=ALL, token=None):
        self.calls.append(("search_verses_by_ids", text, list(ids), page))
        return self.rows

    async def get_verses_by_ids(self, ids: Sequence[str], page=ALL, token=None):
        self.calls.append(("get_verses_by_ids", list(ids), page))
        return self.rows

    async def get_verses_in_range(self, start_verse, end_verse, page=ALL, token=None):
        self.calls.append(("get_verses_in_range", start_verse, end_verse, page))
        return self.rows


def _provider(rows=None) -> tuple[BibleProvider, RecordingRepository]:
    repo = RecordingRepository(rows)
    return BibleProvider(BibleStoreService(repo)), repo


@pytest.mark.parametrize("query", ["", " ", "\t\n"])
def test_blank_query_never_touches_storage(query: str) -> None:
    provider, repo = _provider([VerseEntity("1:1:1", "In the beginning")])
    assert asyncio.run(provider.search(query)) == []
    assert asyncio.run(provider.search(query, [VerseID("1:1:1")])) == []
    assert asyncio.run(provider.search_in_range(query, Reference.whole_bible())) == []
    assert repo.calls == []


def test_rows_map_to_verses() -> None:
    provider, _ = _provider([VerseEntity("43:11:35", "Jesus wept.")])
    found = asyncio.run(provider.search("wept"))
    assert found == [Verse(VerseID("43:11:35"), "Jesus wept.")]


def test_search_routes_by_ids() -> None:
    provider, repo = _provider()
    asyncio.run(provider.search("light", [VerseID("1:1:3"), VerseID("43:1:5")], limit=10, offset=2))
    assert repo.calls == [("search_verses_by_ids", "light", ["1:1:3", "43:1:5"], Page(10, 2))]


def test_search_whole_corpus_defaults() -> None:
    provider, repo = _provider()
    asyncio.run(provider.search("light"))
    assert repo.calls == [("search_verses", "light", Page(None, 0))]


def test_search_in_range_fixes_up_reference() -> None:
    provider, repo = _provider()
    ref = Reference.from_ids("43:1:5", "1:1:1")
    asyncio.run(provider.search_in_range("light", ref, limit=5))
    assert repo.calls == [("search_verses_in_range", "light", "1:1:1", "43:1:5", Page(5, 0))]


def test_verses_in_range_fixes_up_reference() -> None:
    provider, repo = _provider()
    asyncio.run(provider.verses_in_range(Reference.from_ids("2:1:1", "1:50:1")))
    assert repo.calls == [("get_verses_in_range", "1:50:1", "2:1:1", ALL)]


def test_verses_by_ids() -> None:
    provider, repo = _provider()
    asyncio.run(provider.verses([VerseID("1:1:2"), VerseID("1:1:1")], offset=1))
    assert repo.calls == [("get_verses_by_ids", ["1:1:2", "1:1:1"], Page(None, 1))]


def test_chapter_and_book_bounds() -> None:
    provider, repo = _provider()
    asyncio.run(provider.chapter(ChapterReference.create("Psalms", 119)))
    asyncio.run(provider.book("Jude"))
    assert repo.calls == [
        ("get_verses_in_range", "19:119:1", "19:119:176", ALL),
        ("get_verses_in_range", "65:1:1", "65:1:25", ALL),
    ]


def test_storage_errors_propagate() -> None:
    class FailingRepository(RecordingRepository):
        async def search_verses(self, text, page=ALL, token=None):
            raise RuntimeError("disk on fire")

    provider = BibleProvider(BibleStoreService(FailingRepository()))
    with pytest.raises(RuntimeError, match="disk on fire"):
        asyncio.run(provider.search("light"))


def test_token_is_forwarded() -> None:
    seen: list[Optional[CancellationToken]] = []

    class TokenRepository(RecordingRepository):
        async def search_verses(self, text, page=ALL, token=None):
            seen.append(token)
            return []

    token = CancellationToken()
    provider = BibleProvider(BibleStoreService(TokenRepository()))
    asyncio.run(provider.search("light", token=token))
    assert seen == [token]
