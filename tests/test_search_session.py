import asyncio

from biblekit.engine.search import SearchSession
from biblekit.provider import BibleProvider
from biblekit.service import BibleStoreService
from biblekit.store.base import ALL, VerseEntity, VerseRepository
from biblekit.store.cancellation import QueryCancelled


class GatedRepository(VerseRepository):
    """Searches for "slow" block until cancelled; others answer at once."""

    def __init__(self) -> None:
        self.tokens = []

    async def search_verses_in_range(self, text, start_verse, end_verse, page=ALL, token=None):
        self.tokens.append(token)
        if text == "slow":
            await asyncio.Event().wait()
        if text == "boom":
            raise RuntimeError("storage unavailable")
        if text == "interrupted":
            raise QueryCancelled("The query was interrupted.")
        return [VerseEntity("1:1:3", f"{text} result")]


def _session() -> tuple[SearchSession, GatedRepository]:
    repo = GatedRepository()
    return SearchSession(BibleProvider(BibleStoreService(repo))), repo


def test_new_search_cancels_previous() -> None:
    async def scenario():
        session, repo = _session()
        first = session.submit("slow")
        await asyncio.sleep(0)
        assert session.loading
        session.submit("light")
        results = await session.wait()
        return session, repo, first, results

    session, repo, first, results = asyncio.run(scenario())
    assert first.cancelled()
    assert repo.tokens[0].cancelled
    assert [v.text for v in results] == ["light result"]
    assert session.query == "light"
    assert not session.loading


def test_blank_query_clears_results() -> None:
    async def scenario():
        session, repo = _session()
        session.submit("light")
        await session.wait()
        assert len(session.results) == 1
        session.submit("   ")
        await session.wait()
        return session, repo

    session, repo = asyncio.run(scenario())
    assert session.results == []
    assert len(repo.tokens) == 1


def test_errors_are_recorded() -> None:
    async def scenario():
        session, _ = _session()
        session.submit("boom")
        await session.wait()
        return session

    session = asyncio.run(scenario())
    assert isinstance(session.error, RuntimeError)
    assert session.results == []


def test_interrupted_query_publishes_nothing() -> None:
    async def scenario():
        session, _ = _session()
        session.submit("light")
        await session.wait()
        session.submit("interrupted")
        await session.wait()
        return session

    session = asyncio.run(scenario())
    assert [v.text for v in session.results] == ["light result"]
    assert session.error is None
