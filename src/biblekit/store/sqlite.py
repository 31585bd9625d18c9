"""
SQLite-backed verse storage.

Rows are keyed by the integer sort key, so range queries and ordering are
plain integer comparisons. Queries run in a worker thread; each materialised
row checks the caller's cancellation token.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional, Sequence, Union

from biblekit.core.normalizer import Normalizer
from biblekit.store.base import ALL, Page, VerseEntity, VerseRepository
from biblekit.store.cancellation import CancellationToken
from biblekit.utils.verse_id import sort_key

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS verse (
    id INTEGER PRIMARY KEY,
    number TEXT NOT NULL,
    text TEXT NOT NULL,
    search_text TEXT NOT NULL
)
"""

_SELECT = "SELECT number, text FROM verse"
_ORDER_PAGE = " ORDER BY id ASC LIMIT ? OFFSET ?"
_TEXT_FILTER = "instr(search_text, ?) > 0"


def _in_clause(keys: Sequence[int]) -> str:
    return "id IN (" + ",".join("?" for _ in keys) + ")"


class SqliteVerseRepository(VerseRepository):
    def __init__(self, path: Union[str, Path], normalizer: Optional[Normalizer] = None) -> None:
        self.path = Path(path)
        self.normalizer = normalizer or Normalizer()

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(str(self.path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def create_schema(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute(SCHEMA)
            conn.commit()

    def count(self) -> int:
        with self._connect() as conn:
            return int(conn.execute("SELECT COUNT(*) FROM verse").fetchone()[0])

    def _fetch(self, sql: str, params: list, token: CancellationToken) -> list[VerseEntity]:
        token.raise_if_cancelled()
        logger.debug("query: %s params=%s", sql, params if len(params) <= 8 else f"<{len(params)} params>")
        rows: list[VerseEntity] = []
        with self._connect() as conn:
            for row in conn.execute(sql, params):
                token.raise_if_cancelled()
                rows.append(VerseEntity(id=row["number"], text=row["text"]))
        logger.debug("query returned %d rows", len(rows))
        return rows

    async def _query(
        self, where: list[str], params: list, page: Page, token: Optional[CancellationToken]
    ) -> list[VerseEntity]:
        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += _ORDER_PAGE
        params = [*params, page.sql_limit, page.sql_offset]

        token = token or CancellationToken()
        try:
            return await asyncio.to_thread(self._fetch, sql, params, token)
        except asyncio.CancelledError:
            logger.debug("query cancelled by caller")
            token.cancel()
            raise

    async def search_verses(
        self, text: str, page: Page = ALL, token: Optional[CancellationToken] = None
    ) -> list[VerseEntity]:
        needle = self.normalizer.query(text)
        if not needle:
            return []
        return await self._query([_TEXT_FILTER], [needle], page, token)

    async def search_verses_in_range(
        self,
        text: str,
        start_verse: str,
        end_verse: str,
        page: Page = ALL,
        token: Optional[CancellationToken] = None,
    ) -> list[VerseEntity]:
        needle = self.normalizer.query(text)
        if not needle:
            return []
        return await self._query(
            ["id BETWEEN ? AND ?", _TEXT_FILTER],
            [sort_key(start_verse), sort_key(end_verse), needle],
            page,
            token,
        )

    async def search_verses_by_ids(
        self,
        text: str,
        ids: Sequence[str],
        page: Page = ALL,
        token: Optional[CancellationToken] = None,
    ) -> list[VerseEntity]:
        keys = [sort_key(i) for i in ids]
        needle = self.normalizer.query(text)
        if not keys or not needle:
            return []
        return await self._query([_in_clause(keys), _TEXT_FILTER], [*keys, needle], page, token)

    async def get_verses_by_ids(
        self, ids: Sequence[str], page: Page = ALL, token: Optional[CancellationToken] = None
    ) -> list[VerseEntity]:
        keys = [sort_key(i) for i in ids]
        if not keys:
            return []
        return await self._query([_in_clause(keys)], keys, page, token)

    async def get_verses_in_range(
        self,
        start_verse: str,
        end_verse: str,
        page: Page = ALL,
        token: Optional[CancellationToken] = None,
    ) -> list[VerseEntity]:
        return await self._query(
            ["id BETWEEN ? AND ?"], [sort_key(start_verse), sort_key(end_verse)], page, token
        )

    def insert_rows(self, verses: Sequence[VerseEntity]) -> int:
        self.create_schema()
        rows = [(v.key, v.id, v.text, self.normalizer.search_text(v.text)) for v in verses]
        with self._connect() as conn:
            conn.executemany(
                "INSERT OR REPLACE INTO verse (id, number, text, search_text) VALUES (?, ?, ?, ?)",
                rows,
            )
            conn.commit()
        logger.info("inserted %d verses into %s", len(rows), self.path)
        return len(rows)

    async def insert(self, verses: Sequence[VerseEntity]) -> None:
        await asyncio.to_thread(self.insert_rows, verses)
