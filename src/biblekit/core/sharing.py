from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from itertools import dropwhile
from typing import Iterable

from biblekit.core.reference import VerseReference
from biblekit.data.catalog import CATALOG
from biblekit.utils.verse_id import VerseCoord, VerseID


@dataclass(frozen=True)
class Verse:
    id: VerseID
    text: str

    @property
    def sort_key(self) -> int:
        return self.id.sort_key

    @property
    def coord(self) -> VerseCoord:
        return self.id.components()


@dataclass(frozen=True)
class SelectedVerseRange:
    """A maximal run of selected verses, produced by selected_ranges()."""

    start_book: int
    end_book: int
    start_chapter: int
    end_chapter: int
    start_verse: int
    end_verse: int


def _sorted_single_book(verses: Iterable[Verse]) -> list[Verse]:
    unique = {v.coord: v for v in verses}
    if not unique:
        raise ValueError("Verses should not be empty.")
    for v in unique.values():
        if VerseReference.from_id(v.id.value) is None:
            raise ValueError(f"Not a verse of the canon: {v.id.value}")
    ordered = sorted(unique.values(), key=lambda v: v.sort_key)
    if len({v.coord.book_index for v in ordered}) != 1:
        raise ValueError("Multiple books not supported.")
    return ordered


def _range(book_index: int, start: VerseCoord, end: VerseCoord) -> SelectedVerseRange:
    return SelectedVerseRange(
        start_book=book_index,
        end_book=book_index,
        start_chapter=start.chapter,
        end_chapter=end.chapter,
        start_verse=start.verse,
        end_verse=end.verse,
    )


def selected_ranges(verses: Iterable[Verse]) -> list[SelectedVerseRange]:
    """
    Group verses of one book into maximal contiguous runs.

    Runs are contiguous in catalog order, so the last verse of a chapter and
    the first verse of the next one belong to the same run.

    Raises:
        ValueError: if verses is empty or spans more than one book.
    """
    ordered = _sorted_single_book(verses)
    first = ordered[0]
    book_index = first.coord.book_index
    remaining = deque(v.coord for v in ordered)

    ranges: list[SelectedVerseRange] = []
    run_start = None
    run_end = None
    book_ids = CATALOG.all_verse_ids(book_index)
    for vid in dropwhile(lambda x: x.sort_key < first.sort_key, book_ids):
        coord = vid.components()
        if remaining and coord == remaining[0]:
            remaining.popleft()
            if run_start is None:
                run_start = coord
            run_end = coord
        elif not remaining:
            break
        elif run_start is not None:
            ranges.append(_range(book_index, run_start, run_end))
            run_start = None

    if run_start is not None:
        ranges.append(_range(book_index, run_start, run_end))
    return ranges


def share_verses_text(verses: Iterable[Verse]) -> list[str]:
    """
    Verse texts labelled for sharing: "[v] text", or "[c:v] text" when the
    verse opens a new chapter. A single verse is returned without a label.
    """
    ordered = _sorted_single_book(verses)
    if len(ordered) == 1:
        return [ordered[0].text]

    book = CATALOG.lookup(ordered[0].coord.book_index)
    out: list[str] = []
    add_chapter_prefix = False
    prev_chapter = ordered[0].coord.chapter
    for verse in ordered:
        coord = verse.coord
        prefix = f"{coord.chapter}:" if add_chapter_prefix or coord.chapter != prev_chapter else ""
        out.append(f"[{prefix}{coord.verse}] {verse.text}")

        closes_chapter = coord.verse == book.total_verses(coord.chapter)
        add_chapter_prefix = closes_chapter and coord.chapter != book.total_chapters
        prev_chapter = coord.chapter
    return out


def share_title(ranges: list[SelectedVerseRange]) -> str:
    """Citation for grouped ranges, e.g. "Genesis 1:2-3,5" or "Genesis 1:31-2:1"."""
    if not ranges:
        raise ValueError("Ranges should not be empty.")
    first = ranges[0]
    if any(r.start_book != r.end_book or r.start_book != first.start_book for r in ranges):
        raise ValueError("Multiple books not supported.")

    parts: list[str] = []
    prev_chapter = first.start_chapter
    for r in ranges:
        prefix = f"{r.start_chapter}:" if r.start_chapter != prev_chapter else ""
        if r.start_chapter != r.end_chapter:
            parts.append(f"{prefix}{r.start_verse}-{r.end_chapter}:{r.end_verse}")
        elif r.start_verse == r.end_verse:
            parts.append(f"{prefix}{r.start_verse}")
        else:
            parts.append(f"{prefix}{r.start_verse}-{r.end_verse}")
        prev_chapter = r.end_chapter

    book_name = CATALOG.lookup(first.start_book).name
    return f"{book_name} {first.start_chapter}:" + ",".join(parts)


def create_share_text(verses: Iterable[Verse]) -> str:
    """e.g. "Genesis 1:1-3 - [1] In the beginning... [2] ... [3] ..."."""
    verses = list(verses)
    title = share_title(selected_ranges(verses))
    return f"{title} - " + " ".join(share_verses_text(verses))
