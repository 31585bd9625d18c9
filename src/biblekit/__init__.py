from biblekit.core.reference import ChapterReference, Reference, VerseReference
from biblekit.core.resolver import expand, fixup, verse_ids
from biblekit.core.sharing import (
    SelectedVerseRange,
    Verse,
    create_share_text,
    selected_ranges,
    share_title,
    share_verses_text,
)
from biblekit.data.catalog import CATALOG, Book, BookCatalog
from biblekit.provider import BibleProvider
from biblekit.utils.verse_id import ParseError, ParseErrorKind, VerseID, VerseIdCodec

__all__ = [
    "CATALOG",
    "BibleProvider",
    "Book",
    "BookCatalog",
    "ChapterReference",
    "ParseError",
    "ParseErrorKind",
    "Reference",
    "SelectedVerseRange",
    "Verse",
    "VerseID",
    "VerseIdCodec",
    "VerseReference",
    "create_share_text",
    "expand",
    "fixup",
    "selected_ranges",
    "share_title",
    "share_verses_text",
    "verse_ids",
]
