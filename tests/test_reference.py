import pytest

from biblekit.core.reference import ChapterReference, Reference, VerseReference
from biblekit.utils.verse_id import VerseID


@pytest.mark.parametrize(
    "value",
    ["1:1:0", "0:1:1", "67:22:21", "66:23:21", "66:22:22", "1:51:1", "1:1:32", "a:1:1", "1:1", "", "1:1:1:1"],
)
def test_from_id_invalid(value: str) -> None:
    assert VerseReference.from_id(value) is None


@pytest.mark.parametrize("value", ["1:1:1", "66:22:21", "19:119:176", "1:1:31"])
def test_from_id_valid(value: str) -> None:
    ref = VerseReference.from_id(value)
    assert ref is not None
    assert ref.verse_id() == VerseID(value)


def test_create_accepts_book_names() -> None:
    ref = VerseReference.create("John", 3, 16)
    assert ref is not None
    assert ref.verse_id() == VerseID("43:3:16")
    assert VerseReference.create("John", 22, 1) is None
    assert VerseReference.create("Tobit", 1, 1) is None


def test_ordering() -> None:
    a = VerseReference.from_id("1:1:2")
    b = VerseReference.from_id("1:2:1")
    c = VerseReference.from_id("2:1:1")
    d = VerseReference.from_id("1:10:1")
    assert a < b < c
    assert b < d
    assert VerseReference.from_id("1:1:1") == VerseReference.from_id("1:1:1")
    assert sorted([c, d, a, b]) == [a, b, d, c]


def test_fixup_swaps_inverted_pair() -> None:
    ref = Reference.from_ids("3:1:3", "1:1:1")
    fixed = ref.fixup()
    assert fixed.start.verse_id() == VerseID("1:1:1")
    assert fixed.end.verse_id() == VerseID("3:1:3")


def test_fixup_idempotent() -> None:
    ref = Reference.from_ids("1:1:1", "3:1:3")
    assert ref.fixup() == ref
    assert ref.fixup().fixup() == ref.fixup()


def test_bounds() -> None:
    ref = Reference.from_ids("40:1:1", "1:1:1")
    assert ref.bounds() == (VerseID("1:1:1"), VerseID("40:1:1"))


def test_from_ids_invalid() -> None:
    assert Reference.from_ids("1:1:1", "1:1:99") is None


def test_chapter_reference() -> None:
    chapter = ChapterReference.create("Genesis", 1)
    assert chapter is not None
    assert chapter.start_verse_id == VerseID("1:1:1")
    assert chapter.end_verse_id == VerseID("1:1:31")
    assert chapter.total_verses() == 31
    assert len(chapter.all_verse_ids()) == 31
    assert ChapterReference.create("Genesis", 51) is None


def test_whole_bible() -> None:
    ref = Reference.whole_bible()
    assert ref.bounds() == (VerseID.START, VerseID.END)


def test_create_with_book() -> None:
    ref = Reference.create_with_book("Genesis", 1, 2, 31, 1)
    assert ref.bounds() == (VerseID("1:1:31"), VerseID("1:2:1"))
    assert str(ref.start) == "1:1:31"


def test_create_with_book_rejects_verses_outside_book() -> None:
    assert Reference.create_with_book("Genesis", 1, 99, 1, 1) is None
    assert Reference.create_with_book("Genesis", 1, 1, 1, 32) is None
    assert Reference.create_with_book("Tobit", 1, 1, 1, 2) is None
