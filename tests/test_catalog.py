import pytest

from biblekit.data.catalog import CATALOG
from biblekit.utils.verse_id import VerseID

EXPECTED = [
    ("Genesis", 50, 1533), ("Exodus", 40, 1213), ("Leviticus", 27, 859), ("Numbers", 36, 1288),
    ("Deuteronomy", 34, 959), ("Joshua", 24, 658), ("Judges", 21, 618), ("Ruth", 4, 85),
    ("1 Samuel", 31, 810), ("2 Samuel", 24, 695), ("1 Kings", 22, 816), ("2 Kings", 25, 719),
    ("1 Chronicles", 29, 942), ("2 Chronicles", 36, 822), ("Ezra", 10, 280), ("Nehemiah", 13, 406),
    ("Esther", 10, 167), ("Job", 42, 1070), ("Psalms", 150, 2461), ("Proverbs", 31, 915),
    ("Ecclesiastes", 12, 222), ("Song of Solomon", 8, 117), ("Isaiah", 66, 1292), ("Jeremiah", 52, 1364),
    ("Lamentations", 5, 154), ("Ezekiel", 48, 1273), ("Daniel", 12, 357), ("Hosea", 14, 197),
    ("Joel", 3, 73), ("Amos", 9, 146), ("Obadiah", 1, 21), ("Jonah", 4, 48),
    ("Micah", 7, 105), ("Nahum", 3, 47), ("Habakkuk", 3, 56), ("Zephaniah", 3, 53),
    ("Haggai", 2, 38), ("Zechariah", 14, 211), ("Malachi", 4, 55),
    ("Matthew", 28, 1071), ("Mark", 16, 678), ("Luke", 24, 1151), ("John", 21, 879),
    ("Acts", 28, 1007), ("Romans", 16, 433), ("1 Corinthians", 16, 437), ("2 Corinthians", 13, 257),
    ("Galatians", 6, 149), ("Ephesians", 6, 155), ("Philippians", 4, 104), ("Colossians", 4, 95),
    ("1 Thessalonians", 5, 89), ("2 Thessalonians", 3, 47), ("1 Timothy", 6, 113), ("2 Timothy", 4, 83),
    ("Titus", 3, 46), ("Philemon", 1, 25), ("Hebrews", 13, 303), ("James", 5, 108),
    ("1 Peter", 5, 105), ("2 Peter", 3, 61), ("1 John", 5, 105), ("2 John", 1, 13),
    ("3 John", 1, 14), ("Jude", 1, 25), ("Revelation", 22, 404),
]


def test_book_counts() -> None:
    assert len(CATALOG) == 66
    assert len(CATALOG.old_testament) == 39
    assert len(CATALOG.new_testament) == 27
    assert CATALOG.old_testament[-1].name == "Malachi"
    assert CATALOG.new_testament[0].name == "Matthew"


def test_total_verse_count() -> None:
    assert CATALOG.total_verse_count() == 31_102


@pytest.mark.parametrize("index,expected", list(enumerate(EXPECTED, start=1)))
def test_each_book(index: int, expected: tuple) -> None:
    name, chapters, verses = expected
    book = CATALOG.lookup(index)
    assert book.name == name
    assert book.index == index
    assert book.total_chapters == chapters
    assert len(book.verses) == book.total_chapters
    assert len(book.all_verse_ids()) == verses


def test_genesis_chapter_one() -> None:
    assert CATALOG.total_verses("Genesis", 1) == 31
    ids = CATALOG.all_verse_ids("Genesis", 1)
    assert ids[0] == VerseID("1:1:1")
    assert ids[-1] == VerseID("1:1:31")


def test_lookup_by_name_short_name_and_alias() -> None:
    assert CATALOG.lookup("genesis").index == 1
    assert CATALOG.lookup("  Gen ").index == 1
    assert CATALOG.lookup("1Co").name == "1 Corinthians"
    assert CATALOG.lookup("Song of Songs").name == "Song of Solomon"
    assert CATALOG.lookup("rev").index == 66


def test_lookup_unknown() -> None:
    with pytest.raises(KeyError):
        CATALOG.lookup("Maccabees")
    with pytest.raises(IndexError):
        CATALOG.lookup(67)
    assert CATALOG.find(0) is None
    assert CATALOG.find("Tobit") is None


def test_book_bounds() -> None:
    genesis = CATALOG.lookup(1)
    assert genesis.start_verse_id == VerseID("1:1:1")
    assert genesis.end_verse_id == VerseID("1:50:26")
    assert CATALOG.lookup(66).end_verse_id == VerseID.END


def test_longest_chapter_fits_sort_key() -> None:
    assert max(max(b.verses) for b in CATALOG.books) == 176
    assert max(b.total_chapters for b in CATALOG.books) == 150
