from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Union

from biblekit.core.reference import VerseReference
from biblekit.store.base import VerseEntity


def _book_key(raw: Any) -> Union[int, str]:
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    return int(text) if text.isdigit() else text


def verses_from_rows(rows: Iterable[dict]) -> list[VerseEntity]:
    """
    Validate raw {book, chapter, verse, text} rows against the catalog.

    book may be a name, short name, alias or 1-based ordinal.

    Raises:
        ValueError: on the first row that does not address a real verse.
    """
    out: list[VerseEntity] = []
    for n, row in enumerate(rows):
        try:
            ref = VerseReference.create(_book_key(row["book"]), int(row["chapter"]), int(row["verse"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed verse row #{n}: {row!r}") from e
        if ref is None:
            raise ValueError(
                f"Row #{n} is not a verse of the canon: {row.get('book')!r} {row.get('chapter')}:{row.get('verse')}"
            )
        out.append(VerseEntity(id=ref.verse_id().value, text=str(row.get("text", ""))))
    return out


def load_raw_verses(raw_path: Union[str, Path]) -> list[VerseEntity]:
    raw = json.loads(Path(raw_path).read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("verses", [])
    if not isinstance(raw, list):
        raise ValueError(f"Invalid raw verse file (expected list): {raw_path}")
    return verses_from_rows(raw)
