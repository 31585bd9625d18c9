from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

import yaml
from tqdm import tqdm

from biblekit.core.reference import Reference, VerseReference
from biblekit.core.resolver import verse_ids
from biblekit.core.sharing import create_share_text
from biblekit.data.loader import load_raw_verses
from biblekit.provider import BibleProvider
from biblekit.store.sqlite import SqliteVerseRepository
from biblekit.utils.verse_id import CODEC, ParseError, VerseID

DEFAULT_DB_PATH = "data/bible.db"
LOAD_BATCH_SIZE = 1000


def _load_config(path: Optional[str]) -> dict:
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _db_path(args: argparse.Namespace, cfg: dict) -> Path:
    if getattr(args, "db", None):
        return Path(args.db)
    return Path((cfg.get("data") or {}).get("db_path", DEFAULT_DB_PATH))


def _page(args: argparse.Namespace, cfg: dict) -> tuple[Optional[int], int]:
    query_cfg = cfg.get("query") or {}
    limit = args.limit if args.limit is not None else query_cfg.get("limit")
    offset = args.offset if args.offset is not None else query_cfg.get("offset", 0)
    return (int(limit) if limit is not None else None), int(offset)


def _reference(start: str, end: str) -> Reference:
    ref = Reference.from_ids(start, end)
    if ref is None:
        raise SystemExit(f"Invalid verse range: {start} - {end}")
    return ref


def _print_verses(verses) -> None:
    for v in verses:
        print(f"{v.id.book_chapter_verse()}\t{v.text}")


def cmd_parse(args: argparse.Namespace) -> int:
    try:
        coord = CODEC.parse(args.id)
        key = CODEC.encode(coord.book_index, coord.chapter, coord.verse)
    except ParseError as e:
        raise SystemExit(f"Invalid verse id {args.id!r}: {e}")
    ref = VerseReference.from_id(args.id)
    out = {**asdict(coord), "sort_key": key, "valid": ref is not None}
    if ref is not None:
        out["ref"] = ref.verse_id().book_chapter_verse()
    print(json.dumps(out, ensure_ascii=False, indent=2))
    return 0


def cmd_expand(args: argparse.Namespace) -> int:
    ids = verse_ids(_reference(args.start, args.end))
    if args.count:
        print(len(ids))
        return 0
    for vid in ids:
        print(vid.value)
    return 0


def cmd_load(args: argparse.Namespace) -> int:
    cfg = _load_config(args.config)
    raw_path = args.raw or (cfg.get("data") or {}).get("raw_path")
    if not raw_path:
        raise SystemExit("No raw verse file: pass --raw or set data.raw_path in the config.")

    verses = load_raw_verses(raw_path)
    repo = SqliteVerseRepository(_db_path(args, cfg))
    repo.create_schema()
    with tqdm(total=len(verses), unit="verse", desc="load") as bar:
        for i in range(0, len(verses), LOAD_BATCH_SIZE):
            batch = verses[i : i + LOAD_BATCH_SIZE]
            repo.insert_rows(batch)
            bar.update(len(batch))
    print(f"Wrote {len(verses)} verses to {repo.path}")
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    cfg = _load_config(args.config)
    provider = BibleProvider.create(_db_path(args, cfg))
    limit, offset = _page(args, cfg)
    if args.start or args.end:
        ref = _reference(args.start or VerseID.START.value, args.end or VerseID.END.value)
        found = asyncio.run(provider.search_in_range(args.query, ref, limit=limit, offset=offset))
    else:
        found = asyncio.run(provider.search(args.query, limit=limit, offset=offset))
    _print_verses(found)
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    cfg = _load_config(args.config)
    provider = BibleProvider.create(_db_path(args, cfg))
    limit, offset = _page(args, cfg)
    if args.ids:
        ids = [VerseID(i) for i in args.ids]
        found = asyncio.run(provider.verses(ids, limit=limit, offset=offset))
    elif args.start and args.end:
        found = asyncio.run(provider.verses_in_range(_reference(args.start, args.end), limit=limit, offset=offset))
    else:
        raise SystemExit("Pass --ids or both --from and --to.")
    _print_verses(found)
    return 0


def cmd_share(args: argparse.Namespace) -> int:
    cfg = _load_config(args.config)
    provider = BibleProvider.create(_db_path(args, cfg))
    for i in args.ids:
        if VerseReference.from_id(i) is None:
            raise SystemExit(f"Invalid verse id: {i}")
    found = asyncio.run(provider.verses([VerseID(i) for i in args.ids]))
    if not found:
        raise SystemExit("None of the verses were found in the store.")
    try:
        print(create_share_text(found))
    except ValueError as e:
        raise SystemExit(str(e))
    return 0


def _add_store_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", help="Path to config.yaml.")
    p.add_argument("--db", help=f"SQLite database path (default: data.db_path or {DEFAULT_DB_PATH}).")


def _add_page_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--limit", type=int, default=None, help="Maximum number of verses.")
    p.add_argument("--offset", type=int, default=None, help="Verses to skip before the first returned.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="biblekit", description="Address, expand and search Bible verses.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    s_parse = sub.add_parser("parse", help="Show the components and sort key of a verse id.")
    s_parse.add_argument("id", help="Verse id, e.g. 43:3:16.")
    s_parse.set_defaults(func=cmd_parse)

    s_expand = sub.add_parser("expand", help="List every verse id in an inclusive range.")
    s_expand.add_argument("start", help="First verse id.")
    s_expand.add_argument("end", help="Last verse id.")
    s_expand.add_argument("--count", action="store_true", help="Only print the number of verses.")
    s_expand.set_defaults(func=cmd_expand)

    s_load = sub.add_parser("load", help="Build the SQLite store from a raw JSON verse export.")
    _add_store_args(s_load)
    s_load.add_argument("--raw", help="Raw verse JSON (default: data.raw_path).")
    s_load.set_defaults(func=cmd_load)

    s_search = sub.add_parser("search", help="Case-insensitive text search.")
    _add_store_args(s_search)
    _add_page_args(s_search)
    s_search.add_argument("query", help="Text to search for.")
    s_search.add_argument("--from", dest="start", help="Restrict to verses from this id.")
    s_search.add_argument("--to", dest="end", help="Restrict to verses up to this id.")
    s_search.set_defaults(func=cmd_search)

    s_get = sub.add_parser("get", help="Fetch verses by id or range.")
    _add_store_args(s_get)
    _add_page_args(s_get)
    s_get.add_argument("--ids", nargs="+", help="Verse ids.")
    s_get.add_argument("--from", dest="start", help="First verse id of the range.")
    s_get.add_argument("--to", dest="end", help="Last verse id of the range.")
    s_get.set_defaults(func=cmd_get)

    s_share = sub.add_parser("share", help="Print citation and text for verses of one book.")
    _add_store_args(s_share)
    s_share.add_argument("ids", nargs="+", help="Verse ids.")
    s_share.set_defaults(func=cmd_share)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
