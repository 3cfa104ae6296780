#!/usr/bin/env python3
"""
Word Browser command line.

Usage:
    wordbrowser search [TEXT] [--tag core --tag common] [--pos noun] [--favorites] [--page N]
    wordbrowser letters            # alphabet index of the current list
    wordbrowser show ID            # one entry as JSON
    wordbrowser add WORD [--definition ...] [--tag ...]
    wordbrowser remove ID
    wordbrowser fav KEY            # toggle favorite
    wordbrowser reset              # discard local edits and deletions
    wordbrowser export [PATH]      # write the effective list as words.json
    wordbrowser serve [--host H] [--port P]
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

import uvicorn

from wordbrowser.core.domain.models import QuerySpec
from wordbrowser.main import create_app
from wordbrowser.services import query_engine
from wordbrowser.shared.config import settings
from wordbrowser.shared.container import Container
from wordbrowser.shared.logging_setup import init_logging


class Colors:
    GREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"


def log(msg: str, color: str = Colors.ENDC) -> None:
    print(f"{color}{msg}{Colors.ENDC}")


def _warn_on_persist_failure(container: Container) -> None:
    store = container.word_store()
    store.on_persist_failure = lambda err: log(f"⚠️  Not saved: {err}", Colors.WARNING)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wordbrowser", description="Browse and edit a JSON word list")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    search = subparsers.add_parser("search", help="Filter, sort and page the word list")
    search.add_argument("text", nargs="?", default="", help="Substring to look for")
    search.add_argument("--tag", dest="tags", action="append", default=None, help="Accepted tag (repeatable)")
    search.add_argument("--default-tags", action="store_true", help="Use the configured default tag set")
    search.add_argument("--pos", default=None, help="Exact part of speech")
    search.add_argument("--favorites", action="store_true", help="Only favorites")
    search.add_argument("--letter", default=None, help="Alphabet index letter (overrides TEXT)")
    search.add_argument("--page", type=int, default=0, help="Zero-based page index")
    search.add_argument("--page-size", type=int, default=settings.DEFAULT_PAGE_SIZE)

    subparsers.add_parser("letters", help="Print the alphabet index")

    show = subparsers.add_parser("show", help="Print one entry as JSON")
    show.add_argument("id")

    add = subparsers.add_parser("add", help="Add or edit a local entry")
    add.add_argument("word")
    add.add_argument("--id", default=None, help="Existing id to edit")
    add.add_argument("--pos", default="")
    add.add_argument("--definition", default="")
    add.add_argument("--usage", default="")
    add.add_argument("--etymology", default="")
    add.add_argument("--tag", dest="tags", action="append", default=[])
    add.add_argument("--related", action="append", default=[])
    add.add_argument("--icon", default=None, help="file name, svg:<markup> or char:<c>")

    remove = subparsers.add_parser("remove", help="Delete an entry")
    remove.add_argument("id")

    fav = subparsers.add_parser("fav", help="Toggle a favorite")
    fav.add_argument("key")

    subparsers.add_parser("reset", help="Discard local edits and deletions")

    export = subparsers.add_parser("export", help="Write the effective list to a JSON file")
    export.add_argument("path", nargs="?", default="words.json")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser


def _cmd_search(container: Container, args: argparse.Namespace) -> int:
    store = container.word_store()
    tags = args.tags or (settings.DEFAULT_TAGS if args.default_tags else [])
    spec = QuerySpec(
        text=args.text,
        tags=frozenset(tags),
        pos=args.pos,
        favorites_only=args.favorites,
        page_index=max(args.page, 0),
        page_size=max(args.page_size, 1),
    )
    if args.letter is not None:
        spec = query_engine.select_letter(spec, args.letter)

    page = query_engine.query(store.effective, spec, store.favorites)
    if not page.items:
        log("No words found.")
    for entry in page.items:
        star = "★" if store.is_favorite(entry.id) or store.is_favorite(entry.word) else " "
        pos = f" ({entry.pos})" if entry.pos else ""
        log(f"{star} {entry.word}{pos}: {entry.definition}")
    more = " (more)" if page.has_more else ""
    log(f"-- {len(page.items)} of {page.total}{more}")
    return 0


def _run(container: Container, args: argparse.Namespace) -> int:
    store = container.word_store()

    if args.command == "search":
        return _cmd_search(container, args)

    if args.command == "letters":
        log(" ".join(query_engine.alphabet_index(store.effective)))
        return 0

    if args.command == "show":
        entry = store.get(args.id)
        if entry is None:
            log(f"❌ No entry '{args.id}'", Colors.FAIL)
            return 1
        print(json.dumps(entry.to_raw(), indent=2, ensure_ascii=False))
        return 0

    if args.command == "add":
        raw = {
            "id": args.id,
            "word": args.word,
            "pos": args.pos,
            "definition": args.definition,
            "usage": args.usage,
            "etymology": args.etymology,
            "tags": args.tags,
            "related": args.related,
            "icon": args.icon,
        }
        try:
            entry = store.upsert(raw)
        except ValueError as e:
            log(f"❌ {e}", Colors.FAIL)
            return 1
        log(f"✅ Saved '{entry.word}' ({entry.id})", Colors.GREEN)
        return 0

    if args.command == "remove":
        if not store.remove(args.id):
            log(f"❌ No entry '{args.id}'", Colors.FAIL)
            return 1
        log(f"✅ Removed '{args.id}'", Colors.GREEN)
        return 0

    if args.command == "fav":
        state = store.toggle_favorite(args.key)
        log(f"{'★' if state else '☆'} {args.key}")
        return 0

    if args.command == "reset":
        store.reset()
        log(f"✅ Local edits discarded; {len(store)} entries", Colors.GREEN)
        return 0

    if args.command == "export":
        path = container.export_words().write(args.path)
        log(f"✅ Exported {len(store)} entries to {path}", Colors.GREEN)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None, container: Optional[Container] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    init_logging()

    if args.command == "serve":
        uvicorn.run(create_app(container), host=args.host, port=args.port)
        return 0

    container = container or Container()
    _warn_on_persist_failure(container)

    result = container.load_dataset().execute()
    if not result.ok:
        log(f"⚠️  {result.error}", Colors.WARNING)

    return _run(container, args)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        log("\n🛑 Aborted by user.", Colors.WARNING)
