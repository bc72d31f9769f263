"""CLI entry-point: ``python -m hntrends tags|search|ingest FILE``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from hntrends import config
from hntrends.ingest import stories_from_items
from hntrends.lexicon import LexiconError
from hntrends.models import SearchFilter, Story
from hntrends.search import filter_results, highlight_matches, search_stories
from hntrends.tags import extract_trending_tags

logger = logging.getLogger(__name__)


def _setup_logging() -> None:
    level = logging.getLevelName(config.LOG_LEVEL)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.LOG_LEVEL}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def _read_json_list(path: Path) -> list[Any]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array, got {type(data).__name__}")
    return data


def load_stories(path: Path, raw: bool = False) -> list[Story]:
    """Load ``Story`` records (or raw API items when *raw*) from a JSON file."""
    data = _read_json_list(path)
    if raw:
        return stories_from_items(data)
    stories = [Story.model_validate(obj) for obj in data]
    logger.info("Loaded %d stories from %s", len(stories), path)
    return stories


def _dump(payload: Any) -> None:
    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def _cmd_tags(args: argparse.Namespace) -> None:
    stories = load_stories(args.file, raw=args.raw)
    tags = extract_trending_tags(stories, limit=args.limit)
    logger.info("Top tag: %s", tags[0].name if tags else "(none)")
    _dump([t.model_dump() for t in tags])


def _cmd_search(args: argparse.Namespace) -> None:
    stories = load_stories(args.file, raw=args.raw)
    results = filter_results(search_stories(stories, args.query), args.query, args.filter)
    logger.info("%d of %d stories match %r", len(results), len(stories), args.query)

    out: list[dict[str, Any]] = []
    for story in results:
        row = story.model_dump(by_alias=True, exclude_none=True)
        if args.highlight:
            row["title"] = highlight_matches(story.title, args.query)
        out.append(row)
    _dump(out)


def _cmd_ingest(args: argparse.Namespace) -> None:
    stories = stories_from_items(_read_json_list(args.file))
    _dump([s.model_dump(by_alias=True, exclude_none=True) for s in stories])


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="hntrends",
        description="Trending topics and search over a batch of news stories.",
    )
    sub = parser.add_subparsers(dest="command")

    # ── tags ───────────────────────────────────────────────────────────
    tags_parser = sub.add_parser("tags", help="Rank trending topic tags.")
    tags_parser.add_argument("file", type=Path, help="JSON array of stories.")
    tags_parser.add_argument(
        "--limit",
        type=_non_negative_int,
        default=config.TAG_LIMIT,
        help=f"Maximum number of tags (default: {config.TAG_LIMIT}).",
    )
    tags_parser.add_argument(
        "--raw",
        action="store_true",
        help="Input holds raw API items rather than stories.",
    )
    tags_parser.set_defaults(func=_cmd_tags)

    # ── search ─────────────────────────────────────────────────────────
    search_parser = sub.add_parser("search", help="Search stories by free text.")
    search_parser.add_argument("file", type=Path, help="JSON array of stories.")
    search_parser.add_argument("query", help="Whitespace-separated search terms.")
    search_parser.add_argument(
        "--filter",
        choices=[f.value for f in SearchFilter],
        default=SearchFilter.ALL.value,
        help="Narrow results (default: all).",
    )
    search_parser.add_argument(
        "--highlight",
        action="store_true",
        help="Wrap matched title text in <mark> tags.",
    )
    search_parser.add_argument(
        "--raw",
        action="store_true",
        help="Input holds raw API items rather than stories.",
    )
    search_parser.set_defaults(func=_cmd_search)

    # ── ingest ─────────────────────────────────────────────────────────
    ingest_parser = sub.add_parser("ingest", help="Convert raw API items to stories.")
    ingest_parser.add_argument("file", type=Path, help="JSON array of raw items.")
    ingest_parser.set_defaults(func=_cmd_ingest)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        _setup_logging()
        args.func(args)
    except (OSError, ValueError, LexiconError, ValidationError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
