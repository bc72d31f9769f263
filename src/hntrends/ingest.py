"""Map raw news-API items onto ``Story`` records (no network access)."""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any
from urllib.parse import urlparse

from hntrends.models import HNItem, Story

logger = logging.getLogger(__name__)

ITEM_URL = "https://news.ycombinator.com/item?id={id}"
PREVIEW_CHARS = 180

# Literal keywords tagged at ingestion time, before the extractor runs.
_INITIAL_KEYWORDS: tuple[str, ...] = (
    "react", "javascript", "python", "ai", "ml", "rust", "golang", "webdev",
)


def extract_domain(url: str | None) -> str | None:
    """Return the host of *url* without a leading ``www.``, or None."""
    if not url:
        return None
    try:
        host = urlparse(url).hostname
    except ValueError:
        logger.debug("Unparsable url: %s", url)
        return None
    if not host:
        return None
    return host.removeprefix("www.")


def format_relative_time(timestamp: int, now: float | None = None) -> str:
    """Render a UNIX timestamp as ``just now`` / ``N minutes ago`` / … / a date."""
    now = time.time() if now is None else now
    diff = now - timestamp

    if diff < 60:
        return "just now"
    if diff < 3600:
        return f"{int(diff // 60)} minutes ago"
    if diff < 86400:
        return f"{int(diff // 3600)} hours ago"
    if diff < 604800:
        return f"{int(diff // 86400)} days ago"
    return datetime.fromtimestamp(timestamp, UTC).date().isoformat()


def initial_tags(title: str, text: str | None = None) -> list[str] | None:
    tags: list[str] = []
    if title.startswith("Show HN:"):
        tags.append("showhn")
    elif title.startswith("Ask HN:"):
        tags.append("askhn")

    title_lower = title.lower()
    text_lower = (text or "").lower()
    for keyword in _INITIAL_KEYWORDS:
        if keyword in title_lower or keyword in text_lower:
            tags.append(keyword)

    return tags or None


def _preview(text: str | None) -> str | None:
    if not text:
        return None
    if len(text) > PREVIEW_CHARS:
        return text[:PREVIEW_CHARS] + "..."
    return text


def story_from_item(item: HNItem | dict[str, Any], now: float | None = None) -> Story:
    """Convert one raw item into a ``Story``."""
    if not isinstance(item, HNItem):
        item = HNItem.model_validate(item)

    return Story(
        id=item.id,
        title=item.title,
        url=item.url or ITEM_URL.format(id=item.id),
        domain=extract_domain(item.url),
        points=item.score,
        user=item.by,
        time=format_relative_time(item.time, now=now),
        comments_count=item.descendants or 0,
        preview=_preview(item.text),
        tags=initial_tags(item.title, item.text),
    )


def stories_from_items(
    items: list[HNItem | dict[str, Any]],
    now: float | None = None,
) -> list[Story]:
    """Convert raw items, keeping only those of type ``story``."""
    parsed = [i if isinstance(i, HNItem) else HNItem.model_validate(i) for i in items]
    stories = [story_from_item(i, now=now) for i in parsed if i.type == "story"]
    logger.info("Ingested %d stories from %d items", len(stories), len(items))
    return stories
