"""Free-text story search and match highlighting."""

from __future__ import annotations

import logging
import re

from hntrends.models import SearchFilter, Story

logger = logging.getLogger(__name__)

_INTERNAL_LINK_MARKER = "item?id="


def search_terms(query: str) -> list[str]:
    """Lower-case, trim and split *query* on whitespace."""
    return query.lower().split()


def _fields(story: Story) -> list[str]:
    fields = [story.title, story.user]
    if story.domain:
        fields.append(story.domain)
    if story.tags:
        fields.extend(story.tags)
    if story.preview:
        fields.append(story.preview)
    return [f.lower() for f in fields]


def search_stories(stories: list[Story], query: str) -> list[Story]:
    """Return the stories where any term appears in any searchable field.

    Searched fields: title, domain, user, tags and preview. Input order is
    kept. A blank query returns *stories* itself.
    """
    if not query.strip():
        return stories

    terms = search_terms(query)
    matches = [
        story
        for story in stories
        if any(term in field for field in _fields(story) for term in terms)
    ]
    logger.debug("Search %r: %d of %d stories matched", query, len(matches), len(stories))
    return matches


def highlight_matches(
    text: str,
    query: str,
    open_tag: str = "<mark>",
    close_tag: str = "</mark>",
) -> str:
    """Wrap every case-insensitive occurrence of a query term in *text*.

    All terms are matched in one pass, longest first, so overlapping terms
    (``rust`` / ``rustlang``) wrap a span once and never nest markers.
    """
    terms = sorted(set(search_terms(query)), key=lambda t: (-len(t), t))
    if not terms:
        return text

    pattern = re.compile("|".join(re.escape(t) for t in terms), re.IGNORECASE)
    return pattern.sub(lambda m: f"{open_tag}{m.group(0)}{close_tag}", text)


def _mutual_contains(value: str, query: str) -> bool:
    value, query = value.lower(), query.lower()
    return value in query or query in value


def filter_results(
    results: list[Story],
    query: str,
    kind: SearchFilter = SearchFilter.ALL,
) -> list[Story]:
    """Narrow search results to linked stories, author hits or domain hits."""
    kind = SearchFilter(kind)
    if kind is SearchFilter.STORIES:
        return [s for s in results if s.url and _INTERNAL_LINK_MARKER not in s.url]
    if kind is SearchFilter.USERS:
        return [s for s in results if _mutual_contains(s.user, query)]
    if kind is SearchFilter.DOMAINS:
        return [s for s in results if s.domain and _mutual_contains(s.domain, query)]
    return results
