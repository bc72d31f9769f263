"""Trending-tag extraction: weighted keyword voting over a batch of stories."""

from __future__ import annotations

import logging
import re
from collections import defaultdict

from hntrends import config
from hntrends.lexicon import Lexicon, default_lexicon
from hntrends.models import Story, TagCount

logger = logging.getLogger(__name__)

_TOKEN_SPLIT_RE = re.compile(r"[^a-z0-9]+")
_MIN_TOKEN_LEN = 3

_GPT_VERSION_RE = re.compile(r"\bgpt-\d+(?:\.\d+)?o?\b")
_STOCK_TALK_RE = re.compile(r"\bstocks?\b|\btrading\b|\bmarket\b")

# ── Weights (ordered by signal confidence) ─────────────────────────────────
_W_EXPLICIT_TAG = 3
_W_TITLE_TERM = 2
_W_DOMAIN_TERM = 1
_W_TITLE_PHRASE = 4
_W_COMPOUND = 3


def tokenize(text: str) -> list[str]:
    """Lower-case *text*, split on non-alphanumeric runs, drop short tokens."""
    return [w for w in _TOKEN_SPLIT_RE.split(text.lower()) if len(w) >= _MIN_TOKEN_LEN]


def _detect_products(
    counts: dict[str, int],
    title: str,
    words: set[str],
    domain: str,
    lexicon: Lexicon,
) -> None:
    """Fixed rules for mentions that plain tokenization misses."""
    if "github" in title or "github" in domain:
        counts["github"] += 2

    if _GPT_VERSION_RE.search(title) or "openai" in title:
        counts["ai"] += 2
        counts["openai"] += 3

    if "aws" in words or "aws.amazon.com" in domain:
        counts["aws"] += 2
        counts["cloud"] += 1

    for company in ("google", "microsoft"):
        if company in words:
            counts[company] += 2

    for concept in lexicon.concepts:
        if concept in words:
            counts[concept] += 2

    if "bitcoin" in title or "btc" in words:
        counts["bitcoin"] += 3
        counts["crypto"] += 1
    if "ethereum" in title or "eth" in words:
        counts["ethereum"] += 3
        counts["crypto"] += 1


def _detect_markets(
    counts: dict[str, int],
    title: str,
    title_words: list[str],
    domain: str,
    lexicon: Lexicon,
) -> None:
    if _STOCK_TALK_RE.search(title):
        counts["stocks"] += 2
        counts["investing"] += 1

    if domain and any(kw in domain for kw in lexicon.finance_domains):
        counts["finance"] += 2
        counts["stocks"] += 1

    for word in title_words:
        if word in lexicon.tickers:
            counts["stocks"] += 2
            counts[word] += 3


def _score_story(
    counts: dict[str, int],
    story: Story,
    lexicon: Lexicon,
    terms: frozenset[str],
) -> None:
    for tag in story.tags or []:
        counts[tag.lower()] += _W_EXPLICIT_TAG

    title = story.title.lower()
    domain = (story.domain or "").lower()
    title_words = tokenize(title)
    domain_words = tokenize(domain)
    word_set = set(title_words)

    for word in title_words:
        if word in terms:
            counts[word] += _W_TITLE_TERM

    for word in domain_words:
        if word in terms:
            counts[word] += _W_DOMAIN_TERM

    phrases = lexicon.phrases
    for phrase in phrases:
        if phrase in title:
            counts[phrase] += _W_TITLE_PHRASE

    for phrase in phrases:
        if phrase.replace(" ", "") in word_set:
            counts[phrase] += _W_COMPOUND

    _detect_products(counts, title, word_set, domain, lexicon)
    _detect_markets(counts, title, title_words, domain, lexicon)


def extract_trending_tags(
    stories: list[Story],
    lexicon: Lexicon | None = None,
    limit: int | None = None,
) -> list[TagCount]:
    """Rank topic tags across *stories* by aggregate weighted score.

    Evidence per story: explicit tags (+3), lexicon terms in the title (+2) or
    domain (+1), multi-word phrases in the title (+4) or written as one word
    (+3), plus the fixed product/market detectors. Names are then collapsed
    through the synonym table and the top *limit* (default 30) are returned,
    ties kept in first-seen order.
    """
    limit = config.TAG_LIMIT if limit is None else limit
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    if not stories:
        return []

    lexicon = lexicon or default_lexicon()
    terms = lexicon.term_set

    counts: dict[str, int] = defaultdict(int)
    for story in stories:
        _score_story(counts, story, lexicon, terms)

    merged: dict[str, int] = defaultdict(int)
    for name, count in counts.items():
        merged[lexicon.normalize(name)] += count

    ranked = sorted(
        ((name, count) for name, count in merged.items() if count > 0),
        key=lambda kv: kv[1],
        reverse=True,
    )
    logger.debug(
        "Extracted %d raw / %d merged tags from %d stories",
        len(counts),
        len(merged),
        len(stories),
    )
    return [TagCount(name=name, count=count) for name, count in ranked[:limit]]
