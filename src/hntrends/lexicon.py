"""Load the topic vocabulary (terms, synonyms, tickers) from YAML."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from hntrends import config

logger = logging.getLogger(__name__)


class LexiconError(ValueError):
    """Raised when a lexicon file is missing or malformed."""


class Lexicon(BaseModel):
    """Immutable view of the vocabulary the tag extractor consults."""

    model_config = ConfigDict(frozen=True)

    terms: tuple[str, ...] = ()
    synonyms: dict[str, str] = Field(default_factory=dict)
    tickers: frozenset[str] = frozenset()
    finance_domains: tuple[str, ...] = ()
    concepts: tuple[str, ...] = ()

    @property
    def term_set(self) -> frozenset[str]:
        return frozenset(self.terms)

    @property
    def phrases(self) -> tuple[str, ...]:
        """Multi-word terms, in lexicon order."""
        return tuple(t for t in self.terms if " " in t)

    def normalize(self, name: str) -> str:
        return self.synonyms.get(name, name)


def _str_list(raw: Any, key: str, path: Path) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise LexiconError(f"{path}: '{key}' must be a list, got {type(raw).__name__}")
    return [str(item).strip().lower() for item in raw if str(item).strip()]


def _flatten_terms(raw: Any, path: Path) -> tuple[str, ...]:
    """Flatten grouped (or plain list) terms, keeping first-seen order."""
    if isinstance(raw, dict):
        groups = list(raw.items())
    else:
        groups = [("terms", raw)]

    seen: dict[str, None] = {}
    for group, items in groups:
        for term in _str_list(items, f"terms.{group}", path):
            seen.setdefault(term, None)
    return tuple(seen)


def load_lexicon(path: Path | None = None) -> Lexicon:
    """Parse a lexicon YAML file.

    Expected top-level keys: ``terms`` (a list, or a mapping of group-name →
    list), ``synonyms`` (mapping), ``tickers``, ``finance_domains`` and
    ``concepts`` (lists). Only ``terms`` is required.
    """
    lexicon_path = Path(path) if path is not None else config.LEXICON_PATH
    if not lexicon_path.exists():
        raise LexiconError(f"Lexicon file not found: {lexicon_path}")

    try:
        with open(lexicon_path, encoding="utf-8") as fh:
            cfg = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise LexiconError(f"Could not parse {lexicon_path}: {exc}") from exc

    if not isinstance(cfg, dict) or "terms" not in cfg:
        raise LexiconError(f"{lexicon_path}: missing top-level 'terms'")

    raw_synonyms = cfg.get("synonyms") or {}
    if not isinstance(raw_synonyms, dict):
        raise LexiconError(f"{lexicon_path}: 'synonyms' must be a mapping")

    lexicon = Lexicon(
        terms=_flatten_terms(cfg["terms"], lexicon_path),
        synonyms={
            str(k).strip().lower(): str(v).strip().lower()
            for k, v in raw_synonyms.items()
        },
        tickers=frozenset(_str_list(cfg.get("tickers"), "tickers", lexicon_path)),
        finance_domains=tuple(
            _str_list(cfg.get("finance_domains"), "finance_domains", lexicon_path)
        ),
        concepts=tuple(_str_list(cfg.get("concepts"), "concepts", lexicon_path)),
    )
    logger.debug(
        "Loaded lexicon %s: %d terms (%d phrases), %d synonyms",
        lexicon_path,
        len(lexicon.terms),
        len(lexicon.phrases),
        len(lexicon.synonyms),
    )
    return lexicon


@lru_cache(maxsize=8)
def _cached(path: Path) -> Lexicon:
    return load_lexicon(path)


def default_lexicon(path: Path | None = None) -> Lexicon:
    """Return the configured lexicon, parsed once per path."""
    return _cached(Path(path) if path is not None else config.LEXICON_PATH)
