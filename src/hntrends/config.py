"""Centralised configuration loaded from environment variables and dotenv."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── Paths ──────────────────────────────────────────────────────────────────
PACKAGE_DIR = Path(__file__).resolve().parent
BUNDLED_LEXICON: Path = PACKAGE_DIR / "lexicon.yml"

# ── Lexicon ────────────────────────────────────────────────────────────────
LEXICON_PATH: Path = Path(os.getenv("HNTRENDS_LEXICON", str(BUNDLED_LEXICON)))

# ── Ranking ────────────────────────────────────────────────────────────────
TAG_LIMIT: int = int(os.getenv("HNTRENDS_TAG_LIMIT", "30"))

# ── Logging ────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("HNTRENDS_LOG_LEVEL", "INFO").upper()
