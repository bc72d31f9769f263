"""Unit tests for the trending-tag extractor."""

from pathlib import Path

import pytest

from hntrends.lexicon import load_lexicon
from hntrends.models import Story
from hntrends.tags import extract_trending_tags, tokenize


def _make(
    title: str,
    story_id: int = 1,
    domain: str | None = None,
    tags: list[str] | None = None,
) -> Story:
    return Story(
        id=story_id,
        title=title,
        url="https://example.com",
        domain=domain,
        points=1,
        user="x",
        time="now",
        comments_count=0,
        tags=tags,
    )


def _as_dict(stories: list[Story]) -> dict[str, int]:
    return {t.name: t.count for t in extract_trending_tags(stories)}


class TestTokenize:
    def test_splits_and_drops_short_tokens(self) -> None:
        assert tokenize("Show HN: a C++ tool!") == ["show", "tool"]

    def test_lowercases(self) -> None:
        assert tokenize("PyTorch vs TensorFlow") == ["pytorch", "tensorflow"]

    def test_empty(self) -> None:
        assert tokenize("") == []


class TestExtractTrendingTags:
    def test_empty(self) -> None:
        assert extract_trending_tags([]) == []

    def test_explicit_tag_dominates(self) -> None:
        result = extract_trending_tags([_make("hello world", tags=["rust"])])
        assert result[0].name == "rust"
        assert result[0].count == 3

    def test_explicit_tags_lowercased(self) -> None:
        story = _make("hello world", tags=["Rust"])
        assert _as_dict([story]) == {"rust": 3}
        assert story.tags == ["Rust"]

    def test_synonyms_merge_into_one_entry(self) -> None:
        stories = [
            _make("I love JS", story_id=1),
            _make("Why JavaScript wins", story_id=2),
        ]
        names = [t.name for t in extract_trending_tags(stories)]
        assert names.count("javascript") == 1
        assert "js" not in names

    def test_synonym_scores_are_summed(self) -> None:
        stories = [
            _make("hello world", story_id=1, tags=["js"]),
            _make("Why JavaScript wins", story_id=2),
        ]
        assert _as_dict(stories) == {"javascript": 5}

    def test_show_hn_scenario(self) -> None:
        story = _make(
            "Show HN: a machine learning tool",
            domain="github.com",
            tags=["showhn"],
        )
        result = [(t.name, t.count) for t in extract_trending_tags([story])]
        # ml: phrase +4; showhn: explicit +3; github: domain term +1, detector +2
        assert result == [("ml", 4), ("showhn", 3), ("github", 3)]

    def test_compound_word(self) -> None:
        assert _as_dict([_make("Intro to MachineLearning")]) == {"ml": 3}

    def test_domain_term_weight(self) -> None:
        assert _as_dict([_make("Notes", domain="rust-lang.org")]) == {"rust": 1}

    def test_gpt_version(self) -> None:
        assert _as_dict([_make("GPT-4 is here")]) == {"gpt": 2, "ai": 2, "openai": 3}

    def test_aws(self) -> None:
        assert _as_dict([_make("Scaling on AWS Lambda")]) == {"aws": 4, "cloud": 1}

    def test_programming_concepts(self) -> None:
        result = _as_dict([_make("Designing a REST API backend")])
        assert result == {"api": 4, "rest": 2, "backend": 2}

    def test_bitcoin(self) -> None:
        assert _as_dict([_make("Bitcoin hits new high")]) == {"bitcoin": 5, "crypto": 1}

    def test_ethereum_normalised_to_web3(self) -> None:
        assert _as_dict([_make("Ethereum merge")]) == {"web3": 5, "crypto": 1}

    def test_stock_language(self) -> None:
        result = _as_dict([_make("The stock market today")])
        # stock +2, "stock market" +4, detector +2 → all collapse onto stocks
        assert result == {"stocks": 8, "investing": 1}

    def test_finance_domain(self) -> None:
        result = _as_dict([_make("Quarterly notes", domain="bloomberg.com")])
        assert result == {"finance": 2, "stocks": 1}

    def test_tickers(self) -> None:
        result = _as_dict([_make("TSLA and GME rally")])
        assert result == {"stocks": 4, "tsla": 3, "gme": 3}

    def test_sorted_descending(self) -> None:
        stories = [
            _make("hello", story_id=1, tags=["a1"]),
            _make("hello", story_id=2, tags=["b2", "b2"]),
        ]
        result = extract_trending_tags(stories)
        assert [t.name for t in result] == ["b2", "a1"]

    def test_bounded_to_thirty(self) -> None:
        stories = [_make("hello", story_id=i, tags=[f"tag{i}"]) for i in range(40)]
        result = extract_trending_tags(stories)
        assert len(result) == 30
        assert all(t.count > 0 for t in result)
        # all tie at 3, so insertion order wins
        assert result[0].name == "tag0"
        assert result[-1].name == "tag29"

    def test_custom_limit(self) -> None:
        stories = [_make("hello", story_id=i, tags=[f"tag{i}"]) for i in range(10)]
        assert len(extract_trending_tags(stories, limit=5)) == 5

    def test_idempotent(self) -> None:
        stories = [
            _make("Show HN: Rust web framework", story_id=1, domain="github.com"),
            _make("PostgreSQL vs MySQL", story_id=2, tags=["database"]),
        ]
        assert extract_trending_tags(stories) == extract_trending_tags(stories)

    def test_custom_lexicon(self, tmp_path: Path) -> None:
        lex_file = tmp_path / "lexicon.yml"
        lex_file.write_text(
            "terms: [widget, gadget fest]\n"
            "synonyms: {widget: widgets}\n"
        )
        lexicon = load_lexicon(lex_file)
        result = extract_trending_tags([_make("Widget news from gadget fest")], lexicon=lexicon)
        assert {t.name: t.count for t in result} == {"widgets": 2, "gadget fest": 4}

    def test_google_and_microsoft(self) -> None:
        result = _as_dict([_make("Google and Microsoft news")])
        assert result == {"google": 2, "microsoft": 2}

    def test_aws_domain(self) -> None:
        # domain term +1, domain detector +2
        result = _as_dict([_make("Release notes", domain="aws.amazon.com")])
        assert result == {"aws": 3, "cloud": 1}

    def test_btc_token(self) -> None:
        # btc term +2 → bitcoin, detector +3
        assert _as_dict([_make("BTC climbs again")]) == {"bitcoin": 5, "crypto": 1}

    def test_eth_token(self) -> None:
        assert _as_dict([_make("ETH gas fees drop")]) == {"web3": 3, "crypto": 1}

    def test_trading_language(self) -> None:
        # trading term +2 → stocks, detector +2
        result = _as_dict([_make("Algorithmic trading basics")])
        assert result == {"stocks": 4, "investing": 1}

    def test_market_language(self) -> None:
        result = _as_dict([_make("The job market is cooling")])
        assert result == {"stocks": 2, "investing": 1}

    def test_tie_keeps_first_normalised_name(self) -> None:
        stories = [
            _make("hello", story_id=1, tags=["js"]),
            _make("hello", story_id=2, tags=["python"]),
        ]
        result = [(t.name, t.count) for t in extract_trending_tags(stories)]
        assert result == [("javascript", 3), ("python", 3)]

    def test_everyday_words_are_not_tickers(self) -> None:
        assert _as_dict([_make("A look under the hood of SQLite")]) == {"sqlite": 2}
        assert extract_trending_tags([_make("Spy pixels in emails")]) == []

    def test_negative_limit_rejected(self) -> None:
        with pytest.raises(ValueError):
            extract_trending_tags([_make("hello", tags=["rust"])], limit=-1)

    def test_zero_limit(self) -> None:
        assert extract_trending_tags([_make("hello", tags=["rust"])], limit=0) == []
