"""Unit tests for word counting and narration duration estimates."""

from __future__ import annotations

import pytest

from src.utils.text_metrics import (
    SECONDS_PER_WORD,
    estimate_duration,
    estimate_narration_seconds,
    word_count,
)


class TestWordCount:
    def test_empty_string_is_zero(self) -> None:
        assert word_count("") == 0

    def test_whitespace_only_is_zero(self) -> None:
        assert word_count("  \n\t  ") == 0

    def test_counts_maximal_non_whitespace_runs(self) -> None:
        assert word_count("one  two\tthree\nfour") == 4

    def test_punctuation_stays_attached(self) -> None:
        assert word_count("Hello, world! -- done.") == 4

    def test_leading_and_trailing_whitespace_ignored(self) -> None:
        assert word_count("   alpha beta   ") == 2


class TestEstimateDuration:
    @pytest.mark.parametrize(
        ("words", "expected"),
        [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2), (5, 2), (150, 60), (1000, 400)],
    )
    def test_rounds_words_times_point_four(self, words: int, expected: int) -> None:
        assert estimate_duration(words) == expected

    def test_rate_is_150_words_per_minute(self) -> None:
        assert SECONDS_PER_WORD * 150 == pytest.approx(60.0)

    def test_returns_int(self) -> None:
        assert isinstance(estimate_duration(7), int)


class TestEstimateNarrationSeconds:
    def test_composes_count_and_estimate(self) -> None:
        text = " ".join(["word"] * 25)
        assert estimate_narration_seconds(text) == estimate_duration(word_count(text)) == 10

    def test_is_deterministic(self) -> None:
        text = "A short summary of a long document about ships."
        results = {estimate_narration_seconds(text) for _ in range(5)}
        assert len(results) == 1
