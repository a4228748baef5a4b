"""Derived metrics for narration summaries.

Pure helpers with no I/O.  The narration length is a heuristic estimate
from the summary's word count, not a measurement of the audio stream.
"""

from __future__ import annotations

# ~150 words per minute of narration.
SECONDS_PER_WORD = 0.4


def word_count(text: str) -> int:
    """Return the number of maximal non-whitespace runs in *text*.

    ``word_count("") == 0`` and whitespace-only text also counts as zero.
    """
    if not text:
        return 0
    return len(text.split())


def estimate_duration(words: int) -> int:
    """Estimate narration length in whole seconds for *words* words."""
    return round(words * SECONDS_PER_WORD)


def estimate_narration_seconds(text: str) -> int:
    """Shorthand for ``estimate_duration(word_count(text))``."""
    return estimate_duration(word_count(text))
