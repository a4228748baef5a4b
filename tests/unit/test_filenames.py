"""Unit tests for audio object name generation."""

from __future__ import annotations

import re

from src.utils.filenames import audio_object_name, sanitize_stem

_UUID_PREFIX = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"


class TestSanitizeStem:
    def test_strips_extension(self) -> None:
        assert sanitize_stem("report.pdf") == "report"

    def test_only_last_extension_removed(self) -> None:
        assert sanitize_stem("archive.v2.pdf") == "archive.v2"

    def test_strips_directories(self) -> None:
        assert sanitize_stem("../../etc/passwd.pdf") == "passwd"
        assert sanitize_stem("C:\\Users\\me\\notes.pdf") == "notes"

    def test_replaces_unsafe_characters(self) -> None:
        assert sanitize_stem("Q3 report (final)!.pdf") == "Q3_report__final"

    def test_non_ascii_replaced(self) -> None:
        assert sanitize_stem("résumé.pdf") == "r_sum"

    def test_empty_falls_back(self) -> None:
        assert sanitize_stem("") == "document"
        assert sanitize_stem(".pdf") == "document"

    def test_length_capped(self) -> None:
        assert len(sanitize_stem("a" * 500 + ".pdf")) == 120


class TestAudioObjectName:
    def test_shape(self) -> None:
        name = audio_object_name("My Book.pdf")
        assert re.fullmatch(_UUID_PREFIX + r"-My_Book\.mp3", name)

    def test_unique_across_calls(self) -> None:
        names = {audio_object_name("same.pdf") for _ in range(50)}
        assert len(names) == 50

    def test_custom_extension(self) -> None:
        assert audio_object_name("x.pdf", extension="wav").endswith("-x.wav")
