"""Unit tests for the Pydantic domain models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.models.files import (
    ACCEPTED_MIME_TYPE,
    FileListItem,
    FileRecord,
    NewFileRecord,
    UploadMetadata,
    UploadResult,
)
from src.models.pipeline import IngestionStage
from src.models.user import (
    DEFAULT_VOICE_ID,
    AudioQuality,
    UserSettings,
    UserSettingsUpdate,
)


def _record(**overrides) -> FileRecord:
    values = {
        "id": "f-1",
        "user_id": "u-1",
        "original_filename": "book.pdf",
        "file_size": 1024,
        "audio_url": "https://cdn/x.mp3",
        "audio_duration": 12,
        "summary": "A summary.",
        "created_at": datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc),
    }
    values.update(overrides)
    return FileRecord(**values)


class TestFileModels:
    def test_upload_metadata_defaults_to_pdf(self) -> None:
        assert UploadMetadata(original_name="a.pdf").mime_type == ACCEPTED_MIME_TYPE

    def test_upload_metadata_rejects_negative_size(self) -> None:
        with pytest.raises(ValidationError):
            UploadMetadata(original_name="a.pdf", declared_size=-1)

    def test_records_are_frozen(self) -> None:
        record = _record()
        with pytest.raises(ValidationError):
            record.listen_count = 5  # type: ignore[misc]

    def test_new_record_listen_count_defaults_to_zero(self) -> None:
        new = NewFileRecord(
            user_id="u-1",
            original_filename="b.pdf",
            file_size=1,
            audio_url="u",
            audio_duration=0,
            summary="s",
        )
        assert new.listen_count == 0

    def test_file_record_rejects_negative_listen_count(self) -> None:
        with pytest.raises(ValidationError):
            _record(listen_count=-1)

    def test_to_list_item_projects_fields(self) -> None:
        item = _record(listen_count=3).to_list_item()
        assert isinstance(item, FileListItem)
        assert item.filename == "book.pdf"
        assert item.listen_count == 3
        assert item.audio_duration == 12
        assert item.file_size == 1024

    def test_list_item_cache_value_is_json_safe(self) -> None:
        value = _record().to_list_item().to_cache_value()
        assert value["created_at"].startswith("2024-03-01T09:30:00")
        assert FileListItem.model_validate(value) == _record().to_list_item()

    def test_upload_result_fields(self) -> None:
        result = UploadResult(summary="s", audio_url="u", duration=2, file_size=10)
        assert result.model_dump() == {
            "summary": "s",
            "audio_url": "u",
            "duration": 2,
            "file_size": 10,
        }


class TestUserModels:
    def test_settings_defaults(self) -> None:
        settings = UserSettings()
        assert settings.audio_quality is AudioQuality.HIGH
        assert settings.voice_id == DEFAULT_VOICE_ID

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("premium", AudioQuality.PREMIUM),
            ("HIGH", AudioQuality.HIGH),
            (" standard ", AudioQuality.STANDARD),
            ("ultra", AudioQuality.STANDARD),
            ("", AudioQuality.STANDARD),
            (None, AudioQuality.STANDARD),
            (AudioQuality.PREMIUM, AudioQuality.PREMIUM),
        ],
    )
    def test_audio_quality_parse(self, raw, expected: AudioQuality) -> None:
        assert AudioQuality.parse(raw) is expected

    def test_update_rejects_unknown_quality(self) -> None:
        with pytest.raises(ValidationError):
            UserSettingsUpdate(audio_quality="ultra")

    def test_update_rejects_empty_voice(self) -> None:
        with pytest.raises(ValidationError):
            UserSettingsUpdate(voice_id="")

    def test_update_exclude_none(self) -> None:
        update = UserSettingsUpdate(voice_id="v-2")
        assert update.model_dump(exclude_none=True) == {"voice_id": "v-2"}


class TestIngestionStage:
    def test_stage_order(self) -> None:
        assert [s.value for s in IngestionStage] == [
            "VALIDATE",
            "EXTRACT",
            "SUMMARIZE",
            "SETTINGS",
            "SYNTHESIZE",
            "STORE_AUDIO",
            "WRITE_RECORD",
            "INVALIDATE_CACHE",
        ]
