"""Shared pytest fixtures for the narration service test suite."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import fitz
import pytest

from src.interfaces.file_record_provider import IFileRecordProvider
from src.interfaces.identity_provider import IIdentityProvider
from src.interfaces.llm_provider import ILLMProvider
from src.interfaces.object_store import IObjectStore
from src.interfaces.speech_provider import ISpeechProvider
from src.interfaces.text_extractor import ITextExtractor
from src.interfaces.user_settings_provider import IUserSettingsProvider
from src.models.files import FileRecord, NewFileRecord
from src.models.user import AudioQuality, AuthenticatedUser, UserSettings

SAMPLE_TEXT = (
    "The industrial revolution transformed manufacturing. Steam power replaced "
    "muscle, and factories replaced workshops across Britain and beyond."
)
SAMPLE_SUMMARY = "Steam power and factories reshaped how goods were made in Britain."


def make_pdf_bytes(*pages: str) -> bytes:
    """Build a small in-memory PDF with one text line per page."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def make_record(
    record_id: str = "file-1",
    user_id: str = "user-1",
    audio_url: str = "https://proj.supabase.co/storage/v1/object/public/audiobooks/abc-report.mp3",
    created_at: datetime | None = None,
    **overrides: Any,
) -> FileRecord:
    values: dict[str, Any] = {
        "id": record_id,
        "user_id": user_id,
        "original_filename": "report.pdf",
        "file_size": 2048,
        "audio_url": audio_url,
        "audio_duration": 5,
        "summary": SAMPLE_SUMMARY,
        "created_at": created_at or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    }
    values.update(overrides)
    return FileRecord(**values)


class InMemoryRecordStore(IFileRecordProvider):
    """Dict-backed record store used where tests need real read-after-write."""

    def __init__(self) -> None:
        self.records: dict[str, FileRecord] = {}
        self.insert_calls = 0
        self.list_calls = 0
        self._seq = 0

    async def initialize(self) -> None:
        return None

    async def insert(self, record: NewFileRecord) -> FileRecord:
        self.insert_calls += 1
        self._seq += 1
        stored = FileRecord(
            id=f"rec-{self._seq}",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc).replace(second=self._seq % 60),
            **record.model_dump(),
        )
        self.records[stored.id] = stored
        return stored

    async def get(self, record_id: str) -> FileRecord | None:
        return self.records.get(record_id)

    async def list_by_user(self, user_id: str) -> list[FileRecord]:
        self.list_calls += 1
        owned = [r for r in self.records.values() if r.user_id == user_id]
        return sorted(owned, key=lambda r: r.created_at, reverse=True)

    async def delete(self, record_id: str) -> None:
        self.records.pop(record_id, None)

    async def increment_listen_count(self, record_id: str) -> None:
        record = self.records[record_id]
        self.records[record_id] = record.model_copy(
            update={"listen_count": record.listen_count + 1}
        )

    def get_provider_name(self) -> str:
        return "in-memory"


# ---------------------------------------------------------------------------
# Users and settings
# ---------------------------------------------------------------------------


@pytest.fixture
def user() -> AuthenticatedUser:
    return AuthenticatedUser(id="user-1", email="reader@example.com")


@pytest.fixture
def user_settings() -> UserSettings:
    return UserSettings(
        full_name="Ada Reader",
        email="reader@example.com",
        audio_quality=AudioQuality.PREMIUM,
        voice_id="voice-xyz",
    )


@pytest.fixture
def tmp_db_path():
    """Path to a throwaway SQLite file, removed after the test."""
    tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    tmp.close()
    yield tmp.name
    os.unlink(tmp.name)


# ---------------------------------------------------------------------------
# Mock collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_extractor() -> MagicMock:
    extractor = MagicMock(spec=ITextExtractor)
    extractor.extract_text = AsyncMock(return_value=SAMPLE_TEXT)
    extractor.get_provider_name.return_value = "mock-extractor"
    return extractor


@pytest.fixture
def mock_llm() -> MagicMock:
    llm = MagicMock(spec=ILLMProvider)
    llm.complete = AsyncMock(return_value=SAMPLE_SUMMARY)
    llm.get_provider_name.return_value = "mock-llm"
    llm.is_available.return_value = True
    return llm


@pytest.fixture
def mock_speech() -> MagicMock:
    speech = MagicMock(spec=ISpeechProvider)
    speech.synthesize = AsyncMock(return_value=b"ID3-fake-mp3")
    speech.list_voices = AsyncMock(return_value=[])
    speech.get_provider_name.return_value = "mock-speech"
    return speech


@pytest.fixture
def mock_object_store() -> MagicMock:
    store = MagicMock(spec=IObjectStore)

    async def _put(name: str, data: bytes, content_type: str) -> str:
        return f"https://cdn.example.com/audiobooks/{name}"

    store.put = AsyncMock(side_effect=_put)
    store.delete = AsyncMock(return_value=None)
    store.name_from_url.side_effect = lambda url: url.rsplit("/", 1)[-1]
    store.get_provider_name.return_value = "mock-store"
    return store


@pytest.fixture
def mock_settings_provider(user_settings: UserSettings) -> MagicMock:
    provider = MagicMock(spec=IUserSettingsProvider)
    provider.get_settings = AsyncMock(return_value=user_settings)
    provider.update_settings = AsyncMock(return_value=user_settings)
    provider.get_provider_name.return_value = "mock-settings"
    return provider


@pytest.fixture
def mock_identity(user: AuthenticatedUser) -> MagicMock:
    identity = MagicMock(spec=IIdentityProvider)
    identity.verify_token = AsyncMock(return_value=user)
    identity.get_provider_name.return_value = "mock-identity"
    return identity


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()
