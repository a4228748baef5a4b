"""Domain models: re-exports all public model classes.

Other parts of the codebase can import directly from ``src.models``
(e.g. ``from src.models import FileRecord``) instead of the submodules:
    - files.py    : file records, list-view items, upload values
    - pipeline.py : ingestion stage enum
    - user.py     : identity, narration preferences, voices
"""

from __future__ import annotations

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
    AuthenticatedUser,
    UserSettings,
    UserSettingsUpdate,
    Voice,
)

__all__ = [
    "ACCEPTED_MIME_TYPE",
    "AudioQuality",
    "AuthenticatedUser",
    "DEFAULT_VOICE_ID",
    "FileListItem",
    "FileRecord",
    "IngestionStage",
    "NewFileRecord",
    "UploadMetadata",
    "UploadResult",
    "UserSettings",
    "UserSettingsUpdate",
    "Voice",
]
