"""Ingestion pipeline stage model.

The pipeline progresses through these stages in order:
    VALIDATE → EXTRACT → SUMMARIZE → SETTINGS → SYNTHESIZE →
    STORE_AUDIO → WRITE_RECORD → INVALIDATE_CACHE

SETTINGS is started concurrently with EXTRACT but awaited (and therefore
reported) only right before SYNTHESIZE.  The stage name is attached to
every log event and to every translated error so a failed upload can be
traced to exactly one collaborator call.
"""

from __future__ import annotations

from enum import Enum


class IngestionStage(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """Stages of the upload-to-narration pipeline."""

    VALIDATE = "VALIDATE"                   # MIME type + presence of bytes
    EXTRACT = "EXTRACT"                     # Document bytes → plain text
    SUMMARIZE = "SUMMARIZE"                 # Plain text → narration summary
    SETTINGS = "SETTINGS"                   # Voice / quality preferences
    SYNTHESIZE = "SYNTHESIZE"               # Summary → audio bytes
    STORE_AUDIO = "STORE_AUDIO"             # Audio bytes → public URL
    WRITE_RECORD = "WRITE_RECORD"           # Durability commit point
    INVALIDATE_CACHE = "INVALIDATE_CACHE"   # Drop the user's list cache
