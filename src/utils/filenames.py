"""Object names for generated audio files.

Every generated name starts with a fresh UUID so a retried upload can never
collide with the artifact of an earlier, partially failed attempt.
"""

from __future__ import annotations

import re
import uuid

_UNSAFE_CHARS_RE = re.compile(r"[^a-zA-Z0-9._\-]")
_EXTENSION_RE = re.compile(r"\.[^/.]+$")
_MAX_STEM_LENGTH = 120


def sanitize_stem(filename: str) -> str:
    """Return the basename of *filename* without extension, made key-safe.

    Directory components are stripped, the last extension is removed and
    every character outside ``[a-zA-Z0-9._-]`` becomes ``_``.
    """
    basename = filename.replace("\\", "/").rsplit("/", 1)[-1]
    stem = _EXTENSION_RE.sub("", basename)
    safe = _UNSAFE_CHARS_RE.sub("_", stem).strip("._")
    return safe[:_MAX_STEM_LENGTH] or "document"


def audio_object_name(original_filename: str, extension: str = "mp3") -> str:
    """Build a globally unique object name for the narration of *original_filename*."""
    return f"{uuid.uuid4()}-{sanitize_stem(original_filename)}.{extension}"
