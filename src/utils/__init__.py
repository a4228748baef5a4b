"""Utility modules for the PDF narration service.

Available utility modules (all re-exported here for convenience):

- **errors** -- Exception hierarchy rooted at NarratorError; every error
  carries an ErrorKind tag that decides how the API layer surfaces it.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **text_metrics** -- Word counting and the words-to-seconds narration
  length estimate stored on every file record.
- **filenames** -- Upload filename sanitising and unique audio object names.
"""

# -- Exception hierarchy ---------------------------------------------------
from src.utils.errors import (
    ConfigurationError,
    DependencyError,
    ErrorKind,
    NarratorError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

# -- Upload / object naming ------------------------------------------------
from src.utils.filenames import audio_object_name, sanitize_stem

# -- Structured logging setup ----------------------------------------------
from src.utils.logging import configure_logging, get_logger

# -- Narration length ------------------------------------------------------
from src.utils.text_metrics import estimate_duration, word_count

__all__ = [
    "ConfigurationError",
    "DependencyError",
    "ErrorKind",
    "NarratorError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "audio_object_name",
    "configure_logging",
    "estimate_duration",
    "get_logger",
    "sanitize_stem",
    "word_count",
]
