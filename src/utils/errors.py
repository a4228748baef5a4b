"""Custom exception hierarchy for the PDF narration service.

All application exceptions inherit from :class:`NarratorError`, which
carries an optional ``provider_name`` so error handlers can identify which
external collaborator (e.g. "openai", "elevenlabs", "supabase-storage")
caused the failure, and an :class:`ErrorKind` tag that tells the API
boundary how the failure may be surfaced.

The hierarchy is organized by error kind:

    NarratorError  (base -- catch-all for any service error)
    +-- ValidationError        (caller-fixable input problem)
    +-- UnauthorizedError      (missing / invalid / expired credential)
    +-- NotFoundError          (missing record, or owned by someone else)
    +-- ConfigurationError     (startup / missing config)
    +-- DependencyError        (any external collaborator failure)
        +-- ParseError             (text extractor rejected the document)
        +-- LLMError               (summarization call failed)
        +-- SpeechSynthesisError   (text-to-speech call failed)
        +-- StorageError           (object store upload / delete failed)
        +-- RecordStoreError       (record store read / write failed)

Validation and authorization failures are informative and cross the API
boundary verbatim.  Dependency failures are logged in full server-side and
surfaced only as :data:`GENERIC_DEPENDENCY_MESSAGE`.
"""

from __future__ import annotations

from enum import Enum

GENERIC_DEPENDENCY_MESSAGE = "processing failed"


class ErrorKind(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """Tag carried by every :class:`NarratorError`."""

    VALIDATION = "VALIDATION"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    DEPENDENCY = "DEPENDENCY"
    CONFIGURATION = "CONFIGURATION"


class NarratorError(Exception):
    """Base exception for all service errors.

    Every subclass carries a human-readable ``message``, an optional
    ``provider_name`` identifying which external service triggered the
    error, and a class-level ``kind``.  The ``__str__`` method prefixes the
    provider name in brackets for structured log output, e.g.
    ``[elevenlabs] HTTP 500``.
    """

    kind: ErrorKind = ErrorKind.DEPENDENCY

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    @property
    def is_public(self) -> bool:
        """Whether ``message`` may be shown to the caller unchanged."""
        return self.kind in (ErrorKind.VALIDATION, ErrorKind.NOT_FOUND)

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Caller-facing errors
# ---------------------------------------------------------------------------


class ValidationError(NarratorError):
    """Raised for caller-fixable input problems (wrong type, empty document)."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Invalid request",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UnauthorizedError(NarratorError):
    """Raised when the bearer credential is missing, invalid, or expired.

    The message is logged but never returned to the client; the API layer
    replies with a fixed "Unauthorized" body.
    """

    kind = ErrorKind.UNAUTHORIZED

    def __init__(
        self,
        message: str = "Unauthorized",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NotFoundError(NarratorError):
    """Raised when a record does not exist *or* belongs to another user.

    Both cases produce the same message so that callers cannot probe for
    the existence of other users' files.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str = "File not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(NarratorError):
    """Raised when configuration is invalid or missing at startup."""

    kind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External collaborator errors
# ---------------------------------------------------------------------------


class DependencyError(NarratorError):
    """Raised when any external collaborator fails.

    Subclasses narrow down *which* collaborator failed for logging; the
    caller only ever sees :data:`GENERIC_DEPENDENCY_MESSAGE`.
    """

    kind = ErrorKind.DEPENDENCY

    def __init__(
        self,
        message: str = GENERIC_DEPENDENCY_MESSAGE,
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ParseError(DependencyError):
    """Raised by a text extractor on malformed, encrypted, or unsupported input.

    The ingestion pipeline translates this into a :class:`ValidationError`
    because a corrupt upload is the caller's problem, not ours.
    """

    def __init__(
        self,
        message: str = "Document could not be parsed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class LLMError(DependencyError):
    """Raised when an LLM API call fails or returns an empty response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class SpeechSynthesisError(DependencyError):
    """Raised when the text-to-speech provider fails."""

    def __init__(
        self,
        message: str = "Text-to-speech conversion failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class StorageError(DependencyError):
    """Raised when an object-store upload or delete fails."""

    def __init__(
        self,
        message: str = "Object storage operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RecordStoreError(DependencyError):
    """Raised when the record store cannot be read or written."""

    def __init__(
        self,
        message: str = "Record store operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
