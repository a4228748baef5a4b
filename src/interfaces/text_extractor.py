"""Abstract base class for document text extractors.

A text extractor turns the raw bytes of an uploaded document into plain
text.  Only PDF is accepted today, but the contract is format-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ITextExtractor(ABC):
    """Contract for document → plain-text conversion."""

    @abstractmethod
    async def extract_text(self, data: bytes) -> str:
        """Extract the concatenated text of every page in *data*.

        Returns an empty (or whitespace-only) string for documents that
        parse but contain no text layer, e.g. scanned images.

        Raises
        ------
        src.utils.errors.ParseError
            If the bytes are not a readable document (corrupt, encrypted,
            or a different format).
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this extractor."""
