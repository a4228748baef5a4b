"""PDF text extractor backed by PyMuPDF.

Reads the upload straight from memory (no temp file), concatenates the text
layer of every page, and reports unreadable input as :class:`ParseError`.
PyMuPDF is synchronous, so parsing runs in a worker thread to keep the
event loop free during large uploads.
"""

from __future__ import annotations

import asyncio

import fitz  # PyMuPDF -- the "fitz" import name is a PyMuPDF convention
import structlog

from src.interfaces.text_extractor import ITextExtractor
from src.utils.errors import ParseError

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "pymupdf"


class PyMuPDFTextExtractor(ITextExtractor):
    """Extracts plain text from PDF bytes with PyMuPDF."""

    async def extract_text(self, data: bytes) -> str:
        # Nothing to parse; the caller reports this as "no extractable text".
        if not data:
            return ""
        return await asyncio.to_thread(self._extract_sync, data)

    @staticmethod
    def _extract_sync(data: bytes) -> str:
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as exc:
            logger.warning("pdf_open_failed", error=str(exc), size=len(data))
            raise ParseError(
                message=f"Could not open PDF: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        try:
            if doc.needs_pass:
                raise ParseError(
                    message="PDF is encrypted",
                    provider_name=_PROVIDER_NAME,
                )
            pages = [page.get_text("text") for page in doc]
        except ParseError:
            raise
        except Exception as exc:
            raise ParseError(
                message=f"Could not read PDF pages: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        finally:
            doc.close()

        text = "\n".join(pages)
        logger.info("pdf_text_extracted", pages=len(pages), chars=len(text))
        return text

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME
