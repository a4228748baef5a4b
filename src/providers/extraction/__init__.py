"""Document text extractors.

PyMuPDFTextExtractor implements ITextExtractor for PDF uploads.
"""

from src.providers.extraction.pymupdf_extractor import PyMuPDFTextExtractor

__all__ = ["PyMuPDFTextExtractor"]
