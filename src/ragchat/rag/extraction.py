"""Text extraction from uploaded files."""

import asyncio
import logging
from pathlib import Path
from typing import Iterable

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from .base import BaseTextExtractor
from .chunking import normalize_text
from .document import DocumentSource
from .exceptions import ExtractionError

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {
    ".txt", ".md", ".rst", ".csv", ".json", ".yaml", ".yml", ".xml", ".html",
}


def clean_pdf_text(pages: Iterable[str]) -> str:
    """Join page texts into one string with normalized whitespace."""
    return normalize_text(" ".join(pages))


class FileTextExtractor(BaseTextExtractor):
    """Extract text from PDF and plain-text files on disk.

    The file type is chosen by the suffix of the source name, falling back
    to the suffix of its path (uploads are often stored under temp names).
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    @staticmethod
    def _suffix(source: DocumentSource) -> str:
        return (Path(source.name).suffix or source.path.suffix).lower()

    async def extract(self, source: DocumentSource) -> str:
        """Extract text without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._extract_sync, source)

    def _extract_sync(self, source: DocumentSource) -> str:
        suffix = self._suffix(source)

        if suffix == ".pdf":
            return self._read_pdf(source)
        if suffix in TEXT_SUFFIXES:
            return self._read_text(source)

        raise ExtractionError(source.name, f"unsupported file type '{suffix or '(none)'}'")

    def _read_pdf(self, source: DocumentSource) -> str:
        try:
            reader = PdfReader(source.path)
            pages = [page.extract_text() or "" for page in reader.pages]
        except (OSError, PyPdfError) as e:
            raise ExtractionError(source.name, str(e)) from e
        except Exception as e:
            logger.exception(f"Unexpected error parsing PDF {source.name!r}")
            raise ExtractionError(source.name, f"{type(e).__name__}: {e}") from e

        logger.debug(f"Read {len(pages)} pages from {source.name!r}")
        return clean_pdf_text(pages)

    def _read_text(self, source: DocumentSource) -> str:
        try:
            return source.path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ExtractionError(source.name, str(e)) from e
