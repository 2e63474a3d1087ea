# resume/text_extractor.py
"""
Plain-text extraction from uploaded resume documents (PDF, DOCX, TXT)
"""

import logging
import os
import re
import tempfile
import unicodedata
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import pdfplumber
from docx import Document

from resume.errors import ExtractionError, StorageError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {'.pdf', '.docx', '.txt', '.md'}


@contextmanager
def staged_upload(data: bytes, filename: Optional[str] = None) -> Iterator[Path]:
    """
    Write uploaded bytes to a temp file for the duration of the block

    The file is removed on every exit path, including exceptions
    raised inside the block.
    """
    suffix = Path(filename).suffix if filename else ""
    fd, tmp_name = tempfile.mkstemp(prefix="uploaded-", suffix=suffix)
    tmp_path = Path(tmp_name)
    try:
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
        except OSError as e:
            raise StorageError(f"Could not stage upload {filename}: {e}") from e
        logger.debug(f"Staged upload at {tmp_path}")
        yield tmp_path
    finally:
        tmp_path.unlink(missing_ok=True)
        logger.debug(f"Removed staged upload {tmp_path}")


class TextExtractor:
    """
    Extract plain text from resume documents
    """

    def extract_text(self, path: Path, filename: Optional[str] = None) -> str:
        """
        Extract cleaned text from a document on disk

        Args:
            path: Document location (usually a staged upload)
            filename: Original filename, used for type detection when given

        Returns:
            Cleaned text

        Raises:
            ExtractionError: Unsupported type, unreadable file or no text
        """
        path = Path(path)
        extension = Path(filename or path.name).suffix.lower()

        if extension not in SUPPORTED_EXTENSIONS:
            raise ExtractionError(f"Unsupported file type: {extension or 'unknown'}")

        try:
            if extension == '.pdf':
                raw = self._extract_pdf(path)
            elif extension == '.docx':
                raw = self._extract_docx(path)
            else:
                raw = path.read_text(encoding='utf-8', errors='replace')
        except ExtractionError:
            raise
        except Exception as e:
            logger.error(f"Text extraction failed for {filename or path.name}: {e}")
            raise ExtractionError(f"Could not read document: {e}") from e

        text = self._clean(raw or "")
        if not text:
            raise ExtractionError("Document contains no extractable text")

        logger.info(f"Extracted {len(text)} chars from {filename or path.name}")
        return text

    def _extract_pdf(self, path: Path) -> str:
        with pdfplumber.open(path) as pdf:
            parts = [page.extract_text() or "" for page in pdf.pages]
        return "\n\n".join(p for p in parts if p.strip())

    def _extract_docx(self, path: Path) -> str:
        doc = Document(str(path))
        parts = [p.text for p in doc.paragraphs if p.text.strip()]

        # Tables often hold contact details or skill grids
        for table in doc.tables:
            for row in table.rows:
                cells = [c.text.strip() for c in row.cells if c.text.strip()]
                if cells:
                    parts.append(" | ".join(cells))

        return "\n\n".join(parts)

    def _clean(self, text: str) -> str:
        """Normalize unicode and collapse whitespace"""
        if not text.strip():
            return ""
        t = unicodedata.normalize("NFC", text)
        t = t.replace('\x00', '')
        t = re.sub(r"[ \t]+", " ", t)
        t = re.sub(r"\n\s*\n\s*\n+", "\n\n", t)
        return t.strip()
