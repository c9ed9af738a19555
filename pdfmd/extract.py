"""Glyph run extraction from PDF documents using PyMuPDF."""

import logging

import fitz  # PyMuPDF

from pdfmd.exceptions import ExtractionFailure
from pdfmd.layout import GlyphRun

logger = logging.getLogger(__name__)


class PDFGlyphSource:
    """Reads positioned glyph runs page by page from a PDF.

    PyMuPDF reports baselines with ``y`` growing downward; runs are
    returned in PDF user space instead, with ``y`` measured up from the
    bottom edge of the page.
    """

    def __init__(self, pdf_data: bytes):
        """Open a PDF held in memory.

        Args:
            pdf_data: Raw PDF bytes.

        Raises:
            ExtractionFailure: If PyMuPDF cannot open the document.
        """
        try:
            self._doc = fitz.open(stream=pdf_data, filetype="pdf")
        except Exception as e:
            raise ExtractionFailure(f"Could not open PDF: {e}") from e

    def __enter__(self) -> "PDFGlyphSource":
        """Return the source itself for use in a with block."""
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        """Close the document on leaving the with block."""
        self.close()

    def close(self) -> None:
        """Close the underlying PyMuPDF document."""
        self._doc.close()

    @property
    def page_count(self) -> int:
        """Number of pages in the document."""
        return len(self._doc)

    def glyph_runs(self, page_num: int) -> list[GlyphRun]:
        """Extract the glyph runs of one page.

        Args:
            page_num: Zero-based page index.

        Returns:
            Runs in the order PyMuPDF reports them.

        Raises:
            ExtractionFailure: If the page content cannot be read.
        """
        try:
            page = self._doc[page_num]
            page_height = page.rect.height
            text_dict = page.get_text("dict", flags=fitz.TEXT_PRESERVE_WHITESPACE)
        except Exception as e:
            raise ExtractionFailure(f"Could not read page {page_num + 1}: {e}") from e

        runs = []
        for block in text_dict.get("blocks", []):
            if block.get("type") != 0:  # Skip image blocks.
                continue

            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    text = span.get("text", "")
                    if not text:
                        continue

                    origin_x, origin_y = span.get("origin", (0, 0))
                    runs.append(
                        GlyphRun(
                            text=text,
                            x=origin_x,
                            y=page_height - origin_y,
                            font_size=span.get("size", 0.0),
                            font_name=span.get("font", ""),
                        )
                    )

        logger.debug("Page %d: %d glyph runs", page_num + 1, len(runs))
        return runs


def extract_glyph_runs(pdf_data: bytes) -> list[list[GlyphRun]]:
    """Extract the glyph runs of every page of a PDF.

    Args:
        pdf_data: Raw PDF bytes.

    Returns:
        One list of runs per page, in page order.
    """
    with PDFGlyphSource(pdf_data) as source:
        return [source.glyph_runs(page_num) for page_num in range(source.page_count)]
