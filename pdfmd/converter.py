"""Core PDF to Markdown conversion logic."""

import itertools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Sequence

from pdfmd.blocks import plain_blocks, render_blocks, segment_lines
from pdfmd.exceptions import EmptyContentError
from pdfmd.extract import extract_glyph_runs
from pdfmd.layout import FontProfile, GlyphRun, annotate_line, assemble_lines, render_line
from pdfmd.normalize import FORMATTING_PASSES, PASSES, normalize

logger = logging.getLogger(__name__)


@dataclass
class ConversionOptions:
    """Configuration options for PDF to Markdown conversion."""

    include_title: bool = True
    detect_bold: bool = True
    detect_lists: bool = True
    strip_citations: bool = True
    page_separator: str = "\n\n"


@dataclass(frozen=True)
class ConversionResult:
    """Markdown produced from one document, with its metadata."""

    markdown: str
    output_name: str
    page_count: int


class PDFConverter:
    """Converts PDF documents to Markdown format.

    The converter holds nothing but its options, so a single instance can
    run several conversions at once.
    """

    def __init__(self, options: ConversionOptions | None = None):
        """Initialize the converter with optional configuration.

        Args:
            options: Conversion options. Uses defaults if not provided.
        """
        self.options = options or ConversionOptions()

    def convert_file(self, pdf_path: str | Path, output_path: str | Path | None = None) -> ConversionResult:
        """Convert a PDF file to Markdown.

        Args:
            pdf_path: Path to the input PDF file.
            output_path: Optional path to write the Markdown output.

        Returns:
            The conversion result.
        """
        pdf_path = Path(pdf_path)
        if not pdf_path.exists():
            raise FileNotFoundError(f"PDF file not found: {pdf_path}")

        with open(pdf_path, "rb") as f:
            result = self.convert_stream(f, source_name=pdf_path.name)

        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(result.markdown, encoding="utf-8")

        return result

    def convert_stream(self, stream: BinaryIO, source_name: str = "document.pdf") -> ConversionResult:
        """Convert a PDF from a binary stream to Markdown.

        Args:
            stream: Binary stream containing PDF data.
            source_name: File name used for the title and output name.

        Returns:
            The conversion result.
        """
        return self.convert_bytes(stream.read(), source_name)

    def convert_bytes(self, pdf_data: bytes, source_name: str = "document.pdf") -> ConversionResult:
        """Convert PDF bytes to Markdown.

        Args:
            pdf_data: Raw PDF bytes.
            source_name: File name used for the title and output name.

        Returns:
            The conversion result.

        Raises:
            ExtractionFailure: If the PDF cannot be read.
            EmptyContentError: If no page holds any text.
        """
        pages = extract_glyph_runs(pdf_data)
        return self.convert_pages(pages, source_name)

    def convert_pages(self, pages: Sequence[Sequence[GlyphRun]], source_name: str = "document.pdf") -> ConversionResult:
        """Convert already extracted glyph runs to Markdown.

        Fonts are counted over every page before any page is rendered.

        Args:
            pages: Glyph runs of each page, in page order.
            source_name: File name used for the title and output name.

        Returns:
            The conversion result.

        Raises:
            EmptyContentError: If every page renders to whitespace, or
                normalization leaves nothing but whitespace.
        """
        profile = FontProfile.from_runs(itertools.chain.from_iterable(pages))
        regular_font = profile.regular_font

        page_texts = [self._render_page_text(runs, regular_font) for runs in pages]
        raw_text = self.options.page_separator.join(page_texts)
        if not raw_text.strip():
            raise EmptyContentError()

        body = self._format_body(raw_text)
        if not body.strip():
            raise EmptyContentError()

        markdown = body
        if self.options.include_title:
            markdown = f"# {self._title(source_name)}\n\n{body}"

        logger.info("Converted %s: %d pages", source_name, len(pages))
        return ConversionResult(
            markdown=markdown,
            output_name=Path(source_name or "document").with_suffix(".md").name,
            page_count=len(pages),
        )

    def _render_page_text(self, runs: Sequence[GlyphRun], regular_font: str) -> str:
        """Render the lines of one page, one per row, skipping blank lines.

        Args:
            runs: Glyph runs of the page.
            regular_font: The document's most frequent font.

        Returns:
            Page text with a trailing newline after each line.
        """
        lines = assemble_lines(runs)
        rendered = []
        for line in lines:
            text = render_line(
                annotate_line(line, regular_font),
                emphasize=self.options.detect_bold,
                skip_citations=self.options.strip_citations,
            )
            if text.strip():
                rendered.append(text + "\n")

        logger.debug("Assembled %d lines, %d with text", len(lines), len(rendered))
        return "".join(rendered)

    def _format_body(self, raw_text: str) -> str:
        """Segment the joined page text into blocks and normalize it.

        Args:
            raw_text: Rendered text of all pages.

        Returns:
            Normalized Markdown body.
        """
        lines = raw_text.split("\n")
        if self.options.detect_lists:
            blocks = segment_lines(lines)
        else:
            blocks = plain_blocks(lines)

        passes = PASSES if self.options.strip_citations else FORMATTING_PASSES
        return normalize(render_blocks(blocks), passes)

    @staticmethod
    def _title(source_name: str) -> str:
        """Return the file name without its extension."""
        return Path(source_name).stem or source_name
