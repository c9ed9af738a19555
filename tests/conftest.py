"""Pytest configuration and shared fixtures."""

import pathlib
import tempfile

import fitz  # PyMuPDF
import pytest

from pdfmd import ConversionOptions, PDFConverter
from pdfmd.layout import GlyphRun


def build_pdf(pages: list[list[tuple]]) -> bytes:
    """Build a PDF where each page item is (text, x, y, fontname, fontsize).

    Coordinates are PyMuPDF page coordinates, with y growing downward.
    """
    doc = fitz.open()
    try:
        for items in pages:
            page = doc.new_page()
            for text, x, y, fontname, fontsize in items:
                page.insert_text((x, y), text, fontname=fontname, fontsize=fontsize)
        return doc.tobytes()
    finally:
        doc.close()


def run(text: str, x: float = 72.0, y: float = 700.0, font_size: float = 11.0, font_name: str = "Regular") -> GlyphRun:
    """Shorthand for a GlyphRun with body-text defaults."""
    return GlyphRun(text=text, x=x, y=y, font_size=font_size, font_name=font_name)


@pytest.fixture
def report_pdf_bytes():
    """Return a two-page PDF with a bold heading, lists and a footnote marker."""
    return build_pdf(
        [
            [
                ("Quarterly Report", 72, 72, "hebo", 11),
                ("Revenue grew this quarter.", 72, 100, "helv", 11),
                ("Evidence shows growth", 72, 120, "helv", 11),
                ("3", 200, 120, "helv", 7),
                ("- First point", 72, 140, "helv", 11),
                ("- Second point", 72, 160, "helv", 11),
                ("Closing remarks here.", 72, 180, "helv", 11),
            ],
            [
                ("1. Step one", 72, 72, "helv", 11),
                ("2. Step two", 72, 92, "helv", 11),
            ],
        ]
    )


@pytest.fixture
def blank_pdf_bytes():
    """Return a single-page PDF with no text."""
    return build_pdf([[]])


@pytest.fixture
def default_converter():
    """Return a PDFConverter with default options."""
    return PDFConverter()


@pytest.fixture
def converter_no_features():
    """Return a PDFConverter with all optional features disabled."""
    options = ConversionOptions(
        include_title=False,
        detect_bold=False,
        detect_lists=False,
        strip_citations=False,
    )
    return PDFConverter(options)


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for output files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield pathlib.Path(tmpdir)


@pytest.fixture
def report_pdf_path(temp_output_dir, report_pdf_bytes):
    """Write the report PDF to disk and return its path."""
    path = temp_output_dir / "report.pdf"
    path.write_bytes(report_pdf_bytes)
    return path
