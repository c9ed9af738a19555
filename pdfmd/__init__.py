"""PDF to Markdown converter package."""

from pdfmd.converter import ConversionOptions, ConversionResult, PDFConverter
from pdfmd.exceptions import ConversionError, EmptyContentError, ExtractionFailure

__all__ = [
    "PDFConverter",
    "ConversionOptions",
    "ConversionResult",
    "ConversionError",
    "EmptyContentError",
    "ExtractionFailure",
]
__version__ = "0.1.0"
