"""Exceptions raised during PDF to Markdown conversion."""


class ConversionError(Exception):
    """Base class for conversion errors."""


class ExtractionFailure(ConversionError):
    """The PDF could not be opened or its pages could not be read."""


class EmptyContentError(ConversionError):
    """Every page rendered to whitespace only."""

    def __init__(self, message: str = "No text content found in PDF"):
        super().__init__(message)
