"""
docmark - convert HTML, plain text, JSON, CSV, XML and DOCX files to Markdown.
"""

from .dispatcher import DocumentDispatcher, convert, convert_markup, detect_format
from .errors import (
    ConversionError,
    ErrorKind,
    UnsupportedFormatError,
    MalformedInputError,
    MissingContentError,
    EmptyResultError,
    AccessBlockedError,
)
from .models import (
    ConversionInput,
    ConversionOutcome,
    DocumentFormat,
    MarkdownDocument,
    SourceFile,
)

__version__ = "0.1.0"

__all__ = [
    'DocumentDispatcher', 'convert', 'convert_markup', 'detect_format',
    'ConversionError', 'ErrorKind', 'UnsupportedFormatError', 'MalformedInputError',
    'MissingContentError', 'EmptyResultError', 'AccessBlockedError',
    'ConversionInput', 'ConversionOutcome', 'DocumentFormat', 'MarkdownDocument', 'SourceFile',
]
