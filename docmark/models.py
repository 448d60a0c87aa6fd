"""
Data model shared by the converters and the dispatcher.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import ConversionError


class DocumentFormat(Enum):
    """Formats the engine knows how to convert."""
    HTML = 'html'
    PLAINTEXT = 'plaintext'
    JSON = 'json'
    CSV = 'csv'
    XML = 'xml'
    WORDPROC = 'wordproc'


@dataclass(frozen=True)
class SourceFile:
    """A file handed to the batch entry point."""
    name: str
    data: Union[bytes, str]
    format_hint: Optional[str] = None


@dataclass(frozen=True)
class ConversionInput:
    """One file resolved to a concrete format, ready for conversion."""
    raw_content: Union[bytes, str]
    declared_format: DocumentFormat
    source_name: str


@dataclass
class MarkdownDocument:
    """A converted Markdown file."""
    name: str
    content: str


@dataclass
class ConversionOutcome:
    """Result of converting a single input: either a document or an error."""
    source_name: str
    document: Optional[MarkdownDocument] = None
    error: Optional[ConversionError] = None

    def __post_init__(self):
        if (self.document is None) == (self.error is None):
            raise ValueError("ConversionOutcome needs exactly one of document or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> MarkdownDocument:
        """Return the document, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.document
