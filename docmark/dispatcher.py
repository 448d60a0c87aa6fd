"""
Format dispatch and batch entry points.

Every file is converted to completion, one at a time, before the next one
starts. Failures are captured per file so a batch of N inputs always yields
N documents.
"""

import os
from typing import Callable, Dict, Any, List, Optional, Sequence, Union

from .converters.csv_converter import CsvConverter
from .converters.docx_converter import DocxConverter
from .converters.html_converter import HtmlConverter
from .converters.json_converter import JsonConverter
from .converters.text_converter import TextConverter
from .errors import ConversionError, MissingContentError, UnsupportedFormatError
from .extraction.docx_package import DocxExtractor
from .models import (
    ConversionInput,
    ConversionOutcome,
    DocumentFormat,
    MarkdownDocument,
    SourceFile,
)
from .processing.text_cleaner import TextCleaner
from .utils.logger import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[int], None]

EXTENSION_FORMATS = {
    '.html': DocumentFormat.HTML,
    '.htm': DocumentFormat.HTML,
    '.json': DocumentFormat.JSON,
    '.csv': DocumentFormat.CSV,
    '.tsv': DocumentFormat.CSV,
    '.xml': DocumentFormat.XML,
    '.docx': DocumentFormat.WORDPROC,
    '.txt': DocumentFormat.PLAINTEXT,
    '.text': DocumentFormat.PLAINTEXT,
    '.md': DocumentFormat.PLAINTEXT,
    '.log': DocumentFormat.PLAINTEXT,
}

# Checked in order against a MIME-like hint
HINT_FORMATS = [
    ('wordprocessingml', DocumentFormat.WORDPROC),
    ('html', DocumentFormat.HTML),
    ('json', DocumentFormat.JSON),
    ('csv', DocumentFormat.CSV),
    ('xml', DocumentFormat.XML),
]

UNSUPPORTED_EXTENSIONS = {'.doc'}

def detect_format(name: str, hint: Optional[Union[str, DocumentFormat]] = None) -> DocumentFormat:
    """
    Decide the format of a file from its declared hint or its extension.
    
    Args:
        name: File name
        hint: A DocumentFormat, its value, or a MIME type
        
    Returns:
        The detected format; PLAINTEXT when nothing more specific matches
        
    Raises:
        UnsupportedFormatError: For legacy binary word-processing files
    """
    if isinstance(hint, DocumentFormat):
        return hint
    
    extension = os.path.splitext(name)[1].lower()
    if extension in UNSUPPORTED_EXTENSIONS or (hint and 'msword' in hint.lower()):
        raise UnsupportedFormatError(f"Unsupported file format: {extension or hint}")
    
    if hint:
        lowered = hint.lower()
        for document_format in DocumentFormat:
            if lowered == document_format.value:
                return document_format
        for marker, document_format in HINT_FORMATS:
            if marker in lowered:
                return document_format
    
    return EXTENSION_FORMATS.get(extension, DocumentFormat.PLAINTEXT)

def markdown_name(name: str) -> str:
    """Output file name for a converted input: the base name plus '.md'."""
    return os.path.splitext(name)[0] + '.md'

def error_document(name: str, error: Exception) -> MarkdownDocument:
    """Build the document that stands in for a failed conversion."""
    message = str(error) or 'Unknown error'
    content = (
        f"# Conversion Error\n\n**File:** {name}\n**Error:** {message}\n\n"
        f"*This file could not be converted to markdown.*\n"
    )
    return MarkdownDocument(name=f"ERROR_{name}.md", content=content)

class DocumentDispatcher:
    """Routes each input to its format's converter and cleans the result."""
    
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the dispatcher and its converters.
        
        Args:
            config: Optional configuration shared with every converter
        """
        self.config = config or {}
        self.encoding = self.config.get('encoding', 'utf-8')
        self.cleaner = TextCleaner(self.config)
        self.docx_extractor = DocxExtractor(self.config)
        self.html_converter = HtmlConverter(self.config)
        self.converters = {
            DocumentFormat.HTML: self.html_converter.convert,
            DocumentFormat.XML: self.html_converter.convert_xml,
            DocumentFormat.JSON: JsonConverter(self.config).convert,
            DocumentFormat.CSV: CsvConverter(self.config).convert,
            DocumentFormat.PLAINTEXT: TextConverter(self.config).convert,
        }
        self.docx_converter = DocxConverter(self.config)
        self.tsv_converter = CsvConverter({**self.config, 'csv_delimiter': '\t'})
        
    def _decode(self, raw: Union[bytes, str]) -> str:
        if isinstance(raw, bytes):
            raw = raw.decode(self.encoding, errors='replace')
        return raw.lstrip('\ufeff')
    
    def prepare(self, source: SourceFile) -> ConversionInput:
        """Resolve a source file's format."""
        document_format = detect_format(source.name, source.format_hint)
        return ConversionInput(
            raw_content=source.data,
            declared_format=document_format,
            source_name=source.name
        )
    
    def render(self, conversion_input: ConversionInput) -> str:
        """
        Run the format's converter and the cleanup pass.
        
        Args:
            conversion_input: Input with a resolved format
            
        Returns:
            Cleaned Markdown
        """
        document_format = conversion_input.declared_format
        raw = conversion_input.raw_content
        logger.debug(f"Converting {conversion_input.source_name} as {document_format.value}")
        
        if document_format is DocumentFormat.WORDPROC:
            # Raw bytes are a package to unpack; text is already the body markup
            markup = self.docx_extractor.extract(raw) if isinstance(raw, bytes) else raw
            markdown = self.docx_converter.convert(markup)
        else:
            converter = self.converters.get(document_format)
            if converter is None:
                raise UnsupportedFormatError(f"Unsupported file format: {document_format.value}")
            if document_format is DocumentFormat.CSV and conversion_input.source_name.lower().endswith('.tsv'):
                converter = self.tsv_converter.convert
            markdown = converter(self._decode(raw))
        
        return self.cleaner.clean(markdown)
    
    def convert_one(self, source: SourceFile) -> ConversionOutcome:
        """
        Convert a single file without raising.
        
        Args:
            source: File to convert
            
        Returns:
            Outcome holding either the document or the error
        """
        try:
            conversion_input = self.prepare(source)
            content = self.render(conversion_input)
        except ConversionError as e:
            logger.error(f"Error converting {source.name}: {e.message}")
            return ConversionOutcome(source_name=source.name, error=e)
        except Exception as e:
            logger.error(f"Unexpected error converting {source.name}: {str(e)}")
            return ConversionOutcome(source_name=source.name, error=ConversionError(str(e) or type(e).__name__))
        
        return ConversionOutcome(
            source_name=source.name,
            document=MarkdownDocument(name=markdown_name(source.name), content=content)
        )
    
    def convert_files(self, files: Sequence[SourceFile],
                      on_progress: Optional[ProgressCallback] = None) -> List[MarkdownDocument]:
        """
        Convert a batch of files in order.
        
        Args:
            files: Files to convert
            on_progress: Called with the number of finished files before each
                file starts and once more after the last one
            
        Returns:
            One document per input, ``ERROR_<name>.md`` for failures
        """
        documents = []
        failures = 0
        
        for index, source in enumerate(files):
            if on_progress:
                on_progress(index)
            
            outcome = self.convert_one(source)
            if outcome.ok:
                documents.append(outcome.document)
            else:
                failures += 1
                documents.append(error_document(source.name, outcome.error))
        
        if on_progress:
            on_progress(len(files))
        
        logger.info(f"Converted {len(files) - failures} of {len(files)} files")
        return documents
    
    def convert_markup(self, markup_text: str, source_label: str) -> List[MarkdownDocument]:
        """
        Convert a (possibly slide-segmented) HTML page.
        
        Args:
            markup_text: Page markup
            source_label: URL or name the markup came from
            
        Returns:
            Cleaned documents, full document first
            
        Raises:
            EmptyResultError: If nothing could be extracted
            AccessBlockedError: If the markup is a bot-protection page
        """
        documents = self.html_converter.convert_segments(markup_text, source_label)
        return [MarkdownDocument(name=document.name, content=self.cleaner.clean(document.content))
                for document in documents]
    
    def convert_docx_markup(self, markup: Optional[str], source_name: str) -> MarkdownDocument:
        """
        Convert already-unpacked word-processing body markup.
        
        Args:
            markup: Contents of the document body part, or None when the
                package had no body part
            source_name: Name of the original package
            
        Returns:
            The converted document
            
        Raises:
            MissingContentError: If no body markup was supplied
            MalformedInputError: If the markup is not well-formed XML
        """
        if markup is None:
            raise MissingContentError('Could not find document content in DOCX file')
        content = self.cleaner.clean(self.docx_converter.convert(markup))
        return MarkdownDocument(name=markdown_name(source_name), content=content)

def convert(files: Sequence[SourceFile], on_progress: Optional[ProgressCallback] = None,
            config: Optional[Dict[str, Any]] = None) -> List[MarkdownDocument]:
    """Convert a batch of files with a fresh dispatcher."""
    return DocumentDispatcher(config).convert_files(files, on_progress)

def convert_markup(markup_text: str, source_label: str,
                   config: Optional[Dict[str, Any]] = None) -> List[MarkdownDocument]:
    """Convert an HTML page, splitting it into slide documents when it has any."""
    return DocumentDispatcher(config).convert_markup(markup_text, source_label)
