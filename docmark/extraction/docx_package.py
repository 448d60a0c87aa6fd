"""
Unpacks the document body from a word-processing (DOCX) package.
"""

import io
import zipfile
from typing import Dict, Any, Optional

from ..errors import MalformedInputError, MissingContentError
from ..utils.logger import get_logger

DOCUMENT_PART = 'word/document.xml'

class DocxExtractor:
    """
    Reads the main document part out of a DOCX container.
    """
    
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the extractor.
        
        Args:
            config: Optional configuration dictionary; ``document_part``
                overrides the name of the body part
        """
        self.logger = get_logger(__name__)
        self.config = config or {}
        self.document_part = self.config.get('document_part', DOCUMENT_PART)
        
    def extract(self, data: bytes) -> str:
        """
        Extract the document body markup.
        
        Args:
            data: Raw bytes of the DOCX file
            
        Returns:
            The body part's XML as text
            
        Raises:
            MalformedInputError: If the bytes are not a ZIP container
            MissingContentError: If the container has no body part
        """
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                try:
                    raw = archive.read(self.document_part)
                except KeyError:
                    raise MissingContentError('Could not find document content in DOCX file')
        except zipfile.BadZipFile as e:
            raise MalformedInputError(f"Failed to read DOCX file: {str(e)}") from e
        
        self.logger.debug(f"Read {len(raw)} bytes from {self.document_part}")
        return raw.decode('utf-8', errors='replace')
